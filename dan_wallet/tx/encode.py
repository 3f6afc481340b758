"""
dan_wallet.tx.encode
====================

Serialisation of signed transactions.

- `encode_transaction(tx)` → canonical CBOR bytes (same encoding the hasher uses)
- `transaction_to_json(tx)` → JSON-compatible dict for the host boundary
- `transaction_from_json(d)` → `Transaction` (re-exported from tx.transaction)
- `tx_hash_hex(tx)` → hex of `Transaction.hash()`
"""

from __future__ import annotations

from typing import Any, Dict

from ..utils import cbor
from .transaction import Transaction, transaction_from_json


def encode_transaction(tx: Transaction) -> bytes:
    return cbor.dumps(tx)


def transaction_to_json(tx: Transaction) -> Dict[str, Any]:
    return tx.to_json()


def tx_hash_hex(tx: Transaction) -> str:
    return tx.hash().hex()


__all__ = [
    "encode_transaction",
    "transaction_to_json",
    "transaction_from_json",
    "tx_hash_hex",
]
