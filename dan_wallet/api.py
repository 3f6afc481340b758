"""
dan_wallet.api
==============

The call surface a host binding wraps. Inputs are the plain values a host
passes (hex strings, integers, JSON lists); outputs are JSON-compatible.

- build_private_key(secret_hex) -> str
- build_public_key(secret_hex) -> str
- get_account_component_address(public_key_hex) -> str
- get_account_nft_component_address(public_key_hex) -> str
- create_transaction(secret_hex, instructions, input_refs) -> dict
- create_transfer_transaction(secret_hex, destination_public_key_hex,
      create_destination_account, resource_address, amount, fee) -> dict
- create_free_test_coins_transaction(is_new_account, secret_hex, amount, fee) -> dict

Every function raises one of the typed errors in `dan_wallet.errors`; nothing
is caught and logged here.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from .address import get_account_address_from_public_key, get_account_nft_address_from_public_key
from .config import WalletConfig
from .logging import get_logger, trace_scope
from .tx.build import build_free_test_coins, build_transaction, build_transfer
from .tx.instruction import instructions_from_json
from .tx.transaction import Transaction, input_refs_from_json
from .types.core import Amount, ResourceAddress
from .wallet.keys import PublicKey, SecretKey

log = get_logger(__name__)

Number = Union[int, str]

__all__ = [
    "build_private_key",
    "build_public_key",
    "get_account_component_address",
    "get_account_nft_component_address",
    "create_transaction",
    "create_transfer_transaction",
    "create_free_test_coins_transaction",
]


def _serialize(tx: Transaction) -> Dict[str, Any]:
    out = tx.to_json()
    log.debug("transaction ready", extra={"tx_hash": out["hash"]})
    return out


def build_private_key(secret_key_hex: str) -> str:
    """Normalise a secret key: reduce it modulo the group order, reject zero."""
    return SecretKey.from_hex(secret_key_hex).hex()


def build_public_key(secret_key_hex: str) -> str:
    return SecretKey.from_hex(secret_key_hex).public_key().hex()


def get_account_component_address(public_key_hex: str) -> str:
    return str(get_account_address_from_public_key(public_key_hex))


def get_account_nft_component_address(public_key_hex: str) -> str:
    return str(get_account_nft_address_from_public_key(public_key_hex))


def create_transaction(
    secret_key_hex: str,
    instructions: Any,
    input_refs: Any = None,
) -> Dict[str, Any]:
    with trace_scope(operation="create_transaction"):
        secret_key = SecretKey.from_hex(secret_key_hex)
        tx = build_transaction(secret_key, instructions_from_json(instructions), input_refs_from_json(input_refs))
        return _serialize(tx)


def create_transfer_transaction(
    source_secret_key_hex: str,
    destination_public_key_hex: str,
    create_destination_account: bool,
    resource_address: str,
    amount: Number,
    fee: Number,
    *,
    config: Optional[WalletConfig] = None,
) -> Dict[str, Any]:
    with trace_scope(operation="create_transfer_transaction"):
        tx = build_transfer(
            SecretKey.from_hex(source_secret_key_hex),
            PublicKey.from_hex(destination_public_key_hex, field="destination_public_key"),
            ResourceAddress.from_str(resource_address, field="resource_address"),
            Amount.parse(amount, field="amount"),
            Amount.parse(fee, field="fee"),
            create_destination_account=bool(create_destination_account),
            config=config,
        )
        return _serialize(tx)


def create_free_test_coins_transaction(
    is_new_account: bool,
    secret_key_hex: str,
    amount: Number,
    fee: Number,
    *,
    config: Optional[WalletConfig] = None,
) -> Dict[str, Any]:
    with trace_scope(operation="create_free_test_coins_transaction"):
        tx = build_free_test_coins(
            SecretKey.from_hex(secret_key_hex),
            Amount.parse(amount, field="amount"),
            Amount.parse(fee, field="fee"),
            is_new_account=bool(is_new_account),
            config=config,
        )
        return _serialize(tx)
