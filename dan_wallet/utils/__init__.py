"""
Utility helpers for dan-wallet.

Re-exports:
- bytes: hex helpers
- cbor: deterministic CBOR encoding
"""

from .bytes import ensure_bytes, from_hex, from_hex_fixed, to_hex
from .cbor import dump as cbor_dump
from .cbor import dumps as cbor_dumps
from .cbor import loads as cbor_loads

__all__ = [
    # bytes
    "to_hex",
    "from_hex",
    "from_hex_fixed",
    "ensure_bytes",
    # cbor
    "cbor_dump",
    "cbor_dumps",
    "cbor_loads",
]
