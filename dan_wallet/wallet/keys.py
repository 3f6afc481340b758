"""
Ristretto255 key types.

- SecretKey: non-zero scalar; any 32 bytes are read little-endian and reduced
  modulo the group order
- PublicKey: compressed Ristretto255 point (32 bytes), validated on import

Scalar and point arithmetic is delegated to libsodium through pysodium.
"""

from __future__ import annotations

import hmac
import secrets
from typing import Optional

import pysodium as _sodium

from ..errors import MalformedInput
from ..types.core import FixedBytes
from ..utils.bytes import BytesLike, from_hex_fixed

SCALAR_BYTES = 32
POINT_BYTES = 32

__all__ = [
    "SCALAR_BYTES",
    "POINT_BYTES",
    "SecretKey",
    "PublicKey",
    "reduce_scalar",
    "is_canonical_scalar",
]


def reduce_scalar(wide: bytes) -> bytes:
    """Reduce a 64-byte little-endian integer modulo the group order."""
    return _sodium.crypto_core_ristretto255_scalar_reduce(wide)


def is_canonical_scalar(s: bytes) -> bool:
    return len(s) == SCALAR_BYTES and reduce_scalar(s + b"\x00" * 32) == s


class PublicKey(FixedBytes):
    """A compressed Ristretto255 point."""

    def __init__(self, data: BytesLike) -> None:
        super().__init__(data)
        if not _sodium.crypto_core_ristretto255_is_valid_point(self._b):
            raise MalformedInput("not a valid ristretto255 point", field="public_key", value=self.hex())

    @classmethod
    def from_secret_key(cls, secret_key: "SecretKey") -> "PublicKey":
        return secret_key.public_key()


class SecretKey:
    """A Ristretto255 secret scalar. Never printed, never logged."""

    __slots__ = ("_s",)

    def __init__(self, data: BytesLike) -> None:
        raw = bytes(data)
        if len(raw) != SCALAR_BYTES:
            raise MalformedInput(f"secret key must be {SCALAR_BYTES} bytes", field="secret_key")
        # Host keys from other curves (e.g. secp256k1) may exceed the group order.
        s = reduce_scalar(raw + b"\x00" * 32)
        if s == b"\x00" * SCALAR_BYTES:
            raise MalformedInput("secret key reduces to zero", field="secret_key")
        self._s = s

    @classmethod
    def from_hex(cls, s: str, *, field: Optional[str] = "secret_key") -> "SecretKey":
        return cls(from_hex_fixed(s, SCALAR_BYTES, field=field))

    @classmethod
    def random(cls) -> "SecretKey":
        while True:
            s = reduce_scalar(secrets.token_bytes(64))
            if s != b"\x00" * SCALAR_BYTES:
                return cls(s)

    def __bytes__(self) -> bytes:
        return self._s

    def hex(self) -> str:
        return self._s.hex()

    def public_key(self) -> PublicKey:
        try:
            return PublicKey(_sodium.crypto_scalarmult_ristretto255_base(self._s))
        except ValueError as e:  # pragma: no cover - unreachable for a non-zero reduced scalar
            raise MalformedInput("secret key has no public key", field="secret_key") from e

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretKey):
            return NotImplemented
        return hmac.compare_digest(self._s, other._s)

    def __hash__(self) -> int:
        return hash(self.public_key())

    def __repr__(self) -> str:
        return "SecretKey(<redacted>)"
