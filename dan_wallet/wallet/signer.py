"""
dan_wallet.wallet.signer
========================

Schnorr signatures over Ristretto255.

A signature is the pair (R, s) where, for secret key k with public key P:

    r = reduce(H_nonce(k, message))          deterministic nonce
    R = r·G
    e = reduce(H_challenge(R, P, message))
    s = r + e·k

and verification checks s·G == R + e·P.

Both hashes are 64-byte BLAKE2b under the `com.tari.schnorr_signature` v1
domain, with labels "nonce" and "challenge" and length-prefixed inputs, so the
scalar reduction is uniform. Deriving the nonce from the key and message makes
signing repeatable: the same key signing the same message always yields the
same signature.

Key features
------------
- `sign_message(secret_key, message) -> Signature`
- `Signature.verify(public_key, message) -> bool`
- `derive_public(secret_key) -> PublicKey`
- Hex/JSON import and export for signatures
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import pysodium as _sodium

from ..errors import MalformedInput, SigningFailure
from ..hashing import DomainSeparatedHasher, HashDomain
from ..utils.bytes import BytesLike, from_hex_fixed
from .keys import SCALAR_BYTES, PublicKey, SecretKey, is_canonical_scalar, reduce_scalar

SCHNORR_HASH_DOMAIN = HashDomain("com.tari.schnorr_signature", 1)

__all__ = [
    "SCHNORR_HASH_DOMAIN",
    "Signature",
    "derive_public",
    "sign_message",
    "schnorr_challenge",
]


def derive_public(secret_key: SecretKey) -> PublicKey:
    return secret_key.public_key()


def _nonce(secret_key: SecretKey, message: bytes) -> bytes:
    wide = (
        DomainSeparatedHasher(SCHNORR_HASH_DOMAIN, "nonce")
        .chain(bytes(secret_key))
        .chain(message)
        .finalize()
    )
    return reduce_scalar(wide)


def schnorr_challenge(public_nonce: PublicKey, public_key: PublicKey, message: bytes) -> bytes:
    wide = (
        DomainSeparatedHasher(SCHNORR_HASH_DOMAIN, "challenge")
        .chain(bytes(public_nonce))
        .chain(bytes(public_key))
        .chain(message)
        .finalize()
    )
    return reduce_scalar(wide)


@dataclass(frozen=True, slots=True)
class Signature:
    """A Schnorr signature: public nonce R and scalar s."""

    public_nonce: PublicKey
    signature: bytes

    def __post_init__(self) -> None:
        if not is_canonical_scalar(self.signature):
            raise MalformedInput("signature scalar is not canonical", field="signature")

    @classmethod
    def from_bytes(cls, data: BytesLike) -> "Signature":
        b = bytes(data)
        if len(b) != 64:
            raise MalformedInput("signature must be 64 bytes", field="signature")
        return cls(PublicKey(b[:32]), b[32:])

    @classmethod
    def from_hex(cls, s: str) -> "Signature":
        return cls.from_bytes(from_hex_fixed(s, 64, field="signature"))

    @classmethod
    def from_json(cls, d: Dict[str, Any]) -> "Signature":
        if not isinstance(d, dict):
            raise MalformedInput("signature must be an object", field="signature")
        try:
            return cls(
                PublicKey.from_hex(d["public_nonce"], field="public_nonce"),
                from_hex_fixed(d["signature"], SCALAR_BYTES, field="signature"),
            )
        except KeyError as e:
            raise MalformedInput(f"signature missing field {e}", field="signature") from e

    def __bytes__(self) -> bytes:
        return bytes(self.public_nonce) + self.signature

    def hex(self) -> str:
        return bytes(self).hex()

    def to_cbor(self) -> Any:
        return {"public_nonce": self.public_nonce, "signature": self.signature}

    def to_json(self) -> Dict[str, str]:
        return {"public_nonce": self.public_nonce.hex(), "signature": self.signature.hex()}

    def verify(self, public_key: PublicKey, message: bytes) -> bool:
        """True iff s·G == R + e·P."""
        e = schnorr_challenge(self.public_nonce, public_key, bytes(message))
        try:
            lhs = _sodium.crypto_scalarmult_ristretto255_base(self.signature)
            e_p = _sodium.crypto_scalarmult_ristretto255(e, bytes(public_key))
            rhs = _sodium.crypto_core_ristretto255_add(bytes(self.public_nonce), e_p)
        except ValueError:
            # identity intermediate (zero scalar); never a valid signature
            return False
        return lhs == rhs


def sign_message(secret_key: SecretKey, message: bytes) -> Signature:
    """
    Sign *message* with *secret_key*.

    Raises SigningFailure if the primitive rejects the inputs; that cannot
    happen for a valid key and is treated as fatal.
    """
    message = bytes(message)
    public_key = derive_public(secret_key)
    try:
        r = _nonce(secret_key, message)
        public_nonce = PublicKey(_sodium.crypto_scalarmult_ristretto255_base(r))
        e = schnorr_challenge(public_nonce, public_key, message)
        s = _sodium.crypto_core_ristretto255_scalar_add(
            r, _sodium.crypto_core_ristretto255_scalar_mul(e, bytes(secret_key))
        )
    except (ValueError, MalformedInput) as exc:
        raise SigningFailure(f"schnorr signing failed: {exc}") from exc
    return Signature(public_nonce, s)
