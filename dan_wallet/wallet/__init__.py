"""
Keys and Schnorr signing over Ristretto255.
"""

from .keys import PublicKey, SecretKey  # noqa: F401
from .signer import Signature, derive_public, sign_message  # noqa: F401

__all__ = [
    "SecretKey",
    "PublicKey",
    "Signature",
    "derive_public",
    "sign_message",
]
