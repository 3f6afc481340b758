"""
Typed error classes for dan-wallet.

Every failure surfaced by the hashing, address, signing and builder layers is
one of the classes below, so callers can catch a specific failure mode while
still being able to catch the base `DanWalletError`.

- MalformedInput   caller supplied hex/address/number that does not parse
- BuilderMisuse    sequencing violation (sign twice, build before sign, reuse)
- EncodingFault    the canonical encoder rejected a value (defect, fatal)
- SigningFailure   the signature primitive rejected a challenge (defect, fatal)
- InvalidSignature a recomputed challenge does not verify
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

__all__ = [
    "DanWalletError",
    "MalformedInput",
    "BuilderMisuse",
    "EncodingFault",
    "SigningFailure",
    "InvalidSignature",
]


class DanWalletError(Exception):
    """Base class for all dan-wallet errors."""


@dataclass(slots=True)
class MalformedInput(DanWalletError):
    """
    Raised when a caller-supplied value cannot be parsed into its target type.

    Fields:
      - message: human-readable description
      - field: name of the offending argument, if known
      - value: the raw value (never secret material)
    """

    message: str
    field: Optional[str] = None
    value: Optional[Any] = None

    def __str__(self) -> str:
        where = f" [{self.field}]" if self.field else ""
        got = f" got={self.value!r}" if self.value is not None else ""
        return f"MalformedInput{where}: {self.message}{got}"


@dataclass(slots=True)
class BuilderMisuse(DanWalletError):
    """Raised on a sequencing violation in a builder or hasher."""

    message: str
    state: Optional[str] = None

    def __str__(self) -> str:
        state = f" state={self.state}" if self.state else ""
        return f"BuilderMisuse{state}: {self.message}"


@dataclass(slots=True)
class EncodingFault(DanWalletError):
    """
    Raised when the canonical encoder fails on a value.

    All values handed to the hasher are encodable by construction, so this is a
    programming defect and never retried.
    """

    message: str
    value_type: Optional[str] = None

    def __str__(self) -> str:
        vt = f" type={self.value_type}" if self.value_type else ""
        return f"EncodingFault{vt}: {self.message}"


@dataclass(slots=True)
class SigningFailure(DanWalletError):
    """Raised when the signature primitive rejects a well-formed challenge."""

    message: str

    def __str__(self) -> str:
        return f"SigningFailure: {self.message}"


@dataclass(slots=True)
class InvalidSignature(DanWalletError):
    """Raised by verifiers when a signature does not match its recomputed challenge."""

    message: str
    public_key: Optional[str] = None

    def __str__(self) -> str:
        pk = f" public_key={self.public_key}" if self.public_key else ""
        return f"InvalidSignature{pk}: {self.message}"
