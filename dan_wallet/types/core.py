"""
Core value types for the wallet.

Fixed-width identifiers (hashes, template/component/resource addresses) share
one small base class: immutable 32 bytes, hex import/export, and a CBOR form
that is a plain byte string. Address types additionally carry the textual
prefix the network uses for them (`component_<hex>`, `resource_<hex>`).

Nothing here performs I/O or hashing; derivations live in `dan_wallet.address`
and `dan_wallet.substate`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Union

from ..errors import MalformedInput
from ..utils.bytes import BytesLike, from_hex_fixed

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

_DECIMAL = re.compile(r"[+-]?[0-9]+")


# --- Fixed-width identifiers -------------------------------------------------


class FixedBytes:
    LENGTH: ClassVar[int] = 32
    PREFIX: ClassVar[str] = ""

    __slots__ = ("_b",)

    def __init__(self, data: BytesLike) -> None:
        b = bytes(data)
        if len(b) != self.LENGTH:
            raise MalformedInput(
                f"{type(self).__name__} must be {self.LENGTH} bytes, got {len(b)}",
                field=type(self).__name__,
            )
        self._b = b

    @classmethod
    def from_array(cls, values) -> Any:
        return cls(bytes(values))

    @classmethod
    def zero(cls) -> Any:
        return cls(b"\x00" * cls.LENGTH)

    @classmethod
    def from_hex(cls, s: str, *, field: Optional[str] = None) -> Any:
        return cls(from_hex_fixed(s, cls.LENGTH, field=field or cls.__name__))

    @classmethod
    def from_str(cls, s: str, *, field: Optional[str] = None) -> Any:
        """Parse the textual form; the type prefix is optional."""
        if not isinstance(s, str):
            raise MalformedInput(
                "expected a string", field=field or cls.__name__, value=type(s).__name__
            )
        if cls.PREFIX and s.startswith(cls.PREFIX):
            s = s[len(cls.PREFIX):]
        return cls.from_hex(s, field=field)

    def __bytes__(self) -> bytes:
        return self._b

    def __len__(self) -> int:
        return self.LENGTH

    def hex(self) -> str:
        return self._b.hex()

    def to_cbor(self) -> bytes:
        return self._b

    def to_json(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return f"{self.PREFIX}{self._b.hex()}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._b == other._b  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._b))


class Hash(FixedBytes):
    """A 32-byte engine hash."""


class TemplateAddress(FixedBytes):
    """Identifies a template (the "kind" of a component)."""


class ComponentAddress(FixedBytes):
    PREFIX = "component_"


class ResourceAddress(FixedBytes):
    PREFIX = "resource_"


# --- Amount -------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Amount:
    """Signed 64-bit token amount."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise MalformedInput("amount must be an integer", field="amount", value=self.value)
        if not (I64_MIN <= self.value <= I64_MAX):
            raise MalformedInput("amount out of i64 range", field="amount", value=self.value)

    @classmethod
    def parse(cls, value: Union[int, str], *, field: str = "amount") -> "Amount":
        """Accept an int or a decimal string, as a host boundary would pass it."""
        if isinstance(value, str):
            text = value.strip()
            if not _DECIMAL.fullmatch(text):
                raise MalformedInput("amount is not a decimal integer", field=field, value=value)
            value = int(text, 10)
        try:
            return cls(value)
        except MalformedInput as e:
            raise MalformedInput(e.message, field=field, value=value) from None

    def to_cbor(self) -> int:
        return self.value

    def to_json(self) -> int:
        return self.value


# --- Non-fungibles ------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class NonFungibleId:
    """
    A non-fungible token id. Only the fixed-width `U256` form is used by the
    wallet (owner badges are keyed by public key bytes); `String` ids are
    accepted for completeness.
    """

    kind: str
    value: Union[bytes, str]

    @classmethod
    def from_u256(cls, data: BytesLike) -> "NonFungibleId":
        b = bytes(data)
        if len(b) != 32:
            raise MalformedInput("U256 id must be 32 bytes", field="non_fungible_id")
        return cls("U256", b)

    @classmethod
    def from_string(cls, s: str) -> "NonFungibleId":
        return cls("String", s)

    def to_cbor(self) -> Any:
        return {self.kind: self.value}

    def to_json(self) -> Any:
        if isinstance(self.value, bytes):
            return {self.kind: self.value.hex()}
        return {self.kind: self.value}


# Resource under which every public key has an implicit identity badge.
PUBLIC_KEY_IDENTITY_RESOURCE_ADDRESS = ResourceAddress(b"\xff" * 32)


@dataclass(frozen=True, slots=True)
class NonFungibleAddress:
    resource_address: ResourceAddress
    id: NonFungibleId

    @classmethod
    def from_public_key(cls, public_key: Any) -> "NonFungibleAddress":
        """The owner badge for *public_key* (anything exposing 32 raw bytes)."""
        return cls(PUBLIC_KEY_IDENTITY_RESOURCE_ADDRESS, NonFungibleId.from_u256(bytes(public_key)))

    def to_cbor(self) -> Any:
        return {"resource_address": self.resource_address, "id": self.id}

    def to_json(self) -> Any:
        return {"resource_address": str(self.resource_address), "id": self.id.to_json()}


__all__ = [
    "I64_MIN",
    "I64_MAX",
    "FixedBytes",
    "Hash",
    "TemplateAddress",
    "ComponentAddress",
    "ResourceAddress",
    "Amount",
    "NonFungibleId",
    "NonFungibleAddress",
    "PUBLIC_KEY_IDENTITY_RESOURCE_ADDRESS",
]
