"""
dan_wallet.hashing
==================

Domain-separated hashing for the engine.

Every hash the wallet takes is seeded with a *separation tag* naming the hash
domain, its version and a label describing why the hash is being taken:

    tag   = "{domain}.v{version}.{label}"          e.g. com.tari.dan.engine.v0.ComponentAddress
    state = BLAKE2b(digest_size=N)
    state.update(u64_le(len(tag)) || tag)

Caller values are then streamed into the state as canonical CBOR, in order.
The digest is a pure function of (domain, version, label, encoded inputs).

Two widths exist: `Hasher32` (BLAKE2b-256) and `Hasher64` (BLAKE2b-512). The
digest length is part of the BLAKE2b parameter block, so one is never a
truncation of the other and they must not be swapped in a protocol field.

`DomainSeparatedHasher` applies the same tag to a raw-bytes hasher whose
updates are length-prefixed; the Schnorr challenge is built on it.

Examples
--------
    from dan_wallet.hashing import EngineHashDomainLabel, hasher32

    address = (
        hasher32(EngineHashDomainLabel.ComponentAddress)
        .chain(template_address)
        .chain(component_id)
        .result()
    )
"""

from __future__ import annotations

import hashlib
import io
from dataclasses import dataclass
from enum import Enum, unique
from typing import Any, Optional

from . import utils
from .errors import BuilderMisuse, MalformedInput
from .types.core import Hash


@dataclass(frozen=True)
class HashDomain:
    """A hash domain: a globally unique name plus a protocol version."""

    name: str
    version: int

    def tag(self, label: str = "") -> str:
        if not label:
            return f"{self.name}.v{self.version}"
        return f"{self.name}.v{self.version}.{label}"

    def separation_tag(self, label: str = "") -> bytes:
        """Length-prefixed tag bytes written into a fresh hash state."""
        tag = self.tag(label).encode("ascii")
        return len(tag).to_bytes(8, "little") + tag


ENGINE_HASH_DOMAIN = HashDomain("com.tari.dan.engine", 0)


@unique
class EngineHashDomainLabel(Enum):
    """
    Every context in which the engine takes a hash.

    The string values are protocol constants: a new context gets a new member,
    an existing value is never changed or reused.
    """

    Template = "Template"
    ShardId = "ShardId"
    ConfidentialProof = "ConfidentialProof"
    ConfidentialTransfer = "ConfidentialTransfer"
    ShardPledgeCollection = "ShardPledgeCollection"
    HotStuffTreeNode = "HotStuffTreeNode"
    Transaction = "Transaction"
    NonFungibleId = "NonFungibleId"
    NonFungibleIndex = "NonFungibleIndex"
    UuidOutput = "UuidOutput"
    Output = "Output"
    TransactionSignature = "TransactionSignature"
    ResourceAddress = "ResourceAddress"
    ComponentAddress = "ComponentAddress"
    RandomBytes = "RandomBytes"
    TransactionReceipt = "TransactionReceipt"
    FeeClaimAddress = "FeeClaimAddress"
    QuorumCertificate = "QuorumCertificate"
    InstructionSignature = "InstructionSignature"

    def as_label(self) -> str:
        return self.value


class _HashWriter(io.RawIOBase):
    """Writable raw stream so the CBOR encoder streams into the hash state."""

    def __init__(self, h: Any) -> None:
        super().__init__()
        self._h = h

    def writable(self) -> bool:
        return True

    def write(self, data: Any) -> int:
        view = memoryview(data)
        self._h.update(view)
        return view.nbytes


class _EngineHasher:
    DIGEST_SIZE: int = 0

    __slots__ = ("_h",)

    def __init__(self, label: EngineHashDomainLabel, domain: HashDomain = ENGINE_HASH_DOMAIN) -> None:
        if not isinstance(label, EngineHashDomainLabel):
            raise MalformedInput("hash label must be an EngineHashDomainLabel", field="label", value=label)
        self._h: Optional[Any] = hashlib.blake2b(digest_size=self.DIGEST_SIZE)
        self._h.update(domain.separation_tag(label.as_label()))

    @classmethod
    def new_with_label(cls, label: EngineHashDomainLabel, domain: HashDomain = ENGINE_HASH_DOMAIN):
        return cls(label, domain)

    def _state(self) -> Any:
        if self._h is None:
            raise BuilderMisuse("hasher already finalized", state="finalized")
        return self._h

    def update(self, value: Any) -> None:
        """Feed the canonical encoding of *value*; encoder failure is an EncodingFault."""
        utils.cbor_dump(value, _HashWriter(self._state()))

    def chain(self, value: Any):
        self.update(value)
        return self

    def copy(self):
        c = object.__new__(type(self))
        c._h = self._state().copy()
        return c

    def _finalize(self) -> bytes:
        out = self._state().digest()
        self._h = None
        return out


class Hasher32(_EngineHasher):
    """Short-width (32 byte) engine hasher."""

    DIGEST_SIZE = 32

    def result(self) -> Hash:
        return Hash(self._finalize())

    def digest(self, value: Any) -> Hash:
        return self.chain(value).result()


class Hasher64(_EngineHasher):
    """Long-width (64 byte) engine hasher."""

    DIGEST_SIZE = 64

    def result(self) -> bytes:
        return self._finalize()

    def digest(self, value: Any) -> bytes:
        return self.chain(value).result()


def hasher32(label: EngineHashDomainLabel) -> Hasher32:
    return Hasher32.new_with_label(label)


def hasher64(label: EngineHashDomainLabel) -> Hasher64:
    return Hasher64.new_with_label(label)


def template_hasher32() -> Hasher32:
    return hasher32(EngineHashDomainLabel.Template)


def template_hasher64() -> Hasher64:
    return hasher64(EngineHashDomainLabel.Template)


# Most protocol fields are 32-byte hashes.
hasher = hasher32


class DomainSeparatedHasher:
    """
    Raw-bytes BLAKE2b hasher under a separation tag.

    Each update is written as u64_le(len(data)) || data so adjacent inputs
    cannot be re-split into a colliding sequence.
    """

    __slots__ = ("_h",)

    def __init__(self, domain: HashDomain, label: str = "", *, digest_size: int = 64) -> None:
        self._h: Optional[Any] = hashlib.blake2b(digest_size=digest_size)
        self._h.update(domain.separation_tag(label))

    def update(self, data: bytes) -> None:
        if self._h is None:
            raise BuilderMisuse("hasher already finalized", state="finalized")
        data = bytes(data)
        self._h.update(len(data).to_bytes(8, "little"))
        self._h.update(data)

    def chain(self, data: bytes) -> "DomainSeparatedHasher":
        self.update(data)
        return self

    def finalize(self) -> bytes:
        if self._h is None:
            raise BuilderMisuse("hasher already finalized", state="finalized")
        out = self._h.digest()
        self._h = None
        return out


__all__ = [
    "HashDomain",
    "ENGINE_HASH_DOMAIN",
    "EngineHashDomainLabel",
    "Hasher32",
    "Hasher64",
    "hasher",
    "hasher32",
    "hasher64",
    "template_hasher32",
    "template_hasher64",
    "DomainSeparatedHasher",
]
