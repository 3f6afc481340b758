"""
Substate addresses and the shard ids derived from them.

A transaction declares the substates it reads as *input refs*: shard ids
computed from a substate address and its version.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .hashing import EngineHashDomainLabel, hasher32
from .types.core import ComponentAddress, FixedBytes, ResourceAddress


@dataclass(frozen=True, slots=True)
class SubstateAddress:
    """A component or resource substate (externally tagged in CBOR)."""

    address: Union[ComponentAddress, ResourceAddress]

    @classmethod
    def component(cls, address: ComponentAddress) -> "SubstateAddress":
        return cls(address)

    @classmethod
    def resource(cls, address: ResourceAddress) -> "SubstateAddress":
        return cls(address)

    @property
    def kind(self) -> str:
        return "Component" if isinstance(self.address, ComponentAddress) else "Resource"

    def to_cbor(self) -> Any:
        return {self.kind: self.address}


class ShardId(FixedBytes):
    """32-byte id of the shard that owns a versioned substate."""

    @classmethod
    def from_address(cls, address: SubstateAddress, version: int) -> "ShardId":
        h = hasher32(EngineHashDomainLabel.ShardId).chain(address).chain(int(version)).result()
        return cls(bytes(h))


__all__ = ["SubstateAddress", "ShardId"]
