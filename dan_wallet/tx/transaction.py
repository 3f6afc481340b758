"""
The signed transaction value.

A transaction is created once, by `TransactionBuilder.build()`, and is
immutable afterwards. Its signature covers the ordered
`fee_instructions`; `instructions` and `input_refs` (the shards the transaction
reads) are committed to only through `hash()`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Tuple

from ..errors import MalformedInput
from ..hashing import EngineHashDomainLabel, hasher32
from ..substate import ShardId
from ..types.core import Hash
from .instruction import Instruction, instructions_from_json, instructions_to_json
from .signature import TransactionSignature, instruction_challenge

if TYPE_CHECKING:  # pragma: no cover
    from .builder import TransactionBuilder


@dataclass(frozen=True, slots=True)
class Transaction:
    fee_instructions: Tuple[Instruction, ...]
    instructions: Tuple[Instruction, ...]
    signature: TransactionSignature
    input_refs: Tuple[ShardId, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fee_instructions", tuple(self.fee_instructions))
        object.__setattr__(self, "instructions", tuple(self.instructions))
        object.__setattr__(self, "input_refs", tuple(self.input_refs))

    @staticmethod
    def builder() -> "TransactionBuilder":
        from .builder import TransactionBuilder

        return TransactionBuilder()

    def signed_instructions(self) -> Tuple[Instruction, ...]:
        return self.fee_instructions

    def challenge(self) -> Hash:
        return instruction_challenge(self.signed_instructions())

    def verify_signature(self) -> bool:
        return self.signature.verify(self.signed_instructions())

    def check_signature(self) -> None:
        self.signature.check(self.signed_instructions())

    def hash(self) -> Hash:
        return (
            hasher32(EngineHashDomainLabel.Transaction)
            .chain(list(self.fee_instructions))
            .chain(list(self.instructions))
            .chain(self.signature)
            .chain(list(self.input_refs))
            .result()
        )

    def to_cbor(self) -> Dict[str, Any]:
        return {
            "fee_instructions": list(self.fee_instructions),
            "instructions": list(self.instructions),
            "signature": self.signature,
            "input_refs": list(self.input_refs),
        }

    def to_json(self) -> Dict[str, Any]:
        return {
            "hash": self.hash().hex(),
            "fee_instructions": instructions_to_json(self.fee_instructions),
            "instructions": instructions_to_json(self.instructions),
            "signature": self.signature.to_json(),
            "input_refs": [r.hex() for r in self.input_refs],
        }


def input_refs_from_json(items: Any) -> Tuple[ShardId, ...]:
    if items is None:
        return ()
    if not isinstance(items, (list, tuple)):
        raise MalformedInput("input_refs must be a list", field="input_refs", value=type(items).__name__)
    return tuple(ShardId.from_hex(s, field="input_refs") for s in items)


def transaction_from_json(d: Any) -> Transaction:
    """Inverse of `Transaction.to_json` (the "hash" field is recomputed, not trusted)."""
    if not isinstance(d, dict):
        raise MalformedInput("transaction must be an object", field="transaction")
    return Transaction(
        fee_instructions=instructions_from_json(d.get("fee_instructions", [])),
        instructions=instructions_from_json(d.get("instructions", [])),
        signature=TransactionSignature.from_json(d.get("signature")),
        input_refs=input_refs_from_json(d.get("input_refs")),
    )


__all__ = ["Transaction", "input_refs_from_json", "transaction_from_json"]
