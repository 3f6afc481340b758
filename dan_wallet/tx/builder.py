"""
dan_wallet.tx.builder
=====================

Accumulates instructions and input refs, signs once, builds once.

States
------
    EMPTY ──add/with──▶ ASSEMBLING ──sign──▶ SIGNED ──build──▶ BUILT
      └──────────────────sign──────────────────▲

- Instructions and input refs may be added in any order before signing.
- `sign()` commits to the fee-instruction sequence and freezes the builder.
- Mutating or signing after `sign()`, building before `sign()`, and building
  twice all raise BuilderMisuse.
- The builder never looks inside an instruction.

Example
-------
    tx = (
        Transaction.builder()
        .with_fee_instructions(instructions)
        .with_input_refs([shard_id])
        .sign(secret_key)
        .build()
    )
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional

from ..errors import BuilderMisuse
from ..logging import get_logger
from ..substate import ShardId
from ..wallet.keys import SecretKey
from .instruction import Instruction
from .signature import TransactionSignature
from .transaction import Transaction

log = get_logger(__name__)


class BuilderState(Enum):
    EMPTY = "empty"
    ASSEMBLING = "assembling"
    SIGNED = "signed"
    BUILT = "built"


class TransactionBuilder:
    __slots__ = ("_fee_instructions", "_instructions", "_input_refs", "_signature", "_state")

    def __init__(self) -> None:
        self._fee_instructions: List[Instruction] = []
        self._instructions: List[Instruction] = []
        self._input_refs: List[ShardId] = []
        self._signature: Optional[TransactionSignature] = None
        self._state = BuilderState.EMPTY

    @property
    def state(self) -> BuilderState:
        return self._state

    def _assemble(self) -> None:
        if self._state not in (BuilderState.EMPTY, BuilderState.ASSEMBLING):
            raise BuilderMisuse("transaction is already signed", state=self._state.value)
        self._state = BuilderState.ASSEMBLING

    # ---- Assembly ----

    def add_fee_instruction(self, instruction: Instruction) -> "TransactionBuilder":
        self._assemble()
        self._fee_instructions.append(instruction)
        return self

    def with_fee_instructions(self, instructions: Iterable[Instruction]) -> "TransactionBuilder":
        self._assemble()
        self._fee_instructions.extend(instructions)
        return self

    def add_instruction(self, instruction: Instruction) -> "TransactionBuilder":
        self._assemble()
        self._instructions.append(instruction)
        return self

    def with_instructions(self, instructions: Iterable[Instruction]) -> "TransactionBuilder":
        self._assemble()
        self._instructions.extend(instructions)
        return self

    def add_input_ref(self, shard_id: ShardId) -> "TransactionBuilder":
        self._assemble()
        self._input_refs.append(shard_id)
        return self

    def with_input_refs(self, input_refs: Iterable[ShardId]) -> "TransactionBuilder":
        self._assemble()
        self._input_refs.extend(input_refs)
        return self

    # ---- Commit ----

    def sign(self, secret_key: SecretKey) -> "TransactionBuilder":
        if self._state not in (BuilderState.EMPTY, BuilderState.ASSEMBLING):
            raise BuilderMisuse("transaction can only be signed once", state=self._state.value)
        self._signature = TransactionSignature.sign(secret_key, self._fee_instructions)
        self._state = BuilderState.SIGNED
        return self

    def build(self) -> Transaction:
        if self._state is not BuilderState.SIGNED or self._signature is None:
            raise BuilderMisuse("build() requires exactly one prior sign()", state=self._state.value)
        tx = Transaction(
            fee_instructions=tuple(self._fee_instructions),
            instructions=tuple(self._instructions),
            signature=self._signature,
            input_refs=tuple(self._input_refs),
        )
        self._state = BuilderState.BUILT
        log.debug(
            "transaction built",
            extra={
                "tx_hash": tx.hash().hex(),
                "fee_instructions": len(tx.fee_instructions),
                "instructions": len(tx.instructions),
                "input_refs": len(tx.input_refs),
            },
        )
        return tx


__all__ = ["BuilderState", "TransactionBuilder"]
