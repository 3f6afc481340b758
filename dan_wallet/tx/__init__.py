"""
Transaction assembly: instructions, arguments, signatures, the builder and the
intent-level builders on top of it.
"""

from .args import Arg, args, literal, workspace  # noqa: F401
from .build import build_free_test_coins, build_transaction, build_transfer  # noqa: F401
from .builder import BuilderState, TransactionBuilder  # noqa: F401
from .encode import encode_transaction, transaction_to_json  # noqa: F401
from .instruction import (  # noqa: F401
    CallFunction,
    CallMethod,
    CreateFreeTestCoins,
    EmitLog,
    Instruction,
    PutLastInstructionOutputOnWorkspace,
    instruction_from_json,
    instructions_from_json,
)
from .signature import TransactionSignature, instruction_challenge  # noqa: F401
from .transaction import Transaction, transaction_from_json  # noqa: F401

__all__ = [
    # args
    "Arg", "args", "literal", "workspace",
    # instructions
    "Instruction", "CallFunction", "CallMethod", "PutLastInstructionOutputOnWorkspace",
    "EmitLog", "CreateFreeTestCoins", "instruction_from_json", "instructions_from_json",
    # signing
    "TransactionSignature", "instruction_challenge",
    # transaction
    "Transaction", "TransactionBuilder", "BuilderState", "transaction_from_json",
    # builders
    "build_transaction", "build_transfer", "build_free_test_coins",
    # encoding
    "encode_transaction", "transaction_to_json",
]
