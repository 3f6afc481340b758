import pytest

from dan_wallet.address import ACCOUNT_TEMPLATE_ADDRESS
from dan_wallet.errors import BuilderMisuse
from dan_wallet.substate import ShardId
from dan_wallet.tx import (
    BuilderState,
    CallFunction,
    EmitLog,
    Transaction,
    TransactionBuilder,
    args,
    instruction_challenge,
)


def _log(message):
    return EmitLog("Info", message)


def test_state_progression(secret_a):
    b = TransactionBuilder()
    assert b.state is BuilderState.EMPTY
    b.add_instruction(_log("one"))
    assert b.state is BuilderState.ASSEMBLING
    b.sign(secret_a)
    assert b.state is BuilderState.SIGNED
    tx = b.build()
    assert b.state is BuilderState.BUILT
    assert isinstance(tx, Transaction)


def test_empty_builder_can_sign(secret_a):
    tx = Transaction.builder().sign(secret_a).build()
    assert tx.fee_instructions == () and tx.instructions == ()
    assert tx.verify_signature()


def test_build_before_sign(secret_a):
    b = TransactionBuilder().add_instruction(_log("x"))
    with pytest.raises(BuilderMisuse) as ei:
        b.build()
    assert ei.value.state == "assembling"


def test_build_twice(secret_a):
    b = TransactionBuilder().add_instruction(_log("x")).sign(secret_a)
    b.build()
    with pytest.raises(BuilderMisuse):
        b.build()


def test_sign_twice(secret_a):
    b = TransactionBuilder().sign(secret_a)
    with pytest.raises(BuilderMisuse):
        b.sign(secret_a)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda b: b.add_instruction(_log("late")),
        lambda b: b.add_fee_instruction(_log("late")),
        lambda b: b.with_instructions([_log("late")]),
        lambda b: b.with_fee_instructions([_log("late")]),
        lambda b: b.add_input_ref(ShardId.zero()),
        lambda b: b.with_input_refs([ShardId.zero()]),
    ],
)
def test_no_mutation_after_sign(secret_a, mutate):
    b = TransactionBuilder().add_instruction(_log("x")).sign(secret_a)
    with pytest.raises(BuilderMisuse):
        mutate(b)


def test_signature_covers_fee_instructions_only(secret_a):
    fee = [_log("fee")]
    primary = [CallFunction(ACCOUNT_TEMPLATE_ADDRESS, "noop", args()), _log("after")]
    tx = (
        Transaction.builder()
        .with_instructions(primary)
        .with_fee_instructions(fee)
        .sign(secret_a)
        .build()
    )
    assert tx.fee_instructions == tuple(fee)
    assert tx.instructions == tuple(primary)
    assert tx.signed_instructions() == tuple(fee)
    assert tx.challenge() == instruction_challenge(fee)
    assert tx.signature.verify(fee)
    assert not tx.signature.verify(fee + primary)
    assert tx.verify_signature()


def test_primary_instructions_change_hash_not_challenge(secret_a):
    fee = [_log("fee")]
    a = Transaction.builder().with_fee_instructions(fee).add_instruction(_log("a")).sign(secret_a).build()
    b = Transaction.builder().with_fee_instructions(fee).add_instruction(_log("b")).sign(secret_a).build()
    assert a.signature == b.signature
    assert a.hash() != b.hash()


def test_insertion_order_is_kept(secret_a):
    refs = [ShardId(bytes([i]) * 32) for i in (3, 1, 2)]
    tx = (
        TransactionBuilder()
        .add_input_ref(refs[0])
        .add_instruction(_log("a"))
        .with_input_refs(refs[1:])
        .add_instruction(_log("b"))
        .sign(secret_a)
        .build()
    )
    assert tx.input_refs == tuple(refs)
    assert [i.message for i in tx.instructions] == ["a", "b"]


def test_same_inputs_same_transaction(secret_a):
    def make():
        return TransactionBuilder().add_fee_instruction(_log("x")).sign(secret_a).build()

    assert make().hash() == make().hash()
