"""
End to end through the host-facing api: build, serialize, re-parse, verify.
"""
import json

import pytest

from dan_wallet import api
from dan_wallet.address import ACCOUNT_TEMPLATE_ADDRESS, get_account_address_from_public_key
from dan_wallet.config import WalletConfig
from dan_wallet.errors import InvalidSignature, MalformedInput
from dan_wallet.substate import ShardId, SubstateAddress
from dan_wallet.tx import (
    CallFunction,
    CallMethod,
    CreateFreeTestCoins,
    PutLastInstructionOutputOnWorkspace,
    args,
    instruction_challenge,
    transaction_from_json,
    workspace,
)
from dan_wallet.tx.encode import encode_transaction
from dan_wallet.types.core import Amount, NonFungibleAddress, ResourceAddress
from dan_wallet.utils import cbor_loads
from dan_wallet.wallet import SecretKey

SECRET_A_HEX = "a7" * 31 + "07"
SECRET_B_HEX = "3c" * 31 + "05"
RESOURCE_HEX = "01" * 32
RESOURCE_SHARD_HEX = "1e81386fa409e91c2188a0418ea4c43bf80044b68d7ea7906f8aa9381c4effaf"


def _pk(secret_hex):
    return SecretKey.from_hex(secret_hex).public_key()


def _transfer(create=False, **kw):
    return api.create_transfer_transaction(
        SECRET_A_HEX, _pk(SECRET_B_HEX).hex(), create, "resource_" + RESOURCE_HEX, 100, 5, **kw
    )


def test_key_helpers():
    assert api.build_private_key(SECRET_A_HEX.upper()) == SECRET_A_HEX
    assert api.build_public_key(SECRET_A_HEX) == _pk(SECRET_A_HEX).hex()
    pk = api.build_public_key(SECRET_A_HEX)
    assert api.get_account_component_address(pk).startswith("component_")
    assert api.get_account_component_address(pk) != api.get_account_nft_component_address(pk)


def test_build_private_key_reduces_wide_keys():
    reduced = "1c95988d7431ecd670cf7d73f45befc6feffffffffffffffffffffffffffff0f"
    assert api.build_private_key("ff" * 32) == reduced
    assert api.build_public_key("ff" * 32) == api.build_public_key(reduced)


def test_transfer_instruction_sequence():
    out = _transfer()
    tx = transaction_from_json(out)
    src = get_account_address_from_public_key(bytes(_pk(SECRET_A_HEX)))
    dst = get_account_address_from_public_key(bytes(_pk(SECRET_B_HEX)))
    resource = ResourceAddress.from_hex(RESOURCE_HEX)

    names = [type(i).__name__ for i in tx.fee_instructions]
    assert names == ["CallMethod", "PutLastInstructionOutputOnWorkspace", "CallMethod", "CallMethod"]
    withdraw, put, deposit, pay_fee = tx.fee_instructions
    assert (withdraw.component_address, withdraw.method) == (src, "withdraw")
    assert cbor_loads(withdraw.args[0].value) == bytes(resource)
    assert cbor_loads(withdraw.args[1].value) == 100
    assert put == PutLastInstructionOutputOnWorkspace(b"bucket")
    assert (deposit.component_address, deposit.method) == (dst, "deposit")
    assert deposit.args == (workspace("bucket"),)
    assert (pay_fee.component_address, pay_fee.method) == (src, "pay_fee")
    assert cbor_loads(pay_fee.args[0].value) == 5
    assert tx.instructions == ()
    assert [r.hex() for r in tx.input_refs] == [RESOURCE_SHARD_HEX]


def test_transfer_creating_destination_account():
    tx = transaction_from_json(_transfer(create=True))
    create = tx.fee_instructions[2]
    assert isinstance(create, CallFunction)
    assert create.template_address == ACCOUNT_TEMPLATE_ADDRESS
    assert create.function == "create"
    owner = NonFungibleAddress.from_public_key(_pk(SECRET_B_HEX))
    assert cbor_loads(create.args[0].value) == {
        "resource_address": b"\xff" * 32,
        "id": {"U256": bytes(_pk(SECRET_B_HEX))},
    }
    assert create.args == tuple(args(owner))
    assert tx.fee_instructions[3].method == "deposit"


def test_transfer_signature_and_hash():
    out = _transfer()
    tx = transaction_from_json(out)
    assert tx.signature.public_key == _pk(SECRET_A_HEX)
    assert tx.challenge() == instruction_challenge(tx.fee_instructions)
    assert tx.verify_signature()
    assert out["hash"] == tx.hash().hex()
    # deterministic nonce: same request, same transaction
    assert _transfer() == out


def test_transfer_input_ref_version_from_config():
    cfg = WalletConfig(input_ref_version=3)
    tx = transaction_from_json(_transfer(config=cfg))
    expected = ShardId.from_address(SubstateAddress.resource(ResourceAddress.from_hex(RESOURCE_HEX)), 3)
    assert tx.input_refs == (expected,)


def test_json_is_plain_and_reparses():
    out = _transfer(create=True)
    text = json.dumps(out)
    again = transaction_from_json(json.loads(text))
    assert again.to_json() == out
    assert encode_transaction(again) == encode_transaction(transaction_from_json(out))


def test_tampered_instruction_fails_verification():
    out = _transfer()
    out["fee_instructions"][3]["CallMethod"]["method"] = "pay_fees"
    tx = transaction_from_json(out)
    assert not tx.verify_signature()
    with pytest.raises(InvalidSignature):
        tx.check_signature()


def test_reordered_instructions_fail_verification():
    out = _transfer()
    fee = out["fee_instructions"]
    fee[2], fee[3] = fee[3], fee[2]
    with pytest.raises(InvalidSignature):
        transaction_from_json(out).check_signature()


@pytest.mark.parametrize("is_new", [True, False])
def test_free_test_coins(is_new):
    out = api.create_free_test_coins_transaction(is_new, SECRET_A_HEX, "1000", 10)
    tx = transaction_from_json(out)
    account = get_account_address_from_public_key(bytes(_pk(SECRET_A_HEX)))
    mint, put, third, pay_fee = tx.fee_instructions
    assert mint == CreateFreeTestCoins(Amount(1000))
    assert put.key == b"free_test_coins"
    if is_new:
        assert isinstance(third, CallFunction) and third.function == "create_with_bucket"
        assert third.args[1] == workspace("free_test_coins")
    else:
        assert isinstance(third, CallMethod) and third.method == "deposit"
        assert third.component_address == account
    assert pay_fee.component_address == account
    assert tx.input_refs == ()
    assert tx.verify_signature()


def test_generic_transaction():
    instructions = [
        {"EmitLog": {"level": "Info", "message": "hello"}},
        {"CallFunction": {"template_address": "00" * 32, "function": "create", "args": [{"Workspace": "6b"}]}},
    ]
    out = api.create_transaction(SECRET_A_HEX, instructions, ["ab" * 32])
    tx = transaction_from_json(out)
    assert out["fee_instructions"] == instructions
    assert [r.hex() for r in tx.input_refs] == ["ab" * 32]
    assert tx.verify_signature()


@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"amount": "ten"}, "amount"),
        ({"amount": 2**63}, "amount"),
        ({"fee": "1.5"}, "fee"),
        ({"amount": "1_000"}, "amount"),
        ({"fee": "\u0661\u0662"}, "fee"),
        ({"amount": "0x10"}, "amount"),
        ({"resource_address": "resource_xyz"}, "resource_address"),
        ({"destination": "00" * 31}, "destination_public_key"),
        ({"source": "00" * 32}, "secret_key"),
    ],
)
def test_transfer_rejects_malformed(kwargs, field):
    params = {
        "source": SECRET_A_HEX,
        "destination": _pk(SECRET_B_HEX).hex(),
        "resource_address": RESOURCE_HEX,
        "amount": 1,
        "fee": 1,
    }
    params.update(kwargs)
    with pytest.raises(MalformedInput) as ei:
        api.create_transfer_transaction(
            params["source"], params["destination"], False,
            params["resource_address"], params["amount"], params["fee"],
        )
    assert ei.value.field == field


@pytest.mark.parametrize(
    "instructions",
    [
        "not a list",
        [{"Unknown": {}}],
        [{"EmitLog": {"level": "Loud", "message": "x"}}],
        [{"CallMethod": {"component_address": "component_00", "method": "m"}}],
        [{"CallFunction": {"template_address": "00" * 32, "function": "f", "args": [{"Literal": "zz"}]}}],
        [{"CreateFreeTestCoins": {"revealed_amount": "x"}}],
    ],
)
def test_generic_transaction_rejects_malformed(instructions):
    with pytest.raises(MalformedInput):
        api.create_transaction(SECRET_A_HEX, instructions)


@pytest.mark.parametrize("text, value", [("+5", 5), (" -7 ", -7), ("0", 0), (str(2**63 - 1), 2**63 - 1)])
def test_amount_accepts_plain_decimal(text, value):
    assert Amount.parse(text).value == value
