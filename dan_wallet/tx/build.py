"""
dan_wallet.tx.build
===================

Builders for the wallet's transaction intents. Each one resolves the addresses
it needs, assembles the instruction sequence, and signs through
`TransactionBuilder`, returning an immutable `Transaction`.

- `build_transaction`: caller-supplied instructions and input refs
- `build_transfer`: withdraw → workspace → [create destination account] → deposit → pay fee
- `build_free_test_coins`: mint → workspace → deposit or create account → pay fee

Design notes
------------
- All instructions go in the fee-instruction list, the sequence the signature
  covers, in order.
- Workspace keys come from `WalletConfig` ("bucket" / "free_test_coins").
- A transfer declares the resource's shard id as its only input ref.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..address import ACCOUNT_TEMPLATE_ADDRESS, get_account_address_from_public_key
from ..config import WalletConfig, default_config
from ..substate import ShardId, SubstateAddress
from ..types.core import Amount, NonFungibleAddress, ResourceAddress
from ..wallet.keys import PublicKey, SecretKey
from .args import args, workspace
from .instruction import (
    CallFunction,
    CallMethod,
    CreateFreeTestCoins,
    Instruction,
    PutLastInstructionOutputOnWorkspace,
)
from .transaction import Transaction

__all__ = [
    "build_transaction",
    "transfer_instructions",
    "build_transfer",
    "free_test_coins_instructions",
    "build_free_test_coins",
]


def build_transaction(
    secret_key: SecretKey,
    instructions: Sequence[Instruction],
    input_refs: Sequence[ShardId] = (),
) -> Transaction:
    return (
        Transaction.builder()
        .with_fee_instructions(instructions)
        .with_input_refs(input_refs)
        .sign(secret_key)
        .build()
    )


def transfer_instructions(
    source_public_key: PublicKey,
    destination_public_key: PublicKey,
    resource_address: ResourceAddress,
    amount: Amount,
    fee: Amount,
    *,
    create_destination_account: bool = False,
    config: Optional[WalletConfig] = None,
) -> List[Instruction]:
    cfg = config or default_config()
    source_account = get_account_address_from_public_key(bytes(source_public_key))
    destination_account = get_account_address_from_public_key(bytes(destination_public_key))
    bucket = cfg.bucket_key

    instructions: List[Instruction] = [
        CallMethod(source_account, "withdraw", args(resource_address, amount)),
        PutLastInstructionOutputOnWorkspace(bucket.encode("utf-8")),
    ]
    if create_destination_account:
        owner_token = NonFungibleAddress.from_public_key(destination_public_key)
        instructions.append(CallFunction(ACCOUNT_TEMPLATE_ADDRESS, "create", args(owner_token)))
    instructions.append(CallMethod(destination_account, "deposit", args(workspace(bucket))))
    instructions.append(CallMethod(source_account, "pay_fee", args(fee)))
    return instructions


def build_transfer(
    source_secret_key: SecretKey,
    destination_public_key: PublicKey,
    resource_address: ResourceAddress,
    amount: Amount,
    fee: Amount,
    *,
    create_destination_account: bool = False,
    config: Optional[WalletConfig] = None,
) -> Transaction:
    cfg = config or default_config()
    instructions = transfer_instructions(
        source_secret_key.public_key(),
        destination_public_key,
        resource_address,
        amount,
        fee,
        create_destination_account=create_destination_account,
        config=cfg,
    )
    resource_shard = ShardId.from_address(SubstateAddress.resource(resource_address), cfg.input_ref_version)
    return build_transaction(source_secret_key, instructions, [resource_shard])


def free_test_coins_instructions(
    public_key: PublicKey,
    amount: Amount,
    fee: Amount,
    *,
    is_new_account: bool,
    config: Optional[WalletConfig] = None,
) -> List[Instruction]:
    cfg = config or default_config()
    account = get_account_address_from_public_key(bytes(public_key))
    coins = cfg.faucet_bucket_key

    instructions: List[Instruction] = [
        CreateFreeTestCoins(amount),
        PutLastInstructionOutputOnWorkspace(coins.encode("utf-8")),
    ]
    if is_new_account:
        owner_token = NonFungibleAddress.from_public_key(public_key)
        instructions.append(
            CallFunction(ACCOUNT_TEMPLATE_ADDRESS, "create_with_bucket", args(owner_token, workspace(coins)))
        )
    else:
        instructions.append(CallMethod(account, "deposit", args(workspace(coins))))
    # Pay fees from the account
    instructions.append(CallMethod(account, "pay_fee", args(fee)))
    return instructions


def build_free_test_coins(
    secret_key: SecretKey,
    amount: Amount,
    fee: Amount,
    *,
    is_new_account: bool,
    config: Optional[WalletConfig] = None,
) -> Transaction:
    instructions = free_test_coins_instructions(
        secret_key.public_key(), amount, fee, is_new_account=is_new_account, config=config
    )
    return build_transaction(secret_key, instructions)
