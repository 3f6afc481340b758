"""
dan_wallet.address
==================

Component address derivation.

Format
------
A component address is the short-width engine hash of its template ("kind")
address followed by its component id ("instance"):

    address = Hasher32(ComponentAddress).chain(template_address).chain(component_id).result()

The chaining order is fixed; swapping it changes every address.

Accounts are components of a built-in template, and their component id is the
owner's 32-byte public key, so an account address is a pure function of the
public key:

- account:      template = 32 zero bytes
- account NFT:  template = 31 zero bytes followed by 0x01

This module provides:
- new_component_address_from_parts(template_address, component_id) -> ComponentAddress
- get_account_address_from_public_key(public_key_hex) -> ComponentAddress
- get_account_nft_address_from_public_key(public_key_hex) -> ComponentAddress
"""

from __future__ import annotations

from typing import Union

from .hashing import EngineHashDomainLabel, hasher32
from .logging import get_logger
from .types.core import ComponentAddress, Hash, TemplateAddress

log = get_logger(__name__)

ACCOUNT_TEMPLATE_ADDRESS = TemplateAddress.from_array([0] * 32)
ACCOUNT_NFT_TEMPLATE_ADDRESS = TemplateAddress.from_array([0] * 31 + [1])

__all__ = [
    "ACCOUNT_TEMPLATE_ADDRESS",
    "ACCOUNT_NFT_TEMPLATE_ADDRESS",
    "new_component_address_from_parts",
    "derive_component_address",
    "get_account_address_from_public_key",
    "get_account_nft_address_from_public_key",
]


def new_component_address_from_parts(
    template_address: TemplateAddress, component_id: Hash
) -> ComponentAddress:
    address = (
        hasher32(EngineHashDomainLabel.ComponentAddress)
        .chain(template_address)
        .chain(component_id)
        .result()
    )
    return ComponentAddress(bytes(address))


derive_component_address = new_component_address_from_parts


def _component_id(public_key: Union[str, bytes]) -> Hash:
    if isinstance(public_key, str):
        return Hash.from_hex(public_key, field="public_key")
    return Hash(public_key)


def get_account_address_from_public_key(public_key: Union[str, bytes]) -> ComponentAddress:
    """
    Account component address for a public key (hex string or raw 32 bytes).

    Raises MalformedInput if the key is not 32 bytes of valid hex.
    """
    address = new_component_address_from_parts(ACCOUNT_TEMPLATE_ADDRESS, _component_id(public_key))
    log.debug("derived account address", extra={"address": str(address)})
    return address


def get_account_nft_address_from_public_key(public_key: Union[str, bytes]) -> ComponentAddress:
    """Account-NFT component address for a public key."""
    address = new_component_address_from_parts(ACCOUNT_NFT_TEMPLATE_ADDRESS, _component_id(public_key))
    log.debug("derived account nft address", extra={"address": str(address)})
    return address
