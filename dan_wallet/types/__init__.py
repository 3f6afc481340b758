"""
Value types shared across the wallet (identifiers, amounts, non-fungibles).
"""

from .core import (  # noqa: F401
    I64_MAX,
    I64_MIN,
    PUBLIC_KEY_IDENTITY_RESOURCE_ADDRESS,
    Amount,
    ComponentAddress,
    FixedBytes,
    Hash,
    NonFungibleAddress,
    NonFungibleId,
    ResourceAddress,
    TemplateAddress,
)

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
