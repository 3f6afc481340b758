"""
dan-wallet: Python client library
Deterministic address derivation and transaction signing for the digital asset network.
"""

from .version import __version__  # noqa: F401

# Core config & errors
from .config import WalletConfig  # noqa: F401
from .errors import (  # noqa: F401
    BuilderMisuse,
    DanWalletError,
    EncodingFault,
    InvalidSignature,
    MalformedInput,
    SigningFailure,
)

# Hashing
from .hashing import (  # noqa: F401
    EngineHashDomainLabel,
    hasher,
    hasher32,
    hasher64,
)

# Addresses
from .address import (  # noqa: F401
    get_account_address_from_public_key,
    get_account_nft_address_from_public_key,
    new_component_address_from_parts,
)

# Wallet
from .wallet import PublicKey, SecretKey, Signature  # noqa: F401

# Tx helpers
from .tx import (  # noqa: F401
    Transaction,
    TransactionBuilder,
    TransactionSignature,
    build_free_test_coins,
    build_transaction,
    build_transfer,
)

__all__ = [
    "__version__",
    # Core
    "WalletConfig",
    "DanWalletError", "MalformedInput", "BuilderMisuse", "EncodingFault",
    "SigningFailure", "InvalidSignature",
    # Hashing
    "EngineHashDomainLabel", "hasher", "hasher32", "hasher64",
    # Address
    "new_component_address_from_parts",
    "get_account_address_from_public_key",
    "get_account_nft_address_from_public_key",
    # Wallet
    "SecretKey", "PublicKey", "Signature",
    # Tx
    "Transaction", "TransactionBuilder", "TransactionSignature",
    "build_transaction", "build_transfer", "build_free_test_coins",
]
