"""
Wallet configuration: logging and transaction-assembly defaults.

- Loads sane defaults and supports overrides via environment variables (DAN_WALLET_*).
- Nothing here affects hashing: the hash domain and labels are protocol
  constants, not configuration.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from functools import lru_cache
from typing import Any, Dict, Optional

from .errors import MalformedInput

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _parse_version(val: Any, default: int = 0) -> int:
    if val is None or val == "":
        return int(default)
    try:
        v = int(str(val).strip(), 0)
    except ValueError as e:
        raise MalformedInput("substate version must be an integer", field="input_ref_version", value=val) from e
    if not (0 <= v <= 0xFFFFFFFF):
        raise MalformedInput("substate version out of u32 range", field="input_ref_version", value=val)
    return v


@dataclass(slots=True)
class WalletConfig:
    # Logging
    log_level: str = "INFO"
    log_format: str = ""  # "json" | "text" | "" (auto)
    # Transaction assembly
    input_ref_version: int = 0
    bucket_key: str = "bucket"
    faucet_bucket_key: str = "free_test_coins"

    def __post_init__(self) -> None:
        self.log_level = self.log_level.strip().upper()
        if self.log_level not in _LOG_LEVELS:
            raise MalformedInput("unknown log level", field="log_level", value=self.log_level)
        self.log_format = self.log_format.strip().lower()
        if self.log_format not in ("", "json", "text"):
            raise MalformedInput("log format must be json or text", field="log_format", value=self.log_format)
        self.input_ref_version = _parse_version(self.input_ref_version)
        for name in ("bucket_key", "faucet_bucket_key"):
            if not getattr(self, name):
                raise MalformedInput("workspace key must be non-empty", field=name)

    @classmethod
    def from_env(cls, prefix: str = "DAN_WALLET_") -> "WalletConfig":
        """
        Create config from environment variables:

        DAN_WALLET_LOG_LEVEL          (DEBUG/INFO/...)
        DAN_WALLET_LOG_FORMAT         (json|text)
        DAN_WALLET_INPUT_REF_VERSION  (int or 0x-hex)
        DAN_WALLET_BUCKET_KEY         (workspace key for transfers)
        DAN_WALLET_FAUCET_BUCKET_KEY  (workspace key for faucet coins)
        """
        return cls(
            log_level=_env(f"{prefix}LOG_LEVEL", "INFO") or "INFO",
            log_format=_env(f"{prefix}LOG_FORMAT", "") or "",
            input_ref_version=_parse_version(_env(f"{prefix}INPUT_REF_VERSION")),
            bucket_key=_env(f"{prefix}BUCKET_KEY", "bucket") or "bucket",
            faucet_bucket_key=_env(f"{prefix}FAUCET_BUCKET_KEY", "free_test_coins") or "free_test_coins",
        )

    @classmethod
    def with_overrides(cls, base: Optional["WalletConfig"] = None, **overrides: Any) -> "WalletConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data})
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@lru_cache(maxsize=1)
def default_config() -> WalletConfig:
    """Config from the environment, read on first use and then cached."""
    return WalletConfig.from_env()


__all__ = ["WalletConfig", "default_config"]
