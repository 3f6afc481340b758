"""
Shared pytest fixtures: deterministic keys and a fresh wallet config.
"""
from __future__ import annotations

import io
import logging

import pytest

from dan_wallet import logging as wlog
from dan_wallet.config import WalletConfig
from dan_wallet.wallet.keys import SecretKey

# Canonical scalars (top byte < 0x10 keeps them below the group order).
SECRET_A_HEX = "a7" * 31 + "07"
SECRET_B_HEX = "3c" * 31 + "05"


@pytest.fixture
def secret_a() -> SecretKey:
    return SecretKey.from_hex(SECRET_A_HEX)


@pytest.fixture
def secret_b() -> SecretKey:
    return SecretKey.from_hex(SECRET_B_HEX)


@pytest.fixture
def config() -> WalletConfig:
    return WalletConfig()


@pytest.fixture
def log_stream():
    """Capture dan_wallet logs as JSON lines; restores logger state afterwards."""
    logger = logging.getLogger("dan_wallet")
    prev_level = logger.level
    stream = io.StringIO()
    handler = wlog.configure(json=True, level="DEBUG", stream=stream)
    try:
        yield stream
    finally:
        logger.removeHandler(handler)
        logger.setLevel(prev_level)
        wlog.clear_context()
