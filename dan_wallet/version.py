"""
Version helpers for the dan-wallet package.
We keep a static __version__ (PEP 440).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Bump this when publishing
__version__ = "0.1.0"


@dataclass(frozen=True)
class VersionInfo:
    base: str
    hash_domain: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.base if not self.hash_domain else f"{self.base} ({self.hash_domain})"


def version_info() -> VersionInfo:
    """Structured version info: package version plus the engine hash domain tag."""
    from .hashing import ENGINE_HASH_DOMAIN

    return VersionInfo(base=__version__, hash_domain=ENGINE_HASH_DOMAIN.tag())


def version() -> str:
    """Human-friendly string, e.g. '0.1.0 (com.tari.dan.engine.v0)'."""
    return str(version_info())


__all__ = ["__version__", "VersionInfo", "version_info", "version"]
