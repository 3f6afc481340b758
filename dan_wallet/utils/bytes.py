from __future__ import annotations

from typing import Optional, Union

from ..errors import MalformedInput

BytesLike = Union[bytes, bytearray, memoryview]


def ensure_bytes(data: Union[BytesLike, str], *, field: Optional[str] = None) -> bytes:
    """
    Ensure input is bytes.

    Accepts:
      - bytes / bytearray / memoryview  -> bytes(data)
      - str: treated as hex; optional '0x' prefix; even-length enforced

    Raises:
      MalformedInput on invalid hex strings or unsupported types.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    if isinstance(data, str):
        return from_hex(data, field=field)
    raise MalformedInput(f"unsupported type {type(data).__name__}", field=field)


def to_hex(b: BytesLike, prefix: bool = False) -> str:
    """
    Bytes -> hex string (lowercase). No '0x' prefix unless asked for; the
    network's own hex forms are bare.
    """
    s = bytes(b).hex()
    return f"0x{s}" if prefix else s


def from_hex(s: str, *, field: Optional[str] = None) -> bytes:
    """
    Hex string (optionally '0x' prefixed) -> bytes.

    Enforces even length (nibbles must pair to bytes); case-insensitive.
    """
    if not isinstance(s, str):
        raise MalformedInput("expected a hex string", field=field, value=type(s).__name__)
    raw = s[2:] if s.startswith(("0x", "0X")) else s
    if len(raw) % 2 != 0:
        raise MalformedInput("hex string must have even length", field=field, value=s)
    try:
        return bytes.fromhex(raw)
    except ValueError as e:
        raise MalformedInput(f"invalid hex string: {e}", field=field, value=s) from e


def from_hex_fixed(s: str, length: int, *, field: Optional[str] = None) -> bytes:
    """Parse hex and require exactly `length` bytes."""
    b = from_hex(s, field=field)
    if len(b) != length:
        raise MalformedInput(
            f"expected {length} bytes, got {len(b)}", field=field, value=s
        )
    return b


__all__ = [
    "BytesLike",
    "ensure_bytes",
    "to_hex",
    "from_hex",
    "from_hex_fixed",
]
