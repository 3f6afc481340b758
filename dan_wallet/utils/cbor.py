"""
Deterministic (canonical) CBOR encoding.

Goals
-----
- Produce *deterministic* byte-for-byte CBOR for every value this package
  hashes or ships: fixed-width identifiers, instructions, argument lists,
  signatures and transactions.
- Stream straight into a writer (a hash state) without building an
  intermediate buffer.

Encoding rules
--------------
- `cbor2` in canonical mode: minimal integers, definite lengths, map keys
  sorted canonically.
- Domain objects expose `to_cbor()` returning plain CBOR-able data
  (bytes/str/int/list/dict/None); the encoder's `default` hook unwraps them
  recursively. Fixed-width identifiers therefore encode as CBOR byte strings.
- Classes without `to_cbor()` are rejected; the hasher treats that as a fatal
  `EncodingFault`.

API
---
- dumps(obj) -> bytes
- dump(obj, fp) -> None       (fp only needs a `write(bytes)` method)
- loads(data) -> object
"""

from __future__ import annotations

from typing import Any, Protocol

import cbor2

from ..errors import EncodingFault, MalformedInput
from .bytes import BytesLike, ensure_bytes


class CborWriter(Protocol):
    def write(self, data: bytes) -> int: ...


def _default(encoder: cbor2.CBOREncoder, value: Any) -> None:
    to_cbor = getattr(value, "to_cbor", None)
    if callable(to_cbor):
        encoder.encode(to_cbor())
        return
    raise cbor2.CBOREncodeError(f"cannot canonically encode {type(value).__name__}")


def dump(obj: Any, fp: CborWriter) -> None:
    """Encode *obj* as canonical CBOR into *fp*."""
    try:
        cbor2.dump(obj, fp, canonical=True, default=_default)
    except (cbor2.CBOREncodeError, TypeError, ValueError) as e:
        raise EncodingFault(str(e), value_type=type(obj).__name__) from e


def dumps(obj: Any) -> bytes:
    """Encode *obj* to canonical CBOR bytes."""
    try:
        return cbor2.dumps(obj, canonical=True, default=_default)
    except (cbor2.CBOREncodeError, TypeError, ValueError) as e:
        raise EncodingFault(str(e), value_type=type(obj).__name__) from e


def loads(data: BytesLike) -> Any:
    """Decode CBOR *data*; malformed input is a caller error."""
    try:
        return cbor2.loads(ensure_bytes(data))
    except cbor2.CBORDecodeError as e:
        raise MalformedInput(f"invalid CBOR: {e}", field="cbor") from e


__all__ = ["CborWriter", "dump", "dumps", "loads"]
