"""
Instruction arguments.

An argument is either a *literal* (a value already canonically encoded to
CBOR bytes) or a *workspace* reference (the key of a slot filled by an earlier
`PutLastInstructionOutputOnWorkspace`).

    args(resource_address, Amount(10))      -> [Literal(...), Literal(...)]
    args(workspace("bucket"))               -> [Workspace(b"bucket")]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Union

from ..errors import MalformedInput
from ..utils import cbor
from ..utils.bytes import from_hex

ARG_KINDS = ("Literal", "Workspace")


@dataclass(frozen=True, slots=True)
class Arg:
    kind: str
    value: bytes

    def __post_init__(self) -> None:
        if self.kind not in ARG_KINDS:
            raise MalformedInput("unknown argument kind", field="arg", value=self.kind)

    def to_cbor(self) -> Any:
        return {self.kind: self.value}

    def to_json(self) -> Dict[str, str]:
        return {self.kind: self.value.hex()}

    @classmethod
    def from_json(cls, obj: Any) -> "Arg":
        if not isinstance(obj, dict) or len(obj) != 1:
            raise MalformedInput("argument must be {'Literal'|'Workspace': hex}", field="arg", value=obj)
        (kind, value), = obj.items()
        if kind not in ARG_KINDS:
            raise MalformedInput("unknown argument kind", field="arg", value=kind)
        return cls(kind, from_hex(value, field=f"arg.{kind}"))


def literal(value: Any) -> Arg:
    return Arg("Literal", cbor.dumps(value))


def workspace(key: Union[str, bytes]) -> Arg:
    return Arg("Workspace", key.encode("utf-8") if isinstance(key, str) else bytes(key))


def args(*values: Any) -> List[Arg]:
    """Build an argument list; `Arg` values pass through, anything else is a literal."""
    return [v if isinstance(v, Arg) else literal(v) for v in values]


__all__ = ["ARG_KINDS", "Arg", "literal", "workspace", "args"]
