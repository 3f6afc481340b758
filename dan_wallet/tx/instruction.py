"""
dan_wallet.tx.instruction
=========================

The instructions a transaction carries. The wallet never interprets them; it
only needs a stable canonical encoding (hashed into the signing challenge) and
a JSON form for the host boundary.

Both forms are externally tagged, one variant per instruction:

    {"CallMethod": {"component_address": ..., "method": "withdraw", "args": [...]}}

Variants
--------
- CallFunction(template_address, function, args)
- CallMethod(component_address, method, args)
- PutLastInstructionOutputOnWorkspace(key)
- EmitLog(level, message)
- CreateFreeTestCoins(revealed_amount, output=None)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from ..errors import DanWalletError, MalformedInput
from ..types.core import Amount, ComponentAddress, TemplateAddress
from ..utils.bytes import from_hex
from .args import Arg

LOG_LEVELS = ("Error", "Warn", "Info", "Debug")


class Instruction:
    """Base class; concrete variants below."""

    __slots__ = ()

    def body(self) -> Dict[str, Any]:
        raise NotImplementedError

    def json_body(self) -> Dict[str, Any]:
        raise NotImplementedError

    def to_cbor(self) -> Dict[str, Any]:
        return {type(self).__name__: self.body()}

    def to_json(self) -> Dict[str, Any]:
        return {type(self).__name__: self.json_body()}


def _str_field(body: Dict[str, Any], name: str) -> str:
    v = body.get(name)
    if not isinstance(v, str) or not v:
        raise MalformedInput("expected a non-empty string", field=name, value=v)
    return v


def _args_field(body: Dict[str, Any]) -> Tuple[Arg, ...]:
    raw = body.get("args", [])
    if not isinstance(raw, list):
        raise MalformedInput("args must be a list", field="args", value=type(raw).__name__)
    return tuple(Arg.from_json(a) for a in raw)


@dataclass(frozen=True, slots=True)
class CallFunction(Instruction):
    template_address: TemplateAddress
    function: str
    args: Tuple[Arg, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def body(self) -> Dict[str, Any]:
        return {"template_address": self.template_address, "function": self.function, "args": list(self.args)}

    def json_body(self) -> Dict[str, Any]:
        return {
            "template_address": self.template_address.hex(),
            "function": self.function,
            "args": [a.to_json() for a in self.args],
        }

    @classmethod
    def from_json_body(cls, body: Dict[str, Any]) -> "CallFunction":
        return cls(
            TemplateAddress.from_hex(_str_field(body, "template_address"), field="template_address"),
            _str_field(body, "function"),
            _args_field(body),
        )


@dataclass(frozen=True, slots=True)
class CallMethod(Instruction):
    component_address: ComponentAddress
    method: str
    args: Tuple[Arg, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def body(self) -> Dict[str, Any]:
        return {"component_address": self.component_address, "method": self.method, "args": list(self.args)}

    def json_body(self) -> Dict[str, Any]:
        return {
            "component_address": str(self.component_address),
            "method": self.method,
            "args": [a.to_json() for a in self.args],
        }

    @classmethod
    def from_json_body(cls, body: Dict[str, Any]) -> "CallMethod":
        return cls(
            ComponentAddress.from_str(_str_field(body, "component_address"), field="component_address"),
            _str_field(body, "method"),
            _args_field(body),
        )


@dataclass(frozen=True, slots=True)
class PutLastInstructionOutputOnWorkspace(Instruction):
    key: bytes

    def body(self) -> Dict[str, Any]:
        return {"key": self.key}

    def json_body(self) -> Dict[str, Any]:
        return {"key": self.key.hex()}

    @classmethod
    def from_json_body(cls, body: Dict[str, Any]) -> "PutLastInstructionOutputOnWorkspace":
        return cls(from_hex(_str_field(body, "key"), field="key"))


@dataclass(frozen=True, slots=True)
class EmitLog(Instruction):
    level: str
    message: str

    def __post_init__(self) -> None:
        if self.level not in LOG_LEVELS:
            raise MalformedInput("unknown log level", field="level", value=self.level)

    def body(self) -> Dict[str, Any]:
        return {"level": self.level, "message": self.message}

    json_body = body

    @classmethod
    def from_json_body(cls, body: Dict[str, Any]) -> "EmitLog":
        message = body.get("message")
        if not isinstance(message, str):
            raise MalformedInput("message must be a string", field="message", value=message)
        return cls(_str_field(body, "level"), message)


@dataclass(frozen=True, slots=True)
class CreateFreeTestCoins(Instruction):
    revealed_amount: Amount
    # Confidential outputs are not produced by this wallet; always None.
    output: Optional[bytes] = None

    def __post_init__(self) -> None:
        if self.output is not None:
            raise MalformedInput("confidential test-coin outputs are not supported", field="output")

    def body(self) -> Dict[str, Any]:
        return {"revealed_amount": self.revealed_amount, "output": None}

    def json_body(self) -> Dict[str, Any]:
        return {"revealed_amount": self.revealed_amount.value, "output": None}

    @classmethod
    def from_json_body(cls, body: Dict[str, Any]) -> "CreateFreeTestCoins":
        return cls(Amount.parse(body.get("revealed_amount"), field="revealed_amount"), body.get("output"))


_VARIANTS: Dict[str, Callable[[Dict[str, Any]], Instruction]] = {
    "CallFunction": CallFunction.from_json_body,
    "CallMethod": CallMethod.from_json_body,
    "PutLastInstructionOutputOnWorkspace": PutLastInstructionOutputOnWorkspace.from_json_body,
    "EmitLog": EmitLog.from_json_body,
    "CreateFreeTestCoins": CreateFreeTestCoins.from_json_body,
}


def instruction_from_json(obj: Any) -> Instruction:
    """Parse one externally tagged instruction; any shape error is MalformedInput."""
    if not isinstance(obj, dict) or len(obj) != 1:
        raise MalformedInput("instruction must be a single-key object", field="instruction", value=obj)
    (name, body), = obj.items()
    parse = _VARIANTS.get(name)
    if parse is None:
        raise MalformedInput("unknown instruction", field="instruction", value=name)
    if not isinstance(body, dict):
        raise MalformedInput("instruction body must be an object", field=name)
    try:
        return parse(body)
    except DanWalletError:
        raise
    except (TypeError, ValueError) as e:
        raise MalformedInput(str(e), field=name) from e


def instructions_from_json(items: Any) -> Tuple[Instruction, ...]:
    if not isinstance(items, (list, tuple)):
        raise MalformedInput("instructions must be a list", field="instructions", value=type(items).__name__)
    return tuple(instruction_from_json(i) for i in items)


def instructions_to_json(items: Sequence[Instruction]) -> list:
    return [i.to_json() for i in items]


__all__ = [
    "LOG_LEVELS",
    "Instruction",
    "CallFunction",
    "CallMethod",
    "PutLastInstructionOutputOnWorkspace",
    "EmitLog",
    "CreateFreeTestCoins",
    "instruction_from_json",
    "instructions_from_json",
    "instructions_to_json",
]
