"""
Runtime values for the Sprig interpreter.

Every value carries a ``ValueType`` tag. Values are immutable once
produced, except for an object's property mapping.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, List

if TYPE_CHECKING:
    from .environment import Environment
    from ..ast import Statement


class ValueType(Enum):
    """Runtime value kinds."""
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    OBJECT = "object"
    NATIVE_FN = "native-fn"
    FUNCTION = "function"


@dataclass(frozen=True, eq=False)
class RuntimeValue:
    """Base class for all runtime values. Function values compare by identity."""

    @property
    def type(self) -> ValueType:
        raise NotImplementedError

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class NullValue(RuntimeValue):

    @property
    def type(self) -> ValueType:
        return ValueType.NULL


@dataclass(frozen=True)
class BooleanValue(RuntimeValue):
    value: bool

    @property
    def type(self) -> ValueType:
        return ValueType.BOOLEAN


@dataclass(frozen=True)
class NumberValue(RuntimeValue):
    value: float

    @property
    def type(self) -> ValueType:
        return ValueType.NUMBER


@dataclass(frozen=True, eq=False)
class ObjectValue(RuntimeValue):
    """An object; the mapping itself is filled while the literal is built.

    Objects compare and hash by identity.
    """
    properties: Dict[str, RuntimeValue] = field(default_factory=dict)

    @property
    def type(self) -> ValueType:
        return ValueType.OBJECT

    def get(self, key: str) -> RuntimeValue:
        """Property lookup; missing keys read as null."""
        return self.properties.get(key, NULL)


NativeCall = Callable[[List[RuntimeValue], "Environment"], RuntimeValue]


@dataclass(frozen=True, eq=False)
class NativeFunctionValue(RuntimeValue):
    """A host-implemented function. ``call(args, env)`` returns a value."""
    call: NativeCall
    name: str = "native"

    @property
    def type(self) -> ValueType:
        return ValueType.NATIVE_FN


@dataclass(frozen=True, eq=False)
class FunctionValue(RuntimeValue):
    """A user-defined function closing over its declaration environment."""
    name: str
    parameters: List[str]
    declaration_env: "Environment" = field(repr=False)
    body: List["Statement"] = field(repr=False)

    @property
    def type(self) -> ValueType:
        return ValueType.FUNCTION

    @property
    def arity(self) -> int:
        return len(self.parameters)


NULL = NullValue()


# Convenience constructors

def null_val() -> NullValue:
    """Create a null value."""
    return NULL


def bool_val(b: bool) -> BooleanValue:
    """Create a boolean value."""
    return BooleanValue(bool(b))


def number_val(n: float) -> NumberValue:
    """Create a number value."""
    return NumberValue(float(n))


def object_val(properties: Dict[str, RuntimeValue] = None) -> ObjectValue:
    """Create an object value."""
    return ObjectValue(dict(properties or {}))


def native_fn(call: NativeCall, name: str = "native") -> NativeFunctionValue:
    """Wrap a host callable as a native function value."""
    return NativeFunctionValue(call, name)


def is_number(value: RuntimeValue) -> bool:
    return isinstance(value, NumberValue)


def is_callable(value: RuntimeValue) -> bool:
    return isinstance(value, (NativeFunctionValue, FunctionValue))


# Rendering

def format_number(n: float) -> str:
    """Format a number the way scripts see it: 14 rather than 14.0."""
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "Infinity" if n > 0 else "-Infinity"
    if n == int(n) and abs(n) < 1e21:
        return str(int(n))
    return repr(n)


def render(value: RuntimeValue) -> str:
    """Render a value as text, as ``print`` shows it."""
    if isinstance(value, NullValue):
        return "null"
    if isinstance(value, BooleanValue):
        return "true" if value.value else "false"
    if isinstance(value, NumberValue):
        return format_number(value.value)
    if isinstance(value, ObjectValue):
        if not value.properties:
            return "{}"
        entries = ", ".join(f"{key}: {render(val)}" for key, val in value.properties.items())
        return "{ " + entries + " }"
    if isinstance(value, NativeFunctionValue):
        return f"<native fn {value.name}>"
    if isinstance(value, FunctionValue):
        return f"<fn {value.name}>"
    raise TypeError(f"not a runtime value: {value!r}")
