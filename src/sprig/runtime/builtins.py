"""
Native function registry for the Sprig interpreter.

Natives are host callables exposed to scripts. A registry is filled before
evaluation starts and installed into the global environment, where each
native becomes a constant binding.
"""

import logging
import sys
import time
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .values import (
    RuntimeValue, NativeCall, NativeFunctionValue,
    native_fn, null_val, number_val, render,
)

logger = logging.getLogger(__name__)

Output = Callable[[str], None]

# Bound by create_global_env before any native
RESERVED_NAMES = frozenset({"true", "false", "null"})


def _stdout(text: str) -> None:
    sys.stdout.write(text + "\n")


class NativeRegistry:
    """
    Registry of native functions.

    Usage:
        registry = NativeRegistry.with_defaults()
        registry.register("square", lambda args, env: number_val(args[0].value ** 2))
        env = create_global_env(registry)
    """

    def __init__(self):
        self._functions: Dict[str, NativeFunctionValue] = {}

    @classmethod
    def with_defaults(cls, output: Optional[Output] = None) -> "NativeRegistry":
        """A registry holding ``print`` and ``time``."""
        registry = cls()
        registry.register("print", make_print(output or _stdout))
        registry.register("time", make_clock())
        return registry

    def register(self, name: str, call: NativeCall) -> NativeFunctionValue:
        """Register ``call`` under ``name``, replacing any earlier entry.

        Raises:
            ValueError: If ``name`` is one of the literal constants
        """
        if name in RESERVED_NAMES:
            raise ValueError(f"cannot register native '{name}': the name is reserved")
        if name in self._functions:
            logger.debug("Overwriting native %s", name)
        value = call if isinstance(call, NativeFunctionValue) else native_fn(call, name)
        self._functions[name] = value
        return value

    def native(self, name: str) -> Callable[[NativeCall], NativeCall]:
        """Decorator form of ``register``."""
        def decorator(call: NativeCall) -> NativeCall:
            self.register(name, call)
            return call
        return decorator

    def get(self, name: str) -> Optional[NativeFunctionValue]:
        """Look up a native by name."""
        return self._functions.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._functions

    def __len__(self) -> int:
        return len(self._functions)

    def items(self) -> Iterator[Tuple[str, NativeFunctionValue]]:
        return iter(self._functions.items())


def make_print(output: Output) -> NativeCall:
    """``print(...)``: write the rendered arguments separated by spaces."""

    def _print(args: List[RuntimeValue], env) -> RuntimeValue:
        output(" ".join(render(arg) for arg in args))
        return null_val()

    return _print


def make_clock(clock: Callable[[], float] = time.time) -> NativeCall:
    """``time()``: host clock in milliseconds, never decreasing.

    ``clock`` returns seconds. A reading earlier than the previous one
    (wall clock adjusted backwards) repeats the previous reading.
    """
    last = [0.0]

    def _time(args: List[RuntimeValue], env) -> RuntimeValue:
        now = float(int(clock() * 1000))
        if now < last[0]:
            now = last[0]
        last[0] = now
        return number_val(now)

    return _time
