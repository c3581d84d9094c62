"""
Tests for native functions and the native registry.
"""

import logging

import pytest

from sprig import NativeRegistry, compile_and_run, create_global_env
from sprig.runtime import (
    make_print, make_clock, number_val, object_val, null_val, NULL,
    NumberValue, NativeFunctionValue,
)


class TestRegistry:
    """Test native registration."""

    def test_defaults(self):
        registry = NativeRegistry.with_defaults()
        assert "print" in registry
        assert "time" in registry
        assert len(registry) == 2

    def test_register_wraps_callable(self):
        registry = NativeRegistry()
        value = registry.register("one", lambda args, env: number_val(1))
        assert isinstance(value, NativeFunctionValue)
        assert value.name == "one"
        assert registry.get("one") is value
        assert registry.get("two") is None

    def test_decorator(self):
        registry = NativeRegistry()

        @registry.native("double")
        def double(args, env):
            return number_val(args[0].value * 2)

        assert "double" in registry
        result = compile_and_run("double(21)", registry=registry)
        assert result.value == number_val(42)

    def test_overwrite_logs(self, caplog):
        registry = NativeRegistry()
        registry.register("f", lambda args, env: NULL)
        with caplog.at_level(logging.DEBUG, logger="sprig.runtime.builtins"):
            registry.register("f", lambda args, env: number_val(1))
        assert "Overwriting native f" in caplog.text
        assert len(registry) == 1

    @pytest.mark.parametrize("name", ["true", "false", "null"])
    def test_reserved_names_rejected(self, name):
        """Literal constants cannot be replaced by natives."""
        registry = NativeRegistry()
        with pytest.raises(ValueError, match="reserved"):
            registry.register(name, lambda args, env: NULL)
        assert name not in registry
        create_global_env(registry)

    def test_native_receives_environment(self):
        registry = NativeRegistry()
        seen = []
        registry.register("peek", lambda args, env: seen.append(env) or NULL)
        env = create_global_env(registry)
        compile_and_run("peek()", env=env)
        assert seen == [env]


class TestPrint:
    """Test the print native."""

    def test_print_joins_with_spaces(self):
        lines = []
        fn = make_print(lines.append)
        result = fn([number_val(1), object_val({"a": number_val(2)}), null_val()], None)
        assert result is NULL
        assert lines == ["1 { a: 2 } null"]

    def test_print_no_arguments(self):
        lines = []
        make_print(lines.append)([], None)
        assert lines == [""]

    def test_print_from_script(self):
        lines = []
        env = create_global_env(output=lines.append)
        result = compile_and_run("let x = 2 print(x * 3, x) x", env=env)
        assert result.success
        assert lines == ["6 2"]

    def test_print_to_stdout(self, capsys):
        compile_and_run("print(7)")
        assert capsys.readouterr().out == "7\n"


class TestTime:
    """Test the time native."""

    def test_milliseconds(self):
        fn = make_clock(lambda: 1.5)
        assert fn([], None) == number_val(1500)

    def test_never_decreases(self):
        readings = iter([10.0, 9.0, 11.0])
        fn = make_clock(lambda: next(readings))
        values = [fn([], None).value for _ in range(3)]
        assert values == [10000.0, 10000.0, 11000.0]

    def test_time_from_script(self):
        result = compile_and_run("time()")
        assert isinstance(result.value, NumberValue)
        assert result.value.value > 0
