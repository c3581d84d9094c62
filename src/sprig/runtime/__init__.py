"""
Sprig runtime - tree-walking evaluation of parsed programs.

This module provides:
- Interpreter: Evaluates AST nodes against an environment chain
- Runtime values: null, boolean, number, object, native and user functions
- Environment: Lexical scopes with constant bindings
- NativeRegistry: Host functions installed into the global environment
"""

from .values import (
    ValueType,
    RuntimeValue,
    NullValue,
    BooleanValue,
    NumberValue,
    ObjectValue,
    NativeFunctionValue,
    FunctionValue,
    NULL,
    null_val,
    bool_val,
    number_val,
    object_val,
    native_fn,
    is_number,
    is_callable,
    format_number,
    render,
)

from .builtins import (
    NativeRegistry,
    make_print,
    make_clock,
)

from .environment import (
    Environment,
    create_global_env,
)

from .interpreter import (
    Interpreter,
    ExecutionResult,
    execute,
    compile_and_run,
)

__all__ = [
    # Values
    'ValueType',
    'RuntimeValue',
    'NullValue',
    'BooleanValue',
    'NumberValue',
    'ObjectValue',
    'NativeFunctionValue',
    'FunctionValue',
    'NULL',
    'null_val',
    'bool_val',
    'number_val',
    'object_val',
    'native_fn',
    'is_number',
    'is_callable',
    'format_number',
    'render',

    # Natives
    'NativeRegistry',
    'make_print',
    'make_clock',

    # Environment
    'Environment',
    'create_global_env',

    # Interpreter
    'Interpreter',
    'ExecutionResult',
    'execute',
    'compile_and_run',
]
