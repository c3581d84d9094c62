"""
Sprig - a small expression-oriented scripting language.

This package provides:
- Lexer: Tokenizes source code
- Parser: Builds an AST from tokens
- Interpreter: Evaluates the AST against lexical scopes

Usage:
    from sprig import parse, Interpreter, create_global_env

    program = parse('''
        let base = 10
        fn scale(n) { n * base }
        scale(4)
    ''')
    env = create_global_env()
    value = Interpreter().evaluate(program, env)   # NumberValue(40.0)

Or, to get failures back as a result instead of an exception:
    from sprig import compile_and_run

    result = compile_and_run("y")
    if not result.success:
        print(result.error)
"""

import logging

from .tokens import (
    Token,
    TokenType,
    SourceLocation,
    SourceSpan,
    KEYWORDS,
)

from .lexer import (
    Lexer,
    tokenize,
)

from .parser import (
    Parser,
    parse,
)

from .ast import (
    AstNode,
    AstVisitor,
    AstPrinter,
    dump,
    Statement,
    Expression,
    Program,
    VarDeclaration,
    FunctionDeclaration,
    AssignmentExpr,
    MemberExpr,
    CallExpr,
    Property,
    ObjectLiteral,
    NumericLiteral,
    Identifier,
    BinaryExpr,
)

from .errors import (
    Diagnostic,
    ErrorSeverity,
    SprigError,
    LexerError,
    ParserError,
    EvaluationError,
    DuplicateBindingError,
    UnboundNameError,
    ConstantViolationError,
    InvalidAssignmentTargetError,
    NotCallableError,
    ArityMismatchError,
    StackOverflowError,
    InvalidOperandError,
    InvalidMemberAccessError,
)

from .config import (
    InterpreterConfig,
    load_config,
)

from .runtime import (
    ValueType,
    RuntimeValue,
    NullValue,
    BooleanValue,
    NumberValue,
    ObjectValue,
    NativeFunctionValue,
    FunctionValue,
    null_val,
    bool_val,
    number_val,
    object_val,
    native_fn,
    render,
    NativeRegistry,
    Environment,
    create_global_env,
    Interpreter,
    ExecutionResult,
    execute,
    compile_and_run,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Tokens
    'Token',
    'TokenType',
    'SourceLocation',
    'SourceSpan',
    'KEYWORDS',
    # Lexer
    'Lexer',
    'tokenize',
    # Parser
    'Parser',
    'parse',
    # AST
    'AstNode',
    'AstVisitor',
    'AstPrinter',
    'dump',
    'Statement',
    'Expression',
    'Program',
    'VarDeclaration',
    'FunctionDeclaration',
    'AssignmentExpr',
    'MemberExpr',
    'CallExpr',
    'Property',
    'ObjectLiteral',
    'NumericLiteral',
    'Identifier',
    'BinaryExpr',
    # Errors
    'Diagnostic',
    'ErrorSeverity',
    'SprigError',
    'LexerError',
    'ParserError',
    'EvaluationError',
    'DuplicateBindingError',
    'UnboundNameError',
    'ConstantViolationError',
    'InvalidAssignmentTargetError',
    'NotCallableError',
    'ArityMismatchError',
    'StackOverflowError',
    'InvalidOperandError',
    'InvalidMemberAccessError',
    # Config
    'InterpreterConfig',
    'load_config',
    # Runtime
    'ValueType',
    'RuntimeValue',
    'NullValue',
    'BooleanValue',
    'NumberValue',
    'ObjectValue',
    'NativeFunctionValue',
    'FunctionValue',
    'null_val',
    'bool_val',
    'number_val',
    'object_val',
    'native_fn',
    'render',
    'NativeRegistry',
    'Environment',
    'create_global_env',
    'Interpreter',
    'ExecutionResult',
    'execute',
    'compile_and_run',
]
