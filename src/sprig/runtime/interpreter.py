"""
Tree-walking interpreter for Sprig.

Evaluates AST nodes against an environment chain. The host call stack is
the interpreter call stack; nesting is bounded by ``max_depth``.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from .values import (
    RuntimeValue, ObjectValue, NativeFunctionValue, FunctionValue,
    null_val, number_val, object_val, format_number, render,
    is_number, is_callable,
)
from .environment import Environment, create_global_env
from .builtins import NativeRegistry
from ..ast import (
    AstNode, Program, VarDeclaration, FunctionDeclaration,
    AssignmentExpr, MemberExpr, CallExpr, ObjectLiteral,
    NumericLiteral, Identifier, BinaryExpr,
)
from ..config import InterpreterConfig
from ..errors import (
    Diagnostic,
    SprigError,
    EvaluationError,
    error_invalid_assignment_target,
    error_not_callable,
    error_arity_mismatch,
    error_stack_overflow,
    error_invalid_operand,
    error_invalid_member_access,
)

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Result of running a program: a value on success, a diagnostic otherwise."""
    success: bool
    value: Optional[RuntimeValue] = None
    error: Optional[SprigError] = None

    @property
    def diagnostic(self) -> Optional[Diagnostic]:
        if self.error is None:
            return None
        return self.error.diagnostic

    @property
    def error_message(self) -> Optional[str]:
        if self.error is None:
            return None
        return self.error.diagnostic.message


def _divide(left: float, right: float) -> float:
    """IEEE division: x / 0 is +-Infinity, 0 / 0 is NaN."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def _remainder(left: float, right: float) -> float:
    """Truncated remainder with the sign of the dividend."""
    if right == 0 or math.isinf(left) or math.isnan(left) or math.isnan(right):
        return math.nan
    return math.fmod(left, right)


ARITHMETIC = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _divide,
    "%": _remainder,
}


class Interpreter:
    """
    Tree-walking interpreter.

    Evaluates AST nodes by dispatching to kind-specific methods.
    """

    def __init__(self, config: Optional[InterpreterConfig] = None):
        self.config = config or InterpreterConfig()
        self._depth = 0

    def evaluate(self, node: AstNode, env: Environment) -> RuntimeValue:
        """Evaluate ``node`` in ``env`` and return its value."""
        if self._depth >= self.config.max_depth:
            raise error_stack_overflow(self.config.max_depth, node.span)

        self._depth += 1
        try:
            return self._dispatch(node, env)
        except RecursionError:
            raise error_stack_overflow(self.config.max_depth, node.span) from None
        finally:
            self._depth -= 1

    def _dispatch(self, node: AstNode, env: Environment) -> RuntimeValue:
        if isinstance(node, NumericLiteral):
            return number_val(node.value)
        elif isinstance(node, Identifier):
            return env.lookup(node.symbol, node.span)
        elif isinstance(node, BinaryExpr):
            return self._eval_binary_expr(node, env)
        elif isinstance(node, CallExpr):
            return self._eval_call_expr(node, env)
        elif isinstance(node, MemberExpr):
            return self._eval_member_expr(node, env)
        elif isinstance(node, ObjectLiteral):
            return self._eval_object_literal(node, env)
        elif isinstance(node, AssignmentExpr):
            return self._eval_assignment(node, env)
        elif isinstance(node, VarDeclaration):
            return self._eval_var_declaration(node, env)
        elif isinstance(node, FunctionDeclaration):
            return self._eval_function_declaration(node, env)
        elif isinstance(node, Program):
            return self._eval_program(node, env)
        else:
            raise EvaluationError(
                f"cannot evaluate node of kind {node.kind}", node.span
            )

    # --- Statements ---

    def _eval_program(self, program: Program, env: Environment) -> RuntimeValue:
        """Evaluate statements in order; the last value is the result."""
        return self._eval_body(program.body, env)

    def _eval_body(self, statements, env: Environment) -> RuntimeValue:
        result: RuntimeValue = null_val()
        for stmt in statements:
            result = self.evaluate(stmt, env)
        return result

    def _eval_var_declaration(self, decl: VarDeclaration, env: Environment) -> RuntimeValue:
        value = self.evaluate(decl.value, env) if decl.value is not None else null_val()
        return env.declare(decl.identifier, value, decl.constant, decl.span)

    def _eval_function_declaration(self, decl: FunctionDeclaration,
                                   env: Environment) -> RuntimeValue:
        """Create a closure over ``env`` and bind it as a constant."""
        fn = FunctionValue(
            name=decl.name,
            parameters=list(decl.parameters),
            declaration_env=env,
            body=decl.body,
        )
        return env.declare(decl.name, fn, constant=True, span=decl.span)

    # --- Expressions ---

    def _eval_assignment(self, node: AssignmentExpr, env: Environment) -> RuntimeValue:
        if not isinstance(node.assignee, Identifier):
            raise error_invalid_assignment_target(node.assignee.kind, node.assignee.span)
        value = self.evaluate(node.value, env)
        return env.assign(node.assignee.symbol, value, node.span)

    def _eval_object_literal(self, node: ObjectLiteral, env: Environment) -> RuntimeValue:
        obj = object_val()
        for prop in node.properties:
            if prop.value is None:
                value = env.lookup(prop.key, prop.span)
            else:
                value = self.evaluate(prop.value, env)
            obj.properties[prop.key] = value
        return obj

    def _eval_member_expr(self, node: MemberExpr, env: Environment) -> RuntimeValue:
        obj = self.evaluate(node.object, env)

        if node.computed:
            key_value = self.evaluate(node.property, env)
            if not is_number(key_value):
                raise error_invalid_member_access(
                    f"computed property key must be a number, got {key_value.type.value}",
                    node.property.span,
                )
            key = format_number(key_value.value)
        else:
            key = node.property.symbol

        if not isinstance(obj, ObjectValue):
            raise error_invalid_member_access(
                f"cannot read property '{key}' of {obj.type.value}", node.span
            )
        return obj.get(key)

    def _eval_binary_expr(self, node: BinaryExpr, env: Environment) -> RuntimeValue:
        """
        Evaluate a left-folded operator chain.

        ``1 + 2 + 3`` parses as ``(1 + 2) + 3``; the left spine is walked
        with an explicit list so long chains do not count towards
        ``max_depth``. Operands are still evaluated left to right.
        """
        spine: List[BinaryExpr] = []
        current: AstNode = node
        while isinstance(current, BinaryExpr):
            spine.append(current)
            current = current.left

        left = self.evaluate(current, env)
        for binary in reversed(spine):
            right = self.evaluate(binary.right, env)
            left = self._apply_operator(binary, left, right)
        return left

    def _apply_operator(self, node: BinaryExpr, left: RuntimeValue,
                        right: RuntimeValue) -> RuntimeValue:
        if is_number(left) and is_number(right):
            return number_val(ARITHMETIC[node.operator](left.value, right.value))

        if self.config.strict_operands:
            raise error_invalid_operand(
                node.operator, left.type.value, right.type.value, node.span
            )
        logger.debug(
            "non-numeric operands for %r at %s, result is null",
            node.operator, node.span.start,
        )
        return null_val()

    def _eval_call_expr(self, node: CallExpr, env: Environment) -> RuntimeValue:
        args = [self.evaluate(arg, env) for arg in node.arguments]
        fn = self.evaluate(node.caller, env)

        if not is_callable(fn):
            raise error_not_callable(render(fn), node.caller.span)

        if isinstance(fn, NativeFunctionValue):
            return fn.call(args, env)
        return self.call_function(fn, args, node)

    def call_function(self, fn: FunctionValue, args: List[RuntimeValue],
                      node: Optional[AstNode] = None) -> RuntimeValue:
        """Invoke a user function with already-evaluated arguments."""
        span = node.span if node is not None else None
        if len(args) != fn.arity:
            raise error_arity_mismatch(fn.name, fn.arity, len(args), span)

        scope = fn.declaration_env.child(fn.name)
        for param, arg in zip(fn.parameters, args):
            scope.declare(param, arg, constant=False, span=span)

        logger.debug("call %s(%s) in scope depth %d",
                     fn.name, ", ".join(render(a) for a in args), scope.depth)
        return self._eval_body(fn.body, scope)


def execute(program: Program, env: Optional[Environment] = None,
            config: Optional[InterpreterConfig] = None) -> ExecutionResult:
    """
    Evaluate a parsed program, reporting failure as a result.

    This is a convenience wrapper around Interpreter.evaluate().
    """
    if env is None:
        env = create_global_env()
    interpreter = Interpreter(config)
    try:
        value = interpreter.evaluate(program, env)
    except SprigError as e:
        return ExecutionResult(success=False, error=e)
    return ExecutionResult(success=True, value=value)


def compile_and_run(
    source: str,
    env: Optional[Environment] = None,
    config: Optional[InterpreterConfig] = None,
    registry: Optional[NativeRegistry] = None,
    filename: Optional[str] = None,
) -> ExecutionResult:
    """
    High-level API to parse and run source code in one call.

        from sprig import compile_and_run

        result = compile_and_run("let x = 2 + 3 * 4 x")
        if result.success:
            print(result.value)
        else:
            print(result.error)

    Args:
        source: Program text
        env: Environment to run in; a fresh global one is created if omitted
        config: Interpreter limits and policies
        registry: Natives for the fresh global environment (ignored with ``env``)
        filename: Optional filename for error messages

    Returns:
        ExecutionResult with the program value or the failure
    """
    from ..parser import parse

    config = config or InterpreterConfig()
    source_lines = source.splitlines()

    try:
        program = parse(source, filename, max_nesting=config.max_nesting)
    except SprigError as e:
        return ExecutionResult(success=False, error=e.with_source(source_lines))

    if env is None:
        env = create_global_env(registry)

    result = execute(program, env, config)
    if result.error is not None:
        result.error.with_source(source_lines)
    return result
