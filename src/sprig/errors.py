"""
Sprig exceptions and error reporting.

Every failure is unrecoverable for the program being run: it aborts
evaluation immediately. Errors carry a ``Diagnostic`` describing the
failure kind, a message and, where known, the offending source location.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E3xx: Runtime errors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List
from .tokens import SourceSpan


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"
    WARNING = "warning"


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    code: str                       # E001, E101, etc.
    kind: str                       # LexError, UnboundName, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity = ErrorSeverity.ERROR
    span: Optional[SourceSpan] = None
    source_line: Optional[str] = None   # The actual line of source code
    hints: List[str] = field(default_factory=list)

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = []

        # Header: location: severity[code]: message
        header = f"{self.severity.value}[{self.code}] {self.kind}: {self.message}"
        if self.span is not None:
            header = f"{self.span.start}: {header}"
        parts.append(header)

        # Source line with caret
        if show_source and self.span is not None and self.source_line is not None:
            parts.append("  |")
            line_num = str(self.span.start.line)
            parts.append(f"{line_num:>3} | {self.source_line}")

            col = self.span.start.column
            if self.span.start.line == self.span.end.line:
                end_col = self.span.end.column
            else:
                end_col = len(self.source_line) + 1
            underline_len = max(1, end_col - col)
            parts.append(f"    | {' ' * (col - 1)}{'^' * underline_len}")

        for hint in self.hints:
            parts.append(f"    = hint: {hint}")

        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        result = {
            "code": self.code,
            "kind": self.kind,
            "message": self.message,
            "severity": self.severity.value,
            "hints": self.hints,
        }
        if self.span is not None:
            result["range"] = {
                "start": {
                    "line": self.span.start.line,
                    "column": self.span.start.column,
                    "offset": self.span.start.offset,
                },
                "end": {
                    "line": self.span.end.line,
                    "column": self.span.end.column,
                    "offset": self.span.end.offset,
                },
            }
        return result


class SprigError(Exception):
    """Base exception for all Sprig errors."""

    kind = "Error"
    code = "E000"

    def __init__(self, message: str, span: Optional[SourceSpan] = None,
                 source_line: Optional[str] = None, hints: Optional[List[str]] = None,
                 code: Optional[str] = None):
        self.diagnostic = Diagnostic(
            code=code or self.code,
            kind=self.kind,
            message=message,
            span=span,
            source_line=source_line,
            hints=list(hints or []),
        )
        super().__init__(message)

    @property
    def span(self) -> Optional[SourceSpan]:
        return self.diagnostic.span

    def with_source(self, source_lines: List[str]) -> "SprigError":
        """Attach the offending source line if one is known and missing."""
        diag = self.diagnostic
        if diag.source_line is None and diag.span is not None:
            line = diag.span.start.line
            if 1 <= line <= len(source_lines):
                diag.source_line = source_lines[line - 1]
        return self

    def __str__(self) -> str:
        return self.diagnostic.format()


class LexerError(SprigError):
    """Unrecognized character in source (E0xx)."""
    kind = "LexError"
    code = "E001"


class ParserError(SprigError):
    """Unexpected token at a grammar position (E1xx)."""
    kind = "ParseError"
    code = "E101"


class EvaluationError(SprigError):
    """Base class for failures raised while evaluating a program (E3xx)."""
    kind = "RuntimeError"
    code = "E300"


class DuplicateBindingError(EvaluationError):
    kind = "DuplicateBinding"
    code = "E301"


class UnboundNameError(EvaluationError):
    kind = "UnboundName"
    code = "E302"


class ConstantViolationError(EvaluationError):
    kind = "ConstantViolation"
    code = "E303"


class InvalidAssignmentTargetError(EvaluationError):
    kind = "InvalidAssignmentTarget"
    code = "E304"


class NotCallableError(EvaluationError):
    kind = "NotCallable"
    code = "E305"


class ArityMismatchError(EvaluationError):
    kind = "ArityMismatch"
    code = "E306"


class StackOverflowError(EvaluationError):
    kind = "StackOverflow"
    code = "E307"


class InvalidOperandError(EvaluationError):
    """Non-numeric operand to an arithmetic operator (strict mode only)."""
    kind = "InvalidOperandType"
    code = "E308"


class InvalidMemberAccessError(EvaluationError):
    kind = "InvalidMemberAccess"
    code = "E309"


# --- Lexer error codes ---

def error_unexpected_character(char: str, span: SourceSpan,
                               source_line: Optional[str] = None) -> LexerError:
    """E001: Unexpected character."""
    return LexerError(
        f"unrecognized character {char!r} in source",
        span, source_line,
    )


# --- Parser error codes ---

def error_unexpected_token(expected: str, found: str, span: SourceSpan,
                           source_line: Optional[str] = None) -> ParserError:
    """E101: Unexpected token."""
    return ParserError(f"expected {expected}, found {found}", span, source_line)


def error_unexpected_eof(expected: str, span: SourceSpan) -> ParserError:
    """E102: Unexpected end of file."""
    return ParserError(
        f"unexpected end of file, expected {expected}", span, code="E102"
    )


def error_invalid_expression(found: str, span: SourceSpan,
                             source_line: Optional[str] = None) -> ParserError:
    """E103: Token cannot start a primary expression."""
    return ParserError(
        f"unexpected token {found} found during parsing",
        span, source_line,
        hints=["an expression must start with an identifier, a number or '('"],
        code="E103",
    )


def error_nesting_too_deep(limit: int, span: SourceSpan) -> ParserError:
    """E104: Expression nested beyond the parser limit."""
    return ParserError(
        f"expression nested too deeply (limit {limit})", span, code="E104"
    )


# --- Runtime error codes ---

def error_duplicate_binding(name: str, span: Optional[SourceSpan] = None) -> DuplicateBindingError:
    """E301: Name declared twice in one scope."""
    return DuplicateBindingError(
        f"cannot declare variable '{name}': it is already defined in this scope",
        span,
    )


def error_unbound_name(name: str, span: Optional[SourceSpan] = None) -> UnboundNameError:
    """E302: Name not found in any enclosing scope."""
    return UnboundNameError(
        f"cannot resolve '{name}': it does not exist", span
    )


def error_constant_violation(name: str, span: Optional[SourceSpan] = None) -> ConstantViolationError:
    """E303: Assignment to a constant binding."""
    return ConstantViolationError(
        f"cannot reassign '{name}': it was declared constant", span
    )


def error_invalid_assignment_target(found: str, span: Optional[SourceSpan] = None) -> InvalidAssignmentTargetError:
    """E304: Left side of assignment is not an identifier."""
    return InvalidAssignmentTargetError(
        f"invalid left-hand side in assignment: {found}",
        span,
        hints=["only plain variables can be assigned to"],
    )


def error_not_callable(found: str, span: Optional[SourceSpan] = None) -> NotCallableError:
    """E305: Call on a value that is not a function."""
    return NotCallableError(
        f"cannot call value that is not a function: {found}", span
    )


def error_arity_mismatch(name: str, expected: int, given: int,
                         span: Optional[SourceSpan] = None) -> ArityMismatchError:
    """E306: Wrong number of arguments."""
    plural = "" if expected == 1 else "s"
    return ArityMismatchError(
        f"function '{name}' expects {expected} argument{plural}, got {given}",
        span,
    )


def error_stack_overflow(limit: int, span: Optional[SourceSpan] = None) -> StackOverflowError:
    """E307: Evaluation nested beyond the configured depth."""
    return StackOverflowError(
        f"maximum evaluation depth exceeded (limit {limit})",
        span,
        hints=["check for unbounded recursion"],
    )


def error_invalid_operand(operator: str, left: str, right: str,
                          span: Optional[SourceSpan] = None) -> InvalidOperandError:
    """E308: Arithmetic on a non-number."""
    return InvalidOperandError(
        f"unsupported operand types for '{operator}': {left} and {right}", span
    )


def error_invalid_member_access(reason: str, span: Optional[SourceSpan] = None) -> InvalidMemberAccessError:
    """E309: Member access on a non-object or with a bad key."""
    return InvalidMemberAccessError(reason, span)
