"""
Tests for diagnostics and the error taxonomy.
"""

import pytest
from sprig import (
    SourceLocation, SourceSpan, Diagnostic, ErrorSeverity,
    SprigError, LexerError, ParserError, EvaluationError,
    DuplicateBindingError, UnboundNameError, ConstantViolationError,
    InvalidAssignmentTargetError, NotCallableError, ArityMismatchError,
    StackOverflowError, InvalidOperandError, InvalidMemberAccessError,
)
from sprig.errors import (
    error_unexpected_token, error_unexpected_eof, error_nesting_too_deep,
    error_arity_mismatch, error_stack_overflow,
)


def make_span(line=1, col=1, end_col=None):
    end_col = end_col if end_col is not None else col + 1
    return SourceSpan(
        SourceLocation(line, col, col - 1),
        SourceLocation(line, end_col, end_col - 1),
    )


class TestDiagnostic:
    """Test diagnostic formatting."""

    def test_format_header(self):
        diag = Diagnostic(code="E302", kind="UnboundName", message="cannot resolve 'y'")
        assert diag.format() == "error[E302] UnboundName: cannot resolve 'y'"

    def test_format_with_caret(self):
        diag = Diagnostic(
            code="E001", kind="LexError", message="bad",
            span=make_span(1, 5, 7), source_line="let @@ = 1",
        )
        lines = diag.format().splitlines()
        assert lines[0].startswith("1:5: error[E001]")
        assert lines[2] == "  1 | let @@ = 1"
        assert lines[3] == "    |     ^^"

    def test_hints(self):
        diag = Diagnostic(code="E307", kind="StackOverflow", message="deep",
                          hints=["check for unbounded recursion"])
        assert "= hint: check for unbounded recursion" in diag.format()

    def test_to_json(self):
        diag = Diagnostic(code="E101", kind="ParseError", message="m",
                          severity=ErrorSeverity.WARNING, span=make_span(2, 3))
        data = diag.to_json()
        assert data["severity"] == "warning"
        assert data["range"]["start"]["line"] == 2
        assert data["range"]["end"]["column"] == 4

    def test_to_json_without_span(self):
        assert "range" not in Diagnostic(code="E000", kind="Error", message="m").to_json()


class TestTaxonomy:
    """Every error kind has its own class and code."""

    @pytest.mark.parametrize("cls,kind,code", [
        (LexerError, "LexError", "E001"),
        (ParserError, "ParseError", "E101"),
        (DuplicateBindingError, "DuplicateBinding", "E301"),
        (UnboundNameError, "UnboundName", "E302"),
        (ConstantViolationError, "ConstantViolation", "E303"),
        (InvalidAssignmentTargetError, "InvalidAssignmentTarget", "E304"),
        (NotCallableError, "NotCallable", "E305"),
        (ArityMismatchError, "ArityMismatch", "E306"),
        (StackOverflowError, "StackOverflow", "E307"),
        (InvalidOperandError, "InvalidOperandType", "E308"),
        (InvalidMemberAccessError, "InvalidMemberAccess", "E309"),
    ])
    def test_kind_and_code(self, cls, kind, code):
        error = cls("message")
        assert isinstance(error, SprigError)
        assert error.diagnostic.kind == kind
        assert error.diagnostic.code == code

    def test_runtime_errors_share_base(self):
        assert issubclass(UnboundNameError, EvaluationError)
        assert not issubclass(ParserError, EvaluationError)

    def test_parser_codes(self):
        span = make_span()
        assert error_unexpected_token("x", "y", span).diagnostic.code == "E101"
        assert error_unexpected_eof("x", span).diagnostic.code == "E102"
        assert error_nesting_too_deep(3, span).diagnostic.code == "E104"


class TestSprigError:
    """Test the exception wrapper."""

    def test_str_is_formatted_diagnostic(self):
        error = error_stack_overflow(10)
        assert str(error).startswith("error[E307] StackOverflow:")

    def test_with_source_attaches_line(self):
        error = UnboundNameError("m", make_span(2, 1))
        error.with_source(["first", "second"])
        assert error.diagnostic.source_line == "second"

    def test_with_source_keeps_existing_line(self):
        error = UnboundNameError("m", make_span(1, 1), source_line="kept")
        error.with_source(["other"])
        assert error.diagnostic.source_line == "kept"

    def test_arity_message_singular(self):
        error = error_arity_mismatch("f", 1, 3)
        assert error.diagnostic.message == "function 'f' expects 1 argument, got 3"
