"""
Unit tests for the Sprig lexer.
"""

import pytest
from sprig import tokenize, Lexer, TokenType, LexerError
from sprig.tokens import EOF_VALUE, describe, is_keyword


class TestLexerBasics:
    """Test basic lexer functionality."""

    def test_empty_source(self):
        """Empty source produces only EOF."""
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].value == EOF_VALUE

    def test_whitespace_only(self):
        """Spaces, tabs, newlines and carriage returns are discarded."""
        tokens = tokenize("  \t\n\r\n  ")
        assert [t.type for t in tokens] == [TokenType.EOF]

    def test_simple_let_statement(self):
        """Basic let statement tokenization."""
        tokens = tokenize("let x = 42;")
        types = [t.type for t in tokens]
        assert types == [
            TokenType.LET,
            TokenType.IDENTIFIER,
            TokenType.EQUALS,
            TokenType.NUMBER,
            TokenType.SEMICOLON,
            TokenType.EOF,
        ]

    def test_exactly_one_eof(self):
        """The stream ends with a single EOF token."""
        tokens = tokenize("a b c")
        assert [t.type for t in tokens].count(TokenType.EOF) == 1
        assert tokens[-1].type == TokenType.EOF

    def test_position_tracking(self):
        """Token positions are tracked correctly."""
        tokens = tokenize("let x = 5;")
        # 'let' starts at column 1
        assert tokens[0].span.start.line == 1
        assert tokens[0].span.start.column == 1
        # 'x' starts at column 5
        assert tokens[1].span.start.column == 5

    def test_multiline_position_tracking(self):
        """Position tracking across multiple lines."""
        tokens = tokenize("let x = 5\nlet y = 10")
        let_tokens = [t for t in tokens if t.type == TokenType.LET]
        assert let_tokens[0].span.start.line == 1
        assert let_tokens[1].span.start.line == 2
        assert let_tokens[1].span.start.column == 1

    def test_filename_in_location(self):
        """Filename is carried into token locations."""
        tokens = tokenize("x", filename="main.sp")
        assert str(tokens[0].span.start) == "main.sp:1:1"


class TestNumbers:
    """Test numeric literal scanning."""

    def test_integer(self):
        tokens = tokenize("12345")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == "12345"

    def test_no_decimal_point(self):
        """A '.' after digits is a separate DOT token."""
        tokens = tokenize("3.14")
        assert [(t.type, t.value) for t in tokens[:-1]] == [
            (TokenType.NUMBER, "3"),
            (TokenType.DOT, "."),
            (TokenType.NUMBER, "14"),
        ]

    def test_no_sign(self):
        """A leading '-' is an operator, not part of the number."""
        tokens = tokenize("-7")
        assert tokens[0].type == TokenType.BINARY_OPERATOR
        assert tokens[0].value == "-"
        assert tokens[1].type == TokenType.NUMBER

    def test_digits_then_letters(self):
        """Digits and letters split into separate tokens."""
        tokens = tokenize("12abc")
        assert [(t.type, t.value) for t in tokens[:-1]] == [
            (TokenType.NUMBER, "12"),
            (TokenType.IDENTIFIER, "abc"),
        ]


class TestIdentifiersAndKeywords:
    """Test identifier and keyword recognition."""

    @pytest.mark.parametrize("source,expected", [
        ("let", TokenType.LET),
        ("const", TokenType.CONST),
        ("fn", TokenType.FN),
    ])
    def test_keywords(self, source, expected):
        tokens = tokenize(source)
        assert tokens[0].type == expected
        assert tokens[0].value == source

    def test_keywords_are_case_sensitive(self):
        """'Let' is an identifier, not a keyword."""
        tokens = tokenize("Let")
        assert tokens[0].type == TokenType.IDENTIFIER

    def test_keyword_prefix_is_identifier(self):
        """Maximal munch: 'letter' is one identifier."""
        tokens = tokenize("letter")
        assert len(tokens) == 2
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "letter"

    def test_non_ascii_letters(self):
        """Alphabetic characters beyond ASCII form identifiers."""
        tokens = tokenize("größe")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "größe"

    def test_is_keyword(self):
        assert is_keyword("fn")
        assert not is_keyword("print")


class TestOperatorsAndDelimiters:
    """Test single-character tokens."""

    @pytest.mark.parametrize("op", ["+", "-", "*", "/", "%"])
    def test_binary_operators(self, op):
        tokens = tokenize(op)
        assert tokens[0].type == TokenType.BINARY_OPERATOR
        assert tokens[0].value == op

    def test_delimiters(self):
        tokens = tokenize("(){}[];:,.=")
        assert [t.type for t in tokens[:-1]] == [
            TokenType.OPEN_PAREN,
            TokenType.CLOSE_PAREN,
            TokenType.OPEN_BRACE,
            TokenType.CLOSE_BRACE,
            TokenType.OPEN_BRACKET,
            TokenType.CLOSE_BRACKET,
            TokenType.SEMICOLON,
            TokenType.COLON,
            TokenType.COMMA,
            TokenType.DOT,
            TokenType.EQUALS,
        ]

    def test_describe(self):
        """Token types have readable names for diagnostics."""
        assert describe(TokenType.OPEN_PAREN) == "'('"
        assert describe(TokenType.FN) == "'fn'"
        assert describe(TokenType.EOF) == "end of file"
        assert describe(TokenType.NUMBER) == "number"


class TestReconstruction:
    """Token values reproduce the source minus whitespace."""

    @pytest.mark.parametrize("source", [
        "let x = 2 + 3 * 4",
        "fn add(a, b) {\n  a + b\n}\nadd(1, 2);",
        "const point = { x: 1, y }\npoint.x + point[0]",
        "  ( 10 %3 ) / 7 - q ",
    ])
    def test_concatenation(self, source):
        tokens = tokenize(source)
        joined = "".join(t.value for t in tokens if t.type != TokenType.EOF)
        stripped = "".join(ch for ch in source if ch not in " \t\n\r")
        assert joined == stripped


class TestLexerErrors:
    """Test lexer error handling."""

    def test_unknown_character(self):
        """An unrecognized character raises LexerError."""
        with pytest.raises(LexerError) as exc_info:
            tokenize("let x = 5 @ 3")
        diag = exc_info.value.diagnostic
        assert diag.code == "E001"
        assert diag.kind == "LexError"
        assert "'@'" in diag.message
        assert diag.span.start.column == 11

    def test_error_carries_source_line(self):
        """The offending line is attached for caret display."""
        with pytest.raises(LexerError) as exc_info:
            tokenize("let a = 1\nlet b = #")
        diag = exc_info.value.diagnostic
        assert diag.span.start.line == 2
        assert diag.source_line == "let b = #"
        assert "^" in diag.format()

    def test_underscore_is_rejected(self):
        """Identifiers do not include underscores."""
        with pytest.raises(LexerError):
            tokenize("foo_bar")


class TestStreaming:
    """Test the iterator interface."""

    def test_iterate(self):
        lexer = Lexer("a + b")
        types = [t.type for t in lexer]
        assert types == [
            TokenType.IDENTIFIER,
            TokenType.BINARY_OPERATOR,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    def test_iteration_stops_after_eof(self):
        """A drained lexer yields nothing more."""
        lexer = Lexer("a")
        assert len(list(lexer)) == 2
        assert list(lexer) == []
