"""
Lexer for Sprig.

Converts source text into a stream of tokens for the parser in a single
left-to-right scan. Supports:
- Integer literals (ASCII digits only)
- Identifiers and the keywords let, const, fn
- Arithmetic operators, '=' and the delimiters ( ) { } [ ] ; : , .
"""

from typing import List, Optional, Iterator
from .tokens import (
    Token, TokenType, SourceLocation, SourceSpan, KEYWORDS,
    BINARY_OPERATORS, SINGLE_CHAR_TOKENS, EOF_VALUE, is_keyword,
)
from .errors import error_unexpected_character


WHITESPACE = ' \t\n\r'


def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


def is_alpha(ch: str) -> bool:
    return ch.isalpha()


class Lexer:
    """
    Tokenizer for Sprig.

    Usage:
        lexer = Lexer(source_code)
        tokens = lexer.tokenize()

    Or for streaming:
        lexer = Lexer(source_code)
        for token in lexer:
            process(token)
    """

    def __init__(self, source: str, filename: Optional[str] = None):
        self.source = source
        self.filename = filename
        self.pos = 0            # Current position in source
        self.line = 1           # Current line (1-indexed)
        self.column = 1         # Current column (1-indexed)
        self._lines: Optional[List[str]] = None  # Cached line list
        self._done = False

    @property
    def lines(self) -> List[str]:
        """Lazy-load line list for error reporting."""
        if self._lines is None:
            self._lines = self.source.splitlines()
        return self._lines

    def get_source_line(self, line_num: int) -> Optional[str]:
        """Get a specific line of source (1-indexed)."""
        if 1 <= line_num <= len(self.lines):
            return self.lines[line_num - 1]
        return None

    def _location(self) -> SourceLocation:
        """Get current source location."""
        return SourceLocation(self.line, self.column, self.pos, self.filename)

    def _span(self, start: SourceLocation) -> SourceSpan:
        """Create a span from start to current position."""
        return SourceSpan(start, self._location())

    def _peek(self) -> str:
        """Look at the current character without consuming it."""
        if self.pos >= len(self.source):
            return '\0'
        return self.source[self.pos]

    def _advance(self) -> str:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return '\0'
        ch = self.source[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _skip_whitespace(self) -> None:
        while not self._is_at_end() and self._peek() in WHITESPACE:
            self._advance()

    def _make_token(self, token_type: TokenType, start: SourceLocation,
                    value: Optional[str] = None) -> Token:
        """Create a token spanning from start to the current position."""
        if value is None:
            value = self.source[start.offset:self.pos]
        return Token(token_type, value, self._span(start))

    def _scan_number(self) -> Token:
        """Scan a maximal run of digits."""
        start = self._location()
        while is_digit(self._peek()):
            self._advance()
        return self._make_token(TokenType.NUMBER, start)

    def _scan_identifier_or_keyword(self) -> Token:
        """Scan a maximal run of letters."""
        start = self._location()
        while not self._is_at_end() and is_alpha(self._peek()):
            self._advance()

        lexeme = self.source[start.offset:self.pos]
        token_type = KEYWORDS[lexeme] if is_keyword(lexeme) else TokenType.IDENTIFIER
        return self._make_token(token_type, start, lexeme)

    def _scan_token(self) -> Token:
        """Scan the next token."""
        self._skip_whitespace()

        if self._is_at_end():
            return self._make_token(TokenType.EOF, self._location(), EOF_VALUE)

        start = self._location()
        ch = self._peek()

        if is_digit(ch):
            return self._scan_number()

        if is_alpha(ch):
            return self._scan_identifier_or_keyword()

        if ch in BINARY_OPERATORS:
            self._advance()
            return self._make_token(TokenType.BINARY_OPERATOR, start)

        if ch in SINGLE_CHAR_TOKENS:
            self._advance()
            return self._make_token(SINGLE_CHAR_TOKENS[ch], start)

        # Unknown character
        self._advance()
        raise error_unexpected_character(
            ch, self._span(start), self.get_source_line(start.line)
        )

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source, returning a list of tokens."""
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        """Iterate over tokens, ending with exactly one EOF token."""
        while not self._done:
            token = self._scan_token()
            if token.type == TokenType.EOF:
                self._done = True
            yield token


def tokenize(source: str, filename: Optional[str] = None) -> List[Token]:
    """
    Convenience function to tokenize source code.

    Args:
        source: The source code to tokenize
        filename: Optional filename for error messages

    Returns:
        List of tokens, terminated by a single EOF token

    Raises:
        LexerError: If an unrecognized character is found
    """
    lexer = Lexer(source, filename)
    return lexer.tokenize()
