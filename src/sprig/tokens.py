"""
Token types for the Sprig lexer.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E3xx: Runtime errors
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


class TokenType(Enum):
    """All token types recognized by the lexer."""

    # --- Literals ---
    NUMBER = auto()             # 42

    # --- Identifiers ---
    IDENTIFIER = auto()         # user-defined names

    # --- Keywords ---
    LET = auto()                # let
    CONST = auto()              # const
    FN = auto()                 # fn

    # --- Operators ---
    BINARY_OPERATOR = auto()    # + - * / %
    EQUALS = auto()             # =

    # --- Delimiters ---
    COMMA = auto()              # ,
    DOT = auto()                # .
    COLON = auto()              # :
    SEMICOLON = auto()          # ;
    OPEN_PAREN = auto()         # (
    CLOSE_PAREN = auto()        # )
    OPEN_BRACE = auto()         # {
    CLOSE_BRACE = auto()        # }
    OPEN_BRACKET = auto()       # [
    CLOSE_BRACKET = auto()      # ]

    # --- Special ---
    EOF = auto()                # end of file


@dataclass(frozen=True)
class SourceLocation:
    """Represents a position in source code."""
    line: int           # 1-indexed line number
    column: int         # 1-indexed column number
    offset: int         # 0-indexed character offset from start
    filename: Optional[str] = None

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a range in source code."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: str              # The original source text
    span: SourceSpan        # Location in source

    def __str__(self) -> str:
        if self.type in (TokenType.NUMBER, TokenType.IDENTIFIER,
                         TokenType.BINARY_OPERATOR):
            return f"{self.type.name}({self.value!r})"
        return self.type.name


EOF_VALUE = "EndOfFile"

# Keyword mapping - maps reserved word to token type
KEYWORDS: dict[str, TokenType] = {
    "let": TokenType.LET,
    "const": TokenType.CONST,
    "fn": TokenType.FN,
}

BINARY_OPERATORS: frozenset[str] = frozenset("+-*/%")

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    '(': TokenType.OPEN_PAREN,
    ')': TokenType.CLOSE_PAREN,
    '{': TokenType.OPEN_BRACE,
    '}': TokenType.CLOSE_BRACE,
    '[': TokenType.OPEN_BRACKET,
    ']': TokenType.CLOSE_BRACKET,
    ';': TokenType.SEMICOLON,
    ':': TokenType.COLON,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    '=': TokenType.EQUALS,
}


def is_keyword(text: str) -> bool:
    """Check if text is a reserved word."""
    return text in KEYWORDS


def describe(token_type: TokenType) -> str:
    """Human-readable name of a token type for error messages."""
    for char, kind in SINGLE_CHAR_TOKENS.items():
        if kind == token_type:
            return f"'{char}'"
    for word, kind in KEYWORDS.items():
        if kind == token_type:
            return f"'{word}'"
    if token_type == TokenType.EOF:
        return "end of file"
    return token_type.name.lower().replace("_", " ")
