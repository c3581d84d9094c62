"""
Recursive descent parser for Sprig.

Converts a token stream into an Abstract Syntax Tree (AST). Tokens are
consumed strictly left to right through a cursor; the parser never
backtracks.
"""

from contextlib import contextmanager
from typing import List, Optional
from .tokens import Token, TokenType, SourceSpan, describe
from .lexer import tokenize
from .ast import (
    Statement, Expression, Program,
    VarDeclaration, FunctionDeclaration,
    AssignmentExpr, MemberExpr, CallExpr, Property, ObjectLiteral,
    NumericLiteral, Identifier, BinaryExpr,
)
from .errors import (
    ParserError,
    error_unexpected_token,
    error_unexpected_eof,
    error_invalid_expression,
    error_nesting_too_deep,
)


DEFAULT_MAX_NESTING = 64

ADDITIVE_OPERATORS = ("+", "-")
MULTIPLICATIVE_OPERATORS = ("*", "/", "%")


class Parser:
    """
    Recursive descent parser for Sprig.

    Usage:
        parser = Parser(tokens)
        program = parser.parse_program()

    Precedence, lowest to highest:
        Lowest:  assignment (right-associative)
                 object literal
                 + -
                 * / %
                 call, member access
        Highest: identifier, number, parenthesized expression
    """

    def __init__(self, tokens: List[Token], filename: Optional[str] = None,
                 source: Optional[str] = None,
                 max_nesting: int = DEFAULT_MAX_NESTING):
        self.tokens = tokens
        self.filename = filename
        self.source = source  # Original source code for error messages
        self.max_nesting = max_nesting
        self.pos = 0
        self._depth = 0
        self._lines: Optional[List[str]] = None

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def _is_at_end(self) -> bool:
        """Check if at end of tokens."""
        return self._current().type == TokenType.EOF

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self._current().type == token_type

    def _check_operator(self, operators) -> bool:
        """Check if current token is a binary operator in ``operators``."""
        token = self._current()
        return token.type == TokenType.BINARY_OPERATOR and token.value in operators

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._current()
        if not self._is_at_end():
            self.pos += 1
        return token

    def _consume(self, token_type: TokenType, expected: str) -> Token:
        """Consume token of expected type, or raise error."""
        if self._check(token_type):
            return self._advance()
        raise self._error(expected)

    def _match(self, *token_types: TokenType) -> Optional[Token]:
        """Consume token if it matches any of the given types."""
        if self._current().type in token_types:
            return self._advance()
        return None

    def _source_line(self, line_num: int) -> Optional[str]:
        if self.source is None:
            return None
        if self._lines is None:
            self._lines = self.source.splitlines()
        if 1 <= line_num <= len(self._lines):
            return self._lines[line_num - 1]
        return None

    def _error(self, expected: str) -> ParserError:
        """Build a parser error for the current token."""
        token = self._current()
        if token.type == TokenType.EOF:
            return error_unexpected_eof(expected, token.span)
        return error_unexpected_token(
            expected, self._describe(token), token.span,
            self._source_line(token.span.start.line)
        )

    @staticmethod
    def _describe(token: Token) -> str:
        if token.type in (TokenType.NUMBER, TokenType.IDENTIFIER,
                          TokenType.BINARY_OPERATOR):
            return f"{describe(token.type)} '{token.value}'"
        return describe(token.type)

    def _span_from(self, start: Token) -> SourceSpan:
        """Create a span from start token to the last consumed token."""
        prev_pos = max(0, self.pos - 1)
        end_token = self.tokens[prev_pos]
        return SourceSpan(start.span.start, end_token.span.end)

    @contextmanager
    def _nested(self):
        """Guard against unbounded recursion on deeply nested input."""
        self._depth += 1
        try:
            if self._depth > self.max_nesting:
                raise error_nesting_too_deep(self.max_nesting, self._current().span)
            yield
        finally:
            self._depth -= 1

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def _parse_statement(self) -> Statement:
        """Parse a statement with an optional trailing ';'."""
        token = self._current()

        if token.type in (TokenType.LET, TokenType.CONST):
            stmt = self._parse_var_declaration()
        elif token.type == TokenType.FN:
            stmt = self._parse_function_declaration()
        else:
            stmt = self._parse_expression()

        self._match(TokenType.SEMICOLON)
        return stmt

    def _parse_var_declaration(self) -> VarDeclaration:
        """Parse: (let | const) name [= expr]."""
        start = self._advance()  # consume 'let' or 'const'
        constant = start.type == TokenType.CONST
        name = self._consume(
            TokenType.IDENTIFIER, f"identifier name following '{start.value}'"
        ).value

        value = None
        if self._match(TokenType.EQUALS):
            value = self._parse_expression()
        elif constant:
            token = self._current()
            raise ParserError(
                f"constant '{name}' must be initialized",
                token.span,
                self._source_line(token.span.start.line),
                hints=[f"write 'const {name} = <value>'"],
            )

        return VarDeclaration(
            span=self._span_from(start),
            constant=constant,
            identifier=name,
            value=value,
        )

    def _parse_function_declaration(self) -> FunctionDeclaration:
        """Parse: fn name(params) { body }."""
        start = self._advance()  # consume 'fn'
        name = self._consume(TokenType.IDENTIFIER, "function name following 'fn'").value
        self._consume(TokenType.OPEN_PAREN, "'(' after function name")

        parameters: List[str] = []
        if not self._check(TokenType.CLOSE_PAREN):
            parameters.append(self._consume(TokenType.IDENTIFIER, "parameter name").value)
            while self._match(TokenType.COMMA):
                parameters.append(self._consume(TokenType.IDENTIFIER, "parameter name").value)
        self._consume(TokenType.CLOSE_PAREN, "')' to close parameter list")
        self._consume(TokenType.OPEN_BRACE, "'{' to open function body")

        body: List[Statement] = []
        with self._nested():
            while not self._check(TokenType.CLOSE_BRACE) and not self._is_at_end():
                body.append(self._parse_statement())
        self._consume(TokenType.CLOSE_BRACE, "'}' to close function body")

        return FunctionDeclaration(
            span=self._span_from(start),
            name=name,
            parameters=parameters,
            body=body,
        )

    # =========================================================================
    # Expression Parsing
    # =========================================================================

    def _parse_expression(self) -> Expression:
        """Parse an expression."""
        with self._nested():
            return self._parse_assignment_expr()

    def _parse_assignment_expr(self) -> Expression:
        """Parse: target = value. Right-associative."""
        left = self._parse_object_expr()

        if self._match(TokenType.EQUALS):
            value = self._parse_assignment_expr()
            return AssignmentExpr(
                span=SourceSpan(left.span.start, value.span.end),
                assignee=left,
                value=value,
            )

        return left

    def _parse_object_expr(self) -> Expression:
        """Parse an object literal { key: value, shorthand, ... }."""
        if not self._check(TokenType.OPEN_BRACE):
            return self._parse_additive_expr()

        start = self._advance()  # consume '{'
        properties: List[Property] = []

        while not self._check(TokenType.CLOSE_BRACE) and not self._is_at_end():
            key_token = self._consume(TokenType.IDENTIFIER, "object literal key")

            # Shorthand: { key, ... } or { key }
            if self._match(TokenType.COMMA) or self._check(TokenType.CLOSE_BRACE):
                properties.append(Property(span=key_token.span, key=key_token.value))
                continue

            self._consume(TokenType.COLON, "':' after object literal key")
            value = self._parse_expression()
            properties.append(Property(
                span=SourceSpan(key_token.span.start, value.span.end),
                key=key_token.value,
                value=value,
            ))

            if not self._check(TokenType.CLOSE_BRACE):
                self._consume(TokenType.COMMA, "',' or '}' after property")

        self._consume(TokenType.CLOSE_BRACE, "'}' to close object literal")
        return ObjectLiteral(span=self._span_from(start), properties=properties)

    def _parse_additive_expr(self) -> Expression:
        """Parse left-associative + and -."""
        left = self._parse_multiplicative_expr()

        while self._check_operator(ADDITIVE_OPERATORS):
            operator = self._advance().value
            right = self._parse_multiplicative_expr()
            left = BinaryExpr(
                span=SourceSpan(left.span.start, right.span.end),
                left=left,
                operator=operator,
                right=right,
            )

        return left

    def _parse_multiplicative_expr(self) -> Expression:
        """Parse left-associative *, / and %."""
        left = self._parse_postfix_expr()

        while self._check_operator(MULTIPLICATIVE_OPERATORS):
            operator = self._advance().value
            right = self._parse_postfix_expr()
            left = BinaryExpr(
                span=SourceSpan(left.span.start, right.span.end),
                left=left,
                operator=operator,
                right=right,
            )

        return left

    def _parse_postfix_expr(self) -> Expression:
        """Parse postfix expressions (calls, member access)."""
        expr = self._parse_primary_expr()

        while True:
            if self._check(TokenType.OPEN_PAREN):
                arguments = self._parse_arguments()
                expr = CallExpr(
                    span=SourceSpan(expr.span.start, self.tokens[self.pos - 1].span.end),
                    caller=expr,
                    arguments=arguments,
                )
            elif self._match(TokenType.DOT):
                member = self._consume(TokenType.IDENTIFIER, "property name after '.'")
                expr = MemberExpr(
                    span=SourceSpan(expr.span.start, member.span.end),
                    object=expr,
                    property=Identifier(span=member.span, symbol=member.value),
                    computed=False,
                )
            elif self._match(TokenType.OPEN_BRACKET):
                key = self._parse_expression()
                close = self._consume(TokenType.CLOSE_BRACKET, "']' to close member access")
                expr = MemberExpr(
                    span=SourceSpan(expr.span.start, close.span.end),
                    object=expr,
                    property=key,
                    computed=True,
                )
            else:
                break

        return expr

    def _parse_arguments(self) -> List[Expression]:
        """Parse a parenthesized, comma-separated argument list."""
        self._consume(TokenType.OPEN_PAREN, "'('")

        arguments: List[Expression] = []
        if not self._check(TokenType.CLOSE_PAREN):
            arguments.append(self._parse_expression())
            while self._match(TokenType.COMMA):
                arguments.append(self._parse_expression())

        self._consume(TokenType.CLOSE_PAREN, "')' to close argument list")
        return arguments

    def _parse_primary_expr(self) -> Expression:
        """Parse identifiers, numbers and parenthesized expressions."""
        token = self._current()

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            return Identifier(span=token.span, symbol=token.value)

        if token.type == TokenType.NUMBER:
            self._advance()
            return NumericLiteral(span=token.span, value=float(token.value))

        if token.type == TokenType.OPEN_PAREN:
            self._advance()  # consume '('
            expr = self._parse_expression()
            self._consume(TokenType.CLOSE_PAREN, "')' to close parenthesized expression")
            return expr

        if token.type == TokenType.EOF:
            raise error_unexpected_eof("expression", token.span)
        raise error_invalid_expression(
            self._describe(token), token.span,
            self._source_line(token.span.start.line)
        )

    # =========================================================================
    # Program
    # =========================================================================

    def parse_program(self) -> Program:
        """Parse statements until EOF."""
        start = self._current()
        body: List[Statement] = []

        try:
            while not self._is_at_end():
                body.append(self._parse_statement())
        except RecursionError:
            raise error_nesting_too_deep(self.max_nesting, self._current().span) from None

        end = self._current()
        return Program(span=SourceSpan(start.span.start, end.span.end), body=body)


def parse(source: str, filename: Optional[str] = None,
          max_nesting: int = DEFAULT_MAX_NESTING) -> Program:
    """
    Tokenize and parse source code into a Program.

    Args:
        source: The source code to parse
        filename: Optional filename for error messages
        max_nesting: Maximum expression/block nesting depth

    Returns:
        Parsed Program AST

    Raises:
        LexerError: If tokenization fails
        ParserError: If parsing fails
    """
    tokens = tokenize(source, filename)
    parser = Parser(tokens, filename, source, max_nesting)
    return parser.parse_program()
