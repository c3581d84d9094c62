"""
Abstract Syntax Tree (AST) node definitions for Sprig.

The AST represents the structure of a parsed program, rooted at a
``Program`` node. Nodes are built once by the parser and not mutated
afterwards; each node is owned by the parent that constructed it.
"""

from dataclasses import dataclass, field, fields
from typing import Optional, List, Any
from abc import ABC
from .tokens import SourceSpan


# =============================================================================
# Base Classes
# =============================================================================

@dataclass
class AstNode(ABC):
    """Base class for all AST nodes."""
    span: SourceSpan  # Source location for error reporting

    @property
    def kind(self) -> str:
        """The node kind tag."""
        return self.__class__.__name__

    def accept(self, visitor: "AstVisitor") -> Any:
        """Accept a visitor for traversal."""
        method_name = f"visit_{self.__class__.__name__}"
        method = getattr(visitor, method_name, visitor.generic_visit)
        return method(self)


class AstVisitor(ABC):
    """Base class for AST visitors."""

    def generic_visit(self, node: AstNode) -> Any:
        """Default visit method."""
        raise NotImplementedError(f"No visitor for {node.__class__.__name__}")


# =============================================================================
# Statements
# =============================================================================

@dataclass
class Statement(AstNode):
    """Base class for all statements."""
    pass


@dataclass
class Program(Statement):
    """The root of a parsed source file."""
    body: List[Statement] = field(default_factory=list)


@dataclass
class VarDeclaration(Statement):
    """A variable declaration (e.g., let x = 5, const y = 1)."""
    constant: bool
    identifier: str
    value: Optional["Expression"] = None


@dataclass
class FunctionDeclaration(Statement):
    """A function declaration.

    Syntax:
        fn add(a, b) {
            a + b
        }
    """
    name: str
    parameters: List[str]
    body: List[Statement] = field(default_factory=list)


# =============================================================================
# Expressions
# =============================================================================

@dataclass
class Expression(Statement):
    """Base class for all expressions. Expressions are valid statements."""
    pass


@dataclass
class AssignmentExpr(Expression):
    """An assignment (e.g., x = 5). Only identifiers are valid targets."""
    assignee: Expression
    value: Expression


@dataclass
class MemberExpr(Expression):
    """Member access (e.g., point.x or point[0])."""
    object: Expression
    property: Expression  # Identifier when not computed
    computed: bool = False


@dataclass
class CallExpr(Expression):
    """A function call (e.g., add(1, 2))."""
    caller: Expression
    arguments: List[Expression] = field(default_factory=list)


@dataclass
class Property(AstNode):
    """An object literal entry; ``value`` is None for shorthand ``{ x }``."""
    key: str
    value: Optional[Expression] = None


@dataclass
class ObjectLiteral(Expression):
    """An object literal (e.g., { x: 1, y })."""
    properties: List[Property] = field(default_factory=list)


@dataclass
class NumericLiteral(Expression):
    """A numeric literal."""
    value: float


@dataclass
class Identifier(Expression):
    """A variable or function name reference."""
    symbol: str


@dataclass
class BinaryExpr(Expression):
    """A binary arithmetic operation (e.g., a + b)."""
    left: Expression
    operator: str  # One of + - * / %
    right: Expression


# =============================================================================
# Printing
# =============================================================================

class AstPrinter(AstVisitor):
    """Convert an AST into plain dicts and lists, e.g. for JSON output.

    Every node becomes ``{"kind": ..., <fields>...}``. Spans are included
    only when ``include_spans`` is set.
    """

    def __init__(self, include_spans: bool = False):
        self.include_spans = include_spans

    def generic_visit(self, node: AstNode) -> Any:
        result = {"kind": node.kind}
        for f in fields(node):
            if f.name == "span":
                if self.include_spans:
                    result["span"] = str(node.span)
                continue
            result[f.name] = self._convert(getattr(node, f.name))
        return result

    def _convert(self, value: Any) -> Any:
        if isinstance(value, AstNode):
            return value.accept(self)
        if isinstance(value, list):
            return [self._convert(item) for item in value]
        return value


def dump(node: AstNode, include_spans: bool = False) -> Any:
    """Convert ``node`` to a JSON-serializable structure."""
    return node.accept(AstPrinter(include_spans))
