"""
fnlang Abstract Syntax Tree (AST) Definitions
=============================================

This module defines the AST produced by the parser. The tree is a
uniform shape: interior Nodes tagged with an Operator and holding an
ordered list of children, and Leaf values (identifiers and constants).

Node Shapes Produced by the Parser
----------------------------------
Node(DECLARE)                      root, one child per function
└── Node(FUNCTION_DECLARE{name, args, retnum})
    └── Node(STATEMENT)            statement block, source order
        ├── Node(SUBSTITUTE)       [Identifier target, expression]
        └── Node(CALL{name})       one child per argument expression

Expressions are a single Constant, a single Identifier, or a CALL node.

Operator Vocabulary
-------------------
ADD, SUB, MULTIPLY, DIVISION, MODULO, IF, DO and EXPRESSION are part of
the vocabulary consumed by later stages but the current grammar never
produces them: there is no operator expression or control-flow syntax.

Design Notes
------------
- All nodes are dataclasses
- Each node stores its source location; locations are excluded from
  equality so trees can be compared structurally
- Each node exclusively owns its children; the tree is acyclic
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional, Union

from fnlang.errors import SourceLocation


# =============================================================================
# Operators
# =============================================================================

class OperatorKind(Enum):
    """Tag identifying what kind of construct a Node represents."""

    ADD = auto()
    SUB = auto()
    MULTIPLY = auto()
    DIVISION = auto()
    MODULO = auto()
    SUBSTITUTE = auto()         # Assignment: target = expression
    IF = auto()
    CALL = auto()               # Carries the callee name
    DO = auto()
    EXPRESSION = auto()
    STATEMENT = auto()          # Statement block
    DECLARE = auto()            # Top-level marker
    FUNCTION_DECLARE = auto()   # Carries name, parameter names, retnum


@dataclass(frozen=True)
class Operator:
    """
    An operator tag plus the payload some tags carry.

    Only CALL uses `name`; only FUNCTION_DECLARE uses `name`, `args` and
    `retnum`. Build instances with the class methods rather than directly.

    Attributes:
        kind: The OperatorKind
        name: Callee name (CALL) or function name (FUNCTION_DECLARE)
        args: Parameter names in declaration order, repeats allowed
        retnum: Declared return-value count (not validated here)
    """
    kind: OperatorKind
    name: Optional[str] = None
    args: tuple[str, ...] = ()
    retnum: Optional[int] = None

    @classmethod
    def of(cls, kind: OperatorKind) -> "Operator":
        """Operator for a tag without payload."""
        if kind in (OperatorKind.CALL, OperatorKind.FUNCTION_DECLARE):
            raise ValueError(f"{kind.name} requires a payload")
        return cls(kind)

    @classmethod
    def call(cls, name: str) -> "Operator":
        return cls(OperatorKind.CALL, name=name)

    @classmethod
    def function_declare(cls, name: str, args, retnum: int) -> "Operator":
        return cls(OperatorKind.FUNCTION_DECLARE, name=name, args=tuple(args), retnum=retnum)

    def __str__(self) -> str:
        if self.kind == OperatorKind.CALL:
            return f"Call {self.name}"
        if self.kind == OperatorKind.FUNCTION_DECLARE:
            return f"FunctionDeclare {self.name}({', '.join(self.args)}) -> {self.retnum}"
        return self.kind.name.title().replace("_", "")


# =============================================================================
# AST Node Classes
# =============================================================================

@dataclass
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears
    """
    location: SourceLocation = field(compare=False)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}@{self.location.line}:{self.location.column}"


@dataclass
class Node(ASTNode):
    """
    Interior node: an operator and its ordered children.

    Attributes:
        operator: The Operator tag (with payload where applicable)
        children: Child nodes, in source order
    """
    operator: Optional[Operator] = None
    children: list["AST"] = field(default_factory=list)

    @property
    def kind(self) -> OperatorKind:
        return self.operator.kind


@dataclass
class Identifier(ASTNode):
    """Leaf: a reference to a name."""
    name: str = ""


@dataclass
class Constant(ASTNode):
    """Leaf: an integer constant (decimal or character literal)."""
    value: int = 0


Leaf = Union[Identifier, Constant]
AST = Union[Node, Identifier, Constant]


# =============================================================================
# Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_Node, visit_Identifier or visit_Constant.

    Usage:
        class CallCounter(ASTVisitor):
            def __init__(self):
                self.calls = 0

            def visit_Node(self, node):
                if node.kind == OperatorKind.CALL:
                    self.calls += 1
                self.generic_visit(node)
    """

    def visit(self, node: ASTNode) -> Any:
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all children of a Node; leaves have none."""
        if isinstance(node, Node):
            for child in node.children:
                self.visit(child)


class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(ast))
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def visit_Node(self, node: Node):
        self._emit(str(node.operator))
        self.indent_level += 1
        for child in node.children:
            self.visit(child)
        self.indent_level -= 1

    def visit_Identifier(self, node: Identifier):
        self._emit(f"Identifier {node.name}")

    def visit_Constant(self, node: Constant):
        self._emit(f"Constant {node.value}")


# =============================================================================
# Serialisation
# =============================================================================

def to_dict(node: ASTNode) -> dict[str, Any]:
    """
    Convert an AST to plain dicts and lists (JSON-ready).

    Nodes become {"operator": ..., "children": [...]} with the operator
    payload fields included where present; leaves become
    {"identifier": name} or {"constant": value}.
    """
    if isinstance(node, Identifier):
        return {"identifier": node.name}
    if isinstance(node, Constant):
        return {"constant": node.value}

    operator: dict[str, Any] = {"kind": node.operator.kind.name}
    if node.operator.name is not None:
        operator["name"] = node.operator.name
    if node.operator.kind == OperatorKind.FUNCTION_DECLARE:
        operator["args"] = list(node.operator.args)
        operator["retnum"] = node.operator.retnum
    return {
        "operator": operator,
        "children": [to_dict(child) for child in node.children],
    }
