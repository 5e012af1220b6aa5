"""
fnlang Front End
================

Tokenizer and recursive descent parser for fnlang, a small procedural
language of function declarations, assignments and calls.

Pipeline
--------
    Source → Tokenizer → Parser → AST

The resulting AST is consumed by later stages (interpretation or code
generation), which live outside this package.

Usage
-----
>>> from fnlang.frontend import parse_source
>>> ast = parse_source("fn[0] main() { print(42); }")
>>> ast.children[0].operator.name
'main'
"""

from fnlang.frontend.errors import (
    FrontendError,
    LexicalError,
    ParseError,
    UnexpectedTokenError,
    UnexpectedEndOfInputError,
)
from fnlang.frontend.lexer import (
    Keyword,
    Punctuator,
    Token,
    TokenType,
    Tokenizer,
    tokenize,
)
from fnlang.frontend.ast import (
    AST,
    ASTNode,
    ASTPrinter,
    ASTVisitor,
    Constant,
    Identifier,
    Leaf,
    Node,
    Operator,
    OperatorKind,
    to_dict,
)
from fnlang.frontend.parser import Parser, parse, parse_source, try_parse
from fnlang.frontend.diagnostics import DiagnosticReporter, render_diagnostic
from fnlang.frontend.pipeline import Frontend, FrontendOptions, FrontendResult

__all__ = [
    # Errors
    "FrontendError",
    "LexicalError",
    "ParseError",
    "UnexpectedTokenError",
    "UnexpectedEndOfInputError",
    # Tokenizer
    "Keyword",
    "Punctuator",
    "Token",
    "TokenType",
    "Tokenizer",
    "tokenize",
    # AST
    "AST",
    "ASTNode",
    "ASTPrinter",
    "ASTVisitor",
    "Constant",
    "Identifier",
    "Leaf",
    "Node",
    "Operator",
    "OperatorKind",
    "to_dict",
    # Parser
    "Parser",
    "parse",
    "parse_source",
    "try_parse",
    # Diagnostics
    "DiagnosticReporter",
    "render_diagnostic",
    # Pipeline
    "Frontend",
    "FrontendOptions",
    "FrontendResult",
]
