"""
fnlang - Front End for a Small Procedural Language
==================================================

fnlang turns source text of a small procedural language into an
abstract syntax tree for later interpretation or code generation.

A program is a sequence of function declarations:

    fn[1] add(a, b) {
        c = add(a, b);
        print(c);
    }

Main Components
---------------
- **frontend.lexer**: tokenizer (whitespace blocks → tokens)
- **frontend.parser**: recursive descent parser (tokens → AST)
- **frontend.ast**: AST node types, visitor and printer
- **frontend.diagnostics**: human-readable error rendering
- **cli**: the `fnparse` command

Quick Start
-----------
    >>> from fnlang import parse_source, ASTPrinter
    >>> print(ASTPrinter().print(parse_source("fn[0] main() { }")))
    Declare
      FunctionDeclare main() -> 0
        Statement

Or use the command-line tool:
    $ fnparse prog.fn
"""

__version__ = "0.1.0"

from fnlang.errors import FnLangError, SourceLocation
from fnlang.frontend import (
    ASTPrinter,
    Frontend,
    FrontendError,
    FrontendOptions,
    LexicalError,
    Node,
    ParseError,
    parse,
    parse_source,
    render_diagnostic,
    tokenize,
)

__all__ = [
    "__version__",
    "FnLangError",
    "SourceLocation",
    "ASTPrinter",
    "Frontend",
    "FrontendError",
    "FrontendOptions",
    "LexicalError",
    "Node",
    "ParseError",
    "parse",
    "parse_source",
    "render_diagnostic",
    "tokenize",
]
