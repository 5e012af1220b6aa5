"""
fnlang Error Hierarchy
======================

This module defines the root of the exception hierarchy for fnlang.
All exceptions inherit from FnLangError, allowing callers to catch every
fnlang error with a single except clause if desired.

Exception Hierarchy
-------------------
FnLangError (base)
└── FrontendError (tokenizer and parser, see fnlang.frontend.errors)
    ├── LexicalError - a whitespace block that cannot be tokenized
    └── ParseError - a grammar rule that cannot be satisfied
        ├── UnexpectedTokenError - wrong token at a position
        └── UnexpectedEndOfInputError - token stream ran out

Every front-end error captures a SourceLocation (filename, line, column,
character offset) so diagnostics can point at the exact place in the
source text.
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class FnLangError(Exception):
    """
    Base exception for all fnlang errors.

        try:
            ast = parse_source(text)
        except FnLangError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A position in source text.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        offset: Character offset from the start of the source (0-indexed)
    """
    filename: str
    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"
