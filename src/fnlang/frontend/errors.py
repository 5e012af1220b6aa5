"""
Front-End Error Hierarchy
=========================

Exceptions raised by the tokenizer and the parser. Each one is a
structured value: a kind, a SourceLocation, and the details specific to
the failure (the offending block for lexical errors, the expected token
set and the token actually found for parse errors).

Exception Hierarchy
-------------------
FrontendError (base for all front-end errors)
├── LexicalError - unrecognized character or malformed literal
└── ParseError - grammar violation
    ├── UnexpectedTokenError - expected one of a set, found another token
    └── UnexpectedEndOfInputError - needed another token, stream exhausted

There is no error recovery: the first error aborts tokenization or
parsing and is propagated unchanged to the caller. Rendering the error
for a human (source line, caret, hint) is done by
fnlang.frontend.diagnostics, not here.
"""

from typing import Optional, Sequence, TYPE_CHECKING

from fnlang.errors import FnLangError, SourceLocation

if TYPE_CHECKING:
    from fnlang.frontend.lexer import Token


# =============================================================================
# Base Front-End Exception
# =============================================================================

class FrontendError(FnLangError):
    """
    Base exception for all tokenizer and parser errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
    """

    kind = "frontend"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Single-line form: 'filename:line:column: error: message'."""
        if self.location:
            return f"{self.location}: error: {self.message}"
        return f"error: {self.message}"


# =============================================================================
# Lexical Errors
# =============================================================================

class LexicalError(FrontendError):
    """
    A whitespace-delimited block could not be fully tokenized.

    Raised for an unrecognized character, a malformed character literal,
    or an integer constant that does not fit in 32 bits.

    Attributes:
        block_index: 0-based index of the failing block
        block_text: The literal text of the failing block
        block_offset: Offset of the offending character inside the block
    """

    kind = "lexical"

    def __init__(
        self,
        message: str,
        block_index: int,
        block_text: str,
        location: Optional[SourceLocation] = None,
        block_offset: int = 0,
        hint: Optional[str] = None,
    ):
        self.block_index = block_index
        self.block_text = block_text
        self.block_offset = block_offset
        super().__init__(
            f"{message} in block {block_index} '{block_text}'",
            location=location,
            hint=hint,
        )


# =============================================================================
# Parse Errors
# =============================================================================

class ParseError(FrontendError):
    """
    A grammar rule could not be satisfied.

    Attributes:
        rule: Name of the grammar rule that failed (e.g. "statement")
        expected: Descriptions of the tokens that would have been accepted
        declarations_parsed: Number of function declarations completed
            before the failure (set by Parser.parse)
    """

    kind = "parse"

    def __init__(
        self,
        message: str,
        rule: str,
        expected: Sequence[str] = (),
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.rule = rule
        self.expected = tuple(expected)
        self.declarations_parsed: Optional[int] = None
        super().__init__(message, location=location, hint=hint)


class UnexpectedTokenError(ParseError):
    """
    The parser found a token outside the expected set.

    Attributes:
        found: The offending Token
    """

    kind = "unexpected-token"

    def __init__(
        self,
        found: "Token",
        rule: str,
        expected: Sequence[str],
        location: Optional[SourceLocation] = None,
    ):
        self.found = found
        super().__init__(
            f"unexpected {found.describe()} in {rule}, "
            f"expected {_describe_expected(expected)}",
            rule=rule,
            expected=expected,
            location=location or found.location,
        )


class UnexpectedEndOfInputError(ParseError):
    """
    The parser needed another token but the token stream was exhausted.

    The location is that of the last token (or the start of the source if
    there were no tokens at all).
    """

    kind = "unexpected-eof"

    def __init__(
        self,
        rule: str,
        expected: Sequence[str],
        location: Optional[SourceLocation] = None,
    ):
        super().__init__(
            f"unexpected end of input in {rule}, "
            f"expected {_describe_expected(expected)}",
            rule=rule,
            expected=expected,
            location=location,
        )


def _describe_expected(expected: Sequence[str]) -> str:
    """Join expected token descriptions: "a", "a or b", "a, b or c"."""
    items = list(expected)
    if not items:
        return "nothing"
    if len(items) == 1:
        return items[0]
    return ", ".join(items[:-1]) + f" or {items[-1]}"
