"""
fnlang Tokenizer
================

This module converts fnlang source text into a flat, ordered list of
tokens for the parser.

Blocks
------
The source is first split on Unicode White_Space into *blocks*: maximal
runs of non-whitespace characters. Each block is then scanned on its own by
repeatedly stripping the longest token that matches at its front until
the block is exhausted. Tokens therefore never contain whitespace, while
tokens that touch (``add(a,b);``) are still separated correctly by the
per-character scan.

Token Categories
----------------
- Keywords: fn, return, val, if, elsif, else
- Identifiers: an Alphabetic character or '_', followed by Alphabetic
  or Numeric characters or '_' (Unicode properties, so combining
  vowel signs in scripts such as Devanagari are part of the name)
- Constants: decimal integers (32-bit signed) and character literals
- Punctuators: { } ( ) [ ] , + - * / % = ; < >

Character Literals
------------------
| Literal | Value | Note                          |
|---------|-------|-------------------------------|
| 'a'     | 97    | any single character          |
| '\\\\'    | 92    | escaped backslash             |
| '\\''    | 39    | escaped quote                 |
| '''     | 39    | middle character taken as-is  |

Any other escape, and any literal with more than one character between
the quotes, is a lexical error.

Example Usage
-------------
>>> from fnlang.frontend.lexer import Tokenizer
>>> for token in Tokenizer("fn[1] one() { x = 1; }").tokenize():
...     print(token)
Token(KEYWORD, 'fn', 1:1)
Token(PUNCTUATOR, '[', 1:3)
Token(CONSTANT, 1, 1:4)
...
"""

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional, Union
import logging
import string

import regex

from fnlang.errors import SourceLocation
from fnlang.frontend.errors import LexicalError

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumerations
# =============================================================================

class TokenType(Enum):
    """The four lexical categories of fnlang."""

    KEYWORD = auto()
    IDENTIFIER = auto()
    CONSTANT = auto()       # Decimal and character literals
    PUNCTUATOR = auto()


class Keyword(Enum):
    """Reserved words. The value is the spelling in source."""

    FN = "fn"
    RETURN = "return"
    VAL = "val"
    IF = "if"
    ELSIF = "elsif"
    ELSE = "else"


class Punctuator(Enum):
    """Single-character punctuators. The value is the character."""

    BRACE_LEFT = "{"
    BRACE_RIGHT = "}"
    PAREN_LEFT = "("
    PAREN_RIGHT = ")"
    BRACKET_LEFT = "["
    BRACKET_RIGHT = "]"
    COMMA = ","
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    PERCENT = "%"
    EQUAL = "="
    SEMICOLON = ";"
    LESS_THAN = "<"
    GREATER = ">"


KEYWORDS: dict[str, Keyword] = {keyword.value: keyword for keyword in Keyword}

PUNCTUATORS: dict[str, Punctuator] = {punc.value: punc for punc in Punctuator}

# Largest value a constant may take (constants are 32-bit signed)
INT32_MAX = 2**31 - 1


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token with its position in the source.

    Attributes:
        type: The TokenType category
        value: Keyword, identifier name, integer value, or Punctuator
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
        block: Index of the whitespace-delimited block holding the token
        offset: Character offset of the token from the start of the source
    """
    type: TokenType
    value: Union[Keyword, str, int, Punctuator]
    line: int
    column: int
    filename: str = "<input>"
    block: int = 0
    offset: int = 0

    def __repr__(self) -> str:
        if isinstance(self.value, (Keyword, Punctuator)):
            shown = repr(self.value.value)
        elif isinstance(self.value, int):
            shown = str(self.value)
        else:
            shown = repr(self.value)
        return f"Token({self.type.name}, {shown}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column, self.offset)

    @property
    def text(self) -> str:
        """Source spelling of the token (character literals show their value)."""
        if isinstance(self.value, (Keyword, Punctuator)):
            return self.value.value
        return str(self.value)

    def describe(self) -> str:
        """Short human description used in parse error messages."""
        if self.type == TokenType.KEYWORD:
            return f"keyword '{self.text}'"
        if self.type == TokenType.IDENTIFIER:
            return f"identifier '{self.text}'"
        if self.type == TokenType.CONSTANT:
            return f"constant {self.text}"
        return f"'{self.text}'"

    def is_punctuator(self, punctuator: Punctuator) -> bool:
        return self.type == TokenType.PUNCTUATOR and self.value is punctuator

    def is_keyword(self, keyword: Keyword) -> bool:
        return self.type == TokenType.KEYWORD and self.value is keyword


# =============================================================================
# Tokenizer Implementation
# =============================================================================

class Tokenizer:
    """
    Tokenizes fnlang source code.

    Usage:
        tokens = Tokenizer(source_text, filename).tokenize()

    Tokenization is all-or-nothing: the first block that cannot be fully
    consumed raises LexicalError and no tokens are returned.

    Attributes:
        source: The source text being tokenized
        filename: Name of the source file (for error reporting)
        wrap_constants: Wrap integer constants to 32-bit two's complement
            instead of rejecting values above INT32_MAX
    """

    # Characters accepted as decimal digits (ASCII only)
    DIGITS = string.digits

    # Escapes recognized inside character literals
    CHAR_ESCAPES = {"\\": "\\", "'": "'"}

    _BLOCK_PATTERN = regex.compile(r"[^\p{White_Space}]+")
    _IDENTIFIER_START = regex.compile(r"[\p{Alphabetic}_]")
    _IDENTIFIER = regex.compile(r"[\p{Alphabetic}_][\p{Alphabetic}\p{N}_]*")

    def __init__(
        self,
        source: str,
        filename: str = "<input>",
        wrap_constants: bool = False,
    ):
        self.source = source
        self.filename = filename
        self.wrap_constants = wrap_constants

        # Offsets at which each line starts, for offset -> line:column
        self._line_starts = [0] + [
            match.end() for match in regex.finditer(r"\n", source)
        ]

    def tokenize(self) -> list[Token]:
        """
        Tokenize the whole source.

        Returns:
            The ordered list of tokens

        Raises:
            LexicalError: If any block cannot be tokenized
        """
        tokens: list[Token] = []
        block_count = 0
        for index, offset, text in self.blocks():
            self._tokenize_block(index, offset, text, tokens)
            block_count += 1

        logger.debug(
            f"{self.filename}: {len(tokens)} tokens from {block_count} blocks"
        )
        return tokens

    def blocks(self) -> Iterator[tuple[int, int, str]]:
        """
        Enumerate the whitespace-delimited blocks of the source.

        Yields:
            (block index, offset of the block in the source, block text)
        """
        for index, match in enumerate(self._BLOCK_PATTERN.finditer(self.source)):
            yield index, match.start(), match.group()

    # =========================================================================
    # Block Scanning
    # =========================================================================

    def _tokenize_block(
        self,
        index: int,
        block_start: int,
        text: str,
        tokens: list[Token],
    ) -> None:
        """Strip tokens from the front of a block until it is exhausted."""
        pos = 0
        while pos < len(text):
            token_type, value, length = self._scan_token(index, block_start, text, pos)
            tokens.append(self._make_token(token_type, value, index, block_start + pos))
            pos += length

    def _scan_token(
        self,
        index: int,
        block_start: int,
        text: str,
        pos: int,
    ) -> tuple[TokenType, Union[Keyword, str, int, Punctuator], int]:
        """
        Scan one token at text[pos].

        Returns:
            (token type, token value, number of characters consumed)
        """
        char = text[pos]

        if self._IDENTIFIER_START.match(char):
            return self._scan_identifier(text, pos)

        if char in self.DIGITS:
            return self._scan_number(index, block_start, text, pos)

        if char == "'":
            return self._scan_char(index, block_start, text, pos)

        punctuator = PUNCTUATORS.get(char)
        if punctuator is not None:
            return TokenType.PUNCTUATOR, punctuator, 1

        raise self._error(
            f"unrecognized character '{char}'",
            index, block_start, text, pos,
        )

    def _scan_identifier(
        self,
        text: str,
        pos: int,
    ) -> tuple[TokenType, Union[Keyword, str], int]:
        """Scan an identifier; exact reserved spellings become keywords."""
        end = self._IDENTIFIER.match(text, pos).end()
        name = text[pos:end]
        keyword = KEYWORDS.get(name)
        if keyword is not None:
            return TokenType.KEYWORD, keyword, end - pos
        return TokenType.IDENTIFIER, name, end - pos

    def _scan_number(
        self,
        index: int,
        block_start: int,
        text: str,
        pos: int,
    ) -> tuple[TokenType, int, int]:
        """Scan a decimal constant by repeated value * 10 + digit."""
        value = 0
        end = pos
        while end < len(text) and text[end] in self.DIGITS:
            value = value * 10 + (ord(text[end]) - ord("0"))
            end += 1

        if value > INT32_MAX:
            if not self.wrap_constants:
                raise self._error(
                    f"integer constant {text[pos:end]} out of 32-bit range",
                    index, block_start, text, pos,
                    hint=f"constants must not exceed {INT32_MAX}",
                )
            wrapped = (value + 2**31) % 2**32 - 2**31
            logger.warning(
                f"{self._location(block_start + pos)}: "
                f"constant {value} wrapped to {wrapped}"
            )
            value = wrapped

        return TokenType.CONSTANT, value, end - pos

    def _scan_char(
        self,
        index: int,
        block_start: int,
        text: str,
        pos: int,
    ) -> tuple[TokenType, int, int]:
        """
        Scan a character literal: 'x', '\\\\' or '\\''.

        The value is the ordinal of the character.
        """
        if pos + 1 >= len(text):
            raise self._error(
                "unterminated character literal",
                index, block_start, text, pos,
                hint="add closing ' to complete the character literal",
            )

        if text[pos + 1] == "\\":
            escaped = text[pos + 2] if pos + 2 < len(text) else ""
            if escaped not in self.CHAR_ESCAPES:
                raise self._error(
                    "invalid escape in character literal",
                    index, block_start, text, pos,
                    hint="only '\\\\' and '\\'' are recognized escapes",
                )
            if pos + 3 >= len(text) or text[pos + 3] != "'":
                raise self._error(
                    "character literal too long or missing closing quote",
                    index, block_start, text, pos,
                )
            return TokenType.CONSTANT, ord(self.CHAR_ESCAPES[escaped]), 4

        if pos + 2 >= len(text) or text[pos + 2] != "'":
            raise self._error(
                "character literal too long or missing closing quote",
                index, block_start, text, pos,
                hint="character literals can only contain a single character",
            )
        return TokenType.CONSTANT, ord(text[pos + 1]), 3

    # =========================================================================
    # Token Creation and Positions
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        value: Union[Keyword, str, int, Punctuator],
        block: int,
        offset: int,
    ) -> Token:
        line, column = self._line_column(offset)
        return Token(
            type=token_type,
            value=value,
            line=line,
            column=column,
            filename=self.filename,
            block=block,
            offset=offset,
        )

    def _line_column(self, offset: int) -> tuple[int, int]:
        """Convert a source offset to 1-indexed (line, column)."""
        line_index = bisect_right(self._line_starts, offset) - 1
        return line_index + 1, offset - self._line_starts[line_index] + 1

    def _location(self, offset: int) -> SourceLocation:
        line, column = self._line_column(offset)
        return SourceLocation(self.filename, line, column, offset)

    def _error(
        self,
        message: str,
        index: int,
        block_start: int,
        text: str,
        pos: int,
        hint: Optional[str] = None,
    ) -> LexicalError:
        """Create a LexicalError pointing at text[pos] of block `index`."""
        logger.debug(f"failed to tokenize block {index}: {text!r}")
        return LexicalError(
            message,
            block_index=index,
            block_text=text,
            location=self._location(block_start + pos),
            block_offset=pos,
            hint=hint,
        )


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(
    source: str,
    filename: str = "<input>",
    wrap_constants: bool = False,
) -> list[Token]:
    """
    Tokenize fnlang source text.

    Raises:
        LexicalError: If any block cannot be tokenized
    """
    return Tokenizer(source, filename, wrap_constants).tokenize()
