"""
fnlang Front-End Pipeline
=========================

This module provides the main front-end interface. It runs the two
stages in order and collects their outputs:

    Source → Tokenizer → Parser → AST

Usage
-----
Command line:
    $ fnparse prog.fn

Programmatic:
    >>> from fnlang.frontend import Frontend, FrontendOptions
    >>> result = Frontend(FrontendOptions(filename="prog.fn")).run(source)
    >>> result.ast
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import logging

from fnlang.frontend.ast import Node
from fnlang.frontend.errors import FrontendError
from fnlang.frontend.lexer import Token, Tokenizer
from fnlang.frontend.parser import Parser

logger = logging.getLogger(__name__)


@dataclass
class FrontendOptions:
    """
    Front-end configuration options.

    Attributes:
        filename: Name used in locations and diagnostics
        wrap_constants: Wrap integer constants above 2147483647 to 32-bit
            two's complement instead of reporting a lexical error
        tokens_only: Stop after tokenization (no AST is built)
    """
    filename: str = "<input>"
    wrap_constants: bool = False
    tokens_only: bool = False


@dataclass
class FrontendResult:
    """
    Result of a front-end run.

    Attributes:
        filename: Source filename
        success: True if every requested stage succeeded
        tokens: Tokens produced by the tokenizer
        ast: Root Node(DECLARE), unless tokens_only or a stage failed
        error: The error that stopped the run, if any
    """
    filename: str = ""
    success: bool = False
    tokens: list[Token] = field(default_factory=list)
    ast: Optional[Node] = None
    error: Optional[FrontendError] = None

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    @property
    def declaration_count(self) -> int:
        return len(self.ast.children) if self.ast is not None else 0


class Frontend:
    """
    Runs tokenization and parsing for one source text.

    Errors do not escape `run`: they are stored on the result, so callers
    can report them (see fnlang.frontend.diagnostics) and inspect what the
    earlier stage produced.

    Example:
        frontend = Frontend()
        result = frontend.run_file("prog.fn")
        if not result.success:
            print(render_diagnostic(result.error, source))
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        self.options = options or FrontendOptions()

    def run(self, source: str, filename: Optional[str] = None) -> FrontendResult:
        """
        Tokenize and parse source text.

        Args:
            source: fnlang source text
            filename: Overrides options.filename for this run

        Returns:
            FrontendResult with tokens, AST and any error
        """
        filename = filename or self.options.filename
        result = FrontendResult(filename=filename)

        try:
            result.tokens = self._tokenize(source, filename)
            if not self.options.tokens_only:
                result.ast = self._parse(result.tokens, filename)
            result.success = True
        except FrontendError as e:
            logger.debug(f"{filename}: {e.kind} error: {e.message}")
            result.error = e

        return result

    def run_file(self, filepath) -> FrontendResult:
        """
        Tokenize and parse a source file.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Source file not found: {filepath}")

        source = path.read_text(encoding="utf-8")
        return self.run(source, str(filepath))

    def _tokenize(self, source: str, filename: str) -> list[Token]:
        tokenizer = Tokenizer(source, filename, self.options.wrap_constants)
        return tokenizer.tokenize()

    def _parse(self, tokens: list[Token], filename: str) -> Node:
        return Parser(tokens, filename).parse()
