"""
Diagnostic Rendering
====================

Turns structured front-end errors into text for people. The tokenizer
and parser never print; they raise FrontendError subclasses, and callers
that want readable output hand those errors, together with the source
text, to this module.

Output format:

    add.fn:3:9: error: unexpected identifier 'b' in statement, expected '=' or '('
        c b;
          ^
    note: 1 declaration parsed before this error
"""

from typing import Optional

from fnlang.frontend.errors import (
    FrontendError,
    ParseError,
    UnexpectedTokenError,
)
from fnlang.frontend.lexer import TokenType


def render_diagnostic(error: FrontendError, source: Optional[str] = None) -> str:
    """
    Render a front-end error with source context.

    Args:
        error: The error to render
        source: The full source text; when given, the offending line is
            shown with a caret under the error column

    Returns:
        Multi-line diagnostic text
    """
    parts = [str(error)]

    location = error.location
    source_line = _source_line(source, location.line) if location else None
    if source_line is not None and location.column > 0:
        parts.append(f"    {source_line}")
        padding = " " * (4 + location.column - 1)
        parts.append(f"{padding}{'^' * _caret_width(error)}")

    if error.hint:
        parts.append(f"hint: {error.hint}")

    if isinstance(error, ParseError) and error.declarations_parsed:
        word = "declaration" if error.declarations_parsed == 1 else "declarations"
        parts.append(f"note: {error.declarations_parsed} {word} parsed before this error")

    return "\n".join(parts)


def _source_line(source: Optional[str], line: int) -> Optional[str]:
    if source is None:
        return None
    # Lines end at "\n" only, as in the tokenizer
    lines = source.split("\n")
    if 0 < line <= len(lines):
        return lines[line - 1].rstrip("\r")
    return None


def _caret_width(error: FrontendError) -> int:
    """Underline the whole offending token where its spelling is known."""
    if isinstance(error, UnexpectedTokenError) and error.found.type != TokenType.CONSTANT:
        return max(1, len(error.found.text))
    return 1


class DiagnosticReporter:
    """
    Collects rendered diagnostics and produces a summary report.

    Parsing stops at the first error, so a single run yields at most one
    error; the reporter is shared across files by the CLI.

    Example:
        reporter = DiagnosticReporter()
        try:
            parse_source(text, "prog.fn")
        except FrontendError as e:
            reporter.add(e, text)
        if reporter.has_errors():
            print(reporter.report())
    """

    def __init__(self):
        self.diagnostics: list[str] = []
        self.errors: list[FrontendError] = []

    def add(self, error: FrontendError, source: Optional[str] = None) -> None:
        self.errors.append(error)
        self.diagnostics.append(render_diagnostic(error, source))

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def error_count(self) -> int:
        return len(self.errors)

    def report(self) -> str:
        """Format all diagnostics followed by an error count."""
        lines = []
        for diagnostic in self.diagnostics:
            lines.append(diagnostic)
            lines.append("")

        word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {word}")
        return "\n".join(lines)

    def clear(self) -> None:
        self.diagnostics.clear()
        self.errors.clear()
