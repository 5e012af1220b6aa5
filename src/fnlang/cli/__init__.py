"""
fnlang Command-Line Interface
=============================

- **fnparse**: tokenize and parse fnlang source, print tokens or the AST

Each tool is a Click-based CLI application with help text and
consistent exit codes (see fnlang.cli.errors).
"""

__all__ = ["fnparse"]
