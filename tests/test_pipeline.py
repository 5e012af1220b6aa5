# =============================================================================
# test_pipeline.py - Front-End Pipeline Tests
# =============================================================================
# Tests for Frontend, FrontendOptions and FrontendResult.
# =============================================================================

import logging

import pytest

from fnlang.frontend.ast import OperatorKind
from fnlang.frontend.errors import LexicalError, UnexpectedTokenError
from fnlang.frontend.pipeline import Frontend, FrontendOptions, FrontendResult


PROGRAM = """
fn[1] add(a, b) {
    c = add(a, b);
}

fn[0] main() {
    print(add(1, 2));
}
"""


class TestFrontendRun:

    def test_success(self):
        result = Frontend().run(PROGRAM)
        assert result.success
        assert result.error is None
        assert result.ast.kind == OperatorKind.DECLARE
        assert result.declaration_count == 2
        assert result.token_count == len(result.tokens) > 0

    def test_default_filename(self):
        result = Frontend().run("fn[0] f() { }")
        assert result.filename == "<input>"
        assert result.tokens[0].filename == "<input>"

    def test_filename_override(self):
        frontend = Frontend(FrontendOptions(filename="opts.fn"))
        assert frontend.run("x").filename == "opts.fn"
        assert frontend.run("x", "call.fn").filename == "call.fn"

    def test_tokens_only(self):
        result = Frontend(FrontendOptions(tokens_only=True)).run("x = = ;")
        assert result.success
        assert result.ast is None
        assert result.token_count == 4
        assert result.declaration_count == 0

    def test_lexical_error_is_captured(self):
        result = Frontend().run("fn[0] f() { x = #; }")
        assert not result.success
        assert isinstance(result.error, LexicalError)
        assert result.tokens == []
        assert result.ast is None

    def test_parse_error_keeps_tokens(self):
        result = Frontend().run("fn[0] f() { x 1; }")
        assert not result.success
        assert isinstance(result.error, UnexpectedTokenError)
        assert result.token_count == 12
        assert result.ast is None

    def test_wrap_constants_option(self):
        source = "fn[0] f() { x = 2147483648; }"
        assert not Frontend().run(source).success

        result = Frontend(FrontendOptions(wrap_constants=True)).run(source)
        assert result.success
        assignment = result.ast.children[0].children[0].children[0]
        assert assignment.children[1].value == -2147483648

    def test_wrap_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="fnlang"):
            Frontend(FrontendOptions(wrap_constants=True)).run("x = 4294967297")
        assert "wrapped to 1" in caplog.text


class TestFrontendRunFile:

    def test_run_file(self, tmp_path):
        path = tmp_path / "prog.fn"
        path.write_text(PROGRAM, encoding="utf-8")
        result = Frontend().run_file(path)
        assert result.success
        assert result.filename == str(path)
        assert result.ast.children[1].operator.name == "main"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Frontend().run_file(tmp_path / "missing.fn")

    def test_error_location_uses_path(self, tmp_path):
        path = tmp_path / "bad.fn"
        path.write_text("fn[0] f( { }", encoding="utf-8")
        result = Frontend().run_file(path)
        assert result.error.location.filename == str(path)


class TestFrontendResult:

    def test_defaults(self):
        result = FrontendResult()
        assert not result.success
        assert result.token_count == 0
        assert result.declaration_count == 0
