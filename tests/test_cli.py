# =============================================================================
# test_cli.py - fnparse Command-Line Tests
# =============================================================================
# Tests for the fnparse CLI and the shared CLI error handling.
# =============================================================================

import json

import click
import pytest
from click.testing import CliRunner

from fnlang import __version__
from fnlang.cli.errors import ExitCode, handle_cli_exception
from fnlang.cli.fnparse import format_token, main
from fnlang.frontend.lexer import tokenize


PROGRAM = "fn[1] add(a, b) {\n  c = add(a, b);\n}\n"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "add.fn"
    path.write_text(PROGRAM, encoding="utf-8")
    return path


class TestFnparse:
    """Tests for the fnparse command."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "INPUT_FILE" in result.output
        assert "--tokens" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "fnparse" in result.output
        assert __version__ in result.output

    def test_tree_output(self, runner, source_file):
        result = runner.invoke(main, [str(source_file)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Declare",
            "  FunctionDeclare add(a, b) -> 1",
            "    Statement",
            "      Substitute",
            "        Identifier c",
            "        Call add",
            "          Identifier a",
            "          Identifier b",
        ]

    def test_json_output(self, runner, source_file):
        result = runner.invoke(main, [str(source_file), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        function = data["children"][0]
        assert function["operator"] == {
            "kind": "FUNCTION_DECLARE",
            "name": "add",
            "args": ["a", "b"],
            "retnum": 1,
        }

    def test_tokens_output(self, runner, source_file):
        result = runner.invoke(main, ["--tokens", str(source_file)])
        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert len(lines) == 21
        assert lines[0].split() == ["1:1", "KEYWORD", "fn"]
        assert lines[-1].split() == ["3:1", "PUNCTUATOR", "}"]

    def test_output_file(self, runner, source_file, tmp_path):
        out = tmp_path / "add.ast"
        result = runner.invoke(main, [str(source_file), "-o", str(out)])
        assert result.exit_code == 0
        assert result.output == ""
        assert out.read_text(encoding="utf-8").startswith("Declare\n")

    def test_verbose_stats(self, runner, source_file):
        result = runner.invoke(main, ["-v", str(source_file)])
        assert result.exit_code == 0
        assert "Tokenized: 21 tokens" in result.output
        assert "Parsed: 1 declarations" in result.output

    def test_parse_error_exit_code(self, runner, tmp_path):
        path = tmp_path / "bad.fn"
        path.write_text("fn[0] f() {\n  x 1;\n}\n", encoding="utf-8")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == ExitCode.FRONTEND_ERROR
        assert "error: unexpected constant 1 in statement" in result.output
        assert "      x 1;" in result.output

    def test_lexical_error_exit_code(self, runner, tmp_path):
        path = tmp_path / "bad.fn"
        path.write_text("fn[0] f() { x = 2147483648; }", encoding="utf-8")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == ExitCode.FRONTEND_ERROR
        assert "hint: constants must not exceed 2147483647" in result.output

    def test_deep_nesting_is_a_frontend_error(self, runner, tmp_path):
        path = tmp_path / "deep.fn"
        path.write_text(
            "fn[0] main() { x = " + "f(" * 400 + "1" + ")" * 400 + "; }",
            encoding="utf-8",
        )
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == ExitCode.FRONTEND_ERROR
        assert "expression nesting too deep" in result.output

    def test_wrap_constants_flag(self, runner, tmp_path):
        path = tmp_path / "wrap.fn"
        path.write_text("fn[0] f() { x = 2147483648; }", encoding="utf-8")
        result = runner.invoke(main, ["--wrap-constants", str(path)])
        assert result.exit_code == 0
        assert "Constant -2147483648" in result.output

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "missing.fn")])
        assert result.exit_code == 2

    def test_bad_format(self, runner, source_file):
        result = runner.invoke(main, [str(source_file), "--format", "xml"])
        assert result.exit_code == 2


class TestFormatToken:

    def test_columns(self):
        token = tokenize("  counter")[0]
        assert format_token(token) == "1:3      IDENTIFIER  counter"

    def test_character_constant_shows_value(self):
        assert format_token(tokenize("'a'")[0]).split() == ["1:1", "CONSTANT", "97"]


class TestHandleCliException:
    """Exit codes chosen by the shared error handler."""

    def run_handler(self, error):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(error)
        return exc_info.value.code

    def test_frontend_error(self):
        from fnlang.frontend.errors import FrontendError
        assert self.run_handler(FrontendError("bad")) == ExitCode.FRONTEND_ERROR

    def test_file_not_found(self):
        assert self.run_handler(FileNotFoundError("x")) == ExitCode.INVALID_ARGS

    def test_bad_parameter(self):
        assert self.run_handler(click.BadParameter("x")) == ExitCode.INVALID_ARGS

    def test_internal_error(self):
        assert self.run_handler(RuntimeError("boom")) == ExitCode.INTERNAL_ERROR
