"""End-to-end tests of the `sir` command line."""
from pathlib import Path

import pytest
from typer.testing import CliRunner

from sir import __version__
from sir.cli.app import app
from sir.core.config import PROJECT_CONFIG_FILE

runner = CliRunner()

SAMPLE = """\
top = 1

[section1]
key = foo
key = bar

[section2]
key = hello world
other = "  padded  "
"""


@pytest.fixture
def sample(isolated_config: Path) -> Path:
    path = isolated_config / "sample.ini"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


def lines(output: str) -> list:
    return [line for line in output.splitlines() if line]


class TestVersion:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"sir {__version__}" in result.output


class TestQuery:
    def test_get_in_section(self, sample: Path) -> None:
        result = runner.invoke(app, ["query", "get", str(sample), "-k", "key", "-s", "section1"])
        assert result.exit_code == 0
        assert result.output == "foo\n"

    def test_get_keeps_quoted_whitespace(self, sample: Path) -> None:
        result = runner.invoke(app, ["query", "get", str(sample), "-k", "other"])
        assert result.output == "  padded  \n"

    def test_get_with_override(self, sample: Path) -> None:
        result = runner.invoke(
            app, ["query", "--override-duplicates", "get", str(sample), "-k", "key"]
        )
        assert result.exit_code == 0
        assert result.output == "hello world\n"

    def test_get_case_insensitive(self, sample: Path) -> None:
        args = ["get", str(sample), "-k", "KEY", "-s", "SECTION2"]
        assert runner.invoke(app, ["query", *args]).exit_code == 2
        result = runner.invoke(app, ["query", "--case-insensitive", *args])
        assert result.output == "hello world\n"

    def test_get_missing_key(self, sample: Path) -> None:
        result = runner.invoke(app, ["query", "get", str(sample), "-k", "nope", "-s", "section1"])
        assert result.exit_code == 2
        assert "key 'nope' not found in section 'section1'" in result.output

    def test_get_from_stdin(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["query", "get", "-k", "key"], input="key = piped\n")
        assert result.exit_code == 0
        assert result.output == "piped\n"

    def test_missing_file(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["query", "get", "absent.ini", "-k", "x"])
        assert result.exit_code == 2
        assert "No such file or directory" in result.output

    def test_sections_skip_global(self, sample: Path) -> None:
        result = runner.invoke(app, ["query", "sections", str(sample)])
        assert result.exit_code == 0
        assert lines(result.output) == ["section1", "section2"]

    def test_keys_of_section(self, sample: Path) -> None:
        result = runner.invoke(app, ["query", "keys", str(sample), "-s", "section2"])
        assert lines(result.output) == ["key", "other"]

    def test_all_keys(self, sample: Path) -> None:
        result = runner.invoke(app, ["query", "keys", str(sample)])
        assert lines(result.output) == ["top", "key", "key", "other"]

    def test_values_of_section(self, sample: Path) -> None:
        result = runner.invoke(app, ["query", "values", str(sample), "-s", "section1"])
        assert lines(result.output) == ["foo"]

    def test_unknown_section(self, sample: Path) -> None:
        result = runner.invoke(app, ["query", "values", str(sample), "-s", "nope"])
        assert result.exit_code == 2
        assert "section 'nope' not found" in result.output

    def test_project_config_applies(self, sample: Path, isolated_config: Path) -> None:
        cfg = isolated_config / PROJECT_CONFIG_FILE
        cfg.parent.mkdir()
        cfg.write_text("[parse]\noverride_duplicate_keys = true\n", encoding="utf-8")
        result = runner.invoke(app, ["query", "get", str(sample), "-k", "key", "-s", "section1"])
        assert result.output == "bar\n"
        result = runner.invoke(
            app, ["query", "--first-wins", "get", str(sample), "-k", "key", "-s", "section1"]
        )
        assert result.output == "foo\n"


class TestCheck:
    def test_clean_file(self, sample: Path) -> None:
        result = runner.invoke(app, ["check", "file", str(sample)])
        assert result.exit_code == 0
        assert "No warnings." in result.output

    def test_warnings_fail(self, isolated_config: Path) -> None:
        bad = isolated_config / "bad.ini"
        bad.write_text("[ok]\nkey]=v\n[broken\n", encoding="utf-8")
        assert runner.invoke(app, ["check", "file", str(bad)]).exit_code == 1
        assert runner.invoke(app, ["check", "file", str(bad), "--no-fail"]).exit_code == 0

    def test_warnings_forced_on(self, isolated_config: Path) -> None:
        cfg = isolated_config / PROJECT_CONFIG_FILE
        cfg.parent.mkdir()
        cfg.write_text("[parse]\ndisable_warnings = true\n", encoding="utf-8")
        bad = isolated_config / "bad.ini"
        bad.write_text("key]=v\n", encoding="utf-8")
        assert runner.invoke(app, ["check", "file", str(bad)]).exit_code == 1

    def test_unreadable_file(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["check", "file", "absent.ini"])
        assert result.exit_code == 2


class TestConfigCommands:
    def test_init_and_show(self, isolated_config: Path) -> None:
        result = runner.invoke(app, ["config", "init", str(isolated_config)])
        assert result.exit_code == 0
        assert (isolated_config / PROJECT_CONFIG_FILE).is_file()

        again = runner.invoke(app, ["config", "init", str(isolated_config)])
        assert "already exists" in again.output

        shown = runner.invoke(app, ["config", "show", str(isolated_config)])
        assert shown.exit_code == 0
        assert "override_duplicate_keys" in shown.output

    def test_show_invalid_config(self, isolated_config: Path) -> None:
        cfg = isolated_config / PROJECT_CONFIG_FILE
        cfg.parent.mkdir()
        cfg.write_text("[parse]\nbogus = 1\n", encoding="utf-8")
        result = runner.invoke(app, ["config", "show", str(isolated_config)])
        assert result.exit_code == 2
