from __future__ import annotations

import json
import textwrap
from pathlib import Path

from fold_scanner.cli import cli

APP_JS = """
//#region Setup
var a = 1;
//#endregion
/* Block
   comment */
function main() {
  return a;
}
"""


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_lists_folds_sorted_by_line(cli_runner, tmp_path, monkeypatch, write_source):
    monkeypatch.chdir(tmp_path)
    target = write_source("app.js", APP_JS)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == [
        "1-3\tregion\tSetup",
        "4-5\tcomment\tBlock   comment",
        "6-8\tmember\tfunction main()",
    ]


def test_cli_json_output(cli_runner, tmp_path, monkeypatch, write_source):
    monkeypatch.chdir(tmp_path)
    target = write_source("app.js", APP_JS)

    result = cli_runner.invoke(cli, [str(target), "--format", "json"])

    assert result.exit_code == 0, result.output
    folds = json.loads(result.output)
    assert [fold["kind"] for fold in folds] == ["region", "comment", "member"]
    assert folds[2] == {
        "name": "function main()",
        "start_line": 6,
        "end_line": 9,
        "kind": "member",
    }


def test_cli_can_disable_functions(cli_runner, tmp_path, monkeypatch, write_source):
    monkeypatch.chdir(tmp_path)
    target = write_source("app.js", APP_JS)

    result = cli_runner.invoke(cli, [str(target), "--no-functions"])

    assert result.exit_code == 0, result.output
    assert "member" not in result.output


def test_cli_marker_overrides(cli_runner, tmp_path, monkeypatch, write_source):
    monkeypatch.chdir(tmp_path)
    target = write_source(
        "theme.css",
        """
        /* @group Colors */
        .a { color: red; }
        /* @end */
        """,
    )

    result = cli_runner.invoke(
        cli, [str(target), "--region-pair", "/* @group", "/* @end", "--comment-pair", "/*", "*/"]
    )

    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["1-3\tregion\tColors"]


def test_cli_reads_project_config(cli_runner, tmp_path, monkeypatch, write_source):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.fold-scanner]
        detect_functions = false
        """,
    )
    target = write_source("app.js", APP_JS)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0, result.output
    assert "member" not in result.output
    assert "Setup" in result.output


def test_cli_rejects_invalid_project_config(cli_runner, tmp_path, monkeypatch, write_source):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.fold-scanner]
        region_pairs = ["//#region"]
        """,
    )
    target = write_source("app.js", APP_JS)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "even number of markers" in result.output


def test_cli_rejects_unsupported_extension(cli_runner, tmp_path, monkeypatch, write_source):
    monkeypatch.chdir(tmp_path)
    target = write_source("notes.txt", "// a\n// b\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "No folding profile" in result.output


def test_cli_enforces_file_size(cli_runner, tmp_path, monkeypatch, write_source):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FOLD_SCANNER_MAX_FILE_SIZE", "10")
    target = write_source("app.js", APP_JS)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "maximum allowed size" in result.output


def test_cli_rejects_invalid_size_override(cli_runner, tmp_path, monkeypatch, write_source):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FOLD_SCANNER_MAX_FILE_SIZE", "lots")
    target = write_source("app.js", APP_JS)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "FOLD_SCANNER_MAX_FILE_SIZE" in result.output


def test_cli_rejects_file_outside_working_directory(cli_runner, tmp_path, monkeypatch, write_source):
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    target = write_source("app.js", APP_JS)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "outside of the working directory" in result.output


def test_cli_prints_nothing_for_plain_file(cli_runner, tmp_path, monkeypatch, write_source):
    monkeypatch.chdir(tmp_path)
    target = write_source("plain.css", ".a { color: red; }\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == ""


def test_cli_verbose_flag(cli_runner, tmp_path, monkeypatch, write_source):
    monkeypatch.chdir(tmp_path)
    target = write_source("app.js", APP_JS)

    result = cli_runner.invoke(cli, [str(target), "--verbose"])

    assert result.exit_code == 0, result.output
    assert "Setup" in result.output
