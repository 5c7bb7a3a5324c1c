"""Tests for the CLI module."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from couchpatch import cli
from couchpatch.cli import app

runner = CliRunner()


@pytest.fixture
def document_file(tmp_path: Path) -> Path:
    path = tmp_path / "document.json"
    path.write_text(json.dumps({"a": [1, 2], "name": "café"}))
    return path


@pytest.fixture
def write_patch(tmp_path: Path):
    def _write(operations) -> Path:
        path = tmp_path / "patch.json"
        path.write_text(json.dumps(operations))
        return path

    return _write


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "CouchPatch Command Line Interface" in result.stdout


def test_cli_version(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(cli, "__version__", "1.2.3")
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "CouchPatch v1.2.3" in result.stdout


def test_apply_prints_patched_document(document_file, write_patch):
    patch_file = write_patch(
        [
            {"op": "add", "path": "/a/-", "value": 3},
            {"op": "replace", "path": "/name", "value": "tea"},
        ]
    )
    result = runner.invoke(app, ["apply", str(document_file), str(patch_file)])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"a": [1, 2, 3], "name": "tea"}


def test_apply_writes_output_file(document_file, write_patch, tmp_path: Path):
    patch_file = write_patch([{"op": "remove", "path": "/a/0"}])
    output = tmp_path / "out.json"
    result = runner.invoke(
        app, ["apply", str(document_file), str(patch_file), "-o", str(output)]
    )
    assert result.exit_code == 0
    assert json.loads(output.read_text()) == {"a": [2], "name": "café"}
    assert "café" in output.read_text()


def test_apply_uses_configured_indent(
    document_file, write_patch, monkeypatch: pytest.MonkeyPatch
):
    monkeypatch.setattr(cli.settings, "indent", None)
    patch_file = write_patch([{"op": "remove", "path": "/name"}])
    result = runner.invoke(app, ["apply", str(document_file), str(patch_file)])
    assert result.exit_code == 0
    assert result.stdout.strip() == '{"a": [1, 2]}'


def test_apply_indent_option(document_file, write_patch):
    patch_file = write_patch([{"op": "remove", "path": "/name"}])
    result = runner.invoke(
        app, ["apply", str(document_file), str(patch_file), "--indent", "4"]
    )
    assert result.exit_code == 0
    assert '\n    "a": [' in result.stdout


@pytest.mark.parametrize(
    ("operations", "exit_code", "kind"),
    [
        ([{"op": "frobnicate"}], 3, "invalid_patch"),
        ({"op": "add"}, 3, "invalid_patch"),
        ([{"op": "add", "path": "/a/9", "value": 0}], 4, "invalid_pointer"),
        (
            [{"op": "test", "path": "/name", "value": "x"}],
            5,
            "patch_not_applicable",
        ),
    ],
)
def test_apply_reports_errors(document_file, write_patch, operations, exit_code, kind):
    patch_file = write_patch(operations)
    result = runner.invoke(app, ["apply", str(document_file), str(patch_file)])
    assert result.exit_code == exit_code
    assert kind in result.output


def test_apply_rejects_malformed_json(document_file, tmp_path: Path):
    patch_file = tmp_path / "patch.json"
    patch_file.write_text("[{")
    result = runner.invoke(app, ["apply", str(document_file), str(patch_file)])
    assert result.exit_code == 1
    assert "Cannot read JSON" in result.output


def test_get_prints_value(document_file):
    result = runner.invoke(app, ["get", str(document_file), "/a/1"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == 2


@pytest.mark.parametrize("pointer", ["/missing", "a", "/a/2", "/a/" + "9" * 5000])
def test_get_reports_invalid_pointer(document_file, pointer):
    result = runner.invoke(app, ["get", str(document_file), pointer])
    assert result.exit_code == 4
    assert "invalid_pointer" in result.output


def test_apply_reports_oversized_index(document_file, write_patch):
    patch_file = write_patch([{"op": "remove", "path": "/a/" + "9" * 5000}])
    result = runner.invoke(app, ["apply", str(document_file), str(patch_file)])
    assert result.exit_code == 4
    assert "invalid_pointer" in result.output
