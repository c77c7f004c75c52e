"""Tests for the command-line interface."""

import json
import tempfile
from pathlib import Path

from click.testing import CliRunner

from sol2seq import __version__
from sol2seq.cli import main
from ast_helpers import combined, contract, source_unit, vault_ast


def _write_ast(tmpdir: str, data) -> Path:
    path = Path(tmpdir) / "ast.json"
    path.write_text(json.dumps(data))
    return path


def test_prints_diagram_to_stdout():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        ast_path = _write_ast(tmpdir, vault_ast())
        result = runner.invoke(main, [str(ast_path)])

    assert result.exit_code == 0, result.output
    assert result.output.startswith("```mermaid\n")
    assert "User->>+Vault: deposit(amount: uint256)" in result.output


def test_writes_output_file():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        ast_path = _write_ast(tmpdir, vault_ast())
        out_path = Path(tmpdir) / "diagram.md"
        result = runner.invoke(main, [str(ast_path), str(out_path), "--light-colors"])

        assert result.exit_code == 0, result.output
        assert "Sequence diagram written to" in result.output
        content = out_path.read_text(encoding="utf-8")

    assert "'primaryColor': '#fafbfc'," in content
    assert "```mermaid" not in result.output


def test_config_file_supplies_defaults():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        ast_path = _write_ast(tmpdir, vault_ast())
        config_path = Path(tmpdir) / "sol2seq.yaml"
        config_path.write_text("light_colors: true\n")
        result = runner.invoke(main, [str(ast_path), "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert "'primaryColor': '#fafbfc'," in result.output


def test_requires_input():
    result = CliRunner().invoke(main, [])
    assert result.exit_code == 2
    assert "Provide an AST_FILE" in result.output


def test_ast_file_and_sources_conflict():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        ast_path = _write_ast(tmpdir, vault_ast())
        sol_path = Path(tmpdir) / "Vault.sol"
        sol_path.write_text("contract Vault {}")
        result = runner.invoke(main, [str(ast_path), "--source", str(sol_path)])

    assert result.exit_code == 2


def test_structural_error_exits_nonzero():
    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        ast_path = _write_ast(tmpdir, {"nodeType": "SourceUnit"})
        result = runner.invoke(main, [str(ast_path)])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "nodes is not an array" in result.output


def test_sources_directory_is_scanned(monkeypatch):
    compiled = []

    def fake_compile(path, solc_binary="solc"):
        compiled.append(Path(path).name)
        return combined(source_unit(contract(Path(path).stem), path=Path(path).name))

    monkeypatch.setattr("sol2seq.api.compile_to_ast", fake_compile)

    runner = CliRunner()
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "src").mkdir()
        (root / "src" / "Vault.sol").write_text("contract Vault {}")
        (root / "src" / "Token.sol").write_text("contract Token {}")
        result = runner.invoke(main, ["--source", str(root / "src")])

    assert result.exit_code == 0, result.output
    assert compiled == ["Token.sol", "Vault.sol"]
    assert 'participant Token as "Token<br/>from Token.sol"' in result.output


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
