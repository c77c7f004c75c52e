"""High-level entry points: AST file or Solidity sources in, diagram out."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from sol2seq.config import Config
from sol2seq.diagram.renderer import generate_sequence_diagram
from sol2seq.errors import AstStructureError
from sol2seq.utils.compiler import compile_to_ast
from sol2seq.utils.merge import merge_ast_json

logger = logging.getLogger(__name__)


def generate_diagram_from_file(ast_file: str | Path, config: Config | None = None) -> str:
    """Generate a sequence diagram from a solc AST JSON file.

    Writes the diagram to ``config.output_file`` when set and returns it.

    Raises:
        OSError: If the AST file cannot be read or the output cannot be written.
        AstStructureError: If the file is not valid JSON or lacks required structure.
    """
    config = config or Config()
    content = Path(ast_file).read_text(encoding="utf-8")
    try:
        ast = json.loads(content)
    except json.JSONDecodeError as e:
        raise AstStructureError(f"Failed to parse AST JSON in {ast_file}: {e}") from e

    diagram = generate_sequence_diagram(ast, config.light_colors)
    _write_output(diagram, config)
    return diagram


def generate_diagram_from_sources(
    source_files: list[str | Path], config: Config | None = None
) -> str:
    """Compile Solidity files with solc, merge their ASTs and render one diagram.

    Raises:
        CompilerError: If solc fails on any file.
    """
    config = config or Config()
    combined: dict = {}
    for file_path in source_files:
        merge_ast_json(combined, compile_to_ast(file_path, config.solc_binary))

    diagram = generate_sequence_diagram(combined, config.light_colors)
    _write_output(diagram, config)
    return diagram


def _write_output(diagram: str, config: Config) -> None:
    if config.output_file is None:
        return
    Path(config.output_file).write_text(diagram, encoding="utf-8")
    logger.info("Wrote diagram to %s", config.output_file)
