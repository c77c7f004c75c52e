"""sol2seq CLI — generate sequence diagrams from Solidity contracts."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from sol2seq import __version__
from sol2seq.api import generate_diagram_from_file, generate_diagram_from_sources
from sol2seq.config import Config, load_config
from sol2seq.errors import Sol2SeqError
from sol2seq.utils.file_scanner import find_solidity_files

console = Console()


@click.command()
@click.version_option(version=__version__)
@click.argument("ast_file", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output_file", required=False, type=click.Path(dir_okay=False, path_type=Path))
@click.option("--output", "-o", "output_option", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Output file (default: stdout)")
@click.option("--light-colors", "-l", is_flag=True, help="Use lighter colors for the diagram")
@click.option("--source", "-s", "sources", multiple=True, type=click.Path(exists=True, path_type=Path), help="Solidity file or directory to compile with solc (repeatable)")
@click.option("--config", "-c", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML config file")
@click.option("--solc", "solc_binary", default=None, help="solc executable to use")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(
    ast_file: Path | None,
    output_file: Path | None,
    output_option: Path | None,
    light_colors: bool,
    sources: tuple[Path, ...],
    config_path: Path | None,
    solc_binary: str | None,
    verbose: bool,
):
    """sol2seq — Solidity sequence diagram generator.

    Reads a solc AST JSON file (AST_FILE), or compiles Solidity sources
    given with --source, and writes a Mermaid sequence diagram to
    OUTPUT_FILE or stdout.
    """
    _configure_logging(verbose)

    if sources and ast_file:
        raise click.UsageError("AST_FILE cannot be combined with --source; use --output for the output file.")
    if not sources and not ast_file:
        raise click.UsageError("Provide an AST_FILE or at least one --source.")

    try:
        config = load_config(config_path) if config_path else Config()
        config = config.merged(
            light_colors=light_colors or None,
            output_file=output_option or output_file,
            solc_binary=solc_binary,
        )

        if sources:
            source_files = _expand_sources(sources)
            diagram = generate_diagram_from_sources(source_files, config)
        else:
            diagram = generate_diagram_from_file(ast_file, config)
    except (Sol2SeqError, OSError) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1)

    if config.output_file is None:
        click.echo(diagram)
    else:
        console.print(f"[green]Sequence diagram written to:[/] {escape(str(config.output_file))}")


def _expand_sources(sources: tuple[Path, ...]) -> list[Path]:
    """Resolve --source arguments (files or directories) to .sol files."""
    files: list[Path] = []
    for source in sources:
        found = find_solidity_files(source)
        if not found:
            raise click.UsageError(f"No Solidity files found in {source}")
        files.extend(found)
    return files


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


if __name__ == "__main__":
    main()
