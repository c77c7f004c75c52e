"""sol2seq — Mermaid sequence diagrams from Solidity compiler ASTs.

Usage::

    from sol2seq import Config, generate_diagram_from_file

    diagram = generate_diagram_from_file("ast.json", Config(light_colors=True))
"""

from sol2seq.api import generate_diagram_from_file, generate_diagram_from_sources
from sol2seq.config import Config, load_config
from sol2seq.diagram.renderer import generate_sequence_diagram, render_sequence_diagram
from sol2seq.errors import AstStructureError, CompilerError, ConfigError, Sol2SeqError
from sol2seq.solidity.extractor import extract_contract_info

__version__ = "0.2.0"

__all__ = [
    "AstStructureError",
    "CompilerError",
    "Config",
    "ConfigError",
    "Sol2SeqError",
    "extract_contract_info",
    "generate_diagram_from_file",
    "generate_diagram_from_sources",
    "generate_sequence_diagram",
    "load_config",
    "render_sequence_diagram",
]
