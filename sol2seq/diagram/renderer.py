"""Mermaid renderer — deterministic markup from a populated DiagramData.

Output is a single fenced ``mermaid`` block. Rendering never fails:
sections with nothing to show are omitted.
"""

from __future__ import annotations

from typing import Any

from sol2seq.diagram.themes import (
    CONTRACT_INTERACTIONS,
    CONTRACT_RELATIONSHIPS,
    EVENT_DEFINITIONS,
    USER_INTERACTIONS,
    Palette,
    get_palette,
)
from sol2seq.ir.models import EVENTS, TOKEN_CONTRACT, USER, ContractInfo, DiagramData
from sol2seq.solidity.extractor import extract_contract_info

TITLE = "Smart Contract Interaction Sequence Diagram"

# Display names for the synthetic lanes
PARTICIPANT_ALIASES = {
    USER: "External User",
    EVENTS: "Blockchain Events",
    TOKEN_CONTRACT: "ERC20/ERC721 Tokens",
}

# Variables shown in a contract's participant label
MAX_LABEL_VARIABLES = 2

LEGEND_NOTES = [
    "User→Contract: Public/External function calls",
    "User←Contract: Function returns",
    "Contract→Contract: Internal interactions",
    "Contract→Events: Emitted events",
    "Colored sections indicate different interaction types",
]


def generate_sequence_diagram(ast: Any, light_colors: bool = False) -> str:
    """Extract contract facts from a solc AST and render them as Mermaid."""
    return render_sequence_diagram(extract_contract_info(ast), light_colors)


def render_sequence_diagram(data: DiagramData, light_colors: bool = False) -> str:
    """Render a DiagramData as a fenced Mermaid sequence diagram."""
    palette = get_palette(light_colors)
    diagram = [
        "```mermaid",
        "sequenceDiagram",
        f"title {TITLE}",
        "autonumber",
        "",
    ]

    _add_theme_config(diagram, palette)

    for participant in order_participants(data.participants):
        diagram.append(participant_declaration(participant, data.contracts.get(participant)))
    diagram.append("")

    if data.contracts:
        _add_section_title(diagram, USER_INTERACTIONS, palette)
        diagram.extend(data.user_interactions)

    if data.contract_interactions:
        diagram.append("")
        _add_section_title(diagram, CONTRACT_INTERACTIONS, palette)
        for function_key, lines in data.contract_interactions.items():
            if not lines:
                continue
            contract, _, function = function_key.partition(".")
            diagram.append(f"Note right of {contract}: Processing {function}")
            diagram.extend(lines)
            diagram.append("")

    if data.events:
        diagram.append("")
        _add_section_title(diagram, EVENT_DEFINITIONS, palette)
        for contract, event in data.events:
            diagram.append(f"Note over {contract},{contract}: Event: {event}")

    if data.contracts:
        diagram.append("")
        _add_section_title(diagram, CONTRACT_RELATIONSHIPS, palette)
        _add_relationships(diagram, data)

    _add_legend(diagram, palette)
    diagram.append("```")

    return "\n".join(diagram)


def order_participants(participants: set[str]) -> list[str]:
    """User first, Events last, everything else sorted in between."""
    ordered = []
    if USER in participants:
        ordered.append(USER)
    ordered.extend(sorted(p for p in participants if p not in (USER, EVENTS)))
    if EVENTS in participants:
        ordered.append(EVENTS)
    return ordered


def participant_declaration(participant: str, info: ContractInfo | None) -> str:
    """Build the ``participant`` line, with a descriptive label for contracts."""
    if participant in PARTICIPANT_ALIASES:
        return f'participant {participant} as "{PARTICIPANT_ALIASES[participant]}"'

    if info is None:
        return f"participant {participant}"

    parts = [participant if info.is_default_kind else f"{participant} ({info.contract_type})"]

    key_vars = info.important_variables[:MAX_LABEL_VARIABLES]
    if key_vars:
        parts.append("(" + ", ".join(f"{name}: {typ}" for name, typ in key_vars) + ")")

    if info.source_file:
        parts.append(f"from {info.source_file}")

    return f'participant {participant} as "{"<br/>".join(parts)}"'


def _add_theme_config(diagram: list[str], palette: Palette) -> None:
    diagram.append("%%{init: {")
    diagram.append("  'theme': 'base',")
    diagram.append("  'themeVariables': {")
    last = len(palette.theme_variables) - 1
    for i, (key, value) in enumerate(palette.theme_variables):
        separator = "" if i == last else ","
        diagram.append(f"    '{key}': '{value}'{separator}")
    diagram.append("  }")
    diagram.append("}}%%")
    diagram.append("")


def _add_section_title(diagram: list[str], title: str, palette: Palette) -> None:
    diagram.append(f"rect {palette.section_color(title)}")
    diagram.append(f"Note over {USER}: {title}")
    diagram.append("end")
    diagram.append("")


def _add_relationships(diagram: list[str], data: DiagramData) -> None:
    for name, info in data.contracts.items():
        if info.functions:
            diagram.append(f"Note over {name}: Functions: {', '.join(info.functions)}")

    diagram.append("")
    for name, info in data.contracts.items():
        if info.inherits_from:
            diagram.append(f"Note right of {name}: Inherits from: {', '.join(info.inherits_from)}")

    diagram.append("")
    for name, info in data.contracts.items():
        if not info.is_default_kind:
            diagram.append(f"Note right of {name}: Type: {info.contract_type}")

    if data.contract_relationships:
        diagram.append("")
        for source, target in data.unique_call_pairs():
            diagram.append(f"Note right of {source}: Interacts with {target}")


def _add_legend(diagram: list[str], palette: Palette) -> None:
    diagram.append("")
    diagram.append("%%{init: { 'sequence': { 'showSequenceNumbers': true } }}%%")
    diagram.append("")
    diagram.append(f"rect {palette.legend_color}")
    diagram.append(f"Note over {USER}: Diagram Legend")
    diagram.append("end")
    diagram.append("")
    for note in LEGEND_NOTES:
        diagram.append(f"Note left of {USER}: {note}")
