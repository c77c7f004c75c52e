"""Tests for the Mermaid renderer."""

import itertools

from sol2seq.diagram.renderer import (
    generate_sequence_diagram,
    order_participants,
    participant_declaration,
    render_sequence_diagram,
)
from sol2seq.ir.models import ContractInfo, DiagramData, RelationKind
from ast_helpers import (
    contract,
    elementary,
    expr_stmt,
    function,
    identifier,
    member_call,
    source_unit,
    state_var,
    user_type,
    vault_ast,
)


def _participant_lines(diagram: str) -> list[str]:
    return [line for line in diagram.splitlines() if line.startswith("participant ")]


def test_vault_round_trip():
    diagram = generate_sequence_diagram(vault_ast())
    lines = diagram.splitlines()

    assert lines[0] == "```mermaid"
    assert lines[1] == "sequenceDiagram"
    assert lines[2] == "title Smart Contract Interaction Sequence Diagram"
    assert lines[3] == "autonumber"
    assert lines[-1] == "```"

    assert _participant_lines(diagram) == [
        'participant User as "External User"',
        'participant Vault as "Vault<br/>(owner: address)<br/>from contracts/Vault.sol"',
        'participant Events as "Blockchain Events"',
    ]
    assert not any(line.startswith("participant Ownable") for line in lines)
    assert "User->>+Vault: deposit(amount: uint256)" in lines
    assert "Vault-->>-User: return" in lines
    assert "Note over Vault,Vault: Event: Deposited" in lines
    assert "Note right of Vault: Inherits from: Ownable" in lines
    assert "Note over Vault: Functions: deposit" in lines
    assert "Note right of Vault: Processing deposit" in lines


def test_output_is_deterministic():
    first = generate_sequence_diagram(vault_ast(), light_colors=True)
    second = generate_sequence_diagram(vault_ast(), light_colors=True)
    assert first == second


def test_participant_order_is_independent_of_declaration_order():
    contracts = [contract("Zeta"), contract("alpha"), contract("Beta"), contract("Gamma")]
    expected = None
    for perm in itertools.permutations(contracts):
        lines = _participant_lines(generate_sequence_diagram(source_unit(*perm)))
        if expected is None:
            expected = lines
        assert lines == expected

    names = [line.split()[1] for line in expected]
    assert names == ["User", "Beta", "Gamma", "Zeta", "alpha", "Events"]


def test_order_participants():
    assert order_participants({"Events", "B", "User", "A", "TokenContract"}) == [
        "User",
        "A",
        "B",
        "TokenContract",
        "Events",
    ]
    assert order_participants({"B", "A"}) == ["A", "B"]
    assert order_participants(set()) == []


def test_participant_labels():
    info = ContractInfo(
        name="Factory",
        contract_type="library",
        source_file="src/Factory.sol",
        variables=[
            ("totalSupply", "uint256"),
            ("owner", "address"),
            ("tokenImpl", "address"),
            ("registry", "Registry"),
        ],
    )
    assert participant_declaration("Factory", info) == (
        'participant Factory as "Factory (library)<br/>(owner: address, tokenImpl: address)<br/>from src/Factory.sol"'
    )
    assert participant_declaration("Plain", ContractInfo(name="Plain")) == 'participant Plain as "Plain"'
    assert participant_declaration("Recipient", None) == "participant Recipient"
    assert participant_declaration("TokenContract", None) == 'participant TokenContract as "ERC20/ERC721 Tokens"'


def test_light_and_dark_differ_only_in_colors():
    ast = source_unit(
        contract(
            "Vault",
            state_var("token", user_type("IERC20")),
            function("sweep", body=[expr_stmt(member_call("token", "transferFrom", identifier("from")))]),
        )
    )
    dark = generate_sequence_diagram(ast, light_colors=False).splitlines()
    light = generate_sequence_diagram(ast, light_colors=True).splitlines()

    assert len(dark) == len(light)
    differing = [(d, l) for d, l in zip(dark, light) if d != l]
    assert differing
    for d, l in differing:
        assert d.startswith("    '") or d.startswith("rect rgb(")
        assert l.startswith("    '") or l.startswith("rect rgb(")
    assert _participant_lines("\n".join(dark)) == _participant_lines("\n".join(light))


def test_theme_block():
    lines = generate_sequence_diagram(source_unit(), light_colors=True).splitlines()
    start = lines.index("%%{init: {")
    assert lines[start + 1] == "  'theme': 'base',"
    assert lines[start + 3] == "    'primaryColor': '#fafbfc',"
    assert lines[start + 8] == "    'tertiaryColor': '#fff8f8'"
    assert lines[start + 9] == "  }"
    assert lines[start + 10] == "}}%%"


def test_empty_declarations_render_only_frame():
    diagram = generate_sequence_diagram(source_unit())
    lines = diagram.splitlines()

    assert lines[:4] == [
        "```mermaid",
        "sequenceDiagram",
        "title Smart Contract Interaction Sequence Diagram",
        "autonumber",
    ]
    assert _participant_lines(diagram) == []
    assert "Note over User: User Interactions" not in lines
    assert "Note over User: Contract-to-Contract Interactions" not in lines
    assert "Note over User: Event Definitions" not in lines
    assert "Note over User: Contract Relationships" not in lines
    assert [line for line in lines if line.startswith("rect ")] == ["rect rgb(240, 240, 255)"]
    assert "Note over User: Diagram Legend" in lines
    assert lines[-2] == "Note left of User: Colored sections indicate different interaction types"
    assert lines[-1] == "```"


def test_user_section_kept_for_internal_only_contracts():
    ast = source_unit(contract("Vault", function("_accrue", visibility="internal")))
    lines = generate_sequence_diagram(ast).splitlines()

    i = lines.index("Note over User: User Interactions")
    assert lines[i + 1 : i + 3] == ["end", ""]
    assert not any(line.startswith("User->>") for line in lines)


def test_section_colors():
    lines = generate_sequence_diagram(vault_ast()).splitlines()
    i = lines.index("Note over User: User Interactions")
    assert lines[i - 1] == "rect rgb(245, 245, 245)"
    assert lines[i + 1] == "end"

    light = generate_sequence_diagram(vault_ast(), light_colors=True).splitlines()
    i = light.index("Note over User: Event Definitions")
    assert light[i - 1] == "rect rgb(255, 252, 252)"


def test_empty_interaction_lists_are_skipped():
    data = DiagramData(
        participants={"User", "Vault", "Events"},
        contract_interactions={"Vault.noop": [], "Vault.ping": ["Vault->>Events: emit Ping()"]},
    )
    lines = render_sequence_diagram(data).splitlines()
    assert "Note over User: Contract-to-Contract Interactions" in lines
    assert "Note right of Vault: Processing noop" not in lines
    i = lines.index("Note right of Vault: Processing ping")
    assert lines[i + 1 : i + 3] == ["Vault->>Events: emit Ping()", ""]


def test_relationship_section_order():
    data = DiagramData(
        participants={"User", "Events", "A", "B", "L"},
        contracts={
            "A": ContractInfo(name="A", functions=["run"], inherits_from=["B"]),
            "B": ContractInfo(name="B"),
            "L": ContractInfo(name="L", contract_type="library", functions=["add"]),
        },
    )
    data.add_relationship("A", "B", RelationKind.INHERITS)
    data.add_relationship("A", "L", RelationKind.CALLS)
    lines = render_sequence_diagram(data).splitlines()

    start = lines.index("Note over User: Contract Relationships")
    section = lines[start + 3 : lines.index("%%{init: { 'sequence': { 'showSequenceNumbers': true } }}%%")]
    notes = [line for line in section if line]
    assert notes == [
        "Note over A: Functions: run",
        "Note over L: Functions: add",
        "Note right of A: Inherits from: B",
        "Note right of L: Type: library",
        "Note right of A: Interacts with L",
    ]


def test_calls_deduplication():
    data = DiagramData(
        participants={"User", "Events", "A", "B", "C"},
        contracts={"A": ContractInfo(name="A")},
    )
    for source, target in [("A", "B"), ("A", "B"), ("A", "C"), ("B", "A"), ("A", "D"), ("A", "B")]:
        data.add_relationship(source, target, RelationKind.CALLS)
    data.add_relationship("A", "C", RelationKind.REFERENCES)

    pairs = data.unique_call_pairs()
    assert pairs == [("A", "B"), ("A", "C"), ("B", "A")]

    # Deduplicating an already deduplicated list changes nothing
    again = DiagramData(participants=set(data.participants))
    for source, target in pairs:
        again.add_relationship(source, target, RelationKind.CALLS)
    assert again.unique_call_pairs() == pairs

    lines = render_sequence_diagram(data).splitlines()
    interacts = [line for line in lines if "Interacts with" in line]
    assert interacts == [
        "Note right of A: Interacts with B",
        "Note right of A: Interacts with C",
        "Note right of B: Interacts with A",
    ]
    assert len(interacts) <= len(set((r.source, r.target) for r in data.contract_relationships))


def test_token_contract_participant_is_declared():
    ast = source_unit(
        contract(
            "Vault",
            state_var("fee", elementary("uint16")),
            function("pull", body=[expr_stmt(member_call("token", "transferFrom", identifier("from")))]),
        )
    )
    diagram = generate_sequence_diagram(ast)
    assert _participant_lines(diagram) == [
        'participant User as "External User"',
        'participant TokenContract as "ERC20/ERC721 Tokens"',
        'participant Vault as "Vault<br/>from contracts/Vault.sol"',
        'participant Events as "Blockchain Events"',
    ]
    assert "Note right of Vault: Interacts with TokenContract" in diagram.splitlines()
