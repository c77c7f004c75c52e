"""Intermediate model — normalized contract facts for one extraction pass.

These models are the form the extractor builds from a decoded Solidity
AST and that the renderer reads to produce the sequence diagram.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from sol2seq.solidity.heuristics import is_important_variable

DEFAULT_CONTRACT_KIND = "contract"

USER = "User"
EVENTS = "Events"
TOKEN_CONTRACT = "TokenContract"
RECIPIENT = "Recipient"


class RelationKind(Enum):
    INHERITS = "inherits"  # Base contract in the inheritance list
    REFERENCES = "references"  # State variable typed as a contract or address
    CALLS = "calls"  # Call observed in a function body


@dataclass
class ContractInfo:
    """Facts collected for a single contract, interface or library."""

    name: str
    contract_type: str = DEFAULT_CONTRACT_KIND
    source_file: str = ""
    events: list[str] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)
    variables: list[tuple[str, str]] = field(default_factory=list)
    inherits_from: list[str] = field(default_factory=list)

    @property
    def is_default_kind(self) -> bool:
        return self.contract_type == DEFAULT_CONTRACT_KIND

    @property
    def important_variables(self) -> list[tuple[str, str]]:
        return [(name, typ) for name, typ in self.variables if is_important_variable(name)]

    def variable_type(self, name: str) -> str | None:
        """Return the declared type of a state variable, or None."""
        for var_name, var_type in self.variables:
            if var_name == name:
                return var_type
        return None


@dataclass
class ContractRelationship:
    """A directed edge between two participants."""

    source: str
    target: str
    relation_type: RelationKind


@dataclass
class DiagramData:
    """Everything the renderer needs, accumulated by the extractor.

    Created fresh for every extraction call and discarded after rendering.
    ``contracts`` and ``contract_interactions`` keep insertion order, which
    is the order they are rendered in.
    """

    participants: set[str] = field(default_factory=set)
    contracts: dict[str, ContractInfo] = field(default_factory=dict)
    user_interactions: list[str] = field(default_factory=list)
    contract_interactions: dict[str, list[str]] = field(default_factory=dict)
    events: list[tuple[str, str]] = field(default_factory=list)
    contract_relationships: list[ContractRelationship] = field(default_factory=list)

    def add_relationship(self, source: str, target: str, kind: RelationKind) -> None:
        self.contract_relationships.append(
            ContractRelationship(source=source, target=target, relation_type=kind)
        )

    def relationships_of(self, kind: RelationKind) -> list[ContractRelationship]:
        return [r for r in self.contract_relationships if r.relation_type == kind]

    def unique_call_pairs(self) -> list[tuple[str, str]]:
        """Distinct (source, target) pairs of ``calls`` edges between participants.

        First occurrence wins; both endpoints must be registered participants.
        """
        seen: set[tuple[str, str]] = set()
        pairs = []
        for rel in self.relationships_of(RelationKind.CALLS):
            key = (rel.source, rel.target)
            if key in seen:
                continue
            if rel.source in self.participants and rel.target in self.participants:
                seen.add(key)
                pairs.append(key)
        return pairs
