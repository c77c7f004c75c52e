"""Contract extractor — builds the intermediate model from a solc AST.

Extraction runs in two passes over every source unit. The first registers
contracts, inheritance, events and state variables; the second walks
function bodies. Body walking needs the full set of participants, so all
declarations are collected before any function is processed.
"""

from __future__ import annotations

import logging
from typing import Any

from sol2seq.ir.models import (
    EVENTS,
    TOKEN_CONTRACT,
    USER,
    ContractInfo,
    DiagramData,
    RelationKind,
)
from sol2seq.solidity.heuristics import get_function_purpose
from sol2seq.solidity.nodes import (
    ContractDefinition,
    FunctionDefinition,
    SourceUnit,
    decode_ast_document,
)
from sol2seq.solidity.types import (
    format_return_type,
    resolve_parameter_type,
    resolve_type_name,
)
from sol2seq.solidity.walker import BodyTrace, walk_function_body

logger = logging.getLogger(__name__)

EXTERNALLY_CALLABLE = {"public", "external"}
READ_ONLY_MUTABILITY = {"view", "pure"}

# Function kinds whose definitions carry an empty name
ANONYMOUS_FUNCTION_KINDS = {"constructor", "fallback", "receive"}


def extract_contract_info(ast: Any) -> DiagramData:
    """Parse a solc AST document into a fresh DiagramData.

    Args:
        ast: The parsed JSON document, flat or ``--combined-json`` shaped.

    Raises:
        AstStructureError: If the document lacks a required array or object.
    """
    units = decode_ast_document(ast)
    data = DiagramData()

    for unit in units:
        _collect_contracts(unit, data)

    if data.contracts:
        data.participants.add(USER)
        data.participants.add(EVENTS)

    for unit in units:
        _collect_interactions(unit, data)

    logger.debug(
        "Extracted %d contracts, %d user interactions, %d relationships",
        len(data.contracts),
        len(data.user_interactions),
        len(data.contract_relationships),
    )
    return data


# ── Pass 1: declarations ─────────────────────────────────────────────


def _collect_contracts(unit: SourceUnit, data: DiagramData) -> None:
    for contract in unit.contracts:
        name = contract.name
        data.participants.add(name)
        logger.debug("Registered %s %s from %s", contract.contract_kind, name, unit.absolute_path)

        info = ContractInfo(
            name=name,
            contract_type=contract.contract_kind,
            source_file=unit.absolute_path,
        )

        for base in contract.base_contracts:
            info.inherits_from.append(base)
            data.add_relationship(name, base, RelationKind.INHERITS)

        for event in contract.events:
            data.events.append((name, event.name))
            info.events.append(event.name)

        for var in contract.state_variables:
            var_type = resolve_type_name(var.type_name)
            info.variables.append((var.name, var_type))
            if var_type in data.participants or "address" in var_type.lower():
                data.add_relationship(name, var_type, RelationKind.REFERENCES)

        data.contracts[name] = info


# ── Pass 2: functions ────────────────────────────────────────────────


def _collect_interactions(unit: SourceUnit, data: DiagramData) -> None:
    for contract in unit.contracts:
        for function in contract.functions:
            _process_function(contract, function, data)


def function_display_name(function: FunctionDefinition) -> str | None:
    """Name shown for a function; constructors and friends use their kind."""
    if function.name is None:
        return None
    if not function.name and function.kind in ANONYMOUS_FUNCTION_KINDS:
        return function.kind
    return function.name


def function_signature(function_name: str, function: FunctionDefinition) -> str:
    """``name(param: type, ...)`` built from the named parameters."""
    params = [
        f"{param.name}: {resolve_parameter_type(param)}"
        for param in function.parameters
        if param.name
    ]
    return f"{function_name}({', '.join(params)})"


def _process_function(
    contract: ContractDefinition, function: FunctionDefinition, data: DiagramData
) -> None:
    contract_name = contract.name
    function_name = function_display_name(function)
    if function_name is None:
        return

    info = data.contracts.get(contract_name)
    if info is not None:
        info.functions.append(function_name)

    if function.visibility not in EXTERNALLY_CALLABLE:
        return

    purpose = get_function_purpose(function_name)
    if purpose:
        data.user_interactions.append(f"Note over {USER},{contract_name}: {purpose}")

    data.user_interactions.append(
        f"{USER}->>+{contract_name}: {function_signature(function_name, function)}"
    )

    if function.body is not None:
        trace = walk_function_body(contract_name, function.body)
        data.contract_interactions[f"{contract_name}.{function_name}"] = trace.lines
        _record_calls(contract_name, trace, data)

    return_type = format_return_type(function.return_parameters)
    if return_type is not None:
        data.user_interactions.append(f"{contract_name}-->>-{USER}: return {return_type}")
    elif function.state_mutability in READ_ONLY_MUTABILITY:
        data.user_interactions.append(f"{contract_name}-->>-{USER}: return (view function)")
    else:
        data.user_interactions.append(f"{contract_name}-->>-{USER}: return")


def _record_calls(contract_name: str, trace: BodyTrace, data: DiagramData) -> None:
    """Record ``calls`` edges for call targets that resolve to participants.

    A target resolves directly (a library or contract name) or through the
    declared type of a state variable of the calling contract.
    """
    info = data.contracts.get(contract_name)
    for target in trace.call_targets:
        if target == TOKEN_CONTRACT:
            data.participants.add(TOKEN_CONTRACT)

        resolved = target
        if resolved not in data.participants and info is not None:
            resolved = info.variable_type(target) or target

        if resolved in data.participants and resolved != contract_name:
            data.add_relationship(contract_name, resolved, RelationKind.CALLS)
