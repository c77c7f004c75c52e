"""Typed Solidity AST nodes — decoded from solc's JSON output.

solc emits an untyped tree where each node's kind is a ``nodeType`` string.
This module decodes only the node categories the extractor consumes into
closed sets of dataclasses, with an explicit catch-all variant per
category. Everything downstream works on these nodes, never on raw dicts.

Decoding is lenient about leaf data (missing names and types become
``None`` or placeholder variants) and strict about structure: a source
unit without a ``nodes`` array, or a ``sources`` wrapper that is not an
object, raises :class:`AstStructureError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from sol2seq.errors import AstStructureError

logger = logging.getLogger(__name__)

# Nodes nested deeper than this decode to their catch-all variant
MAX_NESTING_DEPTH = 100


# --- Type names ---


@dataclass
class ElementaryTypeName:
    name: str | None = None


@dataclass
class UserDefinedTypeName:
    name: str | None = None
    path_name: str | None = None


@dataclass
class ArrayTypeName:
    base_type: TypeName
    length: str | None = None  # None for dynamic arrays


@dataclass
class MappingTypeName:
    key_type: TypeName
    value_type: TypeName


@dataclass
class TupleTypeName:
    components: list[TypeName] | None = None


@dataclass
class FunctionTypeName:
    pass


@dataclass
class AddressTypeName:
    state_mutability: str | None = None


@dataclass
class UnknownTypeName:
    """Unrecognized or absent type node, with its free-text description if any."""

    type_string: str | None = None


TypeName = (
    ElementaryTypeName
    | UserDefinedTypeName
    | ArrayTypeName
    | MappingTypeName
    | TupleTypeName
    | FunctionTypeName
    | AddressTypeName
    | UnknownTypeName
)


# --- Expressions ---


@dataclass
class Identifier:
    name: str | None = None


@dataclass
class Literal:
    kind: str | None = None
    value: Any = None  # JSON scalar exactly as solc emitted it
    has_value: bool = False


@dataclass
class MemberAccess:
    expression: Expression
    member_name: str | None = None


@dataclass
class FunctionCall:
    expression: Expression
    arguments: list[Expression] = field(default_factory=list)
    kind: str | None = None  # "functionCall", "typeConversion", "structConstructorCall"


@dataclass
class BinaryOperation:
    left: Expression
    right: Expression
    operator: str | None = None


@dataclass
class OtherExpression:
    node_type: str | None = None


Expression = Identifier | Literal | MemberAccess | FunctionCall | BinaryOperation | OtherExpression


# --- Statements ---


@dataclass
class LoopVariable:
    name: str
    type_name: TypeName


@dataclass
class ForStatement:
    loop_variables: list[LoopVariable] = field(default_factory=list)
    body: list[Statement] = field(default_factory=list)


@dataclass
class IfStatement:
    condition: Expression
    true_body: list[Statement] = field(default_factory=list)
    false_body: list[Statement] | None = None  # None when there is no else branch


@dataclass
class EmitStatement:
    event_call: Expression


@dataclass
class ExpressionStatement:
    expression: Expression


@dataclass
class VariableDeclarationStatement:
    names: list[str] = field(default_factory=list)
    initial_value: Expression | None = None


@dataclass
class OtherStatement:
    node_type: str | None = None


Statement = (
    ForStatement
    | IfStatement
    | EmitStatement
    | ExpressionStatement
    | VariableDeclarationStatement
    | OtherStatement
)


# --- Declarations ---


@dataclass
class Parameter:
    name: str
    type_name: TypeName
    type_string: str | None = None


@dataclass
class EventDefinition:
    name: str


@dataclass
class StateVariable:
    name: str
    type_name: TypeName


@dataclass
class FunctionDefinition:
    name: str | None
    kind: str | None = None
    visibility: str = ""
    state_mutability: str = ""
    parameters: list[Parameter] = field(default_factory=list)
    return_parameters: list[Parameter] = field(default_factory=list)
    body: list[Statement] | None = None  # None when there is no statement list


@dataclass
class ContractDefinition:
    name: str
    contract_kind: str = "contract"
    base_contracts: list[str] = field(default_factory=list)
    events: list[EventDefinition] = field(default_factory=list)
    state_variables: list[StateVariable] = field(default_factory=list)
    functions: list[FunctionDefinition] = field(default_factory=list)


@dataclass
class SourceUnit:
    absolute_path: str
    contracts: list[ContractDefinition] = field(default_factory=list)


# --- Decoding ---


def decode_ast_document(raw: Any) -> list[SourceUnit]:
    """Decode a solc AST document into source units.

    Accepts both the flat single-file shape (a ``SourceUnit`` with a
    ``nodes`` array) and the ``--combined-json`` shape, where ``sources``
    maps each file path to an object holding its ``AST``.

    Raises:
        AstStructureError: If a required array or object is missing.
    """
    if not isinstance(raw, dict):
        raise AstStructureError("AST document is not a JSON object")

    if "sources" not in raw:
        return [decode_source_unit(raw)]

    sources = raw["sources"]
    if not isinstance(sources, dict):
        raise AstStructureError("sources is not an object")

    units = []
    for path, source in sources.items():
        tree = None
        if isinstance(source, dict):
            tree = source.get("AST", source.get("ast"))
        if tree is None:
            logger.warning("Skipping source %s: no AST present", path)
            continue
        units.append(decode_source_unit(tree))
    return units


def decode_source_unit(raw: Any) -> SourceUnit:
    """Decode one source unit, keeping only its contract definitions."""
    if not isinstance(raw, dict) or not isinstance(raw.get("nodes"), list):
        raise AstStructureError("nodes is not an array")

    unit = SourceUnit(absolute_path=_str(raw, "absolutePath") or "unknown")
    for node in raw["nodes"]:
        if isinstance(node, dict) and node.get("nodeType") == "ContractDefinition":
            unit.contracts.append(_decode_contract(node))
    return unit


def _decode_contract(raw: dict) -> ContractDefinition:
    contract = ContractDefinition(
        name=_str(raw, "name") or "Unknown",
        contract_kind=_str(raw, "contractKind") or "contract",
    )

    for base in _list(raw, "baseContracts"):
        base_name = base.get("baseName") if isinstance(base, dict) else None
        name = _str(base_name, "name")
        if name is not None:
            contract.base_contracts.append(name)

    for member in _list(raw, "nodes"):
        if not isinstance(member, dict):
            continue
        node_type = member.get("nodeType")
        if node_type == "EventDefinition":
            contract.events.append(EventDefinition(name=_str(member, "name") or "UnknownEvent"))
        elif node_type == "VariableDeclaration":
            contract.state_variables.append(
                StateVariable(
                    name=_str(member, "name") or "unknown",
                    type_name=decode_type_name(member.get("typeName")),
                )
            )
        elif node_type == "FunctionDefinition":
            contract.functions.append(_decode_function(member))

    return contract


def _decode_function(raw: dict) -> FunctionDefinition:
    body = raw.get("body")
    statements = body.get("statements") if isinstance(body, dict) else None

    return FunctionDefinition(
        name=_str(raw, "name"),
        kind=_str(raw, "kind"),
        visibility=_str(raw, "visibility") or "",
        state_mutability=_str(raw, "stateMutability") or "",
        parameters=_decode_parameter_list(raw.get("parameters")),
        return_parameters=_decode_parameter_list(raw.get("returnParameters")),
        body=(
            [decode_statement(s, 1) for s in statements]
            if isinstance(statements, list)
            else None
        ),
    )


def _decode_parameter_list(raw: Any) -> list[Parameter]:
    params = []
    for param in _list(raw, "parameters"):
        if not isinstance(param, dict):
            continue
        params.append(
            Parameter(
                name=_str(param, "name") or "",
                type_name=decode_type_name(param.get("typeName")),
                type_string=_type_string(param),
            )
        )
    return params


def decode_type_name(raw: Any, depth: int = 0) -> TypeName:
    """Decode a type-description node into its variant."""
    if not isinstance(raw, dict) or depth > MAX_NESTING_DEPTH:
        return UnknownTypeName()

    node_type = raw.get("nodeType")

    if node_type == "ElementaryTypeName":
        return ElementaryTypeName(name=_str(raw, "name"))

    if node_type == "UserDefinedTypeName":
        return UserDefinedTypeName(
            name=_str(raw, "name"),
            path_name=_str(raw.get("pathNode"), "name"),
        )

    if node_type == "ArrayTypeName":
        return ArrayTypeName(
            base_type=decode_type_name(raw.get("baseType"), depth + 1),
            length=_array_length(raw.get("length")),
        )

    if node_type == "Mapping":
        return MappingTypeName(
            key_type=decode_type_name(raw.get("keyType"), depth + 1),
            value_type=decode_type_name(raw.get("valueType"), depth + 1),
        )

    if node_type == "TupleType":
        components = raw.get("components")
        if not isinstance(components, list):
            return TupleTypeName(components=None)
        return TupleTypeName(components=[decode_type_name(c, depth + 1) for c in components])

    if node_type == "FunctionTypeName":
        return FunctionTypeName()

    if node_type == "AddressType":
        return AddressTypeName(state_mutability=_str(raw, "stateMutability"))

    return UnknownTypeName(type_string=_type_string(raw))


def decode_statement(raw: Any, depth: int = 0) -> Statement:
    """Decode a statement node; unrecognized kinds become OtherStatement."""
    if not isinstance(raw, dict):
        return OtherStatement()

    node_type = raw.get("nodeType")
    if depth > MAX_NESTING_DEPTH:
        return OtherStatement(node_type=node_type)

    if node_type == "ForStatement":
        init = raw.get("initializationExpression")
        loop_variables = []
        for decl in _list(init, "declarations"):
            name = _str(decl, "name")
            if name is not None:
                loop_variables.append(
                    LoopVariable(name=name, type_name=decode_type_name(decl.get("typeName")))
                )
        return ForStatement(
            loop_variables=loop_variables,
            body=decode_body(raw.get("body"), depth),
        )

    if node_type == "IfStatement":
        false_body = raw.get("falseBody")
        return IfStatement(
            condition=decode_expression(raw.get("condition"), depth + 1),
            true_body=decode_body(raw.get("trueBody"), depth),
            false_body=decode_body(false_body, depth) if isinstance(false_body, dict) else None,
        )

    if node_type == "EmitStatement":
        return EmitStatement(event_call=decode_expression(raw.get("eventCall"), depth + 1))

    if node_type == "ExpressionStatement":
        return ExpressionStatement(expression=decode_expression(raw.get("expression"), depth + 1))

    if node_type == "VariableDeclarationStatement":
        names = [
            name
            for name in (_str(decl, "name") for decl in _list(raw, "declarations"))
            if name is not None
        ]
        initial_value = raw.get("initialValue")
        return VariableDeclarationStatement(
            names=names,
            initial_value=(
                decode_expression(initial_value, depth + 1)
                if isinstance(initial_value, dict)
                else None
            ),
        )

    return OtherStatement(node_type=node_type)


def decode_body(raw: Any, depth: int = 0) -> list[Statement]:
    """Decode a block (``statements`` array) or a single-statement body."""
    if not isinstance(raw, dict):
        return []
    statements = raw.get("statements")
    if isinstance(statements, list):
        return [decode_statement(s, depth + 1) for s in statements]
    if "nodeType" in raw:
        return [decode_statement(raw, depth + 1)]
    return []


def decode_expression(raw: Any, depth: int = 0) -> Expression:
    """Decode an expression node; unrecognized kinds become OtherExpression."""
    if not isinstance(raw, dict):
        return OtherExpression()

    node_type = raw.get("nodeType")
    if depth > MAX_NESTING_DEPTH:
        return OtherExpression(node_type=node_type)

    if node_type == "Identifier":
        return Identifier(name=_str(raw, "name"))

    if node_type == "Literal":
        return Literal(kind=_str(raw, "kind"), value=raw.get("value"), has_value="value" in raw)

    if node_type == "MemberAccess":
        return MemberAccess(
            expression=decode_expression(raw.get("expression"), depth + 1),
            member_name=_str(raw, "memberName"),
        )

    if node_type == "FunctionCall":
        return FunctionCall(
            expression=decode_expression(raw.get("expression"), depth + 1),
            arguments=[decode_expression(a, depth + 1) for a in _list(raw, "arguments")],
            kind=_str(raw, "kind"),
        )

    if node_type == "BinaryOperation":
        return BinaryOperation(
            left=decode_expression(raw.get("leftExpression"), depth + 1),
            right=decode_expression(raw.get("rightExpression"), depth + 1),
            operator=_str(raw, "operator"),
        )

    return OtherExpression(node_type=node_type)


# --- Raw field helpers ---


def _str(raw: Any, key: str) -> str | None:
    """Return ``raw[key]`` if raw is a dict and the value is a string."""
    if isinstance(raw, dict):
        value = raw.get(key)
        if isinstance(value, str):
            return value
    return None


def _list(raw: Any, key: str) -> list:
    if isinstance(raw, dict):
        value = raw.get(key)
        if isinstance(value, list):
            return value
    return []


def _type_string(raw: dict) -> str | None:
    return _str(raw.get("typeDescriptions"), "typeString")


def _array_length(raw: Any) -> str | None:
    """Fixed array length from a literal node; solc may encode it as text or a number."""
    if not isinstance(raw, dict):
        return None
    value = raw.get("value")
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return str(value)
    return None
