"""Type resolver — canonical type-name strings from decoded type nodes.

Resolution is total: absent or unrecognized information degrades to
``"unknown"`` instead of raising.
"""

from __future__ import annotations

from sol2seq.solidity.nodes import (
    AddressTypeName,
    ArrayTypeName,
    ElementaryTypeName,
    FunctionTypeName,
    MappingTypeName,
    Parameter,
    TupleTypeName,
    TypeName,
    UnknownTypeName,
    UserDefinedTypeName,
)

UNKNOWN = "unknown"


def resolve_type_name(type_name: TypeName | None) -> str:
    """Return the Solidity spelling of a type node."""
    if isinstance(type_name, ElementaryTypeName):
        return type_name.name or UNKNOWN

    if isinstance(type_name, UserDefinedTypeName):
        # Qualified path (e.g. "IERC20" via an IdentifierPath) takes precedence
        return type_name.path_name or type_name.name or UNKNOWN

    if isinstance(type_name, ArrayTypeName):
        base = resolve_type_name(type_name.base_type)
        if type_name.length is not None:
            return f"{base}[{type_name.length}]"
        return f"{base}[]"

    if isinstance(type_name, MappingTypeName):
        key = resolve_type_name(type_name.key_type)
        value = resolve_type_name(type_name.value_type)
        return f"mapping({key}=>{value})"

    if isinstance(type_name, TupleTypeName):
        if type_name.components is None:
            return "tuple"
        return "(" + ", ".join(resolve_type_name(c) for c in type_name.components) + ")"

    if isinstance(type_name, FunctionTypeName):
        return "function"

    if isinstance(type_name, AddressTypeName):
        if type_name.state_mutability == "payable":
            return "address payable"
        return "address"

    if isinstance(type_name, UnknownTypeName) and type_name.type_string:
        return type_name.type_string

    return UNKNOWN


def resolve_parameter_type(param: Parameter) -> str:
    """Resolve a parameter's type, falling back to its free-text description."""
    resolved = resolve_type_name(param.type_name)
    if resolved == UNKNOWN and param.type_string:
        return param.type_string
    return resolved


def format_return_type(parameters: list[Parameter]) -> str | None:
    """Describe a function's return values, or None if it returns nothing.

    Named return values are shown as ``name: type`` pairs, but only when
    every value is named; otherwise just the types are listed.
    """
    if not parameters:
        return None

    types = [resolve_parameter_type(p) for p in parameters]
    names = [p.name for p in parameters if p.name]

    if names and len(names) == len(types):
        return ", ".join(f"{name}: {typ}" for name, typ in zip(names, types))
    return ", ".join(types)
