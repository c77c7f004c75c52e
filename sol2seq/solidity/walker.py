"""Body walker — turns a function's statements into sequence-diagram lines.

Loops and conditionals become ``loop``/``alt`` blocks whose contents are
indented one level (4 spaces) per nesting depth. Calls through member
access become call/return pairs, emits become messages to the ``Events``
lane. Statement kinds without a diagram meaning are skipped.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from sol2seq.ir.models import EVENTS, RECIPIENT, TOKEN_CONTRACT
from sol2seq.solidity.heuristics import (
    get_function_purpose,
    get_literal_type,
    guess_type_from_name,
)
from sol2seq.solidity.nodes import (
    BinaryOperation,
    EmitStatement,
    Expression,
    ExpressionStatement,
    ForStatement,
    FunctionCall,
    Identifier,
    IfStatement,
    Literal,
    MemberAccess,
    Statement,
    VariableDeclarationStatement,
)
from sol2seq.solidity.types import UNKNOWN, resolve_type_name

INDENT = "    "

# Member names treated as value transfers
TRANSFER_MEMBERS = {"transfer", "send"}
TOKEN_MEMBERS = {"transferFrom", "transfer"}
CAST_TRANSFER_MEMBERS = {"transfer", "send", "call"}


@dataclass
class ResolvedArgument:
    """A call argument as shown in a message, with its (guessed) type."""

    text: str
    type_name: str | None = None

    def render(self) -> str:
        if self.type_name:
            return f"{self.text}: {self.type_name}"
        return self.text


@dataclass
class BodyTrace:
    """Output of walking one function body."""

    lines: list[str] = field(default_factory=list)
    call_targets: list[str] = field(default_factory=list)  # Lane names, in call order

    def extend_nested(self, nested: BodyTrace) -> None:
        self.lines.extend(INDENT + line for line in nested.lines)
        self.call_targets.extend(nested.call_targets)


def resolve_arguments(arguments: list[Expression]) -> list[ResolvedArgument]:
    """Resolve call arguments, dropping the ones with no readable form."""
    resolved = []
    for arg in arguments:
        if isinstance(arg, Identifier):
            if arg.name is not None:
                resolved.append(ResolvedArgument(arg.name, guess_type_from_name(arg.name)))
        elif isinstance(arg, Literal):
            if arg.has_value:
                text = json.dumps(arg.value, ensure_ascii=False)
                resolved.append(ResolvedArgument(text, get_literal_type(arg)))
    return resolved


def format_arguments(arguments: list[Expression]) -> str:
    return ", ".join(arg.render() for arg in resolve_arguments(arguments))


class BodyWalker:
    """Walks the statements of one function of one contract."""

    def __init__(self, contract_name: str):
        self.contract_name = contract_name

    def walk(self, statements: list[Statement]) -> BodyTrace:
        trace = BodyTrace()
        for statement in statements:
            if isinstance(statement, ForStatement):
                self._walk_loop(statement, trace)
            elif isinstance(statement, IfStatement):
                self._walk_conditional(statement, trace)
            elif isinstance(statement, EmitStatement):
                self._walk_emit(statement, trace)
            elif isinstance(statement, ExpressionStatement):
                self._walk_call(statement, trace)
            elif isinstance(statement, VariableDeclarationStatement):
                self._walk_declaration(statement, trace)
        return trace

    # ── Control flow ─────────────────────────────────────────────────

    def _walk_loop(self, statement: ForStatement, trace: BodyTrace) -> None:
        description = "For each item"
        for var in statement.loop_variables:
            description = f"For each {var.name}"
            var_type = resolve_type_name(var.type_name)
            if var_type != UNKNOWN:
                description = f"For each {var.name}: {var_type}"

        trace.lines.append(f"loop {description}")
        trace.extend_nested(self.walk(statement.body))
        trace.lines.append("end")

    def _walk_conditional(self, statement: IfStatement, trace: BodyTrace) -> None:
        trace.lines.append(f"alt {describe_condition(statement.condition)}")
        trace.extend_nested(self.walk(statement.true_body))
        if statement.false_body is not None:
            trace.lines.append("else")
            trace.extend_nested(self.walk(statement.false_body))
        trace.lines.append("end")

    # ── Messages ─────────────────────────────────────────────────────

    def _walk_emit(self, statement: EmitStatement, trace: BodyTrace) -> None:
        event_call = statement.event_call
        if not isinstance(event_call, FunctionCall):
            return
        callee = event_call.expression
        if not isinstance(callee, Identifier) or callee.name is None:
            return

        args = format_arguments(event_call.arguments)
        trace.lines.append(f"{self.contract_name}->>{EVENTS}: emit {callee.name}({args})")

    def _walk_call(self, statement: ExpressionStatement, trace: BodyTrace) -> None:
        call = statement.expression
        if not isinstance(call, FunctionCall) or not isinstance(call.expression, MemberAccess):
            return

        member = call.expression.member_name or "unknown"
        base = call.expression.expression
        args = format_arguments(call.arguments)

        if isinstance(base, Identifier):
            self._emit_member_call(base.name or "Unknown", member, args, trace)
        elif isinstance(base, FunctionCall) and base.kind == "typeConversion":
            # payable(recipient).transfer(amount) and friends
            if member in CAST_TRANSFER_MEMBERS:
                contract = self.contract_name
                trace.lines.append(f"{contract}->>+{RECIPIENT}: ETH {member}({args})")
                trace.lines.append(f"{RECIPIENT}-->>-{contract}: return (success)")
                trace.call_targets.append(RECIPIENT)

    def _emit_member_call(self, target: str, member: str, args: str, trace: BodyTrace) -> None:
        contract = self.contract_name

        purpose = get_function_purpose(member)
        if purpose:
            trace.lines.append(f"Note right of {contract}: {purpose}")

        if member in TRANSFER_MEMBERS:
            trace.lines.append(f"{contract}->>+{target}: {member}({args})")
            trace.lines.append(f"{target}-->>-{contract}: return (success)")
            trace.call_targets.append(target)
        elif member in TOKEN_MEMBERS and "token" in target.lower():
            trace.lines.append(f"{contract}->>+{TOKEN_CONTRACT}: {member}({args})")
            trace.lines.append(f"{TOKEN_CONTRACT}-->>-{contract}: return (success)")
            trace.call_targets.append(TOKEN_CONTRACT)
        else:
            trace.lines.append(f"{contract}->>+{target}: {member}({args})")
            trace.lines.append(f"{target}-->>-{contract}: return")
            trace.call_targets.append(target)

    def _walk_declaration(self, statement: VariableDeclarationStatement, trace: BodyTrace) -> None:
        call = statement.initial_value
        if not isinstance(call, FunctionCall) or not isinstance(call.expression, MemberAccess):
            return
        base = call.expression.expression
        if not isinstance(base, Identifier):
            return

        contract = self.contract_name
        target = base.name or "Unknown"
        member = call.expression.member_name or "unknown"
        args = format_arguments(call.arguments)
        assigned = ", ".join(statement.names) if statement.names else "result"

        trace.lines.append(f"{contract}->>+{target}: {member}({args})")
        trace.lines.append(f"{target}-->>-{contract}: return → {assigned}")
        trace.call_targets.append(target)


def describe_condition(condition: Expression) -> str:
    """Render ``if <var> <op> <value>`` for identifier-vs-literal comparisons."""
    if (
        isinstance(condition, BinaryOperation)
        and condition.operator
        and isinstance(condition.left, Identifier)
        and condition.left.name is not None
        and isinstance(condition.right, Literal)
    ):
        value = condition.right.value
        if isinstance(value, str):
            return f"if {condition.left.name} {condition.operator} {value}"
        if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
            return f"if {condition.left.name} {condition.operator} {value}"
    return "if condition"


def walk_function_body(contract_name: str, statements: list[Statement]) -> BodyTrace:
    """Walk a function body and return its diagram lines and call targets."""
    return BodyWalker(contract_name).walk(statements)
