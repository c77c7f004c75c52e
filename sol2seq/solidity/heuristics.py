"""Naming-convention heuristics.

The AST often lacks resolved types for identifiers passed as call
arguments, so these rules approximate roles and types from names alone.
Rule order is significant: the first match wins.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sol2seq.solidity.nodes import Literal

# Checked in order against the lowercased function name
FUNCTION_PURPOSES = [
    ("constructor", "Contract initialization"),
    ("transfer", "Transfer tokens or ETH"),
    ("approve", "Approve token spending"),
    ("mint", "Create new tokens"),
    ("burn", "Destroy tokens"),
    ("deposit", "Deposit funds"),
    ("withdraw", "Withdraw funds"),
    ("claim", "Claim rewards or tokens"),
    ("stake", "Stake tokens"),
    ("unstake", "Unstake tokens"),
    ("vote", "Cast vote"),
    ("execute", "Execute operation"),
    ("deploy", "Deploy new contract instance"),
    ("predictAddress", "Calculate deterministic address"),
    ("airdrop", "Distribute tokens to addresses"),
    ("airdropToAddresses", "Send ETH to multiple addresses"),
    ("airdropToKeyIds", "Send ETH to wallets identified by public keys"),
]

IMPORTANT_VARIABLE_PREFIXES = (
    "owner",
    "admin",
    "token",
    "deployer",
    "implementation",
    "registry",
    "factory",
)

LITERAL_TYPES = {
    "number": "uint256",
    "string": "string",
    "bool": "bool",
}


def get_function_purpose(function_name: str) -> str | None:
    """Return a human description for well-known function names."""
    lowered = function_name.lower()
    for keyword, description in FUNCTION_PURPOSES:
        if keyword.lower() in lowered:
            return description
    return None


def is_important_variable(var_name: str) -> bool:
    """Check if a state variable is worth showing in the participant label."""
    lowered = var_name.lower()
    return any(prefix in lowered for prefix in IMPORTANT_VARIABLE_PREFIXES)


def guess_type_from_name(name: str) -> str:
    """Guess a Solidity type from an identifier name.

    The ``is``/``has`` prefixes and the ``Addr`` suffix are matched
    case-sensitively (camelCase convention); substrings are not.
    """
    lowered = name.lower()
    if name.startswith("is") or name.startswith("has"):
        return "bool"
    if "amount" in lowered or "value" in lowered or "balance" in lowered:
        return "uint256"
    if "address" in lowered or name.endswith("Addr"):
        return "address"
    if "id" in lowered:
        return "bytes32"
    if "key" in lowered:
        return "bytes"
    return "any"


def get_literal_type(literal: Literal) -> str:
    """Map a literal's declared kind to a Solidity type."""
    return LITERAL_TYPES.get(literal.kind or "", "any")
