"""Merge per-file AST documents into one."""

from __future__ import annotations

import copy
from typing import Any


def merge_ast_json(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge ``source`` into ``target`` in place and return ``target``.

    Top-level arrays are concatenated and top-level objects are merged one
    level deep: their array members are concatenated, and any other member
    present in both is replaced by the source value. A file that appears
    under ``sources`` in both documents is therefore kept once.
    Values taken from ``source`` are copied, so ``source`` is never aliased.
    """
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(existing, list) and isinstance(value, list):
            existing.extend(copy.deepcopy(value))
        elif isinstance(existing, dict) and isinstance(value, dict):
            _merge_members(existing, value)
        else:
            target[key] = copy.deepcopy(value)

    return target


def _merge_members(target: dict[str, Any], source: dict[str, Any]) -> None:
    for key, value in source.items():
        existing = target.get(key)
        if isinstance(existing, list) and isinstance(value, list):
            existing.extend(copy.deepcopy(value))
        else:
            target[key] = copy.deepcopy(value)
