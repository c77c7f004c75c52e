"""Intermediate model shared by the extractor and the diagram renderer.

The model normalizes what the extractor pulls out of a compiler AST:
- Participants (contracts plus the synthetic User/Events lanes)
- Per-contract facts (events, functions, state variables, bases)
- Interaction lines (user calls and per-function contract calls)
- Relationships (inheritance, references, calls)
"""
