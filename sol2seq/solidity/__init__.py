"""Solidity AST handling.

Decodes compiler JSON into typed nodes, resolves type names, classifies
identifiers heuristically, walks function bodies and extracts contract
facts into the intermediate model.
"""
