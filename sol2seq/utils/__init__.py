"""Collaborators around the core: solc invocation, AST merging, source discovery."""
