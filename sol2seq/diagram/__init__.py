"""Mermaid sequence-diagram rendering from the intermediate model."""
