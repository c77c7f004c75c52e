"""Exceptions raised by sol2seq.

Only structural problems are errors. Missing names, types and other leaf
data degrade to placeholders and never raise.
"""


class Sol2SeqError(Exception):
    """Base class for all sol2seq failures."""


class AstStructureError(Sol2SeqError, ValueError):
    """The AST document lacks a required array or object."""


class CompilerError(Sol2SeqError, RuntimeError):
    """solc could not be run or produced unusable output."""


class ConfigError(Sol2SeqError, ValueError):
    """A configuration file is unreadable or has unexpected content."""
