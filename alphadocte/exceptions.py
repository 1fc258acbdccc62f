"""
exceptions.py

Error types raised by the game, the solvers and their collaborators.
"""

from __future__ import annotations


class AlphadocteError(Exception):
    """Root of every error raised by this package."""


class ArgumentError(AlphadocteError, ValueError):
    """The caller supplied invalid input (lengths, characters, templates, missing rules)."""


class StateError(AlphadocteError, RuntimeError):
    """The operation is not allowed in the current state of the object."""


class CacheError(AlphadocteError):
    """A cached entry is missing, outdated or malformed."""
