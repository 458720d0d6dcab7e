"""
Exception classes for scriptree.

Parsing, structural and configuration failures each get their own type so the
CLI can render them uniformly while callers can still catch the builtin base
(``ValueError`` / ``RuntimeError``) they would expect.
"""

from __future__ import annotations


class ScriptreeError(Exception):
    """Base exception for all scriptree errors."""

    pass


class ParseError(ScriptreeError, ValueError):
    """Raised when a script file cannot be turned into a Script."""

    def __init__(self, file_name: str, reason: str):
        """
        Initialize the exception.

        Params:
            file_name: The file being parsed
            reason: What is structurally wrong with it
        """
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Error parsing '{file_name}': {reason}")


class StructureError(ScriptreeError, RuntimeError):
    """Raised when a Script references a key that resolves to nothing."""

    def __init__(self, key: str, reason: str):
        """
        Initialize the exception.

        Params:
            key: The hierarchical key that failed to resolve
            reason: Why the script is inconsistent at that key
        """
        self.key = key
        self.reason = reason
        super().__init__(f"Inconsistent script at '{key}': {reason}")


class ConfigError(ScriptreeError, ValueError):
    """Raised when a configuration key or value is invalid."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration '{key}': {reason}")
