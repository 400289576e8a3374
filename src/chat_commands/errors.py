"""Exceptions raised while building or loading a command grammar.

Resolution itself never raises: unmatched input is reported through
:class:`chat_commands.types.Unresolved`.
"""

from __future__ import annotations


class ChatCommandsError(Exception):
    """Base class for chat_commands errors."""


class ConfigError(ChatCommandsError):
    """A grammar definition or grammar file is invalid."""
