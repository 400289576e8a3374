"""Resolve chat messages into command invocations.

A grammar of prefixes, command groups and commands is declared once at
startup. Each incoming message is classified by its prefix (mention,
punctuation or none) and matched against the grammar, yielding a
:class:`CommandInvocation`, a :class:`HelpInvocation` or :class:`Unresolved`.
"""

from __future__ import annotations

from .config import grammar_from_mapping, load_grammar
from .cursor import MENTION_RE, Cursor, Mark
from .errors import ChatCommandsError, ConfigError
from .grammar import (
    Command,
    CommandGroup,
    Configuration,
    MatchMode,
    PrefixProvider,
    WhitespaceOptions,
)
from .parsing import (
    Grammar,
    blocking_prefix,
    parse_command,
    parse_prefix,
    resolve_message,
)
from .types import (
    CommandInvocation,
    HelpInvocation,
    Invocation,
    Mention,
    NoPrefix,
    Prefix,
    Punctuation,
    Unresolved,
)

__all__ = [
    "MENTION_RE",
    "ChatCommandsError",
    "Command",
    "CommandGroup",
    "CommandInvocation",
    "ConfigError",
    "Configuration",
    "Cursor",
    "Grammar",
    "HelpInvocation",
    "Invocation",
    "Mark",
    "MatchMode",
    "Mention",
    "NoPrefix",
    "Prefix",
    "PrefixProvider",
    "Punctuation",
    "Unresolved",
    "WhitespaceOptions",
    "blocking_prefix",
    "grammar_from_mapping",
    "load_grammar",
    "parse_command",
    "parse_prefix",
    "resolve_message",
]
