"""Prefix resolution, grammar matching and invocation assembly."""

from __future__ import annotations

from .invoke import command_invocation, help_invocation, unresolved
from .matcher import CommandMatcher, parse_command
from .prefix import blocking_prefix, parse_prefix
from .resolve import Grammar, resolve_message

__all__ = [
    "CommandMatcher",
    "Grammar",
    "blocking_prefix",
    "command_invocation",
    "help_invocation",
    "parse_command",
    "parse_prefix",
    "resolve_message",
    "unresolved",
]
