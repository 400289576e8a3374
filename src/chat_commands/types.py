"""Result types produced by command resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from .grammar import Command, CommandGroup


@dataclass(frozen=True, slots=True)
class Mention:
    """The message addressed the bot with a `<@id>` mention."""

    id: str


@dataclass(frozen=True, slots=True)
class Punctuation:
    """The message started with a configured (static or dynamic) prefix."""

    text: str


@dataclass(frozen=True, slots=True)
class NoPrefix:
    pass


Prefix: TypeAlias = Mention | Punctuation | NoPrefix


@dataclass(frozen=True, slots=True)
class CommandInvocation:
    prefix: Prefix
    group: CommandGroup
    group_prefix: str | None
    command: Command
    args: str


@dataclass(frozen=True, slots=True)
class HelpInvocation:
    prefix: Prefix
    name: str
    args: str


Invocation: TypeAlias = CommandInvocation | HelpInvocation


@dataclass(frozen=True, slots=True)
class Unresolved:
    """No group or command matched.

    ``token`` is the last peeked text that failed to equal a command name,
    or ``None`` when no name comparison happened.
    """

    token: str | None = None
