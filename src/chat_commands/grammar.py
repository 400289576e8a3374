"""Declarative command grammar: commands, groups and resolution settings."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias

from .errors import ConfigError

MatchMode = Literal["by_space", "by_length"]
MATCH_MODES: tuple[MatchMode, ...] = ("by_space", "by_length")

PrefixProvider: TypeAlias = Callable[[Any, str], str | None | Awaitable[str | None]]


def _as_tuple(value: Any) -> tuple[Any, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


@dataclass(frozen=True, slots=True)
class Command:
    """A named command with aliases and optional nested sub-commands.

    Aliases are tried in declared order. Sub-commands are tried after an
    alias matched and replace this command as the result when one matches.
    """

    names: tuple[str, ...]
    sub_commands: tuple[Command, ...] = ()
    description: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", _as_tuple(self.names))
        object.__setattr__(self, "sub_commands", tuple(self.sub_commands))
        if not self.names:
            raise ConfigError("command needs at least one name")
        for name in self.names:
            if not isinstance(name, str) or not name:
                raise ConfigError(f"invalid command name {name!r}")

    @property
    def name(self) -> str:
        return self.names[0]


@dataclass(frozen=True, slots=True)
class CommandGroup:
    """A namespace of commands, optionally gated by its own prefixes."""

    name: str
    prefixes: tuple[str, ...] = ()
    commands: tuple[Command, ...] = ()
    sub_groups: tuple[CommandGroup, ...] = ()
    default_command: Command | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "prefixes", _as_tuple(self.prefixes))
        object.__setattr__(self, "commands", tuple(self.commands))
        object.__setattr__(self, "sub_groups", tuple(self.sub_groups))
        for prefix in self.prefixes:
            if not isinstance(prefix, str) or not prefix:
                raise ConfigError(
                    f"group {self.name!r} has an invalid prefix {prefix!r}"
                )


@dataclass(frozen=True, slots=True)
class WhitespaceOptions:
    """Whether whitespace is consumed after each kind of matched token."""

    prefixes: bool = False
    groups: bool = True
    commands: bool = True


@dataclass(frozen=True, slots=True)
class Configuration:
    prefixes: tuple[str, ...] = ()
    dynamic_prefixes: tuple[PrefixProvider, ...] = ()
    on_mention: str | None = None
    match_mode: MatchMode = "by_space"
    case_insensitive: bool = False
    disabled_commands: frozenset[str] = frozenset()
    with_whitespace: WhitespaceOptions = field(default_factory=WhitespaceOptions)

    def __post_init__(self) -> None:
        object.__setattr__(self, "prefixes", _as_tuple(self.prefixes))
        object.__setattr__(self, "dynamic_prefixes", tuple(self.dynamic_prefixes))
        object.__setattr__(
            self, "disabled_commands", frozenset(_as_tuple(self.disabled_commands))
        )
        if self.match_mode not in MATCH_MODES:
            raise ConfigError(f"unknown match mode {self.match_mode!r}")
        for prefix in self.prefixes:
            # An empty prefix matches every message as addressed.
            if not isinstance(prefix, str):
                raise ConfigError(f"invalid prefix {prefix!r}")
        if self.on_mention is not None and not (
            self.on_mention.isdigit() and self.on_mention.isascii()
        ):
            raise ConfigError(f"mention id must be numeric, got {self.on_mention!r}")

    @property
    def has_prefixes(self) -> bool:
        return bool(self.prefixes or self.dynamic_prefixes)


def walk_groups(groups: tuple[CommandGroup, ...]) -> Iterator[CommandGroup]:
    """Yield every group depth-first, in declared order."""
    for group in groups:
        yield group
        yield from walk_groups(group.sub_groups)
