"""Shared grammar builders for chat_commands tests."""

from __future__ import annotations

from typing import Any

from chat_commands import Command, CommandGroup, Configuration, WhitespaceOptions

PING = Command(names=("ping",))
ECHO = Command(names=("echo", "say"))
STATUS = Command(names=("status",))
ROLE_ADD = Command(names=("add",))
ROLE_REMOVE = Command(names=("remove", "rm"))
ROLE = Command(names=("role",), sub_commands=(ROLE_ADD, ROLE_REMOVE))


def make_config(**overrides: Any) -> Configuration:
    values: dict[str, Any] = {"prefixes": ("!",)}
    values.update(overrides)
    return Configuration(**values)


def whitespace(**overrides: bool) -> WhitespaceOptions:
    return WhitespaceOptions(**overrides)


def general_group(*commands: Command) -> CommandGroup:
    return CommandGroup(name="general", commands=commands or (PING, ECHO, ROLE))


def admin_group() -> CommandGroup:
    """`admin` group with a nested `mod` sub-group and a default command."""
    mod = CommandGroup(name="mod", prefixes=("mod",), commands=(ECHO,))
    return CommandGroup(
        name="admin",
        prefixes=("admin", "adm"),
        commands=(PING,),
        sub_groups=(mod,),
        default_command=STATUS,
    )
