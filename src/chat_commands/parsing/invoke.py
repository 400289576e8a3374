"""Assemble resolution results from matcher findings."""

from __future__ import annotations

from ..grammar import Command, CommandGroup
from ..types import CommandInvocation, HelpInvocation, Prefix, Unresolved


def command_invocation(
    prefix: Prefix,
    group: CommandGroup,
    group_prefix: str | None,
    command: Command,
    args: str,
) -> CommandInvocation:
    return CommandInvocation(
        prefix=prefix,
        group=group,
        group_prefix=group_prefix,
        command=command,
        args=args,
    )


def help_invocation(prefix: Prefix, name: str, args: str) -> HelpInvocation:
    return HelpInvocation(prefix=prefix, name=name, args=args)


def unresolved(token: str | None) -> Unresolved:
    return Unresolved(token=token)
