"""Full message resolution: prefix classification then grammar matching."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..grammar import CommandGroup, Configuration
from ..logging import get_logger
from ..types import CommandInvocation, HelpInvocation, Invocation, Unresolved
from .matcher import parse_command
from .prefix import parse_prefix

logger = get_logger("chat_commands.parsing.resolve")


async def resolve_message(
    ctx: Any,
    message: str,
    *,
    config: Configuration,
    groups: Sequence[CommandGroup],
    help_names: Sequence[str] | None = None,
) -> Invocation | Unresolved:
    """Resolve *message* into an invocation.

    The result depends only on the inputs (and on what the dynamic prefix
    providers return), so resolving the same message twice against the same
    grammar yields equal results.
    """
    prefix, rest = await parse_prefix(ctx, message, config)
    result = parse_command(rest, prefix, groups, config, help_names)
    if isinstance(result, CommandInvocation):
        logger.debug(
            "chat_commands.resolve.command",
            prefix=prefix,
            group=result.group.name,
            command=result.command.name,
        )
    elif isinstance(result, HelpInvocation):
        logger.debug("chat_commands.resolve.help", prefix=prefix, name=result.name)
    return result


@dataclass(frozen=True, slots=True)
class Grammar:
    """A long-lived grammar: settings, top-level groups and help names.

    Built once at startup and shared read-only by concurrent resolutions.
    """

    config: Configuration
    groups: tuple[CommandGroup, ...]
    help_names: tuple[str, ...] = ()

    async def resolve(self, ctx: Any, message: str) -> Invocation | Unresolved:
        return await resolve_message(
            ctx,
            message,
            config=self.config,
            groups=self.groups,
            help_names=self.help_names,
        )
