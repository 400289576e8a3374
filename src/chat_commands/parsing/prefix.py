"""Prefix resolution: mention, dynamic prefixes, then static prefixes."""

from __future__ import annotations

from collections.abc import Callable
import inspect
from typing import Any

import anyio.to_thread

from ..cursor import MENTION_RE, Cursor
from ..grammar import Configuration, PrefixProvider
from ..logging import get_logger
from ..types import Mention, NoPrefix, Prefix, Punctuation

logger = get_logger("chat_commands.parsing.prefix")


def blocking_prefix(func: Callable[[Any, str], str | None]) -> PrefixProvider:
    """Wrap a blocking prefix lookup so it runs in a worker thread."""

    async def provider(ctx: Any, message: str) -> str | None:
        return await anyio.to_thread.run_sync(func, ctx, message)

    provider.__name__ = getattr(func, "__name__", "blocking_prefix")
    return provider


async def _call_provider(provider: PrefixProvider, ctx: Any, message: str) -> str | None:
    candidate = provider(ctx, message)
    if inspect.isawaitable(candidate):
        candidate = await candidate
    return candidate


def _peek_prefix(cursor: Cursor, candidate: str) -> str | None:
    peeked = cursor.peek_for(len(candidate))
    return peeked if peeked == candidate else None


async def _match_prefix(
    ctx: Any, message: str, cursor: Cursor, config: Configuration
) -> str | None:
    for provider in config.dynamic_prefixes:
        candidate = await _call_provider(provider, ctx, message)
        if candidate is None:
            continue
        matched = _peek_prefix(cursor, candidate)
        if matched is not None:
            logger.debug("chat_commands.prefix.dynamic_matched", prefix=matched)
            return matched

    for candidate in config.prefixes:
        matched = _peek_prefix(cursor, candidate)
        if matched is not None:
            return matched
    return None


async def parse_prefix(
    ctx: Any, message: str, config: Configuration
) -> tuple[Prefix, str]:
    """Classify the prefix of *message* and return it with the remaining text.

    The mention form is tried first when ``config.on_mention`` is set, then
    dynamic prefixes and finally static prefixes, each in declared order.
    The first candidate whose text the message starts with wins; a shorter
    prefix declared earlier beats a longer one declared later.

    Args:
        ctx: Opaque context handed to dynamic prefix providers.
        message: The raw message text.
        config: Resolution settings.

    Returns:
        A ``(prefix, rest)`` tuple. ``rest`` is stripped unless the prefix
        is a mention.
    """
    cursor = Cursor(message)
    cursor.skip_whitespace()

    if config.on_mention is not None:
        mark = cursor.position()
        mention_id = cursor.extract(MENTION_RE)
        if mention_id and mention_id.isdigit() and mention_id == config.on_mention:
            cursor.skip_whitespace()
            logger.debug("chat_commands.prefix.mention", id=mention_id)
            return Mention(mention_id), cursor.rest()
        cursor.restore(mark)

    matched = None
    if config.has_prefixes:
        matched = await _match_prefix(ctx, message, cursor, config)

    if matched is not None:
        cursor.advance(len(matched))
        if config.with_whitespace.prefixes:
            cursor.skip_whitespace()
        return Punctuation(matched), cursor.rest().strip()

    if config.with_whitespace.prefixes:
        cursor.skip_whitespace()
    return NoPrefix(), cursor.rest().strip()
