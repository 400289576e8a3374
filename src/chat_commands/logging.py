"""Logger access for chat_commands."""

from __future__ import annotations

import structlog


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to *name*.

    Events are dotted identifiers with keyword fields, e.g.
    ``logger.debug("chat_commands.prefix.matched", prefix="!")``.
    """
    return structlog.get_logger(name)
