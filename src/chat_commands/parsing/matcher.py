"""Recursive-descent matching of groups and commands."""

from __future__ import annotations

from collections.abc import Sequence

from ..cursor import Cursor
from ..grammar import Command, CommandGroup, Configuration
from ..logging import get_logger
from ..types import Invocation, Prefix, Unresolved
from .invoke import command_invocation, help_invocation, unresolved

logger = get_logger("chat_commands.parsing.matcher")


class CommandMatcher:
    """Walks the group forest, then the command forest, in declared order.

    One matcher handles one message. Candidates that fail restore the
    cursor to the mark taken before they were tried.
    """

    def __init__(
        self,
        cursor: Cursor,
        groups: Sequence[CommandGroup],
        config: Configuration,
    ) -> None:
        self._cursor = cursor
        self._groups = groups
        self._config = config
        self._unrecognised: str | None = None

    def _next_text(self, literal: str) -> str:
        if self._config.match_mode == "by_length":
            return self._cursor.peek_for(len(literal))
        return self._cursor.peek_until(str.isspace)

    def _is_disabled(self, command: Command) -> bool:
        disabled = self._config.disabled_commands
        return any(name in disabled for name in command.names)

    def _name_matches(self, text: str, name: str) -> bool:
        if self._config.case_insensitive:
            return text.lower() == name.lower()
        return text == name

    def _command(self, command: Command) -> Command | None:
        # A disabled command still peeks so the unmatched token is reported.
        disabled = self._is_disabled(command)
        for name in command.names:
            text = self._next_text(name)
            if disabled or not self._name_matches(text, name):
                self._unrecognised = text
                continue

            # Advance by the original slice, not the folded name.
            self._cursor.advance(len(text))
            if self._config.with_whitespace.commands:
                self._cursor.skip_whitespace()

            self._unrecognised = None
            for sub in command.sub_commands:
                matched = self._command(sub)
                if matched is not None:
                    self._unrecognised = None
                    return matched
            self._unrecognised = None
            return command
        return None

    def _group(self, group: CommandGroup) -> tuple[str | None, CommandGroup]:
        for prefix in group.prefixes:
            text = self._next_text(prefix)
            if text != prefix:
                continue

            self._cursor.advance(len(text))
            if self._config.with_whitespace.groups:
                self._cursor.skip_whitespace()

            for sub_group in group.sub_groups:
                sub_prefix, matched = self._group(sub_group)
                if sub_prefix is not None:
                    return sub_prefix, matched
            return text, group
        return None, group

    def match(self, prefix: Prefix) -> Invocation | Unresolved:
        start = self._cursor.position()
        for top_group in self._groups:
            group_prefix, group = self._group(top_group)

            if group_prefix is None and group.prefixes:
                self._cursor.restore(start)
                continue

            for command in group.commands:
                matched = self._command(command)
                if matched is not None:
                    return command_invocation(
                        prefix, group, group_prefix, matched, self._cursor.rest()
                    )

            if group.default_command is not None and group_prefix is not None:
                logger.debug(
                    "chat_commands.matcher.default_command",
                    group=group.name,
                    command=group.default_command.name,
                )
                return command_invocation(
                    prefix,
                    group,
                    group_prefix,
                    group.default_command,
                    self._cursor.rest(),
                )

            self._cursor.restore(start)

        return unresolved(self._unrecognised)


def parse_command(
    text: str,
    prefix: Prefix,
    groups: Sequence[CommandGroup],
    config: Configuration,
    help_names: Sequence[str] | None = None,
) -> Invocation | Unresolved:
    """Match *text* (the message after its prefix) against the grammar.

    Help names are checked first and win over commands with the same name.
    """
    cursor = Cursor(text)
    cursor.skip_whitespace()

    for name in help_names or ():
        if cursor.eat(name):
            cursor.skip_whitespace()
            return help_invocation(prefix, name, cursor.rest())

    result = CommandMatcher(cursor, groups, config).match(prefix)
    if isinstance(result, Unresolved):
        logger.debug("chat_commands.matcher.unresolved", token=result.token)
    return result
