"""Load a command grammar from a TOML file or a parsed mapping."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import os
from pathlib import Path
import tomllib
from typing import Any

from .errors import ConfigError
from .grammar import (
    Command,
    CommandGroup,
    Configuration,
    PrefixProvider,
    WhitespaceOptions,
    walk_groups,
)
from .logging import get_logger
from .parsing.resolve import Grammar

logger = get_logger("chat_commands.config")


def _expand_path(s: str | Path) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(str(s))))


def _str_list(
    value: Any, *, where: str, allow_empty: bool = False
) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigError(f"{where} must be a list of strings")
    for item in value:
        if not isinstance(item, str) or not (item or allow_empty):
            raise ConfigError(f"{where} must contain non-empty strings, got {item!r}")
    return tuple(value)


def _bool(value: Any, *, where: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"{where} must be true or false")
    return value


def _table(value: Any, *, where: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"{where} must be a table")
    return value


def _build_configuration(
    raw: Mapping[str, Any], dynamic_prefixes: Sequence[PrefixProvider]
) -> Configuration:
    whitespace = _table(raw.get("with_whitespace"), where="config.with_whitespace")
    defaults = WhitespaceOptions()
    on_mention = raw.get("on_mention")
    if on_mention is not None and not isinstance(on_mention, (str, int)):
        raise ConfigError("config.on_mention must be a string or integer")
    match_mode = raw.get("match_mode", "by_space")
    if not isinstance(match_mode, str):
        raise ConfigError("config.match_mode must be a string")

    return Configuration(
        prefixes=_str_list(
            raw.get("prefixes"), where="config.prefixes", allow_empty=True
        ),
        dynamic_prefixes=tuple(dynamic_prefixes),
        on_mention=str(on_mention) if on_mention is not None else None,
        match_mode=match_mode,  # type: ignore[arg-type]
        case_insensitive=_bool(
            raw.get("case_insensitive"),
            where="config.case_insensitive",
            default=False,
        ),
        disabled_commands=frozenset(
            _str_list(raw.get("disabled_commands"), where="config.disabled_commands")
        ),
        with_whitespace=WhitespaceOptions(
            prefixes=_bool(
                whitespace.get("prefixes"),
                where="config.with_whitespace.prefixes",
                default=defaults.prefixes,
            ),
            groups=_bool(
                whitespace.get("groups"),
                where="config.with_whitespace.groups",
                default=defaults.groups,
            ),
            commands=_bool(
                whitespace.get("commands"),
                where="config.with_whitespace.commands",
                default=defaults.commands,
            ),
        ),
    )


class _CommandBuilder:
    """Resolves `[commands.<id>]` tables into shared `Command` nodes."""

    def __init__(self, raw: Mapping[str, Any]) -> None:
        self._raw = raw
        self._built: dict[str, Command] = {}
        self._visiting: list[str] = []

    def get(self, command_id: str, *, where: str) -> Command:
        if command_id in self._built:
            return self._built[command_id]
        if command_id not in self._raw:
            raise ConfigError(f"{where} references unknown command {command_id!r}")
        if command_id in self._visiting:
            cycle = " -> ".join([*self._visiting, command_id])
            raise ConfigError(f"sub-command cycle: {cycle}")

        entry = _table(self._raw[command_id], where=f"commands.{command_id}")
        self._visiting.append(command_id)
        try:
            sub_ids = _str_list(
                entry.get("sub_commands"), where=f"commands.{command_id}.sub_commands"
            )
            subs = tuple(
                self.get(sub_id, where=f"commands.{command_id}.sub_commands")
                for sub_id in sub_ids
            )
        finally:
            self._visiting.pop()

        names = _str_list(entry.get("names"), where=f"commands.{command_id}.names")
        description = entry.get("description")
        if description is not None and not isinstance(description, str):
            raise ConfigError(f"commands.{command_id}.description must be a string")
        command = Command(
            names=names or (command_id,),
            sub_commands=subs,
            description=description,
        )
        self._built[command_id] = command
        return command


class _GroupBuilder:
    def __init__(
        self, raw_groups: Sequence[Mapping[str, Any]], commands: _CommandBuilder
    ) -> None:
        self._commands = commands
        self._raw: dict[str, Mapping[str, Any]] = {}
        self._order: list[str] = []
        self._built: dict[str, CommandGroup] = {}
        self._visiting: list[str] = []
        for index, entry in enumerate(raw_groups):
            entry = _table(entry, where=f"groups[{index}]")
            name = entry.get("name")
            if not isinstance(name, str) or not name:
                raise ConfigError(f"groups[{index}].name must be a non-empty string")
            if name in self._raw:
                raise ConfigError(f"duplicate group name {name!r}")
            self._raw[name] = entry
            self._order.append(name)

    def get(self, name: str, *, where: str) -> CommandGroup:
        if name in self._built:
            return self._built[name]
        if name not in self._raw:
            raise ConfigError(f"{where} references unknown group {name!r}")
        if name in self._visiting:
            cycle = " -> ".join([*self._visiting, name])
            raise ConfigError(f"sub-group cycle: {cycle}")

        entry = self._raw[name]
        where_group = f"groups.{name}"
        self._visiting.append(name)
        try:
            sub_names = _str_list(
                entry.get("sub_groups"), where=f"{where_group}.sub_groups"
            )
            subs = tuple(
                self.get(sub, where=f"{where_group}.sub_groups") for sub in sub_names
            )
        finally:
            self._visiting.pop()

        command_ids = _str_list(entry.get("commands"), where=f"{where_group}.commands")
        commands = tuple(
            self._commands.get(command_id, where=f"{where_group}.commands")
            for command_id in command_ids
        )
        default_id = entry.get("default_command")
        default = None
        if default_id is not None:
            if not isinstance(default_id, str):
                raise ConfigError(f"{where_group}.default_command must be a string")
            default = self._commands.get(
                default_id, where=f"{where_group}.default_command"
            )

        group = CommandGroup(
            name=name,
            prefixes=_str_list(entry.get("prefixes"), where=f"{where_group}.prefixes"),
            commands=commands,
            sub_groups=subs,
            default_command=default,
        )
        self._built[name] = group
        return group

    def top_level(self) -> tuple[CommandGroup, ...]:
        # Build every group so unreachable cycles are still reported.
        built = [self.get(name, where="groups") for name in self._order]
        nested = {sub.name for group in built for sub in group.sub_groups}
        return tuple(group for group in built if group.name not in nested)


def _warn_duplicate_aliases(groups: tuple[CommandGroup, ...]) -> None:
    for group in walk_groups(groups):
        seen: dict[str, Command] = {}
        for command in group.commands:
            for alias in command.names:
                owner = seen.setdefault(alias, command)
                if owner is not command:
                    logger.warning(
                        "chat_commands.config.shadowed_alias",
                        group=group.name,
                        alias=alias,
                        winner=owner.name,
                        shadowed=command.name,
                    )


def grammar_from_mapping(
    data: Mapping[str, Any],
    *,
    dynamic_prefixes: Sequence[PrefixProvider] = (),
) -> Grammar:
    """Build a :class:`Grammar` from an already parsed mapping.

    Dynamic prefix providers are code, not data, so they are passed in
    separately and appended to the configuration.

    Raises:
        ConfigError: On unknown references, cycles or badly typed values.
    """
    config = _build_configuration(
        _table(data.get("config"), where="config"), dynamic_prefixes
    )
    commands = _CommandBuilder(_table(data.get("commands"), where="commands"))

    raw_groups = data.get("groups") or []
    if not isinstance(raw_groups, list):
        raise ConfigError("groups must be an array of tables")
    groups = _GroupBuilder(raw_groups, commands).top_level()

    help_names = _str_list(data.get("help_names"), where="help_names")
    _warn_duplicate_aliases(groups)
    return Grammar(config=config, groups=groups, help_names=help_names)


def load_grammar(
    path: str | Path,
    *,
    dynamic_prefixes: Sequence[PrefixProvider] = (),
) -> Grammar:
    """Read a grammar TOML file."""
    cfg_path = _expand_path(path)
    try:
        raw = cfg_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read grammar file {cfg_path}: {exc}") from exc
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML in {cfg_path}: {exc}") from exc

    grammar = grammar_from_mapping(data, dynamic_prefixes=dynamic_prefixes)
    logger.info(
        "chat_commands.config.loaded",
        path=str(cfg_path),
        groups=len(grammar.groups),
        prefixes=len(grammar.config.prefixes),
    )
    return grammar
