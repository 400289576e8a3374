"""Tests for grammar construction."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from chat_commands import Command, CommandGroup, ConfigError, Configuration, grammar_from_mapping


def test_sequences_are_frozen_to_tuples() -> None:
    command = Command(names=["ping", "p"])
    group = CommandGroup(name="g", prefixes=["x"], commands=[command])
    config = Configuration(prefixes=["!"], disabled_commands=["ping"])

    assert command.names == ("ping", "p")
    assert command.name == "ping"
    assert group.prefixes == ("x",)
    assert group.commands == (command,)
    assert config.prefixes == ("!",)
    assert config.disabled_commands == frozenset({"ping"})


def test_single_string_is_one_name() -> None:
    assert Command(names="ping").names == ("ping",)
    assert Configuration(prefixes="!!").prefixes == ("!!",)


@pytest.mark.parametrize("names", [(), ("",), ("ok", 3)])
def test_invalid_command_names(names) -> None:
    with pytest.raises(ConfigError):
        Command(names=names)


def test_invalid_group_prefix() -> None:
    with pytest.raises(ConfigError, match="group 'g'"):
        CommandGroup(name="g", prefixes=("",))


def test_has_prefixes() -> None:
    assert Configuration().has_prefixes is False
    assert Configuration(prefixes=("!",)).has_prefixes is True
    assert Configuration(dynamic_prefixes=(lambda ctx, msg: None,)).has_prefixes is True


def test_shadowed_alias_is_logged() -> None:
    data = {
        "commands": {"a": {"names": ["go"]}, "b": {"names": ["stop", "go"]}},
        "groups": [{"name": "g", "commands": ["a", "b"]}],
    }

    with capture_logs() as logs:
        grammar_from_mapping(data)

    assert logs == [
        {
            "event": "chat_commands.config.shadowed_alias",
            "log_level": "warning",
            "group": "g",
            "alias": "go",
            "winner": "go",
            "shadowed": "stop",
        }
    ]


def test_shadowed_alias_logged_for_same_primary_name() -> None:
    data = {
        "commands": {"first": {"names": ["dup"]}, "second": {"names": ["dup"]}},
        "groups": [{"name": "g", "commands": ["first", "second"]}],
    }

    with capture_logs() as logs:
        grammar_from_mapping(data)

    assert [(log["alias"], log["winner"], log["shadowed"]) for log in logs] == [
        ("dup", "dup", "dup")
    ]
