"""Command dictionary model and JSON loader.

WHY: SeqN writes repeat arguments as one flat bracketed list, while
FPrime needs them grouped. Only the command dictionary knows how many
sub-arguments make up one repetition, so the emitter looks each stem up
here to learn the arity of its repeat arguments.

HOW: The dictionary is a JSON document validated against
COMMAND_DICTIONARY_SCHEMA with jsonschema, then turned into frozen
dataclasses. ``fsw_command_map`` indexes commands by exact stem.

RULES:
- Loaded once, never mutated; safe to share between conversions
- Lookups use the exact stem; unknown stems yield no argument definitions
- Only arguments with arg_type "repeat" carry a RepeatDefinition
- Invalid documents raise DictionaryError with the failing JSON path
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import jsonschema

REPEAT_ARG_TYPE = "repeat"

_ARGUMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "arg_type"],
    "properties": {
        "name": {"type": "string"},
        "arg_type": {"type": "string"},
        "description": {"type": "string"},
        "repeat": {
            "type": "object",
            "required": ["arguments"],
            "properties": {
                "arguments": {"type": "array", "items": {"$ref": "#/definitions/argument"}},
                "min": {"type": ["integer", "null"]},
                "max": {"type": ["integer", "null"]},
            },
        },
    },
}

COMMAND_DICTIONARY_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["fswCommands"],
    "definitions": {"argument": _ARGUMENT_SCHEMA},
    "properties": {
        "header": {
            "type": "object",
            "properties": {
                "mission_name": {"type": "string"},
                "version": {"type": "string"},
            },
        },
        "fswCommands": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["stem"],
                "properties": {
                    "stem": {"type": "string", "minLength": 1},
                    "description": {"type": "string"},
                    "arguments": {
                        "type": "array",
                        "items": {"$ref": "#/definitions/argument"},
                    },
                },
            },
        },
    },
}


class DictionaryError(ValueError):
    """Raised when a command dictionary document is malformed."""


@dataclass(frozen=True)
class RepeatDefinition:
    """Sub-argument layout of one repetition of a repeat argument."""

    arguments: Tuple[ArgumentDefinition, ...]
    min: Optional[int] = None
    max: Optional[int] = None

    @property
    def arity(self) -> int:
        return len(self.arguments)


@dataclass(frozen=True)
class ArgumentDefinition:
    name: str
    arg_type: str
    description: str = ""
    repeat: Optional[RepeatDefinition] = None


@dataclass(frozen=True)
class CommandDefinition:
    stem: str
    arguments: Tuple[ArgumentDefinition, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class CommandDictionary:
    """Read-only catalog of flight software commands keyed by stem."""

    fsw_commands: Tuple[CommandDefinition, ...]
    header: Mapping[str, str] = field(default_factory=dict)

    @cached_property
    def fsw_command_map(self) -> Dict[str, CommandDefinition]:
        return {command.stem: command for command in self.fsw_commands}

    def lookup_arguments(self, stem: str) -> Tuple[ArgumentDefinition, ...]:
        """Return the argument definitions for ``stem`` (empty if unknown)."""
        command = self.fsw_command_map.get(stem)
        return command.arguments if command is not None else ()


def _parse_argument(data: Mapping[str, Any]) -> ArgumentDefinition:
    repeat = None
    if data["arg_type"] == REPEAT_ARG_TYPE and "repeat" in data:
        repeat_data = data["repeat"]
        repeat = RepeatDefinition(
            arguments=tuple(_parse_argument(arg) for arg in repeat_data["arguments"]),
            min=repeat_data.get("min"),
            max=repeat_data.get("max"),
        )
    return ArgumentDefinition(
        name=data["name"],
        arg_type=data["arg_type"],
        description=data.get("description", ""),
        repeat=repeat,
    )


def parse_command_dictionary(data: Mapping[str, Any]) -> CommandDictionary:
    """Validate a decoded JSON document and build a CommandDictionary.

    Raises:
        DictionaryError: The document does not match the schema.
    """
    try:
        jsonschema.validate(instance=data, schema=COMMAND_DICTIONARY_SCHEMA)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise DictionaryError(
            "Invalid command dictionary at {}: {}".format(location, exc.message)
        ) from exc

    commands: List[CommandDefinition] = []
    for entry in data["fswCommands"]:
        commands.append(CommandDefinition(
            stem=entry["stem"],
            arguments=tuple(_parse_argument(arg) for arg in entry.get("arguments", [])),
            description=entry.get("description", ""),
        ))
    return CommandDictionary(fsw_commands=tuple(commands), header=dict(data.get("header", {})))


def load_command_dictionary(path: str | Path) -> CommandDictionary:
    """Read and validate a JSON command dictionary from disk.

    Raises:
        FileNotFoundError: ``path`` does not exist.
        DictionaryError: The file is not valid JSON or fails validation.
    """
    raw = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise DictionaryError("Command dictionary is not valid JSON: {}".format(exc)) from exc
    return parse_command_dictionary(data)
