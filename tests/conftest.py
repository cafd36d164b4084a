"""Shared test fixtures for the seqn_fprime test suite.

WHY: Several test modules need the same command dictionary and the same
small SeqN sequences. Centralizing them keeps expected outputs in sync.

HOW: SAMPLE_DICTIONARY is the raw JSON document; fixtures provide it
as a dict and as a parsed CommandDictionary.

RULES:
- demo_SET_PAIRS has a repeat argument of arity 2 at position 1
- demo_NESTED has a repeat of arity 2 whose second sub-argument is itself
  a repeat of arity 1
- cmdDisp_CMD_NO_OP takes no arguments
"""

import copy
from typing import Any, Dict

import pytest

from seqn_fprime.core.dictionary import parse_command_dictionary


SAMPLE_DICTIONARY: Dict[str, Any] = {
    "header": {"mission_name": "demo", "version": "1.0.0"},
    "fswCommands": [
        {"stem": "cmdDisp_CMD_NO_OP", "description": "No-op", "arguments": []},
        {
            "stem": "demo_SET_PAIRS",
            "arguments": [
                {"name": "count", "arg_type": "unsigned"},
                {
                    "name": "pairs",
                    "arg_type": "repeat",
                    "repeat": {
                        "arguments": [
                            {"name": "key", "arg_type": "enum"},
                            {"name": "value", "arg_type": "integer"},
                        ],
                        "min": 0,
                        "max": 10,
                    },
                },
            ],
        },
        {
            "stem": "demo_NESTED",
            "arguments": [
                {
                    "name": "rows",
                    "arg_type": "repeat",
                    "repeat": {
                        "arguments": [
                            {"name": "id", "arg_type": "unsigned"},
                            {
                                "name": "colors",
                                "arg_type": "repeat",
                                "repeat": {"arguments": [{"name": "color", "arg_type": "enum"}]},
                            },
                        ],
                    },
                },
            ],
        },
    ],
}


@pytest.fixture
def sample_dictionary_data():
    """The raw JSON command dictionary (a fresh deep copy per test)."""
    return copy.deepcopy(SAMPLE_DICTIONARY)


@pytest.fixture
def sample_dictionary(sample_dictionary_data):
    """SAMPLE_DICTIONARY parsed into a CommandDictionary."""
    return parse_command_dictionary(sample_dictionary_data)
