"""Adaptation descriptor handed to the sequence editor host.

WHY: The host editor discovers custom notations through one declarative
object: an input format (foreign text → SeqN, plus an optional linter)
and a list of output formats (SeqN tree → foreign text, plus a linter).
This module assembles that object from the format registry so the
host never imports converter internals.

HOW: Each registered handler class is instantiated and its bound
methods are wrapped in small frozen descriptor dataclasses.
``to_dict()`` renders the camelCase shape the host expects.

RULES:
- Exactly one input format (the first entry of INPUT_FORMATS)
- Output formats keep registry order
- Autocomplete is not wired in; the host does not support it yet
- Building the descriptor has no side effects
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from seqn_fprime.converters import INPUT_FORMATS, OUTPUT_FORMATS


@dataclass(frozen=True)
class InputFormatDescriptor:
    name: str
    to_input_format: Callable[..., Any]
    linter: Optional[Callable[..., Any]] = None


@dataclass(frozen=True)
class OutputFormatDescriptor:
    name: str
    to_output_format: Callable[..., Any]
    linter: Callable[..., Any]


@dataclass(frozen=True)
class Adaptation:
    """The full descriptor: one input format and any number of outputs."""

    input_format: InputFormatDescriptor
    output_format: Tuple[OutputFormatDescriptor, ...]

    def output(self, name: str) -> OutputFormatDescriptor:
        """Return the output format called ``name``.

        Raises:
            KeyError: No output format has that name.
        """
        for descriptor in self.output_format:
            if descriptor.name == name:
                return descriptor
        raise KeyError(name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "inputFormat": {
                "name": self.input_format.name,
                "toInputFormat": self.input_format.to_input_format,
                "linter": self.input_format.linter,
            },
            "outputFormat": [
                {
                    "name": descriptor.name,
                    "toOutputFormat": descriptor.to_output_format,
                    "linter": descriptor.linter,
                }
                for descriptor in self.output_format
            ],
        }


def build_adaptation() -> Adaptation:
    """Instantiate the registered handlers and wrap them for the host."""
    input_handler = next(iter(INPUT_FORMATS.values()))()
    outputs = []
    for handler_cls in OUTPUT_FORMATS.values():
        handler = handler_cls()
        outputs.append(OutputFormatDescriptor(
            name=handler.name,
            to_output_format=handler.to_output_format,
            linter=handler.lint,
        ))

    return Adaptation(
        input_format=InputFormatDescriptor(
            name=input_handler.name,
            to_input_format=input_handler.to_input_format,
            linter=input_handler.lint,
        ),
        output_format=tuple(outputs),
    )
