"""Format handler registry: the SeqN/FPrime conversion hub.

WHY: The CLI, the HTTP API, and the adaptation descriptor all need to
find format handlers by key. A central dict keeps the wiring in one
place: add a handler class, import it here, add one line.

HOW: INPUT_FORMATS and OUTPUT_FORMATS map snake_case keys to handler
classes (not instances). Callers instantiate as needed.

RULES:
- Values are BaseInputFormat / BaseOutputFormat subclasses
- Every handler listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from seqn_fprime.converters.from_fprime import SeqNInputFormat
from seqn_fprime.converters.to_fprime import FPrimeOutputFormat

if TYPE_CHECKING:
    from seqn_fprime.converters.base import BaseInputFormat, BaseOutputFormat

INPUT_FORMATS: dict[str, type[BaseInputFormat]] = {
    "seqn": SeqNInputFormat,
}

OUTPUT_FORMATS: dict[str, type[BaseOutputFormat]] = {
    "fprime": FPrimeOutputFormat,
}
