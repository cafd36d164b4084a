"""Diagnostic records, conversion results, and abstract format handlers.

WHY: The host editor treats every notation the same way: an input format
turns foreign text into SeqN, an output format turns a parsed SeqN tree
into foreign text, and either may contribute a linter. Abstract bases
keep the CLI, HTTP API, and adaptation descriptor working with any
format generically.

HOW: Diagnostic is the positional annotation linters append and the
emitter collects for dropped arguments. Conversion bundles emitted text
with those warnings. BaseInputFormat and BaseOutputFormat are ABCs with
a ``name`` property, an async conversion method, and a ``lint()`` hook.

RULES:
- Diagnostics are returned, never raised
- ``lint()`` appends to the list it is given and returns that same list
- Conversion methods are async for host compatibility but never suspend
- To add a format: subclass, implement, register in converters/__init__.py
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from seqn_fprime.core.dictionary import CommandDictionary
from seqn_fprime.core.tree import SyntaxNode, Tree


class Severity(str, enum.Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    """A message anchored to a half-open ``[start, end)`` source range."""

    start: int
    end: int
    message: str
    severity: Severity = Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the host editor's ``from``/``to`` field names."""
        return {
            "from": self.start,
            "to": self.end,
            "message": self.message,
            "severity": self.severity.value,
        }


@dataclass
class Conversion:
    """Emitted text plus warnings for anything dropped along the way."""

    text: str
    warnings: List[Diagnostic] = field(default_factory=list)


class BaseInputFormat(ABC):
    """Converts foreign text into SeqN text."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name shown by the host."""

    @abstractmethod
    async def to_input_format(self, text: str) -> str:
        """Rewrite foreign text as SeqN text."""

    def lint(
        self,
        diagnostics: List[Diagnostic],
        dictionary: Optional[CommandDictionary],
        view: Any,
        node: SyntaxNode,
    ) -> List[Diagnostic]:
        return diagnostics


class BaseOutputFormat(ABC):
    """Converts a parsed SeqN tree into foreign text."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name shown by the host."""

    @abstractmethod
    async def to_output_format(
        self,
        tree: Tree,
        sequence: str,
        dictionary: Optional[CommandDictionary],
        sequence_name: str,
    ) -> str:
        """Emit the sequence in this format."""

    def lint(
        self,
        diagnostics: List[Diagnostic],
        dictionary: Optional[CommandDictionary],
        view: Any,
        node: SyntaxNode,
    ) -> List[Diagnostic]:
        return diagnostics
