"""Syntax tree dataclasses for parsed SeqN sequences.

WHY: Every converter and the linter walk the same parse tree. Looking
children up by free-form name strings hides typos until runtime and
silently returns nothing. A closed NodeKind enum plus typed accessors
(``command.time_tag``, ``time_tag.variant``) makes each lookup explicit.

HOW: Three pieces form the tree:
  NodeKind  : closed enumeration of every node kind the parser emits
  SyntaxNode : immutable node with a kind, a half-open [start, end)
               range into the source text, and ordered children
  Tree      : wrapper holding the root (``top_node``)

RULES:
- Nodes are frozen; children are tuples, never mutated after parsing
- Ranges are character offsets into the original source text
- A Command has at most one TimeTag, Stem, Args, and LineComment child
- A TimeTag has at most one variant child (Absolute/Relative/Complete/Epoch)
- Accessors return None for absent children, they never raise
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple


class NodeKind(str, enum.Enum):
    """Closed set of node kinds produced by the SeqN parser."""

    SEQUENCE = "Sequence"
    COMMANDS = "Commands"
    COMMAND = "Command"
    STEM = "Stem"
    ARGS = "Args"
    REPEAT_ARG = "RepeatArg"
    STRING = "String"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    ENUM = "Enum"
    TIME_TAG = "TimeTag"
    TIME_ABSOLUTE = "TimeAbsolute"
    TIME_RELATIVE = "TimeRelative"
    TIME_COMPLETE = "TimeComplete"
    TIME_EPOCH = "TimeEpoch"
    LINE_COMMENT = "LineComment"
    ERROR = "Error"


# Kinds that may appear as a TimeTag's single variant child.
TIME_VARIANTS = frozenset({
    NodeKind.TIME_ABSOLUTE,
    NodeKind.TIME_RELATIVE,
    NodeKind.TIME_COMPLETE,
    NodeKind.TIME_EPOCH,
})

# Scalar argument kinds emitted verbatim.
SCALAR_ARGUMENTS = frozenset({
    NodeKind.STRING,
    NodeKind.NUMBER,
    NodeKind.BOOLEAN,
    NodeKind.ENUM,
})


@dataclass(frozen=True)
class SyntaxNode:
    """One node of the immutable parse tree.

    Attributes:
        kind: The node kind.
        start: Offset of the first character covered by the node.
        end: Offset one past the last character covered by the node.
        children: Ordered child nodes.
    """

    kind: NodeKind
    start: int
    end: int
    children: Tuple["SyntaxNode", ...] = field(default_factory=tuple)

    def text(self, source: str) -> str:
        """Return the verbatim slice of ``source`` this node covers."""
        return source[self.start:self.end]

    def get_child(self, kind: NodeKind) -> Optional[SyntaxNode]:
        """Return the first child of the given kind, or None."""
        for child in self.children:
            if child.kind is kind:
                return child
        return None

    def get_children(self, kind: NodeKind) -> list[SyntaxNode]:
        """Return all children of the given kind in document order."""
        return [child for child in self.children if child.kind is kind]

    # -- typed accessors ---------------------------------------------------

    @property
    def time_tag(self) -> Optional[SyntaxNode]:
        return self.get_child(NodeKind.TIME_TAG)

    @property
    def stem(self) -> Optional[SyntaxNode]:
        return self.get_child(NodeKind.STEM)

    @property
    def args(self) -> Optional[SyntaxNode]:
        return self.get_child(NodeKind.ARGS)

    @property
    def line_comment(self) -> Optional[SyntaxNode]:
        return self.get_child(NodeKind.LINE_COMMENT)

    @property
    def variant(self) -> Optional[SyntaxNode]:
        """The single time variant child of a TimeTag, or None."""
        for child in self.children:
            if child.kind in TIME_VARIANTS:
                return child
        return None


@dataclass(frozen=True)
class Tree:
    """A parsed sequence. ``top_node`` is always a SEQUENCE node."""

    top_node: SyntaxNode

    @property
    def commands(self) -> Optional[SyntaxNode]:
        return self.top_node.get_child(NodeKind.COMMANDS)
