"""Repeat-argument flattening for SeqN → FPrime emission.

WHY: SeqN writes a repeat argument as one flat bracketed list
(``[1 2 3 4]``). The logical structure is a list of repetitions, each
holding as many values as the dictionary defines sub-arguments
(``[[1 2] [3 4]]`` for arity 2). Only the dictionary can disambiguate,
so grouping is driven by the repeat argument's definition.

HOW: Children of a RepeatArg are walked in order. A new group opens
whenever the running index is a multiple of the arity. Without a
definition the arity is unbounded and everything lands in one group.
Nested RepeatArg children are flattened recursively using the matching
sub-argument definition. Rendering joins values with commas inside a
single pair of brackets; groups are not bracketed individually.

RULES:
- Argument order is preserved exactly
- Scalars are emitted as their verbatim source text
- Error nodes, empty scalars, and nesting deeper than MAX_REPEAT_DEPTH
  are dropped with a logged warning; the surrounding command survives
- A missing definition or a definition with no sub-arguments means
  unbounded arity (one group)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from seqn_fprime.converters.base import Diagnostic, Severity
from seqn_fprime.core.dictionary import ArgumentDefinition
from seqn_fprime.core.parser import MAX_REPEAT_DEPTH
from seqn_fprime.core.tree import SCALAR_ARGUMENTS, NodeKind, SyntaxNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scalar:
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class RepeatGroups:
    """A flattened repeat argument: ordered groups of ordered arguments."""

    groups: Tuple[Tuple["Argument", ...], ...]

    def render(self) -> str:
        return "[{}]".format(
            ",".join(",".join(arg.render() for arg in group) for group in self.groups if group)
        )


Argument = Union[Scalar, RepeatGroups]


def _drop(node: SyntaxNode, reason: str, warnings: List[Diagnostic]) -> None:
    message = "Could not parse {} for node with name {}".format(reason, node.kind.value)
    logger.warning("%s at [%d, %d)", message, node.start, node.end)
    warnings.append(Diagnostic(node.start, node.end, message, Severity.WARNING))


def repeat_arity(definition: Optional[ArgumentDefinition]) -> Optional[int]:
    """Sub-argument count of a repeat definition, or None when unbounded."""
    if definition is None or definition.repeat is None:
        return None
    return definition.repeat.arity or None


def parse_scalar(node: SyntaxNode, text: str, warnings: List[Diagnostic]) -> Optional[Scalar]:
    """Return the node's verbatim text, or None (with a warning) if unusable."""
    value = node.text(text)
    if node.kind not in SCALAR_ARGUMENTS or not value:
        _drop(node, "arg", warnings)
        return None
    return Scalar(value)


def flatten_repeat(
    node: SyntaxNode,
    text: str,
    definition: Optional[ArgumentDefinition],
    warnings: List[Diagnostic],
    depth: int = 1,
) -> Optional[RepeatGroups]:
    """Group a RepeatArg's children by the definition's arity.

    Args:
        node: A RepeatArg node.
        text: Source text the node ranges refer to.
        definition: Dictionary definition of this repeat argument, or None.
        warnings: Receives a Diagnostic for every dropped child.
        depth: Current nesting level (1 for a top-level repeat argument).

    Returns:
        The grouped arguments, or None when nesting is too deep.
    """
    if depth > MAX_REPEAT_DEPTH:
        _drop(node, "repeat arg", warnings)
        return None

    arity = repeat_arity(definition)
    sub_definitions = definition.repeat.arguments if arity else ()
    groups: List[List[Argument]] = []

    for index, child in enumerate(node.children):
        if arity is None:
            if index == 0:
                groups.append([])
        elif index % arity == 0:
            groups.append([])

        if child.kind is NodeKind.REPEAT_ARG:
            sub_definition = sub_definitions[index % arity] if arity else None
            nested = flatten_repeat(child, text, sub_definition, warnings, depth + 1)
            if nested is not None:
                groups[-1].append(nested)
        else:
            scalar = parse_scalar(child, text, warnings)
            if scalar is not None:
                groups[-1].append(scalar)

    return RepeatGroups(tuple(tuple(group) for group in groups))
