"""SeqN → FPrime emitter.

WHY: Operators author sequences in SeqN, but the flight software loads
FPrime ``.seq`` files. Each SeqN command maps to exactly one FPrime line
with a re-encoded time tag, a dotted stem, comma-separated arguments,
and an optional ``;`` description.

HOW: The top-level children of ``Commands`` are visited in document
order. Commands are rendered as
``<time> <stem> <args>[ ;<description>]``; standalone comments as
``;<description>``. Time tags go through converters.time_tags, repeat
arguments through converters.arguments using the dictionary entry at
the same positional index.

RULES:
- Missing or unencodable time tags render as UNKNOWN
- Only the first "_" in a stem becomes "."
- Scalars pass through verbatim; unusable arguments are dropped and
  reported as warnings, never raised
- Descriptions drop the leading "#", unescape \\" and are trimmed
- Node kinds other than Command and LineComment emit nothing
- Lines are joined with "\\n" and no trailing newline is added
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from seqn_fprime.config import OUTPUT_FORMAT_NAME, UNKNOWN_TOKEN
from seqn_fprime.converters.arguments import flatten_repeat, parse_scalar
from seqn_fprime.converters.base import BaseOutputFormat, Conversion, Diagnostic
from seqn_fprime.converters.time_tags import encode_time_tag
from seqn_fprime.core.dictionary import CommandDictionary
from seqn_fprime.core.tree import NodeKind, SyntaxNode, Tree

logger = logging.getLogger(__name__)

_ESCAPED_QUOTE_RE = re.compile(r'\\"|"(?!\\")')


def remove_escaped_quotes(text: str) -> str:
    """Collapse ``\\"`` to ``"`` and trim surrounding whitespace."""
    return _ESCAPED_QUOTE_RE.sub('"', text).strip()


def _description(node: Optional[SyntaxNode], text: str) -> Optional[str]:
    if node is None:
        return None
    # +1 drops the "#" marker
    return remove_escaped_quotes(text[node.start + 1:node.end])


def _args(
    args_node: SyntaxNode,
    text: str,
    dictionary: Optional[CommandDictionary],
    stem: str,
    warnings: List[Diagnostic],
) -> str:
    definitions = dictionary.lookup_arguments(stem) if dictionary is not None else ()
    rendered: List[str] = []

    for index, arg_node in enumerate(args_node.children):
        if arg_node.kind is NodeKind.REPEAT_ARG:
            definition = definitions[index] if index < len(definitions) else None
            groups = flatten_repeat(arg_node, text, definition, warnings)
            if groups is not None:
                rendered.append(groups.render())
        else:
            scalar = parse_scalar(arg_node, text, warnings)
            if scalar is not None:
                rendered.append(scalar.render())

    return ",".join(rendered)


def _command(
    command: SyntaxNode,
    text: str,
    dictionary: Optional[CommandDictionary],
    warnings: List[Diagnostic],
) -> str:
    time = (encode_time_tag(command, text) or "").strip() or UNKNOWN_TOKEN

    stem_node = command.stem
    stem = stem_node.text(text) if stem_node is not None else UNKNOWN_TOKEN

    args_node = command.args
    args = _args(args_node, text, dictionary, stem, warnings) if args_node is not None else ""

    description = _description(command.line_comment, text)
    return "{} {} {}{}".format(
        time,
        stem.replace("_", ".", 1),
        args,
        " ;{}".format(description) if description else "",
    )


def emit_fprime(
    tree: Tree,
    sequence: str,
    dictionary: Optional[CommandDictionary] = None,
) -> Conversion:
    """Emit FPrime text for a parsed SeqN sequence.

    Args:
        tree: Parsed SeqN tree.
        sequence: The SeqN source text the tree was parsed from.
        dictionary: Command dictionary used to group repeat arguments.

    Returns:
        Conversion holding the FPrime text and a warning per dropped argument.
    """
    warnings: List[Diagnostic] = []
    lines: List[str] = []

    commands = tree.commands
    for child in commands.children if commands is not None else ():
        if child.kind is NodeKind.COMMAND:
            lines.append(_command(child, sequence, dictionary, warnings))
        elif child.kind is NodeKind.LINE_COMMENT:
            lines.append(";{}".format(_description(child, sequence)))

    return Conversion(text="\n".join(lines), warnings=warnings)


async def convert_sequence_to_fprime(
    tree: Tree,
    sequence: str,
    dictionary: Optional[CommandDictionary],
    sequence_name: str,
) -> str:
    """Host-facing async wrapper around emit_fprime returning text only."""
    conversion = emit_fprime(tree, sequence, dictionary)
    if conversion.warnings:
        logger.info(
            "Converted %s with %d dropped argument(s)", sequence_name, len(conversion.warnings)
        )
    return conversion.text


class FPrimeOutputFormat(BaseOutputFormat):
    """FPrime ``.seq`` output. Linting happens on the SeqN input side."""

    @property
    def name(self) -> str:
        return OUTPUT_FORMAT_NAME

    async def to_output_format(
        self,
        tree: Tree,
        sequence: str,
        dictionary: Optional[CommandDictionary],
        sequence_name: str,
    ) -> str:
        return await convert_sequence_to_fprime(tree, sequence, dictionary, sequence_name)
