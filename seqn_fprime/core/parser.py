"""Line-oriented parser turning SeqN text into a SyntaxNode tree.

WHY: The converters and the linter consume a parse tree, not raw text.
SeqN is line-oriented (one command or comment per line), so a small
hand-written scanner is enough to produce the node kinds they need
without pulling in a full grammar toolkit.

HOW: The source is split into lines while tracking absolute offsets.
Each non-blank line becomes one top-level item under ``Commands``:
  - ``# text``            → LineComment
  - ``@directive ...``    → skipped
  - ``[tag] STEM args #c`` → Command(TimeTag?, Stem, Args?, LineComment?)
Arguments are scanned left to right. ``[`` opens a RepeatArg that may
nest; quoted strings honour ``\\"`` escapes.

RULES:
- Never raises on malformed input; bad spans become Error nodes
- Node ranges are absolute offsets into the original text
- Time tag variant ranges start at the marker character (A, R, E, C)
- A line whose first token is not a valid stem (after an optional tag)
  yields a single Error node under Commands
- A tag-shaped token with no stem after it is read as the stem when its
  body is not a valid time (``A1_CMD 1``)
- Repeat arguments nest at most MAX_REPEAT_DEPTH levels
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple

from seqn_fprime.core.time import TimeTypes, validate_time
from seqn_fprime.core.tree import NodeKind, SyntaxNode, Tree

MAX_REPEAT_DEPTH = 8

_STEM_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER_RE = re.compile(
    r"^[+-]?(0[xX][0-9a-fA-F]+|(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?)$"
)
_ENUM_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# First-token patterns that mark a time tag. Stems may also start with
# A/R/E/C, so the marker must be followed by something a stem can't contain.
_TIME_TAG_PATTERNS: Tuple[Tuple[re.Pattern, NodeKind], ...] = (
    (re.compile(r"^A\d\S*$"), NodeKind.TIME_ABSOLUTE),
    (re.compile(r"^R[+\-.\d]\S*$"), NodeKind.TIME_RELATIVE),
    (re.compile(r"^E[+\-.\d]\S*$"), NodeKind.TIME_EPOCH),
    (re.compile(r"^C$"), NodeKind.TIME_COMPLETE),
)

# Time forms a tag body must match to stay a tag when no stem follows it.
_TAG_TIME_TYPES = {
    NodeKind.TIME_ABSOLUTE: (TimeTypes.ABSOLUTE,),
    NodeKind.TIME_RELATIVE: (TimeTypes.RELATIVE, TimeTypes.RELATIVE_SIMPLE),
    NodeKind.TIME_EPOCH: (TimeTypes.EPOCH, TimeTypes.EPOCH_SIMPLE),
}

_ARG_DELIMITERS = " \t[]#\""


def parse(text: str) -> Tree:
    """Parse SeqN source text into a Tree.

    Args:
        text: The complete SeqN sequence.

    Returns:
        Tree whose top node is a Sequence holding one Commands node.
    """
    items: List[SyntaxNode] = []
    offset = 0
    for raw_line in text.split("\n"):
        line_end = offset + len(raw_line.rstrip("\r"))
        item = _parse_line(text, offset, line_end)
        if item is not None:
            items.append(item)
        offset += len(raw_line) + 1

    if items:
        commands = SyntaxNode(NodeKind.COMMANDS, items[0].start, items[-1].end, tuple(items))
    else:
        commands = SyntaxNode(NodeKind.COMMANDS, 0, 0)
    return Tree(SyntaxNode(NodeKind.SEQUENCE, 0, len(text), (commands,)))


def _skip_whitespace(text: str, pos: int, end: int) -> int:
    while pos < end and text[pos] in " \t":
        pos += 1
    return pos


def _token_end(text: str, pos: int, end: int) -> int:
    while pos < end and text[pos] not in " \t":
        pos += 1
    return pos


def _parse_line(text: str, start: int, end: int) -> Optional[SyntaxNode]:
    pos = _skip_whitespace(text, start, end)
    if pos >= end:
        return None
    if text[pos] == "#":
        return SyntaxNode(NodeKind.LINE_COMMENT, pos, end)
    if text[pos] == "@":
        return None
    return _parse_command(text, pos, end)


def _parse_command(text: str, pos: int, end: int) -> SyntaxNode:
    line_start = pos
    children: List[SyntaxNode] = []

    token_end = _token_end(text, pos, end)
    token = text[pos:token_end]
    for pattern, kind in _TIME_TAG_PATTERNS:
        if pattern.match(token):
            variant = SyntaxNode(kind, pos, token_end)
            children.append(SyntaxNode(NodeKind.TIME_TAG, pos, token_end, (variant,)))
            pos = _skip_whitespace(text, token_end, end)
            break

    stem_match = _match_stem(text, pos, end)
    if stem_match is None and children and _is_stem_not_tag(token, children[0].variant.kind):
        # A1_CMD, R2D2_CMD: the "tag" was really the stem
        children = []
        pos = line_start
        stem_match = _match_stem(text, pos, end)
    if stem_match is None:
        return SyntaxNode(NodeKind.ERROR, line_start, end)
    children.append(SyntaxNode(NodeKind.STEM, pos, stem_match.end()))
    pos = stem_match.end()

    args: List[SyntaxNode] = []
    comment: Optional[SyntaxNode] = None
    while True:
        pos = _skip_whitespace(text, pos, end)
        if pos >= end:
            break
        if text[pos] == "#":
            comment = SyntaxNode(NodeKind.LINE_COMMENT, pos, end)
            break
        arg, pos = _parse_arg(text, pos, end, depth=0)
        args.append(arg)
        if arg.kind is NodeKind.ERROR and arg.end >= end:
            break

    if args:
        children.append(SyntaxNode(NodeKind.ARGS, args[0].start, args[-1].end, tuple(args)))
    if comment is not None:
        children.append(comment)
    return SyntaxNode(NodeKind.COMMAND, line_start, children[-1].end, tuple(children))


def _match_stem(text: str, pos: int, end: int) -> Optional[re.Match]:
    stem_match = _STEM_RE.match(text, pos, end)
    if stem_match is None:
        return None
    if stem_match.end() < end and text[stem_match.end()] not in " \t#":
        return None
    return stem_match


def _is_stem_not_tag(token: str, kind: NodeKind) -> bool:
    """True when ``token`` is a whole stem and its body is no valid time."""
    if not _STEM_RE.fullmatch(token):
        return False
    time_types = _TAG_TIME_TYPES.get(kind)
    if time_types is None:
        return False
    return not any(validate_time(token[1:], time_type) for time_type in time_types)


def _parse_arg(text: str, pos: int, end: int, depth: int) -> Tuple[SyntaxNode, int]:
    """Scan one argument starting at ``pos``; return it and the next offset."""
    char = text[pos]
    if char == '"':
        return _parse_string(text, pos, end)
    if char == "[":
        return _parse_repeat(text, pos, end, depth + 1)
    if char == "]":
        return SyntaxNode(NodeKind.ERROR, pos, pos + 1), pos + 1

    token_end = pos
    while token_end < end and text[token_end] not in _ARG_DELIMITERS:
        token_end += 1
    token = text[pos:token_end]
    if _NUMBER_RE.match(token):
        kind = NodeKind.NUMBER
    elif token in ("true", "false"):
        kind = NodeKind.BOOLEAN
    elif _ENUM_RE.match(token):
        kind = NodeKind.ENUM
    else:
        kind = NodeKind.ERROR
    return SyntaxNode(kind, pos, token_end), token_end


def _parse_string(text: str, pos: int, end: int) -> Tuple[SyntaxNode, int]:
    cursor = pos + 1
    while cursor < end:
        if text[cursor] == "\\" and cursor + 1 < end:
            cursor += 2
            continue
        if text[cursor] == '"':
            return SyntaxNode(NodeKind.STRING, pos, cursor + 1), cursor + 1
        cursor += 1
    # Unterminated string swallows the rest of the line
    return SyntaxNode(NodeKind.ERROR, pos, end), end


def _parse_repeat(text: str, pos: int, end: int, depth: int) -> Tuple[SyntaxNode, int]:
    start = pos
    if depth > MAX_REPEAT_DEPTH:
        return SyntaxNode(NodeKind.ERROR, start, end), end

    items: List[SyntaxNode] = []
    pos += 1
    while True:
        pos = _skip_whitespace(text, pos, end)
        if pos >= end or text[pos] == "#":
            return SyntaxNode(NodeKind.ERROR, start, pos), pos
        if text[pos] == "]":
            return SyntaxNode(NodeKind.REPEAT_ARG, start, pos + 1, tuple(items)), pos + 1
        item, pos = _parse_arg(text, pos, end, depth)
        items.append(item)
        if item.kind is NodeKind.ERROR and item.end >= end:
            return SyntaxNode(NodeKind.ERROR, start, end), end
