"""Time-tag encoding from SeqN to FPrime.

WHY: SeqN and FPrime both prefix commands with ``A`` (absolute) or ``R``
(relative) tags, but FPrime wants relative durations in one canonical
shape. SeqN also allows ``E`` (epoch) and ``C`` (complete) tags that
FPrime cannot express at all.

HOW: The Command's TimeTag variant decides the branch. Absolute text is
passed through. Relative text is classified as a full duration or a
simplified seconds count and re-rendered through core.time.

RULES:
- No TimeTag, an unsupported variant, or unparseable relative text → None
  (the emitter substitutes UNKNOWN; the linter reports Epoch/Complete)
- The tag marker character is always dropped before interpretation
- Full durations keep their fields; days and "T" appear only if days > 0
- Simplified durations are balanced; a zero ".000" suffix is stripped
"""

from __future__ import annotations

from typing import Optional

from seqn_fprime.core.time import (
    TimeTypes,
    get_balanced_duration,
    get_duration_time_components,
    parse_duration_string,
    validate_time,
)
from seqn_fprime.core.tree import NodeKind, SyntaxNode


def _tag_body(node: SyntaxNode, text: str) -> str:
    # +1 drops the A/R marker
    return text[node.start + 1:node.end].strip()


def encode_relative(body: str) -> Optional[str]:
    """Encode relative duration text (marker already removed) as ``R...``."""
    if validate_time(body, TimeTypes.RELATIVE):
        parts = get_duration_time_components(parse_duration_string(body))
        return "R{}{}{}{}:{}:{}{}".format(
            parts.is_negative,
            parts.days,
            "T" if parts.days else "",
            parts.hours,
            parts.minutes,
            parts.seconds,
            parts.milliseconds,
        )

    if validate_time(body, TimeTypes.RELATIVE_SIMPLE):
        balanced = get_balanced_duration(body)
        if parse_duration_string(balanced).milliseconds == 0:
            balanced = balanced[:-4]
        return "R{}".format(balanced)

    return None


def encode_time_tag(command: SyntaxNode, text: str) -> Optional[str]:
    """Encode a Command's time tag in FPrime notation.

    Args:
        command: A Command node.
        text: The source text the node ranges refer to.

    Returns:
        ``A<timestamp>`` or ``R<duration>``, or None when the command has
        no tag, an Epoch/Complete tag, or relative text that is neither
        duration form.
    """
    time_tag = command.time_tag
    if time_tag is None:
        return None

    variant = time_tag.variant
    if variant is None:
        return None
    if variant.kind is NodeKind.TIME_ABSOLUTE:
        return "A{}".format(_tag_body(variant, text))
    if variant.kind is NodeKind.TIME_RELATIVE:
        return encode_relative(_tag_body(variant, text))
    return None
