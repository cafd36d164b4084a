"""Time-tag linter for SeqN sequences destined for FPrime.

WHY: FPrime commands must carry an absolute or relative time tag, and
FPrime has no notion of epoch-relative or wait-for-completion tags.
Flagging these in the SeqN editor is cheaper than discovering them in
UNKNOWN lines of the emitted file.

HOW: Every Command under Commands is checked for a TimeTag child and
for Complete/Epoch variants inside it.

RULES:
- Appends to and returns the caller's list; never replaces it
- Missing tag → one error over the command's range
- Complete or Epoch tag → one error over that variant's range
  (Complete wins if both are somehow present)
- No argument or dictionary validation happens here
"""

from __future__ import annotations

from typing import Any, List, Optional

from seqn_fprime.converters.base import Diagnostic, Severity
from seqn_fprime.core.dictionary import CommandDictionary
from seqn_fprime.core.tree import NodeKind, SyntaxNode

MISSING_TIME_TAG = "Missing 'Time Tag' for command"
UNSUPPORTED_TIME_TAG = "Time Complete and Time Epoch are not supported in FPrime"


def lint_fprime(
    diagnostics: List[Diagnostic],
    dictionary: Optional[CommandDictionary],
    view: Any,
    node: SyntaxNode,
) -> List[Diagnostic]:
    """Check every command's time tag against FPrime's constraints.

    Args:
        diagnostics: Existing diagnostics; new ones are appended in place.
        dictionary: Unused; accepted for the host's linter signature.
        view: Unused editor view; accepted for the host's linter signature.
        node: Root (Sequence) node of the parsed tree.

    Returns:
        The same ``diagnostics`` list.
    """
    commands = node.get_child(NodeKind.COMMANDS)
    command_nodes = commands.get_children(NodeKind.COMMAND) if commands is not None else []

    for command in command_nodes:
        time_tag = command.time_tag
        if time_tag is None:
            diagnostics.append(Diagnostic(
                start=command.start,
                end=command.end,
                message=MISSING_TIME_TAG,
                severity=Severity.ERROR,
            ))
            continue

        unsupported = (
            time_tag.get_child(NodeKind.TIME_COMPLETE)
            or time_tag.get_child(NodeKind.TIME_EPOCH)
        )
        if unsupported is not None:
            diagnostics.append(Diagnostic(
                start=unsupported.start,
                end=unsupported.end,
                message=UNSUPPORTED_TIME_TAG,
                severity=Severity.ERROR,
            ))

    return diagnostics
