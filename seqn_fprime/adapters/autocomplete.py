"""Autocomplete hook for FPrime-flavoured SeqN editing.

The host editor does not call this yet, so it offers no completions.
"""

from __future__ import annotations

from typing import Any, Optional

from seqn_fprime.core.dictionary import CommandDictionary
from seqn_fprime.core.tree import SyntaxNode


def fprime_autocomplete(
    context: Any,
    node: SyntaxNode,
    dictionary: Optional[CommandDictionary],
) -> Optional[Any]:
    return None
