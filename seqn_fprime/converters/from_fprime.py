"""FPrime → SeqN text rewriter.

WHY: Existing FPrime ``.seq`` files need to open in the SeqN editor.
The two notations differ mostly in punctuation: FPrime separates
arguments with commas, namespaces stems with ".", and starts comments
with ";". A line-by-line rewrite is enough; no tree is built.

HOW: Each line is split at its first ";". In the part before it, commas
become spaces and any "." followed by a letter becomes "_". The comment
part, if any, is re-attached behind a "#" with its ";" removed.

RULES:
- Line count and blank lines are preserved exactly
- Periods followed by digits (timestamps, floats) are untouched
- Text after the first ";" is never rewritten
- Existing "#" text is treated as body; this is not an inverse of emit
"""

from __future__ import annotations

import re
from typing import Any, List, Optional

from seqn_fprime.config import FPRIME_COMMENT, INPUT_FORMAT_NAME, SEQN_COMMENT
from seqn_fprime.converters.base import BaseInputFormat, Diagnostic
from seqn_fprime.converters.linter import lint_fprime
from seqn_fprime.core.dictionary import CommandDictionary
from seqn_fprime.core.tree import SyntaxNode

_NAMESPACE_DOT_RE = re.compile(r"\.(?=[a-zA-Z])")


def rewrite_line(line: str) -> str:
    """Rewrite a single FPrime line as SeqN."""
    body, marker, comment = line.partition(FPRIME_COMMENT)
    body = _NAMESPACE_DOT_RE.sub("_", body.replace(",", " "))
    return body + (SEQN_COMMENT + comment if marker else "")


def rewrite(fprime_text: str) -> str:
    """Rewrite a whole FPrime document as SeqN, line by line."""
    return "\n".join(rewrite_line(line) for line in fprime_text.split("\n"))


async def convert_fprime_to_sequence(fprime_text: str) -> str:
    """Host-facing async wrapper around rewrite."""
    return rewrite(fprime_text)


class SeqNInputFormat(BaseInputFormat):
    """Imports FPrime text and lints SeqN for FPrime compatibility."""

    @property
    def name(self) -> str:
        return INPUT_FORMAT_NAME

    async def to_input_format(self, text: str) -> str:
        return await convert_fprime_to_sequence(text)

    def lint(
        self,
        diagnostics: List[Diagnostic],
        dictionary: Optional[CommandDictionary],
        view: Any,
        node: SyntaxNode,
    ) -> List[Diagnostic]:
        return lint_fprime(diagnostics, dictionary, view, node)
