"""Adapters exposing the converters to a host sequence editor.

WHY: The editor host speaks in format descriptors and callbacks, not in
converter classes. Adapters bridge that boundary so each side can evolve
independently.

RULES:
- Adapters are glue only; no conversion logic lives here
- Adapters never mutate trees, text, or dictionaries
"""

from seqn_fprime.adapters.adaptation import Adaptation, build_adaptation
from seqn_fprime.adapters.autocomplete import fprime_autocomplete

__all__ = ["Adaptation", "build_adaptation", "fprime_autocomplete"]
