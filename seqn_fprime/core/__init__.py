"""Parse tree, parser, time utilities, and command dictionary.

WHY: These are the stable inputs every converter reads. The tree and the
dictionary are immutable so one parse or one loaded dictionary can be
shared by any number of conversions.

RULES:
- Nothing in core knows about FPrime output formatting
- Parsing never raises on malformed sequences
"""
