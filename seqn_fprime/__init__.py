"""SeqN ⇄ FPrime command sequence converter.

WHY: Flight-operations tooling edits command sequences in SeqN, while
F Prime flight software loads line-oriented FPP ``.seq`` files. This
package converts between the two and lints SeqN for the constructs
FPrime cannot express.

HOW: core parses SeqN into an immutable tree and loads the command
dictionary; converters emit FPrime from the tree, rewrite FPrime text
into SeqN, and lint time tags; adapters expose both directions to a
host editor as named format handlers.

RULES:
- Conversions are pure; no state survives between calls
- Recoverable problems become diagnostics or UNKNOWN, never exceptions
"""

__version__ = "0.1.0"
