"""Configuration constants, notation markers, and .env loading.

WHY: Format names, comment markers, and sentinel tokens are shared by
the converters, the CLI, and the HTTP API. Keeping them in one module
makes them easy to find and override, and lets a deployment point at
its command dictionary through the environment.

HOW: python-dotenv loads the .env file on import. Constants are plain
module-level values; environment-backed values read ``os.getenv`` with
a default. load_dictionary_path() turns the configured dictionary
location into a Path and checks that it exists.

RULES:
- Host-visible format names must match what the editor registers
- UNKNOWN_TOKEN replaces any time tag or stem that cannot be encoded
- Every environment-backed default can be overridden in .env
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Notation constants
# ---------------------------------------------------------------------------

INPUT_FORMAT_NAME = "SeqN Overrides"
OUTPUT_FORMAT_NAME = "FPP Output"

UNKNOWN_TOKEN = "UNKNOWN"
"""Emitted in place of a time tag or stem that cannot be encoded."""

FPRIME_COMMENT = ";"
SEQN_COMMENT = "#"

FPRIME_EXTENSIONS: set[str] = {".seq"}
"""File extensions treated as FPrime input by the CLI (lowercase, with dot)."""

SEQN_EXTENSIONS: tuple[str, ...] = (".seqn.txt", ".txt")
"""Filename endings treated as SeqN input by the CLI (lowercase, with dot)."""

# ---------------------------------------------------------------------------
# Runtime configuration
# ---------------------------------------------------------------------------

COMMAND_DICTIONARY_PATH = os.getenv("SEQN_COMMAND_DICTIONARY", "").strip()
LOG_LEVEL = os.getenv("SEQN_LOG_LEVEL", "WARNING").upper()
API_HOST = os.getenv("SEQN_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("SEQN_API_PORT", "8000"))


def load_dictionary_path(explicit: str | None = None) -> Path | None:
    """Resolve the command dictionary location.

    RULES:
    - An explicit path wins over SEQN_COMMAND_DICTIONARY
    - Returns None when neither is set (conversions run without one)
    - Raises ValueError when the resolved file does not exist
    """
    raw = explicit or COMMAND_DICTIONARY_PATH
    if not raw:
        return None
    path = Path(raw).expanduser()
    if not path.is_file():
        raise ValueError("Command dictionary not found: {}".format(path))
    return path
