"""Command-line interface for the SeqN ⇄ FPrime converter.

WHY: Sequence files move between tools outside the editor too, in
scripts and CI checks. The CLI wires the parser, the dictionary loader,
both conversion directions, and the linter behind one command.

HOW: argparse accepts an input file (or "-" for stdin), a direction,
an optional command dictionary, and output/lint options. SeqN input is
parsed and emitted as FPrime; FPrime input is rewritten as SeqN.
Converted text goes to stdout or --output; status, warnings, and
diagnostics go to stderr.

RULES:
- Direction defaults from the extension: .seq → SeqN; .seqN.txt, .txt,
  stdin and unknown extensions → FPrime
- --dictionary overrides SEQN_COMMAND_DICTIONARY from the environment
- --lint only applies to SeqN input (it checks FPrime compatibility)
- Exit 1 on user errors (missing file, bad dictionary), exit 2 when
  --lint reports at least one error diagnostic
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from seqn_fprime.config import (
    FPRIME_EXTENSIONS,
    LOG_LEVEL,
    SEQN_EXTENSIONS,
    load_dictionary_path,
)
from seqn_fprime.converters.base import Diagnostic, Severity
from seqn_fprime.converters.from_fprime import rewrite
from seqn_fprime.converters.linter import lint_fprime
from seqn_fprime.converters.to_fprime import emit_fprime
from seqn_fprime.core.dictionary import CommandDictionary, load_command_dictionary
from seqn_fprime.core.parser import parse

logger = logging.getLogger(__name__)

DIRECTIONS = ("fprime", "seqn")


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _fail(msg: str, code: int = 1) -> None:
    print("Error: {}".format(msg), file=sys.stderr)
    sys.exit(code)


def line_col(text: str, offset: int) -> tuple:
    """Convert a character offset into a 1-based (line, column) pair."""
    before = text[:offset]
    line = before.count("\n") + 1
    column = offset - (before.rfind("\n") + 1) + 1
    return line, column


def format_diagnostic(text: str, diagnostic: Diagnostic) -> str:
    """Render a diagnostic as ``line:col severity message``."""
    line, column = line_col(text, diagnostic.start)
    return "{}:{} {} {}".format(line, column, diagnostic.severity.value, diagnostic.message)


def resolve_direction(input_file: str, explicit: Optional[str]) -> str:
    """Pick the target notation, inferring it from the extension if needed."""
    if explicit:
        return explicit
    if input_file.lower().endswith(SEQN_EXTENSIONS):
        return "fprime"
    if Path(input_file).suffix.lower() in FPRIME_EXTENSIONS:
        return "seqn"
    return "fprime"


def _read_input(input_file: str) -> str:
    if input_file == "-":
        return sys.stdin.read()
    path = Path(input_file)
    if not path.is_file():
        _fail("File not found: {}".format(path))
    return path.read_text(encoding="utf-8")


def _load_dictionary(explicit: Optional[str]) -> Optional[CommandDictionary]:
    try:
        path = load_dictionary_path(explicit)
        if path is None:
            return None
        dictionary = load_command_dictionary(path)
    except ValueError as e:
        # Missing file or schema/JSON errors
        _fail(str(e))
    _status("Loaded command dictionary: {} ({} commands)".format(
        path, len(dictionary.fsw_commands)
    ))
    return dictionary


def run(args: argparse.Namespace) -> int:
    """Execute one conversion and return the process exit code."""
    text = _read_input(args.input_file)
    direction = resolve_direction(args.input_file, args.to)

    if direction == "seqn":
        output = rewrite(text)
        exit_code = 0
    else:
        dictionary = _load_dictionary(args.dictionary)
        tree = parse(text)
        conversion = emit_fprime(tree, text, dictionary)
        for warning in conversion.warnings:
            _status("  Warning: {}".format(format_diagnostic(text, warning)))
        output = conversion.text

        exit_code = 0
        if args.lint:
            diagnostics = lint_fprime([], dictionary, None, tree.top_node)
            for diagnostic in diagnostics:
                _status(format_diagnostic(text, diagnostic))
            if any(d.severity is Severity.ERROR for d in diagnostics):
                exit_code = 2

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        _status("Saved: {}".format(args.output))
    else:
        sys.stdout.write(output)
        if output and not output.endswith("\n"):
            sys.stdout.write("\n")

    logger.debug("Converted %s to %s", args.name or args.input_file, direction)
    return exit_code


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser (separate from main() for testability)."""
    parser = argparse.ArgumentParser(
        prog="seqn_fprime",
        description="Convert command sequences between SeqN and FPrime (FPP) notation.",
    )

    parser.add_argument(
        "input_file",
        help="Sequence file to convert, or '-' to read from stdin.",
    )

    parser.add_argument(
        "--to",
        choices=DIRECTIONS,
        default=None,
        help="Target notation. Default: 'seqn' for .seq files, otherwise 'fprime'.",
    )

    parser.add_argument(
        "--dictionary",
        default=None,
        help="Path to a JSON command dictionary used to group repeat arguments.",
    )

    parser.add_argument(
        "--name",
        default=None,
        help="Sequence name used in log messages (default: input file stem).",
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Write converted text to this file instead of stdout.",
    )

    parser.add_argument(
        "--lint",
        action="store_true",
        help="Report FPrime time-tag problems in SeqN input on stderr.",
    )

    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help="Logging level (default: %(default)s).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m seqn_fprime``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    if args.name is None:
        args.name = Path(args.input_file).stem
    sys.exit(run(args))


if __name__ == "__main__":
    main()
