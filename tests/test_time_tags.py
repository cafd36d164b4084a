"""Unit tests for the SeqN → FPrime time-tag codec."""

import pytest

from seqn_fprime.converters.time_tags import encode_relative, encode_time_tag
from seqn_fprime.core.parser import parse


def _encode(line):
    (command,) = parse(line).commands.children
    return encode_time_tag(command, line)


class TestAbsolute:

    def test_marker_is_kept_and_text_passed_through(self):
        assert _encode("A2024-001T00:10:30.001 cmd_A") == "A2024-001T00:10:30.001"


class TestRelative:

    @pytest.mark.parametrize("line, expected", [
        ("R00:00:01 cmd_A", "R00:00:01"),
        ("R01:00:01.150 cmd_A", "R01:00:01.150"),
        ("R-001T02:03:04.5 cmd_A", "R-001T02:03:04.500"),
        ("R000T00:00:05 cmd_A", "R00:00:05"),
        ("R+00:05:00 cmd_A", "R00:05:00"),
    ])
    def test_full_form(self, line, expected):
        assert _encode(line) == expected

    @pytest.mark.parametrize("line, expected", [
        ("R10 cmd_A", "R00:00:10"),
        ("R1.5 cmd_A", "R00:00:01.500"),
        ("R90061.25 cmd_A", "R001T01:01:01.250"),
        ("R0 cmd_A", "R00:00:00"),
    ])
    def test_simplified_form_is_balanced(self, line, expected):
        assert _encode(line) == expected

    def test_unparseable_relative_text(self):
        assert _encode("R1:2 cmd_A") is None

    def test_encode_relative_directly(self):
        assert encode_relative("3600") == "R01:00:00"
        assert encode_relative("nope") is None


class TestUnsupported:

    @pytest.mark.parametrize("line", ["cmd_A", "C cmd_A", "E+00:00:10 cmd_A"])
    def test_no_encoding(self, line):
        assert _encode(line) is None
