"""Unit tests for the SeqN → FPrime emitter.

WHY: The emitted file is what the flight software loads. Every rule
(time tag re-encoding, first-underscore stem rewrite, argument joining,
description normalisation) changes bytes on the spacecraft.

HOW: SeqN text is parsed with the real parser and emitted, then compared
line by line against hand-written FPrime.
"""

import asyncio

from seqn_fprime.converters.to_fprime import (
    convert_sequence_to_fprime,
    emit_fprime,
    remove_escaped_quotes,
)
from seqn_fprime.core.parser import parse


def _emit(text, dictionary=None):
    return emit_fprime(parse(text), text, dictionary)


class TestCommandLines:

    def test_no_arguments_keeps_separator_space(self):
        assert _emit("R00:00:01 cmdDisp_CMD_NO_OP").text == "R00:00:01 cmdDisp.CMD_NO_OP "

    def test_absolute_tag_and_scalars(self):
        text = "A2024-001T00:10:30.001 demo_fsw_cmd 1 2"
        assert _emit(text).text == "A2024-001T00:10:30.001 demo.fsw_cmd 1,2"

    def test_only_first_underscore_becomes_dot(self):
        assert _emit("R1 eventLogger_ALOG_SET_FILTER ON").text == (
            "R00:00:01 eventLogger.ALOG_SET_FILTER ON"
        )

    def test_missing_time_tag_is_unknown(self):
        assert _emit("cmd_A 1").text == "UNKNOWN cmd.A 1"

    def test_stem_that_looks_like_a_tag_is_kept(self):
        assert _emit("A1_CMD 1").text == "UNKNOWN A1.CMD 1"
        assert _emit("R2D2_CMD 1 2").text == "UNKNOWN R2D2.CMD 1,2"

    def test_epoch_and_complete_are_unknown(self):
        text = "E+00:00:10 cmd_A\nC cmd_B"
        assert _emit(text).text == "UNKNOWN cmd.A \nUNKNOWN cmd.B "

    def test_unparseable_relative_is_unknown(self):
        assert _emit("R1:2 cmd_A").text == "UNKNOWN cmd.A "

    def test_strings_pass_through_verbatim(self):
        text = 'R1 cmdDisp_CMD_NO_OP_STRING "Awesome, string!" 3.2'
        assert _emit(text).text == 'R00:00:01 cmdDisp.CMD_NO_OP_STRING "Awesome, string!",3.2'


class TestDescriptions:

    def test_trailing_comment_becomes_description(self):
        text = 'R00:00:01 cmd_A 1 # say \\"hi\\"  '
        assert _emit(text).text == 'R00:00:01 cmd.A 1 ;say "hi"'

    def test_empty_comment_adds_nothing(self):
        assert _emit("R00:00:01 cmd_A 1 #   ").text == "R00:00:01 cmd.A 1"

    def test_standalone_comment(self):
        assert _emit("#  hello there").text == ";hello there"

    def test_empty_standalone_comment(self):
        assert _emit("#").text == ";"

    def test_remove_escaped_quotes(self):
        assert remove_escaped_quotes(' \\"a\\" "b" ') == '"a" "b"'


class TestDocument:

    def test_document_order_and_skipped_lines(self):
        text = "\n".join([
            '@ID "demo"',
            "# Header",
            "",
            "A2015-075T22:32:40.123 cmdDisp_CMD_NO_OP",
            "R00:00:01 cmdDisp_CMD_NO_OP # Send a no op command",
            "R1 demo.bad",
            "R03:51:01.000 cmdDisp_CMD_TEST_CMD_1 17 3.2 2",
        ])
        assert _emit(text).text.split("\n") == [
            ";Header",
            "A2015-075T22:32:40.123 cmdDisp.CMD_NO_OP ",
            "R00:00:01 cmdDisp.CMD_NO_OP  ;Send a no op command",
            "R03:51:01 cmdDisp.CMD_TEST_CMD_1 17,3.2,2",
        ]

    def test_empty_sequence(self):
        conversion = _emit("")
        assert conversion.text == ""
        assert conversion.warnings == []

    def test_no_trailing_newline(self):
        assert not _emit("R1 cmd_A 1\n\n").text.endswith("\n")


class TestDictionary:

    def test_repeat_argument_flattened_with_dictionary(self, sample_dictionary):
        text = "R1 demo_SET_PAIRS 2 [a 1 b 2]"
        assert _emit(text, sample_dictionary).text == "R00:00:01 demo.SET_PAIRS 2,[a,1,b,2]"

    def test_nested_repeat(self, sample_dictionary):
        text = "R1 demo_NESTED [1 [red blue] 2 [green]]"
        assert _emit(text, sample_dictionary).text == "R00:00:01 demo.NESTED [1,[red,blue],2,[green]]"

    def test_unknown_stem_degrades_gracefully(self, sample_dictionary):
        text = "R1 other_CMD [1 2 3]"
        assert _emit(text, sample_dictionary).text == "R00:00:01 other.CMD [1,2,3]"

    def test_output_is_identical_without_dictionary(self):
        text = "R1 demo_SET_PAIRS 2 [a 1 b 2]"
        assert _emit(text).text == "R00:00:01 demo.SET_PAIRS 2,[a,1,b,2]"


class TestWarnings:

    def test_bad_argument_dropped_and_reported(self):
        text = "R1 cmd_A 1 $bad 2"
        conversion = _emit(text)
        assert conversion.text == "R00:00:01 cmd.A 1,2"
        assert len(conversion.warnings) == 1
        warning = conversion.warnings[0]
        assert warning.message == "Could not parse arg for node with name Error"
        assert text[warning.start:warning.end] == "$bad"

    def test_later_commands_still_emitted(self):
        conversion = _emit('R1 cmd_A "open\nR2 cmd_B 5')
        assert conversion.text == "R00:00:01 cmd.A \nR00:00:02 cmd.B 5"
        assert len(conversion.warnings) == 1


class TestAsyncWrapper:

    def test_returns_text_only(self, sample_dictionary):
        text = "R1 demo_SET_PAIRS 2 [a 1 b 2] # pairs"
        result = asyncio.run(convert_sequence_to_fprime(parse(text), text, sample_dictionary, "demo"))
        assert result == "R00:00:01 demo.SET_PAIRS 2,[a,1,b,2] ;pairs"
