"""Unit tests for repeat-argument flattening.

WHY: SeqN writes repeat arguments as one flat list. Grouping by the wrong
arity silently reorders values on the spacecraft side, so the grouping
rules are tested directly on the structured result, not just the string.
"""

import pytest

from seqn_fprime.converters.arguments import (
    RepeatGroups,
    Scalar,
    flatten_repeat,
    parse_scalar,
    repeat_arity,
)
from seqn_fprime.core.dictionary import ArgumentDefinition, RepeatDefinition
from seqn_fprime.core.parser import parse
from seqn_fprime.core.tree import NodeKind, SyntaxNode


def _repeat_node(values):
    text = "cmd_A [{}]".format(values)
    (command,) = parse(text).commands.children
    return command.args.children[0], text


def _repeat_definition(arity):
    return ArgumentDefinition(
        name="items",
        arg_type="repeat",
        repeat=RepeatDefinition(
            arguments=tuple(
                ArgumentDefinition(name="a{}".format(i), arg_type="integer") for i in range(arity)
            )
        ),
    )


class TestGrouping:

    @pytest.mark.parametrize("arity, groups", [(1, 6), (2, 3), (3, 2), (6, 1)])
    def test_k_groups_of_arity(self, arity, groups):
        node, text = _repeat_node("1 2 3 4 5 6")
        result = flatten_repeat(node, text, _repeat_definition(arity), [])
        assert len(result.groups) == groups
        assert all(len(group) == arity for group in result.groups)

    def test_unbounded_without_definition(self):
        node, text = _repeat_node("1 2 3 4 5")
        result = flatten_repeat(node, text, None, [])
        assert result.groups == (tuple(Scalar(v) for v in "12345"),)

    def test_non_repeat_definition_is_unbounded(self):
        node, text = _repeat_node("1 2 3")
        definition = ArgumentDefinition(name="x", arg_type="integer")
        assert len(flatten_repeat(node, text, definition, []).groups) == 1

    def test_empty_repeat_definition_is_unbounded(self):
        assert repeat_arity(_repeat_definition(0)) is None

    def test_partial_last_group(self):
        node, text = _repeat_node("a 1 b")
        result = flatten_repeat(node, text, _repeat_definition(2), [])
        assert result.groups == ((Scalar("a"), Scalar("1")), (Scalar("b"),))

    def test_empty_repeat(self):
        node, text = _repeat_node("")
        result = flatten_repeat(node, text, None, [])
        assert result.groups == ()
        assert result.render() == "[]"


class TestRendering:

    def test_groups_are_not_bracketed_individually(self):
        node, text = _repeat_node("a 1 b 2")
        result = flatten_repeat(node, text, _repeat_definition(2), [])
        assert result.render() == "[a,1,b,2]"

    def test_nested_repeat_uses_matching_sub_definition(self, sample_dictionary):
        (rows,) = sample_dictionary.lookup_arguments("demo_NESTED")
        node, text = _repeat_node("1 [red blue] 2 [green]")
        result = flatten_repeat(node, text, rows, [])

        assert len(result.groups) == 2
        first_id, first_colors = result.groups[0]
        assert first_id == Scalar("1")
        assert isinstance(first_colors, RepeatGroups)
        assert first_colors.groups == ((Scalar("red"),), (Scalar("blue"),))
        assert result.render() == "[1,[red,blue],2,[green]]"

    def test_strings_are_verbatim(self):
        node, text = _repeat_node('"a, b" 2')
        assert flatten_repeat(node, text, None, []).render() == '["a, b",2]'


class TestDroppedArguments:

    def test_error_child_is_dropped_with_warning(self):
        node, text = _repeat_node("1 $x 2")
        warnings = []
        result = flatten_repeat(node, text, None, warnings)
        assert result.render() == "[1,2]"
        assert len(warnings) == 1
        assert warnings[0].severity.value == "warning"
        assert text[warnings[0].start:warnings[0].end] == "$x"

    def test_dropping_does_not_shift_grouping(self):
        node, text = _repeat_node("a $x b 2")
        result = flatten_repeat(node, text, _repeat_definition(2), [])
        assert result.groups == ((Scalar("a"),), (Scalar("b"), Scalar("2")))

    def test_empty_scalar_is_dropped(self):
        warnings = []
        assert parse_scalar(SyntaxNode(NodeKind.NUMBER, 3, 3), "abcdef", warnings) is None
        assert len(warnings) == 1

    def test_too_deep_is_dropped(self):
        warnings = []
        node = SyntaxNode(NodeKind.REPEAT_ARG, 0, 2)
        assert flatten_repeat(node, "[]", None, warnings, depth=99) is None
        assert "repeat arg" in warnings[0].message
