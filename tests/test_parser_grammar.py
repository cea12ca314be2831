from __future__ import annotations

import pytest
from lark import Token

from teacup.tree import Node
from tests.support.harness import display, parse_tree

DISPLAY_CASES = [
    pytest.param("a - b - c", "((a - b) - c)", id="sub-left-assoc"),
    pytest.param("a ^ b ^ c", "(a ^ (b ^ c))", id="pow-right-assoc"),
    pytest.param("a + b * c", "(a + (b * c))", id="mul-binds-tighter"),
    pytest.param("a * b + c", "((a * b) + c)", id="mul-binds-tighter-left"),
    pytest.param("(a + b) * c", "((( (a + b) )) * c)", id="parens-override"),
    pytest.param("(a)", "(( a ))", id="parens-group"),
    pytest.param("- - a", "(- (- a))", id="nested-prefix"),
    pytest.param("-a ^ b", "(- (a ^ b))", id="prefix-below-pow"),
    pytest.param("not a == b", "(not (a == b))", id="not-below-compare"),
    pytest.param("a or b and c", "(a or (b and c))", id="and-binds-tighter"),
    pytest.param("a < b < c", "(a < b < c)", id="compare-flat-chain"),
    pytest.param("a, b, c", "(a , b , c)", id="comma-flat"),
    pytest.param("a = b = c", "(a = (b = c))", id="assign-right-assoc"),
    pytest.param("x -> x + 1", "(x -> (x + 1))", id="lambda-body"),
    pytest.param("a.b.c", "((a . b) . c)", id="field-chain"),
    pytest.param("a.b(c)", "((a . b) ( c ))", id="method-call"),
    pytest.param("f(a)(b)", "((f ( a )) ( b ))", id="curried-call"),
    pytest.param("f()", "(f ( ))", id="nullary-call"),
    pytest.param("xs[1, 2]", "(xs [ (1 , 2) ])", id="multi-index"),
    pytest.param("1..n + 1", "(1 .. (n + 1))", id="range-below-add"),
    pytest.param(
        "let x = 1 in x end",
        "(let (x = 1) in x end)",
        id="let-block",
    ),
    pytest.param(
        "if a then b elif c then d else e end",
        "(if a then b elif c then d else e end)",
        id="if-mixfix-flat",
    ),
    pytest.param(
        "for x in xs when x > 1 do x end",
        "(for x in xs when (x > 1) do x end)",
        id="for-when-flat",
    ),
    pytest.param("x", "x", id="bare-atom"),
]


@pytest.mark.parametrize("source, expected", DISPLAY_CASES)
def test_parenthesized_display(source: str, expected: str) -> None:
    assert display(source) == expected


def test_left_assoc_tree_shape() -> None:
    tree = parse_tree("a - b - c")

    assert isinstance(tree, Node)
    assert tree.data == "E - E"
    assert tree.children[0].data == "E - E"
    assert tree.children[1] == Token("word", "c")


def test_mixfix_if_is_one_node() -> None:
    tree = parse_tree("if a then b elif c then d else e end")

    assert tree.data == "_ if E then E elif E then E else E end _"
    assert [str(op) for op in tree.ops] == ["if", "then", "elif", "then", "else", "end"]
    assert [str(arg) for arg in tree.children] == ["a", "b", "c", "d", "e"]


def test_prefix_node_has_absent_left_operand() -> None:
    tree = parse_tree("-a")

    assert tree.data == "_ - E"
    assert tree.ops[0].type == "prefix"
    assert [str(arg) for arg in tree.children] == ["a"]


def test_brackets_absent_outer_operands() -> None:
    assert parse_tree("(a)").data == "_ ( E ) _"
    assert parse_tree("[]").data == "_ [ _ ] _"
    assert parse_tree("f(a)").data == "E ( E ) _"
    assert parse_tree("f()").data == "E ( _ ) _"


def test_empty_program_parses_to_none() -> None:
    assert parse_tree("") is None
    assert parse_tree("# nothing here") is None


def test_node_span_and_position() -> None:
    tree = parse_tree("f(a, b)")

    assert (tree.start, tree.end) == (0, 7)
    assert (tree.meta.line, tree.meta.column) == (1, 1)

    inner = parse_tree("a\n  f(y)").children[1]
    assert inner.data == "E ( E ) _"
    assert (inner.meta.line, inner.meta.column) == (2, 3)


def test_newlines_separate_statements() -> None:
    tree = parse_tree("a\nb\nc")

    assert tree.data == "E \n E \n E"
    assert [str(arg) for arg in tree.children] == ["a", "b", "c"]
