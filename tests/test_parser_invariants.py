from __future__ import annotations

import pytest
from lark import Token

from teacup.lang import PRIORITIES
from teacup.lexer import tag_fixity
from teacup.parser import (
    MAX_POWER,
    SUFFIX_POWER,
    Parser,
    Priority,
    lassoc,
    parse,
    prefix,
    rassoc,
    suffix,
    xassoc,
)
from teacup.tree import handle_signature
from tests.support.harness import TEACUP_LEXER, ParseError, UnresolvedOperator


def _tokens(source: str):
    return tag_fixity(TEACUP_LEXER.tokenize(source))


def test_priority_shapes() -> None:
    assert lassoc(10) == Priority(10, 9)
    assert rassoc(10) == Priority(10, 11)
    assert xassoc(10) == Priority(10, 10)
    assert prefix(10) == Priority(10, MAX_POWER)
    assert suffix(10) == Priority(SUFFIX_POWER, 10)


def test_priority_lookup_order() -> None:
    parser = Parser(
        {
            "prefix:-": Priority(1, 2),
            "-": Priority(3, 4),
            "type:prefix": Priority(5, 6),
        }
    )

    assert parser.priority(Token("prefix", "-")) == Priority(1, 2)
    assert parser.priority(Token("infix", "-")) == Priority(3, 4)
    assert parser.priority(Token("prefix", "~")) == Priority(5, 6)


def test_unresolved_operator_is_a_parse_error() -> None:
    parser = Parser({"type:word": xassoc(100)})

    with pytest.raises(UnresolvedOperator) as excinfo:
        parser.priority(Token("infix", "~", line=3, column=4))

    assert isinstance(excinfo.value, ParseError)
    assert str(excinfo.value.token) == "~"
    assert "line 3, col 4" in str(excinfo.value)


def test_unresolved_operator_during_parse() -> None:
    with pytest.raises(UnresolvedOperator, match="'x'"):
        parse([Token("word", "x"), Token("word", "y")], {})


def test_single_atom_needs_no_lookup() -> None:
    assert parse([Token("word", "x")], {}) == Token("word", "x")


def test_tuple_priorities_are_accepted() -> None:
    parser = Parser({"type:word": (100, 100), "+": (10, 9)}, handle_signature)
    assert parser.priorities["+"] == Priority(10, 9)
    assert parser.parse([Token("word", "a"), Token("infix", "+"), Token("word", "b")]) == "E + E"


def test_order_moves() -> None:
    parser = Parser(PRIORITIES)
    plus = Token("infix", "+")
    star = Token("infix", "*")
    lt = Token("infix", "<")

    assert parser.order(None, None) is None
    assert parser.order(None, plus) == 1
    assert parser.order(plus, None) == -1
    assert parser.order(plus, star) == 1
    assert parser.order(star, plus) == -1
    assert parser.order(plus, plus) == -1
    assert parser.order(lt, lt) == 0


def test_finalizer_sees_every_handle() -> None:
    seen = []

    def record(handle):
        seen.append(handle_signature(handle))
        return handle_signature(handle)

    result = Parser(PRIORITIES, record).parse(_tokens("a + b * c"))

    assert result == "E + E"
    assert "E * E" in seen
    assert seen.count("_ a _") == 1


def test_finalizer_can_count_nodes() -> None:
    def depth(handle):
        present = [x for i, x in enumerate(handle) if i % 2 == 0 and x is not None]
        return 1 + max(present, default=0)

    assert Parser(PRIORITIES, depth).parse(_tokens("a + b * c")) == 3


def test_close_without_open_passes_through() -> None:
    tree = Parser(PRIORITIES).parse(_tokens(")"))
    assert tree == Token("close", ")")


def test_unclosed_bracket_keeps_partial_signature() -> None:
    tree = Parser(PRIORITIES).parse(_tokens("(1"))
    assert tree.data == "_ ( E"
