from __future__ import annotations

import pytest

from tests.support.harness import TeacupTypeError, run_runtime_case

SCENARIOS = [
    pytest.param(
        "for x in 1..5 when x > 2 do x * x end",
        ("list", [9, 16]),
        None,
        id="guarded-comprehension",
    ),
    pytest.param("for x in [1, 2, 3] do x * 2 end", ("list", [2, 4, 6]), None, id="over-list"),
    pytest.param("for x in 1..1 do x end", ("list", []), None, id="empty-range"),
    pytest.param("for x in [] do x end", ("list", []), None, id="empty-list"),
    pytest.param('for c in "ab" do c + c end', ("list", ["aa", "bb"]), None, id="over-string"),
    pytest.param(
        "for x in 1..4 when x % 2 == 0 do x end",
        ("list", [2]),
        None,
        id="guard-filters",
    ),
    pytest.param(
        "for x in 1..3 do for y in 1..3 when y > x do [x, y] end end",
        ("list", [[[1, 2]], []]),
        None,
        id="nested",
    ),
    pytest.param(
        "for x in 1..4 do begin x; x * 10 end end",
        ("list", [10, 20, 30]),
        None,
        id="sequence-body",
    ),
    pytest.param(
        "let x = 100 in for x in 1..3 do x end end",
        ("list", [1, 2]),
        None,
        id="loop-variable-shadows",
    ),
    pytest.param(
        "let fs = for i in 1..4 do () -> i end in [fs[0](), fs[2]()] end",
        ("list", [1, 3]),
        None,
        id="fresh-binding-per-iteration",
    ),
    pytest.param("for x in 5 do x end", None, TeacupTypeError, id="not-iterable"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_loop_scenarios(source, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)
