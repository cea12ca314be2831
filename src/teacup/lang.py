"""Teacup: the stock language instance for the engine.

Token table, priority table and handler table. Handler order matters:
later entries take precedence over earlier ones.
"""
from __future__ import annotations

import re
from typing import Dict, List

from .evaluator import Handler
from .parser import Priority, lassoc, prefix, rassoc, suffix, xassoc
from .eval.blocks import eval_group, eval_sequence
from .eval.chains import (
    eval_call,
    eval_empty_list,
    eval_field,
    eval_index,
    eval_list_literal,
    eval_nullary_call,
    eval_operator,
)
from .eval.control import eval_if
from .eval.fn import eval_lambda
from .eval.let import eval_let
from .eval.literals import eval_number, eval_prefix_name, eval_string, eval_variable
from .eval.loops import eval_for, eval_for_when

# Order matters: keywords are declared before the generic word pattern.
TOKEN_DEFINITIONS: Dict[str, str] = {
    "number": r"\d+(?:\.\d+)?(?:[eE][+-]?\d+)?",
    "open": r"[\(\[\{]|\b(?:let|for|if|begin)\b",
    "middle": r"\b(?:then|elif|else|in|do|when)\b",
    "close": r"[\)\]\}]|\bend\b",
    "infix": r"[,;\n]|[!@$%^&*|/?.:~+=<>-]+|\b(?:and|or|not)\b",
    "word": r"\w+",
    "string": r'"(?:[^"]|\\.)*"',
    "comment": r"#[^\n]*(?=\n|$)",
}

PRIORITIES: Dict[str, Priority] = {
    # Brackets and control structures
    "type:open": prefix(5),
    "type:middle": xassoc(5),
    "type:close": suffix(5),

    # Lists
    "\n": xassoc(15),
    ";": xassoc(15),
    ",": xassoc(25),

    # Assignment and lambda
    "=": rassoc(35),
    "->": rassoc(35),

    # Comparison and logic
    "not": prefix(105),
    "or": lassoc(115),
    "and": lassoc(125),
    ">": xassoc(205),
    "<": xassoc(205),
    ">=": xassoc(205),
    "<=": xassoc(205),
    "==": xassoc(205),

    # Range
    "..": xassoc(305),

    # Arithmetic
    "+": lassoc(505),
    "-": lassoc(505),
    "prefix:-": prefix(605),
    "*": lassoc(605),
    "/": lassoc(605),
    "%": lassoc(605),
    "^": rassoc(705),

    # Anything else
    "type:infix": xassoc(905),
    "type:prefix": prefix(905),

    # Field access
    ".": Priority(15005, 1004),

    # Atoms
    "type:word": xassoc(20005),
    "type:number": xassoc(20005),
    "type:string": xassoc(20005),
}

IF_SHAPE = re.compile(r"^_ if E then E( elif E then E)*( else E)? end _$")

def build_handlers() -> List[Handler]:
    return [
        Handler(re.compile(r"^(word|infix)$"), eval_variable),
        Handler("prefix", eval_prefix_name),
        Handler("number", eval_number),
        Handler("string", eval_string),
        # registered before the dot and lambda shapes it also matches
        Handler(re.compile(r"^[E_] ([!@#$%^&*+/?<>=.-]+|and|or|not) E$"), eval_operator),
        Handler("_ ( E ) _", eval_group),
        Handler("_ begin E end _", eval_group),
        Handler("E ( E ) _", eval_call),
        Handler("E ( _ ) _", eval_nullary_call),
        Handler("_ [ E ] _", eval_list_literal),
        Handler("_ [ _ ] _", eval_empty_list),
        Handler("E [ E ] _", eval_index),
        Handler("E . E", eval_field),
        Handler(IF_SHAPE, eval_if),
        Handler(re.compile(r"[,;\n]"), eval_sequence),
        Handler("E -> E", eval_lambda),
        Handler("_ let E in E end _", eval_let),
        Handler("_ for E in E do E end _", eval_for),
        Handler("_ for E in E when E do E end _", eval_for_when),
    ]

HANDLERS: List[Handler] = build_handlers()
