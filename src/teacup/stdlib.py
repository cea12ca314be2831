"""Root-environment builtins for Teacup, registered via runtime.register_builtin."""

from __future__ import annotations

import math
import operator
from typing import Dict, List

from .runtime import Builtins, TcValue, TeacupRuntimeError, Thunk, register_builtin

CONSTANTS: Dict[str, TcValue] = {
    "true": True,
    "false": False,
    "null": None,
    "Math": math,
}

for _name, _op in (
    ("+", operator.add),
    ("-", operator.sub),
    ("*", operator.mul),
    ("^", operator.pow),
    ("<", operator.lt),
    (">", operator.gt),
    ("<=", operator.le),
    (">=", operator.ge),
    ("==", operator.eq),
    ("prefix:-", operator.neg),
    ("prefix:not", operator.not_),
):
    register_builtin(_name)(_op)

@register_builtin("/")
def std_div(a: TcValue, b: TcValue) -> TcValue:
    if b == 0:
        raise TeacupRuntimeError("Division by zero")
    return a / b

@register_builtin("%")
def std_mod(a: TcValue, b: TcValue) -> TcValue:
    if b == 0:
        raise TeacupRuntimeError("Modulo by zero")
    return a % b

@register_builtin("..")
def std_range(start: int, end: int) -> List[int]:
    return list(range(int(start), int(end)))

@register_builtin("and", lazy=True)
def std_and(a: Thunk, b: Thunk) -> TcValue:
    return a() and b()

@register_builtin("or", lazy=True)
def std_or(a: Thunk, b: Thunk) -> TcValue:
    return a() or b()

@register_builtin("log")
def std_log(*args: TcValue) -> TcValue:
    for arg in args:
        print(render(arg))
    return args[-1] if args else None

def render(value: TcValue) -> str:
    match value:
        case True:
            return "true"
        case False:
            return "false"
        case None:
            return "null"
        case float() if value.is_integer():
            return str(int(value))
        case list():
            return "[" + ", ".join(render(x) for x in value) + "]"
        case _:
            return str(value)

Builtins.root_bindings.update(CONSTANTS)
