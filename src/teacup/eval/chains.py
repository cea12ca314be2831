from __future__ import annotations

from functools import reduce
from typing import List

from ..evaluator import Interpreter
from ..runtime import Frame, TcValue, TeacupRuntimeError, call_value, get_field
from ..tree import AstNode, Node, flatten_list, is_token, normalize_call

def run_call(interp: Interpreter, node: Node, frame: Frame) -> TcValue:
    """Shared by operator sugar (`a + b`) and explicit calls (`f(a, b)`)."""
    call = normalize_call(node)
    if call is None:
        raise TeacupRuntimeError(f"Not a call: {node.data!r}")

    callee, args = call
    fn = interp.eval(callee, frame)

    return call_value(fn, args, frame, interp.eval)

def eval_operator(interp: Interpreter, node: Node, frame: Frame, *operands: AstNode) -> TcValue:
    return run_call(interp, node, frame)

def eval_call(interp: Interpreter, node: Node, frame: Frame, callee: AstNode, args: AstNode) -> TcValue:
    return run_call(interp, node, frame)

def eval_nullary_call(interp: Interpreter, node: Node, frame: Frame, callee: AstNode) -> TcValue:
    return call_value(interp.eval(callee, frame), [], frame, interp.eval)

def eval_list_literal(interp: Interpreter, node: Node, frame: Frame, items: AstNode) -> List[TcValue]:
    return [interp.eval(item, frame) for item in flatten_list(items)]

def eval_empty_list(interp: Interpreter, node: Node, frame: Frame) -> List[TcValue]:
    return []

def eval_index(interp: Interpreter, node: Node, frame: Frame, obj: AstNode, index: AstNode) -> TcValue:
    """`x[i, j]` is `x[i][j]`."""
    return reduce(
        lambda res, key: get_field(res, interp.eval(key, frame)),
        flatten_list(index),
        interp.eval(obj, frame),
    )

def eval_field(interp: Interpreter, node: Node, frame: Frame, obj: AstNode, field: AstNode) -> TcValue:
    value = interp.eval(obj, frame)

    if is_token(field) and field.type == "word":
        key: TcValue = str(field)
    else:
        key = interp.eval(field, frame)

    return get_field(value, key)
