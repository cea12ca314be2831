from __future__ import annotations

from typing import List, Optional

from ..evaluator import Interpreter
from ..runtime import Frame, TcValue, TeacupTypeError, bind_declaration
from ..tree import AstNode, Node
from .helpers import is_truthy

def run_for(
    interp: Interpreter,
    var: AstNode,
    source: AstNode,
    guard: Optional[AstNode],
    body: AstNode,
    frame: Frame,
) -> List[TcValue]:
    items = interp.eval(source, frame)

    try:
        iterator = iter(items)
    except TypeError:
        raise TeacupTypeError(f"Cannot iterate over {type(items).__name__}") from None

    results: List[TcValue] = []

    for item in iterator:
        iter_frame = Frame(parent=frame)
        bind_declaration(var, item, iter_frame)

        if guard is None or is_truthy(interp.eval(guard, iter_frame)):
            results.append(interp.eval(body, iter_frame))

    return results

def eval_for(interp: Interpreter, node: Node, frame: Frame, var: AstNode, source: AstNode, body: AstNode) -> List[TcValue]:
    return run_for(interp, var, source, None, body, frame)

def eval_for_when(
    interp: Interpreter,
    node: Node,
    frame: Frame,
    var: AstNode,
    source: AstNode,
    guard: AstNode,
    body: AstNode,
) -> List[TcValue]:
    return run_for(interp, var, source, guard, body, frame)
