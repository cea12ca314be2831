from __future__ import annotations

from ..evaluator import Interpreter
from ..runtime import Frame, TcValue
from ..tree import AstNode, Node

def eval_group(interp: Interpreter, node: Node, frame: Frame, inner: AstNode) -> TcValue:
    """`( x )` and `begin x end` evaluate what's between them."""
    return interp.eval(inner, frame)

def eval_sequence(interp: Interpreter, node: Node, frame: Frame, *stmts: AstNode) -> TcValue:
    last: TcValue = None

    for stmt in stmts:
        last = interp.eval(stmt, frame)

    return last
