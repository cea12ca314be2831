from __future__ import annotations

from ..evaluator import Interpreter
from ..runtime import Frame, TcValue
from ..tree import AstNode, Node
from .helpers import is_truthy

def eval_if(interp: Interpreter, node: Node, frame: Frame, *exprs: AstNode) -> TcValue:
    """`if t1 then c1 elif t2 then c2 ... else d end`.

    Operands alternate test/consequent; an odd trailing operand is the else branch.
    """
    pending = list(exprs)

    while pending:
        if len(pending) == 1:
            return interp.eval(pending[0], frame)

        test, consequent, *pending = pending
        if is_truthy(interp.eval(test, frame)):
            return interp.eval(consequent, frame)

    return None
