from __future__ import annotations

from ..evaluator import Interpreter
from ..runtime import Frame, TcValue, bind_declaration, build_function
from ..tree import AstNode, Node, flatten_list, normalize_assignment

def eval_let(interp: Interpreter, node: Node, frame: Frame, raw_decls: AstNode, body: AstNode) -> TcValue:
    """`let x = 1, f(y) = x + y in body end`.

    Plain values are computed in the outer frame; function sugar closes over
    the new frame so definitions can recurse.
    """
    decls = [normalize_assignment(d) for d in flatten_list(raw_decls)]
    let_frame = Frame(parent=frame)

    for name, params, expr in decls:
        if params is not None:
            value = build_function(params, expr, let_frame, interp.eval)
        else:
            value = interp.eval(expr, frame)

        bind_declaration(name, value, let_frame)

    return interp.eval(body, let_frame)
