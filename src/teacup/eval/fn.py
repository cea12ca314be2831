from __future__ import annotations

from typing import List

from ..evaluator import Interpreter
from ..runtime import Frame, TeaFn, build_function
from ..tree import AstNode, Node, flatten_list, match, unwrap_parens

def extract_params(decl: AstNode) -> List[AstNode]:
    """`(a, b)`, `a, b` and `a` declare parameters; `()` declares none."""
    if match("_ ( _ ) _", decl) is not None:
        return []

    return flatten_list(unwrap_parens(decl))

def eval_lambda(interp: Interpreter, node: Node, frame: Frame, decl: AstNode, body: AstNode) -> TeaFn:
    return build_function(extract_params(decl), body, frame, interp.eval)
