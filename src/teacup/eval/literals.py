from __future__ import annotations

from lark import Token

from ..evaluator import Interpreter
from ..runtime import Frame, TcValue

def eval_variable(interp: Interpreter, tok: Token, frame: Frame) -> TcValue:
    return frame.get(str(tok))

def eval_prefix_name(interp: Interpreter, tok: Token, frame: Frame) -> TcValue:
    return frame.get(f"prefix:{tok}")

def eval_number(interp: Interpreter, tok: Token, frame: Frame) -> TcValue:
    text = str(tok)

    try:
        return int(text)
    except ValueError:
        return float(text)

def eval_string(interp: Interpreter, tok: Token, frame: Frame) -> str:
    return str(tok)[1:-1]
