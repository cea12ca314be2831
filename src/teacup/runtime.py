from __future__ import annotations

import importlib
from collections.abc import Mapping
from typing import Callable, Dict, List, Optional

from .tree import AstNode, is_token
from .types import (
    MISSING, Builtin, Frame, TeaFn, Thunk, TcValue,
    TeacupError, TeacupRuntimeError, TeacupTypeError, TeacupIndexError,
    UnknownNodeShape, UndefinedName, InvalidDeclaration, LexError, ParseError,
    UnresolvedOperator, is_lazy,
)

EvalFunc = Callable[[AstNode, Frame], TcValue]

_STDLIB_INITIALIZED = False

class Builtins:
    root_bindings: Dict[str, TcValue] = {}

def init_stdlib() -> None:
    """Load the stdlib module (idempotent) so register_builtin hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("teacup.stdlib")
    _STDLIB_INITIALIZED = True

def register_builtin(name: str, *, lazy: bool = False):
    def dec(fn: Callable[..., TcValue]):
        Builtins.root_bindings[name] = Builtin(fn=fn, name=name, lazy=lazy)
        return fn

    return dec

def lazy(fn: Callable[..., TcValue]) -> Builtin:
    """Mark a host callable as taking thunks instead of values."""
    return Builtin(fn=fn, name=getattr(fn, "__name__", "<lazy>"), lazy=True)

def make_environment(*binding_groups: Mapping[str, TcValue], source: Optional[str] = None) -> Frame:
    """Root frame holding the union of ``binding_groups`` (later groups win)."""
    frame = Frame(source=source)

    for bindings in binding_groups:
        for name, value in bindings.items():
            frame.define(name, value)

    return frame

# ---------------- Declarations ----------------

_DECLARABLE = ("word", "infix", "prefix")

def declared_name(decl: AstNode) -> str:
    """Binding name for a declaration leaf; prefix operators get a ``prefix:`` key."""
    if not is_token(decl) or decl.type not in _DECLARABLE:
        raise InvalidDeclaration("Invalid variable declaration.")

    if decl.type == "prefix":
        return f"prefix:{decl}"

    return str(decl)

def bind_declaration(decl: AstNode, value: TcValue, frame: Frame) -> None:
    frame.define(declared_name(decl), value)

# ---------------- Calls ----------------

def build_function(params: List[AstNode], body: AstNode, frame: Frame, eval_func: EvalFunc) -> TeaFn:
    for decl in params:
        declared_name(decl)

    return TeaFn(params=list(params), body=body, frame=frame, eval_func=eval_func)

def call_teafn(fn: TeaFn, args: List[TcValue]) -> TcValue:
    """
    Positional binding against the captured frame:
    - missing arguments are bound to MISSING
    - extra arguments are ignored
    """
    callee_frame = Frame(parent=fn.frame)

    for i, decl in enumerate(fn.params):
        bind_declaration(decl, args[i] if i < len(args) else MISSING, callee_frame)

    return fn.eval_func(fn.body, callee_frame)

def call_value(fn: TcValue, arg_nodes: List[AstNode], frame: Frame, eval_func: EvalFunc) -> TcValue:
    """Wrap each argument in a thunk; lazy callees get the thunks, the rest get values."""
    if not callable(fn):
        raise TeacupTypeError(f"Value of type {type(fn).__name__} is not callable")

    thunks = [Thunk(node, frame, eval_func) for node in arg_nodes]
    args = thunks if is_lazy(fn) else [t() for t in thunks]

    try:
        return fn(*args)
    except TypeError as exc:
        # host callables reject bad operand types or arity with TypeError
        raise TeacupTypeError(str(exc)) from exc
    except (ArithmeticError, ValueError) as exc:
        # 0 ^ -1, float overflow, Math.sqrt(-1), int("a")
        raise TeacupRuntimeError(str(exc)) from exc

# ---------------- Fields ----------------

def get_field(obj: TcValue, field: TcValue) -> TcValue:
    """``obj[field]`` for mappings and non-string keys, attribute access otherwise.

    Attribute access goes through ``getattr`` so callables come back bound to
    ``obj`` and ``obj.method(...)`` works.
    """
    if isinstance(field, str) and not isinstance(obj, Mapping):
        try:
            return getattr(obj, field)
        except AttributeError:
            raise TeacupIndexError(f"{type(obj).__name__} has no field '{field}'") from None

    try:
        return obj[field]
    except (KeyError, IndexError) as exc:
        raise TeacupIndexError(f"Index {field!r} not found") from exc
    except TypeError as exc:
        raise TeacupTypeError(f"Cannot index {type(obj).__name__} with {type(field).__name__}") from exc
