from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional
from typing_extensions import TypeAlias

if TYPE_CHECKING:
    from .tree import Node

# ---------- Value Model ----------

class _Missing:
    """Bound to parameters that a call did not supply."""

    _instance: Optional['_Missing'] = None

    def __new__(cls) -> '_Missing':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "missing"

    def __bool__(self) -> bool:
        return False

MISSING = _Missing()

# Plain Python data, host objects, builtins and closures all flow through
# the evaluator unchanged.
TcValue: TypeAlias = Any

@dataclass
class Thunk:
    """Suspended argument: an unevaluated node plus the frame it closes over.

    Forcing is not memoized; calling twice evaluates twice.
    """
    node: Node
    frame: 'Frame'
    eval_func: Callable[[Node, 'Frame'], TcValue]

    def __call__(self) -> TcValue:
        return self.eval_func(self.node, self.frame)

@dataclass(frozen=True)
class Builtin:
    fn: Callable[..., TcValue]
    name: str = "<builtin>"
    lazy: bool = False

    def __call__(self, *args: TcValue) -> TcValue:
        return self.fn(*args)

    def __repr__(self) -> str:
        kind = "lazy builtin" if self.lazy else "builtin"
        return f"<{kind} {self.name}>"

@dataclass
class TeaFn:
    params: List[Node]            # declaration nodes (word / infix / prefix tokens)
    body: Node
    frame: 'Frame'                # captured defining frame
    eval_func: Callable[[Node, 'Frame'], TcValue]
    lazy = False

    def __call__(self, *args: TcValue) -> TcValue:
        from .runtime import call_teafn  # local import to avoid cycle
        return call_teafn(self, list(args))

    def __repr__(self) -> str:
        names = ", ".join(str(p) for p in self.params) if self.params else "nullary"
        return f"<fn params={names}>"

class Frame:
    """Lexical scope. Lookups walk outward; definitions land here."""

    def __init__(self, parent: Optional['Frame']=None, source: Optional[str]=None):
        self.parent = parent
        self.vars: Dict[str, TcValue] = {}
        self.source: Optional[str]

        if source is not None:
            self.source = source
        elif parent is not None:
            self.source = parent.source
        else:
            self.source = None

    def define(self, name: str, val: TcValue) -> None:
        self.vars[name] = val

    def get(self, name: str) -> TcValue:
        frame: Optional[Frame] = self

        while frame is not None:
            if name in frame.vars:
                return frame.vars[name]
            frame = frame.parent

        raise UndefinedName(name)

    def depth(self) -> int:
        count = 0
        frame = self.parent

        while frame is not None:
            count += 1
            frame = frame.parent

        return count

# ---------- Exceptions ----------

class TeacupError(Exception):
    """Base class for everything the engine raises."""

class LexError(TeacupError):
    """Token pattern table could not be compiled."""

class ParseError(TeacupError):
    def __init__(self, message: str, token: Optional[Any] = None):
        self.message = message
        self.token = token
        line = getattr(token, "line", None)
        col = getattr(token, "column", None)

        if line is not None:
            super().__init__(f"{message} at line {line}, col {col}")
        else:
            super().__init__(message)

class UnresolvedOperator(ParseError):
    def __init__(self, token: Any):
        super().__init__(f"Unknown operator: {str(token)!r}", token)

class TeacupRuntimeError(TeacupError):
    tc_meta: Optional[object]

    def __init__(self, message: str):
        super().__init__(message)
        self.tc_meta = None

    def __str__(self) -> str:
        msg = super().__str__()

        meta = getattr(self, "tc_meta", None)
        if meta is None:
            return msg

        line = getattr(meta, "line", None)
        col = getattr(meta, "column", None)

        if line is None:
            return msg

        if col is None:
            return f"{msg} (line {line})"

        return f"{msg} (line {line}, col {col})"

class UnknownNodeShape(TeacupRuntimeError):
    def __init__(self, signature: Optional[str], message: Optional[str] = None):
        super().__init__(message or f"Unknown node type: {signature!r}")
        self.signature = signature

class UndefinedName(TeacupRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Undefined variable: '{name}'")
        self.name = name

class InvalidDeclaration(TeacupRuntimeError):
    pass

class TeacupTypeError(TeacupRuntimeError):
    pass

class TeacupIndexError(TeacupRuntimeError):
    pass

def is_lazy(fn: TcValue) -> bool:
    return bool(getattr(fn, "lazy", False))
