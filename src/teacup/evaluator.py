from __future__ import annotations

import logging
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .runtime import Frame, TcValue, TeacupRuntimeError, UnknownNodeShape
from .tree import AstNode, Guard, match, node_position, node_span, signature
from .utils import deep_recursion

logger = logging.getLogger(__name__)

HandlerFunc = Callable[..., TcValue]

@dataclass(frozen=True)
class Handler:
    """Signature guard plus the function run when a node matches it.

    The function is called as ``func(interp, node, frame, *operands)``.
    """
    key: Guard
    func: HandlerFunc

HandlerSpec = Union[Handler, Tuple[Guard, HandlerFunc]]

def _maybe_attach_location(exc: TeacupRuntimeError, node: Any, frame: Frame) -> None:
    if getattr(exc, "_augmented", False):
        return

    line, col = node_position(node)

    if line is None:
        start, _ = node_span(node)
        source = getattr(frame, "source", None)
        if start is None or source is None:
            return

        line = source.count("\n", 0, start) + 1
        last_nl = source.rfind("\n", 0, start)
        col = start + 1 if last_nl == -1 else start - last_nl

    exc.tc_meta = SimpleNamespace(line=line, column=col)
    exc._augmented = True  # type: ignore[attr-defined]

# ---------------- Interpreter ----------------

class Interpreter:
    """Ordered pattern dispatch over node signatures.

    Handlers are tried last-registered first, so a specific shape registered
    after a broader one wins.
    """

    def __init__(self, handlers: Iterable[HandlerSpec], frame: Optional[Frame] = None):
        specs = [h if isinstance(h, Handler) else Handler(*h) for h in handlers]
        self.handlers: List[Handler] = list(reversed(specs))
        self.frame = frame if frame is not None else Frame()

    def dispatch(self, node: AstNode) -> Tuple[Handler, List[AstNode]]:
        for handler in self.handlers:
            args = match(handler.key, node)
            if args is not None:
                return handler, args

        raise UnknownNodeShape(signature(node))

    def eval(self, node: AstNode, frame: Frame) -> TcValue:
        if node is None:
            raise UnknownNodeShape(None, "Cannot evaluate an empty expression")

        try:
            handler, args = self.dispatch(node)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("eval %r at depth %d", signature(node), frame.depth())
            return handler.func(self, node, frame, *args)
        except TeacupRuntimeError as e:
            _maybe_attach_location(e, node, frame)
            raise

    def process(self, node: AstNode) -> TcValue:
        try:
            with deep_recursion():
                return self.eval(node, self.frame)
        except RecursionError as exc:
            raise TeacupRuntimeError("Maximum recursion depth exceeded") from exc

# ---------------- Public API ----------------

def evaluate(node: AstNode, frame: Frame, handlers: Sequence[HandlerSpec]) -> TcValue:
    return Interpreter(handlers, frame).process(node)
