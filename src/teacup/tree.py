"""Node model shared by the parser, the finalizers and the evaluator.

A handle is the parser's alternating ``[operand, operator, operand, ...]``
list; a finalizer turns it into whatever the caller wants. ``finalize``
builds ``Node`` objects whose ``data`` is the structural signature used for
dispatch, e.g. ``"E + E"`` or ``"_ if E then E else E end _"``.
"""
from __future__ import annotations

import re
from typing import Any, List, Optional, Pattern, Sequence, Tuple, TypeGuard, Union

from lark import Token, Tree
from lark.tree import Meta
from typing_extensions import TypeAlias

from .types import UnknownNodeShape


class Node(Tree):
    """Finalized handle: ``data`` is the signature, ``children`` the present operands."""

    def __init__(self, data: str, children: List[Any], meta: Optional[Meta] = None, ops: Sequence[Token] = ()):
        super().__init__(data, children, meta)
        self.ops: List[Token] = list(ops)

    @property
    def start(self) -> Optional[int]:
        return getattr(self.meta, "start_pos", None)

    @property
    def end(self) -> Optional[int]:
        return getattr(self.meta, "end_pos", None)

    def __repr__(self) -> str:
        return f"Node({self.data!r}, {self.children!r})"


AstNode: TypeAlias = Union[Node, Token]
Handle: TypeAlias = List[Any]
Guard: TypeAlias = Union[str, Pattern[str]]


def is_node(node: Any) -> TypeGuard[Node]:
    return isinstance(node, Node)

def is_token(node: Any) -> TypeGuard[Token]:
    return isinstance(node, Token)

def signature(node: Any) -> Optional[str]:
    """Leaves are keyed by token category, nodes by their derived signature."""
    if is_token(node):
        return str(node.type)

    if isinstance(node, Tree):
        return str(node.data)

    return None

def node_span(node: Any) -> Tuple[Optional[int], Optional[int]]:
    if is_token(node):
        return node.start_pos, node.end_pos

    if isinstance(node, Tree):
        meta = node.meta
        return getattr(meta, "start_pos", None), getattr(meta, "end_pos", None)

    return None, None

def node_position(node: Any) -> Tuple[Optional[int], Optional[int]]:
    if is_token(node):
        return node.line, node.column

    if isinstance(node, Tree):
        meta = node.meta
        return getattr(meta, "line", None), getattr(meta, "column", None)

    return None, None

# ---------------- Finalizers ----------------

def handle_signature(handle: Handle) -> str:
    parts: List[str] = []

    for i, x in enumerate(handle):
        if i % 2 == 0:
            parts.append("_" if x is None else "E")
        else:
            parts.append(str(x))

    return " ".join(parts)

def finalize(handle: Handle) -> AstNode:
    """Default finalizer: a bare atom passes through, anything else becomes a Node."""
    n = len(handle)

    if n == 3 and handle[0] is None and handle[2] is None:
        return handle[1]

    first = handle[0] if handle[0] is not None else handle[1]
    last = handle[-1] if handle[-1] is not None else handle[-2]

    meta = Meta()
    meta.start_pos, _ = node_span(first)
    _, meta.end_pos = node_span(last)
    meta.line, meta.column = node_position(first)
    meta.empty = False

    args = [x for i, x in enumerate(handle) if i % 2 == 0 and x is not None]
    ops = [x for i, x in enumerate(handle) if i % 2 == 1]

    return Node(handle_signature(handle), args, meta, ops)

def finalize_parenthesized(handle: Handle) -> str:
    """Render every handle as a parenthesized group: ``a - b - c`` -> ``((a - b) - c)``."""
    if len(handle) == 3 and handle[0] is None and handle[2] is None:
        return str(handle[1])

    return "(" + " ".join(str(x) for x in handle if x is not None) + ")"

# ---------------- Structural extractors ----------------

def match(guard: Guard, node: Any, strict: bool = False) -> Optional[List[Any]]:
    """Operands of ``node`` if its signature is ``guard`` (or matches the regex).

    match("E = E", `a = b`)             -> [a, b]
    match("E = E", `a + b`)             -> None
    match(re.compile(r"^E /+ E$"), ...) -> operands
    """
    sig = signature(node)

    if sig is not None:
        if isinstance(guard, str):
            hit = guard == sig
        else:
            hit = guard.search(sig) is not None

        if hit:
            return list(node.children) if is_node(node) else []

    if strict:
        expected = guard if isinstance(guard, str) else guard.pattern
        raise UnknownNodeShape(sig, f"Expected {expected!r}, got {sig!r}")

    return None

PARENS = "_ ( E ) _"
LIST_SHAPE = re.compile(r"^[E_]( [;,\n] [E_])+$")
BINARY_CALL_SHAPE = re.compile(r"^[E_] [^ ]+ [E_]$")
EXPLICIT_CALL_SHAPE = re.compile(r"^E \( [E_] \) _$")

def unwrap_parens(node: Any) -> Any:
    """Strip every layer of `( ... )` around node."""
    res = match(PARENS, node)

    while res:
        node = res[0]
        res = match(PARENS, node)

    return node

def flatten_list(node: Any) -> List[Any]:
    """`a, b, c` -> [a, b, c]; `a` -> [a]; nothing -> []."""
    res = match(LIST_SHAPE, node)
    if res is not None:
        return res

    return [node] if node is not None else []

def normalize_call(node: Any) -> Optional[Tuple[Any, List[Any]]]:
    """`a + b` -> (+, [a, b]); `f(a, b)` -> (f, [a, b]); otherwise None."""
    args = match(BINARY_CALL_SHAPE, node)
    if args is not None:
        return node.ops[0], args

    args = match(EXPLICIT_CALL_SHAPE, node)
    if args is not None:
        callee = args[0]
        group = args[1] if len(args) > 1 else None
        return callee, flatten_list(group)

    return None

def normalize_assignment(node: Any) -> Tuple[Any, Optional[List[Any]], Any]:
    """`a = b` -> (a, None, b); `f(a) = b` -> (f, [a], b)."""
    lhs, rhs = match("E = E", node, strict=True)  # type: ignore[misc]
    call = normalize_call(lhs)

    if call is not None:
        name, params = call
        return name, params, rhs

    return lhs, None, rhs
