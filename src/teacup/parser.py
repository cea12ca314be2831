"""
Generalized operator-precedence parser

Every token, atoms included, carries a (left, right) binding-power pair.
Comparing the token on the left of the pending operand with the lookahead
decides between three moves:

- open:  lookahead binds tighter; start a nested handle
- close: lookahead binds looser; finalize the current handle
- merge: equal powers; extend the current handle (mixfix keywords)

Handles are alternating ``[operand, op, operand, ..., operand]`` lists and
the finalizer decides what a reduced handle becomes.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Iterable, List, Mapping, Optional

from lark import Token

from .tree import finalize as default_finalize, handle_signature
from .types import UnresolvedOperator

logger = logging.getLogger(__name__)

MAX_POWER = 10004
SUFFIX_POWER = 10005

@dataclass(frozen=True)
class Priority:
    left: int
    right: int

def lassoc(n: int) -> Priority:
    return Priority(n, n - 1)

def rassoc(n: int) -> Priority:
    return Priority(n, n + 1)

def xassoc(n: int) -> Priority:
    return Priority(n, n)

def prefix(n: int) -> Priority:
    return Priority(n, MAX_POWER)

def suffix(n: int) -> Priority:
    return Priority(SUFFIX_POWER, n)

Finalizer = Callable[[List[Any]], Any]

class Parser:
    def __init__(self, priorities: Mapping[str, Priority], finalize: Finalizer = default_finalize):
        self.priorities = {
            key: prio if isinstance(prio, Priority) else Priority(*prio)
            for key, prio in priorities.items()
        }
        self.finalize = finalize

    def priority(self, tok: Token) -> Priority:
        """Look up ``kind:text``, then ``text``, then ``type:kind``."""
        for key in (f"{tok.type}:{tok}", str(tok), f"type:{tok.type}"):
            prio = self.priorities.get(key)
            if prio is not None:
                return prio

        raise UnresolvedOperator(tok)

    def order(self, left: Optional[Token], right: Optional[Token]) -> Optional[int]:
        """None when done, 1 to open, -1 to close, 0 to merge."""
        if left is None and right is None:
            return None

        if left is None:
            return 1

        if right is None:
            return -1

        lpow = self.priority(left).left
        rpow = self.priority(right).right

        return (rpow > lpow) - (rpow < lpow)

    def parse(self, tokens: Iterable[Token]) -> Any:
        queue: Deque[Token] = deque(tokens)

        def advance() -> Optional[Token]:
            return queue.popleft() if queue else None

        stack: List[List[Any]] = []
        # middle is the operand between left and right (None if they are adjacent)
        middle: Any = None
        left: Optional[Token] = None
        right = advance()
        current: List[Any] = [None, left]

        while True:
            step = self.order(left, right)

            if step is None:
                return middle

            if step > 0:
                # like inserting "(" between left and middle
                stack.append(current)
                current = [middle, right]
                middle = None
                left = right
                right = advance()
            elif step < 0:
                # like inserting ")" between middle and right
                current.append(middle)
                middle = self.finalize(current)
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("reduce %r", handle_signature(current))
                current = stack.pop()
                left = current[-1]
            else:
                current.append(middle)
                current.append(right)
                middle = None
                left = right
                right = advance()

def parse(tokens: Iterable[Token], priorities: Mapping[str, Priority], finalize: Finalizer = default_finalize) -> Any:
    return Parser(priorities, finalize).parse(tokens)
