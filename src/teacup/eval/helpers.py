from __future__ import annotations

from ..runtime import MISSING, TcValue

def is_truthy(val: TcValue) -> bool:
    match val:
        case bool(b):
            return b
        case None:
            return False
        case _ if val is MISSING:
            return False
        case int() | float():
            return val != 0
        case str() | list() | tuple() | dict():
            return bool(val)
        case _:
            return True
