"""
Lexer for Teacup-style grammars

Tokenizes source text with an ordered table of ``category -> regex`` patterns.

Features:
- One compiled alternation; earlier categories win at the same position
- Offsets, lines and columns tracked across dropped text
- Comments and unmatched filler are dropped (never an error)
- Fixity tagging: ambiguous infix tokens become prefix where no left operand exists
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Mapping, Optional, Tuple

from lark import Token

from .types import LexError

logger = logging.getLogger(__name__)

COMMENT = "comment"
INFIX = "infix"
PREFIX = "prefix"
OPEN = "open"

# ============================================================================
# Lexer Implementation
# ============================================================================

class Lexer:
    """
    Table-driven lexer.

    Every alternative becomes a named group; ``Match.lastgroup`` names the
    category that matched, so patterns may contain their own groups.
    """

    def __init__(self, token_definitions: Mapping[str, str]):
        self.categories: List[str] = list(token_definitions)
        self._group_kind: dict[str, str] = {}
        parts: List[str] = []

        for i, (kind, pattern) in enumerate(token_definitions.items()):
            if not isinstance(pattern, str):
                raise LexError(f"Pattern for {kind!r} must be a string, got {type(pattern).__name__}")
            group = f"g{i}"
            self._group_kind[group] = kind
            parts.append(f"(?P<{group}>{pattern})")

        try:
            self.regex = re.compile("|".join(parts))
        except re.error as exc:
            raise LexError(f"Invalid token pattern table: {exc}") from exc

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def pieces(self, text: str) -> Iterable[Token]:
        """Every slice of ``text``, typed or not, with correct positions.

        Untyped filler comes out with category ``None``.
        """
        pos = 0
        line = 1
        column = 1

        def emit(kind: Optional[str], value: str) -> Token:
            nonlocal pos, line, column
            tok = Token(
                kind,  # type: ignore[arg-type]
                value,
                start_pos=pos,
                line=line,
                column=column,
                end_pos=pos + len(value),
            )
            pos += len(value)
            newlines = value.count("\n")

            if newlines:
                line += newlines
                column = len(value) - value.rfind("\n")
            else:
                column += len(value)

            tok.end_line = line
            tok.end_column = column
            return tok

        for m in self.regex.finditer(text):
            if m.start() > pos:
                yield emit(None, text[pos:m.start()])
            yield emit(self._group_kind[m.lastgroup], m.group())  # type: ignore[index]

        if pos < len(text):
            yield emit(None, text[pos:])

    def tokenize(self, text: str) -> List[Token]:
        """Tokenize entire source, return token list"""
        tokens = [
            t for t in self.pieces(text)
            if t.type is not None and t.type != COMMENT and t.value
        ]
        logger.debug("tokenized %d chars into %d tokens", len(text), len(tokens))
        return tokens

# ============================================================================
# Fixity
# ============================================================================

def tag_fixity(tokens: Iterable[Token]) -> List[Token]:
    """Relabel infix tokens with no left operand as prefix.

    The previous category starts as infix so a leading operator is prefix.
    A relabeled token still counts as infix for the token after it, which is
    what makes ``- - 3`` two prefix operators.
    """
    prev = INFIX
    out: List[Token] = []

    for tok in tokens:
        if tok.type == INFIX and prev in (INFIX, OPEN):
            prev = tok.type
            tok = tok.update(PREFIX)
        else:
            prev = tok.type
        out.append(tok)

    return out

def tokenize(text: str, token_definitions: Mapping[str, str]) -> List[Token]:
    """Convenience function to tokenize source"""
    return Lexer(token_definitions).tokenize(text)

def token_pairs(tokens: Iterable[Token]) -> List[Tuple[str, str]]:
    return [(str(t.type), str(t.value)) for t in tokens]
