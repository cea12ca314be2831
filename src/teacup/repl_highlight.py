"""prompt_toolkit lexer for live Teacup syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable, Mapping, Optional

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lang import TOKEN_DEFINITIONS
from .lexer import Lexer as TcLexer

# Token category -> prompt_toolkit style string.
KIND_STYLE = {
    "number": "ansimagenta",
    "open": "bold ansicyan",
    "middle": "bold ansicyan",
    "close": "bold ansicyan",
    "infix": "",
    "word": "",
    "string": "ansigreen",
    "comment": "italic ansigray",
}

# Filler that no pattern claims; the engine drops it silently.
UNMATCHED_STYLE = "bold ansired"

def highlight_line(text: str, lexer: TcLexer) -> StyleAndTextTuples:
    """Style every piece of a line, dropped filler included."""
    if not text:
        return [("", "")]

    result: StyleAndTextTuples = []

    for piece in lexer.pieces(text):
        kind: Optional[str] = piece.type
        value = str(piece)

        if kind is None:
            style = UNMATCHED_STYLE if value.strip() else ""
        else:
            style = KIND_STYLE.get(kind, "")
        result.append((style, value))

    return result

class TeacupLexer(Lexer):
    """prompt_toolkit Lexer that highlights source with the engine tokenizer."""

    def __init__(self, token_definitions: Mapping[str, str] = TOKEN_DEFINITIONS):
        self.lexer = TcLexer(token_definitions)

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = highlight_line(lines[lineno], self.lexer)
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
