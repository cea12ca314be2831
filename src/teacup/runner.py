from __future__ import annotations

import sys
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .evaluator import HandlerSpec, Interpreter, evaluate
from .lang import HANDLERS, PRIORITIES, TOKEN_DEFINITIONS
from .lexer import Lexer, tag_fixity, token_pairs, tokenize
from .parser import Parser, Priority, parse
from .runtime import Builtins, Frame, TcValue, TeacupError, init_stdlib, make_environment
from .stdlib import render
from .tree import finalize_parenthesized
from .utils import configure_logging, debug_py_trace_enabled

@dataclass(frozen=True)
class Grammar:
    tokens: Mapping[str, str]
    priorities: Mapping[str, Priority]

TEACUP = Grammar(tokens=TOKEN_DEFINITIONS, priorities=PRIORITIES)

class Pipeline:
    """Feed a value through each step in turn."""

    def __init__(self, *steps: Callable[[Any], Any]):
        self.steps = steps

    def process(self, x: Any) -> Any:
        for step in self.steps:
            x = step(x)

        return x

# ---------------- Engine API ----------------

def run(
    text: str,
    grammar: Grammar,
    handlers: Sequence[HandlerSpec],
    root: Frame,
) -> TcValue:
    """tokenize -> tag_fixity -> parse -> evaluate."""
    tokens = tag_fixity(tokenize(text, grammar.tokens))
    node = parse(tokens, grammar.priorities)
    return evaluate(node, root, handlers)

# ---------------- Teacup ----------------

def root_environment(source: Optional[str] = None, extra: Optional[Dict[str, TcValue]] = None) -> Frame:
    init_stdlib()
    return make_environment(Builtins.root_bindings, extra or {}, source=source)

def teacup(source: str) -> TcValue:
    env = root_environment(source)
    pipeline = Pipeline(
        Lexer(TEACUP.tokens).tokenize,
        tag_fixity,
        Parser(TEACUP.priorities).parse,
        Interpreter(HANDLERS, env).process,
    )
    return pipeline.process(source)

def display(source: str) -> str:
    """Fully parenthesized rendering of how ``source`` parses."""
    pipeline = Pipeline(
        Lexer(TEACUP.tokens).tokenize,
        tag_fixity,
        Parser(TEACUP.priorities, finalize_parenthesized).parse,
    )
    result = pipeline.process(source)
    return "" if result is None else str(result)

def parse_tree(source: str) -> Any:
    return Pipeline(Lexer(TEACUP.tokens).tokenize, tag_fixity, Parser(TEACUP.priorities).parse).process(source)

def repl_eval(source: str, frame: Frame) -> TcValue:
    return run(source, TEACUP, HANDLERS, frame)

# ---------------- CLI ----------------

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.exists():
        return candidate.read_text(encoding="utf-8")

    return arg

def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    show_tree = False
    show_tokens = False
    arg = None

    for token in (sys.argv[1:] if argv is None else argv):
        if token == "--tree":
            show_tree = True
            continue

        if token == "--tokens":
            show_tokens = True
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    if arg is None and sys.stdin.isatty():
        from .repl import repl
        repl()
        return 0

    source = _load_source(arg)

    try:
        if show_tokens:
            for kind, text in token_pairs(tag_fixity(tokenize(source, TEACUP.tokens))):
                print(f"{kind}\t{text!r}")

        if show_tree:
            print(display(source))

        print(render(teacup(source)))
    except TeacupError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if debug_py_trace_enabled():
            traceback.print_exc()
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
