"""Interactive REPL for Teacup, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys
import traceback
from typing import List

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear

from .lang import TOKEN_DEFINITIONS
from .lexer import Lexer
from .repl_highlight import TeacupLexer
from .runner import display, repl_eval, root_environment
from .stdlib import render
from .types import Frame, TeacupError
from .utils import configure_logging, debug_py_trace_enabled, set_debug_py_trace

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/tree": ("Toggle printing the parenthesized parse", "[on|off]"),
    "/py-traceback": ("Toggle Python traceback on errors", "[on|off]"),
    "/reset": ("Reset the REPL environment", ""),
}

_ON = ("on", "1", "true", "yes")
_OFF = ("off", "0", "false", "no")

_BRACKETS = Lexer(TOKEN_DEFINITIONS)


def open_depth(text: str) -> int:
    """Open tokens minus close tokens; positive means the entry is unfinished."""
    depth = 0

    for tok in _BRACKETS.tokenize(text):
        if tok.type == "open":
            depth += 1
        elif tok.type == "close":
            depth -= 1

    return depth


class ReplState:
    def __init__(self) -> None:
        self.frame: Frame = root_environment()
        self.show_tree = False

    def reset(self) -> None:
        self.frame = root_environment()


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the primary prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=desc,
                )


def _toggle(arg: str, current: bool) -> bool:
    arg = arg.lower()

    if arg in _ON:
        return True
    if arg in _OFF:
        return False

    return not current


def _handle_slash(line: str, state: ReplState) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    parts = stripped.split(None, 1)
    cmd = parts[0]
    arg = parts[1] if len(parts) > 1 else ""

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/tree":
        state.show_tree = _toggle(arg, state.show_tree)
        print(f"Parse display: {'on' if state.show_tree else 'off'}")
        return True

    if cmd == "/py-traceback":
        if arg and arg.lower() not in _ON + _OFF:
            print("Usage: /py-traceback [on|off]", file=sys.stderr)
            return True

        set_debug_py_trace(_toggle(arg, debug_py_trace_enabled()))
        state_label = "on" if debug_py_trace_enabled() else "off"
        print(f"Python traceback: {state_label}")
        return True

    if cmd == "/reset":
        state.reset()
        print("Environment reset.")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def eval_entry(text: str, state: ReplState) -> None:
    try:
        if state.show_tree:
            print(display(text))
        result = repl_eval(text, state.frame)
    except TeacupError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if debug_py_trace_enabled():
            print("\nPython traceback:", file=sys.stderr)
            traceback.print_exc()
        return

    print(render(result))


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    configure_logging()
    state = ReplState()
    history = InMemoryHistory()
    bindings = KeyBindings()

    @bindings.add("enter")
    def _enter(event):
        buf = event.app.current_buffer
        text = buf.text

        # Inside let/if/for/brackets: keep reading lines.
        if not text.startswith("/") and open_depth(text) > 0:
            buf.insert_text("\n")
            return

        buf.validate_and_handle()

    session: PromptSession[str] = PromptSession(
        history=history,
        lexer=TeacupLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
        multiline=True,
        prompt_continuation="... ",
    )

    print("teacup repl: Ctrl-D to exit, / for commands")

    while True:
        try:
            text = session.prompt(">>> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize(text)
        if not text.strip():
            continue

        if _handle_slash(text, state):
            continue

        eval_entry(text, state)


def main(argv: List[str] | None = None) -> int:
    del argv
    repl()
    return 0
