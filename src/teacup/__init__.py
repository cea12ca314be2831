"""Teacup: a configurable precedence-parser front end and tree-walking evaluator."""

from .evaluator import Handler, Interpreter, evaluate
from .lexer import Lexer, tag_fixity
from .parser import Parser, Priority, lassoc, parse, prefix, rassoc, suffix, xassoc
from .runner import Grammar, Pipeline, TEACUP, display, run, teacup, tokenize
from .runtime import lazy, make_environment
from .tree import Node, finalize, finalize_parenthesized

__all__ = [
    "Grammar",
    "Handler",
    "Interpreter",
    "Lexer",
    "Node",
    "Parser",
    "Pipeline",
    "Priority",
    "TEACUP",
    "display",
    "evaluate",
    "finalize",
    "finalize_parenthesized",
    "lassoc",
    "lazy",
    "make_environment",
    "parse",
    "prefix",
    "rassoc",
    "run",
    "suffix",
    "tag_fixity",
    "teacup",
    "tokenize",
    "xassoc",
]
