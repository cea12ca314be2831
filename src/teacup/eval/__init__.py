"""Semantic handlers for the Teacup language, grouped by concern."""

__all__ = [
    "blocks",
    "chains",
    "control",
    "fn",
    "helpers",
    "let",
    "literals",
    "loops",
]
