"""Source parsers for go-design-metrics."""

from .go import (
    DeclarationKind,
    GoDeclaration,
    GoSourceFile,
    GoSourceParser,
    get_thread_parser,
)

__all__ = [
    "DeclarationKind",
    "GoDeclaration",
    "GoSourceFile",
    "GoSourceParser",
    "get_thread_parser",
]
