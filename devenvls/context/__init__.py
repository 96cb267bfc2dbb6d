"""Cursor context analysis: typed path, partial word and enclosing scope."""
from .path_parser import (
    CompletionContext,
    extract_partial_word,
    line_prefix,
    parse_completion_context,
    parse_dotted_path,
)
from .scope_resolver import resolve_scope, to_point

__all__ = [
    'CompletionContext',
    'extract_partial_word',
    'line_prefix',
    'parse_completion_context',
    'parse_dotted_path',
    'resolve_scope',
    'to_point',
]
