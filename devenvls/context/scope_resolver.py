"""
Scope resolution for Nix attribute sets.

Given a parsed tree and the cursor, reconstruct the attribute keys that
enclose the cursor, outermost first:

    {
      services.postgres = {
        settings = {
          |            <- cursor
        };
      };
    }

    resolve_scope(...) == ["services.postgres", "settings"]

In the tree-sitter-nix grammar a binding's `attrpath` is the previous
sibling of the value it keys. Walking "previous sibling, else parent" from
the node under the cursor therefore visits each enclosing key exactly once,
innermost first.
"""

from __future__ import annotations

from typing import Any, Protocol

from devenvls.workspace.document_store import CursorPosition

ATTRPATH_NODE_TYPE = "attrpath"

Point = tuple[int, int]


class SyntaxNode(Protocol):
    """The subset of tree_sitter.Node used by the resolver."""

    type: str
    start_byte: int
    end_byte: int

    @property
    def prev_sibling(self) -> Any: ...

    @property
    def parent(self) -> Any: ...

    def descendant_for_point_range(self, start: Point, end: Point) -> Any: ...


def to_point(text: str, position: CursorPosition) -> Point:
    """
    Convert a line/character position into a tree-sitter (row, byte) point.

    The column is clamped to the line, so a cursor past the end of a line
    lands on its last byte.
    """
    lines = text.split("\n")
    if position.line >= len(lines):
        return (max(position.line, 0), 0)

    prefix = lines[position.line][:max(position.character, 0)]
    return (position.line, len(prefix.encode("utf-8")))


def resolve_scope(root: SyntaxNode, point: Point, source: str) -> list[str]:
    """
    Return the attrpath texts enclosing `point`, outermost first.

    An empty list means top level, or that nothing in the tree contains
    the point.
    """
    node = root.descendant_for_point_range(point, point)
    if node is None:
        return []

    source_bytes = source.encode("utf-8")
    attrpaths: list[str] = []

    current = node
    while current is not None:
        if current.type == ATTRPATH_NODE_TYPE:
            text = source_bytes[current.start_byte:current.end_byte].decode(
                "utf-8", errors="replace"
            ).strip()
            if text:
                attrpaths.append(text)

        if current.prev_sibling is not None:
            current = current.prev_sibling
        else:
            current = current.parent

    attrpaths.reverse()
    return attrpaths
