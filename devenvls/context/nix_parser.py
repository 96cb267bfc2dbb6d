"""
Nix source parsing via tree-sitter.

The grammar comes from the tree-sitter-nix package. Parsing is always done
from scratch; malformed input yields a tree containing ERROR nodes instead
of an exception.
"""

from __future__ import annotations

import tree_sitter_nix
from tree_sitter import Language, Parser, Tree

NIX_LANGUAGE = Language(tree_sitter_nix.language())


class NixParser:
    """Thin wrapper around a tree-sitter Parser loaded with the Nix grammar."""

    def __init__(self) -> None:
        self._parser = Parser(NIX_LANGUAGE)

    def parse(self, text: str) -> Tree:
        return self._parser.parse(text.encode("utf-8"))
