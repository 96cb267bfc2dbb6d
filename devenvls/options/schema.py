"""
Option Schema Index

Holds the nested devenv option tree used to answer completion queries.

The schema is loaded once at startup from a JSON or YAML document shaped like:

    {
      "services": {
        "postgres": {
          "enable": {"description": "Enable Postgres"}
        }
      }
    }

Every mapping becomes an OptionNode, every other value an OptionLeaf.
Nothing writes to the index after it has been built.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from devenvls.completion.types import CompletionCandidate


class OptionSchemaError(Exception):
    """Raised when an option schema document cannot be loaded."""


@dataclass(frozen=True)
class OptionLeaf:
    """A non-mapping value in the schema (e.g. a description string)."""

    value: Any


@dataclass(frozen=True)
class OptionNode:
    """A mapping node: child options keyed by name, in document order."""

    children: Mapping[str, OptionSchemaNode] = field(
        default_factory=lambda: MappingProxyType({})
    )
    description: str | None = None

    def get(self, key: str) -> OptionSchemaNode | None:
        return self.children.get(key)


OptionSchemaNode = OptionNode | OptionLeaf


def build_schema(data: Any) -> OptionSchemaNode:
    """
    Convert a raw nested value (from json/yaml) into schema nodes.

    A mapping's description is its "description" child when that child is a
    string. The "description" key stays a regular child as well, so it is
    offered as a completion like any other key.
    """
    if not isinstance(data, Mapping):
        return OptionLeaf(data)

    children: dict[str, OptionSchemaNode] = {}
    for key, value in data.items():
        children[str(key)] = build_schema(value)

    description = data.get("description")
    if not isinstance(description, str):
        description = None

    return OptionNode(children=MappingProxyType(children), description=description)


class OptionSchemaIndex:
    """
    Read-only index over the option schema.

    Usage:
        index = OptionSchemaIndex.from_file(Path("options.json"))
        index.query(["services", "postgres"], "en")
        # -> [CompletionCandidate("enable", "Enable Postgres")]
    """

    def __init__(self, root: OptionSchemaNode | None = None) -> None:
        self._root: OptionSchemaNode = root if root is not None else OptionNode()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OptionSchemaIndex:
        if not isinstance(data, Mapping):
            raise OptionSchemaError(
                f"Option schema root must be a mapping, got {type(data).__name__}"
            )
        return cls(build_schema(data))

    @classmethod
    def from_file(cls, file_path: Path) -> OptionSchemaIndex:
        """
        Load the schema from a .json, .yml or .yaml file.

        Raises:
            OptionSchemaError: file missing, unreadable or malformed.
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                if file_path.suffix in (".yml", ".yaml"):
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except OSError as e:
            raise OptionSchemaError(f"Cannot read option schema {file_path}: {e}") from e
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
            raise OptionSchemaError(f"Malformed option schema {file_path}: {e}") from e

        return cls.from_dict(data)

    def __len__(self) -> int:
        if isinstance(self._root, OptionNode):
            return len(self._root.children)
        return 0

    def top_level_keys(self) -> list[str]:
        if isinstance(self._root, OptionNode):
            return list(self._root.children)
        return []

    def resolve(self, path: Sequence[str]) -> OptionSchemaNode | None:
        """Follow `path` from the root; None if any segment is unknown."""
        current: OptionSchemaNode = self._root
        for key in path:
            if not isinstance(current, OptionNode):
                return None
            child = current.get(key)
            if child is None:
                return None
            current = child
        return current

    def query(self, path: Sequence[str], partial_word: str) -> list[CompletionCandidate]:
        """
        Return the children of the node at `path` whose key starts with
        `partial_word`, in schema order.

        Unknown segments and leaf targets give an empty list.
        """
        node = self.resolve(path)
        if not isinstance(node, OptionNode):
            return []

        candidates = []
        for key, child in node.children.items():
            if not key.startswith(partial_word):
                continue
            description = child.description if isinstance(child, OptionNode) else None
            candidates.append(CompletionCandidate(label=key, detail=description))

        return candidates
