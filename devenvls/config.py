"""
Server configuration.

Settings come from the environment when the process starts and may be
overridden by the client's `initializationOptions`:

    DEVENVLS_OPTIONS                     path to the option schema (.json/.yaml)
    DEBUG                                verbose logging on stderr
    DEVENVLS_RESOLVE_SCOPE_ON_COMPLETION recompute scope inside each completion
    DEVENVLS_EVICT_ON_CLOSE              drop document state on didClose
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, "").strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class Settings:
    options_file: Path | None = None
    debug: bool = False

    # Scope is normally computed on the change event, from the cursor of the
    # previous completion request. When set, every completion request
    # re-parses the document and resolves scope at its own cursor.
    resolve_scope_on_completion: bool = False

    evict_on_close: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        if environ is None:
            environ = os.environ

        options_file = environ.get("DEVENVLS_OPTIONS")
        return cls(
            options_file=Path(options_file).expanduser() if options_file else None,
            debug=bool(environ.get("DEBUG")),
            resolve_scope_on_completion=_env_flag(
                environ, "DEVENVLS_RESOLVE_SCOPE_ON_COMPLETION"
            ),
            evict_on_close=_env_flag(environ, "DEVENVLS_EVICT_ON_CLOSE"),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Settings:
        return cls().merge(data)

    def merge(self, data: Mapping[str, Any] | None) -> Settings:
        """
        Return a copy with the camelCase keys of `data` applied.

        Unknown keys are ignored, as are values of the wrong type.
        """
        if not data:
            return self

        changes: dict[str, Any] = {}

        options_file = data.get("optionsFile")
        if isinstance(options_file, str) and options_file:
            changes["options_file"] = Path(options_file).expanduser()

        if isinstance(data.get("resolveScopeOnCompletion"), bool):
            changes["resolve_scope_on_completion"] = data["resolveScopeOnCompletion"]

        if isinstance(data.get("evictOnClose"), bool):
            changes["evict_on_close"] = data["evictOnClose"]

        return replace(self, **changes)
