from dataclasses import dataclass


@dataclass(frozen=True)
class CompletionCandidate:
    """An option name offered at the cursor, with its description if known."""

    label: str
    detail: str | None = None
