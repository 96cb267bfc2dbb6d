"""
Line-prefix parsing for completion.

Splits the text before the cursor into the dotted path already typed
(`services.postgres.`) and the word still being typed (`en`).
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CompletionContext:
    """What the user has typed on the current line up to the cursor."""

    dotted_path: list[str] = field(default_factory=list)
    partial_word: str = ""


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def line_prefix(text: str, line: int, character: int) -> str:
    """
    Return line `line` of `text` up to `character`.

    Out-of-range positions are clamped: a missing line gives "", a column
    past the end of the line gives the whole line.
    """
    if line < 0:
        return ""

    lines = text.split("\n")
    if line >= len(lines):
        return ""

    content = lines[line]
    if content.endswith("\r"):
        content = content[:-1]

    return content[:max(character, 0)]


def parse_dotted_path(prefix: str) -> list[str]:
    """
    Path segments typed before the partial word.

    >>> parse_dotted_path("foo.bar.ba")
    ['foo', 'bar']
    >>> parse_dotted_path("x")
    []
    """
    segments = prefix.split(".")[:-1]
    return [segment.strip() for segment in segments if segment.strip()]


def extract_partial_word(prefix: str) -> str:
    """
    The run of word characters immediately before the cursor.

    Scans backward from the end until the first non-word character;
    with no such character the whole prefix is the word.
    """
    start = len(prefix)
    while start > 0 and _is_word_char(prefix[start - 1]):
        start -= 1
    return prefix[start:]


def parse_completion_context(prefix: str) -> CompletionContext:
    return CompletionContext(
        dotted_path=parse_dotted_path(prefix),
        partial_word=extract_partial_word(prefix),
    )
