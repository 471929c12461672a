"""Code fence scanning.

Hidden design decisions:
- Fences are found by a single left-to-right scan over line starts,
  tracking whether the scanner is outside or inside a fence
- An opening fence is a line made of three backticks plus an optional
  ASCII word-character language tag, terminated by a newline
- The first line starting with three backticks after an opening fence
  closes it; fences never nest
- An opening fence without a closing line is not a fence and stays prose
"""

import re
from dataclasses import dataclass

FENCE_MARKER = "```"

_LANGUAGE_TAG = re.compile(r"\w+", re.ASCII)


@dataclass(frozen=True)
class ProseSpan:
    """Raw text outside of any fence."""

    text: str


@dataclass(frozen=True)
class FenceSpan:
    """Raw contents of a fenced code block."""

    language: str | None
    body: str


def _opening_language(line: str) -> tuple[bool, str | None]:
    """Check whether a line (without its newline) opens a fence.

    Returns:
        Tuple of (is_opening, language tag or None)
    """
    if not line.startswith(FENCE_MARKER):
        return False, None
    tag = line[len(FENCE_MARKER):]
    if not tag:
        return True, None
    if _LANGUAGE_TAG.fullmatch(tag):
        return True, tag
    return False, None


def _find_closing(text: str, start: int) -> int | None:
    """Find the offset of the first line at or after start that begins a fence."""
    pos = start
    while True:
        if text.startswith(FENCE_MARKER, pos):
            return pos
        newline = text.find("\n", pos)
        if newline == -1:
            return None
        pos = newline + 1


def split_fences(text: str) -> list[ProseSpan | FenceSpan]:
    """Split raw text into prose and fence spans, preserving order.

    Args:
        text: Raw text

    Returns:
        Spans in source order. Adjacent prose is never split, and empty prose
        between two fences is omitted.
    """
    spans: list[ProseSpan | FenceSpan] = []
    prose_start = 0
    pos = 0

    # pos always sits at the start of a line
    while pos < len(text):
        line_end = text.find("\n", pos)
        if line_end == -1:
            # A fence needs a newline after its opening line
            break

        is_opening, language = _opening_language(text[pos:line_end])
        if not is_opening:
            pos = line_end + 1
            continue

        body_start = line_end + 1
        close = _find_closing(text, body_start)
        if close is None:
            # Unterminated: nothing later can close either
            break

        if pos > prose_start:
            spans.append(ProseSpan(text[prose_start:pos]))

        # The newline before the closing marker belongs to the delimiter
        body = text[body_start:close - 1] if close > body_start else ""
        spans.append(FenceSpan(language=language, body=body))

        prose_start = close + len(FENCE_MARKER)
        next_line = text.find("\n", prose_start)
        pos = len(text) if next_line == -1 else next_line + 1

    if prose_start < len(text):
        spans.append(ProseSpan(text[prose_start:]))

    return spans
