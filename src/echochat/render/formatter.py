"""Text formatter: raw assistant text to safe, structured blocks.

Hidden design decisions:
- Fences are extracted first, so nothing inside a fence is interpreted
- Prose is escaped before any structure is recognized, so no untrusted
  character reaches the output unescaped
- Paragraphs break on two or more newlines; single newlines become soft breaks
- Inline code is recognized within a paragraph and may span soft breaks
"""

import re

from .escaping import escape_html
from .fences import FenceSpan, split_fences
from .models import CodeBlock, FormattedBlock, InlineCode, InlineSpan, LineBreak, Paragraph, TextRun

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")
_INLINE_CODE = re.compile(r"`([^`]+)`")


def format_text(raw: str) -> list[FormattedBlock]:
    """Convert raw text into an ordered list of formatted blocks.

    Total over all strings: malformed or unterminated fences degrade to
    ordinary prose.

    Args:
        raw: Raw text, possibly containing fenced code blocks

    Returns:
        Paragraph and CodeBlock segments in source order. Empty or
        whitespace-only input yields an empty list.
    """
    if not raw.strip():
        return []

    blocks: list[FormattedBlock] = []
    for span in split_fences(raw):
        if isinstance(span, FenceSpan):
            language = escape_html(span.language) if span.language else None
            blocks.append(CodeBlock(language=language, code=escape_html(span.body)))
        else:
            blocks.extend(format_prose(span.text))
    return blocks


def format_prose(text: str) -> list[Paragraph]:
    """Format a prose span (text outside fences) into paragraphs."""
    escaped = escape_html(text).strip("\n")
    paragraphs = []
    for chunk in _PARAGRAPH_BREAK.split(escaped):
        if not chunk.strip():
            continue
        paragraphs.append(Paragraph(spans=_inline_spans(chunk)))
    return paragraphs


def _inline_spans(text: str) -> list[InlineSpan]:
    """Split escaped paragraph text into text runs, inline code, and breaks."""
    spans: list[InlineSpan] = []
    pos = 0
    for match in _INLINE_CODE.finditer(text):
        spans.extend(_text_spans(text[pos:match.start()]))
        spans.append(InlineCode(code=match.group(1)))
        pos = match.end()
    spans.extend(_text_spans(text[pos:]))
    return spans


def _text_spans(text: str) -> list[InlineSpan]:
    """Split plain escaped text on single newlines into runs and breaks."""
    spans: list[InlineSpan] = []
    for index, line in enumerate(text.split("\n")):
        if index:
            spans.append(LineBreak())
        if line:
            spans.append(TextRun(text=line))
    return spans
