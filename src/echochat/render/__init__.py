"""Text rendering module for echochat.

Converts raw assistant text into escaped, structured blocks and renders
them to markup.

Module structure (Parnas principle - each module hides a design decision):
- escaping.py: Which characters are escaped and how
- fences.py: How code fences are found in raw text
- formatter.py: Paragraph, line-break, and inline-code structure
- models.py: Block representation
- markup.py: Markup layout
"""

from .escaping import escape_html
from .fences import FenceSpan, ProseSpan, split_fences
from .formatter import format_prose, format_text
from .markup import render_html
from .models import CodeBlock, FormattedBlock, InlineCode, LineBreak, Paragraph, TextRun

__all__ = [
    "CodeBlock",
    "FenceSpan",
    "FormattedBlock",
    "InlineCode",
    "LineBreak",
    "Paragraph",
    "ProseSpan",
    "TextRun",
    "escape_html",
    "format_prose",
    "format_text",
    "render_html",
    "split_fences",
]
