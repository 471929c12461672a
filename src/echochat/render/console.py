"""Terminal rendering of formatted blocks with Rich.

Hides how blocks look in a terminal: inline code styling, syntax
highlighting theme, and spacing between blocks.
"""

import html

from rich.console import Group, RenderableType
from rich.syntax import Syntax
from rich.text import Text

from .models import CodeBlock, FormattedBlock, InlineCode, LineBreak, Paragraph, TextRun

INLINE_CODE_STYLE = "bold cyan"
SYNTAX_THEME = "monokai"


def paragraph_to_text(paragraph: Paragraph) -> Text:
    """Convert a paragraph to Rich Text (markup is never interpreted)."""
    text = Text(overflow="fold")
    for span in paragraph.spans:
        if isinstance(span, TextRun):
            text.append(html.unescape(span.text))
        elif isinstance(span, InlineCode):
            text.append(html.unescape(span.code), style=INLINE_CODE_STYLE)
        elif isinstance(span, LineBreak):
            text.append("\n")
    return text


def code_block_to_syntax(block: CodeBlock) -> Syntax:
    """Convert a code block to a highlighted Syntax renderable."""
    return Syntax(
        block.source(),
        block.language or "text",
        theme=SYNTAX_THEME,
        word_wrap=True,
        background_color="default",
    )


def to_renderable(blocks: list[FormattedBlock]) -> RenderableType:
    """Render blocks as a single Rich renderable, one blank line between blocks."""
    parts: list[RenderableType] = []
    for index, block in enumerate(blocks):
        if index:
            parts.append(Text(""))
        if isinstance(block, CodeBlock):
            parts.append(code_block_to_syntax(block))
        else:
            parts.append(paragraph_to_text(block))
    return Group(*parts)
