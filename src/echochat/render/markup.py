"""HTML rendering of formatted blocks.

Hides the markup layout: paragraph tags, soft-break tags, and the
code block container with its copy button.

Block contents are already escaped, so rendering only adds structure.
"""

from .models import CodeBlock, FormattedBlock, InlineCode, LineBreak, Paragraph, TextRun

COPY_BUTTON = '<button class="copy-btn" data-copy>Copy</button>'


def render_paragraph(paragraph: Paragraph) -> str:
    parts = []
    for span in paragraph.spans:
        if isinstance(span, TextRun):
            parts.append(span.text)
        elif isinstance(span, InlineCode):
            code = span.code.replace("\n", "<br>")
            parts.append(f"<code>{code}</code>")
        elif isinstance(span, LineBreak):
            parts.append("<br>")
    return f"<p>{''.join(parts)}</p>"


def render_code_block(block: CodeBlock) -> str:
    css_class = f"language-{block.language}" if block.language else ""
    return f'<pre>{COPY_BUTTON}<code class="{css_class}">{block.code}</code></pre>'


def render_html(blocks: list[FormattedBlock]) -> str:
    """Render blocks to an HTML fragment.

    Args:
        blocks: Output of format_text

    Returns:
        Concatenated markup, in block order
    """
    rendered = []
    for block in blocks:
        if isinstance(block, CodeBlock):
            rendered.append(render_code_block(block))
        else:
            rendered.append(render_paragraph(block))
    return "".join(rendered)
