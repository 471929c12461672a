"""Data models for formatted output.

These models define the structured, render-ready form of assistant text,
independent of the surface (HTML, terminal widgets) it is displayed on.

All string fields hold HTML-escaped text.
"""

import html
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class TextRun(BaseModel):
    """A run of escaped prose text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str = Field(description="Escaped text")


class InlineCode(BaseModel):
    """Inline code delimited by single backticks in the source.

    May hold single newlines, never a paragraph break.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["inline_code"] = "inline_code"
    code: str = Field(description="Escaped code")


class LineBreak(BaseModel):
    """A soft line break (single newline) inside a paragraph."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["line_break"] = "line_break"


InlineSpan = Annotated[TextRun | InlineCode | LineBreak, Field(discriminator="kind")]


class Paragraph(BaseModel):
    """A paragraph of prose.

    Attributes:
        spans: Ordered inline spans (text, inline code, soft breaks)
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["paragraph"] = "paragraph"
    spans: list[InlineSpan] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Escaped text with soft breaks as newlines and inline code in backticks."""
        parts = []
        for span in self.spans:
            if isinstance(span, TextRun):
                parts.append(span.text)
            elif isinstance(span, InlineCode):
                parts.append(f"`{span.code}`")
            else:
                parts.append("\n")
        return "".join(parts)

    def source(self) -> str:
        """Return the de-escaped source text of this paragraph."""
        return html.unescape(self.text)

    def __str__(self) -> str:
        return self.text


class CodeBlock(BaseModel):
    """A fenced code block.

    Attributes:
        language: Escaped language tag, or None when the fence has none
        code: Escaped code body, internal newlines preserved
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["code_block"] = "code_block"
    language: str | None = None
    code: str = ""

    def source(self) -> str:
        """Return the de-escaped code, as it should land on a clipboard."""
        return html.unescape(self.code)

    def __str__(self) -> str:
        return self.code


FormattedBlock = Annotated[Paragraph | CodeBlock, Field(discriminator="kind")]
