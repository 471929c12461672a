"""HTML escaping for untrusted text.

Hides the exact escape sequences used for the five HTML-significant
characters. Ampersand is replaced first.
"""

ESCAPE_SEQUENCES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)


def escape_html(text: str) -> str:
    """Escape ``& < > " '`` in text."""
    for char, entity in ESCAPE_SEQUENCES:
        text = text.replace(char, entity)
    return text
