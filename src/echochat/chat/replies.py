"""Mock assistant replies.

Hides how the simulated assistant chooses its answer. Replies are
deterministic templates over the user's text; nothing leaves the process.
"""

import re

GREETING = "Hi! I’m your demo AI. Ask me anything, or request a code example."

_CODE_REQUEST = re.compile(r"code|snippet|example", re.IGNORECASE)

_CODE_EXAMPLE = (
    "\n```javascript\n"
    "function greet(name) {\n"
    "  return `Hello, ${name}!`;\n"
    "}\n"
    "console.log(greet('World'));\n"
    "```\n"
)


def build_assistant_reply(user_text: str) -> str:
    """Build the simulated assistant reply to a user message.

    Args:
        user_text: The user's raw message

    Returns:
        Reply text, or an empty string if the message is blank
    """
    trimmed = user_text.strip()
    if not trimmed:
        return ""

    lines = ["Thanks for your message! Here's a simulated response."]
    if _CODE_REQUEST.search(trimmed):
        lines.append("\nHere's a quick code example:")
        lines.append(_CODE_EXAMPLE)
    else:
        lines.append(f"\nYou said: \n\n{trimmed}")
        lines.append("\nWhat would you like to try next?")
    return "\n".join(lines)
