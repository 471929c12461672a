"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Message bubble layout and the swap from raw to formatted content
- Code block rendering and the copy button
- Composer key handling
- Log rendering and level filtering
"""

from datetime import datetime

from rich.text import Text
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Label, RichLog, Static, TextArea

from ..chat import Role
from ..render import CodeBlock, FormattedBlock
from ..render.console import code_block_to_syntax, paragraph_to_text
from .config import (
    ASSISTANT_LABEL,
    COPIED_LABEL,
    COPY_FEEDBACK_SECONDS,
    COPY_LABEL,
    LOG_TIMESTAMP_FORMAT,
    TYPING_TEXT,
    USER_LABEL,
    LogLevel,
)


def copy_text(app, text: str) -> bool:
    """Copy text to the system clipboard.

    Uses pyperclip when a system clipboard is reachable, otherwise falls back
    to Textual's OSC 52 terminal clipboard.

    Returns:
        True if the system clipboard was used
    """
    try:
        import pyperclip
        pyperclip.copy(text)
        return True
    except Exception:
        app.copy_to_clipboard(text)
        return False


class CodeBlockView(Vertical):
    """A fenced code block with a language label and a Copy button."""

    def __init__(self, block: CodeBlock, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._block = block

    @property
    def block(self) -> CodeBlock:
        return self._block

    def compose(self):
        with Horizontal(classes="code-block-bar"):
            yield Label(self._block.language or "", classes="code-language")
            yield Button(COPY_LABEL, classes="copy-btn")
        yield Static(code_block_to_syntax(self._block), classes="code-body")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Copy the de-escaped code and briefly confirm."""
        event.stop()
        copy_text(self.app, self._block.source())
        button = event.button
        button.label = COPIED_LABEL
        self.set_timer(COPY_FEEDBACK_SECONDS, lambda: setattr(button, "label", COPY_LABEL))


class MessageBubble(Vertical):
    """One chat message.

    While streaming, the bubble shows raw text in a single Static. When the
    formatted blocks arrive the raw view is removed and replaced by one
    widget per block.
    """

    def __init__(self, role: Role, *args, **kwargs) -> None:
        border_class = "user-message" if role == Role.USER else "assistant-message"
        classes = f"chat-message {border_class} {kwargs.pop('classes', '')}".strip()
        super().__init__(*args, classes=classes, **kwargs)
        self._role = role
        label = USER_LABEL if role == Role.USER else ASSISTANT_LABEL
        timestamp = datetime.now().strftime("%H:%M:%S")
        self._header_text = f"{label} [{timestamp}]"
        self._header = Static(Text(self._header_text), classes="message-header")
        self._raw = Static("", classes="message-content raw-content")
        self._raw_text = ""

    @property
    def role(self) -> Role:
        return self._role

    @property
    def raw_text(self) -> str:
        return self._raw_text

    def compose(self):
        yield self._header
        yield self._raw

    def show_raw(self, text: str) -> None:
        """Display unformatted text (Rich markup is never interpreted)."""
        self._raw_text = text
        self._raw.update(Text(text, overflow="fold"))

    def show_formatted(self, blocks: list[FormattedBlock]) -> None:
        """Replace the raw view with formatted blocks."""
        self._raw.display = False
        for child in list(self.query(".formatted-content")):
            child.remove()
        widgets = []
        for block in blocks:
            if isinstance(block, CodeBlock):
                widgets.append(CodeBlockView(block, classes="formatted-content"))
            else:
                widgets.append(Static(paragraph_to_text(block), classes="message-content formatted-content"))
        if widgets:
            self.mount(*widgets)

    def mark_streaming(self, streaming: bool) -> None:
        self.set_class(streaming, "-streaming")

    def mark_cancelled(self) -> None:
        self.add_class("-cancelled")
        self._header.update(Text(f"{self._header_text} (stopped)"))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._message_count = 0

    async def add_message(self, role: Role, blocks: list[FormattedBlock]) -> MessageBubble:
        """Add a complete, already formatted message."""
        bubble = await self.add_streaming_message(role)
        bubble.show_formatted(blocks)
        self.scroll_end(animate=False)
        return bubble

    async def add_streaming_message(self, role: Role = Role.ASSISTANT) -> MessageBubble:
        """Mount an empty bubble to stream into."""
        bubble = MessageBubble(role)
        await self.mount(bubble)
        self._message_count += 1
        self.border_subtitle = f"{self._message_count} messages"
        self.scroll_end(animate=False)
        return bubble

    def clear_history(self) -> None:
        """Clear the chat history."""
        self._message_count = 0
        self.remove_children()
        self.border_subtitle = "Conversation history"


class ComposerTextArea(TextArea):
    """Multi-line text area where Enter sends and Shift+Enter adds a newline.

    Shift+Enter only works in terminals that report the modifier.
    """

    BINDINGS = [
        Binding("enter", "submit", "Send", show=False, priority=True),
        Binding("shift+enter", "newline", "Newline", show=False, priority=True),
    ]

    class SubmitRequested(Message):
        """Posted when the user presses Enter."""

    def action_submit(self) -> None:
        self.post_message(self.SubmitRequested())

    def action_newline(self) -> None:
        self.insert("\n")


class ChatInputBar(Horizontal):
    """Chat input bar with a composer and Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        text_area = ComposerTextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Enter)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", ComposerTextArea)
        text_area.highlight_cursor_line = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._submit()

    def on_composer_text_area_submit_requested(self, event: ComposerTextArea.SubmitRequested) -> None:
        event.stop()
        self._submit()

    def _submit(self) -> None:
        text_area = self.query_one("#chat-input", ComposerTextArea)
        value = text_area.text
        # Blank submissions are ignored and the composer is left as is
        if value.strip():
            text_area.text = ""
            self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", ComposerTextArea).focus()


class TypingIndicator(Static):
    """Shown while an assistant reply is being revealed."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(TYPING_TEXT, *args, **kwargs)

    def on_mount(self) -> None:
        self.display = False

    def show(self, visible: bool = True) -> None:
        self.display = visible


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Shows timestamped log messages from all components.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    LEVEL_COLORS = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    COMPONENT_COLORS = {
        "TUI": "cyan",
        "Stream": "green",
        "Prefs": "bright_blue",
        "Chat": "magenta",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log_message(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Stream, Prefs, Chat)
            message: Log message, written without markup parsing
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self.LEVEL_COLORS.get(level, "white")
        comp_color = self.COMPONENT_COLORS.get(component, "white")

        line = Text()
        line.append(f"{timestamp} ", style="dim")
        line.append(f"{LogLevel.name(level):<5} ", style=level_color)
        line.append(f"[{component}] ", style=comp_color)
        line.append(message)
        self.write(line)

    def debug(self, component: str, message: str) -> None:
        self.log_message(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        self.log_message(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        self.log_message(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        self.log_message(component, message, LogLevel.ERROR)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
