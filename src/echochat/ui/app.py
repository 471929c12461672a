"""Main Textual TUI application.

Orchestrates the UI components and drives one streamed reply per submission.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..chat import GREETING, Conversation, Role, build_assistant_reply
from ..errors import SinkWriteFailure
from ..preferences import PreferenceStore, ThemeMode, create_preference_store, resolve_theme, toggle_theme
from ..render import format_text
from ..streaming import StreamConfig, StreamSimulator
from .callbacks import BubbleSink
from .config import LogLevel
from .styles import APP_CSS
from .themes import THEMES, theme_name
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, TypingIndicator, copy_text


class EchoChatApp(App):
    """Textual TUI for the simulated streaming assistant."""

    CSS = APP_CSS
    TITLE = "Echochat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+t", "toggle_theme", "Theme"),
        Binding("escape", "cancel_stream", "Stop"),
        Binding("ctrl+k", "clear_chat", "Clear Chat"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(
        self,
        stream_config: StreamConfig | None = None,
        preferences: PreferenceStore | None = None,
        log_level: str | None = None,
        system_theme: ThemeMode = ThemeMode.DARK,
    ) -> None:
        super().__init__()
        self._simulator = StreamSimulator(stream_config)
        self._preferences = preferences or create_preference_store("memory")
        self._log_level = log_level
        self._system_theme = system_theme
        self._theme_mode = system_theme
        self._conversation = Conversation()
        self._active_stream: StreamSimulator.StreamHandler | None = None
        self._stopped_stream: StreamSimulator.StreamHandler | None = None

    @property
    def conversation(self) -> Conversation:
        return self._conversation

    @property
    def theme_mode(self) -> ThemeMode:
        return self._theme_mode

    @property
    def active_stream(self) -> "StreamSimulator.StreamHandler | None":
        return self._active_stream

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield TypingIndicator(id="typing")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        for theme in THEMES.values():
            self.register_theme(theme)

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self._simulator.set_debug_callback(self._route_debug)
        self._preferences.set_debug_callback(self._route_debug)

        self._theme_mode = resolve_theme(self._preferences, self._system_theme)
        self.theme = theme_name(self._theme_mode)

        config = self._simulator.config
        self.sub_title = f"{config.chunk_size} chars / {config.interval_ms} ms | {self._preferences.backend_type} prefs"

        self._conversation.add(Role.ASSISTANT, GREETING)
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        await chat.add_message(Role.ASSISTANT, format_text(GREETING))
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def _route_debug(self, level: str, component: str, message: str) -> None:
        """Route debug messages to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        if level == "debug":
            log_panel.debug(component, message)
        elif level == "info":
            log_panel.info(component, message)
        elif level == "warning":
            log_panel.warning(component, message)
        elif level == "error":
            log_panel.error(component, message)

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if not event.value.strip():
            return
        self._handle_submission(event.value)

    @work(exclusive=True, group="reply")
    async def _handle_submission(self, user_text: str) -> None:
        """Show the user's message, then stream the assistant's reply.

        A newer submission cancels this worker, which cancels its stream.
        """
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        typing = self.query_one("#typing", TypingIndicator)

        user_message = self._conversation.add(Role.USER, user_text)
        await chat.add_message(Role.USER, user_message.formatted())

        reply = build_assistant_reply(user_text)
        if not reply:
            return
        self._conversation.add(Role.ASSISTANT, reply)

        bubble = await chat.add_streaming_message(Role.ASSISTANT)
        bubble.mark_streaming(True)
        sink = BubbleSink(bubble, on_update=lambda: chat.scroll_end(animate=False))

        handler = self._simulator.stream(reply, sink)
        self._active_stream = handler
        typing.show()
        try:
            await handler
        except asyncio.CancelledError:
            handler.cancel()
            bubble.mark_cancelled()
            self._route_debug("info", "TUI", "Reply stopped")
            # Only a stop requested by the app ends the worker normally
            if self._stopped_stream is not handler:
                raise
        except SinkWriteFailure as e:
            self._route_debug("error", "TUI", str(e))
            self.notify(f"Display error: {str(e.cause)[:50]}", severity="error", timeout=5)
        finally:
            bubble.mark_streaming(False)
            if self._active_stream is handler:
                self._active_stream = None
                typing.show(False)

    def _stop_active_stream(self) -> bool:
        """Cancel the active stream, if any.

        Returns:
            True if a running stream was stopped
        """
        handler = self._active_stream
        if handler is None or not handler.cancel():
            return False
        self._stopped_stream = handler
        return True

    def action_cancel_stream(self) -> None:
        """Stop the reply that is currently streaming."""
        if self._stop_active_stream():
            self.notify("Stopped", severity="warning", timeout=2)

    def action_toggle_theme(self) -> None:
        """Switch between light and dark, and remember the choice."""
        self._theme_mode = toggle_theme(self._preferences, self._theme_mode)
        self.theme = theme_name(self._theme_mode)
        self.notify(f"{self._theme_mode.value.capitalize()} theme", timeout=2)

    def action_clear_chat(self) -> None:
        """Clear the chat history."""
        self._stop_active_stream()
        self._conversation.clear()
        self.query_one("#chat-history", ChatHistoryWidget).clear_history()
        self.notify("Chat cleared", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        message = self._conversation.last(Role.ASSISTANT)
        if message is None:
            self.notify("No response to copy", severity="warning")
            return
        copy_text(self, message.text)
        self.notify("Response copied")

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(
    stream_config: StreamConfig | None = None,
    preferences: PreferenceStore | None = None,
    log_level: str | None = None,
    system_theme: ThemeMode = ThemeMode.DARK,
) -> None:
    """Run the Textual TUI.

    Args:
        stream_config: Reveal cadence
        preferences: Store for the theme choice
        log_level: Log level for panel (debug/info/warning/error), None to hide
        system_theme: Theme used when no choice is stored
    """
    app = EchoChatApp(
        stream_config=stream_config,
        preferences=preferences,
        log_level=log_level,
        system_theme=system_theme,
    )
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
