"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout - Single Column
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

/* ============================================
   Chat History Panel
   ============================================ */
#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

/* ============================================
   Chat Messages
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
    padding: 1 2;
    background: transparent;
}

.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
        text-style: bold;
    }
}

.assistant-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
        text-style: bold;
    }

    &.-streaming {
        border-left: tall $warning;
    }

    &.-cancelled .message-header {
        color: $text-muted;
    }
}

.message-header {
    height: auto;
    padding: 0;
}

.message-content {
    height: auto;
    padding: 0;
    margin: 0 0 1 0;
    color: $foreground;
}

/* ============================================
   Code Blocks
   ============================================ */
CodeBlockView {
    height: auto;
    margin: 0 0 1 0;
    background: $surface;
    border: round $border;
}

.code-block-bar {
    height: 1;
    padding: 0 1;
    background: $panel;
}

.code-language {
    width: 1fr;
    color: $text-muted;
}

.copy-btn {
    min-width: 8;
    width: auto;
    height: 1;
    border: none;
    background: $primary 30%;
    color: $foreground;

    &:hover {
        background: $primary 50%;
        text-style: bold;
    }
}

.code-body {
    height: auto;
    padding: 0 1;
}

/* ============================================
   Typing Indicator
   ============================================ */
#typing {
    height: 1;
    padding: 0 2;
    color: $text-muted;
    text-style: italic;
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: auto;
    max-height: 10;
    border: round $primary 60%;
    background: $panel;

    &:focus-within {
        border: round $primary;
    }
}

#chat-input {
    width: 1fr;
    height: auto;
    min-height: 3;
    max-height: 8;
    border: none;
    padding: 0 1;
    background: transparent;
}

#send-btn {
    width: 10;
    min-width: 8;
    margin: 0 0 0 1;
    border: tall $success;
    background: $success;
    color: $background;
    text-style: bold;

    &:hover {
        background: $success-lighten-1;
    }
}

/* ============================================
   Header and Footer
   ============================================ */
Header {
    background: $panel;
    color: $foreground;
    dock: top;
    height: 1;
}

Footer {
    background: $panel;
    height: auto;
}
"""
