"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)
- Which Textual theme backs each light/dark preference

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

from ..preferences import ThemeMode

# Catppuccin Mocha for dark mode
ECHOCHAT_DARK = Theme(
    name="echochat-dark",
    primary="#89b4fa",      # Blue - main accent
    secondary="#cba6f7",    # Mauve - assistant accent
    accent="#f9e2af",       # Yellow - highlights
    foreground="#cdd6f4",
    background="#11111b",
    success="#a6e3a1",      # Green - user accent
    warning="#fab387",
    error="#f38ba8",
    surface="#1e1e2e",
    panel="#181825",
    dark=True,
    variables={
        "block-cursor-foreground": "#11111b",
        "block-cursor-background": "#f5e0dc",
        "input-cursor-background": "#cdd6f4",
        "input-selection-background": "#89b4fa 30%",
        "border": "#45475a",
        "border-blurred": "#313244",
        "scrollbar": "#313244",
        "scrollbar-hover": "#45475a",
        "scrollbar-active": "#89b4fa",
        "footer-key-foreground": "#f9e2af",
        "text-muted": "#6c7086",
    },
)

# Catppuccin Latte for light mode
ECHOCHAT_LIGHT = Theme(
    name="echochat-light",
    primary="#1e66f5",
    secondary="#8839ef",
    accent="#df8e1d",
    foreground="#4c4f69",
    background="#eff1f5",
    success="#40a02b",
    warning="#fe640b",
    error="#d20f39",
    surface="#e6e9ef",
    panel="#dce0e8",
    dark=False,
    variables={
        "block-cursor-foreground": "#eff1f5",
        "block-cursor-background": "#dc8a78",
        "input-cursor-background": "#4c4f69",
        "input-selection-background": "#1e66f5 25%",
        "border": "#9ca0b0",
        "border-blurred": "#bcc0cc",
        "scrollbar": "#bcc0cc",
        "scrollbar-hover": "#9ca0b0",
        "scrollbar-active": "#1e66f5",
        "footer-key-foreground": "#df8e1d",
        "text-muted": "#8c8fa1",
    },
)

THEMES = {
    ThemeMode.DARK: ECHOCHAT_DARK,
    ThemeMode.LIGHT: ECHOCHAT_LIGHT,
}


def theme_name(mode: ThemeMode) -> str:
    """Get the registered Textual theme name for a preference."""
    return THEMES[mode].name
