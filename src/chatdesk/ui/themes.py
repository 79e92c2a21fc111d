"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Dark messenger theme: charcoal sidebar, green outgoing accents
MESSENGER_DARK = Theme(
    name="messenger-dark",
    primary="#07c160",      # Messenger green - send button, active row
    secondary="#95ec69",    # Light green - outgoing bubbles
    accent="#f5c242",       # Amber - highlights
    foreground="#e6e6e6",
    background="#1f1f1f",
    success="#07c160",
    warning="#f0a020",
    error="#fa5151",
    surface="#2e2e2e",      # Sidebar and dialogs
    panel="#262626",        # Chat area
    dark=True,
    variables={
        "border": "#3e3e3e",
        "border-blurred": "#333333",

        "scrollbar": "#3b3b3b",
        "scrollbar-hover": "#4a4a4a",
        "scrollbar-active": "#07c160",
        "scrollbar-background": "#262626",

        "footer-background": "#1f1f1f",
        "footer-key-foreground": "#07c160",

        "text-muted": "#8a8a8a",
    },
)
