"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, footer)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Dark theme based on the Catppuccin Mocha palette
COLLOQUY_DARK = Theme(
    name="colloquy-dark",
    primary="#89b4fa",      # Blue - user input and focus
    secondary="#cba6f7",    # Mauve - assistant messages
    accent="#f9e2af",       # Yellow - pending indicator
    foreground="#cdd6f4",
    background="#11111b",
    success="#a6e3a1",      # Green - send button, user messages
    warning="#fab387",
    error="#f38ba8",
    surface="#1e1e2e",
    panel="#181825",
    dark=True,
    variables={
        "border": "#45475a",
        "border-blurred": "#313244",
        "text-muted": "#6c7086",
        "text-disabled": "#45475a",
        "scrollbar": "#313244",
        "scrollbar-hover": "#45475a",
        "scrollbar-active": "#89b4fa",
        "scrollbar-background": "#181825",
        "footer-background": "#11111b",
        "footer-key-foreground": "#f9e2af",
        "footer-description-foreground": "#a6adc8",
        "input-selection-background": "#89b4fa 30%",
    },
)
