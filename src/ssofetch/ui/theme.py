"""Color palette for the SSOFETCH console output."""

THEME = {
    "accent": "#4aa3df",
    "accent_alt": "#7fb8e0",
    "text_primary": "#e6e6e6",
    "text_muted": "grey62",
    "border": "grey42",
    "success": "green3",
    "warning": "gold3",
    "error": "red3",
}


def style(name: str) -> str:
    """Look up a theme color, falling back to the terminal default."""
    return THEME.get(name, "default")
