"""UI helper exports for the SSOFETCH CLI."""

from .components import console, render_banner, render_card, render_status
from .theme import THEME, style

__all__ = [
    "console",
    "render_banner",
    "render_card",
    "render_status",
    "THEME",
    "style",
]
