"""Reusable Rich components for the SSOFETCH CLI."""

from typing import Iterable, Optional

from rich import box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .theme import style


console = Console()

_ICONS = {
    "success": "✔",
    "warning": "!",
    "error": "✖",
    "info": "•",
}
_LEVEL_STYLES = {
    "success": "success",
    "warning": "warning",
    "error": "error",
    "info": "accent_alt",
}


def _panel_width(padding: int = 4) -> int:
    """Keep panels readable in narrow terminals without sprawling in wide ones."""
    return max(40, min(console.size.width - padding, 78))


def render_banner(
    title: str,
    subtitle: Optional[str] = None,
    bullets: Optional[Iterable[str]] = None,
) -> Panel:
    """Render the banner shown when an install starts."""
    pieces: list[Text] = [Text(title, style=f"bold {style('accent')}")]
    if subtitle:
        pieces.append(Text(subtitle, style=style("text_primary")))
    for bullet in bullets or ():
        pieces.append(Text(f"• {bullet}", style=style("text_muted")))

    panel = Panel(
        Align.left(Group(*pieces)),
        box=box.ROUNDED,
        border_style=style("accent"),
        padding=(1, 2),
        width=_panel_width(),
    )
    console.print(panel)
    console.print()
    return panel


def render_card(
    title: Optional[str],
    rows: Iterable[tuple[str, str]],
    footer: Optional[str] = None,
    border_style: Optional[str] = None,
) -> Panel:
    """Render a titled card of label/value rows."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style=style("text_muted"), no_wrap=True)
    table.add_column(style=style("text_primary"), overflow="fold")
    for label, value in rows:
        table.add_row(label, value)

    panel = Panel(
        table,
        title=Text(title, style=f"bold {style('accent')}") if title else None,
        title_align="left",
        border_style=border_style or style("border"),
        box=box.ROUNDED,
        padding=(1, 2),
        width=_panel_width(),
    )
    console.print(panel)
    if footer:
        console.print(Text(footer, style=style("text_muted")))
    console.print()
    return panel


def render_status(
    message: str,
    level: str = "info",
    footer: Optional[str] = None,
) -> Text:
    """Render a status line with semantic coloring."""
    icon = _ICONS.get(level, _ICONS["info"])
    status_text = Text(f"{icon} {message}", style=style(_LEVEL_STYLES.get(level, "accent_alt")))
    console.print(status_text)
    if footer:
        console.print(Text(footer, style=style("text_muted")))
    return status_text
