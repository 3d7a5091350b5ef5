"""Diagnostic logging for SSOFETCH.

User-facing messages go through Rich and ``typer.secho``; the ``logging``
module only carries diagnostics such as external command lines and their
output, shown with ``--verbose``.
"""

import logging

from rich.logging import RichHandler

from ssofetch.ui import console


def configure_logging(verbose: bool = False) -> None:
    """Attach a Rich handler to the ``ssofetch`` logger."""
    logger = logging.getLogger("ssofetch")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Avoid duplicate handlers if called more than once (e.g. under CliRunner).
    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return

    handler = RichHandler(console=console, show_path=False, markup=False, rich_tracebacks=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
