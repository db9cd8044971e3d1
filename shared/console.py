"""
APWarden Console Interface
===========================

Rich-powered console abstraction providing a unified presentation layer
for every APWarden command.

The class wraps :class:`rich.console.Console` and adds convenience methods
for banners, section headers, severity-coloured messages and tables with
consistent styling.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

# ---------------------------------------------------------------------------
# Theme -- consistent palette across all APWarden output
# ---------------------------------------------------------------------------
_WARDEN_THEME = Theme(
    {
        "warden.banner": "bold bright_cyan",
        "warden.section": "bold bright_magenta",
        "warden.success": "bold green",
        "warden.warning": "bold yellow",
        "warden.error": "bold red",
        "warden.info": "bold bright_blue",
        "warden.dim": "dim white",
        "warden.rogue": "bold white on red",
        "warden.known": "bold green",
    }
)

_TAGLINE = "Rogue Access Point Detector"


class WardenConsole:
    """Unified console interface for all APWarden commands.

    Usage::

        con = WardenConsole()
        con.banner()
        con.section("Unauthorized Access Points")
        con.success("No unauthorized access points detected")
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output (useful in library / test mode).
            record: Enable Rich recording for text export.
        """
        self._console = Console(
            theme=_WARDEN_THEME,
            quiet=quiet,
            record=record,
            highlight=False,
        )

    # ------------------------------------------------------------------ #
    #  Banner / sections
    # ------------------------------------------------------------------ #

    def banner(self, title: str = "APWARDEN", version: str = "1.0.0") -> None:
        """Display the tool banner panel."""
        now = _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        body = Text.assemble(
            (title, "warden.banner"),
            "\n",
            (_TAGLINE, "bright_magenta"),
            "\n",
            (f"Version: {version}  |  {now}", "warden.dim"),
        )
        panel = Panel(
            Align.center(body),
            border_style="bright_cyan",
            padding=(0, 2),
        )
        self._console.print(panel)

    def section(self, title: str) -> None:
        """Print a prominent section header."""
        self._console.rule(
            Text(f"  {title}  ", style="warden.section"),
            style="warden.section",
            characters="─",
        )

    # ------------------------------------------------------------------ #
    #  Message helpers (severity-coloured)
    # ------------------------------------------------------------------ #

    def _message(self, label: str, style: str, message: str) -> None:
        self._console.print(Text.assemble((label, style), " ", message))

    def success(self, message: str) -> None:
        """Print a success message."""
        self._message("[✔] SUCCESS:", "warden.success", message)

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._message("[⚠] WARNING:", "warden.warning", message)

    def error(self, message: str) -> None:
        """Print an error message."""
        self._message("[✘] ERROR:", "warden.error", message)

    def info(self, message: str) -> None:
        """Print an informational message."""
        self._message("[ℹ] INFO:", "warden.info", message)

    # ------------------------------------------------------------------ #
    #  Table display
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        caption: str | None = None,
        styles: Sequence[str] | None = None,
    ) -> None:
        """Render a styled Rich table.

        Args:
            title:    Table title.
            columns:  Column header labels.
            rows:     Iterable of row tuples; each element is stringified.
            caption:  Optional footer caption.
            styles:   Optional per-column Rich style strings.
        """
        tbl = Table(
            title=title,
            caption=caption,
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)

        for row in rows:
            tbl.add_row(*(Text(str(cell)) for cell in row))

        self._console.print(tbl)

    # ------------------------------------------------------------------ #
    #  Utility
    # ------------------------------------------------------------------ #

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Proxy to :meth:`rich.console.Console.print`."""
        self._console.print(*args, **kwargs)

    def export_text(self) -> str:
        """Export recorded console output as plain text (requires ``record=True``)."""
        return self._console.export_text()
