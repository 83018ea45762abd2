"""
Caesar Toolkit Console Interface
=================================

Rich-powered console abstraction providing a unified presentation layer
for the Caesar toolkit commands.

The class wraps :class:`rich.console.Console` and adds convenience methods
for the banner, severity-coloured messages and tables,
all with consistent styling.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

_TOOLKIT_THEME = Theme(
    {
        "caesar.banner": "bold bright_cyan",
        "caesar.success": "bold green",
        "caesar.error": "bold red",
        "caesar.info": "bold bright_blue",
        "caesar.dim": "dim white",
        "caesar.highlight": "bold bright_white",
        "caesar.critical": "bold white on red",
        "caesar.high": "bold red",
        "caesar.medium": "bold yellow",
        "caesar.low": "bold bright_cyan",
        "caesar.informational": "bold bright_blue",
    }
)

_BANNER_ART = r"""
[bright_cyan]
   ██████╗ █████╗ ███████╗███████╗ █████╗ ██████╗
  ██╔════╝██╔══██╗██╔════╝██╔════╝██╔══██╗██╔══██╗
  ██║     ███████║█████╗  ███████╗███████║██████╔╝
  ██║     ██╔══██║██╔══╝  ╚════██║██╔══██║██╔══██╗
  ╚██████╗██║  ██║███████╗███████║██║  ██║██║  ██║
   ╚═════╝╚═╝  ╚═╝╚══════╝╚══════╝╚═╝  ╚═╝╚═╝  ╚═╝
[/bright_cyan]"""

_TAGLINE = "Shift cipher and frequency cryptanalysis utility"


class ToolkitConsole:
    """Unified console interface for the Caesar toolkit.

    User-supplied text is always rendered as :class:`rich.text.Text`, never
    as markup, so brackets in a ciphertext print verbatim.

    Usage::

        con = ToolkitConsole()
        con.banner()
        con.success("Key recovered")
    """

    def __init__(self, *, quiet: bool = False, record: bool = False) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress the banner and informational messages.
                    Results and errors are still printed.
            record: Enable Rich recording for text export.
        """
        self._quiet = quiet
        self._console = Console(
            theme=_TOOLKIT_THEME,
            record=record,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """Direct access to the underlying Rich Console instance."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Banner
    # ------------------------------------------------------------------ #

    def banner(self, version: str = "1.0.0") -> None:
        """Display the ASCII-art banner (skipped when quiet)."""
        if self._quiet:
            return
        subtitle = (
            f"[caesar.highlight]{_TAGLINE}[/caesar.highlight]\n"
            f"[caesar.dim]Version: {version}[/caesar.dim]"
        )
        panel = Panel(
            Align.center(Text.from_markup(_BANNER_ART + "\n" + subtitle)),
            border_style="bright_cyan",
            padding=(1, 2),
        )
        self._console.print(panel)

    # ------------------------------------------------------------------ #
    #  Message helpers (severity-coloured)
    # ------------------------------------------------------------------ #

    def _message(self, prefix: str, style: str, message: str) -> None:
        line = Text()
        line.append(prefix, style=style)
        line.append(" ")
        line.append(message)
        self._console.print(line)

    def success(self, message: str) -> None:
        """Print a success message."""
        self._message("[✔] SUCCESS:", "caesar.success", message)

    def error(self, message: str) -> None:
        """Print an error message."""
        self._message("[✘] ERROR:", "caesar.error", message)

    def info(self, message: str) -> None:
        """Print an informational message (skipped when quiet)."""
        if self._quiet:
            return
        self._message("[ℹ] INFO:", "caesar.info", message)

    # ------------------------------------------------------------------ #
    #  Tables
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
            show_lines=False,
            padding=(0, 1),
        )
        for idx, col_name in enumerate(columns):
            style = styles[idx] if styles and idx < len(styles) else ""
            tbl.add_column(col_name, style=style)

        for row in rows:
            tbl.add_row(*(Text(str(cell)) for cell in row))

        self._console.print(tbl)

    def findings_table(self, findings: Sequence[Any]) -> None:
        """Render a findings table with automatic severity colouring.

        Expects objects with ``severity``, ``title``, and ``description``
        attributes (e.g. :class:`shared.models.Finding`).
        """
        if not findings:
            return

        severity_style_map: dict[str, str] = {
            "CRITICAL": "caesar.critical",
            "HIGH": "caesar.high",
            "MEDIUM": "caesar.medium",
            "LOW": "caesar.low",
            "INFO": "caesar.informational",
        }

        tbl = Table(
            title="Findings",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            show_lines=True,
            padding=(0, 1),
        )
        tbl.add_column("#", style="dim", width=4, justify="right")
        tbl.add_column("Severity", width=10)
        tbl.add_column("Title")
        tbl.add_column("Description", ratio=2)

        for idx, finding in enumerate(findings, start=1):
            sev = getattr(finding, "severity", "INFO")
            sev_name = sev.value if hasattr(sev, "value") else str(sev).upper()
            tbl.add_row(
                str(idx),
                Text(sev_name, style=severity_style_map.get(sev_name, "")),
                Text(str(getattr(finding, "title", ""))),
                Text(str(getattr(finding, "description", ""))),
            )

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
