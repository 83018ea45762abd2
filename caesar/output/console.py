"""
Caesar Console Output
======================

Rich-based console formatters for Caesar toolkit results: shift results,
cracked keys with their chi-squared ranking, the brute-force table, and
letter-frequency profiles.

User text is always wrapped in :class:`rich.text.Text` so that brackets
inside a ciphertext are printed, not parsed as markup.

References:
    - Rich Library Documentation. https://rich.readthedocs.io/
"""

from __future__ import annotations

from typing import Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from shared.config import CaesarConfig
from shared.console import ToolkitConsole
from shared.models import RunResult
from caesar.core.models import BruteForceReport, CrackReport, FrequencyReport

_BAR_WIDTH = 30


class CaesarConsoleOutput:
    """Console output formatters for Caesar results.

    Usage::

        output = CaesarConsoleOutput(ToolkitConsole())
        output.display_shift(engine.encipher("attack at Dawn!", 11))
        output.display_crack(engine.crack("leelnv le Olhy!"))
    """

    def __init__(
        self,
        console: Optional[ToolkitConsole] = None,
        settings: Optional[CaesarConfig] = None,
    ) -> None:
        self.console = console or ToolkitConsole()
        self.settings = settings or CaesarConfig()
        self._rich = self.console.rich

    # ------------------------------------------------------------------ #
    #  Encipher / Decipher
    # ------------------------------------------------------------------ #

    def display_shift(self, result: RunResult, source: str) -> None:
        """Show input, output and key of an encipher/decipher run.

        Args:
            result: RunResult from ``encipher`` or ``decipher``.
            source: The text that was transformed.
        """
        if result.operation == "encipher":
            labels = ("Plaintext", "Ciphertext")
        else:
            labels = ("Ciphertext", "Plaintext")

        body = Text()
        body.append(f"{labels[0]}:  ", style="bold")
        body.append(source + "\n")
        body.append(f"{labels[1]}: ", style="bold")
        body.append(result.output, style="bright_green")
        body.append("\n")
        body.append("Key:        ", style="bold")
        body.append(str(result.metadata.get("key", "")))

        self._rich.print(Panel(body, title=result.operation.capitalize(), border_style="cyan"))

    # ------------------------------------------------------------------ #
    #  Crack
    # ------------------------------------------------------------------ #

    def display_crack(self, result: RunResult, source: str) -> None:
        """Show the estimated key, the resulting plaintext and the fit."""
        if not result.ok:
            self.display_internal_error(result)
            return

        report = CrackReport(**result.metadata)

        body = Text()
        body.append("Ciphertext:            ", style="bold")
        body.append(source + "\n")
        body.append("Most Likely Plaintext: ", style="bold")
        body.append(report.plaintext, style="bright_green")
        body.append("\n")
        body.append("Estimated Key:         ", style="bold")
        body.append(str(report.key), style="bold bright_white")
        body.append("\n")
        body.append("Chi-Squared:           ", style="bold")
        body.append(f"{report.statistic:.4f}\n")
        body.append("Letters Analysed:      ", style="bold")
        body.append(f"{report.letter_count}\n")
        body.append("Index of Coincidence:  ", style="bold")
        body.append(f"{report.index_of_coincidence:.4f}")
        if report.p_value is not None:
            body.append("\n")
            body.append("Fit p-value:           ", style="bold")
            body.append(f"{report.p_value:.4f}")

        self._rich.print(Panel(body, title="Crack", border_style="cyan"))

        if self.settings.show_scores and report.scores:
            self._display_scores(report)

        self.console.findings_table(result.findings)
        self.console.info(
            "If the plaintext does not look correct, try a brute force "
            "(brute-force) of all possible translations."
        )

    def _display_scores(self, report: CrackReport) -> None:
        tbl = Table(
            title="Chi-Squared by Shift",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
        )
        tbl.add_column("Key", justify="right")
        tbl.add_column("Chi-Squared", justify="right")

        for key, score in enumerate(report.scores):
            style = "bold bright_green" if key == report.key else ""
            tbl.add_row(str(key), f"{score:.4f}", style=style)

        self._rich.print(tbl)

    # ------------------------------------------------------------------ #
    #  Brute Force
    # ------------------------------------------------------------------ #

    def display_brute_force(self, result: RunResult) -> None:
        """List every key with its plaintext, highlighting the best fits."""
        if not result.ok:
            self.display_internal_error(result)
            return

        report = BruteForceReport(**result.metadata)
        highlighted = set(report.best_keys[: self.settings.highlight_candidates])

        tbl = Table(
            title="Brute Force",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
        )
        tbl.add_column("Key", justify="right", width=3)
        tbl.add_column("Plaintext")
        tbl.add_column("Chi-Squared", justify="right")

        for candidate in report.candidates:
            style = "bold bright_green" if candidate.key in highlighted else ""
            tbl.add_row(
                str(candidate.key),
                Text(candidate.plaintext),
                f"{candidate.statistic:.4f}",
                style=style,
            )

        self._rich.print(tbl)
        self.console.info(
            "If multiple keys generate plausible plaintext try cracking the "
            "key (crack) to see the most statistically likely translation."
        )

    # ------------------------------------------------------------------ #
    #  Frequency
    # ------------------------------------------------------------------ #

    def display_frequency(self, result: RunResult) -> None:
        """Show observed against expected frequency for each letter."""
        if not result.ok:
            self.display_internal_error(result)
            return

        report = FrequencyReport(**result.metadata)

        tbl = Table(
            title="Letter Frequencies",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
        )
        tbl.add_column("Letter", justify="center")
        tbl.add_column("Count", justify="right")
        tbl.add_column("Observed", justify="right")
        tbl.add_column("English", justify="right")
        tbl.add_column("", no_wrap=True)

        peak = max((lf.frequency for lf in report.letters), default=0.0) or 1.0
        for lf in report.letters:
            tbl.add_row(
                lf.letter,
                str(lf.count),
                f"{lf.frequency:.5f}",
                f"{lf.expected:.5f}",
                self._bar(lf.frequency, peak),
            )

        self._rich.print(tbl)
        self._rich.print(
            Text.assemble(
                ("Letters: ", "bold"),
                f"{report.letter_count}   ",
                ("Index of Coincidence: ", "bold"),
                f"{report.index_of_coincidence:.4f}",
            )
        )

    @staticmethod
    def _bar(value: float, peak: float) -> Text:
        filled = round(_BAR_WIDTH * value / peak)
        return Text("█" * filled, style="bright_cyan")

    # ------------------------------------------------------------------ #
    #  Errors
    # ------------------------------------------------------------------ #

    def display_internal_error(self, result: RunResult) -> None:
        """Report a broken reference table to the user."""
        self.console.error(f"Internal Error: {result.error}")
        self.console.print(
            Text("Please report this error to the supplier of this utility.")
        )
