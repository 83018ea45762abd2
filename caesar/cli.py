"""
Caesar CLI
===========

Click-based command-line interface for the Caesar toolkit. Provides
subcommands to encipher, decipher, crack a key statistically, list all
26 decipherings, and profile letter frequencies.

Usage::

    python -m caesar encipher 11 "attack at Dawn!"
    python -m caesar decipher 11 -i message.txt -f plain.txt
    python -m caesar crack "leelnv le Olhy!"
    python -m caesar brute-force -i message.txt
    python -m caesar -o json frequency -i message.txt

References:
    - Click Documentation. https://click.palletsprojects.com/
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import click

from shared.config import ToolkitConfig
from shared.console import ToolkitConsole
from shared.models import RunResult

from caesar import __version__
from caesar.core.alphabet import alphabet_size
from caesar.core.engine import CaesarEngine
from caesar.output.console import CaesarConsoleOutput
from caesar.output.report import CaesarReportGenerator

_OUTPUT_FORMATS = ("console", "json")


# ===================================================================== #
#  CLI Group
# ===================================================================== #

@click.group()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a Caesar configuration file (TOML).",
)
@click.option(
    "--output", "-o",
    type=click.Choice(_OUTPUT_FORMATS),
    default=None,
    help="Output format (default from config, normally console).",
)
@click.option(
    "--output-file", "-f",
    type=click.Path(dir_okay=False),
    default=None,
    help="Save the result text (or JSON report) to this file.",
)
@click.option(
    "--quiet", "-q",
    is_flag=True,
    default=False,
    help="Suppress banner and hints.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging on stderr.",
)
@click.version_option(__version__, prog_name="caesar")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[str],
    output: Optional[str],
    output_file: Optional[str],
    quiet: bool,
    verbose: bool,
) -> None:
    """Caesar -- shift cipher and frequency cryptanalysis utility.

    Encipher and decipher text, crack unknown keys from English letter
    statistics, or list every possible deciphering.
    """
    ctx.ensure_object(dict)

    toolkit_config = ToolkitConfig.load(config)
    output_format = output or toolkit_config.global_settings.output_format
    if output_format not in _OUTPUT_FORMATS:
        raise click.UsageError(
            f"Invalid output_format {output_format!r} in configuration; "
            f"expected one of: {', '.join(_OUTPUT_FORMATS)}."
        )

    ctx.obj["config"] = toolkit_config
    ctx.obj["output_format"] = output_format
    ctx.obj["output_file"] = output_file

    console = ToolkitConsole(quiet=quiet)
    ctx.obj["console"] = console
    ctx.obj["engine"] = CaesarEngine(
        toolkit_config, log_level="DEBUG" if verbose else None
    )
    ctx.obj["display"] = CaesarConsoleOutput(console, toolkit_config.caesar)
    ctx.obj["reporter"] = CaesarReportGenerator(
        encoding=toolkit_config.global_settings.encoding
    )

    if output_format == "console":
        console.banner(version=__version__)


# ===================================================================== #
#  Helpers
# ===================================================================== #

def _text_input(func: Callable) -> Callable:
    """Attach the TEXT argument and --input-file option to a subcommand."""
    func = click.option(
        "--input-file", "-i",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="Read the input text from this file.",
    )(func)
    return click.argument("text", required=False)(func)


def _read_input(
    ctx: click.Context, text: Optional[str], input_file: Optional[str]
) -> tuple[str, str]:
    """Return ``(text, target)`` from exactly one of TEXT / --input-file."""
    if (text is None) == (input_file is None):
        raise click.UsageError("Provide exactly one of TEXT or --input-file.")

    if input_file is None:
        return text, "<text>"

    encoding = ctx.obj["config"].global_settings.encoding
    try:
        return Path(input_file).read_text(encoding=encoding), input_file
    except UnicodeDecodeError as exc:
        raise click.ClickException(
            f'Failed to load file "{input_file}": not valid {encoding} ({exc.reason}).'
        ) from exc
    except OSError as exc:
        raise click.FileError(input_file, hint=exc.strerror) from exc


def _handle_output(
    ctx: click.Context, result: RunResult, show: Callable[[], None]
) -> None:
    """Display or save *result* according to the selected format.

    Args:
        ctx: Click context containing configuration.
        result: RunResult to output.
        show: Renders the console view of *result*.
    """
    output_format = ctx.obj["output_format"]
    output_file = ctx.obj["output_file"]
    reporter: CaesarReportGenerator = ctx.obj["reporter"]
    console: ToolkitConsole = ctx.obj["console"]

    try:
        if output_format == "json":
            if output_file:
                path = reporter.generate_json(result, Path(output_file))
                console.success(f"JSON report saved to: {path}")
            else:
                click.echo(reporter.render_json(result))
        else:
            show()
            if output_file and result.ok:
                path = reporter.generate_text(result, Path(output_file))
                console.success(f"Output saved to: {path}")
    except OSError as exc:
        raise click.ClickException(
            f'Failed to save to file "{output_file}": {exc.strerror}'
        ) from exc

    if not result.ok:
        ctx.exit(1)


# ===================================================================== #
#  Subcommands
# ===================================================================== #

@cli.command()
@click.argument("key", type=click.IntRange(min=0))
@_text_input
@click.pass_context
def encipher(
    ctx: click.Context, key: int, text: Optional[str], input_file: Optional[str]
) -> None:
    """Encipher TEXT with KEY (a non-negative integer)."""
    source, target = _read_input(ctx, text, input_file)
    engine: CaesarEngine = ctx.obj["engine"]
    display: CaesarConsoleOutput = ctx.obj["display"]

    result = engine.encipher(source, key % alphabet_size(), target)
    _handle_output(ctx, result, lambda: display.display_shift(result, source))


@cli.command()
@click.argument("key", type=click.IntRange(min=0))
@_text_input
@click.pass_context
def decipher(
    ctx: click.Context, key: int, text: Optional[str], input_file: Optional[str]
) -> None:
    """Decipher TEXT that was enciphered with KEY."""
    source, target = _read_input(ctx, text, input_file)
    engine: CaesarEngine = ctx.obj["engine"]
    display: CaesarConsoleOutput = ctx.obj["display"]

    result = engine.decipher(source, key % alphabet_size(), target)
    _handle_output(ctx, result, lambda: display.display_shift(result, source))


@cli.command()
@_text_input
@click.pass_context
def crack(ctx: click.Context, text: Optional[str], input_file: Optional[str]) -> None:
    """Estimate the key of TEXT from letter frequencies and decipher it.

    The estimate is statistical: short or unusual texts may give a wrong
    key, in which case try brute-force.
    """
    source, target = _read_input(ctx, text, input_file)
    engine: CaesarEngine = ctx.obj["engine"]
    display: CaesarConsoleOutput = ctx.obj["display"]

    result = engine.crack(source, target)
    _handle_output(ctx, result, lambda: display.display_crack(result, source))


@cli.command("brute-force")
@_text_input
@click.pass_context
def brute_force(
    ctx: click.Context, text: Optional[str], input_file: Optional[str]
) -> None:
    """Print TEXT deciphered with every possible key."""
    source, target = _read_input(ctx, text, input_file)
    engine: CaesarEngine = ctx.obj["engine"]
    display: CaesarConsoleOutput = ctx.obj["display"]

    result = engine.brute_force(source, target)
    _handle_output(ctx, result, lambda: display.display_brute_force(result))


@cli.command()
@_text_input
@click.pass_context
def frequency(
    ctx: click.Context, text: Optional[str], input_file: Optional[str]
) -> None:
    """Compare the letter frequencies of TEXT with English."""
    source, target = _read_input(ctx, text, input_file)
    engine: CaesarEngine = ctx.obj["engine"]
    display: CaesarConsoleOutput = ctx.obj["display"]

    result = engine.frequency(source, target)
    _handle_output(ctx, result, lambda: display.display_frequency(result))


# ===================================================================== #
#  Entry Point
# ===================================================================== #

def main() -> None:
    """Main entry point for the Caesar CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
