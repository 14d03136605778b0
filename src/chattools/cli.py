"""Command-line interface for chat-tools."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from .config import FilterConfig, load_filter_config
from .exceptions import ChatToolsError
from .filtering import filter_markup, parse_filtered
from .logger import VERBOSITY_DEBUG, VERBOSITY_SILENT, setup_logger
from .segmenter import segment as segment_tree

app = typer.Typer(
    name="chattools",
    help="Filter, translate and segment chat markup",
    add_completion=False,
)

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to a filter configuration YAML file"),
]
LegacyOption = Annotated[
    bool,
    typer.Option("--legacy", help="Start from the legacy preset ('&' codes translated)"),
]


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=silent (default), 1=show changes, 2=show all checks, 3=debug",
            min=VERBOSITY_SILENT,
            max=VERBOSITY_DEBUG,
        ),
    ] = VERBOSITY_SILENT,
) -> None:
    """Global options for chattools commands."""
    setup_logger(verbose)


@app.command("filter")
def filter_command(
    text: Annotated[str, typer.Argument(help="Markup to filter")],
    config: ConfigOption = None,
    legacy: LegacyOption = False,
) -> None:
    """Print the filtered markup."""
    filter_config = _load_config(config, legacy)
    typer.echo(filter_markup(text, filter_config))


@app.command()
def parse(
    text: Annotated[str, typer.Argument(help="Markup to parse")],
    config: ConfigOption = None,
    legacy: LegacyOption = False,
) -> None:
    """Print each styled run of the filtered tree as 'text<TAB>style'."""
    filter_config = _load_config(config, legacy)
    tree = parse_filtered(text, filter_config)
    for run_text, style in tree.flatten():
        typer.echo(f"{run_text}\t{style.describe()}")


@app.command()
def segment(
    text: Annotated[str, typer.Argument(help="Markup to parse and segment")],
    cut: Annotated[int, typer.Option("--cut", help="Cut at the next space after this length")],
    max_length: Annotated[int, typer.Option("--max", help="Hard limit on chunk length")],
    config: ConfigOption = None,
    legacy: LegacyOption = False,
) -> None:
    """Print the plain text of each chunk on its own line."""
    if cut < 0 or max_length < 0:
        typer.echo("Error: --cut and --max must be non-negative", err=True)
        raise typer.Exit(1)

    filter_config = _load_config(config, legacy)
    tree = parse_filtered(text, filter_config)
    for chunk in segment_tree(tree, cut, max_length):
        typer.echo(chunk.plain_text())


def _load_config(config_path: Path | None, legacy: bool) -> FilterConfig:
    """Load the config file if given, otherwise pick a preset."""
    if config_path is None:
        return FilterConfig.legacy() if legacy else FilterConfig.standard()
    try:
        loaded = load_filter_config(config_path)
    except ChatToolsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    if legacy:
        return loaded.to_builder().legacy_colors(True).build()
    return loaded


def main() -> int:
    """Main entry point."""
    # Typer handles sys.exit() internally
    app()
    return 0


if __name__ == "__main__":
    main()
