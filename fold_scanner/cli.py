"""
Lists the folding regions of a script or stylesheet.
Regions, comment blocks and function bodies are printed sorted by line.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import DocumentError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    normalize_filepath,
    read_document,
)
from .models import FoldRegion
from .scanner import generate_folds

__all__ = ["cli"]


def _flatten_pairs(pairs: tuple[tuple[str, str], ...]) -> list[str] | None:
    if not pairs:
        return None
    return [marker for pair in pairs for marker in pair]


def _format_fold(fold: FoldRegion) -> str:
    return f"{fold.start_line}-{fold.last_line}\t{fold.kind.value}\t{fold.name}"


@click.command()
@click.version_option(package_name="fold-scanner")
@click.option(
    "--region-pair",
    nargs=2,
    multiple=True,
    metavar="START END",
    help="Named-region markers (repeatable)",
)
@click.option(
    "--comment-pair",
    nargs=2,
    multiple=True,
    metavar="START END",
    help="Comment markers; equal markers merge line comments (repeatable)",
)
@click.option("--functions/--no-functions", default=None, help="Fold function bodies")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format",
)
@click.option("-v", "--verbose", is_flag=True, help="Log scanner diagnostics to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    region_pair: tuple[tuple[str, str], ...] = (),
    comment_pair: tuple[tuple[str, str], ...] = (),
    functions: bool | None = None,
    output_format: str = "text",
    verbose: bool = False,
):
    """
    Entry point for listing the folding regions of a document.

    Args:
        filepath: Path to the script or stylesheet to scan.
        region_pair: Overrides for the named-region marker pairs.
        comment_pair: Overrides for the comment marker pairs.
        functions: Enable or disable the function-body pass.
        output_format: `text` for one fold per line, `json` for a JSON list.
        verbose: Emit debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the path is unsupported or the configuration is
            invalid.
        click.ClickException: If size limits or reading the file fail.

    Examples:
        fold-scanner static/app.js --comment-pair "/*" "*/" --format json
    """
    # Without --verbose, warnings and errors reach stderr through logging's last-resort handler.
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        filepath = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error
    try:
        config = build_config(
            filepath.parent,
            filepath.suffix,
            region_pairs=_flatten_pairs(region_pair),
            comment_pairs=_flatten_pairs(comment_pair),
            detect_functions=functions,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        enforce_file_size(collect_file_stat(filepath), max_file_size, filepath)
        text = read_document(filepath)
    except (IOError, DocumentError) as error:
        raise click.ClickException(str(error)) from error

    folds = generate_folds(
        text, config.region_pairs, config.comment_pairs, config.detect_functions
    )
    folds.sort(key=lambda fold: (fold.start_line, fold.end_line))

    if output_format == "json":
        click.echo(json.dumps([fold.to_dict() for fold in folds], indent=2))
    else:
        for fold in folds:
            click.echo(_format_fold(fold))


if __name__ == "__main__":
    cli()
