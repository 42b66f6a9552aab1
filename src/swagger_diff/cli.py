"""CLI entry point for swagger-diff."""

import logging
from pathlib import Path

import click

from swagger_diff.common_types import FileCommonTypeResolver, no_common_types
from swagger_diff.differ.compare import compare_documents
from swagger_diff.differ.formatter import diffs_to_json, format_report, summarize
from swagger_diff.differ.models import Diff
from swagger_diff.parser.swagger import DocumentError, load_document

DEFAULT_FAIL_ON = "error"

# Levels that fail the check for each --fail-on choice.
FAILING_LEVELS = {
    "error": {"error"},
    "warning": {"error", "warning"},
    "never": set(),
}


def _load(path: Path) -> dict:
    try:
        return load_document(path)
    except DocumentError as e:
        raise click.ClickException(str(e)) from e


def _should_fail(diffs: list[Diff], fail_on: str) -> bool:
    levels = FAILING_LEVELS[fail_on]
    return any(diff.level in levels for diff in diffs)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Swagger Diff — compare two versions of a Swagger 2.0 API definition."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("old_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("new_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--common-types", "common_types", default=None, envvar="SWAGGER_DIFF_COMMON_TYPES", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Directory of shared common-types documents.")
@click.option("--format", "fmt", default="table", type=click.Choice(["table", "json"]), help="Report format.")
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Write the report to a file instead of stdout.")
@click.option("--fail-on", default=DEFAULT_FAIL_ON, envvar="SWAGGER_DIFF_FAIL_ON", type=click.Choice(list(FAILING_LEVELS)), help="Lowest diff level that fails the check.")
def compare(old_path: Path, new_path: Path, common_types: Path | None, fmt: str, output: Path | None, fail_on: str):
    """Compare OLD_PATH against NEW_PATH and report every difference."""
    old_document = _load(old_path)
    new_document = _load(new_path)
    resolver = FileCommonTypeResolver(common_types) if common_types else no_common_types

    diffs = compare_documents(old_document, new_document, resolver)
    report = diffs_to_json(diffs) + "\n" if fmt == "json" else format_report(diffs)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(report, encoding="utf-8")
        click.echo(f"Report saved to {output}")
    else:
        click.echo(report, nl=False)

    counts = summarize(diffs)
    click.echo(f"Found {counts['error']} errors and {counts['warning']} warnings.", err=True)

    if _should_fail(diffs, fail_on):
        click.get_current_context().exit(1)
