"""CLI entry point for fundamental."""

import asyncio
import sys
from typing import Optional

import click

from fundamental import __version__
from fundamental.errors import INTERRUPTED, FundamentalError, get_exit_code_for_exception
from fundamental.models import (
    DEFAULT_MAX_DEPTH,
    CrawlStrategy,
    FundingReport,
    RunConfig,
    SortField,
    SortOrder,
)


async def run_inspection(config: RunConfig, token: str) -> FundingReport:
    """Run one inspection and release HTTP clients afterwards."""
    from fundamental.analyzer import Analyzer

    analyzer = Analyzer(token=token)
    try:
        return await analyzer.inspect(config)
    finally:
        await analyzer.close()


def _crate_name(ctx: click.Context, param: click.Parameter, value: str) -> str:
    value = value.strip()
    if not value:
        raise click.BadParameter("crate name must not be empty")
    return value


def _fail(exc: FundamentalError) -> None:
    click.secho(f"Error: {exc}", fg="red", err=True)
    sys.exit(get_exit_code_for_exception(exc))


@click.command()
@click.version_option(__version__, prog_name="fundamental")
@click.option(
    "--input",
    "-i",
    "package",
    required=True,
    callback=_crate_name,
    help="Name of the crate to inspect.",
)
@click.option("--dev", is_flag=True, help="Process dev dependencies as well.")
@click.option(
    "--max-depth",
    type=click.IntRange(min=0),
    default=DEFAULT_MAX_DEPTH,
    show_default=True,
    help="Max depth to crawl.",
)
@click.option(
    "--sort-by",
    type=click.Choice([f.value for f in SortField]),
    default=SortField.contributions.value,
    show_default=True,
    help="Key used to rank contributors.",
)
@click.option(
    "--order",
    type=click.Choice([o.value for o in SortOrder]),
    default=None,
    help="Ranking direction [default: descending for contributions, ascending for sponsors].",
)
@click.option("--breadth-first", is_flag=True, help="Crawl breadth-first (shortest-path depths).")
@click.option("--tui", is_flag=True, help="Browse the results in an interactive TUI.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
@click.option("-q", "--quiet", is_flag=True, help="Only log warnings and errors.")
def cli(
    package: str,
    dev: bool,
    max_depth: int,
    sort_by: str,
    order: Optional[str],
    breadth_first: bool,
    tui: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Find the projects and people you could fund in a crate's dependency tree."""
    from dotenv import load_dotenv

    from fundamental.config import resolve_token, setup_logging

    load_dotenv()  # Load .env file (e.g. GITHUB_API_TOKEN)

    level = "DEBUG" if verbose else "WARNING" if quiet else None
    try:
        setup_logging(level, tui=tui)
        token = resolve_token()
    except FundamentalError as e:
        _fail(e)
        return

    config = RunConfig(
        package=package,
        include_dev=dev,
        max_depth=max_depth,
        sort_by=SortField(sort_by),
        ordering=SortOrder(order) if order else None,
        strategy=CrawlStrategy.fifo if breadth_first else CrawlStrategy.lifo,
    )

    if tui:
        from fundamental.app import FundamentalApp

        FundamentalApp(config, token).run()
        return

    from fundamental.render import render_report

    try:
        report = asyncio.run(run_inspection(config, token))
    except KeyboardInterrupt:
        click.echo("Interrupted.", err=True)
        sys.exit(INTERRUPTED)
    except FundamentalError as e:
        _fail(e)
        return
    render_report(report)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
