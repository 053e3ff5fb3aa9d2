"""Terminal rendering of a FundingReport.

Core functions return data, this module makes it human-readable.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from fundamental.models import FundingReport

console = Console()


def build_projects_table(report: FundingReport) -> Table:
    """Directly fundable projects, shallowest dependency first."""
    table = Table(
        title="Directly fundable projects",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Crate", style="cyan")
    table.add_column("Depth", justify="right")
    table.add_column("Funding links", style="green")
    for node in report.funded_packages:
        table.add_row(node.name, str(node.depth), "\n".join(node.funding_links))
    return table


def build_contributors_table(report: FundingReport) -> Table:
    """Fundable individuals in ranked order."""
    table = Table(
        title="Fundable contributors",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Login", style="cyan")
    table.add_column("Contributions", justify="right")
    table.add_column("Sponsors", justify="right")
    table.add_column("Crates", justify="right")
    table.add_column("Sponsor page", style="blue")
    for rank, record in enumerate(report.contributors, start=1):
        table.add_row(
            str(rank),
            record.login,
            str(record.contributions),
            str(record.sponsor_count),
            str(record.crates),
            record.sponsors_url,
        )
    return table


def summary_line(report: FundingReport) -> str:
    return (
        f"{report.total_packages} crates crawled · "
        f"{len(report.funded_packages)} with funding links · "
        f"{len(report.contributors)} fundable contributors · "
        f"{len(report.crawl_failures)} crawl failures · "
        f"{len(report.skipped)} skipped"
    )


def render_report(report: FundingReport, out: Optional[Console] = None) -> None:
    """Print both listings and a summary line."""
    out = out or console

    if report.funded_packages:
        out.print(build_projects_table(report))
    else:
        out.print("[yellow]No dependencies list funding links.[/yellow]")

    if report.contributors:
        out.print(build_contributors_table(report))
    else:
        out.print("[yellow]No contributors accept sponsorship.[/yellow]")

    out.print(f"[dim]{summary_line(report)}[/dim]")
