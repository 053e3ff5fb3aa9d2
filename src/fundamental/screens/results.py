"""Results screen: tabbed view with Projects / People / Problems tabs."""

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import (
    DataTable,
    Footer,
    Header,
    Label,
    Static,
    TabbedContent,
    TabPane,
)

from fundamental.models import FundingReport
from fundamental.render import summary_line


class ResultsScreen(Screen):
    """Main results display."""

    CSS = """
    ResultsScreen {
        layout: vertical;
    }
    #results-header {
        height: 3;
        background: $primary;
        color: $text;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    DataTable {
        height: auto;
        margin: 1 0;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, report: FundingReport, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.report = report

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static(
            f"  💸  {self.report.root}  ·  {summary_line(self.report)}  ",
            id="results-header",
        )
        with TabbedContent("📦 Projects", "👥 People", "⚠ Problems"):
            with TabPane("📦 Projects"):
                yield from self._compose_projects()
            with TabPane("👥 People"):
                yield from self._compose_people()
            with TabPane("⚠ Problems"):
                yield from self._compose_problems()
        yield Footer()

    # ── Projects tab ──────────────────────────────────────────────────────

    def _compose_projects(self) -> ComposeResult:
        with VerticalScroll():
            yield Static("DIRECTLY FUNDABLE PROJECTS", classes="section-title")
            if not self.report.funded_packages:
                yield Label("No dependencies list funding links.")
                return
            yield DataTable(id="projects-table")

    # ── People tab ────────────────────────────────────────────────────────

    def _compose_people(self) -> ComposeResult:
        with VerticalScroll():
            yield Static("FUNDABLE CONTRIBUTORS", classes="section-title")
            if not self.report.contributors:
                yield Label("No contributors accept sponsorship.")
                return
            yield DataTable(id="people-table")

    # ── Problems tab ──────────────────────────────────────────────────────

    def _compose_problems(self) -> ComposeResult:
        with VerticalScroll():
            yield Static("CRAWL FAILURES", classes="section-title")
            if self.report.crawl_failures:
                for name, message in self.report.crawl_failures.items():
                    yield Label(f"• {name}: {message}")
            else:
                yield Label("None.")
            yield Static("SKIPPED REPOSITORIES", classes="section-title")
            if self.report.skipped:
                for skip in self.report.skipped:
                    yield Label(f"• {skip.package} ({skip.reason.value}): {skip.message}")
            else:
                yield Label("None.")

    def on_mount(self) -> None:
        if self.report.funded_packages:
            projects = self.query_one("#projects-table", DataTable)
            projects.add_columns("Crate", "Depth", "Funding links")
            for node in self.report.funded_packages:
                projects.add_row(node.name, node.depth, ", ".join(node.funding_links))

        if self.report.contributors:
            people = self.query_one("#people-table", DataTable)
            people.add_columns("#", "Login", "Contributions", "Sponsors", "Crates")
            for rank, record in enumerate(self.report.contributors, start=1):
                people.add_row(
                    rank,
                    record.login,
                    record.contributions,
                    record.sponsor_count,
                    record.crates,
                )
