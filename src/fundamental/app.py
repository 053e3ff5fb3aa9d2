"""Textual TUI for browsing a funding report."""

from textual.app import App

from fundamental.analyzer import Analyzer
from fundamental.errors import FundamentalError
from fundamental.models import FundingReport, RunConfig
from fundamental.screens.loading import LoadingScreen
from fundamental.screens.results import ResultsScreen


class FundamentalApp(App):
    """TUI that runs one inspection and shows its results."""

    TITLE = "Fundamental"
    SUB_TITLE = "Who to fund in your dependency tree"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, config: RunConfig, token: str, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.config = config
        self.token = token

    def on_mount(self) -> None:
        self.run_inspection()

    def run_inspection(self) -> None:
        """Push the loading screen and run the pipeline in a worker."""
        loading = LoadingScreen(self.config.package)
        self.push_screen(loading)

        async def _do_work() -> None:
            def on_status(msg: str) -> None:
                self.call_from_thread(loading.update_status, msg)

            analyzer = Analyzer(token=self.token, on_status=on_status)
            try:
                report = await analyzer.inspect(self.config)
                self.call_from_thread(self._show_results, report)
            except FundamentalError as e:
                self.call_from_thread(loading.update_status, f"❌ {e}")
            except Exception as e:
                self.call_from_thread(
                    loading.update_status, f"❌ Unexpected error: {e}"
                )
            finally:
                await analyzer.close()

        self.run_worker(_do_work(), thread=True)

    def _show_results(self, report: FundingReport) -> None:
        """Replace loading screen with results."""
        self.pop_screen()
        self.push_screen(ResultsScreen(report))
