"""Loading screen: shows progress while crawling and resolving."""

from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, LoadingIndicator, Static


class LoadingScreen(Screen):
    """Displayed while the inspection is running."""

    CSS = """
    LoadingScreen {
        align: center middle;
    }
    #loading-container {
        width: 72;
        height: auto;
        padding: 2 4;
        border: round $primary;
        background: $surface;
    }
    #loading-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 2;
    }
    #status-label {
        text-align: center;
        margin-bottom: 1;
    }
    #loading-indicator {
        height: 3;
    }
    """

    def __init__(self, package: str, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.package = package
        self.status_message = ""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="loading-container"):
                yield Static(
                    f"📦  Inspecting {self.package} …", id="loading-title"
                )
                yield Label("Initializing …", id="status-label")
                yield LoadingIndicator(id="loading-indicator")
        yield Footer()

    def update_status(self, message: str) -> None:
        """Update the status message."""
        self.status_message = message
        self.query_one("#status-label", Label).update(message)
