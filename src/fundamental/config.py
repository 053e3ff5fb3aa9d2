"""Process-level configuration: credentials and logging."""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from textual.logging import TextualHandler

from fundamental.errors import ConfigurationError

TOKEN_ENV_VARS = ("GITHUB_API_TOKEN", "GITHUB_TOKEN", "GH_TOKEN")
LOG_ENV_VAR = "FUNDAMENTAL_LOG"

logger = logging.getLogger("fundamental")


def resolve_token() -> str:
    """Return the GitHub token from the environment.

    Raises:
        ConfigurationError: if none of the supported variables is set.
    """
    for var in TOKEN_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return value
    raise ConfigurationError(
        "No GitHub API token found. Set GITHUB_API_TOKEN "
        "(or GITHUB_TOKEN), e.g. export GITHUB_API_TOKEN=$(gh auth token)"
    )


def setup_logging(level: Optional[str] = None, tui: bool = False) -> None:
    """Configure the ``fundamental`` logger to write to stderr.

    ``level`` wins over the FUNDAMENTAL_LOG environment variable; the
    default is INFO. Calling this again replaces the previous handler.
    With ``tui`` set, records go to the Textual devtools console instead
    of stderr, which the TUI owns.
    """
    name = (level or os.environ.get(LOG_ENV_VAR) or "INFO").upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level {name!r} in {LOG_ENV_VAR}")

    handler: logging.Handler
    if tui:
        handler = TextualHandler()
    else:
        handler = RichHandler(
            console=Console(stderr=True, no_color="REMOVE_ANSI" in os.environ),
            show_path=False,
            rich_tracebacks=True,
        )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(numeric)

