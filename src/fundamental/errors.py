"""Exception hierarchy and exit codes for fundamental."""

from typing import Optional

# POSIX-style exit codes
SUCCESS = 0
GENERAL_ERROR = 1
USAGE_ERROR = 2
API_ERROR = 65
CONFIG_ERROR = 66
DATA_ERROR = 70
INTERRUPTED = 130


class FundamentalError(Exception):
    """Base class for all fundamental errors."""

    exit_code = GENERAL_ERROR


class FetchError(FundamentalError):
    """A registry or hosting API call failed."""

    exit_code = API_ERROR

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(FetchError):
    """The requested package, repository or user does not exist."""


class RateLimitedError(FetchError):
    """The remote API refused the call because of rate limiting."""


class UnauthorizedError(FetchError):
    """The credential was rejected."""


class GraphQLError(FetchError):
    """A GraphQL response carried an ``errors`` array."""


class DataShapeError(FundamentalError):
    """Data could not be classified, e.g. a repository URL with no owner."""

    exit_code = DATA_ERROR


class ConfigurationError(FundamentalError):
    """Missing credential or invalid configuration; fatal at startup."""

    exit_code = CONFIG_ERROR


def get_exit_code_for_exception(exc: BaseException) -> int:
    """Map an exception to the process exit code."""
    if isinstance(exc, KeyboardInterrupt):
        return INTERRUPTED
    if isinstance(exc, FundamentalError):
        return exc.exit_code
    return GENERAL_ERROR
