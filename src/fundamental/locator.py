"""Repository URL classification."""

from typing import Optional

from fundamental.errors import DataShapeError
from fundamental.models import RepoLocation

GITHUB_DOMAIN = "github.com"


def locate_repository(
    url: Optional[str], domain: str = GITHUB_DOMAIN
) -> Optional[RepoLocation]:
    """Classify a free-text repository URL.

    Returns ``None`` when there is no URL or it is not hosted on ``domain``.
    Otherwise the owner and name are the last two ``/``-separated segments
    (name last). Fewer than two usable segments leave ``owner``/``name``
    unset; callers treat that as a data problem for the package.
    """
    if not url or domain not in url:
        return None

    trimmed = url.strip().rstrip("/")
    if trimmed.endswith(".git"):
        trimmed = trimmed[: -len(".git")]

    segments = trimmed.split("/")
    if len(segments) < 2:
        return RepoLocation(url=url)

    owner, name = segments[-2], segments[-1]
    if not owner or not name or domain in owner:
        return RepoLocation(url=url)
    return RepoLocation(url=url, owner=owner, name=name)


def require_owner(location: RepoLocation) -> tuple[str, str]:
    """Return ``(owner, name)`` or raise DataShapeError."""
    if not location.has_owner:
        raise DataShapeError(f"no owner/repo in repository URL {location.url!r}")
    return location.owner, location.name  # type: ignore[return-value]
