"""GitHub data fetching via the REST and GraphQL APIs."""

import logging
from typing import Any, Optional

import httpx

from fundamental.errors import (
    FetchError,
    GraphQLError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
)
from fundamental.models import Contributor, Sponsorship

logger = logging.getLogger(__name__)

FUNDING_LINKS_QUERY = """
query($owner: String!, $name: String!) {
  repository(owner: $owner, name: $name) {
    fundingLinks { url }
  }
}
"""

SPONSORSHIP_QUERY = """
query($login: String!) {
  user(login: $login) {
    hasSponsorsListing
    sponsors { totalCount }
  }
}
"""


class GitHubFetcher:
    """Fetches repository, contributor and sponsorship data from GitHub."""

    def __init__(self, token: Optional[str] = None) -> None:
        self.token = token
        self.base_url = "https://api.github.com"
        self._client: Optional[httpx.AsyncClient] = None

    # ── HTTP plumbing ─────────────────────────────────────────────────────

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=30.0,
            )
        return self._client

    @staticmethod
    def _check(resp: httpx.Response, what: str) -> None:
        """Raise the matching FetchError for a failed response."""
        if not resp.is_error:
            return
        if resp.status_code == 404:
            raise NotFoundError(f"GitHub: {what} not found", status_code=404)
        if resp.status_code == 401:
            raise UnauthorizedError(
                "GitHub rejected the API token", status_code=401
            )
        if resp.status_code in (403, 429) and "rate limit" in resp.text.lower():
            remaining = resp.headers.get("x-ratelimit-remaining", "0")
            raise RateLimitedError(
                f"GitHub API rate limit exceeded (remaining: {remaining}). "
                "Wait a few minutes and retry.",
                status_code=resp.status_code,
            )
        raise FetchError(
            f"GitHub API error ({resp.status_code}) on {what}: {resp.reason_phrase}",
            status_code=resp.status_code,
        )

    async def _get(self, path: str, **kwargs) -> httpx.Response:  # type: ignore[no-untyped-def]
        client = await self._client_instance()
        try:
            resp = await client.get(path, **kwargs)
        except httpx.HTTPError as e:
            raise FetchError(f"GitHub request {path} failed: {e}") from e
        self._check(resp, path)
        return resp

    @staticmethod
    def _json(resp: httpx.Response, what: str) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(f"GitHub returned invalid JSON for {what}: {e}") from e

    async def _graphql(
        self, query: str, variables: dict[str, Any], node: str
    ) -> Optional[dict]:
        """POST a GraphQL query and return the ``node`` member of its data.

        Errors are only fatal when ``node`` is missing; tokens with partial
        scopes get errors alongside usable data.
        """
        logger.debug("GraphQL query with %s", variables)
        client = await self._client_instance()
        try:
            resp = await client.post(
                "/graphql", json={"query": query, "variables": variables}
            )
        except httpx.HTTPError as e:
            raise FetchError(f"GitHub GraphQL request failed: {e}") from e
        self._check(resp, "graphql")
        payload = self._json(resp, "graphql")
        if not isinstance(payload, dict):
            raise FetchError("GitHub GraphQL returned an unexpected payload")
        result = (payload.get("data") or {}).get(node)
        errors = payload.get("errors")
        if errors:
            messages = "; ".join(
                err.get("message", "unknown error") for err in errors
            )
            if result is None:
                raise GraphQLError(f"GitHub GraphQL error: {messages}")
            logger.debug("Ignoring GraphQL errors alongside %s: %s", node, messages)
        return result

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Paginated helper ──────────────────────────────────────────────────

    async def _paginate(
        self,
        path: str,
        params: Optional[dict[str, str]] = None,
        max_pages: int = 10,
    ) -> list[dict]:
        """Fetch all pages from a paginated GitHub endpoint."""
        params = dict(params or {})
        params.setdefault("per_page", "100")

        results: list[dict] = []
        for page in range(1, max_pages + 1):
            params["page"] = str(page)
            resp = await self._get(path, params=params)
            # 204 is returned for repositories with no history
            if resp.status_code == 204:
                break
            data = self._json(resp, path)
            if not data:
                break
            results.extend(data)
            if len(data) < int(params["per_page"]):
                break
        else:
            logger.debug("Stopped paginating %s after %d pages", path, max_pages)
        return results

    # ── Repositories ──────────────────────────────────────────────────────

    async def fetch_repo_info(self, owner: str, repo: str) -> dict:
        """Fetch basic repo information."""
        path = f"/repos/{owner}/{repo}"
        resp = await self._get(path)
        return self._json(resp, path)

    async def fetch_funding_links(self, owner: str, repo: str) -> list[str]:
        """Fetch the URLs a repository lists in its FUNDING.yml."""
        repository = await self._graphql(
            FUNDING_LINKS_QUERY, {"owner": owner, "name": repo}, "repository"
        )
        if repository is None:
            raise NotFoundError(f"GitHub: repository {owner}/{repo} not found")
        return [link["url"] for link in repository.get("fundingLinks", [])]

    # ── People ────────────────────────────────────────────────────────────

    async def fetch_contributors(self, contributors_url: str) -> list[Contributor]:
        """Fetch every contributor listed at a repository's contributors URL."""
        raw = await self._paginate(contributors_url)
        return [
            Contributor(
                login=item["login"],
                account_type=item.get("type", "User"),
                contributions=item.get("contributions", 0),
            )
            for item in raw
            if item.get("login")
        ]

    async def fetch_sponsorship(self, login: str) -> Sponsorship:
        """Fetch whether a user accepts sponsorship and how many sponsors they have."""
        user = await self._graphql(SPONSORSHIP_QUERY, {"login": login}, "user")
        if user is None:
            raise NotFoundError(f"GitHub: user {login} not found")
        return Sponsorship(
            has_sponsors_listing=bool(user.get("hasSponsorsListing")),
            sponsor_count=(user.get("sponsors") or {}).get("totalCount", 0),
        )
