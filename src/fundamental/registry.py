"""crates.io registry access via the REST API."""

import asyncio
import logging
import os
import time
from typing import Optional

import httpx

from fundamental import __version__
from fundamental.errors import FetchError, NotFoundError, RateLimitedError
from fundamental.models import Dependency, RegistryPackage

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"fundamental/{__version__}"


class CratesIoClient:
    """Fetches crate metadata and dependency lists from crates.io.

    crates.io asks API consumers for at most one request per second and an
    identifying User-Agent; both are enforced here.
    """

    def __init__(
        self,
        user_agent: Optional[str] = None,
        rate_limit: float = 1.0,
        base_url: str = "https://crates.io/api/v1",
    ) -> None:
        self.user_agent = (
            user_agent
            or os.environ.get("FUNDAMENTAL_USER_AGENT")
            or DEFAULT_USER_AGENT
        )
        self.rate_limit = rate_limit
        self.base_url = base_url
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()
        self._last_request = 0.0

    # ── HTTP plumbing ─────────────────────────────────────────────────────

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "User-Agent": self.user_agent,
                    "Accept": "application/json",
                },
                timeout=30.0,
            )
        return self._client

    async def _throttle(self) -> None:
        async with self._lock:
            wait = self._last_request + self.rate_limit - time.monotonic()
            if wait > 0:
                await asyncio.sleep(wait)
            self._last_request = time.monotonic()

    async def _get_json(self, path: str) -> dict:
        """GET a registry path, translating failures into FetchError."""
        await self._throttle()
        logger.debug("GET %s", path)
        client = await self._client_instance()
        try:
            resp = await client.get(path)
        except httpx.HTTPError as e:
            raise FetchError(f"crates.io request {path} failed: {e}") from e
        if resp.status_code == 404:
            raise NotFoundError(f"crates.io: {path} not found", status_code=404)
        if resp.status_code == 429:
            raise RateLimitedError(
                "crates.io rate limit exceeded", status_code=429
            )
        if resp.is_error:
            raise FetchError(
                f"crates.io error ({resp.status_code}) on {path}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(f"crates.io returned invalid JSON for {path}") from e

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Crates ────────────────────────────────────────────────────────────

    async def fetch_package(self, name: str) -> RegistryPackage:
        """Fetch a crate's repository URL and newest version."""
        data = await self._get_json(f"/crates/{name}")
        crate = data.get("crate") or {}
        versions = data.get("versions") or []
        latest = versions[0]["num"] if versions else crate.get("max_version")
        if not latest:
            raise NotFoundError(f"crates.io: {name} has no published versions")
        return RegistryPackage(
            name=crate.get("id", name),
            repository=crate.get("repository"),
            latest_version=latest,
        )

    async def fetch_dependencies(self, name: str, version: str) -> list[Dependency]:
        """Fetch the declared dependencies of one crate version."""
        data = await self._get_json(f"/crates/{name}/{version}/dependencies")
        return [
            Dependency(name=d["crate_id"], kind=d.get("kind") or "normal")
            for d in data.get("dependencies", [])
        ]
