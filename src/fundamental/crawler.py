"""Depth-bounded crawl of the crates.io dependency graph."""

import logging
from collections import deque
from typing import Callable, Optional

from fundamental.errors import FetchError
from fundamental.models import (
    DEFAULT_MAX_DEPTH,
    CrawlStrategy,
    PackageNode,
)

logger = logging.getLogger(__name__)


class CrawlState:
    """Frontier and results of a single crawl.

    ``pending`` mirrors the names currently in ``frontier`` so membership
    checks stay O(1). A name is in at most one of ``pending`` and
    ``packages`` at any time.
    """

    def __init__(self, root: str) -> None:
        self.root = root
        self.frontier: deque[tuple[str, int]] = deque()
        self.pending: set[str] = set()
        self.packages: dict[str, PackageNode] = {}
        self.failures: dict[str, str] = {}
        self.enqueue(root, 0)

    def enqueue(self, name: str, depth: int) -> bool:
        """Queue a package unless it is already resolved or pending."""
        if name in self.packages or name in self.pending:
            return False
        self.frontier.append((name, depth))
        self.pending.add(name)
        return True

    def pop(self, strategy: CrawlStrategy) -> tuple[str, int]:
        if strategy == CrawlStrategy.fifo:
            name, depth = self.frontier.popleft()
        else:
            name, depth = self.frontier.pop()
        self.pending.discard(name)
        return name, depth

    def record(self, name: str, repository: Optional[str], depth: int) -> PackageNode:
        """Insert a crawled package; the first recorded depth is kept."""
        node = self.packages.get(name)
        if node is None:
            node = PackageNode(
                name=name,
                repository=repository,
                depth=depth,
                sequence=len(self.packages),
            )
            self.packages[name] = node
            self.failures.pop(name, None)
        return node

    def __bool__(self) -> bool:
        return bool(self.frontier)


class DependencyCrawler:
    """Walks a package's transitive dependencies up to ``max_depth`` edges.

    ``registry`` is anything with the ``CratesIoClient`` coroutines
    ``fetch_package(name)`` and ``fetch_dependencies(name, version)``.
    """

    def __init__(
        self,
        registry,
        include_dev: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH,
        strategy: CrawlStrategy = CrawlStrategy.lifo,
        on_status: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.registry = registry
        self.include_dev = include_dev
        self.max_depth = max_depth
        self.strategy = strategy
        self._on_status = on_status or (lambda _: None)

    async def _fetch(self, name: str) -> tuple[Optional[str], list[str]]:
        """Return a package's repository URL and its child package names."""
        package = await self.registry.fetch_package(name)
        dependencies = await self.registry.fetch_dependencies(
            name, package.latest_version
        )
        children = [
            d.name for d in dependencies if self.include_dev or not d.is_dev
        ]
        return package.repository, children

    async def crawl(self, root: str) -> CrawlState:
        """Crawl from ``root`` and return the finished state."""
        state = CrawlState(root)

        while state:
            name, depth = state.pop(self.strategy)
            self._on_status(f"Crawling {name} (depth {depth}) …")
            logger.info("Processing %s at depth %d", name, depth)
            try:
                repository, children = await self._fetch(name)
            except FetchError as e:
                logger.error("Error on %s: %s", name, e)
                state.failures[name] = str(e)
                continue

            state.record(name, repository, depth)
            if depth < self.max_depth:
                for child in children:
                    state.enqueue(child, depth + 1)
            logger.debug("Pending queue: %s", list(state.frontier))

        logger.info(
            "Crawl of %s finished: %d packages, %d failures",
            root,
            len(state.packages),
            len(state.failures),
        )
        return state
