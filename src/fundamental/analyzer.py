"""End-to-end funding inspection.

Orchestrates the crates.io crawl, GitHub funding resolution, contributor
aggregation and ranking to produce a complete FundingReport.
"""

import logging
from typing import Callable, Optional

from fundamental.aggregator import ContributorAggregator
from fundamental.config import resolve_token
from fundamental.crawler import DependencyCrawler
from fundamental.fetcher import GitHubFetcher
from fundamental.models import FundingReport, RunConfig
from fundamental.ranker import rank_contributors, rank_funded_packages
from fundamental.registry import CratesIoClient
from fundamental.resolver import FundingResolver

logger = logging.getLogger(__name__)


class Analyzer:
    """Runs crawl → resolve → aggregate → rank for one root package."""

    def __init__(
        self,
        token: Optional[str] = None,
        on_status: Optional[Callable[[str], None]] = None,
        registry: Optional[CratesIoClient] = None,
        fetcher: Optional[GitHubFetcher] = None,
    ) -> None:
        self.token = token or resolve_token()
        self._on_status = on_status or (lambda _: None)
        self._registry = registry or CratesIoClient()
        self._fetcher = fetcher or GitHubFetcher(token=self.token)

    # ── Status helper ─────────────────────────────────────────────────────

    def _status(self, msg: str) -> None:
        self._on_status(msg)

    async def close(self) -> None:
        """Tear down resources."""
        await self._registry.close()
        await self._fetcher.close()

    # ── Full inspection ───────────────────────────────────────────────────

    async def inspect(self, config: RunConfig) -> FundingReport:
        """Run the entire inspection pipeline."""
        # 1. Crawl the dependency graph
        self._status(f"Crawling dependencies of {config.package} …")
        crawler = DependencyCrawler(
            self._registry,
            include_dev=config.include_dev,
            max_depth=config.max_depth,
            strategy=config.strategy,
            on_status=self._status,
        )
        state = await crawler.crawl(config.package)

        # 2. Resolve funding and aggregate contributors
        self._status(f"Resolving funding for {len(state.packages)} packages …")
        aggregator = ContributorAggregator()
        resolver = FundingResolver(
            self._fetcher,
            aggregator,
            lookup_concurrency=config.lookup_concurrency,
            on_status=self._status,
        )
        await resolver.resolve(state.packages.values())

        # 3. Rank
        self._status("Ranking results …")
        report = FundingReport(
            root=config.package,
            packages=state.packages,
            funded_packages=rank_funded_packages(state.packages.values()),
            contributors=rank_contributors(
                aggregator.records.values(),
                sort_by=config.sort_by,
                ordering=config.effective_ordering,
            ),
            crawl_failures=state.failures,
            skipped=resolver.skipped,
        )
        logger.info(
            "Inspection of %s done: %d funded packages, %d fundable contributors",
            config.package,
            len(report.funded_packages),
            len(report.contributors),
        )
        return report
