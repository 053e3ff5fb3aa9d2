"""Data models for fundamental."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


# ── Registry data ─────────────────────────────────────────────────────────

class RegistryPackage(BaseModel):
    """Metadata for one crate as reported by the registry."""

    name: str
    repository: Optional[str] = None
    latest_version: str


class Dependency(BaseModel):
    """One declared dependency of a crate version."""

    name: str
    kind: str = "normal"  # "normal", "dev", "build"

    @property
    def is_dev(self) -> bool:
        return self.kind == "dev"


# ── Crawl results ─────────────────────────────────────────────────────────

class PackageNode(BaseModel):
    """A crate reached during the crawl."""

    name: str
    repository: Optional[str] = None
    depth: int = Field(default=0, ge=0)
    sequence: int = 0  # discovery order, stable tie-break for ranking
    funding_links: list[str] = Field(default_factory=list)


class RepoLocation(BaseModel):
    """Owner/name pair extracted from a repository URL."""

    url: str
    owner: Optional[str] = None
    name: Optional[str] = None

    @property
    def has_owner(self) -> bool:
        return bool(self.owner) and bool(self.name)

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"


# ── Hosting data ──────────────────────────────────────────────────────────

class Contributor(BaseModel):
    """A repository contributor as listed by GitHub."""

    login: str
    account_type: str = "User"  # "User", "Bot", "Organization"
    contributions: int = 0

    @property
    def is_individual(self) -> bool:
        return self.account_type == "User"


class Sponsorship(BaseModel):
    """GitHub Sponsors status of a single user."""

    has_sponsors_listing: bool = False
    sponsor_count: int = 0


class UserFundingInfo(BaseModel):
    """A sponsorable contributor as seen on one repository."""

    login: str
    sponsor_count: int = 0
    contributions: int = 0
    crates: int = 1


class RepoFundingInfo(BaseModel):
    """Funding data gathered for one repository."""

    owner: str
    name: str
    funding_links: list[str] = Field(default_factory=list)
    fundable_users: list[UserFundingInfo] = Field(default_factory=list)


# ── Aggregation ───────────────────────────────────────────────────────────

class ContributorRecord(BaseModel):
    """Cross-repository funding view of one contributor."""

    login: str
    contributions: int = 0
    sponsor_count: int = 0
    crates: int = 1

    @property
    def sponsors_url(self) -> str:
        return f"https://github.com/sponsors/{self.login}"


# ── Configuration ─────────────────────────────────────────────────────────

class SortField(str, Enum):
    """Key used to rank contributors."""

    contributions = "contributions"
    sponsors = "sponsors"


class SortOrder(str, Enum):
    """Direction of the contributor ranking."""

    ascending = "ascending"
    descending = "descending"


class CrawlStrategy(str, Enum):
    """Which end of the frontier the crawler takes work from."""

    lifo = "lifo"  # depth-first-ish, the historical default
    fifo = "fifo"  # breadth-first, yields shortest-path depths


DEFAULT_MAX_DEPTH = 1000


class RunConfig(BaseModel):
    """Options for one crawl/resolve/rank run."""

    package: str = Field(min_length=1)
    include_dev: bool = False
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0)
    sort_by: SortField = SortField.contributions
    ordering: Optional[SortOrder] = None
    strategy: CrawlStrategy = CrawlStrategy.lifo
    lookup_concurrency: int = Field(default=4, ge=1)

    @property
    def effective_ordering(self) -> SortOrder:
        """Explicit ordering, or the default for the chosen sort field.

        Contributions rank highest first; sponsors rank lowest first so
        that under-sponsored people surface at the top.
        """
        if self.ordering is not None:
            return self.ordering
        if self.sort_by == SortField.sponsors:
            return SortOrder.ascending
        return SortOrder.descending


# ── Report ────────────────────────────────────────────────────────────────

class SkipReason(str, Enum):
    """Why a package was left out of funding resolution."""

    fetch = "fetch"  # network / API failure
    data = "data"  # repository URL with no usable owner/name


class SkippedPackage(BaseModel):
    """A package whose repository could not be resolved."""

    package: str
    reason: SkipReason
    message: str = ""


class FundingReport(BaseModel):
    """Complete result of a funding inspection."""

    root: str
    generated_at: datetime = Field(default_factory=datetime.now)
    packages: dict[str, PackageNode] = Field(default_factory=dict)
    funded_packages: list[PackageNode] = Field(default_factory=list)
    contributors: list[ContributorRecord] = Field(default_factory=list)
    crawl_failures: dict[str, str] = Field(default_factory=dict)
    skipped: list[SkippedPackage] = Field(default_factory=list)

    @property
    def total_packages(self) -> int:
        return len(self.packages)

    @property
    def problem_count(self) -> int:
        return len(self.crawl_failures) + len(self.skipped)
