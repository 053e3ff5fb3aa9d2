"""Ordering of funded packages and contributors for presentation."""

from collections.abc import Iterable

from fundamental.models import (
    ContributorRecord,
    PackageNode,
    SortField,
    SortOrder,
)


def rank_funded_packages(packages: Iterable[PackageNode]) -> list[PackageNode]:
    """Packages with funding links, shallowest first, ties in discovery order."""
    funded = [p for p in packages if p.funding_links]
    return sorted(funded, key=lambda p: (p.depth, p.sequence))


def rank_contributors(
    records: Iterable[ContributorRecord],
    sort_by: SortField = SortField.contributions,
    ordering: SortOrder = SortOrder.descending,
) -> list[ContributorRecord]:
    """Stable sort of contributors by contributions or sponsor count.

    Equal keys keep the order the records were first aggregated in, for
    both directions.
    """
    if sort_by == SortField.sponsors:
        key = lambda r: r.sponsor_count  # noqa: E731
    else:
        key = lambda r: r.contributions  # noqa: E731
    return sorted(records, key=key, reverse=ordering == SortOrder.descending)
