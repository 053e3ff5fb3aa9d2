"""Cross-repository contributor leaderboard."""

from collections.abc import Iterable

from fundamental.models import ContributorRecord, UserFundingInfo


class ContributorAggregator:
    """Merges per-repository funding records keyed by GitHub login.

    Contributions are summed and ``crates`` counts the records seen for a
    login. Sponsor counts are a per-user figure, so the latest value
    replaces the previous one instead of being added.
    """

    def __init__(self) -> None:
        self._records: dict[str, ContributorRecord] = {}

    def add(self, info: UserFundingInfo) -> ContributorRecord:
        record = self._records.get(info.login)
        if record is None:
            record = ContributorRecord(
                login=info.login,
                contributions=info.contributions,
                sponsor_count=info.sponsor_count,
                crates=1,
            )
            self._records[info.login] = record
            return record

        record.contributions += info.contributions
        record.crates += 1
        record.sponsor_count = info.sponsor_count
        return record

    def add_all(self, infos: Iterable[UserFundingInfo]) -> None:
        for info in infos:
            self.add(info)

    @property
    def records(self) -> dict[str, ContributorRecord]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, login: object) -> bool:
        return login in self._records
