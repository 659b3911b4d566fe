from __future__ import annotations

import dataclasses
import datetime as dt
from pathlib import Path


@dataclasses.dataclass(frozen=True)
class TimeWindow:
    label: str
    start: dt.datetime  # inclusive
    end: dt.datetime  # inclusive
    from_date: dt.date
    to_date: dt.date
    mode: str = "daily"  # daily | range

    @property
    def since(self) -> str:
        return self.start.strftime("%Y-%m-%d %H:%M:%S")

    @property
    def until(self) -> str:
        return self.end.strftime("%Y-%m-%d %H:%M:%S")

    @property
    def days_in_range(self) -> int:
        return (self.to_date - self.from_date).days + 1

    @property
    def is_range(self) -> bool:
        return self.mode == "range"


@dataclasses.dataclass(frozen=True)
class RepoHandle:
    path: Path

    @property
    def name(self) -> str:
        return self.path.name


@dataclasses.dataclass(frozen=True)
class NumstatRecord:
    added: int | None
    deleted: int | None
    path: str

    @property
    def is_countable(self) -> bool:
        return self.added is not None and self.deleted is not None


@dataclasses.dataclass(frozen=True)
class RepoAggregate:
    repo: RepoHandle
    commits: int = 0
    added: int = 0
    deleted: int = 0
    files_changed: int = 0

    @property
    def changed(self) -> int:
        return self.added + self.deleted


@dataclasses.dataclass(frozen=True)
class LanguageAggregate:
    repo: RepoHandle
    extension: str | None  # None = file without an extension
    changed: int


@dataclasses.dataclass(frozen=True)
class DailyCount:
    day: dt.date
    repo: RepoHandle
    commits: int


@dataclasses.dataclass
class ReportTotals:
    repos: int = 0
    commits: int = 0
    added: int = 0
    deleted: int = 0
    files_changed: int = 0

    def add(self, agg: RepoAggregate) -> None:
        if agg.commits <= 0:
            return
        self.repos += 1
        self.commits += agg.commits
        self.added += agg.added
        self.deleted += agg.deleted
        self.files_changed += agg.files_changed

    @property
    def changed(self) -> int:
        return self.added + self.deleted


@dataclasses.dataclass(frozen=True)
class RankedRepo:
    name: str
    path: str
    commits: int
    changed: int


@dataclasses.dataclass(frozen=True)
class RankedLanguage:
    label: str
    changed: int
    percentage: int


@dataclasses.dataclass(frozen=True)
class DerivedMetrics:
    total_changed: int
    net_changed: int
    churn_ratio: float
    avg_change_per_commit: float
    days_in_range: int | None = None
    avg_commits_per_day: float | None = None
    avg_lines_per_day: float | None = None


@dataclasses.dataclass(frozen=True)
class PrCounts:
    status: str  # ok | disabled | unavailable
    opened: int | None = None
    merged: int | None = None

    @property
    def available(self) -> bool:
        return self.status == "ok"


@dataclasses.dataclass
class RepoScan:
    aggregate: RepoAggregate
    languages: list[LanguageAggregate] = dataclasses.field(default_factory=list)
    daily: list[DailyCount] = dataclasses.field(default_factory=list)
    error: str = ""


@dataclasses.dataclass
class Report:
    window: TimeWindow
    base: str
    author: str
    totals: ReportTotals
    repos: list[RankedRepo]
    languages: list[RankedLanguage]
    daily: list[tuple[dt.date, int]]
    metrics: DerivedMetrics
    prs: PrCounts
    errors: list[str] = dataclasses.field(default_factory=list)
    repos_scanned: int = 0

    @property
    def has_activity(self) -> bool:
        return self.totals.repos > 0
