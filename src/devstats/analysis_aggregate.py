from __future__ import annotations

import datetime as dt
from collections.abc import Iterable, Sequence
from typing import TypeVar

from .analysis_paths import language_label
from .models import DailyCount, LanguageAggregate, RankedLanguage, RankedRepo, RepoAggregate, ReportTotals

T = TypeVar("T")


def reduce_totals(aggregates: Iterable[RepoAggregate]) -> ReportTotals:
    totals = ReportTotals()
    for agg in aggregates:
        totals.add(agg)
    return totals


def rank_repos(aggregates: Sequence[RepoAggregate]) -> list[RankedRepo]:
    """
    Repos with at least one commit, by lines changed descending. `sorted` is
    stable, so equal totals keep the input (discovery) order.
    """
    active = [a for a in aggregates if a.commits > 0]
    ranked = sorted(active, key=lambda a: -a.changed)
    return [RankedRepo(name=a.repo.name, path=str(a.repo.path), commits=a.commits, changed=a.changed) for a in ranked]


def language_totals(languages: Iterable[LanguageAggregate]) -> dict[str, int]:
    """Changed lines per display label; extensions sharing a label are merged."""
    totals: dict[str, int] = {}
    for lang in languages:
        label = language_label(lang.extension)
        totals[label] = totals.get(label, 0) + int(lang.changed)
    return totals


def percentage(part: int, total: int) -> int:
    if total <= 0:
        return 0
    return int(round(100 * part / total))


def rank_languages(
    languages: Iterable[LanguageAggregate],
    *,
    exclude: Iterable[str] = (),
    top_n: int = 0,
) -> list[RankedLanguage]:
    """
    Label totals with excluded labels removed (case-insensitive). Percentages use
    the post-exclusion total. Ties on lines changed are ordered by label.
    """
    excluded = {e.strip().casefold() for e in exclude if e and e.strip()}
    totals = {label: n for label, n in language_totals(languages).items() if label.casefold() not in excluded}
    filtered_total = sum(totals.values())

    items = sorted(totals.items(), key=lambda kv: (-kv[1], kv[0].casefold(), kv[0]))
    ranked = [RankedLanguage(label=label, changed=n, percentage=percentage(n, filtered_total)) for label, n in items]
    return top(ranked, top_n)


def reduce_daily(daily: Iterable[DailyCount]) -> list[tuple[dt.date, int]]:
    by_day: dict[dt.date, int] = {}
    for d in daily:
        by_day[d.day] = by_day.get(d.day, 0) + int(d.commits)
    return sorted(by_day.items())


def top(items: Sequence[T], n: int) -> list[T]:
    if n and n > 0:
        return list(items[:n])
    return list(items)
