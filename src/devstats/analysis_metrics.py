from __future__ import annotations

from .models import DerivedMetrics, ReportTotals


def churn_ratio(added: int, deleted: int) -> float:
    if added <= 0:
        return 0.0
    return round(deleted / added, 2)


def avg_change_per_commit(total_changed: int, commits: int) -> float:
    if commits <= 0:
        return 0.0
    return round(total_changed / commits, 1)


def derive_metrics(totals: ReportTotals, days_in_range: int | None = None) -> DerivedMetrics:
    total_changed = totals.added + totals.deleted
    net_changed = totals.added - totals.deleted

    avg_commits_per_day: float | None = None
    avg_lines_per_day: float | None = None
    if days_in_range is not None:
        if days_in_range > 0:
            avg_commits_per_day = round(totals.commits / days_in_range, 1)
            avg_lines_per_day = float(round(total_changed / days_in_range))
        else:
            avg_commits_per_day = 0.0
            avg_lines_per_day = 0.0

    return DerivedMetrics(
        total_changed=total_changed,
        net_changed=net_changed,
        churn_ratio=churn_ratio(totals.added, totals.deleted),
        avg_change_per_commit=avg_change_per_commit(total_changed, totals.commits),
        days_in_range=days_in_range,
        avg_commits_per_day=avg_commits_per_day,
        avg_lines_per_day=avg_lines_per_day,
    )
