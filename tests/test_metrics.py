from __future__ import annotations

from devstats.analysis_metrics import avg_change_per_commit, churn_ratio, derive_metrics
from devstats.models import ReportTotals


def test_churn_ratio_definition() -> None:
    for added in range(0, 40):
        for deleted in range(0, 40):
            got = churn_ratio(added, deleted)
            if added == 0:
                assert got == 0.0
            else:
                assert got == round(deleted / added, 2)


def test_avg_change_per_commit() -> None:
    assert avg_change_per_commit(160, 3) == 53.3
    assert avg_change_per_commit(160, 0) == 0.0


def test_derive_metrics_single_day() -> None:
    totals = ReportTotals(repos=2, commits=3, added=120, deleted=40, files_changed=3)
    m = derive_metrics(totals)
    assert m.total_changed == 160
    assert m.net_changed == 80
    assert m.churn_ratio == 0.33
    assert m.avg_change_per_commit == 53.3
    assert m.days_in_range is None
    assert m.avg_commits_per_day is None
    assert m.avg_lines_per_day is None


def test_derive_metrics_range() -> None:
    totals = ReportTotals(repos=1, commits=7, added=300, deleted=50)
    m = derive_metrics(totals, days_in_range=5)
    assert m.days_in_range == 5
    assert m.avg_commits_per_day == 1.4
    assert m.avg_lines_per_day == 70.0


def test_derive_metrics_range_without_days() -> None:
    m = derive_metrics(ReportTotals(commits=2, added=1), days_in_range=0)
    assert m.avg_commits_per_day == 0.0
    assert m.avg_lines_per_day == 0.0


def test_derive_metrics_net_can_be_negative() -> None:
    m = derive_metrics(ReportTotals(repos=1, commits=1, added=5, deleted=20))
    assert m.net_changed == -15
    assert m.churn_ratio == 4.0
