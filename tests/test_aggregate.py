from __future__ import annotations

import datetime as dt
import itertools
from pathlib import Path

from devstats.analysis_aggregate import (
    language_totals,
    percentage,
    rank_languages,
    rank_repos,
    reduce_daily,
    reduce_totals,
    top,
)
from devstats.models import DailyCount, LanguageAggregate, RepoAggregate, RepoHandle


def _repo(name: str) -> RepoHandle:
    return RepoHandle(path=Path("/src") / name)


def _aggs() -> list[RepoAggregate]:
    return [
        RepoAggregate(repo=_repo("a"), commits=2, added=80, deleted=10, files_changed=2),
        RepoAggregate(repo=_repo("b"), commits=1, added=40, deleted=30, files_changed=1),
        RepoAggregate(repo=_repo("c"), commits=0),
    ]


def test_reduce_totals_skips_repos_without_commits() -> None:
    totals = reduce_totals(_aggs())
    assert totals.repos == 2
    assert totals.commits == 3
    assert totals.added == 120
    assert totals.deleted == 40
    assert totals.files_changed == 3
    assert totals.changed == 160


def test_reduce_totals_is_order_independent() -> None:
    expected = reduce_totals(_aggs())
    for perm in itertools.permutations(_aggs()):
        assert reduce_totals(perm) == expected


def test_language_totals_are_order_independent() -> None:
    langs = [
        LanguageAggregate(repo=_repo("a"), extension="ts", changed=90),
        LanguageAggregate(repo=_repo("b"), extension="md", changed=70),
        LanguageAggregate(repo=_repo("b"), extension="ts", changed=5),
    ]
    expected = language_totals(langs)
    assert expected == {"TypeScript": 95, "Markdown": 70}
    for perm in itertools.permutations(langs):
        assert language_totals(perm) == expected
        assert rank_languages(perm) == rank_languages(langs)


def test_rank_repos_by_changed_lines_with_discovery_order_ties() -> None:
    aggs = [
        RepoAggregate(repo=_repo("first"), commits=1, added=5, deleted=5),
        RepoAggregate(repo=_repo("big"), commits=1, added=100, deleted=0),
        RepoAggregate(repo=_repo("second"), commits=3, added=10, deleted=0),
        RepoAggregate(repo=_repo("idle"), commits=0),
    ]
    ranked = rank_repos(aggs)
    assert [r.name for r in ranked] == ["big", "first", "second"]
    assert ranked[0].changed == 100
    assert ranked[2].commits == 3
    assert rank_repos(aggs) == ranked


def test_rank_languages_exclusion_uses_filtered_denominator() -> None:
    langs = [
        LanguageAggregate(repo=_repo("r"), extension="aaa", changed=70),
        LanguageAggregate(repo=_repo("r"), extension="bbb", changed=20),
        LanguageAggregate(repo=_repo("r"), extension="ccc", changed=10),
    ]
    ranked = rank_languages(langs, exclude=["ccc"])
    assert [(r.label, r.percentage) for r in ranked] == [("AAA", 78), ("BBB", 22)]

    unfiltered = rank_languages(langs)
    assert [(r.label, r.percentage) for r in unfiltered] == [("AAA", 70), ("BBB", 20), ("CCC", 10)]


def test_rank_languages_exclusion_is_case_insensitive_on_labels() -> None:
    langs = [
        LanguageAggregate(repo=_repo("r"), extension="json", changed=50),
        LanguageAggregate(repo=_repo("r"), extension="py", changed=50),
    ]
    ranked = rank_languages(langs, exclude=[" json ", ""])
    assert [(r.label, r.changed, r.percentage) for r in ranked] == [("Python", 50, 100)]


def test_rank_languages_merges_extensions_sharing_a_label() -> None:
    langs = [
        LanguageAggregate(repo=_repo("a"), extension="yml", changed=30),
        LanguageAggregate(repo=_repo("b"), extension="yaml", changed=10),
    ]
    ranked = rank_languages(langs)
    assert len(ranked) == 1
    assert ranked[0].label == "YAML"
    assert ranked[0].changed == 40
    assert ranked[0].percentage == 100


def test_rank_languages_ties_are_ordered_by_label_and_truncated() -> None:
    langs = [
        LanguageAggregate(repo=_repo("r"), extension="rs", changed=10),
        LanguageAggregate(repo=_repo("r"), extension="go", changed=10),
        LanguageAggregate(repo=_repo("r"), extension="c", changed=10),
        LanguageAggregate(repo=_repo("r"), extension=None, changed=1),
    ]
    ranked = rank_languages(langs)
    assert [r.label for r in ranked] == ["C", "Go", "Rust", "(no extension)"]
    assert [r.label for r in rank_languages(langs, top_n=2)] == ["C", "Go"]


def test_rank_languages_zero_total_has_zero_percentages() -> None:
    langs = [LanguageAggregate(repo=_repo("r"), extension="py", changed=0)]
    ranked = rank_languages(langs)
    assert [(r.label, r.percentage) for r in ranked] == [("Python", 0)]
    assert rank_languages([]) == []
    assert rank_languages(langs, exclude=["python"]) == []


def test_percentage() -> None:
    assert percentage(70, 90) == 78
    assert percentage(20, 90) == 22
    assert percentage(5, 0) == 0
    assert percentage(1, 3) == 33


def test_reduce_daily_sums_across_repos() -> None:
    d1 = dt.date(2026, 1, 13)
    d2 = dt.date(2026, 1, 14)
    daily = [
        DailyCount(day=d2, repo=_repo("a"), commits=2),
        DailyCount(day=d1, repo=_repo("a"), commits=1),
        DailyCount(day=d2, repo=_repo("b"), commits=3),
    ]
    assert reduce_daily(daily) == [(d1, 1), (d2, 5)]


def test_top() -> None:
    assert top([1, 2, 3], 0) == [1, 2, 3]
    assert top([1, 2, 3], 2) == [1, 2]
    assert top([1, 2, 3], 10) == [1, 2, 3]
