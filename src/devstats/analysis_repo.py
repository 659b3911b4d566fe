from __future__ import annotations

import subprocess

from .analysis_paths import extension_for_path, normalize_numstat_path
from .git import GitQueryError, commit_count, commits_per_day, distinct_files_changed, numstat_output
from .models import DailyCount, LanguageAggregate, NumstatRecord, RepoAggregate, RepoHandle, RepoScan, TimeWindow


def _parse_count(value: str) -> int | None:
    s = value.strip()
    if not s or not s.isascii() or not s.isdigit():
        return None
    return int(s)


def parse_numstat_line(line: str) -> NumstatRecord | None:
    parts = line.rstrip("\n").split("\t", 2)
    if len(parts) < 3:
        return None
    path = normalize_numstat_path(parts[2])
    if not path:
        return None
    # binary files are reported as "-\t-\tpath"
    return NumstatRecord(added=_parse_count(parts[0]), deleted=_parse_count(parts[1]), path=path)


def parse_numstat(text: str) -> list[NumstatRecord]:
    records: list[NumstatRecord] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        rec = parse_numstat_line(line)
        if rec is not None:
            records.append(rec)
    return records


def aggregate_numstat(
    repo: RepoHandle,
    commits: int,
    records: list[NumstatRecord],
    files_changed: int,
) -> tuple[RepoAggregate, list[LanguageAggregate]]:
    added = 0
    deleted = 0
    by_ext: dict[str | None, int] = {}
    for rec in records:
        if not rec.is_countable:
            continue
        added += rec.added
        deleted += rec.deleted
        ext = extension_for_path(rec.path)
        by_ext[ext] = by_ext.get(ext, 0) + rec.added + rec.deleted

    agg = RepoAggregate(repo=repo, commits=commits, added=added, deleted=deleted, files_changed=files_changed)
    langs = [LanguageAggregate(repo=repo, extension=ext, changed=changed) for ext, changed in by_ext.items()]
    return agg, langs


def scan_repo(repo: RepoHandle, window: TimeWindow, author: str, *, with_daily: bool = False) -> RepoScan:
    """
    Query one repository for the window. Any failure counts as zero matching
    commits; the error text is kept on the result.
    """
    empty = RepoScan(aggregate=RepoAggregate(repo=repo))
    try:
        commits = commit_count(repo.path, window, author)
        if commits <= 0:
            return empty
        records = parse_numstat(numstat_output(repo.path, window, author))
        files_changed = distinct_files_changed(repo.path, window, author)
        daily: list[DailyCount] = []
        if with_daily:
            per_day = commits_per_day(repo.path, window, author)
            daily = [DailyCount(day=day, repo=repo, commits=n) for day, n in sorted(per_day.items())]
    except GitQueryError as e:
        empty.error = f"{repo.name}: {e}"
        return empty
    except (OSError, subprocess.SubprocessError) as e:
        empty.error = f"{repo.name}: failed to run git: {e}"
        return empty

    agg, langs = aggregate_numstat(repo, commits, records, files_changed)
    return RepoScan(aggregate=agg, languages=langs, daily=daily)
