from __future__ import annotations

import sys
from concurrent.futures import ThreadPoolExecutor, as_completed

from .analysis_aggregate import rank_languages, rank_repos, reduce_daily, reduce_totals
from .analysis_metrics import derive_metrics
from .analysis_prs import lookup_prs
from .analysis_repo import scan_repo
from .config import DevstatsConfig
from .git import discover_repos
from .models import PrCounts, RepoHandle, RepoScan, Report, TimeWindow


def _status(config: DevstatsConfig, msg: str) -> None:
    if not config.quiet:
        print(msg, file=sys.stderr)


def scan_repos(config: DevstatsConfig, repos: list[RepoHandle], window: TimeWindow) -> list[RepoScan]:
    """Scan every repo (in parallel when jobs > 1); results come back in discovery order."""
    with_daily = bool(config.show_daily and window.is_range)
    scans: list[RepoScan | None] = [None] * len(repos)
    if config.jobs <= 1 or len(repos) <= 1:
        for i, repo in enumerate(repos):
            scans[i] = scan_repo(repo, window, config.author, with_daily=with_daily)
    else:
        with ThreadPoolExecutor(max_workers=config.jobs) as ex:
            futs = {ex.submit(scan_repo, repo, window, config.author, with_daily=with_daily): i for i, repo in enumerate(repos)}
            for done, fut in enumerate(as_completed(futs), start=1):
                scans[futs[fut]] = fut.result()
                if done % 10 == 0 or done == len(futs):
                    _status(config, f"Analyzed {done}/{len(futs)} repos...")
    return [s for s in scans if s is not None]


def build_report(
    config: DevstatsConfig,
    window: TimeWindow,
    scans: list[RepoScan],
    prs: PrCounts,
) -> Report:
    aggregates = [s.aggregate for s in scans]
    languages = [lang for s in scans for lang in s.languages]
    daily = [d for s in scans for d in s.daily]

    totals = reduce_totals(aggregates)
    metrics = derive_metrics(totals, window.days_in_range if window.is_range else None)
    return Report(
        window=window,
        base=str(config.base),
        author=config.author,
        totals=totals,
        repos=rank_repos(aggregates),
        languages=rank_languages(languages, exclude=config.exclude_langs),
        daily=reduce_daily(daily),
        metrics=metrics,
        prs=prs,
        errors=[s.error for s in scans if s.error],
        repos_scanned=len(scans),
    )


def run_report(config: DevstatsConfig, window: TimeWindow) -> Report:
    base = config.base
    if not base.is_dir():
        raise ValueError(f"Base directory does not exist: {base}")

    _status(config, f"Scanning for git repos under: {base}")
    repos = discover_repos(base, config.exclude_dirnames)
    _status(config, f"Found {len(repos)} repos; collecting {window.label} ({window.since} -> {window.until}).")

    scans = scan_repos(config, repos, window)
    if any(s.aggregate.commits > 0 for s in scans):
        prs = lookup_prs(window, enabled=config.include_prs, gh_bin=config.gh_bin, author=config.pr_author)
    else:
        prs = PrCounts(status="disabled")
    return build_report(config, window, scans, prs)
