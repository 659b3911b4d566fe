from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .analysis_periods import RANGE_PRESETS, resolve_day, resolve_preset, resolve_range
from .analysis_render import render_report
from .analysis_run import run_report
from .analysis_write import dumps_report, write_report_files
from .config import build_config, load_config
from .models import TimeWindow


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--base", type=Path, default=None, help="Folder containing your git repos (default: ~/Documents/GitHub).")
    parser.add_argument(
        "--author",
        type=str,
        default=None,
        help="Commit author filter, an extended regex (default: git config --global user.email).",
    )
    parser.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    parser.add_argument("--no-prs", dest="include_prs", action="store_const", const=False, default=None, help="Skip PR stats via the GitHub CLI.")
    parser.add_argument("--prs", dest="include_prs", action="store_const", const=True, help="Include PR stats via the GitHub CLI (default).")
    parser.add_argument("--gh-bin", type=str, default=None, help="GitHub CLI executable (default: gh).")
    parser.add_argument("--pr-author", type=str, default=None, help="PR author for `gh search prs` (default: @me).")
    parser.add_argument("--top-repos", type=int, default=None, help="Number of top repos to display (default: 5, 0 = all).")
    parser.add_argument("--top-langs", type=int, default=None, help="Number of top languages to display (default: 6, 0 = all).")
    parser.add_argument(
        "--exclude-langs",
        type=str,
        default=None,
        help="Comma-separated language names to drop from the breakdown (case-insensitive), e.g. JSON,Markdown.",
    )
    parser.add_argument("--jobs", type=int, default=None, help="Parallel git jobs.")
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format.")
    parser.add_argument("--output-dir", type=Path, default=None, help="Also write report.json, repos.csv and languages.csv here.")
    parser.add_argument("--quiet", action="store_const", const=True, default=None, help="Suppress progress output on stderr.")


def _build_parser(mode: str = "daily") -> argparse.ArgumentParser:
    if mode == "range":
        parser = argparse.ArgumentParser(description="Developer stats aggregated over a date range across local git repos.")
        parser.add_argument(
            "--range",
            dest="range_preset",
            type=str,
            default=None,
            help=f"Preset date range: {', '.join(RANGE_PRESETS)} (or last-N).",
        )
        parser.add_argument("--from", dest="date_from", type=str, default=None, help="Start date (YYYY-MM-DD, inclusive).")
        parser.add_argument("--to", dest="date_to", type=str, default=None, help="End date (YYYY-MM-DD, inclusive).")
        parser.add_argument("--daily", dest="show_daily", action="store_const", const=True, default=None, help="Include a per-day breakdown.")
    else:
        parser = argparse.ArgumentParser(description="Daily developer stats from local git repos.")
        parser.add_argument("--when", type=str, default="today", help="Day to report on: today (default), yesterday, or YYYY-MM-DD.")
    _add_common_args(parser)
    return parser


def _overrides(args: argparse.Namespace) -> dict:
    return {
        "base": str(args.base) if args.base is not None else None,
        "author": args.author,
        "include_prs": args.include_prs,
        "gh_bin": args.gh_bin,
        "pr_author": args.pr_author,
        "top_repos": args.top_repos,
        "top_langs": args.top_langs,
        "exclude_langs": args.exclude_langs,
        "show_daily": getattr(args, "show_daily", None),
        "jobs": args.jobs,
        "quiet": args.quiet,
    }


def resolve_window(mode: str, args: argparse.Namespace) -> TimeWindow:
    if mode == "range":
        if args.range_preset:
            return resolve_preset(args.range_preset)
        if args.date_from and args.date_to:
            return resolve_range(args.date_from, args.date_to)
        raise ValueError("Specify either --range or both --from and --to (e.g. --range last-week, or --from 2026-01-13 --to 2026-01-17).")
    return resolve_day(args.when)


def main(argv: list[str], *, mode: str = "daily", prog: str | None = None) -> int:
    parser = _build_parser(mode)
    if prog:
        parser.prog = prog
    args = parser.parse_args(argv)

    try:
        config = build_config(load_config(args.config), _overrides(args))
        window = resolve_window(mode, args)
        report = run_report(config, window)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.format == "json":
        sys.stdout.write(dumps_report(report))
    else:
        sys.stdout.write(
            render_report(report, top_repos=config.top_repos, top_langs=config.top_langs, exclude_langs=config.exclude_langs)
        )

    if args.output_dir is not None:
        for path in write_report_files(args.output_dir, report):
            if not config.quiet:
                print(f"Wrote {path}", file=sys.stderr)
    return 0
