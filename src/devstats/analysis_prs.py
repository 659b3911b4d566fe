from __future__ import annotations

import json
import shutil
import subprocess

from .models import PrCounts, TimeWindow

PR_SEARCH_LIMIT = 300


def date_qualifier(window: TimeWindow) -> str:
    if window.from_date == window.to_date:
        return window.from_date.isoformat()
    return f"{window.from_date.isoformat()}..{window.to_date.isoformat()}"


def _search_prs(gh_bin: str, author: str, field: str, qualifier: str, timeout_s: int) -> int | None:
    cmd = [
        gh_bin,
        "search",
        "prs",
        "--author",
        author,
        f"--{field}",
        qualifier,
        "--json",
        "number",
        "--limit",
        str(PR_SEARCH_LIMIT),
    ]
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout_s)
    except (OSError, subprocess.SubprocessError):
        return None
    if proc.returncode != 0:
        return None
    try:
        data = json.loads(proc.stdout or "[]")
    except ValueError:
        return None
    if not isinstance(data, list):
        return None
    return len(data)


def lookup_prs(
    window: TimeWindow,
    *,
    enabled: bool,
    gh_bin: str = "gh",
    author: str = "@me",
    timeout_s: int = 60,
) -> PrCounts:
    """PRs created and merged in the window via `gh search prs`. Never raises."""
    if not enabled:
        return PrCounts(status="disabled")
    if shutil.which(gh_bin) is None:
        return PrCounts(status="unavailable")

    qualifier = date_qualifier(window)
    opened = _search_prs(gh_bin, author, "created", qualifier, timeout_s)
    merged = _search_prs(gh_bin, author, "merged", qualifier, timeout_s)
    if opened is None or merged is None:
        return PrCounts(status="unavailable")
    return PrCounts(status="ok", opened=opened, merged=merged)
