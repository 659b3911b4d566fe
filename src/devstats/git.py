from __future__ import annotations

import datetime as dt
import os
import subprocess
import tempfile
from collections import Counter
from pathlib import Path

from .models import RepoHandle, TimeWindow


class GitQueryError(RuntimeError):
    def __init__(self, repo: Path, args: list[str], code: int, stderr: str) -> None:
        self.repo = repo
        self.code = code
        self.stderr = stderr
        detail = stderr.strip()[:500]
        super().__init__(f"git {args[0]} exited {code} in {repo}" + (f": {detail}" if detail else ""))


def run_git(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, str, str]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def discover_repos(base: Path, exclude_dirnames: set[str] | frozenset[str] = frozenset()) -> list[RepoHandle]:
    """
    Directories under `base` that directly hold a `.git` entry. The walk stops at
    a repository root, so nested repositories are never reported.
    """
    roots: list[Path] = []

    def onerror(err: OSError) -> None:
        _ = err

    for dirpath, dirnames, filenames in os.walk(base, onerror=onerror):
        if ".git" in dirnames or ".git" in filenames:
            roots.append(Path(dirpath))
            dirnames[:] = []
            continue
        dirnames[:] = sorted(d for d in dirnames if d not in exclude_dirnames)
    roots.sort(key=lambda p: p.as_posix())
    return [RepoHandle(path=p) for p in roots]


def _log(repo: Path, window: TimeWindow, author: str, extra: list[str]) -> str:
    args = [
        "log",
        f"--since={window.since}",
        f"--until={window.until}",
        f"--author={author}",
        "--extended-regexp",
        *extra,
    ]
    # keep non-ASCII file names as UTF-8 instead of C-quoted octal escapes
    code, out, err = run_git(["-c", "core.quotePath=false", *args], cwd=repo)
    if code != 0:
        raise GitQueryError(repo, args, code, err)
    return out


def commit_count(repo: Path, window: TimeWindow, author: str) -> int:
    out = _log(repo, window, author, ["--pretty=tformat:%H"])
    return sum(1 for line in out.splitlines() if line.strip())


def numstat_output(repo: Path, window: TimeWindow, author: str) -> str:
    return _log(repo, window, author, ["--pretty=tformat:", "--numstat"])


def distinct_files_changed(repo: Path, window: TimeWindow, author: str) -> int:
    out = _log(repo, window, author, ["--name-only", "--pretty=tformat:"])
    return len({line.strip() for line in out.splitlines() if line.strip()})


def commits_per_day(repo: Path, window: TimeWindow, author: str) -> dict[dt.date, int]:
    out = _log(repo, window, author, ["--pretty=tformat:%ad", "--date=short"])
    counts: Counter[dt.date] = Counter()
    for line in out.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            counts[dt.date.fromisoformat(line)] += 1
        except ValueError:
            continue
    return dict(counts)


def check_author_pattern(pattern: str) -> str:
    """
    Compile `pattern` with git's own extended-regex engine (the one `git log
    --author --extended-regexp` uses). Returns git's complaint, or "" when the
    pattern is accepted or git cannot be run.
    """
    with tempfile.TemporaryDirectory() as tmp:
        Path(tmp, "empty").touch()
        try:
            code, _, err = run_git(["grep", "--no-index", "--extended-regexp", "-e", pattern, "--", "empty"], cwd=Path(tmp), timeout_s=30)
        except (OSError, subprocess.SubprocessError):
            return ""
    # 0 = match, 1 = no match; anything else means the pattern was rejected
    if code in (0, 1):
        return ""
    return err.strip().splitlines()[-1] if err.strip() else f"git grep exited {code}"


def get_global_email() -> str:
    try:
        code, out, _ = run_git(["config", "--global", "--get", "user.email"], cwd=Path.cwd())
    except (OSError, subprocess.SubprocessError):
        return ""
    if code == 0:
        return out.strip()
    return ""
