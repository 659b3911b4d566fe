from __future__ import annotations

import dataclasses
import json
import os
from collections.abc import Callable
from pathlib import Path

from .git import check_author_pattern, get_global_email
from .identity import author_pattern

DEFAULT_BASE = Path("~/Documents/GitHub")
DEFAULT_EXCLUDE_DIRNAMES = frozenset(
    {
        ".venv",
        "node_modules",
        "vendor",
        "dist",
        "build",
        "target",
        ".idea",
        ".pytest_cache",
        "__pycache__",
    }
)


def default_jobs() -> int:
    return max(1, min(8, (os.cpu_count() or 4)))


@dataclasses.dataclass(frozen=True)
class DevstatsConfig:
    """
    Everything a run needs. Defaults match the documented CLI defaults:
    top 5 repos, top 6 languages, PR lookup on via `gh`, no exclusions.
    """

    base: Path = DEFAULT_BASE
    author: str = ""
    include_prs: bool = True
    gh_bin: str = "gh"
    pr_author: str = "@me"
    top_repos: int = 5
    top_langs: int = 6
    exclude_langs: tuple[str, ...] = ()
    show_daily: bool = False
    exclude_dirnames: frozenset[str] = DEFAULT_EXCLUDE_DIRNAMES
    jobs: int = dataclasses.field(default_factory=default_jobs)
    quiet: bool = False


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise ValueError(f"Invalid config file {config_path}: {e}") from None
    if not isinstance(data, dict):
        raise ValueError(f"Invalid config file {config_path}: expected a JSON object")
    return data


def split_csv(value: object) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        values: list[object] = [value]
    elif isinstance(value, (list, tuple, set, frozenset)):
        values = list(value)
    else:
        raise ValueError(f"Expected a list or comma-separated string, got: {value!r}")
    out: list[str] = []
    for v in values:
        for part in str(v).split(","):
            part = part.strip()
            if part:
                out.append(part)
    return out


def _as_bool(key: str, value: object) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    s = str(value).strip().lower()
    if s in ("1", "true", "yes", "on"):
        return True
    if s in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Invalid {key}={value!r}: expected a boolean")


def _as_count(key: str, value: object, *, minimum: int = 0) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid {key}={value!r}: expected an integer")
    try:
        n = int(str(value).strip())
    except ValueError:
        raise ValueError(f"Invalid {key}={value!r}: expected an integer") from None
    if n < minimum:
        raise ValueError(f"Invalid {key}={n}: must be >= {minimum}")
    return n


def build_config(
    file_config: dict,
    overrides: dict | None = None,
    *,
    infer_author: Callable[[], str] = get_global_email,
    check_pattern: Callable[[str], str] = check_author_pattern,
) -> DevstatsConfig:
    """
    Merge config.json values with CLI overrides (overrides win; None means unset)
    on top of the defaults. Raises ValueError for invalid values.

    `author` is used as a regex; `author_emails` entries are matched literally.
    """
    merged: dict = {k: v for k, v in (file_config or {}).items() if v is not None}
    merged.update({k: v for k, v in (overrides or {}).items() if v is not None})

    base = Path(str(merged.get("base") or DEFAULT_BASE)).expanduser()

    author = str(merged.get("author", "") or "").strip()
    if not author:
        author = author_pattern(split_csv(merged.get("author_emails")))
    if not author:
        author = author_pattern([infer_author()])
    if not author:
        raise ValueError("Could not determine the commit author; pass --author or set `author` in config.json")
    problem = check_pattern(author)
    if problem:
        raise ValueError(f"Invalid author pattern: {author!r} ({problem})")

    exclude_dirnames = DEFAULT_EXCLUDE_DIRNAMES
    if "exclude_dirnames" in merged:
        exclude_dirnames = frozenset(split_csv(merged["exclude_dirnames"]))

    defaults = DevstatsConfig()
    return DevstatsConfig(
        base=base,
        author=author,
        include_prs=_as_bool("include_prs", merged.get("include_prs", defaults.include_prs)),
        gh_bin=str(merged.get("gh_bin") or defaults.gh_bin),
        pr_author=str(merged.get("pr_author") or defaults.pr_author),
        top_repos=_as_count("top_repos", merged.get("top_repos", defaults.top_repos)),
        top_langs=_as_count("top_langs", merged.get("top_langs", defaults.top_langs)),
        exclude_langs=tuple(split_csv(merged.get("exclude_langs"))),
        show_daily=_as_bool("show_daily", merged.get("show_daily", defaults.show_daily)),
        exclude_dirnames=exclude_dirnames,
        jobs=_as_count("jobs", merged.get("jobs", defaults.jobs), minimum=1),
        quiet=_as_bool("quiet", merged.get("quiet", defaults.quiet)),
    )
