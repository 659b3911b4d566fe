from __future__ import annotations

import json
from pathlib import Path

from devstats.analysis_periods import resolve_day, resolve_range
from devstats.analysis_prs import date_qualifier, lookup_prs


def _fake_gh(tmp_path: Path, body: list[str]) -> Path:
    fake = tmp_path / "gh"
    fake.write_text(
        "\n".join(
            [
                "#!/usr/bin/env python3",
                "import json",
                "import sys",
                "",
                "def main() -> int:",
                *body,
                "",
                "if __name__ == '__main__':",
                "    raise SystemExit(main())",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    fake.chmod(0o755)
    return fake


def test_date_qualifier() -> None:
    assert date_qualifier(resolve_day("2026-01-15")) == "2026-01-15"
    assert date_qualifier(resolve_range("2026-01-13", "2026-01-17")) == "2026-01-13..2026-01-17"


def test_lookup_prs_disabled() -> None:
    prs = lookup_prs(resolve_day("2026-01-15"), enabled=False)
    assert prs.status == "disabled"
    assert prs.opened is None
    assert not prs.available


def test_lookup_prs_counts_created_and_merged(tmp_path: Path) -> None:
    log_path = tmp_path / "calls.jsonl"
    gh = _fake_gh(
        tmp_path,
        [
            f"    with open({str(log_path)!r}, 'a') as f:",
            "        f.write(json.dumps(sys.argv[1:]) + '\\n')",
            "    if '--created' in sys.argv:",
            "        print(json.dumps([{'number': 1}, {'number': 2}, {'number': 3}]))",
            "    else:",
            "        print(json.dumps([{'number': 2}]))",
            "    return 0",
        ],
    )

    prs = lookup_prs(resolve_range("2026-01-13", "2026-01-17"), enabled=True, gh_bin=str(gh), author="octocat")
    assert prs.status == "ok"
    assert (prs.opened, prs.merged) == (3, 1)

    calls = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert calls[0][:4] == ["search", "prs", "--author", "octocat"]
    assert calls[0][4:6] == ["--created", "2026-01-13..2026-01-17"]
    assert calls[1][4:6] == ["--merged", "2026-01-13..2026-01-17"]
    assert "--json" in calls[0]


def test_lookup_prs_missing_binary_is_unavailable(tmp_path: Path) -> None:
    prs = lookup_prs(resolve_day("2026-01-15"), enabled=True, gh_bin=str(tmp_path / "no-such-gh"))
    assert prs.status == "unavailable"


def test_lookup_prs_failure_is_unavailable(tmp_path: Path) -> None:
    gh = _fake_gh(tmp_path, ["    sys.stderr.write('gh: To get started with GitHub CLI, please run: gh auth login\\n')", "    return 4"])
    prs = lookup_prs(resolve_day("2026-01-15"), enabled=True, gh_bin=str(gh))
    assert prs.status == "unavailable"
    assert prs.opened is None


def test_lookup_prs_bad_json_is_unavailable(tmp_path: Path) -> None:
    gh = _fake_gh(tmp_path, ["    print('not json')", "    return 0"])
    prs = lookup_prs(resolve_day("2026-01-15"), enabled=True, gh_bin=str(gh))
    assert prs.status == "unavailable"
