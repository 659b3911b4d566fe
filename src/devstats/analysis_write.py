from __future__ import annotations

import csv
import dataclasses
import datetime as dt
import json
from pathlib import Path

from .models import Report


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _json_default(value: object) -> object:
    if isinstance(value, (dt.datetime, dt.date)):
        return value.isoformat()
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def report_to_dict(report: Report) -> dict:
    data = dataclasses.asdict(report)
    w = report.window
    data["window"] = {
        "label": w.label,
        "mode": w.mode,
        "from_date": w.from_date.isoformat(),
        "to_date": w.to_date.isoformat(),
        "since": w.since,
        "until": w.until,
        "days_in_range": w.days_in_range,
    }
    data["daily"] = [{"day": day.isoformat(), "commits": n} for day, n in report.daily]
    data["has_activity"] = report.has_activity
    return data


def dumps_report(report: Report) -> str:
    return json.dumps(report_to_dict(report), indent=2, sort_keys=False, default=_json_default) + "\n"


def write_json(path: Path, data: object) -> None:
    ensure_dir(path.parent)
    path.write_text(json.dumps(data, indent=2, sort_keys=False, default=_json_default) + "\n", encoding="utf-8")


def write_repos_csv(path: Path, report: Report) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["repo", "path", "commits", "changed"])
        for r in report.repos:
            writer.writerow([r.name, r.path, int(r.commits), int(r.changed)])


def write_languages_csv(path: Path, report: Report) -> None:
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["language", "changed", "percentage"])
        for lang in report.languages:
            writer.writerow([lang.label, int(lang.changed), int(lang.percentage)])


def write_report_files(out_dir: Path, report: Report) -> list[Path]:
    """Write report.json, repos.csv and languages.csv into `out_dir`."""
    ensure_dir(out_dir)
    json_path = out_dir / "report.json"
    repos_path = out_dir / "repos.csv"
    langs_path = out_dir / "languages.csv"
    write_json(json_path, report_to_dict(report))
    write_repos_csv(repos_path, report)
    write_languages_csv(langs_path, report)
    return [json_path, repos_path, langs_path]
