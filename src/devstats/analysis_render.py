from __future__ import annotations

from .analysis_aggregate import top
from .models import PrCounts, Report


def fmt_int(n: int) -> str:
    return f"{int(n):,}"


def trunc(s: str, max_len: int) -> str:
    if len(s) <= max_len:
        return s
    if max_len <= 1:
        return s[:max_len]
    return s[: max_len - 1] + "…"


def fmt_prs(prs: PrCounts) -> str:
    if prs.available:
        return f"opened={fmt_int(prs.opened or 0)}, merged={fmt_int(prs.merged or 0)}"
    if prs.status == "disabled":
        return "opened=(skipped), merged=(skipped)"
    return "opened=(unavailable), merged=(unavailable)"


def render_no_activity(report: Report) -> str:
    return f"No commits found for {report.window.label} (author: {report.author}) under {report.base}"


def render_report(report: Report, *, top_repos: int = 5, top_langs: int = 6, exclude_langs: tuple[str, ...] = ()) -> str:
    if not report.has_activity:
        lines = [render_no_activity(report)]
        lines.extend(_render_errors(report))
        return "\n".join(lines) + "\n"

    w = report.window
    t = report.totals
    m = report.metrics
    lines: list[str] = [""]
    if w.is_range:
        lines.append(f"=== {w.label} ===")
        lines.append(f"Period: {w.from_date.isoformat()} to {w.to_date.isoformat()} ({m.days_in_range} days)")
        lines.append("")
    else:
        lines.append(f"Date: {w.from_date.isoformat()}")

    lines.append(f"Repos worked on: {fmt_int(t.repos)}")
    lines.append(f"Commits: {fmt_int(t.commits)}")
    lines.append(
        f"Code: +{fmt_int(t.added)} / -{fmt_int(t.deleted)} | net: {fmt_int(m.net_changed)} | total changed: {fmt_int(m.total_changed)}"
    )
    lines.append(f"Files changed: {fmt_int(t.files_changed)}")
    lines.append(f"Churn ratio (deleted/added): {m.churn_ratio:.2f}")
    if w.is_range:
        lines.append("")
        lines.append("Averages:")
        lines.append(f"  Per commit: {m.avg_change_per_commit:.1f} lines")
        lines.append(f"  Per day: {m.avg_commits_per_day or 0.0:.1f} commits, {m.avg_lines_per_day or 0.0:.0f} lines")
        lines.append("")
    else:
        lines.append(f"Avg lines changed/commit: {m.avg_change_per_commit:.1f}")
    lines.append(f"PRs: {fmt_prs(report.prs)}")
    lines.append("")

    lines.append("Repos (all):" if top_repos <= 0 else f"Repos (top {top_repos}):")
    for r in top(report.repos, top_repos):
        lines.append(f" - {trunc(r.name, 48)}: {fmt_int(r.commits)} commits, {fmt_int(r.changed)} lines changed")

    if report.languages:
        lines.append("")
        if top_langs <= 0:
            header = "Language breakdown (by lines changed"
        else:
            header = f"Language breakdown (top {top_langs}"
        if exclude_langs:
            header += f", excluding: {', '.join(exclude_langs)}"
        lines.append(header + "):")
        for lang in top(report.languages, top_langs):
            lines.append(f" - {lang.label}: {lang.percentage}%")

    if report.daily:
        lines.append("")
        lines.append("Daily breakdown:")
        for day, commits in report.daily:
            lines.append(f"  {day.isoformat()}: {fmt_int(commits)} commits")

    lines.extend(_render_errors(report))
    return "\n".join(lines) + "\n"


def _render_errors(report: Report) -> list[str]:
    if not report.errors:
        return []
    lines = ["", f"Warning: skipped {len(report.errors)} repo(s) that could not be read:"]
    for err in report.errors:
        lines.append(f" - {trunc(err.splitlines()[0] if err else err, 120)}")
    return lines
