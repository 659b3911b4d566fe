from __future__ import annotations

import datetime as dt
import re

from .models import TimeWindow

_ISO_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_LAST_N_RE = re.compile(r"^last-([0-9]+)$")

RANGE_PRESETS = ("last-week", "this-week", "weekend", "last-weekend", "last-7", "last-14", "last-30", "mtd", "ytd")

_DAY_START = dt.time(0, 0, 0)
_DAY_END = dt.time(23, 59, 59)


def parse_iso_date(value: str, *, field: str = "date") -> dt.date:
    s = (value or "").strip()
    if not _ISO_DATE_RE.match(s):
        raise ValueError(f"Invalid {field}={value!r}. Use YYYY-MM-DD format.")
    try:
        return dt.date.fromisoformat(s)
    except ValueError:
        raise ValueError(f"Invalid {field}={value!r}. Not a calendar date.") from None


def _window(label: str, from_date: dt.date, to_date: dt.date, *, mode: str, end: dt.datetime | None = None) -> TimeWindow:
    if from_date > to_date:
        raise ValueError(f"Invalid range: {from_date.isoformat()} is after {to_date.isoformat()}")
    start = dt.datetime.combine(from_date, _DAY_START)
    if end is None:
        end = dt.datetime.combine(to_date, _DAY_END)
    return TimeWindow(label=label, start=start, end=end, from_date=from_date, to_date=to_date, mode=mode)


def resolve_day(selector: str, *, now: dt.datetime | None = None) -> TimeWindow:
    """Single-day window for `today`, `yesterday` or an explicit YYYY-MM-DD."""
    if now is None:
        now = dt.datetime.now()
    s = (selector or "today").strip().lower()
    if s == "today":
        day = now.date()
        return _window(day.isoformat(), day, day, mode="daily", end=now.replace(microsecond=0))
    if s == "yesterday":
        day = now.date() - dt.timedelta(days=1)
        return _window(day.isoformat(), day, day, mode="daily")
    if _ISO_DATE_RE.match(s):
        day = parse_iso_date(s, field="when")
        return _window(day.isoformat(), day, day, mode="daily")
    raise ValueError(f"Invalid when={selector!r}. Use: today | yesterday | YYYY-MM-DD")


def resolve_range(from_value: str, to_value: str) -> TimeWindow:
    from_date = parse_iso_date(from_value, field="from")
    to_date = parse_iso_date(to_value, field="to")
    return _window(f"{from_date.isoformat()} to {to_date.isoformat()}", from_date, to_date, mode="range")


def _current_weekend(today: dt.date) -> tuple[dt.date, dt.date, bool]:
    dow = today.isoweekday()  # Monday=1 .. Sunday=7
    if dow == 6:
        return today, today + dt.timedelta(days=1), True
    if dow == 7:
        return today - dt.timedelta(days=1), today, True
    saturday = today - dt.timedelta(days=dow + 1)
    return saturday, saturday + dt.timedelta(days=1), False


def resolve_preset(name: str, *, today: dt.date | None = None) -> TimeWindow:
    if today is None:
        today = dt.date.today()
    preset = (name or "").strip().lower()
    dow = today.isoweekday()
    monday = today - dt.timedelta(days=dow - 1)

    if preset == "last-week":
        start = monday - dt.timedelta(days=7)
        return _window("Last Week", start, start + dt.timedelta(days=6), mode="range")
    if preset == "this-week":
        return _window("This Week", monday, today, mode="range")
    if preset == "weekend":
        saturday, sunday, in_progress = _current_weekend(today)
        return _window("This Weekend" if in_progress else "Last Weekend", saturday, sunday, mode="range")
    if preset == "last-weekend":
        saturday, sunday, _ = _current_weekend(today)
        week = dt.timedelta(days=7)
        return _window("Last Weekend", saturday - week, sunday - week, mode="range")
    if preset == "mtd":
        return _window("Month to Date", today.replace(day=1), today, mode="range")
    if preset == "ytd":
        return _window("Year to Date", today.replace(month=1, day=1), today, mode="range")

    m = _LAST_N_RE.match(preset)
    if m:
        days = int(m.group(1))
        if days >= 1:
            return _window(f"Last {days} Days", today - dt.timedelta(days=days - 1), today, mode="range")

    raise ValueError(f"Unknown range={name!r}. Valid options: {', '.join(RANGE_PRESETS)} (or last-N)")
