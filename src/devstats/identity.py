from __future__ import annotations

# characters with special meaning in a POSIX extended regex
_ERE_SPECIAL = set(".[]()*+?{}|^$\\")


def ere_escape(s: str) -> str:
    return "".join("\\" + ch if ch in _ERE_SPECIAL else ch for ch in s)


def author_pattern(emails: list[str]) -> str:
    """
    Build a `git log --author` extended regex matching any of the given emails
    literally, e.g. ["me@work.com", "1+me@users.noreply.github.com"] ->
    "(me@work\\.com|1\\+me@users\\.noreply\\.github\\.com)".
    """
    items = [ere_escape(str(i).strip()) for i in emails if str(i).strip()]
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return "(" + "|".join(items) + ")"
