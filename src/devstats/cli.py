from __future__ import annotations

import sys

from . import analysis_cli


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if argv and argv[0] in ("-h", "--help"):
        p = analysis_cli._build_parser("daily")
        p.prog = "devstats"
        p.print_help()
        print("")
        print("commands:")
        print("  daily   Stats for a single day (default when no command is given).")
        print("  range   Stats aggregated over a date range or preset (last-week, weekend, mtd, ...).")
        print("")
        print("Run `devstats <command> --help` for command-specific options.")
        return 0
    if argv and argv[0] == "range":
        return analysis_cli.main(argv[1:], mode="range", prog="devstats range")
    if argv and argv[0] == "daily":
        return analysis_cli.main(argv[1:], mode="daily", prog="devstats daily")
    return analysis_cli.main(argv, mode="daily", prog="devstats")


if __name__ == "__main__":
    raise SystemExit(main())
