"""CLI entry-point: ``python -m postfeed show [--toggle ID ...]``."""

from __future__ import annotations

import argparse
import sys

from postfeed.pipeline import run_show


def _non_negative_int(raw: str) -> int:
    value = int(raw)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {raw}")
    return value


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="postfeed",
        description="Posts feed with lazily loaded comment threads.",
    )
    sub = parser.add_subparsers(dest="command")

    # ── show ───────────────────────────────────────────────────────────
    show_parser = sub.add_parser("show", help="Load the feed and print it.")
    show_parser.add_argument(
        "--toggle",
        type=int,
        action="append",
        default=[],
        metavar="POST_ID",
        help="Toggle the comments of a post; repeat to toggle again (applied in order).",
    )
    show_parser.add_argument(
        "--limit",
        type=_non_negative_int,
        default=None,
        help="Only print the first N posts.",
    )

    args = parser.parse_args(argv)

    if args.command == "show":
        sys.exit(run_show(toggles=args.toggle, limit=args.limit))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
