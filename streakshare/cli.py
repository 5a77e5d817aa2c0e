"""
Command line entry point: parse a share text without the web server.
"""

import argparse
import json
import sys
from typing import List, Optional

from streakshare.main import configure_logging
from streakshare.telegram.ux import supported_games_text


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", type=str, default=None, help="Override LOG_LEVEL (e.g. DEBUG)")

    parser = argparse.ArgumentParser(prog="streakshare", description="Parse shared puzzle results")
    sub = parser.add_subparsers(dest="command", required=True)

    parse = sub.add_parser("parse", parents=[common], help="Parse one share text and print the record")
    parse.add_argument("text", nargs="?", default=None, help="Share text (read from stdin when omitted)")
    parse.add_argument("--publish", action="store_true", help="Also publish the record to the share store")

    sub.add_parser("games", parents=[common], help="List the supported games")
    return parser


def _run_parse(text: str, publish: bool) -> int:
    if publish:
        from streakshare.ingest import ingest_share

        outcome, error = ingest_share(text)
        if error:
            print(f"Could not save result: {error}", file=sys.stderr)
            return 1
    else:
        from streakshare.parser_engine.router import parse_shared_text

        outcome = parse_shared_text(text)

    if not outcome.ok:
        print(outcome.message, file=sys.stderr)
        return 1

    print(json.dumps(outcome.result.to_dict(), ensure_ascii=False, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "games":
        print(supported_games_text())
        return 0

    text = args.text if args.text is not None else sys.stdin.read()
    if not text.strip():
        print("No content", file=sys.stderr)
        return 1
    return _run_parse(text, args.publish)


if __name__ == "__main__":
    sys.exit(main())
