"""memo-cli — submit a memo to Grafana from the command line.

Tags always include ``memo``, ``user:<unix-username>`` and ``host:<hostname>``.
"""

import argparse
import asyncio
import getpass
import os
import socket
import sys
import time
from datetime import datetime, timezone
from typing import List, Optional

from chatmemo.adapters.storage.grafana_store import GrafanaStore
from chatmemo.config import AppConfig
from chatmemo.domain.errors import MemoError
from chatmemo.domain.memo_parser import MemoParser
from chatmemo.domain.models import Memo
from chatmemo.domain.tags import build_tags

DEFAULT_ENV_FILE = "~/.memo.env"


def _csv_list(value: str) -> List[str]:
    """Split a comma-separated option, trimming spaces and dropping empties."""
    return [part.strip() for part in value.split(",") if part.strip()]


def _fail(msg: str) -> int:
    print(msg, file=sys.stderr)
    return 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="memo-cli", description="Submit a memo as a Grafana annotation.")
    parser.add_argument("--msg", default="", help="message to submit")
    parser.add_argument(
        "--tags",
        type=_csv_list,
        default=[],
        help="one or more comma-separated tags to submit, in addition to 'memo', 'user:<unix-username>' and 'host:<hostname>'",
    )
    parser.add_argument("--ts", type=int, default=None, help="unix timestamp. defaults to 'now'")
    parser.add_argument(
        "--parse",
        action="store_true",
        help="read a leading offset/timestamp and trailing key:value tags from the message, like the chat bots do",
    )
    parser.add_argument("--env-file", default=DEFAULT_ENV_FILE, help="config file location")
    return parser


def build_memo(args: argparse.Namespace, user: str, host: str) -> Memo:
    """Build the memo described by the command line. Raises MemoError."""
    base = ["memo", f"user:{user}", f"host:{host}"]
    if args.parse:
        memo = MemoParser().parse_body(args.msg, base)
        memo.tags = build_tags(memo.tags, args.tags)
        if args.ts is not None:
            memo.timestamp = datetime.fromtimestamp(args.ts, tz=timezone.utc)
        return memo

    ts = args.ts if args.ts is not None else int(time.time())
    return Memo(
        timestamp=datetime.fromtimestamp(ts, tz=timezone.utc),
        description=args.msg.strip(),
        tags=build_tags(base, args.tags),
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    if not args.msg.strip():
        return _fail("message cannot be empty")

    env_file = os.path.expanduser(args.env_file)
    if args.env_file != DEFAULT_ENV_FILE and not os.path.exists(env_file):
        return _fail(f"Invalid config file {args.env_file!r}: no such file")
    config = AppConfig.from_env(env_file if os.path.exists(env_file) else None)

    store = GrafanaStore.from_config(config.grafana)
    if not store.is_configured:
        return _fail("failed to create Grafana store: GRAFANA_API_KEY and GRAFANA_API_URL must be set")

    try:
        memo = build_memo(args, getpass.getuser(), socket.gethostname())
    except MemoError as e:
        return _fail(f"invalid memo: {e}")

    result = asyncio.run(store.save(memo))
    if not result.success:
        return _fail(f"failed to save memo in store: {result.error}")

    print("memo saved")
    return 0


if __name__ == "__main__":
    sys.exit(main())
