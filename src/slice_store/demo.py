#!/usr/bin/env python3
"""Slice Store Demo Driver

Loads partitions into an in-memory column store and runs one batch of
slice requests against it, printing each request's columns.

Usage:
    slice-demo --partition Partition1 --names Partition1:a,b --range Partition1:a:z:3
    slice-demo --data partitions.toml --range Partition1:z:a:3:reversed
"""

from __future__ import annotations

import argparse
import logging
import string
import sys
import tomllib
from pathlib import Path
from typing import Any

from .components.column_store import SimpleColumnStore
from .core.config import SliceQueryConfig
from .core.errors import InvalidPredicateError
from .core.executor import BatchSliceExecutor
from .core.predicates import KeyPredicate

logger = logging.getLogger(__name__)

RequestSpec = tuple[str, bytes, list[str]]


def parse_names_spec(text: str) -> RequestSpec:
    """Parse ``KEY:name1,name2``."""
    key, sep, names = text.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected KEY:name[,name...], got {text!r}")
    return ("names", key.encode(), [n for n in names.split(",") if n])


def parse_range_spec(text: str) -> RequestSpec:
    """Parse ``KEY:START:FINISH:COUNT[:reversed]``."""
    parts = text.split(":")
    if len(parts) not in (4, 5) or (len(parts) == 5 and parts[4] != "reversed"):
        raise argparse.ArgumentTypeError(
            f"expected KEY:START:FINISH:COUNT[:reversed], got {text!r}"
        )
    return ("range", parts[0].encode(), parts[1:])


def build_request(spec: RequestSpec) -> KeyPredicate:
    kind, key, args = spec
    if kind == "names":
        return KeyPredicate.for_columns(key, *(name.encode() for name in args))
    start, finish, count = args[0], args[1], args[2]
    try:
        count_value = int(count)
    except ValueError as e:
        raise InvalidPredicateError(f"range count must be an integer, got {count!r}") from e
    return KeyPredicate.for_range(
        key, start.encode(), finish.encode(), count_value, reversed=len(args) == 4
    )


def load_partitions(path: Path) -> dict[str, dict[str, Any]]:
    """Load ``[partitions.<key>]`` tables of name = value pairs from TOML."""
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    partitions = data.get("partitions", {})
    if not isinstance(partitions, dict):
        raise ValueError(f"{path}: [partitions] must be a table")
    for key, columns in partitions.items():
        if not isinstance(columns, dict):
            raise ValueError(f"{path}: partitions.{key} must be a table of name = value pairs")
    return partitions


def populate_store(store: SimpleColumnStore, args: argparse.Namespace) -> None:
    for key in args.partition or []:
        for ch in string.ascii_lowercase:
            store.insert(key.encode(), ch.encode(), b"")

    if args.data:
        for key, columns in load_partitions(Path(args.data)).items():
            for name, value in columns.items():
                store.insert(key.encode(), name.encode(), str(value).encode())

    logger.info(f"Loaded {len(store)} partitions")


def format_request(request: KeyPredicate) -> str:
    predicate = request.predicate
    if predicate.column_names is not None:
        body = "names(" + ",".join(n.decode(errors="replace") for n in predicate.column_names) + ")"
    else:
        r = predicate.slice_range
        body = (
            f"range({r.start.decode(errors='replace')}..{r.finish.decode(errors='replace')}, "
            f"count={r.count}{', reversed' if r.reversed else ''})"
        )
    return f"{request.key.decode(errors='replace')} {body}"


def run_demo(args: argparse.Namespace) -> int:
    """Run the batch described by ``args`` and print the results."""
    try:
        requests = [build_request(spec) for spec in args.requests or []]
    except InvalidPredicateError as e:
        print(f"Invalid request: {e}", file=sys.stderr)
        return 2

    store = SimpleColumnStore()
    try:
        populate_store(store, args)
    except (OSError, ValueError) as e:
        print(f"Invalid data: {e}", file=sys.stderr)
        return 2

    config = SliceQueryConfig(
        dedupe_fetches=not args.no_dedupe,
        fetch_workers=args.fetch_workers,
    )
    result = BatchSliceExecutor(store, config).execute(requests)

    print(f"Batch of {len(requests)} requests -> {len(result)} results")
    for slice_result in result.results():
        names = " ".join(c.name.decode(errors="replace") for c in slice_result.columns)
        print(f"  [{slice_result.handle}] {format_request(slice_result.request)} -> {names or '(empty)'}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Run a batch of slice requests against an in-memory store")
    ap.add_argument("--partition", action="append", help="Partition key to fill with columns a..z")
    ap.add_argument("--data", type=str, help="TOML file with [partitions.<key>] tables")
    ap.add_argument("--names", dest="requests", action="append", type=parse_names_spec,
                    metavar="KEY:NAMES", help="Names request, e.g. P1:a,b")
    ap.add_argument("--range", dest="requests", action="append", type=parse_range_spec,
                    metavar="KEY:START:FINISH:COUNT[:reversed]", help="Range request, e.g. P1:a:z:3")
    ap.add_argument("--no-dedupe", action="store_true", help="Fetch each request's partition separately")
    ap.add_argument("--fetch-workers", type=int, default=1)
    ap.add_argument("--log-level", type=str, default="WARNING")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.getLevelName(args.log_level.upper())
    if not isinstance(level, int):
        print(f"Unknown --log-level {args.log_level!r}", file=sys.stderr)
        return 2
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    if args.fetch_workers < 1:
        print("--fetch-workers must be >= 1", file=sys.stderr)
        return 2
    return run_demo(args)


if __name__ == "__main__":
    sys.exit(main())
