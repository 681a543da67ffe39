from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from cssselect import SelectorError

from .errors import FinderError
from .finder import finder
from .models import FinderOptions, build_options
from .rules import stable_options
from .tree import LxmlTree


def _build_logger(verbose: bool, log_file: Path | None) -> logging.Logger:
    logger = logging.getLogger("cssfinder")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if logger.handlers:
        return logger

    logger.propagate = False
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(message)s")
    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
            return logger
        except OSError:
            pass
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    return logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cssfinder",
        description="Print the shortest unique CSS selector for elements of an HTML file.",
    )
    parser.add_argument("file", type=Path, help="HTML file to read")
    parser.add_argument("-s", "--select", help="CSS selector picking the target element(s)")
    parser.add_argument("--all", action="store_true", help="generate a selector for every element")
    parser.add_argument("--within", help="CSS selector of an element to scope queries to")
    parser.add_argument("--stable", action="store_true", help="skip generated ids and classes, allow data-test attributes")
    parser.add_argument("--threshold", type=int, help="combination count before narrowing the search")
    parser.add_argument("--max-tries", type=int, dest="max_number_of_tries", help="optimization attempt budget")
    parser.add_argument("-v", "--verbose", action="store_true", help="log search progress")
    parser.add_argument("--log-file", type=Path, help="write logs to this file instead of stderr")
    return parser


def _options_from_args(args: argparse.Namespace) -> FinderOptions:
    overrides = {"threshold": args.threshold, "max_number_of_tries": args.max_number_of_tries}
    if args.stable:
        return stable_options(**overrides)
    return build_options(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.select and not args.all:
        parser.error("pass --select CSS or --all")

    logger = _build_logger(args.verbose, args.log_file)
    try:
        tree = LxmlTree.from_html(args.file.read_bytes())
    except OSError as exc:
        print(f"cssfinder: cannot read {args.file}: {exc}", file=sys.stderr)
        return 2

    try:
        options = _options_from_args(args)
        if args.within:
            scopes = tree.root.cssselect(args.within)
            if not scopes:
                print(f"cssfinder: nothing matches {args.within!r}", file=sys.stderr)
                return 1
            tree = tree.scoped(scopes[0])
        if args.all:
            targets = list(tree.elements())
        else:
            targets = [node for node in tree.root.cssselect(args.select) if tree.in_scope(node)]
    except (SelectorError, TypeError, ValueError) as exc:
        print(f"cssfinder: {exc}", file=sys.stderr)
        return 2

    if not targets:
        print(f"cssfinder: nothing matches {args.select!r}", file=sys.stderr)
        return 1

    for target in targets:
        try:
            print(finder(target, tree, options))
        except FinderError as exc:
            logger.error("Selector generation failed for <%s>: %s", tree.tag_name(target), exc)
            print(f"cssfinder: {exc}", file=sys.stderr)
            return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
