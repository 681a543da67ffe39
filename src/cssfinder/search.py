from __future__ import annotations

import itertools
import logging
from typing import Any, Iterator, Sequence

from .candidates import build_level
from .errors import SelectorNotFoundError
from .models import NEXT_LIMIT, Knot, Path, SearchLimit
from .oracle import SearchContext
from .selector import sort_paths

logger = logging.getLogger("cssfinder.search")


class ThresholdExceeded(Exception):
    """Raised when a stack yields more combinations than the threshold allows."""

    def __init__(self, threshold: int) -> None:
        super().__init__(f"more than {threshold} candidate paths")
        self.threshold = threshold


def combinations(stack: Sequence[Sequence[Knot]]) -> Iterator[Path]:
    """Lazily yield one knot per level, target level as the slowest digit."""
    return itertools.product(*stack)


def find_unique_path(stack: Sequence[Sequence[Knot]], context: SearchContext) -> Path | None:
    threshold = context.options.threshold
    pulled = list(itertools.islice(combinations(stack), threshold + 1))
    if len(pulled) > threshold:
        raise ThresholdExceeded(threshold)
    for candidate in sort_paths(pulled):
        if context.oracle.is_unique(candidate):
            return candidate
    return None


def bottom_up_search(target: Any, limit: SearchLimit, context: SearchContext) -> Path | None:
    """Walk from ``target`` to the root under one search limit.

    Raises ``ThresholdExceeded`` as soon as the accumulated levels describe
    too many paths; the caller decides what to fall back to.
    """
    tree = context.tree
    path: Path | None = None
    stack: list[list[Knot]] = []
    current = target
    depth = 0
    while current is not None:
        position = tree.sibling_position(current)
        level = [knot.at_level(depth) for knot in build_level(tree, current, position, limit, context.options)]
        stack.append(level)
        if len(stack) >= context.options.seed_min_length:
            path = find_unique_path(stack, context)
            if path is not None:
                break
        current = tree.parent(current)
        depth += 1

    if path is None:
        path = find_unique_path(stack, context)
    return path


def search(target: Any, context: SearchContext, limit: SearchLimit = SearchLimit.ALL) -> Path:
    current: SearchLimit | None = limit
    while current is not None:
        try:
            path = bottom_up_search(target, current, context)
        except ThresholdExceeded as exc:
            logger.debug("Search limit %s abandoned: %s", current.value, exc)
            path = None
        if path is not None:
            logger.debug("Search limit %s found a unique path of %d knot(s).", current.value, len(path))
            return path
        current = NEXT_LIMIT[current]
        if current is not None:
            logger.debug("Falling back to search limit %s.", current.value)
    raise SelectorNotFoundError("Selector was not found.")
