from __future__ import annotations

from typing import Iterable, Sequence

from .models import Knot, Path


def selector(path: Sequence[Knot]) -> str:
    """Join a target-first path into a CSS selector.

    Adjacent levels get a child combinator; a gap in levels means ancestors
    were left out, so the descendant combinator is used instead.
    """
    node = path[0]
    query = node.name
    for outer in path[1:]:
        level = outer.level or 0
        if node.level == level - 1:
            query = f"{outer.name} > {query}"
        else:
            query = f"{outer.name} {query}"
        node = outer
    return query


def penalty(path: Sequence[Knot]) -> float:
    return sum(knot.penalty for knot in path)


def sort_paths(paths: Iterable[Path]) -> list[Path]:
    return sorted(paths, key=penalty)
