from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Sequence

from .errors import OracleInconsistencyError
from .models import FinderOptions, Knot
from .selector import selector
from .tree import QueryTree

logger = logging.getLogger("cssfinder.oracle")


@dataclass(slots=True)
class UniquenessOracle:
    tree: QueryTree
    queries: int = 0

    def is_unique(self, path: Sequence[Knot]) -> bool:
        css = selector(path)
        self.queries += 1
        count = self.tree.count_matches(css)
        logger.debug("count_matches(%r) -> %d", css, count)
        if count == 0:
            raise OracleInconsistencyError(css)
        return count == 1

    def resolves_to(self, path: Sequence[Knot], target: Any) -> bool:
        css = selector(path)
        self.queries += 1
        first = self.tree.first_match(css)
        logger.debug("first_match(%r) -> %s", css, "none" if first is None else "element")
        return first is not None and self.tree.same_node(first, target)


@dataclass(slots=True)
class SearchContext:
    """Everything one finder call threads through search and optimization."""

    tree: QueryTree
    options: FinderOptions
    oracle: UniquenessOracle = field(init=False)

    def __post_init__(self) -> None:
        self.oracle = UniquenessOracle(self.tree)
