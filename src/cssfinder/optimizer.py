from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Iterator

from .models import Path
from .oracle import SearchContext
from .selector import selector

logger = logging.getLogger("cssfinder.optimizer")


@dataclass(slots=True)
class OptimizeScope:
    counter: int = 0
    visited: set[str] = field(default_factory=set)


def optimize(
    path: Path,
    target: Any,
    context: SearchContext,
    scope: OptimizeScope | None = None,
) -> Iterator[Path]:
    """Yield shorter paths that still select exactly ``target``.

    Interior knots are dropped one at a time; every survivor is re-checked
    against the tree before it is yielded and then shortened further.
    """
    if scope is None:
        scope = OptimizeScope()
    options = context.options
    if len(path) <= 2 or len(path) <= options.optimized_min_length:
        return

    for index in range(1, len(path) - 1):
        if scope.counter > options.max_number_of_tries:
            logger.debug("Optimization stopped after %d attempts.", scope.counter)
            return
        scope.counter += 1
        shorter = path[:index] + path[index + 1 :]
        key = selector(shorter)
        if key in scope.visited:
            return
        if context.oracle.is_unique(shorter) and context.oracle.resolves_to(shorter, target):
            yield shorter
            scope.visited.add(key)
            yield from optimize(shorter, target, context, scope)
