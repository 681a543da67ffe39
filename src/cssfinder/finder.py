from __future__ import annotations

import logging
from typing import Any, Mapping

from .errors import InvalidInputError
from .models import FinderOptions, build_options
from .optimizer import optimize
from .oracle import SearchContext
from .search import search
from .selector import selector, sort_paths
from .tree import QueryTree

logger = logging.getLogger("cssfinder.finder")


def finder(
    target: Any,
    tree: QueryTree,
    options: FinderOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> str:
    """Return the lowest-penalty CSS selector matching only ``target``.

    Raises ``InvalidInputError`` for non-element targets and
    ``SelectorNotFoundError`` when even the all-wildcard search fails.
    """
    if not tree.is_element(target):
        raise InvalidInputError("Can't generate CSS selector for non-element node type.")
    if tree.is_root(target):
        return tree.tag_name(target)

    context = SearchContext(tree=tree, options=build_options(options, **overrides))
    path = search(target, context)
    optimized = sort_paths(optimize(path, target, context))
    if optimized:
        path = optimized[0]
    result = selector(path)
    logger.debug("Selector %r found with %d tree queries.", result, context.oracle.queries)
    return result


synthesize = finder
