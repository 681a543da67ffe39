from __future__ import annotations

from .errors import FinderError, InvalidInputError, OracleInconsistencyError, SelectorNotFoundError
from .finder import finder, synthesize
from .models import FinderOptions, Knot, SearchLimit, build_options
from .tree import LxmlTree, QueryTree

__version__ = "0.1.0"

__all__ = [
    "FinderError",
    "FinderOptions",
    "InvalidInputError",
    "Knot",
    "LxmlTree",
    "OracleInconsistencyError",
    "QueryTree",
    "SearchLimit",
    "SelectorNotFoundError",
    "build_options",
    "finder",
    "synthesize",
]
