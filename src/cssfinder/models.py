from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Callable, Mapping

NamePredicate = Callable[[str], bool]
AttrPredicate = Callable[[str, str], bool]

ID_PENALTY = 0.0
ATTR_PENALTY = 0.5
CLASS_PENALTY = 1.0
TAG_PENALTY = 2.0
ANY_PENALTY = 3.0
NTH_PENALTY = 1.0


@dataclass(frozen=True, slots=True)
class Knot:
    name: str
    penalty: float
    level: int | None = None

    def at_level(self, level: int) -> Knot:
        return replace(self, level=level)


Path = tuple[Knot, ...]


class SearchLimit(str, Enum):
    ALL = "all"
    TWO = "two"
    ONE = "one"
    NONE = "none"


NEXT_LIMIT: dict[SearchLimit, SearchLimit | None] = {
    SearchLimit.ALL: SearchLimit.TWO,
    SearchLimit.TWO: SearchLimit.ONE,
    SearchLimit.ONE: SearchLimit.NONE,
    SearchLimit.NONE: None,
}


def _accept_name(_name: str) -> bool:
    return True


def _reject_attr(_name: str, _value: str) -> bool:
    return False


@dataclass(frozen=True, slots=True)
class FinderOptions:
    id_name: NamePredicate = _accept_name
    class_name: NamePredicate = _accept_name
    tag_name: NamePredicate = _accept_name
    attr: AttrPredicate = _reject_attr
    seed_min_length: int = 1
    optimized_min_length: int = 2
    threshold: int = 1000
    max_number_of_tries: int = 10000


_LIMIT_FIELDS = ("seed_min_length", "optimized_min_length", "threshold", "max_number_of_tries")
_PREDICATE_FIELDS = ("id_name", "class_name", "tag_name", "attr")


def build_options(
    options: FinderOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> FinderOptions:
    """Merge user options over the defaults.

    ``options`` may already be a ``FinderOptions`` (its values become the base)
    or a plain mapping of field names. Keyword overrides win over both. A
    ``None`` value means "keep the default".
    """
    if isinstance(options, FinderOptions):
        base = options
        merged: dict[str, Any] = {}
    else:
        base = FinderOptions()
        merged = dict(options or {})
    merged.update(overrides)

    known = {item.name for item in fields(FinderOptions)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise TypeError(f"Unknown finder option(s): {', '.join(unknown)}")

    cleaned = {key: value for key, value in merged.items() if value is not None}
    for key in _PREDICATE_FIELDS:
        if key in cleaned and not callable(cleaned[key]):
            raise TypeError(f"{key} must be callable.")
    for key in _LIMIT_FIELDS:
        if key not in cleaned:
            continue
        value = cleaned[key]
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"{key} must be a non-negative integer.")
    return replace(base, **cleaned)
