from __future__ import annotations

from typing import Any

from .escaping import attribute_selector, class_selector, id_selector, nth_child
from .models import (
    ANY_PENALTY,
    ATTR_PENALTY,
    CLASS_PENALTY,
    ID_PENALTY,
    NTH_PENALTY,
    TAG_PENALTY,
    FinderOptions,
    Knot,
    SearchLimit,
)
from .tree import QueryTree

ROOT_TAG = "html"


def id_knot(tree: QueryTree, node: Any, options: FinderOptions) -> Knot | None:
    element_id = tree.id_attribute(node)
    if element_id and options.id_name(element_id):
        return Knot(id_selector(element_id), ID_PENALTY)
    return None


def attr_knots(tree: QueryTree, node: Any, options: FinderOptions) -> list[Knot]:
    return [
        Knot(attribute_selector(name, value), ATTR_PENALTY)
        for name, value in tree.attributes(node)
        if options.attr(name, value)
    ]


def class_knots(tree: QueryTree, node: Any, options: FinderOptions) -> list[Knot]:
    return [
        Knot(class_selector(name), CLASS_PENALTY)
        for name in tree.class_names(node)
        if options.class_name(name)
    ]


def tag_knot(tree: QueryTree, node: Any, options: FinderOptions) -> Knot | None:
    name = tree.tag_name(node)
    if options.tag_name(name):
        return Knot(name, TAG_PENALTY)
    return None


def any_knot() -> Knot:
    return Knot("*", ANY_PENALTY)


def nth_child_knot(knot: Knot, position: int) -> Knot:
    return Knot(nth_child(knot.name, position), knot.penalty + NTH_PENALTY, knot.level)


def is_dispensable_nth(knot: Knot) -> bool:
    return knot.name != ROOT_TAG and not knot.name.startswith("#")


def base_knots(tree: QueryTree, node: Any, options: FinderOptions) -> list[Knot]:
    """First non-empty category of id, attributes, classes, tag; else ``*``."""
    element_id = id_knot(tree, node, options)
    if element_id is not None:
        return [element_id]
    attrs = attr_knots(tree, node, options)
    if attrs:
        return attrs
    classes = class_knots(tree, node, options)
    if classes:
        return classes
    tag = tag_knot(tree, node, options)
    if tag is not None:
        return [tag]
    return [any_knot()]


def build_level(
    tree: QueryTree,
    node: Any,
    position: int | None,
    limit: SearchLimit,
    options: FinderOptions,
) -> list[Knot]:
    if limit is SearchLimit.NONE:
        wildcard = any_knot()
        return [nth_child_knot(wildcard, position)] if position else [wildcard]

    level = base_knots(tree, node, options)
    if limit is SearchLimit.ALL:
        if position:
            level = level + [nth_child_knot(knot, position) for knot in level if is_dispensable_nth(knot)]
    elif limit is SearchLimit.TWO:
        level = level[:1]
        if position:
            level = level + [nth_child_knot(knot, position) for knot in level if is_dispensable_nth(knot)]
    elif limit is SearchLimit.ONE:
        level = level[:1]
        if position and is_dispensable_nth(level[0]):
            level = [nth_child_knot(level[0], position)]
    return level
