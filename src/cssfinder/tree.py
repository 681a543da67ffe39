from __future__ import annotations

from typing import Any, Iterable, Protocol

from lxml import etree, html
from lxml.cssselect import CSSSelector


class QueryTree(Protocol):
    """Navigation, introspection and query access to one document.

    Nodes are whatever the backing library hands out; the finder only passes
    them back into the tree that produced them.

    ``sibling_position`` counts among the parent *element*'s children, so the
    document element has no position. ``count_matches`` and ``first_match``
    see only the tree's query scope.
    """

    def is_element(self, node: Any) -> bool: ...

    def is_root(self, node: Any) -> bool: ...

    def parent(self, node: Any) -> Any | None: ...

    def sibling_position(self, node: Any) -> int | None: ...

    def tag_name(self, node: Any) -> str: ...

    def id_attribute(self, node: Any) -> str | None: ...

    def class_names(self, node: Any) -> list[str]: ...

    def attributes(self, node: Any) -> list[tuple[str, str]]: ...

    def count_matches(self, query: str) -> int: ...

    def first_match(self, query: str) -> Any | None: ...

    def same_node(self, left: Any, right: Any) -> bool: ...


def _is_lxml_element(node: Any) -> bool:
    # Comments and processing instructions carry a callable tag.
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


class LxmlTree:
    """``QueryTree`` over an lxml document, queried through cssselect.

    ``scope`` limits query results to descendants of one element, like
    ``Element.querySelectorAll``: selectors still match against the whole
    document, but matches outside the scope (and the scope itself) are dropped.
    """

    def __init__(
        self,
        document: etree._Element | etree._ElementTree,
        scope: etree._Element | None = None,
    ) -> None:
        if isinstance(document, etree._ElementTree):
            document = document.getroot()
        self.root: etree._Element = document
        self.scope = scope
        self._compiled: dict[str, CSSSelector] = {}

    @classmethod
    def from_html(cls, markup: str | bytes) -> LxmlTree:
        return cls(html.document_fromstring(markup))

    def scoped(self, scope: etree._Element | None) -> LxmlTree:
        """Same document, queries limited to descendants of ``scope``."""
        tree = LxmlTree(self.root, scope)
        tree._compiled = self._compiled
        return tree

    def elements(self) -> Iterable[etree._Element]:
        nodes = self.root.iter() if self.scope is None else self.scope.iterdescendants()
        return (node for node in nodes if _is_lxml_element(node))

    def is_element(self, node: Any) -> bool:
        return _is_lxml_element(node)

    def is_root(self, node: etree._Element) -> bool:
        return node.getparent() is None

    def parent(self, node: etree._Element) -> etree._Element | None:
        return node.getparent()

    def sibling_position(self, node: etree._Element) -> int | None:
        parent = node.getparent()
        if parent is None:
            return None
        position = 0
        for child in parent:
            if _is_lxml_element(child):
                position += 1
            if child is node:
                return position
        return None

    def tag_name(self, node: etree._Element) -> str:
        return etree.QName(node).localname.lower()

    def id_attribute(self, node: etree._Element) -> str | None:
        return node.get("id")

    def class_names(self, node: etree._Element) -> list[str]:
        return (node.get("class") or "").split()

    def attributes(self, node: etree._Element) -> list[tuple[str, str]]:
        return [(str(name), str(value)) for name, value in node.items()]

    def count_matches(self, query: str) -> int:
        return len(self._select(query))

    def first_match(self, query: str) -> etree._Element | None:
        matches = self._select(query)
        return matches[0] if matches else None

    def same_node(self, left: Any, right: Any) -> bool:
        return left is right

    def _select(self, query: str) -> list[etree._Element]:
        compiled = self._compiled.get(query)
        if compiled is None:
            compiled = CSSSelector(query, translator="html")
            self._compiled[query] = compiled
        matches = compiled(self.root)
        if self.scope is None:
            return matches
        return [node for node in matches if self.in_scope(node)]

    def in_scope(self, node: etree._Element) -> bool:
        if self.scope is None:
            return True
        return any(ancestor is self.scope for ancestor in node.iterancestors())
