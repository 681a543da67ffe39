from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from playwright.sync_api import ElementHandle, Page

_IS_ELEMENT_JS = "(el) => !!el && el.nodeType === Node.ELEMENT_NODE"
_IS_ROOT_JS = "(el) => el === el.ownerDocument.documentElement"
_PARENT_JS = "(el) => el.parentElement"
_TAG_NAME_JS = "(el) => el.tagName.toLowerCase()"
_CLASS_NAMES_JS = "(el) => Array.from(el.classList || [])"
_ATTRIBUTES_JS = "(el) => Array.from(el.attributes).map((attr) => [attr.name, attr.value])"
_SIBLING_POSITION_JS = """
(el) => {
  const parent = el.parentElement;
  if (!parent) {
    return null;
  }
  let position = 0;
  for (let child = parent.firstElementChild; child; child = child.nextElementSibling) {
    position += 1;
    if (child === el) {
      return position;
    }
  }
  return null;
}
"""
_SCOPED_COUNT_JS = "(scope, query) => scope.querySelectorAll(query).length"
_SCOPED_FIRST_JS = "(scope, query) => scope.querySelector(query)"
_SAME_NODE_JS = "([left, right]) => left === right"


class PlaywrightTree:
    """``QueryTree`` over a live page; nodes are ``ElementHandle`` objects.

    With ``scope`` set, queries run through ``scope.querySelectorAll`` and only
    see descendants of that element, while selectors still match against the
    whole document.
    """

    def __init__(self, page: Page, scope: ElementHandle | None = None) -> None:
        self.page = page
        self.scope = scope

    def is_element(self, node: Any) -> bool:
        if node is None or not hasattr(node, "evaluate"):
            return False
        return bool(node.evaluate(_IS_ELEMENT_JS))

    def is_root(self, node: ElementHandle) -> bool:
        return bool(node.evaluate(_IS_ROOT_JS))

    def parent(self, node: ElementHandle) -> ElementHandle | None:
        handle = node.evaluate_handle(_PARENT_JS)
        element = handle.as_element()
        if element is None:
            handle.dispose()
        return element

    def sibling_position(self, node: ElementHandle) -> int | None:
        position = node.evaluate(_SIBLING_POSITION_JS)
        return int(position) if position else None

    def tag_name(self, node: ElementHandle) -> str:
        return str(node.evaluate(_TAG_NAME_JS))

    def id_attribute(self, node: ElementHandle) -> str | None:
        return node.get_attribute("id")

    def class_names(self, node: ElementHandle) -> list[str]:
        return [str(name) for name in node.evaluate(_CLASS_NAMES_JS) or []]

    def attributes(self, node: ElementHandle) -> list[tuple[str, str]]:
        return [(str(name), str(value)) for name, value in node.evaluate(_ATTRIBUTES_JS) or []]

    def count_matches(self, query: str) -> int:
        # Counting in-page keeps the search from creating one handle per match.
        if self.scope is not None:
            return int(self.scope.evaluate(_SCOPED_COUNT_JS, query))
        return self.page.locator(query).count()

    def first_match(self, query: str) -> ElementHandle | None:
        if self.scope is None:
            return self.page.query_selector(query)
        handle = self.scope.evaluate_handle(_SCOPED_FIRST_JS, query)
        element = handle.as_element()
        if element is None:
            handle.dispose()
        return element

    def same_node(self, left: Any, right: Any) -> bool:
        if left is None or right is None:
            return False
        if left is right:
            return True
        return bool(self.page.evaluate(_SAME_NODE_JS, [left, right]))
