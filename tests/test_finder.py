import pytest

from cssfinder import (
    InvalidInputError,
    LxmlTree,
    OracleInconsistencyError,
    SelectorNotFoundError,
    finder,
    synthesize,
)

PAGE = """
<html><head><title>Shop</title></head><body>
<header class="top"><nav><a href="/" class="link">Home</a><a href="/a" class="link">A</a></nav></header>
<main id="content">
  <ul class="list"><li class="item">1</li><li class="item">2</li><li class="item active">3</li></ul>
  <form><input name="q" type="text"><button type="submit">Go</button></form>
  <p>text <b>bold</b> <!-- note --> <i>it</i></p>
  <div><div><div><span>deep</span></div></div></div>
</main>
<footer><p>foot</p><p>bar</p></footer>
</body></html>
"""


class RecordingTree(LxmlTree):
    def __init__(self, document) -> None:
        super().__init__(document)
        self.queries: list[str] = []

    def count_matches(self, query: str) -> int:
        self.queries.append(query)
        return super().count_matches(query)

    def first_match(self, query: str):
        self.queries.append(query)
        return super().first_match(query)


class BrokenTree(LxmlTree):
    def count_matches(self, query: str) -> int:
        return 0


def test_every_element_gets_a_unique_selector_that_resolves_to_it() -> None:
    tree = LxmlTree.from_html(PAGE)
    for element in tree.elements():
        css = finder(element, tree)
        assert tree.count_matches(css) == 1, css
        assert tree.first_match(css) is element, css


def test_selector_generation_is_deterministic() -> None:
    tree = LxmlTree.from_html(PAGE)
    for element in tree.elements():
        assert finder(element, tree) == finder(element, tree)


def test_unique_id_is_used_alone() -> None:
    tree = LxmlTree.from_html("<html><body><div><button id='login-btn'>Login</button></div></body></html>")
    assert finder(tree.root.cssselect("button")[0], tree) == "#login-btn"


def test_id_with_special_characters_is_escaped() -> None:
    tree = LxmlTree.from_html("<html><body><div id='a.b'>x</div><div>y</div></body></html>")
    target = tree.root.cssselect("div")[0]
    css = finder(target, tree)
    assert css == "#a\\.b"
    assert tree.first_match(css) is target


def test_identical_siblings_fall_back_to_position() -> None:
    items = "".join("<li class='item'>x</li>" for _ in range(5))
    tree = LxmlTree.from_html(f"<html><body><ul>{items}</ul></body></html>")
    third = tree.root.cssselect("li")[2]
    assert finder(third, tree) == ".item:nth-child(3)"


def test_combination_overflow_still_returns_a_unique_selector() -> None:
    level = "<div class='c1 c2 c3 c4' data-a='1' data-b='2'>{}</div>"
    inner = "<span class='t1 t2 t3 t4' data-a='1'>x</span>"
    for _ in range(5):
        inner = level.format(inner)
    tree = LxmlTree.from_html(f"<html><body>{inner}{inner}</body></html>")
    target = tree.root.cssselect("span")[1]

    css = finder(target, tree, threshold=20, attr=lambda _name, _value: True)
    assert tree.count_matches(css) == 1
    assert tree.first_match(css) is target


def test_optimizer_drops_redundant_ancestors() -> None:
    tree = LxmlTree.from_html(PAGE)
    target = tree.root.cssselect("span")[0]
    assert finder(target, tree, seed_min_length=10) == "html span"


def test_root_element_short_circuits_without_queries() -> None:
    tree = RecordingTree(LxmlTree.from_html(PAGE).root)
    assert synthesize(tree.root, tree) == "html"
    assert tree.queries == []


def test_non_element_target_is_rejected() -> None:
    tree = LxmlTree.from_html(PAGE)
    comment = tree.root.xpath("//comment()")[0]
    with pytest.raises(InvalidInputError):
        finder(comment, tree)
    with pytest.raises(TypeError):
        finder("p", tree)


def test_inconsistent_tree_is_reported() -> None:
    tree = BrokenTree(LxmlTree.from_html(PAGE).root)
    with pytest.raises(OracleInconsistencyError):
        finder(tree.root.cssselect("b")[0], tree)


def test_impossible_threshold_reports_missing_selector() -> None:
    tree = LxmlTree.from_html(PAGE)
    with pytest.raises(SelectorNotFoundError):
        finder(tree.root.cssselect("b")[0], tree, {"threshold": 0})


COMPONENTS = """
<html><body>
<section class="one"><button class="btn">Go</button></section>
<section class="two"><button class="btn">Go</button></section>
</body></html>
"""


def test_scoped_tree_yields_selector_unique_within_the_component() -> None:
    tree = LxmlTree.from_html(COMPONENTS)
    _, second = tree.root.cssselect(".btn")

    assert finder(second, tree) == ".two > .btn"
    scope = tree.root.cssselect(".two")[0]
    assert finder(second, tree.scoped(scope)) == ".btn"
    assert tree.scoped(scope).count_matches(".btn") == 1
