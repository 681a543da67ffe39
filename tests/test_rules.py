from cssfinder import LxmlTree, finder
from cssfinder.rules import (
    dynamic_value_reasons,
    is_dynamic_class_token,
    is_dynamic_id_value,
    is_dynamic_value,
    stable_attribute_filter,
    stable_class_name,
    stable_id_name,
    stable_options,
)

HTML = """
<html><body>
<div id="ember-4821"><button data-testid="save-button" class="css-1a2b3c">Save</button></div>
<button class="btn">Other</button>
</body></html>
"""


def test_generated_class_tokens_are_dynamic() -> None:
    assert is_dynamic_class_token("css-1a2b3c")
    assert is_dynamic_class_token("jss42")
    assert is_dynamic_class_token("deadbeef99")
    assert not is_dynamic_class_token("btn-primary")
    assert not stable_class_name("sc-abc123")
    assert stable_class_name("card")


def test_generated_ids_are_dynamic() -> None:
    assert is_dynamic_id_value("root")
    assert is_dynamic_id_value("form:j_idt12")
    assert is_dynamic_id_value("user_48213")
    assert is_dynamic_id_value("3f2504e0-4f89-11d3-9a0c-0305e82c3301")
    assert not is_dynamic_id_value("login-btn")
    assert stable_id_name("checkout")


def test_dynamic_value_reasons() -> None:
    assert "numeric-only" in dynamic_value_reasons("12345")
    assert dynamic_value_reasons("   ") == ("empty",)
    assert dynamic_value_reasons("save-button") == ()
    assert is_dynamic_value("12345")
    assert not is_dynamic_value("save-button")


def test_attribute_filter_accepts_stable_test_attributes_only() -> None:
    accept = stable_attribute_filter()
    assert accept("data-testid", "save-button")
    assert accept("DATA-QA", "login")
    assert not accept("data-testid", "a1b2c3d4e5f6")
    assert not accept("href", "/home")

    custom = stable_attribute_filter(["name"])
    assert custom("name", "email")
    assert not custom("data-testid", "save-button")


def test_stable_options_prefer_test_attributes_over_generated_names() -> None:
    tree = LxmlTree.from_html(HTML)
    target = tree.root.cssselect("button")[0]
    assert finder(target, tree) == ".css-1a2b3c"
    assert finder(target, tree, stable_options()) == '[data-testid="save-button"]'


def test_stable_options_accept_overrides() -> None:
    options = stable_options(threshold=10)
    assert options.threshold == 10
    assert options.attr("data-testid", "save-button")
    assert not options.id_name("__next")
