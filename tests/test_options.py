import pytest

from cssfinder.models import FinderOptions, build_options


def test_defaults_accept_names_and_reject_attributes() -> None:
    options = build_options()
    assert options.id_name("anything")
    assert options.class_name("anything")
    assert options.tag_name("div")
    assert not options.attr("data-testid", "save")
    assert options.seed_min_length == 1
    assert options.optimized_min_length == 2
    assert options.threshold == 1000
    assert options.max_number_of_tries == 10000


def test_mapping_and_keyword_overrides_are_merged() -> None:
    options = build_options({"threshold": 50, "seed_min_length": 2}, threshold=20)
    assert options.threshold == 20
    assert options.seed_min_length == 2


def test_none_keeps_default_and_existing_options_are_a_base() -> None:
    base = build_options(threshold=7)
    options = build_options(base, threshold=None, max_number_of_tries=3)
    assert options.threshold == 7
    assert options.max_number_of_tries == 3
    assert isinstance(options, FinderOptions)


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(TypeError, match="root_node"):
        build_options(root_node=None, idName=lambda _name: True)


@pytest.mark.parametrize("value", [-1, 1.5, True, "10"])
def test_limits_must_be_non_negative_integers(value: object) -> None:
    with pytest.raises(ValueError, match="threshold"):
        build_options(threshold=value)


def test_predicates_must_be_callable() -> None:
    with pytest.raises(TypeError, match="class_name"):
        build_options(class_name="btn")
