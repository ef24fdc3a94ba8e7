import pytest

from crosswind.string_utils import join_to_string


def test_default_delimiter_is_comma():
    assert join_to_string(["a", "b", "c"]) == "a,b,c"


def test_custom_delimiter():
    assert join_to_string(["x", "y"], " | ") == "x | y"


def test_empty_and_single():
    assert join_to_string([]) == ""
    assert join_to_string(["only"]) == "only"


@pytest.mark.parametrize("parts", [["1", "2", "3"], ["alpha", "", "gamma"], ["solo"]])
def test_round_trip_with_split(parts):
    assert join_to_string(parts, ";").split(";") == parts


def test_accepts_generator():
    assert join_to_string((s for s in ["p", "q"]), "-").split("-") == ["p", "q"]