import pytest

from crosswind.version import Version


def test_default_string():
    assert str(Version()) == "0.0.0"


def test_parse_round_trip():
    assert str(Version.parse("1.2.3")) == "1.2.3"


def test_parts_from_string():
    version = Version.parse("4.5.678")
    assert (version.major, version.minor, version.build) == (4, 5, 678)


def test_equality_with_string():
    assert Version(1, 2, 3) == "1.2.3"
    assert Version(1, 2, 3) != "1.2.4"


def test_ordering_against_versions_and_strings():
    assert Version(1, 2, 3) < "1.3.0"
    assert Version(2, 0, 0) > Version(1, 99, 999)
    assert Version(1, 2, 3) <= "1.2.3"
    assert Version(1, 2, 3) >= Version(1, 2, 3)


def test_sorting():
    versions = [Version.parse(text) for text in ("2.0.0", "1.10.0", "1.2.5")]
    assert [str(v) for v in sorted(versions)] == ["1.2.5", "1.10.0", "2.0.0"]


def test_major_is_eight_bit():
    assert Version(256, 0, 0) == Version(0, 0, 0)
    assert Version.parse("256.1.2") == Version(0, 1, 2)


def test_build_is_sixteen_bit():
    assert Version.parse("1.2.65537") == Version(1, 2, 1)


def test_negative_field_wraps_like_constructor():
    assert Version.parse("-1.0.0") == Version(-1, 0, 0)


def test_integer_ordering_overlap():
    a = Version(1, 0, 2000)
    b = Version(1, 2, 0)
    assert a != b
    assert not a < b
    assert not a > b
    assert a <= b and a >= b


def test_partial_parse_defaults_to_zero():
    assert Version.parse("4") == Version(4, 0, 0)
    assert Version.parse("4.7") == Version(4, 7, 0)


def test_partial_assign_keeps_other_parts():
    version = Version(1, 2, 3)
    assert version.assign("9") is version
    assert version == Version(9, 2, 3)


def test_assign_copies_version():
    source = Version(3, 4, 5)
    target = Version().assign(source)
    source.major = 0
    assert target == Version(3, 4, 5)


def test_assign_none_changes_nothing():
    assert Version(1, 1, 1).assign(None) == Version(1, 1, 1)


def test_assign_rejects_other_types():
    with pytest.raises(TypeError):
        Version().assign(5)


def test_comparing_with_number_is_type_error():
    with pytest.raises(TypeError):
        Version() < 5