import pytest

from jsonmapping.transforms import BUILTIN_TRANSFORMS


@pytest.mark.parametrize(
    "name, value, expected",
    [
        ("strip", "  a  ", "a"),
        ("lower", "ABC", "abc"),
        ("upper", "abc", "ABC"),
        ("slug", "  Hello, World! ", "hello-world"),
        ("json", '{"a": 1}', {"a": 1}),
        ("int", "42", 42),
        ("float", "1.5", 1.5),
        ("bool", "yes", True),
        ("bool", "off", False),
        ("bool", True, True),
        ("str", 3, "3"),
        ("str", "x", "x"),
    ],
)
def test_builtin_transforms(name, value, expected):
    assert BUILTIN_TRANSFORMS[name](value) == expected


def test_string_transforms_pass_other_types_through():
    assert BUILTIN_TRANSFORMS["upper"](5) == 5
    assert BUILTIN_TRANSFORMS["slug"]({"a": 1}) == {"a": 1}


def test_lists_are_mapped_element_wise():
    assert BUILTIN_TRANSFORMS["upper"](["a", "b", None]) == ["A", "B", None]
    assert BUILTIN_TRANSFORMS["int"](["1", "2"]) == [1, 2]


def test_bad_cast_propagates():
    with pytest.raises(ValueError):
        BUILTIN_TRANSFORMS["int"]("abc")


def test_wrapped_transforms_keep_their_identity():
    assert BUILTIN_TRANSFORMS["slug"].__name__ == "slug"
    assert "hello-world" in BUILTIN_TRANSFORMS["slug"].__doc__
