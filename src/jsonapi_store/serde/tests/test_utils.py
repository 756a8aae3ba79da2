import pytest


@pytest.mark.parametrize(
    ("path", "components", "rendered"),
    [
        ("", (), "/"),
        ("/", (), "/"),
        ("/data", ("data",), "/data"),
        ("/data/0/attributes", ("data", "0", "attributes"), "/data/0/attributes"),
        ("/a~1b/c~0d", ("a/b", "c~d"), "/a~1b/c~0d"),
    ],
)
def test_jsonpointer_parse(path, components, rendered):
    from ..utils import JSONPointer

    target = JSONPointer(path)
    assert target.components == components
    assert str(target) == rendered


def test_jsonpointer_compose():
    from ..utils import JSONPointer

    target = JSONPointer() / "data"
    assert target[0] / "id" == "/data/0/id"
    assert target == JSONPointer("/data")
    assert hash(target) == hash(JSONPointer("/data"))
    assert target != "/included"


def test_jsonpointer_invalid():
    from ..utils import JSONPointer

    with pytest.raises(ValueError):
        JSONPointer("data")


@pytest.mark.parametrize(
    ("items", "expected"),
    [
        ([], ""),
        (["a"], "a"),
        (["a", "b"], "a and b"),
        (["a", "b", "c"], "a, b, and c"),
    ],
)
def test_english_enumerate(items, expected):
    from ..utils import english_enumerate

    assert english_enumerate(items) == expected
