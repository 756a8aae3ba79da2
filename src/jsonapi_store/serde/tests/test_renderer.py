import datetime
import decimal

import pytest


@pytest.fixture
def target_class():
    from ..renderer import ReprRenderer

    return ReprRenderer


def test_singleton(target_class):
    from ..models import (
        DocumentRepr,
        LinkageRepr,
        ResourceIdRepr,
        ResourceRepr,
    )

    target = target_class()

    result = target(
        DocumentRepr(
            data=ResourceRepr(
                type="foos",
                id="1",
                attributes=[
                    ("a", 1),
                    ("b", 2),
                    ("c", 3),
                ],
                relationships=[
                    (
                        "item",
                        LinkageRepr(
                            data=ResourceIdRepr(
                                type="bars",
                                id="1",
                            ),
                        ),
                    ),
                    (
                        "items",
                        LinkageRepr(
                            data=[
                                ResourceIdRepr(
                                    type="bars",
                                    id="1",
                                ),
                                ResourceIdRepr(
                                    type="bars",
                                    id="2",
                                ),
                            ],
                        ),
                    ),
                    (
                        "owner",
                        LinkageRepr(data=None),
                    ),
                ],
            ),
        ),
    )
    assert result == {
        "data": {
            "type": "foos",
            "id": "1",
            "attributes": {
                "a": 1,
                "b": 2,
                "c": 3,
            },
            "relationships": {
                "item": {
                    "data": {
                        "type": "bars",
                        "id": "1",
                    },
                },
                "items": {
                    "data": [
                        {
                            "type": "bars",
                            "id": "1",
                        },
                        {
                            "type": "bars",
                            "id": "2",
                        },
                    ],
                },
                "owner": {
                    "data": None,
                },
            },
        },
    }


def test_collection_without_ids(target_class):
    from ..models import DocumentRepr, ResourceRepr

    target = target_class()

    result = target(
        DocumentRepr(
            data=[
                ResourceRepr(type="foos", id=None, attributes=[("a", 1)]),
                ResourceRepr(type="foos", id="2"),
            ],
        ),
    )
    assert result == {
        "data": [
            {"type": "foos", "attributes": {"a": 1}},
            {"type": "foos", "id": "2"},
        ],
    }


def test_null_data(target_class):
    from ..models import DocumentRepr

    assert target_class()(DocumentRepr(data=None)) == {"data": None}


def test_attribute_values(target_class):
    from ..models import DocumentRepr, ResourceRepr

    def render(value, **kwargs):
        return target_class(**kwargs)(
            DocumentRepr(data=ResourceRepr(type="foos", id="1", attributes=[("v", value)]))
        )["data"]["attributes"]["v"]

    assert (
        render(datetime.datetime(2020, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc))
        == "2020-01-02T03:04:05+00:00"
    )
    assert render(datetime.date(2020, 1, 2)) == "2020-01-02"
    assert render(decimal.Decimal("1.25")) == "1.25"
    assert render(decimal.Decimal("1.25"), render_decimal_as_str=False) == 1.25
    assert render(b"\x00\x01") == "AAE="
    assert render({"nested": [decimal.Decimal("1"), {"d": datetime.date(2020, 1, 2)}]}) == {
        "nested": ["1", {"d": "2020-01-02"}],
    }
    assert (
        render(
            datetime.datetime(2020, 1, 2, 3, 4, 5),
            assume_naive_timezone_as=datetime.timezone(datetime.timedelta(hours=9)),
        )
        == "2020-01-01T18:04:05+00:00"
    )


def test_naive_datetime(target_class):
    from ..models import DocumentRepr, ResourceRepr

    with pytest.raises(ValueError) as e:
        target_class()(
            DocumentRepr(
                data=ResourceRepr(
                    type="foos",
                    id="1",
                    attributes=[("v", datetime.datetime(2020, 1, 2))],
                ),
            ),
        )
    assert str(e.value).startswith("/data/attributes/v:")


def test_unsupported_value(target_class):
    from ..models import DocumentRepr, ResourceRepr

    with pytest.raises(TypeError):
        target_class()(
            DocumentRepr(data=ResourceRepr(type="foos", id="1", attributes=[("v", object())]))
        )
