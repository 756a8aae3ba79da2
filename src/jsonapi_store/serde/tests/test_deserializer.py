import pytest

from ..exceptions import DeserializationError
from ..models import (
    DocumentRepr,
    ErrorRepr,
    LinkageRepr,
    LinksRepr,
    Missing,
    ResourceIdRepr,
    ResourceRepr,
    SourceRepr,
)
from ..utils import JSONPointer


@pytest.fixture
def target():
    from ..deserializer import ReprDeserializer

    return ReprDeserializer


def test_basic(target):
    deser = target()

    result = deser(
        {
            "data": {
                "type": "foos",
                "id": "1",
                "attributes": {
                    "a": 1,
                    "b": 2,
                    "c": 3,
                },
            },
        },
    )

    assert result == DocumentRepr(
        data=ResourceRepr(
            type="foos",
            id="1",
            attributes=(
                ("a", 1),
                ("b", 2),
                ("c", 3),
            ),
            _source_=JSONPointer("/data"),
        ),
        _source_=JSONPointer("/"),
    )

    result = deser(
        {
            "links": {
                "self": "/foos/1",
            },
            "data": {
                "type": "foos",
                "id": "1",
                "attributes": {
                    "a": 1,
                },
                "relationships": {
                    "items": {
                        "links": {
                            "self": "/foos/1/relationships/items",
                            "related": {"href": "/foos/1/items"},
                        },
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
        },
    )

    assert result == DocumentRepr(
        links=LinksRepr(
            self_="/foos/1",
            _source_=JSONPointer("/links"),
        ),
        data=ResourceRepr(
            type="foos",
            id="1",
            attributes=(("a", 1),),
            relationships=(
                (
                    "items",
                    LinkageRepr(
                        links=LinksRepr(
                            self_="/foos/1/relationships/items",
                            related="/foos/1/items",
                            _source_=JSONPointer("/data/relationships/items/links"),
                        ),
                        data=[
                            ResourceIdRepr(
                                type="bars",
                                id="1",
                                _source_=JSONPointer("/data/relationships/items/data/0"),
                            ),
                            ResourceIdRepr(
                                type="bars",
                                id="2",
                                _source_=JSONPointer("/data/relationships/items/data/1"),
                            ),
                        ],
                        _source_=JSONPointer("/data/relationships/items"),
                    ),
                ),
                (
                    "owner",
                    LinkageRepr(
                        data=None,
                        _source_=JSONPointer("/data/relationships/owner"),
                    ),
                ),
            ),
            _source_=JSONPointer("/data"),
        ),
        _source_=JSONPointer("/"),
    )


def test_collection_and_included(target):
    result = target()(
        {
            "data": [
                {"type": "foos", "id": "1"},
                {"type": "foos", "id": "2"},
            ],
            "included": [
                {"type": "bars", "id": "1", "meta": {"x": 1}},
            ],
            "meta": {"total": 2},
        },
    )
    assert result.is_collection
    assert [r.identity for r in result.resources()] == [
        ("foos", "1"),
        ("foos", "2"),
        ("bars", "1"),
    ]
    assert result.included[0].meta == {"x": 1}
    assert result.meta == {"total": 2}


def test_linkage_without_data(target):
    result = target()(
        {
            "data": {
                "type": "foos",
                "relationships": {"bars": {"meta": {"count": 3}}},
            },
        },
    )
    assert result.data.id is None
    assert result.data.relationships["bars"].data is Missing
    assert result.data.relationships["bars"].meta == {"count": 3}


def test_errors(target):
    result = target()(
        {
            "errors": [
                {
                    "id": "e1",
                    "status": 422,
                    "code": "blank",
                    "title": "Invalid attribute",
                    "detail": "a must not be blank",
                    "source": {"pointer": "/data/attributes/a"},
                },
            ],
        },
    )
    assert result.data is Missing
    assert result.errors == [
        ErrorRepr(
            id="e1",
            status="422",
            code="blank",
            title="Invalid attribute",
            detail="a must not be blank",
            source=SourceRepr(
                pointer="/data/attributes/a",
                _source_=JSONPointer("/errors/0/source"),
            ),
            _source_=JSONPointer("/errors/0"),
        ),
    ]


def test_meta_only(target):
    result = target()({"meta": {"deleted": True}})
    assert result.data is Missing
    assert result.meta == {"deleted": True}


def test_malformed(target):
    with pytest.raises(DeserializationError) as e:
        target()(
            {
                "data": [
                    {"id": "1"},
                    {"type": "foos", "id": 1, "attributes": []},
                    {
                        "type": "foos",
                        "relationships": {"bar": {"data": {"type": "bars"}}},
                    },
                ],
            },
        )
    assert [str(item.pointer) for item in e.value.errors] == [
        "/data/0",
        "/data/1/id",
        "/data/1/attributes",
        "/data/2/relationships/bar/data",
    ]
    assert e.value.payload["data"][0] == {"id": "1"}


def test_not_an_object(target):
    with pytest.raises(DeserializationError) as e:
        target()([])
    assert str(e.value) == "malformed document (/: value has type array where object expected)"


def test_empty_document(target):
    with pytest.raises(DeserializationError):
        target()({"links": {"self": "/foos"}})
