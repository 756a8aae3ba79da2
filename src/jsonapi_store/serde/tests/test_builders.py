def test_document_builder_singleton():
    from ..builders import DocumentBuilder
    from ..models import LinkageRepr, Missing, ResourceIdRepr, ResourceRepr

    target = DocumentBuilder()
    assert target.data is Missing

    resource = target.set()
    resource.set_type("articles")
    resource.set_id("1")
    resource.add_attribute("title", "Hi")
    author = resource.next_to_one_relationship("author").set()
    author.set_type("people")
    author.set_id("9")
    tags = resource.next_to_many_relationship("tags")
    for id in ("1", "2"):
        tag = tags.next()
        tag.set_type("tags")
        tag.set_id(id)
    resource.next_to_one_relationship("editor")

    result = target()
    assert not result.is_collection
    assert result.data == ResourceRepr(
        type="articles",
        id="1",
        attributes=[("title", "Hi")],
        relationships=[
            ("author", LinkageRepr(data=ResourceIdRepr(type="people", id="9"))),
            (
                "tags",
                LinkageRepr(
                    data=(
                        ResourceIdRepr(type="tags", id="1"),
                        ResourceIdRepr(type="tags", id="2"),
                    )
                ),
            ),
            ("editor", LinkageRepr(data=None)),
        ],
    )
    assert result.included == ()


def test_document_builder_collection():
    from ..builders import DocumentBuilder

    target = DocumentBuilder(collection=True)
    for id in (None, "2"):
        resource = target.next()
        resource.set_type("foos")
        resource.set_id(id)

    result = target()
    assert result.is_collection
    assert [r.identity for r in result.data] == [("foos", None), ("foos", "2")]


def test_empty_collection():
    from ..builders import DocumentBuilder

    result = DocumentBuilder(collection=True)()
    assert result.data == ()
    assert list(result.resources()) == []
