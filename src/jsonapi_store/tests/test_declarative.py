import pytest

from ..declarative import Attribute, Relationship, Resource, model
from ..exceptions import RegistrationError
from ..metadata import AttributeMetadata, ModelRegistry, RelationshipMetadata, is_new
from .testing import Article, Circle, Comment, Person, Shape, Square


class TestModelDecorator:
    @pytest.fixture
    def target(self):
        return ModelRegistry()

    def test_add_metadata(self, target):
        @model(type="parent", registry=target)
        class ParentResource:
            name = Attribute(registry=target)

        metadata = target.get(ParentResource)
        assert metadata.type_name == "parent"
        assert isinstance(metadata.get_attribute("name"), AttributeMetadata)

    def test_merge_metadata_from_parent_class(self, target):
        @model(type="parent", registry=target)
        class ParentResource:
            name = Attribute(registry=target)

        @model(registry=target)
        class ChildResource(ParentResource):
            title = Attribute(registry=target)

        metadata = target.get(ChildResource)
        assert metadata.type_name == "parent"
        assert isinstance(metadata.get_attribute("title"), AttributeMetadata)
        assert isinstance(metadata.get_attribute("name"), AttributeMetadata)
        assert target.get(ParentResource).get_attribute("title") is None

    def test_overwrite_metadata_from_parent_class(self, target):
        @model(type="parent", registry=target)
        class ParentResource:
            name = Attribute(registry=target)

        @model(type="child", registry=target)
        class SecondChildResource(ParentResource):
            name = Attribute(name="full-name", registry=target)

        metadata = target.get(SecondChildResource)
        assert metadata.type_name == "child"
        assert metadata.get_attribute("name").name == "full-name"
        assert target.get(ParentResource).get_attribute("name").name == "name"

    def test_type_not_specified(self, target):
        with pytest.raises(RegistrationError):

            @model(registry=target)
            class Orphan:
                name = Attribute(registry=target)

    def test_relationship(self, target):
        @model(type="foos", registry=target)
        class Foo:
            bar = Relationship(name="the-bar", registry=target)
            bazs = Relationship(Resource, many=True, registry=target)

        metadata = target.get(Foo)
        bar = metadata.get_relationship("bar")
        assert isinstance(bar, RelationshipMetadata)
        assert bar.name == "the-bar"
        assert bar.target is None
        assert not bar.many
        assert metadata.get_relationship("bazs").target is Resource
        assert metadata.get_relationship("bazs").many

    def test_members_of_undeclared_base_class(self, target):
        class Timestamped(Resource):
            created_at = Attribute(name="created-at", registry=target)

        @model(type="notes", registry=target)
        class Note(Timestamped):
            body = Attribute(registry=target)

        metadata = target.get(Note)
        assert list(metadata.attributes) == ["created_at", "body"]
        assert metadata.get_attribute("created_at").name == "created-at"
        assert target.find(Timestamped) is None


class TestDeclaredModels:
    def test_deferred_target(self):
        from ..metadata import registry

        assert registry.get(Article).get_relationship("comments").target is Comment
        assert registry.get(Person).get_relationship("best_friend").target is Person

    def test_inherited_members(self):
        from ..metadata import registry

        circle = registry.get(Circle)
        assert circle.type_name == "shapes"
        assert set(circle.attributes) == {"shape_type", "color", "radius"}
        assert set(registry.get(Shape).attributes) == {"shape_type", "color"}
        assert registry.get(Square).path == "shapes/squares"
        assert registry.get(Comment).path == "article-comments"


class TestResource:
    def test_members(self):
        article = Article(title="Hi")
        assert article.id is None
        assert article.title == "Hi"
        assert article.author is None
        assert "author" not in vars(article)
        del article.title
        assert article.title is None

    def test_unknown_member(self):
        with pytest.raises(TypeError):
            Article(subtitle="nope")

    def test_constructor_runs(self):
        circle = Circle(radius=2)
        assert circle.shape_type == "circle"
        assert circle.radius == 2

    def test_new(self):
        assert is_new(Article(id="1"))

    def test_repr_with_cycle(self):
        a = Person(id="1", name="a")
        b = Person(id="2", name="b", best_friend=a)
        a.best_friend = b
        assert repr(a).startswith("Person(id='1'")
