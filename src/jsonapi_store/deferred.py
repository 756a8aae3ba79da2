import typing

T = typing.TypeVar("T")


class Deferred(typing.Generic[T]):
    """
    A deferred object encapsulates a lazily evaluated value, typically a reference
    to a resource class that is declared later in the module:

    .. code-block:: python

       @model(type="articles")
       class Article(Resource):
           author = Relationship(Deferred(lambda: Person))

    The yielder is called at most once, on the first call to the deferred object.

    :param Callable[..., T] yielder: a callable that resolves the value.
    :param args: positional arguments for the yielder.
    :param kwargs: keyword arguments for the yielder.
    """

    _yielder: typing.Callable[..., T]
    _value_yielded: bool = False
    _value: typing.Optional[T] = None
    _args: typing.Sequence[typing.Any]
    _kwargs: typing.Mapping[str, typing.Any]

    def __call__(self) -> T:
        if not self._value_yielded:
            self._value = self._yielder(*self._args, **self._kwargs)
            self._value_yielded = True
        return typing.cast(T, self._value)

    def __repr__(self) -> str:
        if self._value_yielded:
            return f"Deferred({self._value!r})"
        return f"Deferred({self._yielder!r})"

    def __init__(self, yielder: typing.Callable[..., T], *args, **kwargs) -> None:
        self._yielder = yielder
        self._args = args
        self._kwargs = kwargs


def resolve(value: typing.Union[T, Deferred[T]]) -> T:
    if isinstance(value, Deferred):
        return value()
    return value
