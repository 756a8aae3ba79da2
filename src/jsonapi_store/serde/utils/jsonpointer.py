import typing


def _escape(component: str) -> str:
    return component.replace("~", "~0").replace("/", "~1")


def _unescape(component: str) -> str:
    return component.replace("~1", "/").replace("~0", "~")


class JSONPointer:
    """
    An immutable `RFC 6901 <https://tools.ietf.org/html/rfc6901>`_ JSON pointer,
    used to tell where in a wire document a problem was found.

    .. code-block:: python

       p = JSONPointer() / "data" / "relationships"
       str(p[0])  # => "/data/relationships/0"
    """

    components: typing.Tuple[str, ...]

    @classmethod
    def from_components(cls, components: typing.Iterable[str]) -> "JSONPointer":
        pointer = cls()
        pointer.components = tuple(components)
        return pointer

    def __truediv__(self, component: typing.Union[str, int]) -> "JSONPointer":
        return self.from_components(self.components + (str(component),))

    def __getitem__(self, index: int) -> "JSONPointer":
        return self / index

    def __eq__(self, that: typing.Any) -> bool:
        if isinstance(that, str):
            that = JSONPointer(that)
        if not isinstance(that, JSONPointer):
            return NotImplemented
        return self.components == that.components

    def __hash__(self) -> int:
        return hash(self.components)

    def __str__(self) -> str:
        return "/" + "/".join(_escape(c) for c in self.components)

    def __repr__(self) -> str:
        return f"JSONPointer({str(self)!r})"

    def __init__(self, path: str = ""):
        if path in ("", "/"):
            self.components = ()
        elif path.startswith("/"):
            self.components = tuple(_unescape(c) for c in path[1:].split("/"))
        else:
            raise ValueError(f"invalid JSON pointer: {path!r}")
