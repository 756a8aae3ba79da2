import dataclasses
import typing

from .types import JSONValue
from .utils import JSONPointer, english_enumerate


class JSONAPISerdeError(Exception):
    pass


@dataclasses.dataclass
class DeserializationErrorItem:
    pointer: JSONPointer
    message: str

    def __str__(self):
        return f"{self.pointer}: {self.message}"


class DeserializationError(JSONAPISerdeError):
    payload: JSONValue
    errors: typing.Sequence[DeserializationErrorItem]

    @property
    def message(self) -> str:
        return f"malformed document ({english_enumerate(str(e) for e in self.errors)})"

    def __str__(self):
        return self.message

    def __init__(self, payload: JSONValue, errors: typing.Sequence[DeserializationErrorItem]):
        super().__init__(payload, errors)
        self.payload = payload
        self.errors = errors
