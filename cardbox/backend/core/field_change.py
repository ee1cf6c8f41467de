"""
Field Changes.

Explicit three-way state for one field of a partial update:

    Unset          - field absent from the request, keep the stored value
    Clear          - field sent as null, store NULL
    SetValue(v)    - field sent with a value, store v

Using a tagged value instead of a None default keeps "not sent" and
"sent as null" apart all the way down to the repository.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Unset:
    """Field was not supplied."""

    _instance: "Unset | None" = None

    def __new__(cls) -> "Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"


class Clear:
    """Field was supplied as null."""

    _instance: "Clear | None" = None

    def __new__(cls) -> "Clear":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CLEAR"


@dataclass(frozen=True)
class SetValue(Generic[T]):
    """Field was supplied with a value."""

    value: T


UNSET = Unset()
CLEAR = Clear()

FieldChange = Unset | Clear | SetValue[Any]


def resolve(change: FieldChange) -> Any:
    """
    Return the value a change writes to storage.

    Raises:
        ValueError: If the change is Unset (nothing to write)
    """
    if isinstance(change, SetValue):
        return change.value
    if isinstance(change, Clear):
        return None
    raise ValueError("Unset change has no value")
