"""Mapping capability between resource types."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")


class Mapper(ABC, Generic[T]):
    """Something that can produce a ``T``.

    Subclasses implement ``map``. ``map_to`` folds the mapper into an existing
    ``T``; by default the destination is returned as it is.
    """

    @abstractmethod
    def map(self) -> T:
        ...

    def map_to(self, destination: T) -> T:
        return destination
