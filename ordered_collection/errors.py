"""Errors raised by :class:`~ordered_collection.collection.Collection`."""


class CollectionError(Exception):
    """Base class for collection errors."""


class OutOfBoundsError(CollectionError, IndexError):
    """Raised when ``get`` is called with an index outside ``[0, len)``."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"index {index!r} out of bounds for length {length}")


class EmptyReduceError(CollectionError, TypeError):
    """Raised by ``reduce`` on an empty collection without an initial value."""

    def __init__(self) -> None:
        super().__init__("reduce of empty collection with no initial value")
