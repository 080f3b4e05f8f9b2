"""An ordered collection with array-style mutation, search and iteration.

:class:`Collection` wraps a single Python list.  Mutators change that list in
place; accessors and iteration operators never touch it and every collection
they hand back owns a fresh list.  Searches (``index_of``, ``contains``,
``remove``) use :func:`strict_equals`, so ``"1"`` never matches ``1``.
"""
from __future__ import annotations

import operator
import random
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar, Union

from .config import default_rng
from .errors import EmptyReduceError, OutOfBoundsError
from .observability import inc_empty_reduce, inc_out_of_bounds, logger

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")


class _Absent:
    """Result of ``pop``/``shift`` on an empty collection."""

    __slots__ = ()
    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()

# Marks an omitted ``reduce`` seed; ``None`` is a valid seed.
_NO_INITIAL = object()


def strict_equals(a: Any, b: Any) -> bool:
    """Same type and same value, with no coercion between types.

    Lists, tuples and dicts are compared item by item under the same rule.
    """
    if a is b:
        return True
    if type(a) is not type(b):
        return False
    if isinstance(a, (list, tuple)):
        return len(a) == len(b) and all(strict_equals(x, y) for x, y in zip(a, b))
    if isinstance(a, dict):
        if len(a) != len(b):
            return False
        for key, value in a.items():
            # ``1`` and ``True`` hash alike, so keys are paired explicitly
            for other in b:
                if strict_equals(key, other):
                    if not strict_equals(value, b[other]):
                        return False
                    break
            else:
                return False
        return True
    return bool(a == b)


class Collection(Generic[T]):
    """Ordered, densely indexed sequence of elements."""

    def __init__(
        self, iterable: Iterable[T] | None = None, *, rng: random.Random | None = None
    ) -> None:
        self._items: List[T] = list(iterable) if iterable is not None else []
        self._rng = rng

    def _derive(self, items: Iterable[U]) -> "Collection[U]":
        return Collection(items, rng=self._rng)

    # -- mutators ---------------------------------------------------------

    def pop(self) -> Union[T, _Absent]:
        """Remove and return the last element, or ``ABSENT`` if empty."""
        if not self._items:
            return ABSENT
        return self._items.pop()

    def push(self, element: T, *more: T) -> int:
        """Append elements in argument order and return the new length."""
        self._items.append(element)
        self._items.extend(more)
        return len(self._items)

    def reverse(self) -> None:
        self._items.reverse()

    def shift(self) -> Union[T, _Absent]:
        """Remove and return the first element, or ``ABSENT`` if empty."""
        if not self._items:
            return ABSENT
        return self._items.pop(0)

    def _splice_bounds(self, index: int, how_many: Optional[int]) -> Tuple[int, int]:
        length = len(self._items)
        if index < 0:
            start = max(length + index, 0)
        else:
            start = min(index, length)
        if how_many is None:
            stop = length
        elif how_many < 0:
            # a negative count stops that many elements before the end
            stop = max(length + how_many, start)
        else:
            stop = min(start + how_many, length)
        return start, stop

    def splice(self, index: int, how_many: Optional[int] = None, *replacements: T) -> "Collection[T]":
        """Remove ``how_many`` elements at ``index`` and insert ``replacements``.

        ``index`` counts from the end when negative and is clamped to the
        collection bounds.  Omitting ``how_many`` removes everything from
        ``index`` onwards; a negative ``how_many`` leaves that many elements
        at the end untouched.  The removed elements are returned as a new
        collection in their original order.
        """
        start, stop = self._splice_bounds(operator.index(index), how_many)
        removed = self._items[start:stop]
        self._items[start:stop] = replacements
        logger.debug(
            "splice",
            extra={"start": start, "removed": len(removed), "inserted": len(replacements)},
        )
        return self._derive(removed)

    def unshift(self, element: T, *more: T) -> int:
        """Prepend elements in argument order and return the new length."""
        self._items[0:0] = (element,) + more
        return len(self._items)

    def remove(self, element: T) -> None:
        """Remove the first strictly equal element; do nothing if there is none."""
        index = self.index_of(element)
        if index != -1:
            del self._items[index]

    def clear(self) -> None:
        self._items = []

    def concat(self, other: Iterable[T]) -> None:
        """Push every element of ``other`` (a collection or any iterable)."""
        # snapshot first so concatenating a collection onto itself terminates
        for element in list(other):
            self.push(element)

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Randomly permute the elements in place.

        The generator is taken from ``rng``, then the one the collection was
        built with, then the process-wide default.
        """
        generator = rng or self._rng or default_rng()
        generator.shuffle(self._items)
        logger.debug("shuffle", extra={"length": len(self._items)})

    # -- accessors --------------------------------------------------------

    def join(self, separator: str = ",") -> str:
        return separator.join(str(element) for element in self._items)

    def slice(self, begin: int, end: Optional[int] = None) -> "Collection[T]":
        """Return a new collection of ``begin`` up to, not including, ``end``.

        Both offsets count from the end when negative.
        """
        return self._derive(self._items[begin:end])

    def to_array(self) -> List[T]:
        """Return a copy of the underlying list."""
        return list(self._items)

    def get(self, index: int) -> T:
        index = operator.index(index)
        if not 0 <= index < len(self._items):
            inc_out_of_bounds()
            logger.info("out of bounds", extra={"index": index, "length": len(self._items)})
            raise OutOfBoundsError(index, len(self._items))
        return self._items[index]

    def index_of(self, element: T, from_index: int = 0) -> int:
        """Lowest index ``>= from_index`` holding ``element``, or ``-1``."""
        for index in range(max(from_index, 0), len(self._items)):
            if strict_equals(self._items[index], element):
                return index
        return -1

    def contains(self, element: T) -> bool:
        return self.index_of(element) != -1

    def count(self) -> int:
        return len(self._items)

    def entries(self) -> Iterator[Tuple[int, T]]:
        """Yield ``(index, element)`` pairs."""
        index = 0
        while index < len(self._items):
            yield index, self._items[index]
            index += 1

    # -- iteration operators ----------------------------------------------

    def filter(self, callback: Callable[[T, int, "Collection[T]"], Any]) -> "Collection[T]":
        return self._derive(
            element
            for index, element in enumerate(self._items)
            if callback(element, index, self)
        )

    def every(self, callback: Callable[[T, int, "Collection[T]"], Any]) -> bool:
        """True unless ``callback`` returns exactly ``False`` for some element.

        Other falsy results (``None``, ``0``, ``""``) do not fail the test.
        """
        for index, element in enumerate(self._items):
            if callback(element, index, self) is False:
                return False
        return True

    def some(self, callback: Callable[[T, int, "Collection[T]"], Any]) -> bool:
        for index, element in enumerate(self._items):
            if callback(element, index, self):
                return True
        return False

    def map(self, callback: Callable[[T], U]) -> "Collection[U]":
        return self._derive(callback(element) for element in self._items)

    def reduce(self, callback: Callable[[A, T], A], initial: Any = _NO_INITIAL) -> A:
        """Fold the elements left to right.

        Without ``initial`` the first element seeds the fold and an empty
        collection raises :class:`EmptyReduceError`.
        """
        items = iter(self._items)
        if initial is _NO_INITIAL:
            try:
                accumulator = next(items)
            except StopIteration:
                inc_empty_reduce()
                logger.info("empty reduce")
                raise EmptyReduceError() from None
        else:
            accumulator = initial
        for element in items:
            accumulator = callback(accumulator, element)
        return accumulator

    # -- protocol ---------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        index = 0
        while index < len(self._items):
            yield self._items[index]
            index += 1

    def __getitem__(self, key):
        if isinstance(key, slice):
            return self._derive(self._items[key])
        return self.get(key)

    def __contains__(self, element: object) -> bool:
        return self.contains(element)  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Collection):
            return NotImplemented
        return strict_equals(self._items, other._items)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"Collection({self._items!r})"
