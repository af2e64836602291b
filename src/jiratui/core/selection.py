"""Ordered list with an optional cursor, used for every browsable list."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class SelectionList[T]:
    """A sequence of items plus a cursor that is either absent or a valid index.

    Navigation wraps around at both ends; from an absent cursor either
    direction lands on the first element. Replacing the items resets the cursor
    to the first element (or to absent when the new sequence is empty).
    """

    __slots__ = ("_items", "_selected")

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = list(items)
        self._selected: int | None = 0 if self._items else None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SelectionList):
            return NotImplemented
        return self._items == other._items and self._selected == other._selected

    def __repr__(self) -> str:
        return f"SelectionList(items={self._items!r}, selected={self._selected!r})"

    @property
    def items(self) -> tuple[T, ...]:
        return tuple(self._items)

    @property
    def selected_index(self) -> int | None:
        return self._selected

    @property
    def selected(self) -> T | None:
        if self._selected is None:
            return None
        return self._items[self._selected]

    def replace(self, items: Iterable[T]) -> None:
        self._items = list(items)
        self._selected = 0 if self._items else None

    def clear(self) -> None:
        self._items = []
        self._selected = None

    def clear_selection(self) -> None:
        self._selected = None

    def advance(self) -> None:
        if not self._items:
            return
        if self._selected is None or self._selected >= len(self._items) - 1:
            self._selected = 0
        else:
            self._selected += 1

    def retreat(self) -> None:
        if not self._items:
            return
        if self._selected is None:
            self._selected = 0
        elif self._selected == 0:
            self._selected = len(self._items) - 1
        else:
            self._selected -= 1

    def copy(self) -> SelectionList[T]:
        clone: SelectionList[T] = SelectionList()
        clone._items = list(self._items)
        clone._selected = self._selected
        return clone
