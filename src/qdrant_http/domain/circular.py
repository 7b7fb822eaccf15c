"""Round-robin sequence over a fixed pool with full-cycle detection.

Not thread-safe: callers sharing an instance must serialize access.
"""

from __future__ import annotations

import logging
from typing import Generic, Iterable, Iterator, TypeVar

from ..errors import CircleDetectedError, EmptySequenceError

T = TypeVar("T")

_LOGGER = logging.getLogger(__name__)

_UNSET = -1


class CycleDetector:
    """Flags the return of the cursor to the position it was armed at.

    Use as a context manager, or call ``close()``; either disarms it.
    """

    def __init__(self, anchor: int, skip_initial_arrival: bool) -> None:
        self._anchor = anchor
        self._skip_initial_arrival = skip_initial_arrival
        self._closed = False

    @property
    def anchor(self) -> int:
        return self._anchor

    @property
    def closed(self) -> bool:
        return self._closed

    def detect(self, cursor: int) -> bool:
        """True if ``cursor`` completes a full cycle."""
        if self._closed or cursor != self._anchor:
            return False
        # Armed before the first advance: arriving at 0 the first time is the start.
        if self._skip_initial_arrival:
            self._skip_initial_arrival = False
            return False
        return True

    def close(self) -> None:
        self._closed = True

    def __enter__(self) -> CycleDetector:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class CircularSequence(Generic[T]):
    """Fixed, ordered pool of items advanced with ``get_next()``, wrapping around."""

    def __init__(self, items: Iterable[T]) -> None:
        self._items: list[T] = list(items)
        if not self._items:
            raise EmptySequenceError("Can't initialize circular sequence with zero items.")
        self._cursor = _UNSET
        self._detector: CycleDetector | None = None

    @property
    def count(self) -> int:
        return len(self._items)

    @property
    def current_index(self) -> int:
        """Position of the last returned item; -1 before the first advance."""
        return self._cursor

    def get_next(self) -> T:
        """Advance and return the next item.

        Raises ``CircleDetectedError`` and keeps the cursor where it was when an
        armed detector reports a completed cycle.
        """
        previous = self._cursor
        self._cursor = (self._cursor + 1) % len(self._items)

        if self._detector is not None and self._detector.detect(self._cursor):
            _LOGGER.debug("circle_detected", extra={"position": self._cursor})
            self._cursor = previous
            raise CircleDetectedError("Circle detected")

        return self._items[self._cursor]

    def start_cycle_detection(self) -> CycleDetector:
        """Arm cycle detection at the current position and return the detector.

        When armed before the first advance the anchor is position 0 and the
        first arrival there is not counted. Arming again replaces the previous
        detector.
        """
        at_start = self._cursor == _UNSET
        self._detector = CycleDetector(
            anchor=0 if at_start else self._cursor,
            skip_initial_arrival=at_start,
        )
        return self._detector

    def reset(self) -> None:
        """Move the cursor to position 0, bypassing cycle detection."""
        self._cursor = 0

    def contains(self, item: T) -> bool:
        return item in self._items

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)
