"""EndpointPool: round-robin and failover over Qdrant cluster addresses."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, TypeVar

from ..domain.circular import CircularSequence
from ..errors import CircleDetectedError, NoHealthyEndpointError

R = TypeVar("R")

_LOGGER = logging.getLogger(__name__)


class EndpointPool:
    """Rotates through a fixed set of endpoint addresses."""

    def __init__(self, addresses: Iterable[str]) -> None:
        self._addresses = CircularSequence(addresses)

    @property
    def addresses(self) -> list[str]:
        return list(self._addresses)

    def next_endpoint(self) -> str:
        """Plain round robin."""
        return self._addresses.get_next()

    def failover_order(self) -> Iterator[str]:
        """Yield every address once, starting from the next one in rotation.

        Stops after a full cycle. The cycle detector is disarmed however the
        iteration ends, including when the caller stops early.
        """
        first = self._addresses.get_next()
        with self._addresses.start_cycle_detection():
            yield first
            while True:
                try:
                    address = self._addresses.get_next()
                except CircleDetectedError:
                    return
                yield address

    def call_with_failover(self, fn: Callable[[str], R]) -> R:
        """Call ``fn(address)`` along the failover order until one call succeeds."""
        last_error: Exception | None = None
        for address in self.failover_order():
            try:
                return fn(address)
            except Exception as e:
                _LOGGER.warning(
                    "endpoint_failed",
                    extra={"address": address, "error": str(e)},
                )
                last_error = e
        raise NoHealthyEndpointError(
            f"All {len(self._addresses)} endpoints failed"
        ) from last_error
