"""Debounced live suggestions with stale-response protection."""

import threading
from typing import Callable

DEBOUNCE_DELAY = 0.5
MIN_QUERY_LENGTH = 3


class SuggestionDebouncer:
    """
    Issue a suggestion request once typing pauses.

    Each keystroke cancels the pending delayed task and schedules a new one.
    Every request that fires takes the next sequence number; a response is
    delivered only if no newer request was issued in the meantime.
    """

    def __init__(
        self,
        fetch: Callable[[str], object],
        on_result: Callable[[str, object], None],
        delay: float = DEBOUNCE_DELAY,
        min_length: int = MIN_QUERY_LENGTH,
        timer_factory: Callable = threading.Timer,
    ):
        """
        Args:
            fetch: Called with the query text when the delay elapses
            on_result: Called with (query, result) for the latest request only
            delay: Idle time in seconds before a request is issued
            min_length: Shortest stripped query that triggers a request
            timer_factory: threading.Timer compatible factory
        """
        self.fetch = fetch
        self.on_result = on_result
        self.delay = delay
        self.min_length = min_length
        self._timer_factory = timer_factory
        self._timer = None
        self._lock = threading.Lock()
        self._sequence = 0

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def on_input(self, text: str) -> None:
        """Handle a change of the query text."""
        self.cancel()
        query = (text or '').strip()
        if len(query) < self.min_length:
            self.invalidate()
            return

        timer = self._timer_factory(self.delay, self._fire, args=(query,))
        timer.daemon = True
        with self._lock:
            self._timer = timer
        timer.start()

    def cancel(self) -> None:
        """Cancel the pending request, if any. In-flight requests are not aborted."""
        with self._lock:
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()

    def invalidate(self) -> None:
        """Cancel the pending request and drop the response of any request in flight."""
        self.cancel()
        with self._lock:
            self._sequence += 1

    def _fire(self, query: str) -> None:
        with self._lock:
            self._sequence += 1
            sequence = self._sequence
        result = self.fetch(query)
        self._deliver(sequence, query, result)

    def _deliver(self, sequence: int, query: str, result) -> bool:
        with self._lock:
            if sequence != self._sequence:
                return False
        self.on_result(query, result)
        return True
