import time


class TimestampIds:
    """Millisecond timestamps, bumped when needed so each id is larger than the last."""

    def __init__(self, last: int = 0) -> None:
        self._last = last

    def observe(self, existing: int) -> None:
        self._last = max(self._last, existing)

    def next(self) -> int:
        candidate = int(time.time() * 1000)
        self._last = max(candidate, self._last + 1)
        return self._last
