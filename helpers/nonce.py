# helpers/nonce.py — timestamp + counter nonces, unique within a millisecond
import time
import threading
from typing import Callable, Optional


def wall_clock_ms() -> int:
    return int(time.time() * 1000)


class NonceGenerator:
    """
    Produces nonces as <epoch ms><padded counter>.

    Calls landing in the same millisecond bump the counter, so up to 1000
    nonces per ms stay unique and ordered. Past that the padding narrows and
    string ordering is no longer guaranteed.

    A clock that steps backwards resets the counter like any other change of
    millisecond, which can yield a smaller nonce than the previous one.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self.clock = clock or wall_clock_ms
        self.last_millis: Optional[int] = None
        self.counter = 0
        self._lock = threading.Lock()

    @staticmethod
    def _padding(counter: int) -> str:
        if counter < 10:
            return "000"
        if counter < 100:
            return "00"
        if counter < 1000:
            return "0"
        return ""

    def next(self) -> str:
        with self._lock:
            now = self.clock()
            if now != self.last_millis:
                self.counter = 0
                self.last_millis = now
            else:
                self.counter += 1
            counter = self.counter
        return f"{now}{self._padding(counter)}{counter}"

    __call__ = next
