"""ID generation for orders and dynamically built offers."""

import itertools
import threading


class SequentialIdGenerator:
    """Monotonic id generator, e.g. ``ORD-1001``, ``ORD-1002``, ...

    Each instance keeps its own counter, so components that need unique ids get
    a generator handed to them instead of sharing process-wide state. Tests can
    seed a generator to get reproducible ids.
    """

    def __init__(self, prefix: str = "ORD", start: int = 1000):
        """Initialize the generator.

        Args:
            prefix: Text placed before the number, separated by a dash.
            start: The last number considered used; the first id is ``start + 1``.

        """
        self.prefix = prefix
        self._counter = itertools.count(start + 1)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        """Return the next unused id."""
        with self._lock:
            number = next(self._counter)
        return f"{self.prefix}-{number}"

    def __call__(self) -> str:
        """Alias for :meth:`next_id` so the generator can be passed as a callable."""
        return self.next_id()
