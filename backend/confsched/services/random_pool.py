from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from queue import Queue
import random
from threading import Lock


class RandomPool:
    """Fixed set of independently seeded generators shared by worker threads.

    A generator is checked out by exactly one task at a time and must be
    checked back in by that same task. ``checkout`` blocks while every
    generator is in use.
    """

    def __init__(self, seed: int, size: int = 4) -> None:
        if size < 1:
            raise ValueError("RandomPool size must be at least 1")
        seeder = random.Random(seed)
        self._size = size
        self._available: Queue[random.Random] = Queue(maxsize=size)
        self._checked_out: set[int] = set()
        self._lock = Lock()
        for _ in range(size):
            self._available.put(random.Random(seeder.getrandbits(64)))

    @property
    def size(self) -> int:
        return self._size

    def available(self) -> int:
        return self._available.qsize()

    def checkout(self) -> random.Random:
        generator = self._available.get()
        with self._lock:
            self._checked_out.add(id(generator))
        return generator

    def checkin(self, generator: random.Random) -> None:
        with self._lock:
            if id(generator) not in self._checked_out:
                raise ValueError("Generator was not checked out from this pool")
            self._checked_out.discard(id(generator))
        self._available.put(generator)

    @contextmanager
    def handle(self) -> Iterator[random.Random]:
        generator = self.checkout()
        try:
            yield generator
        finally:
            self.checkin(generator)
