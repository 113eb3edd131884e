"""Build/serve coordination over the shared output tree."""

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

T = TypeVar("T")


class BuildCoordinator:
    """Reader/writer lock around the output tree.

    Builds take the writer role for their whole duration; request handlers
    take the reader role only while they look up and read one file. Any
    number of readers may hold the lock together, a writer excludes
    everyone else. Waiting writers block new readers, so a build starts as
    soon as the current readers finish.

    Example:
        >>> coordinator = BuildCoordinator()
        >>> with coordinator.reading():
        ...     data = path.read_bytes()
        >>> coordinator.run_build(orchestrator.run)
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0
        self._builds = 0

    @property
    def building(self) -> bool:
        """True while a build holds the writer role."""
        with self._cond:
            return self._writer

    @property
    def readers(self) -> int:
        with self._cond:
            return self._readers

    @property
    def builds(self) -> int:
        """Number of builds that have finished (successfully or not)."""
        with self._cond:
            return self._builds

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("release_read() without a matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() without a matching acquire_write()")
            self._writer = False
            self._builds += 1
            self._cond.notify_all()

    @contextmanager
    def reading(self) -> Iterator[None]:
        """Hold the reader role for the body of the block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def writing(self) -> Iterator[None]:
        """Hold the writer role for the body of the block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    def run_build(self, build: Callable[[], T]) -> T:
        """Run ``build`` with exclusive access to the output tree."""
        with self.writing():
            return build()
