"""Storage doubles shared by the test modules."""

import threading
import time

from core.errors import StorageUnavailable
from core.interfaces import Storage


class MockStorage(Storage):
    """In-memory storage for testing."""

    def __init__(self):
        self.data = {}
        self.set_calls = []
        self._mutex = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._mutex:
            return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._mutex:
            self.set_calls.append((key, value))
            self.data[key] = value

    def delete(self, key: str) -> None:
        with self._mutex:
            self.data.pop(key, None)


class FailingStorage(MockStorage):
    """Storage whose reads and/or writes can be switched off."""

    def __init__(self, fail_reads: bool = False, fail_writes: bool = False):
        super().__init__()
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageUnavailable("read failed")
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageUnavailable("write failed")
        super().set(key, value)


class SlowStorage(MockStorage):
    """Storage whose calls take a while, so concurrent callers overlap."""

    def __init__(self, delay: float = 0.02):
        super().__init__()
        self.delay = delay

    def get(self, key: str) -> str | None:
        time.sleep(self.delay)
        return super().get(key)

    def set(self, key: str, value: str) -> None:
        time.sleep(self.delay)
        super().set(key, value)
