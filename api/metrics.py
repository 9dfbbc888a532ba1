"""Request hit counter owned by the application object (app.extensions)."""
import threading

from flask import current_app

EXTENSION_KEY = "chirpy_hits"


class HitCounter:
    """Thread-safe counter. Created in create_app, read and reset through explicit calls."""

    def __init__(self):
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def value(self) -> int:
        with self._lock:
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0


def get_hit_counter() -> HitCounter:
    return current_app.extensions[EXTENSION_KEY]
