"""
Host boundary: keyboard polling and the per-run clock.

The frame loop that calls step functions belongs to the host. What the engine
needs from it is captured by two small protocols, plus headless
implementations used by tests, demos and hosts without their own.
"""
from __future__ import annotations

import time
from typing import List, Optional, Protocol, Sequence


class Keyboard(Protocol):
    def get_keys(self, key_list: Optional[Sequence[str]] = None) -> List[str]:
        """
        Return pending key names in press order.

        Only keys in ``key_list`` are returned (all keys when None), and the
        returned keys are removed from the buffer. Other keys stay pending,
        the way PsychoPy's ``event.getKeys(keyList=...)`` behaves.
        """
        ...

    def clear_events(self) -> None:
        """Discard every pending key."""
        ...


class Clock(Protocol):
    def reset(self) -> None:
        ...

    def elapsed(self) -> float:
        """Seconds since the last reset."""
        ...


class BufferedKeyboard:
    """Keyboard fed by ``press()``; the host (or a test) pushes key names."""

    def __init__(self) -> None:
        self._pending: List[str] = []

    def press(self, *keys: str) -> None:
        self._pending.extend(keys)

    def type_text(self, text: str, submit: Optional[str] = "return") -> None:
        """Press one key per character, then ``submit`` when given."""
        names = {" ": "space", "-": "minus"}
        self.press(*(names.get(ch, ch.lower()) for ch in text))
        if submit:
            self.press(submit)

    @property
    def pending(self) -> List[str]:
        return list(self._pending)

    def get_keys(self, key_list: Optional[Sequence[str]] = None) -> List[str]:
        if key_list is None:
            keys, self._pending = self._pending, []
            return keys
        allowed = set(key_list)
        keys = [key for key in self._pending if key in allowed]
        self._pending = [key for key in self._pending if key not in allowed]
        return keys

    def clear_events(self) -> None:
        self._pending = []


class MonotonicClock:
    """Clock backed by ``time.monotonic``."""

    def __init__(self) -> None:
        self._start = time.monotonic()

    def reset(self) -> None:
        self._start = time.monotonic()

    def elapsed(self) -> float:
        return time.monotonic() - self._start


class ManualClock:
    """Clock that only moves when ``advance()`` is called."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now
        self._start = now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def reset(self) -> None:
        self._start = self.now

    def elapsed(self) -> float:
        return self.now - self._start

