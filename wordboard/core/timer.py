"""Odpočet času na ťah (kontrakt: po vypršaní sa aktuálny ťah preskočí).

Časovač beží na vlastnom vlákne (`threading.Timer`). Každý štart/reset zvýši
generáciu; spätné volanie zo starej generácie sa ignoruje, takže zrušený
časovač nikdy nepreskočí ťah, ktorý sa medzitým posunul.

Ak je zadaný `guard` (zámok relácie), kontrola generácie aj `on_expire`
prebehnú pod ním, teda v rovnakom poradí ako ostatné akcie hry.
"""
from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from contextlib import AbstractContextManager, nullcontext

log = logging.getLogger("wordboard.timer")

DEFAULT_TURN_SECONDS = 30.0


class TurnTimer:
    """Jednorazový odpočet s možnosťou resetu a zrušenia."""

    def __init__(
        self,
        seconds: float = DEFAULT_TURN_SECONDS,
        on_expire: Callable[[], object] | None = None,
        *,
        guard: AbstractContextManager[object] | None = None,
    ) -> None:
        if seconds <= 0:
            raise ValueError("Dĺžka ťahu musí byť kladná")
        self.seconds = float(seconds)
        self.on_expire = on_expire
        self._guard = guard
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._deadline: float | None = None

    @property
    def running(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            self._deadline = time.monotonic() + self.seconds
            timer = threading.Timer(self.seconds, self._fire, args=(generation,))
            timer.daemon = True
            self._timer = timer
            timer.start()
        log.debug("timer_started seconds=%s generation=%s", self.seconds, generation)

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()
            self._generation += 1

    def reset(self) -> None:
        self.start()

    def remaining(self) -> float:
        """Zostávajúci čas v sekundách (0 ak časovač nebeží)."""
        deadline = self._deadline
        if deadline is None:
            return 0.0
        return max(0.0, deadline - time.monotonic())

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._deadline = None

    def _fire(self, generation: int) -> None:
        with self._guard if self._guard is not None else nullcontext():
            with self._lock:
                if generation != self._generation:
                    log.debug("timer_stale generation=%s current=%s", generation, self._generation)
                    return
                self._timer = None
                self._deadline = None
            log.info("timer_expired seconds=%s", self.seconds)
            if self.on_expire is not None:
                self.on_expire()
