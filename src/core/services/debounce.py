"""Tarea programada cancelable (arm / cancel / fire-once).

Una sola abstracción para todos los debounces de listas: `arm` cancela el
disparo pendiente y programa uno nuevo, así que en una ráfaga solo sobrevive
la última llamada.
"""

from __future__ import annotations

import asyncio
from typing import Callable


class DebouncedTask:
    def __init__(self, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def arm(self, delay: float) -> None:
        """(Re)programa el callback; requiere un event loop en ejecución."""

        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(max(delay, 0.0), self._fire)

    def cancel(self) -> bool:
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self) -> None:
        self._handle = None
        self._callback()
