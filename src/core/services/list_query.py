"""Controlador de consultas de listas.

Coordina la entrada del usuario (palabra clave, filtros, refresh) contra una
`ListSource` sin carreras:

- Debounce: cada cambio re-arma un `DebouncedTask`; solo dispara el último
  de una ráfaga. Teclas usan `search_delay`; filtros y refresh, `filter_delay`.
- Generación: cada fetch despachado incrementa un contador. Al terminar,
  solo se commitea si la generación capturada sigue siendo la actual; los
  resultados (y errores) obsoletos se descartan sin tocar el estado visible.
- Teardown: `close()` cancela el debounce pendiente y bloquea cualquier
  commit posterior; las llamadas en vuelo terminan y se ignoran.

Ningún error de lectura sale del controlador: se publica como
`ListState.error`.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field, replace
from typing import Callable, Generic, Sequence, TypeVar

from core.config import AppSettings
from core.domain.errors import DEFAULT_ERROR_MESSAGE, ApiError, ErrorDescriptor
from core.domain.query import FilterCriteria, QueryState
from core.interfaces.list_source import ListSource
from core.logger import get_logger
from core.services.debounce import DebouncedTask

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ListState(Generic[T]):
    """Estado observable por la capa de presentación."""

    items: tuple[T, ...] = ()
    loading: bool = False
    error: ErrorDescriptor | None = None
    query: QueryState = field(default_factory=QueryState)

    @property
    def generation(self) -> int:
        return self.query.generation

    @property
    def keyword(self) -> str:
        return self.query.keyword

    @property
    def filters(self) -> FilterCriteria:
        return self.query.filters


Listener = Callable[[ListState[T]], None]


class ListQueryController(Generic[T]):
    def __init__(
        self,
        source: ListSource[T],
        *,
        search_delay: float = 0.3,
        filter_delay: float = 0.0,
        keyword: str = "",
        filters: FilterCriteria | None = None,
    ) -> None:
        self._source = source
        self._search_delay = search_delay
        self._filter_delay = filter_delay
        self._query = QueryState(keyword=keyword, filters=filters or FilterCriteria())
        self._generation = 0
        self._state: ListState[T] = ListState(query=self._query)
        self._timer = DebouncedTask(self._dispatch)
        self._inflight: set[asyncio.Task[None]] = set()
        self._listeners: list[Listener[T]] = []
        self._alive = True
        self._settled = asyncio.Event()
        self._settled.set()

    @classmethod
    def from_settings(
        cls,
        source: ListSource[T],
        settings: AppSettings,
        *,
        slow: bool = False,
        **kwargs: object,
    ) -> "ListQueryController[T]":
        delay_ms = settings.slow_search_debounce_ms if slow else settings.search_debounce_ms
        return cls(source, search_delay=delay_ms / 1000, **kwargs)  # type: ignore[arg-type]

    @property
    def state(self) -> ListState[T]:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def alive(self) -> bool:
        return self._alive

    def subscribe(self, listener: Listener[T]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # Entradas del usuario

    def start(self) -> None:
        self._schedule(self._filter_delay)

    def set_keyword(self, keyword: str) -> None:
        if keyword == self._query.keyword:
            return
        self._query = replace(self._query, keyword=keyword)
        self._schedule(self._search_delay if keyword.strip() else self._filter_delay)

    def set_filters(self, filters: FilterCriteria) -> None:
        if filters == self._query.filters:
            return
        self._query = replace(self._query, filters=filters)
        self._schedule(self._filter_delay)

    def refresh(self) -> None:
        self._schedule(self._filter_delay)

    def close(self) -> None:
        if not self._alive:
            return
        self._alive = False
        self._timer.cancel()
        self._listeners.clear()
        self._settled.set()

    async def wait_idle(self) -> ListState[T]:
        """Espera a que no quede debounce armado ni fetch en vuelo."""

        while self._alive and not self._settled.is_set():
            await self._settled.wait()
        return self._state

    # Máquina de estados

    def _schedule(self, delay: float) -> None:
        if not self._alive:
            return
        self._settled.clear()
        self._timer.arm(delay)

    def _dispatch(self) -> None:
        if not self._alive:
            return
        self._generation += 1
        generation = self._generation
        self._query = replace(self._query, generation=generation)
        self._publish(replace(self._state, loading=True, query=self._query))

        task = asyncio.get_running_loop().create_task(self._run(generation, self._query))
        self._inflight.add(task)
        task.add_done_callback(self._on_task_done)

    async def _run(self, generation: int, query: QueryState) -> None:
        try:
            items: Sequence[T] = await self._source.fetch(query.keyword, query.filters)
        except ApiError as exc:
            self._commit(generation, error=exc.descriptor)
        except Exception as exc:
            logger.exception("Unexpected error while fetching list (generation %d)", generation)
            self._commit(
                generation,
                error=ErrorDescriptor(message=str(exc) or DEFAULT_ERROR_MESSAGE, code="unexpected_error"),
            )
        else:
            self._commit(generation, items=tuple(items))

    def _commit(
        self,
        generation: int,
        *,
        items: tuple[T, ...] | None = None,
        error: ErrorDescriptor | None = None,
    ) -> None:
        if not self._alive:
            logger.debug("Discarding result of generation %d after close", generation)
            return
        if generation != self._generation:
            logger.debug("Discarding stale generation %d (current %d)", generation, self._generation)
            return

        if error is not None:
            self._publish(replace(self._state, loading=False, error=error))
        else:
            self._publish(replace(self._state, items=items or (), loading=False, error=None))

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._inflight.discard(task)
        if not self._inflight and not self._timer.pending:
            self._settled.set()

    def _publish(self, state: ListState[T]) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
