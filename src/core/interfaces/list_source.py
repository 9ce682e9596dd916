"""Contrato de las fuentes de datos de un `ListQueryController`."""

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar, runtime_checkable

from core.domain.query import FilterCriteria

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class ListSource(Protocol[T_co]):
    """Traduce (palabra clave, filtros) a llamadas de adaptador.

    Reglas de diseño:
    - `fetch` es asíncrono y puede lanzar `ApiError`; el controlador lo
      convierte en estado visible.
    - La regla de combinación de filtros vive aquí, no en el controlador.
    """

    async def fetch(self, keyword: str, filters: FilterCriteria) -> Sequence[T_co]:
        ...
