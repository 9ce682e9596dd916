"""Estado de consulta de una lista (palabra clave + filtros + generación)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable


def _clean_set(values: Iterable[str] | None) -> frozenset[str]:
    return frozenset(v.strip() for v in values or () if v and v.strip())


@dataclass(frozen=True)
class FilterCriteria:
    """Filtros estructurados de una lista.

    Dentro de un filtro multi-selección (tags, proveedores) la semántica es OR.
    """

    tags: frozenset[str] = field(default_factory=frozenset)
    supplier_ids: frozenset[str] = field(default_factory=frozenset)
    category_id: str | None = None
    product_id: str | None = None
    status: str | None = None

    @classmethod
    def of(
        cls,
        *,
        tags: Iterable[str] | None = None,
        supplier_ids: Iterable[str] | None = None,
        category_id: str | None = None,
        product_id: str | None = None,
        status: str | None = None,
    ) -> "FilterCriteria":
        return cls(
            tags=_clean_set(tags),
            supplier_ids=_clean_set(supplier_ids),
            category_id=(category_id or "").strip() or None,
            product_id=(product_id or "").strip() or None,
            status=(status or "").strip().upper() or None,
        )

    @property
    def has_structured(self) -> bool:
        return bool(self.tags or self.supplier_ids or self.category_id or self.status)


@dataclass(frozen=True)
class QueryState:
    keyword: str = ""
    filters: FilterCriteria = field(default_factory=FilterCriteria)
    generation: int = 0
