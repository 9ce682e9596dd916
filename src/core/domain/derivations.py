"""Derivaciones de lectura compartidas por los adaptadores.

Son funciones puras sobre snapshots del dominio: no hacen I/O ni mutan sus
entradas.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Literal, Sequence, TypeVar

from core.domain.models import Entity, Product, ProductDisplayItem, ProductVariant

E = TypeVar("E", bound=Entity)

DEFAULT_UNIT = "cái"

RecencyField = Literal["created_at", "updated_at"]


def primary_image_url(product: Product) -> str | None:
    """Imagen marcada `isPrimary`, si no la primera, si no `None`."""

    for image in product.images:
        if image.is_primary and image.image_url:
            return image.image_url
    for image in product.images:
        if image.image_url:
            return image.image_url
    return None


def to_display_item(product: Product) -> ProductDisplayItem:
    first_variant = product.variants[0] if product.variants else None

    unit = product.unit or (first_variant.unit if first_variant else None) or DEFAULT_UNIT

    price = product.sell_price
    if price is None and first_variant is not None:
        price = first_variant.sell_price
        if price is None:
            price = first_variant.standard_cost

    return ProductDisplayItem(
        id=product.id,
        image=primary_image_url(product),
        name=product.name,
        unit=unit,
        type=product.type,
        sell_price=round(price or 0),
        active=product.active,
    )


def _as_utc(value: datetime) -> datetime:
    # Mezclar naive/aware rompe la comparación; naive se asume UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def recency_key(entity: Entity, field: RecencyField = "updated_at") -> datetime | None:
    if field == "updated_at" and entity.updated_at is not None:
        return _as_utc(entity.updated_at)
    if entity.created_at is not None:
        return _as_utc(entity.created_at)
    return None


def sort_by_recency(items: Sequence[E], field: RecencyField = "updated_at") -> list[E]:
    """Orden descendente por recencia.

    Los elementos sin timestamp conservan su posición original; los que sí lo
    tienen se ordenan (estable) dentro de las posiciones restantes.
    """

    keyed = [(index, recency_key(item, field)) for index, item in enumerate(items)]
    dated_slots = [index for index, key in keyed if key is not None]
    dated_sorted = sorted(
        (pair for pair in keyed if pair[1] is not None),
        key=lambda pair: pair[1],
        reverse=True,
    )
    # `sorted` con reverse=True mantiene el orden relativo en empates.

    result = list(items)
    for slot, (source_index, _) in zip(dated_slots, dated_sorted):
        result[slot] = items[source_index]
    return result


def filter_by_product_id(variants: Iterable[ProductVariant], product_id: str) -> list[ProductVariant]:
    """Filtro por clave foránea `variant.product.id` (no hay endpoint combinado)."""

    return [v for v in variants if v.product is not None and v.product.id == product_id]


def dedupe_by_id(items: Iterable[E]) -> list[E]:
    """Elimina duplicados por `id` conservando la primera aparición."""

    seen: set[str] = set()
    deduped: list[E] = []
    for item in items:
        if item.id is not None:
            if item.id in seen:
                continue
            seen.add(item.id)
        deduped.append(item)
    return deduped
