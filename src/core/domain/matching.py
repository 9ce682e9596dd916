"""Matching de palabra clave en cliente.

Se usa cuando un filtro estructurado (tags, proveedores, categoría) ya
determinó la llamada al backend y la palabra clave debe aplicarse después.

Reglas:
- Un único término (la entrada recortada), substring case-insensitive.
- Campos fijos: nombre, SKU, modelo, part number, código, descripción,
  título y números de documento (pedido, recepción, contrato).
- Campos de la entidad padre (producto, proveedor, almacén, pedido):
  nombre, código y número de pedido.
"""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

T = TypeVar("T")

_DIRECT_FIELDS: tuple[str, ...] = (
    "name",
    "sku",
    "model",
    "part_number",
    "product_code",
    "code",
    "description",
    "title",
    "order_number",
    "receipt_code",
    "contract_number",
)
_PARENT_FIELDS: tuple[str, ...] = ("product", "supplier", "warehouse", "purchase_order")
_PARENT_KEYS: tuple[str, ...] = ("name", "product_code", "code", "order_number")


def normalize_keyword(keyword: str | None) -> str:
    return (keyword or "").strip().casefold()


def searchable_values(entity: Any) -> list[str]:
    values: list[str] = []
    for name in _DIRECT_FIELDS:
        value = getattr(entity, name, None)
        if isinstance(value, str) and value:
            values.append(value)
    for parent_name in _PARENT_FIELDS:
        parent = getattr(entity, parent_name, None)
        if parent is None:
            continue
        for key in _PARENT_KEYS:
            value = getattr(parent, key, None)
            if isinstance(value, str) and value:
                values.append(value)
    return values


def matches_keyword(entity: Any, keyword: str | None) -> bool:
    term = normalize_keyword(keyword)
    if not term:
        return True
    return any(term in value.casefold() for value in searchable_values(entity))


def filter_by_keyword(items: Iterable[T], keyword: str | None) -> list[T]:
    term = normalize_keyword(keyword)
    if not term:
        return list(items)
    return [item for item in items if matches_keyword(item, term)]
