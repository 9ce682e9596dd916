"""Adaptador de pedidos de compra (`/api/v1/purchase-orders`).

La búsqueda acepta el estado escrito en vietnamita (con o sin tildes): el
backend solo entiende los códigos `DRAFT`, `APPROVED` y `CANCELLED`, así que
el término se traduce antes de enviarlo.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Mapping
from typing import Any

from adapters.backend.base import BackendService
from core.domain.models import PurchaseOrder

_STATUS_SEARCH_TERMS: dict[str, str] = {
    "nháp": "DRAFT",
    "nhap": "DRAFT",
    "đã duyệt": "APPROVED",
    "da duyet": "APPROVED",
    "duyệt": "APPROVED",
    "duyet": "APPROVED",
    "đã hủy": "CANCELLED",
    "đã huỷ": "CANCELLED",
    "da huy": "CANCELLED",
    "hủy": "CANCELLED",
    "huỷ": "CANCELLED",
    "huy": "CANCELLED",
}


def order_search_term(search: str) -> str:
    """Código de estado si `search` nombra un estado; si no, el término recortado."""

    term = search.strip()
    return _STATUS_SEARCH_TERMS.get(unicodedata.normalize("NFC", term).casefold(), term)


class PurchaseOrderService(BackendService):
    prefix = "/api/v1/purchase-orders"

    async def get_purchase_orders(self) -> list[PurchaseOrder]:
        params = {"page": 0, "size": 100, "sort": "orderDate,desc"}
        return await self._get_list("get-orders", PurchaseOrder, params)

    async def get_purchase_order_by_id(self, purchase_order_id: str) -> PurchaseOrder | None:
        return await self._get_record("get-order-by-id", PurchaseOrder, {"purchaseOrderId": purchase_order_id})

    async def get_purchase_orders_by_status(self, status: str) -> list[PurchaseOrder]:
        return await self._get_list("get-order-by-status", PurchaseOrder, {"status": status.strip().upper()})

    async def search_purchase_orders(self, search: str, page: int = 0, size: int = 10) -> list[PurchaseOrder]:
        if not search or not search.strip():
            return await self.get_purchase_orders()
        params = {
            "search": order_search_term(search),
            "page": page,
            "size": size,
            "sort": "createdAt,desc",
        }
        return await self._get_list("search-orders", PurchaseOrder, params)

    async def create_purchase_order(self, data: Mapping[str, Any]) -> Any:
        return await self._post("create-order", data, required=("supplier", "warehouse", "products"))

    async def update_purchase_order(self, data: Mapping[str, Any]) -> Any:
        return await self._post("update-order", data, required=("id",))

    async def approve_purchase_order(self, order_id: str) -> Any:
        return await self._post("approve-order-status", {"id": order_id}, required=("id",))

    async def delete_purchase_order(self, order_id: str) -> Any:
        """Solo aplica a pedidos en borrador; el backend rechaza el resto."""

        return await self._post("delete-order", {"id": order_id}, required=("id",))

    async def cancel_purchase_order(self, order_id: str) -> Any:
        return await self._post("cancel-order", {"id": order_id}, required=("id",))
