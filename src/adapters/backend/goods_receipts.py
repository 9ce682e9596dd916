"""Adaptador de recepciones de mercancía (`/api/v1/goods-receipts`).

No hay búsqueda en servidor: las pantallas filtran en cliente sobre el
listado completo.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from adapters.backend.base import BackendService
from core.domain.models import GoodsReceipt


class GoodsReceiptService(BackendService):
    prefix = "/api/v1/goods-receipts"

    async def get_goods_receipts(self) -> list[GoodsReceipt]:
        params = {"page": 0, "size": 100, "sort": "receiptDate,desc"}
        return await self._get_list("get-goods-receipts", GoodsReceipt, params)

    async def get_goods_receipt_by_id(self, receipt_id: str) -> GoodsReceipt | None:
        return await self._get_record("get-goods-receipt-by-id", GoodsReceipt, {"id": receipt_id})

    async def create_goods_receipt(self, data: Mapping[str, Any]) -> Any:
        return await self._post(
            "create-goods-receipt",
            data,
            required=("purchaseOrderId", "warehouseId", "supplierId", "products"),
        )

    async def update_goods_receipt(self, data: Mapping[str, Any]) -> Any:
        return await self._post("update-goods-receipt", data, required=("id",))

    async def change_goods_receipt_status(self, receipt_id: str) -> Any:
        """Avanza el estado de la recepción (aprobar o cancelar según el actual)."""

        return await self._post("change-goods-receipt-status", {"id": receipt_id}, required=("id",))
