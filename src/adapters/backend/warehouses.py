"""Adaptador de almacenes (`/api/v1/warehouses`)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from adapters.backend.base import BackendService
from core.domain.models import Warehouse, WarehouseProduct


class WarehouseService(BackendService):
    prefix = "/api/v1/warehouses"

    async def get_warehouses(self) -> list[Warehouse]:
        return await self._get_list("get-warehouses", Warehouse)

    async def get_warehouse_products(self, warehouse_id: str) -> list[WarehouseProduct]:
        return await self._get_list("get-products-warehouse", WarehouseProduct, {"warehouseId": warehouse_id})

    async def search_warehouse_products(self, warehouse_id: str, keyword: str) -> list[WarehouseProduct]:
        if not keyword or not keyword.strip():
            return await self.get_warehouse_products(warehouse_id)
        params = {"warehouseId": warehouse_id, "filter": keyword.strip()}
        return await self._get_list("get-products-warehouse-filter", WarehouseProduct, params)

    async def get_product_warehouse_by_id(self, product_id: str, warehouse_id: str) -> WarehouseProduct | None:
        params = {"productId": product_id, "warehouseId": warehouse_id}
        return await self._get_record("get-product-warehouse-by-id", WarehouseProduct, params)

    async def create_warehouse(self, data: Mapping[str, Any]) -> Any:
        return await self._post("create-warehouse", data, required=("name",))

    async def update_warehouse(self, data: Mapping[str, Any]) -> Any:
        return await self._post("update-warehouse", data, required=("id",))

    async def delete_warehouse(self, warehouse_id: str) -> Any:
        return await self._post("delete-warehouse", {"id": warehouse_id}, required=("id",))
