"""Adaptador de variantes de producto (`/api/v1/products/*-product-variant*`)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from adapters.backend.base import BackendService
from core.domain.derivations import filter_by_product_id
from core.domain.models import ProductVariant


class VariantService(BackendService):
    prefix = "/api/v1/products"

    async def get_product_variants(self) -> list[ProductVariant]:
        return await self._get_list("get-product-variants", ProductVariant)

    async def search_product_variants(self, keyword: str) -> list[ProductVariant]:
        if not keyword or not keyword.strip():
            return await self.get_product_variants()
        return await self._get_list(
            "search-product-variants",
            ProductVariant,
            {"search": keyword.strip()},
        )

    async def get_product_variant_by_id(self, variant_id: str) -> ProductVariant | None:
        return await self._get_record(
            "get-product-variant-by-id",
            ProductVariant,
            {"productVariantId": variant_id},
        )

    async def get_product_variants_by_supplier_id(self, supplier_id: str) -> list[ProductVariant]:
        return await self._get_list(
            "get-product-variant-by-supplier-id",
            ProductVariant,
            {"supplierId": supplier_id},
        )

    async def get_variants_for_product(self, product_id: str, keyword: str = "") -> list[ProductVariant]:
        """Variantes de un producto: el backend no filtra por producto, se hace aquí."""

        variants = await self.search_product_variants(keyword)
        return filter_by_product_id(variants, product_id)

    async def create_product_variant(self, data: Mapping[str, Any]) -> Any:
        return await self._post("create-product-variant", data, required=("name",))

    async def update_product_variant(self, data: Mapping[str, Any]) -> Any:
        return await self._post("update-product-variant", data, required=("id",))
