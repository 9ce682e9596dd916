"""Adaptador de productos (`/api/v1/products`).

Incluye lecturas normalizadas (listas, búsqueda, filtro por tags, detalle),
la proyección para display y las escrituras (crear, actualizar, activar,
desactivar).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from adapters.backend.base import BackendService
from core.domain.derivations import to_display_item
from core.domain.models import Product, ProductDisplayItem
from core.domain.policies import LookupPolicy


class ProductService(BackendService):
    prefix = "/api/v1/products"

    tag_lookup_policy: LookupPolicy = LookupPolicy.EMPTY_ON_ERROR

    async def get_products(self) -> list[Product]:
        return await self._get_list("get-products", Product)

    async def search_products(self, keyword: str) -> list[Product]:
        if not keyword or not keyword.strip():
            return await self.get_products()
        return await self._get_list("search-products", Product, {"search": keyword.strip()})

    async def get_products_by_tags(self, tag_names: Sequence[str]) -> list[Product]:
        tags = [t.strip() for t in tag_names if t and t.strip()]
        if not tags:
            return await self.get_products()
        return await self._get_list("get-product-by-tags", Product, {"tagNames": ",".join(tags)})

    async def get_product_detail(self, product_id: str) -> Product | None:
        return await self._get_record("get-product-by-id", Product, {"productId": product_id})

    async def get_products_for_display(self) -> list[ProductDisplayItem]:
        return [to_display_item(p) for p in await self.get_products()]

    async def list_tag_names(self) -> list[str]:
        """Tags disponibles para el filtro (derivados de los productos)."""

        async def fetch() -> list[str]:
            names: dict[str, None] = {}
            for product in await self.get_products():
                for tag in product.tags:
                    if tag.name:
                        names.setdefault(tag.name, None)
            return list(names)

        return await self._lookup(self.tag_lookup_policy, fetch, name="product tags")

    async def create_product(self, data: Mapping[str, Any]) -> Any:
        return await self._post("create-product", data, required=("name",))

    async def update_product(self, data: Mapping[str, Any]) -> Any:
        return await self._post("update-product", data, required=("id",))

    async def activate_product(self, product_id: str) -> Any:
        return await self._post("active-product", {"id": product_id}, required=("id",))

    async def deactivate_product(self, product_id: str) -> Any:
        return await self._post("unactive-product", {"id": product_id}, required=("id",))
