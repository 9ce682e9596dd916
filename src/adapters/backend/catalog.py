"""Adaptador de catálogo: marcas, categorías y grupos de producto.

Las tres familias comparten forma (listar / crear / actualizar / borrar) y
se devuelven ordenadas por recencia (`updatedAt`, con respaldo `createdAt`).
"""

from __future__ import annotations

from typing import Any

from adapters.backend.base import BackendService
from core.domain.derivations import sort_by_recency
from core.domain.models import Brand, Category, Group


class CatalogService(BackendService):
    prefix = "/api/v1/products"

    # Marcas
    async def get_brands(self) -> list[Brand]:
        return sort_by_recency(await self._get_list("get-brands", Brand))

    async def create_brand(self, name: str, description: str = "") -> Any:
        return await self._post(
            "create-brand",
            {"name": name, "description": description},
            required=("name",),
        )

    async def update_brand(self, brand_id: str, name: str, description: str = "") -> Any:
        return await self._post(
            "update-brand",
            {"id": brand_id, "name": name, "description": description},
            required=("id", "name"),
        )

    async def delete_brand(self, brand_id: str) -> Any:
        return await self._post("delete-brand", {"id": brand_id}, required=("id",))

    # Categorías
    async def get_categories(self) -> list[Category]:
        return sort_by_recency(await self._get_list("get-product-categories", Category))

    async def create_category(self, name: str, description: str = "") -> Any:
        return await self._post(
            "create-category",
            {"name": name, "description": description},
            required=("name",),
        )

    async def update_category(self, category_id: str, name: str, description: str = "") -> Any:
        return await self._post(
            "update-category",
            {"id": category_id, "name": name, "description": description},
            required=("id", "name"),
        )

    async def delete_category(self, category_id: str) -> Any:
        return await self._post("delete-category", {"id": category_id}, required=("id",))

    # Grupos
    async def get_groups(self) -> list[Group]:
        return sort_by_recency(await self._get_list("get-product-groups", Group))

    async def create_group(
        self,
        *,
        group_id: str,
        name: str,
        gtgttax: float = 0,
        tncnntax: float = 0,
        description: str = "",
        job_type: str = "",
    ) -> Any:
        return await self._post(
            "create-group",
            {
                "groupId": group_id,
                "name": name,
                "gtgttax": gtgttax,
                "tncnntax": tncnntax,
                "description": description,
                "jobType": job_type,
            },
            required=("groupId", "name"),
        )

    async def update_group(
        self,
        *,
        id: str,
        group_id: str,
        name: str,
        gtgttax: float = 0,
        tncnntax: float = 0,
        description: str = "",
        job_type: str = "",
    ) -> Any:
        return await self._post(
            "update-group",
            {
                "id": id,
                "groupId": group_id,
                "name": name,
                "gtgttax": gtgttax,
                "tncnntax": tncnntax,
                "description": description,
                "jobType": job_type,
            },
            required=("id", "groupId", "name"),
        )

    async def delete_group(self, group_id: str) -> Any:
        return await self._post("delete-group", {"id": group_id}, required=("id",))
