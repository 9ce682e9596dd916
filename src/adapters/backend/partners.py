"""Adaptador de proveedores (`/api/v1/partners`).

`list_supplier_options` alimenta el filtro de proveedores de inventario:
- Si no hay endpoint configurado lanza `NotWiredError` (no se inventan
  proveedores de ejemplo).
- Con endpoint configurado, un fallo HTTP/transporte devuelve `[]` según
  `supplier_lookup_policy`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from adapters.backend.base import BackendService
from core.domain.envelope import parse_list
from core.domain.errors import NotWiredError
from core.domain.models import Supplier
from core.domain.policies import LookupPolicy
from core.interfaces.transport import RequestDescriptor, Transport

DEFAULT_SUPPLIER_LOOKUP_PATH = "/api/v1/partners/get-suppliers"


class PartnerService(BackendService):
    prefix = "/api/v1/partners"

    supplier_lookup_policy: LookupPolicy = LookupPolicy.EMPTY_ON_ERROR

    def __init__(
        self,
        transport: Transport,
        *,
        supplier_lookup_path: str | None = DEFAULT_SUPPLIER_LOOKUP_PATH,
    ) -> None:
        super().__init__(transport)
        self._supplier_lookup_path = supplier_lookup_path

    async def get_suppliers(self) -> list[Supplier]:
        return await self._get_list("get-suppliers", Supplier)

    async def search_suppliers(self, search: str) -> list[Supplier]:
        if not search or not search.strip():
            return await self.get_suppliers()
        return await self._get_list("search-suppliers", Supplier, {"search": search.strip()})

    async def get_supplier_by_id(self, supplier_id: str) -> Supplier | None:
        return await self._get_record("get-suppliers-by-id", Supplier, {"id": supplier_id})

    async def list_supplier_options(self) -> list[Supplier]:
        path = self._supplier_lookup_path
        if not path:
            raise NotWiredError("Supplier lookup endpoint is not configured.")

        async def fetch() -> list[Supplier]:
            payload = await self._transport.request(RequestDescriptor.get(path))
            return parse_list(payload, Supplier)

        return await self._lookup(self.supplier_lookup_policy, fetch, name="supplier options")

    async def create_supplier(self, data: Mapping[str, Any]) -> Any:
        return await self._post("create-supplier", data, required=("name",))

    async def update_supplier(self, data: Mapping[str, Any]) -> Any:
        return await self._post("update-supplier", data, required=("id",))

    async def activate_supplier(self, supplier_id: str) -> Any:
        return await self._post("activate-supplier", {"id": supplier_id}, required=("id",))

    async def deactivate_supplier(self, supplier_id: str) -> Any:
        return await self._post("unactivate-supplier", {"id": supplier_id}, required=("id",))
