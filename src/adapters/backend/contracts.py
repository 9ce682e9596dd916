"""Adaptador de contratos (`/api/v1/contracts`).

Las transiciones de estado (activar, cancelar) llevan el id en la query
string y no tienen cuerpo; el borrado sí lo manda en el cuerpo.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from adapters.backend.base import BackendService
from core.domain.models import Contract


class ContractService(BackendService):
    prefix = "/api/v1/contracts"

    async def get_contracts(self) -> list[Contract]:
        return await self._get_list("get-contracts", Contract)

    async def get_contract_by_id(self, contract_id: str) -> Contract | None:
        return await self._get_record("get-contract-by-id", Contract, {"id": contract_id})

    async def search_contracts(self, search: str, page: int = 0, size: int = 20) -> list[Contract]:
        if not search or not search.strip():
            return await self.get_contracts()
        params = {"search": search.strip(), "page": page, "size": size}
        return await self._get_list("search-contracts", Contract, params)

    async def create_contract(self, data: Mapping[str, Any]) -> Any:
        return await self._post("create-contract", data, required=("supplier",))

    async def update_contract(self, data: Mapping[str, Any]) -> Any:
        return await self._post("update-contract", data, required=("id",))

    async def delete_contract(self, contract_id: str) -> Any:
        return await self._post("delete-contract", {"id": contract_id}, required=("id",))

    async def activate_contract(self, contract_id: str) -> Any:
        return await self._post_query("activate-contract", {"id": contract_id})

    async def cancel_contract(self, contract_id: str) -> Any:
        return await self._post_query("cancel-contract", {"id": contract_id})
