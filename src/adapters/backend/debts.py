"""Adaptador de deudas con proveedores (`/api/v1/purchase-debts`).

Solo lectura: las deudas nacen de los pedidos de compra en el backend.
"""

from __future__ import annotations

from adapters.backend.base import BackendService
from core.domain.models import PurchaseDebt


class DebtService(BackendService):
    prefix = "/api/v1/purchase-debts"

    async def get_purchase_debts(self) -> list[PurchaseDebt]:
        return await self._get_list("get-purchase-debts", PurchaseDebt, {"size": 100})

    async def get_purchase_debt_by_id(self, debt_id: str) -> PurchaseDebt | None:
        return await self._get_record("get-purchase-debt-by-id", PurchaseDebt, {"id": debt_id})

    async def search_purchase_debts(self, keyword: str) -> list[PurchaseDebt]:
        if not keyword or not keyword.strip():
            return await self.get_purchase_debts()
        return await self._get_list("search-purchase-debts", PurchaseDebt, {"search": keyword.strip()})
