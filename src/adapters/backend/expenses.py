"""Adaptador de gastos (`/api/v1/expenses`)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from adapters.backend.base import BackendService
from core.domain.derivations import sort_by_recency
from core.domain.models import Expense


class ExpenseService(BackendService):
    prefix = "/api/v1/expenses"

    async def get_expenses(self) -> list[Expense]:
        return sort_by_recency(await self._get_list("get-expenses", Expense), "created_at")

    async def get_expense_by_id(self, expense_id: str) -> Expense | None:
        return await self._get_record("get-expense-by-id", Expense, {"id": expense_id})

    async def search_expenses(self, search: str, page: int = 0, size: int = 10) -> list[Expense]:
        params = {
            "search": search.strip(),
            "page": page,
            "size": size,
            "sort": "createdAt,desc",
        }
        return sort_by_recency(await self._get_list("search-expenses", Expense, params), "created_at")

    async def create_expense(self, data: Mapping[str, Any]) -> Any:
        return await self._post("create-expense", data, required=("amount",))

    async def update_expense(self, data: Mapping[str, Any]) -> Any:
        return await self._post("update-expense", data, required=("id",))

    async def delete_expense(self, expense_id: str) -> Any:
        return await self._post("delete-expense", {"id": expense_id}, required=("id",))
