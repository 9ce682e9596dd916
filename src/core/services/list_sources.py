"""Fuentes concretas para `ListQueryController`.

Cada fuente resuelve la regla de combinación de filtros de su pantalla:
el backend no expone endpoints combinados (tags + búsqueda, proveedor +
búsqueda), así que el filtro estructurado va al servidor y la palabra clave
se aplica en cliente sobre ese resultado.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

from adapters.backend.contracts import ContractService
from adapters.backend.debts import DebtService
from adapters.backend.expenses import ExpenseService
from adapters.backend.partners import PartnerService
from adapters.backend.products import ProductService
from adapters.backend.purchase_orders import PurchaseOrderService
from adapters.backend.variants import VariantService
from adapters.backend.warehouses import WarehouseService
from core.domain.derivations import dedupe_by_id, filter_by_product_id
from core.domain.matching import filter_by_keyword, normalize_keyword
from core.domain.models import (
    Contract,
    Expense,
    Product,
    ProductVariant,
    PurchaseDebt,
    PurchaseOrder,
    Supplier,
    WarehouseProduct,
)
from core.domain.query import FilterCriteria
from core.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ProductListSource:
    def __init__(self, products: ProductService) -> None:
        self._products = products

    async def fetch(self, keyword: str, filters: FilterCriteria) -> Sequence[Product]:
        term = keyword.strip()

        if filters.tags:
            items = await self._products.get_products_by_tags(sorted(filters.tags))
            items = filter_by_keyword(items, term)
        elif filters.category_id:
            items = filter_by_keyword(await self._products.get_products(), term)
        elif term:
            items = await self._products.search_products(term)
        else:
            items = await self._products.get_products()

        if filters.category_id:
            items = [
                p for p in items
                if p.product_category is not None and p.product_category.id == filters.category_id
            ]
        return items


class VariantListSource:
    def __init__(self, variants: VariantService) -> None:
        self._variants = variants

    async def _by_suppliers(self, supplier_ids: Sequence[str]) -> list[ProductVariant]:
        batches = await asyncio.gather(
            *(self._variants.get_product_variants_by_supplier_id(sid) for sid in supplier_ids)
        )
        merged = dedupe_by_id(item for batch in batches for item in batch)
        logger.debug("Merged %d variants from %d suppliers", len(merged), len(supplier_ids))
        return merged

    async def fetch(self, keyword: str, filters: FilterCriteria) -> Sequence[ProductVariant]:
        term = keyword.strip()

        if filters.supplier_ids:
            items = filter_by_keyword(await self._by_suppliers(sorted(filters.supplier_ids)), term)
        elif term:
            items = await self._variants.search_product_variants(term)
        else:
            items = await self._variants.get_product_variants()

        if filters.product_id:
            items = filter_by_product_id(items, filters.product_id)
        return items


class ExpenseListSource:
    def __init__(self, expenses: ExpenseService, *, page_size: int = 10) -> None:
        self._expenses = expenses
        self._page_size = page_size

    async def fetch(self, keyword: str, filters: FilterCriteria) -> Sequence[Expense]:
        term = keyword.strip()
        if term:
            return await self._expenses.search_expenses(term, page=0, size=self._page_size)
        return await self._expenses.get_expenses()


class SupplierListSource:
    def __init__(self, partners: PartnerService) -> None:
        self._partners = partners

    async def fetch(self, keyword: str, filters: FilterCriteria) -> Sequence[Supplier]:
        term = keyword.strip()
        if term:
            return await self._partners.search_suppliers(term)
        return await self._partners.get_suppliers()


class PurchaseOrderListSource:
    """Pedidos: el estado va al servidor y la palabra clave se aplica encima."""

    def __init__(self, orders: PurchaseOrderService, *, page_size: int = 10) -> None:
        self._orders = orders
        self._page_size = page_size

    async def fetch(self, keyword: str, filters: FilterCriteria) -> Sequence[PurchaseOrder]:
        term = keyword.strip()
        if filters.status:
            return filter_by_keyword(await self._orders.get_purchase_orders_by_status(filters.status), term)
        if term:
            return await self._orders.search_purchase_orders(term, page=0, size=self._page_size)
        return await self._orders.get_purchase_orders()


class WarehouseStockListSource:
    def __init__(self, warehouses: WarehouseService, warehouse_id: str) -> None:
        self._warehouses = warehouses
        self._warehouse_id = warehouse_id

    async def fetch(self, keyword: str, filters: FilterCriteria) -> Sequence[WarehouseProduct]:
        term = keyword.strip()
        if term:
            return await self._warehouses.search_warehouse_products(self._warehouse_id, term)
        return await self._warehouses.get_warehouse_products(self._warehouse_id)


class ContractListSource:
    def __init__(self, contracts: ContractService, *, page_size: int = 20) -> None:
        self._contracts = contracts
        self._page_size = page_size

    async def fetch(self, keyword: str, filters: FilterCriteria) -> Sequence[Contract]:
        term = keyword.strip()
        if term:
            items = await self._contracts.search_contracts(term, page=0, size=self._page_size)
        else:
            items = await self._contracts.get_contracts()
        if filters.status:
            items = [c for c in items if (c.status or "").upper() == filters.status]
        return items


class DebtListSource:
    def __init__(self, debts: DebtService) -> None:
        self._debts = debts

    async def fetch(self, keyword: str, filters: FilterCriteria) -> Sequence[PurchaseDebt]:
        term = keyword.strip()
        items = await self._debts.search_purchase_debts(term) if term else await self._debts.get_purchase_debts()
        if filters.status:
            items = [d for d in items if (d.status or "").upper() == filters.status]
        if filters.supplier_ids:
            items = [d for d in items if d.supplier is not None and d.supplier.id in filters.supplier_ids]
        return items


class CatalogListSource(Generic[T]):
    """Listas sin búsqueda en servidor (marcas, categorías, grupos, opciones)."""

    def __init__(self, fetch_all: Callable[[], Awaitable[Sequence[T]]]) -> None:
        self._fetch_all = fetch_all

    async def fetch(self, keyword: str, filters: FilterCriteria) -> Sequence[T]:
        items = await self._fetch_all()
        if not normalize_keyword(keyword):
            return list(items)
        return filter_by_keyword(items, keyword)
