"""Adaptadores de dominio sobre el backend REST.

Por qué un paquete:
- Un módulo por familia de recursos (productos, variantes, catálogo, gastos,
  proveedores, compras, almacenes, contratos, deudas, auth, uploads).
- Todos dependen de `core.interfaces.transport.Transport` y normalizan con
  `core.domain.envelope`.
"""

from adapters.backend.auth import AuthService
from adapters.backend.catalog import CatalogService
from adapters.backend.contracts import ContractService
from adapters.backend.debts import DebtService
from adapters.backend.expenses import ExpenseService
from adapters.backend.goods_receipts import GoodsReceiptService
from adapters.backend.partners import PartnerService
from adapters.backend.products import ProductService
from adapters.backend.purchase_orders import PurchaseOrderService
from adapters.backend.uploads import UploadService
from adapters.backend.variants import VariantService
from adapters.backend.warehouses import WarehouseService

__all__ = [
	"AuthService",
	"CatalogService",
	"ContractService",
	"DebtService",
	"ExpenseService",
	"GoodsReceiptService",
	"PartnerService",
	"ProductService",
	"PurchaseOrderService",
	"UploadService",
	"VariantService",
	"WarehouseService",
]
