"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación tolerante en el borde: el backend no controla su forma de
  respuesta, así que todo atributo admite ausencia.
- Snapshots inmutables (`frozen`): una actualización siempre pasa por una
  llamada al adaptador que devuelve un snapshot nuevo.

Nota:
- El wire format es camelCase; en Python usamos snake_case vía alias.
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


def _parse_timestamp(value: object) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class Entity(BaseModel):
    """Base de las entidades devueltas por los adaptadores."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: str | None = Field(default=None, description="Identidad del recurso en el backend.")
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _lenient_timestamp(cls, value: object) -> datetime | None:
        # Timestamps ilegibles no invalidan el registro completo.
        return _parse_timestamp(value)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


def _none_as_empty(value: object) -> object:
    return () if value is None else value


class ProductImage(Entity):
    image_url: str | None = None
    is_primary: bool = False


class ProductTag(Entity):
    name: str | None = None


class Brand(Entity):
    name: str | None = None
    description: str | None = None


class Category(Entity):
    name: str | None = None
    description: str | None = None


class Group(Entity):
    group_id: str | None = None
    name: str | None = None
    description: str | None = None
    job_type: str | None = None
    tncnntax: float | None = None
    gtgttax: float | None = None


class Supplier(Entity):
    """Proveedor (partner) tal como lo expone `/partners`."""

    code: str | None = None
    name: str | None = None
    address: str | None = None
    tax_code: str | None = None
    phone_number: str | None = None
    email: str | None = None
    bank_name: str | None = None
    bank_account: str | None = None
    bank_branch: str | None = None
    payment_term_days: int | None = None
    description: str | None = None
    active: bool | None = None
    supplier_type: str | None = None
    debt_recognition_mode: str | None = None
    debt_date: str | None = None
    max_debt: float | None = None


class ProductRef(Entity):
    """Referencia al producto padre anidada dentro de una variante."""

    name: str | None = None
    product_code: str | None = None
    sku: str | None = None


class ProductVariant(Entity):
    sku: str | None = None
    name: str | None = None
    model: str | None = None
    part_number: str | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    unit: str | None = None
    standard_cost: float | None = None
    last_purchase_cost: float | None = None
    sell_price: float | None = None
    active: bool | None = None
    product: ProductRef | None = Field(
        default=None,
        description="Producto padre; base del filtrado por clave foránea.",
    )
    supplier: Supplier | None = None
    documents: tuple[dict[str, Any], ...] = ()

    @field_validator("attributes", mode="before")
    @classmethod
    def _attributes_default(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("documents", mode="before")
    @classmethod
    def _documents_default(cls, value: object) -> object:
        return _none_as_empty(value)


class Product(Entity):
    """Producto del catálogo.

    `variants` solo viene relleno en algunos endpoints de detalle; la
    derivación de unidad/precio para display lo usa como respaldo.
    """

    product_category: Category | None = None
    product_group: Group | None = None
    brand: Brand | None = None
    tags: tuple[ProductTag, ...] = ()
    images: tuple[ProductImage, ...] = ()
    variants: tuple[ProductVariant, ...] = Field(
        default=(),
        validation_alias=AliasChoices("productVariants", "variants"),
        description="Variantes anidadas (si el payload las incluye).",
    )
    sku: str | None = None
    product_code: str | None = None
    name: str | None = None
    description: str | None = None
    type: str | None = None
    unit: str | None = None
    model: str | None = None
    part_number: str | None = None
    serial_number: str | None = None
    cost_price: float | None = None
    sell_price: float | None = None
    min_stock: float | None = None
    active: bool | None = None

    @field_validator("tags", "images", "variants", mode="before")
    @classmethod
    def _collections_default(cls, value: object) -> object:
        return _none_as_empty(value)


class ProductDisplayItem(BaseModel):
    """Proyección ligera de `Product` para listas."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str | None
    image: str | None = Field(default=None, description="URL de la imagen principal.")
    name: str | None = None
    unit: str = "cái"
    type: str | None = None
    sell_price: int = 0
    active: bool | None = None


class Warehouse(Entity):
    code: str | None = None
    name: str | None = None
    address: str | None = None
    type: str | None = Field(default=None, description="MAIN o TEMP.")
    description: str | None = None


class WarehouseProduct(Entity):
    """Producto visto desde un almacén (existencias y ubicación).

    El detalle (`get-product-warehouse-by-id`) añade `warehouse` y los
    precios; el listado solo trae cantidad, ubicación y precio de venta.
    """

    name: str | None = None
    sku: str | None = None
    model: str | None = None
    part_number: str | None = None
    unit: str | None = None
    quantity: float | None = None
    cost_price: float | None = None
    sell_price: float | None = None
    location: str | None = None
    stack: int | None = None
    expired_date: str | None = None
    images: tuple[ProductImage, ...] = ()
    warehouse: Warehouse | None = None

    @field_validator("images", mode="before")
    @classmethod
    def _images_default(cls, value: object) -> object:
        return _none_as_empty(value)


class ContractTerm(Entity):
    title: str | None = None
    note: str | None = None
    status: str | None = None
    payment_date: str | None = None
    due_date: str | None = None
    amount: float | None = None


class ContractItem(Entity):
    product: ProductRef | None = None
    quantity: float | None = None
    note: str | None = None
    unit_price: float | None = None
    total_price: float | None = None
    tax: float | None = None
    discount: float | None = None


class Contract(Entity):
    """Contrato con un proveedor.

    Los listados traen solo cabecera y proveedor; `terms` e `items` vienen
    rellenos en el detalle.
    """

    supplier: Supplier | None = None
    documents: tuple[dict[str, Any], ...] = ()
    terms: tuple[ContractTerm, ...] = ()
    items: tuple[ContractItem, ...] = ()
    title: str | None = None
    contract_number: str | None = None
    payment_term_days: int | None = None
    debt_recognition_mode: str | None = None
    contract_type: str | None = None
    status: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    sign_date: str | None = None
    total_value: float | None = None

    @field_validator("documents", "terms", "items", mode="before")
    @classmethod
    def _collections_default(cls, value: object) -> object:
        return _none_as_empty(value)


class PurchaseOrder(Entity):
    supplier: Supplier | None = None
    warehouse: Warehouse | None = None
    contract: Contract | None = None
    products: tuple[dict[str, Any], ...] = Field(
        default=(),
        description="Líneas del pedido tal cual las devuelve el backend.",
    )
    documents: tuple[dict[str, Any], ...] = ()
    order_number: str | None = None
    description: str | None = None
    note: str | None = None
    order_status: str | None = None
    order_date: str | None = None
    sub_total: float | None = None
    tax_amount: float | None = None
    total_amount: float | None = None

    @field_validator("products", "documents", mode="before")
    @classmethod
    def _collections_default(cls, value: object) -> object:
        return _none_as_empty(value)


class GoodsReceipt(Entity):
    purchase_order: PurchaseOrder | None = None
    warehouse: Warehouse | None = None
    supplier: Supplier | None = None
    documents: tuple[dict[str, Any], ...] = ()
    products: tuple[dict[str, Any], ...] = ()
    receipt_code: str | None = None
    description: str | None = None
    note: str | None = None
    status: str | None = None
    receipt_date: str | None = None
    sub_total: float | None = None

    @field_validator("documents", "products", mode="before")
    @classmethod
    def _collections_default(cls, value: object) -> object:
        return _none_as_empty(value)


class PurchaseDebt(Entity):
    """Deuda con proveedor generada por un pedido de compra."""

    purchase_order: PurchaseOrder | None = None
    supplier: Supplier | None = None
    description: str | None = None
    note: str | None = None
    status: str | None = None
    due_date: str | None = None
    original_amount: float | None = None
    remaining_amount: float | None = None
    paid_amount: float | None = None


class Expense(Entity):
    purchase_order: PurchaseOrder | None = None
    description: str | None = None
    note: str | None = None
    type: str | None = None
    status: str | None = None
    payment_status: str | None = None
    expense_date: str | None = None
    amount: float | None = None


class UserData(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    avatar: str | None = None


class UploadedDocument(Entity):
    file_name: str
    file_path: str
    uploaded_at: str | None = None
