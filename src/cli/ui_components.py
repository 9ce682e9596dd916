"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import ErrorDescriptor
from core.domain.models import (
    Brand,
    Category,
    Contract,
    Expense,
    GoodsReceipt,
    Group,
    ProductDisplayItem,
    ProductVariant,
    PurchaseDebt,
    PurchaseOrder,
    Supplier,
    Warehouse,
    WarehouseProduct,
)


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("BIZDESK", style="bold cyan")
    subtitle = Text("Catálogo • Compras • Proveedores • Gastos", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _active(value: bool | None) -> str:
    if value is None:
        return "-"
    return "[green]yes[/green]" if value else "[red]no[/red]"


def _money(value: float | int | None) -> str:
    if value is None:
        return "-"
    return f"{round(value):,}"


def build_products_table(items: Sequence[ProductDisplayItem]) -> Table:
    table = Table(title=f"Products ({len(items)})")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="white")
    table.add_column("Unit", style="white")
    table.add_column("Price", style="green", justify="right")
    table.add_column("Active")
    for item in items:
        table.add_row(item.id or "-", item.name or "-", item.type or "-", item.unit, _money(item.sell_price), _active(item.active))
    return table


def build_variants_table(items: Sequence[ProductVariant]) -> Table:
    table = Table(title=f"Variants ({len(items)})")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("SKU", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Product", style="magenta")
    table.add_column("Supplier", style="yellow")
    table.add_column("Price", style="green", justify="right")
    for v in items:
        table.add_row(
            v.id or "-",
            v.sku or "-",
            v.name or "-",
            (v.product.name if v.product else None) or "-",
            (v.supplier.name if v.supplier else None) or "-",
            _money(v.sell_price if v.sell_price is not None else v.standard_cost),
        )
    return table


def build_expenses_table(items: Sequence[Expense]) -> Table:
    table = Table(title=f"Expenses ({len(items)})")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Date", style="white", no_wrap=True)
    table.add_column("Description", style="cyan")
    table.add_column("Status", style="yellow")
    table.add_column("Amount", style="green", justify="right")
    for e in items:
        table.add_row(e.id or "-", e.expense_date or "-", e.description or "-", e.status or "-", _money(e.amount))
    return table


def build_suppliers_table(items: Sequence[Supplier]) -> Table:
    table = Table(title=f"Suppliers ({len(items)})")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Phone", style="magenta")
    table.add_column("Active")
    for s in items:
        table.add_row(s.id or "-", s.code or "-", s.name or "-", s.phone_number or "-", _active(s.active))
    return table


def build_catalog_table(title: str, items: Sequence[Brand | Category | Group]) -> Table:
    """Tabla genérica para marcas, categorías y grupos (id/nombre/descripción)."""

    table = Table(title=f"{title} ({len(items)})")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Description", style="white")
    for item in items:
        table.add_row(item.id or "-", item.name or "-", item.description or "-")
    return table


def _name(parent: Supplier | Warehouse | None) -> str:
    return (parent.name if parent else None) or "-"


def build_orders_table(items: Sequence[PurchaseOrder]) -> Table:
    table = Table(title=f"Purchase orders ({len(items)})")
    table.add_column("Number", style="cyan", no_wrap=True)
    table.add_column("Date", style="white", no_wrap=True)
    table.add_column("Supplier", style="yellow")
    table.add_column("Warehouse", style="magenta")
    table.add_column("Status", style="white")
    table.add_column("Total", style="green", justify="right")
    for o in items:
        table.add_row(
            o.order_number or o.id or "-",
            o.order_date or "-",
            _name(o.supplier),
            _name(o.warehouse),
            o.order_status or "-",
            _money(o.total_amount),
        )
    return table


def build_receipts_table(items: Sequence[GoodsReceipt]) -> Table:
    table = Table(title=f"Goods receipts ({len(items)})")
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Date", style="white", no_wrap=True)
    table.add_column("Order", style="dim")
    table.add_column("Warehouse", style="magenta")
    table.add_column("Status", style="white")
    table.add_column("Subtotal", style="green", justify="right")
    for r in items:
        order = (r.purchase_order.order_number if r.purchase_order else None) or "-"
        table.add_row(
            r.receipt_code or r.id or "-",
            r.receipt_date or "-",
            order,
            _name(r.warehouse),
            r.status or "-",
            _money(r.sub_total),
        )
    return table


def build_warehouses_table(items: Sequence[Warehouse]) -> Table:
    table = Table(title=f"Warehouses ({len(items)})")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="white")
    table.add_column("Address", style="white")
    for w in items:
        table.add_row(w.id or "-", w.name or "-", w.type or "-", w.address or "-")
    return table


def build_stock_table(items: Sequence[WarehouseProduct]) -> Table:
    table = Table(title=f"Stock ({len(items)})")
    table.add_column("SKU", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Qty", justify="right")
    table.add_column("Unit", style="white")
    table.add_column("Location", style="magenta")
    table.add_column("Price", style="green", justify="right")
    for p in items:
        qty = "-" if p.quantity is None else f"{p.quantity:g}"
        table.add_row(p.sku or "-", p.name or "-", qty, p.unit or "-", p.location or "-", _money(p.sell_price))
    return table


def build_contracts_table(items: Sequence[Contract]) -> Table:
    table = Table(title=f"Contracts ({len(items)})")
    table.add_column("Number", style="cyan", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Supplier", style="yellow")
    table.add_column("Status", style="white")
    table.add_column("Ends", style="white", no_wrap=True)
    table.add_column("Value", style="green", justify="right")
    for c in items:
        table.add_row(
            c.contract_number or c.id or "-",
            c.title or "-",
            _name(c.supplier),
            c.status or "-",
            c.end_date or "-",
            _money(c.total_value),
        )
    return table


def build_debts_table(items: Sequence[PurchaseDebt]) -> Table:
    table = Table(title=f"Supplier debts ({len(items)})")
    table.add_column("Supplier", style="yellow")
    table.add_column("Order", style="dim")
    table.add_column("Due", style="white", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Paid", style="green", justify="right")
    table.add_column("Remaining", style="red", justify="right")
    for d in items:
        order = (d.purchase_order.order_number if d.purchase_order else None) or "-"
        table.add_row(_name(d.supplier), order, d.due_date or "-", d.status or "-", _money(d.paid_amount), _money(d.remaining_amount))
    return table


def build_error_panel(error: ErrorDescriptor) -> Panel:
    body = Text(error.message)
    meta = f"status {error.status}" if not error.is_transport else "no response"
    if error.code:
        meta = f"{meta} • {error.code}"
    body.append(f"\n{meta}", style="dim")
    return Panel(body, title=Text("Error", style="bold red"), border_style="red")
