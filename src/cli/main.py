"""CLI principal (Typer).

Por qué una CLI:
- Ejercita la capa de datos completa (transporte, sesión, adaptadores y
  controlador de listas) igual que lo haría una pantalla de la app.
- El token se persiste en el .env de usuario: la sesión del core vive solo
  en memoria.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar

import typer
from rich.console import Console

from adapters.backend import (
    AuthService,
    CatalogService,
    ContractService,
    DebtService,
    ExpenseService,
    GoodsReceiptService,
    PartnerService,
    ProductService,
    PurchaseOrderService,
    UploadService,
    VariantService,
    WarehouseService,
)
from adapters.http_client import TransportClient
from adapters.json_exporter import dump_items, export_items_json
from cli import doctor
from cli.ui_components import (
    build_catalog_table,
    build_contracts_table,
    build_debts_table,
    build_error_panel,
    build_expenses_table,
    build_orders_table,
    build_products_table,
    build_receipts_table,
    build_stock_table,
    build_suppliers_table,
    build_variants_table,
    build_warehouses_table,
    print_banner,
)
from core.config import AppSettings, write_user_env_vars
from core.domain.derivations import to_display_item
from core.domain.errors import ApiError
from core.domain.query import FilterCriteria
from core.interfaces.list_source import ListSource
from core.logger import setup_logger
from core.services.list_query import ListQueryController, ListState
from core.services.list_sources import (
    CatalogListSource,
    ContractListSource,
    DebtListSource,
    ExpenseListSource,
    ProductListSource,
    PurchaseOrderListSource,
    SupplierListSource,
    VariantListSource,
    WarehouseStockListSource,
)

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Bizdesk: catalog, purchasing, suppliers and expenses from the terminal.")
catalog_app = typer.Typer(no_args_is_help=True, help="Brands, categories and groups.")
app.add_typer(doctor.app, name="doctor")
app.add_typer(catalog_app, name="catalog")

_console = Console()


class _CliState:
    show_banner: bool = True


_state = _CliState()


def _banner() -> None:
    """Banner solo delante de salida para humanos (nunca antes de JSON)."""

    if _state.show_banner:
        _state.show_banner = False
        print_banner(_console)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the welcome banner."),
) -> None:
    settings = AppSettings()
    setup_logger(level="DEBUG" if verbose else settings.log_level, log_file=settings.log_file)
    _state.show_banner = banner


def _run(factory: Callable[[TransportClient, AppSettings], Awaitable[T]]) -> T:
    """Ejecuta una corrutina con un `TransportClient` abierto y traduce `ApiError`."""

    settings = AppSettings()

    async def runner() -> T:
        async with TransportClient(settings) as client:
            return await factory(client, settings)

    try:
        return asyncio.run(runner())
    except ApiError as exc:
        _console.print(build_error_panel(exc.descriptor))
        raise typer.Exit(code=1) from exc


async def _query(
    source: ListSource[T],
    settings: AppSettings,
    keyword: str,
    filters: FilterCriteria,
    *,
    slow: bool = False,
) -> ListState[T]:
    controller: ListQueryController[T] = ListQueryController.from_settings(
        source, settings, slow=slow, keyword=keyword, filters=filters
    )
    try:
        controller.start()
        return await controller.wait_idle()
    finally:
        controller.close()


def _show(
    state: ListState[Any],
    render: Callable[[Sequence[Any]], Any],
    *,
    as_json: bool,
    output: Path | None,
    display: Callable[[Any], Any] | None = None,
) -> None:
    if state.error is not None:
        _console.print(build_error_panel(state.error))
        raise typer.Exit(code=1)

    items = [display(i) for i in state.items] if display else list(state.items)
    if output is not None:
        path = export_items_json(items=items, output_path=output)
        _console.print(f"[green]Saved {len(items)} items to:[/green] {path}")
    elif as_json:
        _console.print_json(data=dump_items(items))
    else:
        _banner()
        _console.print(render(items))


_JSON = typer.Option(False, "--json", help="Print JSON instead of a table.")
_OUTPUT = typer.Option(None, "--output", "-o", help="Write the result to a JSON file.")
_SEARCH = typer.Option("", "--search", "-s", help="Keyword (name, SKU, code...).")


@app.command()
def login(
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Log in and store the access token in the user config .env."""

    async def do(client: TransportClient, settings: AppSettings) -> str | None:
        auth = AuthService(client, client.session)
        await auth.login(email, password)
        return auth.get_token()

    token = _run(do)
    if not token:
        _console.print("[red]Login response did not include an access token.[/red]")
        raise typer.Exit(code=1)
    _banner()
    env_path = write_user_env_vars({"BIZDESK_ACCESS_TOKEN": token})
    _console.print(f"[green]Logged in. Token saved to:[/green] {env_path}")


@app.command()
def logout() -> None:
    """Forget the stored access token."""

    _banner()
    env_path = write_user_env_vars({"BIZDESK_ACCESS_TOKEN": None})
    _console.print(f"[green]Logged out.[/green] ({env_path})")


@app.command()
def products(
    search: str = _SEARCH,
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Tag name (repeatable, OR)."),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category id."),
    as_json: bool = _JSON,
    output: Optional[Path] = _OUTPUT,
) -> None:
    """List products (tags/category combine with the keyword client-side)."""

    async def do(client: TransportClient, settings: AppSettings):
        source = ProductListSource(ProductService(client))
        return await _query(source, settings, search, FilterCriteria.of(tags=tag, category_id=category))

    _show(_run(do), build_products_table, as_json=as_json, output=output, display=to_display_item)


@app.command()
def tags() -> None:
    """List tag names (empty when the lookup fails)."""

    names = _run(lambda client, settings: ProductService(client).list_tag_names())
    _banner()
    for name in names:
        _console.print(f"- {name}")
    if not names:
        _console.print("[dim]No tags.[/dim]")


@app.command()
def variants(
    search: str = _SEARCH,
    supplier: Optional[List[str]] = typer.Option(None, "--supplier", help="Supplier id (repeatable, OR)."),
    product: Optional[str] = typer.Option(None, "--product", "-p", help="Only variants of this product id."),
    as_json: bool = _JSON,
    output: Optional[Path] = _OUTPUT,
) -> None:
    """List product variants."""

    async def do(client: TransportClient, settings: AppSettings):
        source = VariantListSource(VariantService(client))
        return await _query(source, settings, search, FilterCriteria.of(supplier_ids=supplier, product_id=product))

    _show(_run(do), build_variants_table, as_json=as_json, output=output)


@app.command()
def expenses(
    search: str = _SEARCH,
    size: int = typer.Option(10, "--size", min=1, help="Page size for server search."),
    as_json: bool = _JSON,
    output: Optional[Path] = _OUTPUT,
) -> None:
    """List expenses (newest first)."""

    async def do(client: TransportClient, settings: AppSettings):
        return await _query(ExpenseListSource(ExpenseService(client), page_size=size), settings, search, FilterCriteria())

    _show(_run(do), build_expenses_table, as_json=as_json, output=output)


@app.command()
def suppliers(
    search: str = _SEARCH,
    options: bool = typer.Option(False, "--options", help="Use the supplier filter lookup."),
    as_json: bool = _JSON,
    output: Optional[Path] = _OUTPUT,
) -> None:
    """List suppliers."""

    async def do(client: TransportClient, settings: AppSettings):
        partners = PartnerService(client, supplier_lookup_path=settings.supplier_lookup_path)
        source: ListSource[Any]
        if options:
            source = CatalogListSource(partners.list_supplier_options)
        else:
            source = SupplierListSource(partners)
        return await _query(source, settings, search, FilterCriteria())

    _show(_run(do), build_suppliers_table, as_json=as_json, output=output)


_STATUS = typer.Option(None, "--status", help="Status code (DRAFT, APPROVED, ACTIVE, PENDING...).")


@app.command()
def orders(
    search: str = _SEARCH,
    status: Optional[str] = _STATUS,
    size: int = typer.Option(10, "--size", min=1, help="Page size for server search."),
    as_json: bool = _JSON,
    output: Optional[Path] = _OUTPUT,
) -> None:
    """List purchase orders (newest first; status names may be typed in Vietnamese)."""

    async def do(client: TransportClient, settings: AppSettings):
        source = PurchaseOrderListSource(PurchaseOrderService(client), page_size=size)
        return await _query(source, settings, search, FilterCriteria.of(status=status))

    _show(_run(do), build_orders_table, as_json=as_json, output=output)


@app.command()
def receipts(search: str = _SEARCH, as_json: bool = _JSON, output: Optional[Path] = _OUTPUT) -> None:
    """List goods receipts (keyword filters locally)."""

    async def do(client: TransportClient, settings: AppSettings):
        source = CatalogListSource(GoodsReceiptService(client).get_goods_receipts)
        return await _query(source, settings, search, FilterCriteria())

    _show(_run(do), build_receipts_table, as_json=as_json, output=output)


@app.command()
def warehouses(
    search: str = _SEARCH,
    stock: Optional[str] = typer.Option(None, "--stock", help="Show the stock of this warehouse id."),
    as_json: bool = _JSON,
    output: Optional[Path] = _OUTPUT,
) -> None:
    """List warehouses, or the products stored in one of them."""

    async def do(client: TransportClient, settings: AppSettings):
        service = WarehouseService(client)
        source: ListSource[Any]
        if stock:
            source = WarehouseStockListSource(service, stock)
        else:
            source = CatalogListSource(service.get_warehouses)
        return await _query(source, settings, search, FilterCriteria())

    _show(_run(do), build_stock_table if stock else build_warehouses_table, as_json=as_json, output=output)


@app.command()
def contracts(
    search: str = _SEARCH,
    status: Optional[str] = _STATUS,
    as_json: bool = _JSON,
    output: Optional[Path] = _OUTPUT,
) -> None:
    """List supplier contracts."""

    async def do(client: TransportClient, settings: AppSettings):
        source = ContractListSource(ContractService(client))
        return await _query(source, settings, search, FilterCriteria.of(status=status), slow=True)

    _show(_run(do), build_contracts_table, as_json=as_json, output=output)


@app.command()
def debts(
    search: str = _SEARCH,
    status: Optional[str] = _STATUS,
    supplier: Optional[List[str]] = typer.Option(None, "--supplier", help="Supplier id (repeatable, OR)."),
    as_json: bool = _JSON,
    output: Optional[Path] = _OUTPUT,
) -> None:
    """List debts owed to suppliers."""

    async def do(client: TransportClient, settings: AppSettings):
        source = DebtListSource(DebtService(client))
        filters = FilterCriteria.of(status=status, supplier_ids=supplier)
        return await _query(source, settings, search, filters, slow=True)

    _show(_run(do), build_debts_table, as_json=as_json, output=output)


def _catalog_command(title: str, fetch_name: str) -> Callable[..., None]:
    def command(search: str = _SEARCH, as_json: bool = _JSON, output: Optional[Path] = _OUTPUT) -> None:
        async def do(client: TransportClient, settings: AppSettings):
            source = CatalogListSource(getattr(CatalogService(client), fetch_name))
            return await _query(source, settings, search, FilterCriteria())

        _show(_run(do), lambda items: build_catalog_table(title, items), as_json=as_json, output=output)

    command.__doc__ = f"List {title.lower()}."
    return command


catalog_app.command(name="brands")(_catalog_command("Brands", "get_brands"))
catalog_app.command(name="categories")(_catalog_command("Categories", "get_categories"))
catalog_app.command(name="groups")(_catalog_command("Groups", "get_groups"))


@app.command()
def upload(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    document: bool = typer.Option(False, "--document", help="Upload as document (returns metadata)."),
) -> None:
    """Upload an image (default) or a document."""

    if document:
        uploaded = _run(lambda client, settings: UploadService(client).upload_document(path))
        _console.print_json(data=dump_items([uploaded]))
        return

    reference = _run(lambda client, settings: UploadService(client).upload_image(path))
    _banner()
    _console.print(f"[green]Uploaded:[/green] {reference}")


def run() -> None:
    app()
