"""
Unit tests for the domain service adapters.

Each test drives a real TransportClient over httpx.MockTransport and checks
the endpoint, parameters and normalized result.
"""

import asyncio
import json

import httpx
import pytest

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
from adapters.backend.auth import extract_login_token, extract_signup_token
from adapters.backend.base import clean_payload
from adapters.backend.purchase_orders import order_search_term
from adapters.backend.uploads import extract_upload_reference
from core.domain.errors import HttpError, NotWiredError, TransportError, UnexpectedResponseError
from core.domain.policies import LookupPolicy

from conftest import json_response


def _body(request: httpx.Request):
    return json.loads(request.content)


# clean_payload


def test_clean_payload_trims_and_omits_blanks():
    """Test strings are trimmed and empty optional fields dropped."""
    body = clean_payload({"name": "  Bolt ", "note": "", "brand": None, "price": 0, "active": False})

    assert body == {"name": "Bolt", "price": 0, "active": False}


def test_clean_payload_keeps_required_and_untrimmed():
    """Test required blanks are kept and passwords are sent verbatim."""
    body = clean_payload(
        {"id": "", "password": " secret ", "meta": {"code": " x "}},
        required=("id",),
        untrimmed=("password",),
    )

    assert body == {"id": "", "password": " secret ", "meta": {"code": "x"}}


def test_clean_payload_trims_inside_lists():
    """Test strings and mappings nested in lists are cleaned too."""
    body = clean_payload(
        {
            "documents": [" a.pdf ", "b.pdf"],
            "products": [{"variantId": " v1 ", "note": ""}, {"variantId": "v2", "quantity": 3}],
        }
    )

    assert body == {
        "documents": ["a.pdf", "b.pdf"],
        "products": [{"variantId": "v1"}, {"variantId": "v2", "quantity": 3}],
    }


# Products


def test_get_products_paginated_envelope(make_client, recorder):
    """Test getProducts unwraps {data: {content: [...]}}."""
    client = make_client(lambda r: json_response({"data": {"content": [{"id": "a"}, {"id": "b"}]}}))

    products = asyncio.run(ProductService(client).get_products())

    assert [p.id for p in products] == ["a", "b"]
    assert recorder.last.url.path == "/api/v1/products/get-products"


def test_search_products_blank_keyword_lists_all(make_client, recorder):
    """Test a blank search falls back to the full list."""
    client = make_client(lambda r: json_response([]))

    asyncio.run(ProductService(client).search_products("   "))

    assert recorder.last.url.path == "/api/v1/products/get-products"


def test_get_products_by_tags_joins_names(make_client, recorder):
    """Test tag names are sent comma-joined."""
    client = make_client(lambda r: json_response({"data": [{"id": "p"}]}))

    asyncio.run(ProductService(client).get_products_by_tags(["sale", " new "]))

    assert recorder.last.url.path == "/api/v1/products/get-product-by-tags"
    assert recorder.last.url.params["tagNames"] == "sale,new"


def test_get_product_detail_record(make_client, recorder):
    """Test detail reads a {data: {...}} record."""
    client = make_client(lambda r: json_response({"data": {"id": "p1", "name": "Bolt"}}))

    product = asyncio.run(ProductService(client).get_product_detail("p1"))

    assert product.name == "Bolt"
    assert recorder.last.url.params["productId"] == "p1"


@pytest.mark.parametrize(
    "response",
    [
        json_response({"success": False, "code": "NOT_FOUND", "message": "Product not found"}),
        httpx.Response(200, content=b"not found"),
    ],
)
def test_get_product_detail_status_body_is_missing(make_client, response):
    """Test a 200 carrying only a status message means no product."""
    client = make_client(lambda r: response)

    assert asyncio.run(ProductService(client).get_product_detail("x")) is None


def test_get_products_for_display(make_client):
    """Test the display projection is applied to every product."""
    client = make_client(lambda r: json_response([{"id": "p1", "name": "Bolt", "sellPrice": 10}]))

    items = asyncio.run(ProductService(client).get_products_for_display())

    assert items[0].sell_price == 10
    assert items[0].unit == "cái"


def test_product_status_writes(make_client, recorder):
    """Test activate/deactivate hit their own endpoints with the id."""
    client = make_client(lambda r: json_response({"message": "ok"}))
    service = ProductService(client)

    async def scenario():
        await service.activate_product("p1")
        await service.deactivate_product("p1")

    asyncio.run(scenario())

    assert recorder.paths() == ["/api/v1/products/active-product", "/api/v1/products/unactive-product"]
    assert _body(recorder.last) == {"id": "p1"}


def test_list_tag_names_deduplicates(make_client):
    """Test tag names are collected from products without duplicates."""
    client = make_client(
        lambda r: json_response(
            [{"id": "1", "tags": [{"name": "sale"}, {"name": "new"}]}, {"id": "2", "tags": [{"name": "sale"}]}]
        )
    )

    assert asyncio.run(ProductService(client).list_tag_names()) == ["sale", "new"]


def test_list_tag_names_empty_on_error(make_client):
    """Test the tag lookup degrades to an empty list."""
    client = make_client(lambda r: json_response({"message": "boom"}, status=500))

    assert asyncio.run(ProductService(client).list_tag_names()) == []


def test_list_tag_names_propagates_when_policy_changed(make_client):
    """Test a PROPAGATE policy surfaces the lookup failure."""
    client = make_client(lambda r: json_response({"message": "boom"}, status=500))
    service = ProductService(client)
    service.tag_lookup_policy = LookupPolicy.PROPAGATE

    with pytest.raises(HttpError):
        asyncio.run(service.list_tag_names())


def test_primary_reads_propagate_errors(make_client):
    """Test list reads do not swallow errors."""
    client = make_client(lambda r: json_response({"message": "Unauthorized"}, status=401))

    with pytest.raises(HttpError) as exc_info:
        asyncio.run(ProductService(client).get_products())

    assert exc_info.value.is_unauthorized


# Variants


def test_variant_endpoints(make_client, recorder):
    """Test variant lookups by id and supplier use their parameters."""
    client = make_client(lambda r: json_response({"data": [{"id": "v1"}]}))
    service = VariantService(client)

    async def scenario():
        await service.get_product_variants_by_supplier_id("s1")
        await service.get_product_variant_by_id("v1")

    asyncio.run(scenario())

    assert recorder.requests[0].url.params["supplierId"] == "s1"
    assert recorder.requests[1].url.params["productVariantId"] == "v1"


def test_get_variants_for_product_filters_client_side(make_client):
    """Test variants are scoped to a product after the search."""
    client = make_client(
        lambda r: json_response(
            {"data": [{"id": "v1", "product": {"id": "p1"}}, {"id": "v2", "product": {"id": "p2"}}]}
        )
    )

    variants = asyncio.run(VariantService(client).get_variants_for_product("p2", "bolt"))

    assert [v.id for v in variants] == ["v2"]


# Catalog


def test_catalog_lists_sorted_by_recency(make_client, recorder):
    """Test brands are returned newest first."""
    client = make_client(
        lambda r: json_response(
            [
                {"id": "old", "createdAt": "2024-01-01T00:00:00Z"},
                {"id": "new", "createdAt": "2024-05-01T00:00:00Z"},
            ]
        )
    )

    brands = asyncio.run(CatalogService(client).get_brands())

    assert [b.id for b in brands] == ["new", "old"]


def test_create_category_trims_body(make_client, recorder):
    """Test writes send a cleaned body."""
    client = make_client(lambda r: json_response({"data": {"id": "c1"}}))

    asyncio.run(CatalogService(client).create_category("  Tools  "))

    assert recorder.last.url.path.endswith("/create-category")
    assert _body(recorder.last) == {"name": "Tools"}


def test_writes_propagate_transport_errors(make_client):
    """Test writes never fall back on failure."""

    def handler(request):
        raise httpx.ConnectError("down", request=request)

    client = make_client(handler)

    with pytest.raises(TransportError):
        asyncio.run(CatalogService(client).delete_brand("b1"))


# Expenses


def test_search_expenses_flat_array(make_client, recorder):
    """Test searchExpenses("electric") returns the matching record."""
    client = make_client(lambda r: json_response({"data": [{"description": "Electric bill"}]}))

    expenses = asyncio.run(ExpenseService(client).search_expenses("electric"))

    assert len(expenses) == 1
    assert expenses[0].description == "Electric bill"
    assert expenses[0].id is None
    params = recorder.last.url.params
    assert params["search"] == "electric"
    assert params["page"] == "0"
    assert params["size"] == "10"
    assert params["sort"] == "createdAt,desc"


# Partners


def test_supplier_by_id(make_client, recorder):
    """Test supplier detail endpoint and parameter."""
    client = make_client(lambda r: json_response({"data": {"id": "s1", "name": "ACME"}}))

    supplier = asyncio.run(PartnerService(client).get_supplier_by_id("s1"))

    assert supplier.name == "ACME"
    assert recorder.last.url.path == "/api/v1/partners/get-suppliers-by-id"


def test_supplier_options_not_wired(make_client, recorder):
    """Test a missing lookup path is reported instead of returning fake data."""
    client = make_client(lambda r: json_response([]))

    with pytest.raises(NotWiredError) as exc_info:
        asyncio.run(PartnerService(client, supplier_lookup_path=None).list_supplier_options())

    assert exc_info.value.descriptor.code == "not_implemented"
    assert exc_info.value.descriptor.status == 0
    assert recorder.requests == []


def test_supplier_options_empty_on_error(make_client):
    """Test the supplier filter lookup degrades to an empty list."""
    client = make_client(lambda r: json_response({"message": "boom"}, status=502))

    assert asyncio.run(PartnerService(client).list_supplier_options()) == []


def test_supplier_status_writes(make_client, recorder):
    """Test supplier activation endpoints."""
    client = make_client(lambda r: json_response({}))
    service = PartnerService(client)

    async def scenario():
        await service.activate_supplier("s1")
        await service.deactivate_supplier("s1")

    asyncio.run(scenario())

    assert recorder.paths() == ["/api/v1/partners/activate-supplier", "/api/v1/partners/unactivate-supplier"]


# Auth


def test_login_stores_token(make_client, session, recorder):
    """Test a successful login stores the token for later requests."""
    client = make_client(lambda r: json_response({"accessToken": "abc", "user": {"email": "a@b.c"}}))
    auth = AuthService(client, session)

    asyncio.run(auth.login(" a@b.c ", " pass word "))

    assert auth.get_token() == "abc"
    assert session.is_authenticated
    assert _body(recorder.last) == {"email": "a@b.c", "password": " pass word "}


def test_login_failure_keeps_session_empty(make_client, session):
    """Test a rejected login leaves the session untouched."""
    client = make_client(lambda r: json_response({"message": "Invalid credentials"}, status=401))

    with pytest.raises(HttpError):
        asyncio.run(AuthService(client, session).login("a@b.c", "bad"))

    assert session.token is None


def test_logout_clears_token(make_client, session, recorder):
    """Test logout clears the token and later requests are anonymous."""
    session.set_token("abc")
    client = make_client(lambda r: json_response([]))
    auth = AuthService(client, session)

    auth.logout()
    asyncio.run(ProductService(client).get_products())

    assert auth.get_token() is None
    assert "Authorization" not in recorder.last.headers


def test_token_extractors():
    """Test the token locations accepted for login and signup."""
    assert extract_login_token({"data": {"accessToken": "x"}}) == "x"
    assert extract_login_token({"token": "y"}) is None
    assert extract_signup_token({"token": "y"}) == "y"
    assert extract_signup_token({"data": {"accessToken": "z"}}) == "z"


def test_reset_password_body(make_client, recorder, session):
    """Test reset-password sends newPassword untrimmed."""
    client = make_client(lambda r: json_response({"message": "ok"}))

    asyncio.run(AuthService(client, session).reset_password("a@b.c", "123456", " new "))

    assert recorder.last.url.path == "/api/v1/auth/reset-password"
    assert _body(recorder.last) == {"email": "a@b.c", "otp": "123456", "newPassword": " new "}


# Uploads


def test_extract_upload_reference_data_path():
    """Test {data: {path: ...}} yields the path."""
    assert extract_upload_reference({"data": {"path": "/img/123.jpg"}}) == "/img/123.jpg"


def test_extract_upload_reference_order():
    """Test id wins over file paths and plain string data is accepted."""
    assert extract_upload_reference({"id": 5, "filePath": "/x"}) == "5"
    assert extract_upload_reference({"data": "/uploads/a.png"}) == "/uploads/a.png"
    assert extract_upload_reference({"message": "ok"}) is None


def test_upload_image_falls_back_once(make_client, recorder, tmp_path):
    """Test a failing upload-document is retried once on uploads."""
    image = tmp_path / "a.png"
    image.write_bytes(b"png")

    def handler(request):
        if request.url.path.endswith("/upload-document"):
            return json_response({"message": "nope"}, status=500)
        return json_response({"data": {"path": "/img/123.jpg"}})

    client = make_client(handler)

    reference = asyncio.run(UploadService(client).upload_image(image))

    assert reference == "/img/123.jpg"
    assert recorder.paths() == ["/api/v1/user/upload-document", "/api/v1/user/uploads"]


def test_upload_image_without_reference(make_client, tmp_path):
    """Test a 2xx upload without a file reference is an error."""
    image = tmp_path / "a.png"
    image.write_bytes(b"png")
    client = make_client(lambda r: json_response({"message": "stored"}))

    with pytest.raises(UnexpectedResponseError):
        asyncio.run(UploadService(client).upload_image(image))


def test_upload_document_metadata(make_client, tmp_path):
    """Test upload_document parses the uploaded document record."""
    doc = tmp_path / "invoice.pdf"
    doc.write_bytes(b"%PDF")
    client = make_client(
        lambda r: json_response({"data": {"id": "d1", "fileName": "invoice.pdf", "filePath": "/docs/d1.pdf"}})
    )

    uploaded = asyncio.run(UploadService(client).upload_document(doc))

    assert uploaded.id == "d1"
    assert uploaded.file_path == "/docs/d1.pdf"


# Purchase orders


def test_get_purchase_orders_newest_first(make_client, recorder):
    """Test the order list asks the server for the newest orders first."""
    client = make_client(lambda r: json_response({"data": {"content": [{"id": "o1", "orderNumber": "PO-1"}]}}))

    orders = asyncio.run(PurchaseOrderService(client).get_purchase_orders())

    assert orders[0].order_number == "PO-1"
    params = recorder.last.url.params
    assert recorder.last.url.path == "/api/v1/purchase-orders/get-orders"
    assert (params["page"], params["size"], params["sort"]) == ("0", "100", "orderDate,desc")


@pytest.mark.parametrize(
    "typed, sent",
    [("Nháp", "DRAFT"), ("da duyet", "APPROVED"), (" đã huỷ ", "CANCELLED"), ("PO-7", "PO-7")],
)
def test_order_search_term_translates_status_names(typed, sent):
    """Test status names typed in Vietnamese are sent as status codes."""
    assert order_search_term(typed) == sent


def test_search_purchase_orders_params(make_client, recorder):
    """Test order search sends the translated term with paging and sort."""
    client = make_client(lambda r: json_response({"data": [{"id": "o1", "orderStatus": "DRAFT"}]}))

    orders = asyncio.run(PurchaseOrderService(client).search_purchase_orders("nhap", size=5))

    assert orders[0].order_status == "DRAFT"
    params = recorder.last.url.params
    assert recorder.last.url.path == "/api/v1/purchase-orders/search-orders"
    assert params["search"] == "DRAFT"
    assert params["size"] == "5"
    assert params["sort"] == "createdAt,desc"


def test_purchase_order_detail_nested_parties(make_client, recorder):
    """Test detail parses supplier, warehouse and order lines."""
    client = make_client(
        lambda r: json_response(
            {
                "data": {
                    "id": "o1",
                    "supplier": {"id": "s1", "name": "ACME"},
                    "warehouse": {"id": "w1", "name": "Main"},
                    "products": [{"id": "l1", "quantity": 2}],
                    "totalAmount": 1000,
                }
            }
        )
    )

    order = asyncio.run(PurchaseOrderService(client).get_purchase_order_by_id("o1"))

    assert order.supplier.name == "ACME"
    assert order.warehouse.name == "Main"
    assert order.products == ({"id": "l1", "quantity": 2},)
    assert recorder.last.url.params["purchaseOrderId"] == "o1"


def test_purchase_order_status_writes(make_client, recorder):
    """Test approve, cancel and delete post the order id."""
    client = make_client(lambda r: json_response({"success": True}))
    service = PurchaseOrderService(client)

    async def scenario():
        await service.approve_purchase_order("o1")
        await service.cancel_purchase_order("o1")
        await service.delete_purchase_order("o1")

    asyncio.run(scenario())

    assert recorder.paths() == [
        "/api/v1/purchase-orders/approve-order-status",
        "/api/v1/purchase-orders/cancel-order",
        "/api/v1/purchase-orders/delete-order",
    ]
    assert all(_body(r) == {"id": "o1"} for r in recorder.requests)


def test_create_purchase_order_cleans_lines(make_client, recorder):
    """Test order lines are trimmed and blank notes dropped."""
    client = make_client(lambda r: json_response({"data": {"id": "o9"}}))

    asyncio.run(
        PurchaseOrderService(client).create_purchase_order(
            {
                "supplier": " s1 ",
                "warehouse": "w1",
                "products": [{"variantId": "v1", "quantity": 2, "note": " "}],
                "description": "",
            }
        )
    )

    assert _body(recorder.last) == {
        "supplier": "s1",
        "warehouse": "w1",
        "products": [{"variantId": "v1", "quantity": 2}],
    }


# Warehouses and goods receipts


def test_warehouse_product_search_params(make_client, recorder):
    """Test stock search sends the warehouse id and the filter term."""
    client = make_client(lambda r: json_response({"data": [{"id": "p1", "sku": "B-8", "quantity": 4, "stack": 2}]}))

    items = asyncio.run(WarehouseService(client).search_warehouse_products("w1", " bolt "))

    assert items[0].quantity == 4
    assert recorder.last.url.path == "/api/v1/warehouses/get-products-warehouse-filter"
    assert recorder.last.url.params["warehouseId"] == "w1"
    assert recorder.last.url.params["filter"] == "bolt"


def test_warehouse_product_search_blank_lists_stock(make_client, recorder):
    """Test a blank stock search lists the whole warehouse."""
    client = make_client(lambda r: json_response([]))

    asyncio.run(WarehouseService(client).search_warehouse_products("w1", ""))

    assert recorder.last.url.path == "/api/v1/warehouses/get-products-warehouse"


def test_product_warehouse_detail(make_client, recorder):
    """Test the per-warehouse product detail carries its warehouse."""
    client = make_client(
        lambda r: json_response({"data": {"id": "p1", "location": "A-3", "warehouse": {"id": "w1", "type": "MAIN"}}})
    )

    item = asyncio.run(WarehouseService(client).get_product_warehouse_by_id("p1", "w1"))

    assert item.location == "A-3"
    assert item.warehouse.type == "MAIN"
    assert dict(recorder.last.url.params) == {"productId": "p1", "warehouseId": "w1"}


def test_goods_receipts_list_and_status_change(make_client, recorder):
    """Test the receipt list sort and the status change body."""
    client = make_client(lambda r: json_response({"data": [{"id": "g1", "receiptCode": "GR-1"}]}))
    service = GoodsReceiptService(client)

    async def scenario():
        items = await service.get_goods_receipts()
        await service.change_goods_receipt_status("g1")
        return items

    items = asyncio.run(scenario())

    assert items[0].receipt_code == "GR-1"
    assert recorder.requests[0].url.params["sort"] == "receiptDate,desc"
    assert recorder.paths()[1] == "/api/v1/goods-receipts/change-goods-receipt-status"
    assert _body(recorder.last) == {"id": "g1"}


# Contracts and debts


def test_contract_transitions_use_query_id(make_client, recorder):
    """Test activate/cancel send the id in the query string without a body."""
    client = make_client(lambda r: json_response({"success": True}))
    service = ContractService(client)

    async def scenario():
        await service.activate_contract("c1")
        await service.cancel_contract("c1")

    asyncio.run(scenario())

    assert recorder.paths() == ["/api/v1/contracts/activate-contract", "/api/v1/contracts/cancel-contract"]
    for request in recorder.requests:
        assert request.method == "POST"
        assert request.url.params["id"] == "c1"
        assert request.content == b""


def test_search_contracts_params(make_client, recorder):
    """Test contract search paging defaults."""
    client = make_client(lambda r: json_response({"data": {"content": [{"id": "c1", "contractNumber": "HD-01"}]}}))

    contracts = asyncio.run(ContractService(client).search_contracts("hd"))

    assert contracts[0].contract_number == "HD-01"
    assert dict(recorder.last.url.params) == {"search": "hd", "page": "0", "size": "20"}


def test_purchase_debts_list_and_search(make_client, recorder):
    """Test the debt list size and the debt search endpoint."""
    client = make_client(
        lambda r: json_response([{"id": "d1", "remainingAmount": 500, "supplier": {"id": "s1", "name": "ACME"}}])
    )
    service = DebtService(client)

    async def scenario():
        await service.get_purchase_debts()
        return await service.search_purchase_debts(" acme ")

    debts = asyncio.run(scenario())

    assert debts[0].remaining_amount == 500
    assert debts[0].supplier.name == "ACME"
    assert recorder.requests[0].url.params["size"] == "100"
    assert recorder.last.url.path == "/api/v1/purchase-debts/search-purchase-debts"
    assert recorder.last.url.params["search"] == "acme"


def test_purchase_debt_detail_missing(make_client):
    """Test a debt detail with a status-only body is None."""
    client = make_client(lambda r: json_response({"success": False, "message": "Debt not found"}))

    assert asyncio.run(DebtService(client).get_purchase_debt_by_id("d9")) is None
