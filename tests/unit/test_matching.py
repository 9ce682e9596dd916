"""
Unit tests for client-side keyword matching and filter criteria.
"""

from core.domain.matching import filter_by_keyword, matches_keyword, normalize_keyword
from core.domain.models import GoodsReceipt, Product, ProductVariant
from core.domain.query import FilterCriteria


def _variant(**fields):
    return ProductVariant.model_validate(fields)


def test_normalize_keyword():
    """Test keywords are trimmed and case-folded."""
    assert normalize_keyword("  Bolt ") == "bolt"
    assert normalize_keyword(None) == ""


def test_blank_keyword_matches_everything():
    """Test an empty keyword is not a filter."""
    variant = _variant(id="v1")

    assert matches_keyword(variant, "   ")


def test_matches_direct_fields_case_insensitive():
    """Test substring match over SKU, model and part number."""
    variant = _variant(id="v1", sku="SKU-42", model="X200", partNumber="PN-7")

    assert matches_keyword(variant, "sku-4")
    assert matches_keyword(variant, "x2")
    assert matches_keyword(variant, "pn-7")
    assert not matches_keyword(variant, "zzz")


def test_matches_parent_product_and_supplier():
    """Test parent product and supplier names/codes are searchable."""
    variant = _variant(
        id="v1",
        product={"id": "p1", "name": "Hex Bolt", "productCode": "HB-01"},
        supplier={"id": "s1", "name": "Acme Metals", "code": "ACM"},
    )

    assert matches_keyword(variant, "hex")
    assert matches_keyword(variant, "hb-01")
    assert matches_keyword(variant, "acme")
    assert matches_keyword(variant, "acm")


def test_filter_by_keyword_preserves_order():
    """Test filtering keeps the input order."""
    products = [
        Product.model_validate({"id": "1", "name": "Bolt M8"}),
        Product.model_validate({"id": "2", "name": "Nut"}),
        Product.model_validate({"id": "3", "description": "bolt kit"}),
    ]

    assert [p.id for p in filter_by_keyword(products, "BOLT")] == ["1", "3"]


def test_filter_criteria_cleans_inputs():
    """Test blank values are dropped and structured filters detected."""
    criteria = FilterCriteria.of(tags=["  sale ", "", "new"], supplier_ids=None, category_id="  ")

    assert criteria.tags == frozenset({"sale", "new"})
    assert criteria.category_id is None
    assert criteria.has_structured
    assert not FilterCriteria.of().has_structured


def test_filter_criteria_equality():
    """Test equal criteria compare equal regardless of input order."""
    assert FilterCriteria.of(tags=["a", "b"]) == FilterCriteria.of(tags=["b", "a"])


def test_filter_criteria_status_normalized():
    """Test the status filter is trimmed, upper-cased and structured."""
    criteria = FilterCriteria.of(status=" pending ")

    assert criteria.status == "PENDING"
    assert criteria.has_structured
    assert FilterCriteria.of(status="  ").status is None


def test_matches_document_numbers_and_parents():
    """Test receipt codes, order numbers and warehouse names are searchable."""
    receipt = GoodsReceipt.model_validate(
        {
            "id": "g1",
            "receiptCode": "GR-2024-07",
            "purchaseOrder": {"id": "o1", "orderNumber": "PO-555"},
            "warehouse": {"id": "w1", "name": "Kho Hà Nội"},
        }
    )

    assert matches_keyword(receipt, "gr-2024")
    assert matches_keyword(receipt, "po-555")
    assert matches_keyword(receipt, "hà nội")
    assert not matches_keyword(receipt, "zzz")
