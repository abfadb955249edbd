from decimal import Decimal

import pandas as pd

from forms import blank_items_frame, items_from_dataframe, items_from_records, validate_invoice
from tax_calc import LineItem, TaxRegime, compute_totals


def test_blank_frame_has_one_default_row():
    df = blank_items_frame()
    assert list(df.columns) == ["description", "hsn", "quantity", "rate", "exclude"]
    assert len(df) == 1
    assert df.loc[0, "quantity"] == 1.0


def test_blank_rows_are_dropped():
    assert items_from_dataframe(blank_items_frame(3)) == []


def test_amount_follows_quantity_and_rate():
    df = pd.DataFrame([
        {"description": "Switch", "hsn": "8536", "quantity": 3, "rate": 33.335, "exclude": False},
        {"description": "Installation", "hsn": None, "quantity": 1, "rate": 500, "exclude": True},
    ])
    items = items_from_dataframe(df)
    assert [it.amount for it in items] == [Decimal("100.01"), Decimal("500.00")]
    assert items[0].hsn_code == "8536"
    assert items[1].hsn_code == ""
    assert items[1].exclude_from_tax is True


def test_unparseable_cells_count_as_zero():
    df = pd.DataFrame([
        {"description": "Half typed", "quantity": "2", "rate": "abc", "exclude": None},
        {"description": "Typed", "quantity": "x", "rate": "10", "exclude": "false"},
    ])
    items = items_from_dataframe(df)
    assert len(items) == 2
    assert items[0].quantity == Decimal("2")
    assert items[0].amount == Decimal("0.00")
    assert items[0].exclude_from_tax is False
    assert items[1].quantity == Decimal("0")
    assert items[1].exclude_from_tax is False


def test_text_cells_with_separators_and_rupee_sign():
    df = pd.DataFrame([
        {"description": "A", "quantity": "1", "rate": "1,200"},
        {"description": "B", "quantity": "2", "rate": "₹ 50"},
        {"description": "C", "quantity": None, "rate": float("nan")},
    ])
    items = items_from_dataframe(df)
    assert [it.amount for it in items[:2]] == [Decimal("1200.00"), Decimal("100.00")]
    assert items[1].rate == Decimal("50")
    assert items[2].quantity == Decimal("0")
    assert items[2].amount == Decimal("0.00")


def test_amount_column_is_kept_when_set():
    df = pd.DataFrame([
        {"Description": "Lump sum", "Quantity": 2, "Rate": 10, "Amount": 25},
        {"Description": "Recomputed", "Quantity": 2, "Rate": 10, "Amount": None},
    ])
    items = items_from_dataframe(df)
    assert items[0].amount == Decimal("25")
    assert items[1].amount == Decimal("20.00")


def test_edited_table_feeds_totals():
    df = pd.DataFrame([
        {"description": "Goods", "hsn": "", "quantity": 4, "rate": 250, "exclude": False},
        {"description": "Packing", "hsn": "", "quantity": 1, "rate": 500, "exclude": True},
    ])
    totals = compute_totals(items_from_dataframe(df), 18, TaxRegime.INTERSTATE)
    assert totals.subtotal == Decimal("1500.00")
    assert totals.grand_total == Decimal("1680.00")


def test_items_from_records():
    items = items_from_records([{"description": "A", "unit": 2, "amount": 50}])
    assert items == [LineItem(description="A", quantity=Decimal("2"), rate=Decimal("25"), amount=Decimal("50"))]
    assert items_from_records(None) == []


def test_validate_invoice_ok():
    items = [LineItem.create("Goods", 1, 100)]
    assert validate_invoice("Seller", "Buyer", "INV-1", items) == []


def test_validate_invoice_reports_each_problem():
    items = [LineItem.create("Goods", 1, 100), LineItem.create("  ", 1, 10)]
    problems = validate_invoice("", None, "INV-1", items)
    assert problems == [
        "Seller name is required",
        "Buyer name is required",
        "Item 2: description is required",
    ]


def test_validate_invoice_needs_items():
    assert validate_invoice("Seller", "Buyer", "INV-1", []) == ["Add at least one item"]
