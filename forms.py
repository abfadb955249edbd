from typing import Dict, Iterable, List

import pandas as pd  # type: ignore

from tax_calc import LineItem, line_amount
from utils import parse_lenient_decimal

ITEM_COLUMNS = ["description", "hsn", "quantity", "rate", "exclude"]


def blank_items_frame(rows: int = 1) -> pd.DataFrame:
    """Empty line-item table for the editor."""
    return pd.DataFrame(
        [{"description": "", "hsn": "", "quantity": 1.0, "rate": 0.0, "exclude": False} for _ in range(rows)],
        columns=ITEM_COLUMNS,
    )


def _text(value) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()


def _checked(value) -> bool:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return False
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y")
    return bool(value)


def items_from_dataframe(df: pd.DataFrame) -> List[LineItem]:
    """
    Turn an edited line-item table into LineItems.
    Numeric cells go through parse_lenient_decimal, so "1,200" or "₹ 50"
    are read as typed and empty cells count as 0. Without an amount column
    (or with a 0 amount) the amount is quantity x rate. Blank rows are dropped.
    """
    df = df.copy()
    # normalize columns (case-insensitive)
    df.columns = [str(c).strip().lower() for c in df.columns]
    has_amount = "amount" in df.columns

    items = []
    for _, row in df.iterrows():
        quantity = parse_lenient_decimal(row.get("quantity", 1))
        rate = parse_lenient_decimal(row.get("rate", 0))
        computed = line_amount(quantity, rate)
        amount = parse_lenient_decimal(row["amount"]) if has_amount else computed
        if not amount:
            amount = computed
        description = _text(row.get("description"))
        if not description and not amount:
            continue
        items.append(LineItem(
            description=description,
            quantity=quantity,
            rate=rate,
            amount=amount,
            hsn_code=_text(row.get("hsn")),
            exclude_from_tax=_checked(row.get("exclude", False)),
        ))
    return items


def items_from_records(records: Iterable[Dict]) -> List[LineItem]:
    return [LineItem.from_record(r) for r in records or []]


def validate_invoice(seller_name, buyer_name, invoice_number, items) -> List[str]:
    """Problems that block saving an invoice; empty when it can be saved."""
    problems = []
    if not _text(seller_name):
        problems.append("Seller name is required")
    if not _text(buyer_name):
        problems.append("Buyer name is required")
    if not _text(invoice_number):
        problems.append("Invoice number is required")
    if not items:
        problems.append("Add at least one item")
    for i, item in enumerate(items or [], start=1):
        if not _text(item.description):
            problems.append(f"Item {i}: description is required")
    return problems
