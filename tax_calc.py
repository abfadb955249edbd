import logging
from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_UP, localcontext
from enum import Enum
from typing import Iterable, Mapping

from utils import parse_lenient_decimal

logger = logging.getLogger(__name__)

DEFAULT_GST_RATE = 18
GST_RATE_OPTIONS = (0, 5, 12, 18, 28)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# line amounts and rates with this many integer digits or more count as 0
MAX_DIGITS = 30


def money(val) -> Decimal:
    """Round to 2 decimals (half away from zero) for money values."""
    number = parse_lenient_decimal(val)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, number.adjusted() + 3)
        return number.quantize(CENT, rounding=ROUND_HALF_UP)


def line_amount(quantity, rate) -> Decimal:
    """Line subtotal for a row: quantity x per-unit rate, rounded to paise."""
    return money(parse_lenient_decimal(quantity) * parse_lenient_decimal(rate))


class TaxRegime(Enum):
    NONE = "none"
    INTRASTATE = "intrastate"
    INTERSTATE = "interstate"

    @classmethod
    def parse(cls, value):
        """
        Map a UI label to a regime.
        Blank -> NONE, same-state labels -> INTRASTATE, different-state
        labels -> INTERSTATE. Unknown labels raise ValueError.
        """
        if isinstance(value, cls):
            return value
        label = "" if value is None else str(value).strip().lower()
        try:
            return _REGIME_LABELS[label]
        except KeyError:
            raise ValueError(f"Unknown tax regime: {value!r}") from None


_REGIME_LABELS = {
    "": TaxRegime.NONE,
    "none": TaxRegime.NONE,
    "intrastate": TaxRegime.INTRASTATE,
    "same-state": TaxRegime.INTRASTATE,
    "cgst_sgst": TaxRegime.INTRASTATE,
    "cgst+sgst": TaxRegime.INTRASTATE,
    "interstate": TaxRegime.INTERSTATE,
    "different-state": TaxRegime.INTERSTATE,
    "igst": TaxRegime.INTERSTATE,
}


def regime_for_states(seller_state, buyer_state):
    """
    Pick the regime from the two parties' states.
    Same state → CGST + SGST, else → IGST. Unknown state → no tax lines.
    """
    seller = (seller_state or "").strip().lower()
    buyer = (buyer_state or "").strip().lower()
    if not seller or not buyer:
        return TaxRegime.NONE
    if seller == buyer:
        return TaxRegime.INTRASTATE
    return TaxRegime.INTERSTATE


def _field(record: Mapping, *keys, default=None):
    for key in keys:
        if key in record:
            return record[key]
    return default


def _flag(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y")
    return bool(value)


@dataclass(frozen=True)
class LineItem:
    description: str = ""
    quantity: Decimal = Decimal("1")
    rate: Decimal = Decimal("0")
    amount: Decimal = Decimal("0")
    hsn_code: str = ""
    exclude_from_tax: bool = False

    @classmethod
    def create(cls, description="", quantity=1, rate=0, hsn_code="", exclude_from_tax=False):
        """New row whose amount follows quantity x rate."""
        return cls(
            description=description,
            quantity=parse_lenient_decimal(quantity),
            rate=parse_lenient_decimal(rate),
            amount=line_amount(quantity, rate),
            hsn_code=hsn_code,
            exclude_from_tax=exclude_from_tax,
        )

    @classmethod
    def from_record(cls, record: Mapping):
        """
        Load a saved row. Saved rows may lack a rate; it is then derived
        back from amount / unit so editing the row keeps its amount.
        """
        quantity = parse_lenient_decimal(_field(record, "unit", "quantity", default=1))
        rate = parse_lenient_decimal(_field(record, "rate"))
        amount = parse_lenient_decimal(_field(record, "amount"))
        if not rate and quantity:
            rate = amount / quantity
        return cls(
            description=str(_field(record, "description", default="") or ""),
            quantity=quantity,
            rate=rate,
            amount=amount,
            hsn_code=str(_field(record, "hsn", "hsn_code", default="") or ""),
            exclude_from_tax=_flag(_field(record, "excludeGST", "exclude_from_tax", default=False)),
        )

    def edit(self, **changes):
        """Copy of the row with changes applied; quantity/rate edits recompute amount."""
        for key in ("quantity", "rate", "amount"):
            if key in changes:
                changes[key] = parse_lenient_decimal(changes[key])
        if "amount" not in changes and ("quantity" in changes or "rate" in changes):
            changes["amount"] = line_amount(
                changes.get("quantity", self.quantity), changes.get("rate", self.rate)
            )
        return replace(self, **changes)

    def as_record(self):
        return {
            "description": self.description,
            "hsn": self.hsn_code,
            "unit": float(self.quantity),
            "rate": float(self.rate),
            "amount": float(self.amount),
            "excludeGST": self.exclude_from_tax,
        }


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal = ZERO
    taxable_value: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    total_tax: Decimal = ZERO
    grand_total: Decimal = ZERO

    def as_record(self):
        """Totals in the shape stored alongside a saved invoice/quotation."""
        return {
            "subtotal": float(self.subtotal),
            "taxableValue": float(self.taxable_value),
            "cgst": float(self.cgst),
            "sgst": float(self.sgst),
            "igst": float(self.igst),
            "totalTax": float(self.total_tax),
            "grandTotal": float(self.grand_total),
            "totalBeforeTax": float(self.subtotal),
            "totalGST": float(self.total_tax),
            "totalAfterTax": float(self.grand_total),
        }


def _percent(rate) -> str:
    return f"{parse_lenient_decimal(rate).normalize():f}%"


def tax_lines(totals: InvoiceTotals, rate, regime):
    """
    Printed tax rows as (label, amount) pairs, e.g. ("CGST @9%", 30.00).
    Empty when no GST applies.
    """
    regime = TaxRegime.parse(regime)
    rate = parse_lenient_decimal(rate)
    if regime is TaxRegime.INTRASTATE:
        half = _percent(rate / 2)
        return [(f"CGST @{half}", totals.cgst), (f"SGST @{half}", totals.sgst)]
    if regime is TaxRegime.INTERSTATE:
        return [(f"IGST @{_percent(rate)}", totals.igst)]
    return []


def _non_negative(value, name):
    number = parse_lenient_decimal(value)
    if number < 0:
        logger.debug("Negative %s %s treated as 0", name, number)
        return Decimal("0")
    if number.adjusted() >= MAX_DIGITS:
        logger.debug("Out of range %s %s treated as 0", name, number)
        return Decimal("0")
    return number


def compute_totals(items: Iterable, rate, regime=TaxRegime.NONE) -> InvoiceTotals:
    """
    Compute invoice totals for a set of line items.
    Each row's stored amount is its taxable base; rows flagged
    exclude_from_tax count toward the subtotal only. Tax is rounded once
    on the summed taxable value, not per row. Malformed numbers count as 0.
    """
    regime = TaxRegime.parse(regime)
    with localcontext() as ctx:
        ctx.prec = 2 * MAX_DIGITS + 10
        subtotal = Decimal("0")
        taxable_value = Decimal("0")
        for item in items:
            if isinstance(item, Mapping):
                item = LineItem.from_record(item)
            amount = _non_negative(getattr(item, "amount", None), "line amount")
            subtotal += amount
            if not getattr(item, "exclude_from_tax", False):
                taxable_value += amount

        tax_rate = _non_negative(rate, "tax rate")
        cgst = sgst = igst = ZERO
        if regime is TaxRegime.INTRASTATE:
            # both halves come from the same figure so CGST == SGST exactly
            cgst = money(taxable_value * tax_rate / 2 / 100)
            sgst = cgst
        elif regime is TaxRegime.INTERSTATE:
            igst = money(taxable_value * tax_rate / 100)

        total_tax = cgst + sgst + igst
        return InvoiceTotals(
            subtotal=money(subtotal),
            taxable_value=money(taxable_value),
            cgst=cgst,
            sgst=sgst,
            igst=igst,
            total_tax=total_tax,
            grand_total=money(subtotal + total_tax),
        )
