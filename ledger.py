import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Iterable

from tax_calc import ZERO, InvoiceTotals, money
from utils import parse_lenient_decimal

logger = logging.getLogger(__name__)


class InvalidPayment(ValueError):
    """Payment amount that cannot be recorded against a sale."""


class PaymentStatus(Enum):
    PENDING = "pending"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"


def payment_status(total, received) -> PaymentStatus:
    total = money(total)
    received = money(received)
    if received >= total:
        return PaymentStatus.PAID
    if received <= 0:
        return PaymentStatus.PENDING
    return PaymentStatus.PARTIALLY_PAID


@dataclass(frozen=True)
class Sale:
    """One invoice in the sales ledger and what has been received against it."""
    invoice_number: str
    buyer_name: str = ""
    total_amount: Decimal = ZERO
    received_amount: Decimal = ZERO

    @classmethod
    def from_invoice(cls, invoice_number, buyer_name, totals: InvoiceTotals):
        return cls(invoice_number=invoice_number, buyer_name=buyer_name, total_amount=totals.grand_total)

    @property
    def pending_amount(self) -> Decimal:
        return max(money(self.total_amount) - money(self.received_amount), ZERO)

    @property
    def status(self) -> PaymentStatus:
        return payment_status(self.total_amount, self.received_amount)


def _payment_amount(amount) -> Decimal:
    if amount is None or isinstance(amount, bool):
        raise InvalidPayment(f"Not a payment amount: {amount!r}")
    value = money(amount)
    if value <= 0:
        raise InvalidPayment(f"Payment must be positive, got {amount!r}")
    return value


def apply_payment(sale: Sale, amount) -> Sale:
    """Record a payment; returns the updated sale."""
    value = _payment_amount(amount)
    updated = replace(sale, received_amount=money(sale.received_amount) + value)
    logger.info(
        "Payment of %s recorded for %s (%s)", value, sale.invoice_number, updated.status.value
    )
    return updated


def remove_payment(sale: Sale, amount) -> Sale:
    """Reverse a recorded payment; received never drops below 0."""
    value = _payment_amount(amount)
    received = max(money(sale.received_amount) - value, ZERO)
    updated = replace(sale, received_amount=received)
    logger.info(
        "Payment of %s removed for %s (%s)", value, sale.invoice_number, updated.status.value
    )
    return updated


@dataclass(frozen=True)
class SalesStats:
    total_sales: Decimal = ZERO
    total_received: Decimal = ZERO
    total_pending: Decimal = ZERO


def sales_stats(sales: Iterable[Sale]) -> SalesStats:
    total_sales = total_received = total_pending = ZERO
    for sale in sales or []:
        total_sales += money(sale.total_amount)
        total_received += money(sale.received_amount)
        total_pending += sale.pending_amount
    return SalesStats(total_sales, total_received, total_pending)
