import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from num2words import num2words

logger = logging.getLogger(__name__)

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000

# ten crore crore
MAX_AMOUNT = Decimal(10) ** 15


class InvalidAmount(ValueError):
    """Amount that cannot be printed in words on an invoice."""


def _two_digits(n: int) -> str:
    # 1..99, e.g. 45 -> "Forty Five"
    return num2words(n, lang="en").replace("-", " ").title()


def _three_digits(n: int) -> str:
    hundreds, rest = divmod(n, 100)
    words = []
    if hundreds:
        words.append(f"{_two_digits(hundreds)} Hundred")
    if rest:
        words.append(_two_digits(rest))
    return " ".join(words)


def indian_number_words(n: int) -> str:
    """
    Spell a whole number using Indian grouping (crore, lakh, thousand,
    hundred), e.g. 1234567 -> "Twelve Lakh Thirty Four Thousand Five
    Hundred Sixty Seven". Crore counts above 99 are spelt the same way.
    """
    if n == 0:
        return "Zero"
    parts = []
    crore, n = divmod(n, CRORE)
    if crore:
        parts.append(f"{indian_number_words(crore)} Crore")
    lakh, n = divmod(n, LAKH)
    if lakh:
        parts.append(f"{_two_digits(lakh)} Lakh")
    thousand, n = divmod(n, THOUSAND)
    if thousand:
        parts.append(f"{_two_digits(thousand)} Thousand")
    if n:
        parts.append(_three_digits(n))
    return " ".join(parts)


def _to_amount(amount) -> Decimal:
    if amount is None or isinstance(amount, bool):
        raise InvalidAmount(f"Not an amount: {amount!r}")
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise InvalidAmount(f"Not an amount: {amount!r}") from None
    if not value.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {amount!r}")
    if value >= MAX_AMOUNT:
        raise InvalidAmount(f"Amount too large to print, got {amount!r}")
    if value < 0:
        raise InvalidAmount(f"Amount must not be negative, got {amount!r}")
    return value


def amount_to_words(amount) -> str:
    """
    Rupee amount in words for printed invoices.
    12345.50 -> "Twelve Thousand Three Hundred Forty Five Rupees and Fifty Paise Only".
    Raises InvalidAmount for non-numeric, non-finite or negative input.
    """
    try:
        value = _to_amount(amount)
    except InvalidAmount as e:
        logger.warning("Refusing to spell amount: %s", e)
        raise

    rupees = int(value)
    paise = int(((value - rupees) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if paise == 100:
        rupees += 1
        paise = 0

    words = f"{indian_number_words(rupees)} Rupees"
    if paise:
        words += f" and {_two_digits(paise)} Paise"
    return f"{words} Only"
