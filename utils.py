import re
from decimal import Decimal, InvalidOperation

_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_lenient_decimal(value) -> Decimal:
    """
    Parse a form value into a Decimal, falling back to 0.
    Half-typed input such as "", "12.", "1,200" or "₹ 50" is tolerated;
    anything without a leading number, NaN or infinity becomes 0.
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, Decimal):
        number = value
    else:
        text = str(value).strip().replace(",", "").lstrip("₹").strip()
        m = _NUMBER_PREFIX.match(text)
        if not m:
            return Decimal("0")
        try:
            number = Decimal(m.group(0))
        except InvalidOperation:
            return Decimal("0")
    if not number.is_finite():
        return Decimal("0")
    return number
