from decimal import Decimal, ROUND_HALF_UP
from utils.constants import CURRENCY_SYMBOL

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value) -> Decimal:
    """Coerce a JSON number/str to a Decimal rounded to the cent.

    Floats go through str() first so 0.1 stays 0.1 instead of its binary expansion.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        d = value
    else:
        d = Decimal(str(value))
    return d.quantize(CENT, rounding=ROUND_HALF_UP)


def to_json_number(amount: Decimal) -> float:
    """Decimal -> float for request bodies (the backend stores plain numbers)."""
    return float(to_money(amount))


def group_indian(digits: str) -> str:
    """Group an unsigned integer string the en-IN way: 1234567 -> 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_amount(amount) -> str:
    """Plain two-decimal string, e.g. '1234.50'."""
    return f"{to_money(amount):.2f}"


def format_currency(amount, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format as currency with Indian digit grouping, e.g. '₹12,34,567.89'."""
    money = to_money(amount)
    sign = "-" if money < 0 else ""
    whole, frac = f"{abs(money):.2f}".split(".")
    return f"{sign}{symbol}{group_indian(whole)}.{frac}"


def format_signed(amount, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format with +/- sign."""
    money = to_money(amount)
    sign = "+" if money >= 0 else "-"
    return f"{sign}{format_currency(abs(money), symbol)}"
