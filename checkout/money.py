"""Cash arithmetic and money formatting."""

from __future__ import annotations

from checkout.constant import CURRENCY_PREFIX, MONEY_UNITS, THOUSANDS_DELIMITER


def suggest_cash_amounts(total: int) -> list[int]:
    """Return plausible cash amounts a customer might hand over for ``total``.

    The total itself is always offered. Every denomination above the total is
    offered as a "round up to this bill" option, and totals beyond the largest
    bill get the next multiple of that bill.
    """
    result = {total}
    max_unit = MONEY_UNITS[-1]

    for unit in MONEY_UNITS:
        if total < unit and total % unit != 0:
            result.add(unit)

    if total > max_unit and total % max_unit != 0:
        result.add(-(-total // max_unit) * max_unit)

    return sorted(result)


def effective_received(total: int, received: int | None) -> int:
    """An empty or zero entry means the customer paid the exact amount."""
    if not received:
        return total
    return received


def compute_change(total: int, received: int | None) -> int:
    return max(0, effective_received(total, received) - total)


def delimit_number(value: int) -> str:
    """Group thousands with the local delimiter: 1500000 -> 1.500.000."""
    return f"{value:,}".replace(",", THOUSANDS_DELIMITER)


def format_currency(value: int) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_PREFIX}{delimit_number(abs(value))}"
