from __future__ import annotations

import pytest

from checkout.money import (
    compute_change,
    delimit_number,
    effective_received,
    format_currency,
    suggest_cash_amounts,
)


@pytest.mark.parametrize(
    ("total", "expected"),
    [
        (27000, [27000, 50000, 100000]),
        (50000, [50000, 100000]),
        (100000, [100000]),
        (1500, [1500, 2000, 5000, 10000, 20000, 50000, 100000]),
        (150000, [150000, 200000]),
        (200000, [200000]),
    ],
)
def test_suggest_cash_amounts(total: int, expected: list[int]) -> None:
    assert suggest_cash_amounts(total) == expected


def test_suggestions_are_sorted_and_never_below_total() -> None:
    for total in (1, 999, 12345, 99999, 100001, 345678):
        suggestions = suggest_cash_amounts(total)
        assert suggestions == sorted(set(suggestions))
        assert suggestions[0] == total
        assert all(amount >= total for amount in suggestions)


@pytest.mark.parametrize("received", [None, 0])
def test_empty_or_zero_received_means_exact(received: int | None) -> None:
    assert effective_received(27000, received) == 27000
    assert compute_change(27000, received) == 0


def test_change_is_never_negative() -> None:
    assert compute_change(27000, 50000) == 23000
    assert compute_change(27000, 20000) == 0


def test_currency_formatting() -> None:
    assert delimit_number(999) == "999"
    assert delimit_number(1500000) == "1.500.000"
    assert format_currency(27000) == "Rp27.000"
    assert format_currency(0) == "Rp0"
    assert format_currency(-5000) == "-Rp5.000"
