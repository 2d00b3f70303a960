from decimal import Decimal

import pytest

from app.utils.discount import effective_unit_price, line_total, to_money


@pytest.mark.parametrize("price,discount,expected", [
    ("100.00", "10", "90.00"),
    ("19.99", "15", "16.99"),
    ("50", None, "50.00"),
    ("80.00", "100", "0.00"),
    ("0.05", "50", "0.03"),
])
def test_effective_unit_price(price, discount, expected):
    assert effective_unit_price(price, discount) == Decimal(expected)


@pytest.mark.parametrize("discount", ["-1", "100.01"])
def test_discount_out_of_range(discount):
    with pytest.raises(ValueError):
        effective_unit_price("10.00", discount)


def test_line_total_and_rounding():
    assert line_total(Decimal("16.99"), 3) == Decimal("50.97")
    assert to_money(2.675) == Decimal("2.68")
