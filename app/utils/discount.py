"""
Discount calculation utilities
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

CENTS = Decimal('0.01')
HUNDRED = Decimal('100')

Number = Union[Decimal, int, float, str]


def to_money(value: Number) -> Decimal:
    """Round a monetary amount to two places"""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def effective_unit_price(price: Number, discount: Optional[Number]) -> Decimal:
    """
    Apply a percentage discount to a unit price.
    
    Args:
        price: List price of the product
        discount: Discount percentage (0-100), None treated as 0
        
    Returns:
        Discounted unit price, rounded to 2 decimal places
    """
    price_val = Decimal(str(price))
    discount_val = Decimal(str(discount)) if discount is not None else Decimal('0')
    
    if discount_val < 0 or discount_val > HUNDRED:
        raise ValueError(f"Discount must be between 0 and 100, got {discount_val}")
    
    return to_money(price_val * (1 - discount_val / HUNDRED))


def line_total(unit_price: Number, quantity: int) -> Decimal:
    """Total for a line item"""
    return to_money(Decimal(str(unit_price)) * quantity)
