"""Invoice Totals

Pure computation of subtotal, discount, tax and total for invoice items.
"""

from decimal import Decimal
from typing import Iterable, Union
from pydantic import BaseModel, Field
from src.domain.invoice import InvoiceItem

Number = Union[Decimal, int, float, str]

HUNDRED = Decimal("100")


class InvoiceTotals(BaseModel):
    """
    Invoice Totals - Breakdown of an invoice amount

    taxable_amount = subtotal - discount_amount
    total = taxable_amount + tax_amount
    """

    subtotal: Decimal = Field(..., description="Sum of quantity * unit_price")
    discount_amount: Decimal = Field(..., description="subtotal * discount / 100")
    taxable_amount: Decimal = Field(..., description="Subtotal after discount")
    tax_amount: Decimal = Field(..., description="taxable_amount * tax_rate / 100")
    total: Decimal = Field(..., description="Amount due")


def to_decimal(value: Number) -> Decimal:
    """Convert a numeric input to Decimal without binary float artifacts"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def calculate_invoice_total(
    items: Iterable[InvoiceItem],
    discount: Number = 0,
    tax_rate: Number = 0,
) -> InvoiceTotals:
    """
    Calculate invoice totals

    The discount is applied to the subtotal first and the tax is charged on
    the discounted amount. Percentages are used as given: negative values or
    values above 100 are not clamped.

    Args:
        items: Line items (quantity * unit_price each)
        discount: Discount percentage
        tax_rate: Tax percentage

    Returns:
        InvoiceTotals with subtotal, intermediate amounts and total
    """
    discount = to_decimal(discount)
    tax_rate = to_decimal(tax_rate)

    subtotal = sum(
        (item.quantity * to_decimal(item.unit_price) for item in items),
        Decimal("0"),
    )
    discount_amount = subtotal * discount / HUNDRED
    taxable_amount = subtotal - discount_amount
    tax_amount = taxable_amount * tax_rate / HUNDRED

    return InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        taxable_amount=taxable_amount,
        tax_amount=tax_amount,
        total=taxable_amount + tax_amount,
    )
