from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

from paintdesk.services.numbers import to_non_negative, to_number

DEFAULT_PROFIT_MARGIN = 0.20
DEFAULT_TAX_RATE = 0.0825
DEFAULT_PAYMENT_FEE_RATE = 0.03
DEFAULT_PAYMENT_FEE_FIXED = 2.0
DEFAULT_COST_PER_GALLON = 65.0
DEFAULT_HOUR_RATE = 40.0


def js_round(value: float) -> int:
    """Half-up rounding (2.5 -> 3, -2.5 -> -2), unlike Python's round()."""
    return int(math.floor(value + 0.5))


def to_cents(dollars: Any) -> int:
    return js_round(to_number(dollars) * 100)


def from_cents(cents: Any) -> float:
    return to_number(cents) / 100


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    AMOUNT = "amount"


@dataclass(frozen=True)
class DiscountConfig:
    type: DiscountType = DiscountType.PERCENTAGE
    value: float = 0.0

    def amount_for(self, subtotal: float) -> float:
        v = to_non_negative(self.value)
        if DiscountType(self.type) is DiscountType.PERCENTAGE:
            amount = subtotal * min(v, 100.0) / 100
        else:
            amount = v
        return min(amount, subtotal)


@dataclass(frozen=True)
class CostCalculation:
    subtotal: float
    discount_amount: float
    total_after_discount: float
    profit_amount: float
    total_with_profit: float
    taxes_to_pay: float
    payment_system_fee: float
    company_fees_total: float
    total_with_taxes: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def calculate_costs(
    subtotal: Any,
    discount: Optional[DiscountConfig] = None,
    profit_margin: Any = DEFAULT_PROFIT_MARGIN,
    tax_rate: Any = DEFAULT_TAX_RATE,
    payment_fee_rate: Any = DEFAULT_PAYMENT_FEE_RATE,
    payment_fee_fixed: Any = DEFAULT_PAYMENT_FEE_FIXED,
) -> CostCalculation:
    """
    Estimate rollup: discount -> profit -> tax -> payment fee.

    Profit is charged on the discounted total, tax on the total with
    profit, and the payment fee (a rate plus a fixed charge) on the taxed
    total. Nothing left to charge means no fixed fee either.
    """
    base = to_non_negative(subtotal)
    discount_amount = discount.amount_for(base) if discount else 0.0
    after_discount = base - discount_amount

    profit = after_discount * to_non_negative(profit_margin)
    with_profit = after_discount + profit

    taxes = with_profit * to_non_negative(tax_rate)
    fee = (with_profit + taxes) * to_non_negative(payment_fee_rate)
    if with_profit > 0:
        fee += to_non_negative(payment_fee_fixed)

    return CostCalculation(
        subtotal=base,
        discount_amount=discount_amount,
        total_after_discount=after_discount,
        profit_amount=profit,
        total_with_profit=with_profit,
        taxes_to_pay=taxes,
        payment_system_fee=fee,
        company_fees_total=profit + fee,
        total_with_taxes=with_profit + taxes + fee,
    )
