import pytest

from paintdesk.estimating.totals import (
    DiscountConfig,
    DiscountType,
    calculate_costs,
    from_cents,
    js_round,
    to_cents,
)


def test_js_round_is_half_up():
    assert js_round(2.5) == 3
    assert js_round(-2.5) == -2
    assert js_round(0.49) == 0
    assert round(2.5) == 2  # python's banker's rounding differs


def test_cents_helpers():
    assert to_cents(19.99) == 1999
    assert to_cents("7.5") == 750
    assert to_cents(None) == 0
    assert from_cents(1999) == pytest.approx(19.99)


def test_rollup_order():
    calc = calculate_costs(
        1000,
        DiscountConfig(DiscountType.PERCENTAGE, 10),
        profit_margin=0.2,
        tax_rate=0.0825,
        payment_fee_rate=0.03,
        payment_fee_fixed=0,
    )
    assert calc.discount_amount == pytest.approx(100)
    assert calc.total_after_discount == pytest.approx(900)
    assert calc.profit_amount == pytest.approx(180)
    assert calc.total_with_profit == pytest.approx(1080)
    assert calc.taxes_to_pay == pytest.approx(89.1)
    assert calc.payment_system_fee == pytest.approx(1169.1 * 0.03)
    assert calc.company_fees_total == pytest.approx(180 + 1169.1 * 0.03)
    assert calc.total_with_taxes == pytest.approx(1169.1 * 1.03)


def test_defaults_without_discount():
    calc = calculate_costs(100)
    assert calc.discount_amount == 0
    assert calc.total_with_profit == pytest.approx(120)
    assert calc.payment_system_fee == pytest.approx(120 * 1.0825 * 0.03 + 2)
    assert calc.total_with_taxes == pytest.approx(120 * 1.0825 * 1.03 + 2)


@pytest.mark.parametrize(
    "discount,expected",
    [
        (DiscountConfig(DiscountType.AMOUNT, 1500), 1000),
        (DiscountConfig(DiscountType.PERCENTAGE, 150), 1000),
        (DiscountConfig(DiscountType.AMOUNT, 250), 250),
        (DiscountConfig("percentage", 25), 250),
        (DiscountConfig(DiscountType.AMOUNT, -10), 0),
    ],
)
def test_discount_is_capped(discount, expected):
    assert discount.amount_for(1000) == pytest.approx(expected)


def test_full_discount_zeroes_everything():
    calc = calculate_costs(1000, DiscountConfig(DiscountType.AMOUNT, 5000))
    assert calc.total_after_discount == 0
    assert calc.total_with_taxes == 0


def test_garbage_subtotal_is_zero():
    calc = calculate_costs("abc")
    assert calc.as_dict()["total_with_taxes"] == 0


def test_fixed_payment_fee():
    calc = calculate_costs(100, profit_margin=0, tax_rate=0, payment_fee_rate=0, payment_fee_fixed=2)
    assert calc.payment_system_fee == 2
    assert calc.company_fees_total == 2
    assert calc.total_with_taxes == 102


def test_no_fixed_fee_on_nothing():
    calc = calculate_costs(0, payment_fee_fixed=5)
    assert calc.payment_system_fee == 0
    assert calc.total_with_taxes == 0
