import pytest

from loanquote.common import (
    calculate_apr,
    calculate_cash_to_close,
    calculate_refinance_cash_to_close,
    down_payment_from_percent,
    down_payment_percent,
    is_high_balance,
    loan_amount,
    ltv,
    ltv_tier,
    monthly_pi,
    origination_fee,
    prepaid_interest,
    reserve_amount,
    round_to_cents,
    total_monthly_payment,
)


def test_monthly_pi_known_values():
    assert round_to_cents(monthly_pi(400000, 7, 30)) == 2661.21
    assert round_to_cents(monthly_pi(300000, 0, 30)) == 833.33


def test_monthly_pi_floors():
    assert monthly_pi(0, 7, 30) == 0
    assert monthly_pi(-5000, 7, 30) == 0
    assert monthly_pi(120000, 0, 10) == 1000
    assert monthly_pi(100000, 7, 0) == 0


def test_ltv():
    assert ltv(100000, 0) == 0
    assert ltv(250000, 250000) == 100
    assert ltv(386000, 400000) == 96.5
    assert ltv(200000, 300000) == 66.67


def test_round_half_up():
    assert round_to_cents(0.125) == 0.13
    assert round_to_cents(100.125) == 100.13
    assert round_to_cents(2.675) == 2.68
    assert round_to_cents(-0.125) == -0.13
    assert round_to_cents(1.004) == 1.0


def test_down_payment_round_trip():
    for price in (100000, 333333, 487650.5, 1250000):
        for pct in (0, 3.5, 5, 12.25, 20, 100):
            amount = down_payment_from_percent(price, pct)
            assert abs(down_payment_percent(price, amount) - pct) <= 0.01


def test_down_payment_percent_zero_price():
    assert down_payment_percent(0, 10000) == 0


def test_loan_amount_never_negative():
    assert loan_amount(400000, 100000) == 300000
    assert loan_amount(400000, 450000) == 0


def test_ltv_tier_boundaries():
    assert ltv_tier(50) is None
    assert ltv_tier(80) is None
    assert ltv_tier(80.01) == 85
    assert ltv_tier(81) == 85
    assert ltv_tier(85) == 85
    assert ltv_tier(86) == 90
    assert ltv_tier(90) == 90
    assert ltv_tier(95) == 95
    assert ltv_tier(96) == 97
    assert ltv_tier(97) == 97


def test_ltv_tier_above_97_prices_at_top_tier():
    assert ltv_tier(98) == 97
    assert ltv_tier(100) == 97


def test_ltv_tier_monotonic():
    tiers = [ltv_tier(x / 10) or 0 for x in range(700, 1001)]
    assert tiers == sorted(tiers)


def test_prepaids_and_fees():
    assert round_to_cents(prepaid_interest(400000, 7, 15)) == 1150.68
    assert reserve_amount(6000, 4) == 2000
    assert reserve_amount(1800, 14) == 2100
    assert origination_fee(400000, 1) == 4000


def test_is_high_balance_is_strict():
    assert not is_high_balance(766550, 766550)
    assert is_high_balance(766551, 766550)


def test_cash_to_close():
    assert calculate_cash_to_close(100000, 15000, 5000, 0) == 110000
    assert calculate_cash_to_close(100000, 15000, 5000, 3000) == 107000
    assert calculate_cash_to_close(100000, 15000, 5000) == 110000


def test_refinance_cash_to_close():
    assert calculate_refinance_cash_to_close(300000, 8000, 320000) == -12000
    assert calculate_refinance_cash_to_close(318000, 8140.68, 320000) == 6140.68


def test_total_monthly_payment_treats_missing_as_zero():
    assert total_monthly_payment(2661.21, 0, 500, 150) == 3311.21
    assert total_monthly_payment(1000, None, None) == 1000


def test_apr_matches_note_rate_without_fees():
    pmt = monthly_pi(400000, 7, 30)
    assert abs(calculate_apr(400000, 0, pmt, 30) - 7.0) < 0.001


def test_apr_rises_with_lender_fees():
    pmt = monthly_pi(400000, 7, 30)
    apr = calculate_apr(400000, 5000, pmt, 30)
    assert 7.05 < apr < 7.25


def test_apr_degenerate_inputs():
    assert calculate_apr(0, 0, 0, 30) == 0
    assert calculate_apr(100000, 100000, 665.3, 30) == 0
    assert calculate_apr(120000, 0, 1000, 10) == 0


@pytest.mark.parametrize("points", [0, 0.5, 1, 2])
def test_origination_scales_with_points(points):
    assert origination_fee(250000, points) == pytest.approx(2500 * points)
