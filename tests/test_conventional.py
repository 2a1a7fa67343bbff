import pytest
from pydantic import ValidationError

from loanquote.common import monthly_pi, round_to_cents
from loanquote.config import default_config
from loanquote.conventional import calculate_conventional_purchase
from loanquote.models import ConventionalPurchaseInput, DownPaymentAmount


def _calc(config=None, **kw):
    base = {"sales_price": 500000, "interest_rate": 7, "term_years": 30}
    base.update(kw)
    return calculate_conventional_purchase(ConventionalPurchaseInput(**base), config or default_config())


def test_twenty_percent_down_has_no_mi():
    res = _calc(down_payment_percent=20, property_tax_annual=6000, home_insurance_annual=1800)
    assert res.base_loan_amount == 400000
    assert res.total_loan_amount == 400000
    assert res.ltv == 80
    assert res.pmi_rate == 0
    assert res.monthly_payment.mortgage_insurance == 0
    assert res.monthly_payment.property_tax == 500
    assert res.monthly_payment.home_insurance == 150
    assert res.monthly_payment.principal_and_interest == 2661.21
    assert res.monthly_payment.total == 3311.21


def test_five_percent_down_monthly_pmi():
    res = _calc(down_payment_percent=5, fico_tier=740, pmi_type="monthly")
    assert res.base_loan_amount == 475000
    assert res.ltv == 95
    assert res.pmi_rate == 0.50
    assert res.monthly_payment.mortgage_insurance == 197.92
    assert res.single_premium_pmi is None


def test_single_financed_premium_added_to_loan():
    res = _calc(down_payment_percent=5, pmi_type="single_financed")
    assert res.pmi_rate == 1.20
    assert res.single_premium_pmi == 5700
    assert res.total_loan_amount == 480700
    assert res.monthly_payment.mortgage_insurance == 0
    assert res.monthly_payment.principal_and_interest == round_to_cents(monthly_pi(480700, 7, 30))


def test_single_cash_premium_paid_at_closing():
    monthly = _calc(down_payment_percent=5)
    cash = _calc(down_payment_percent=5, pmi_type="single_cash")
    assert cash.total_loan_amount == 475000
    assert cash.monthly_payment.mortgage_insurance == 0
    assert cash.closing_costs.single_premium_mi == 5700
    assert cash.closing_costs.total_closing_costs == round_to_cents(
        monthly.closing_costs.total_closing_costs + 5700
    )
    assert cash.cash_to_close == round_to_cents(monthly.cash_to_close + 5700)


def test_split_premium_not_charged():
    res = _calc(down_payment_percent=5, pmi_type="split")
    assert res.monthly_payment.mortgage_insurance == 0
    assert res.total_loan_amount == 475000
    assert res.closing_costs.single_premium_mi == 0


def test_high_balance_loan_uses_high_balance_rates():
    res = _calc(sales_price=1000000, down_payment_percent=10, fico_tier=760)
    assert res.is_high_balance
    assert res.pmi_rate == 0.23


def test_down_payment_as_amount():
    res = _calc(down_payment_amount=100000)
    assert res.down_payment == 100000
    assert res.down_payment_percent == 20
    assert res.base_loan_amount == 400000
    tagged = _calc(down_payment=DownPaymentAmount(amount=100000))
    assert tagged.base_loan_amount == 400000


def test_missing_down_payment_means_zero_down():
    res = _calc()
    assert res.down_payment == 0
    assert res.ltv == 100


def test_both_down_payment_forms_rejected():
    with pytest.raises(ValidationError):
        ConventionalPurchaseInput(
            sales_price=500000, interest_rate=7, down_payment_percent=5, down_payment_amount=25000
        )


def test_credit_score_maps_to_tier():
    data = ConventionalPurchaseInput(sales_price=500000, interest_rate=7, credit_score=745)
    assert data.fico_tier == 740


def test_unknown_fico_tier_rejected():
    with pytest.raises(ValidationError):
        ConventionalPurchaseInput(sales_price=500000, interest_rate=7, fico_tier=750)


def test_seller_credit_percent(config):
    res = _calc(config, down_payment_percent=20, seller_credit_percent=3)
    assert res.closing_costs.seller_credit == 15000
    assert res.closing_costs.total_credits == 15000


def test_cash_to_close_and_apr(config):
    res = _calc(
        config,
        down_payment_percent=20,
        property_tax_annual=6000,
        home_insurance_annual=1800,
        origination_points=1,
        seller_credit=5000,
        lender_credit=1000,
        earnest_deposit=10000,
    )
    assert res.closing_costs.total_closing_costs == 13785.68
    assert res.cash_to_close == 97785.68
    assert res.apr > 7


def test_zero_price_degrades_to_zero():
    res = _calc(sales_price=0, down_payment_percent=5)
    assert res.base_loan_amount == 0
    assert res.ltv == 0
    assert res.pmi_rate == 0
    assert res.monthly_payment.principal_and_interest == 0
    assert res.apr == 0
