from loanquote.common import monthly_pi, round_to_cents
from loanquote.config import default_config
from loanquote.fha import calculate_fha_purchase
from loanquote.models import FhaPurchaseInput


def _calc(**kw):
    base = {"sales_price": 400000, "interest_rate": 6.5, "term_years": 30}
    base.update(kw)
    return calculate_fha_purchase(FhaPurchaseInput(**base), default_config())


def test_minimum_down_purchase():
    res = _calc(down_payment_percent=3.5)
    assert res.base_loan_amount == 386000
    assert res.ltv == 96.5
    assert res.ufmip == 6755
    assert res.total_loan_amount == 392755
    assert res.mip_rate == 0.55
    assert res.monthly_payment.mortgage_insurance == round_to_cents(386000 * 0.55 / 100 / 12)


def test_principal_and_interest_on_total_loan():
    res = _calc(down_payment_percent=3.5)
    assert res.monthly_payment.principal_and_interest == round_to_cents(monthly_pi(392755, 6.5, 30))


def test_default_down_payment_is_fha_minimum():
    res = _calc()
    assert res.down_payment_percent == 3.5
    assert res.base_loan_amount == 386000


def test_five_percent_down_uses_lower_mip():
    res = _calc(down_payment_percent=5)
    assert res.base_loan_amount == 380000
    assert res.ltv == 95
    assert res.mip_rate == 0.50


def test_fifteen_year_mip_rates():
    assert _calc(down_payment_percent=10, term_years=15).mip_rate == 0.15
    assert _calc(down_payment_percent=5, term_years=15).mip_rate == 0.40


def test_monthly_total_includes_all_costs():
    res = _calc(
        down_payment_percent=3.5,
        property_tax_monthly=400,
        home_insurance_monthly=120,
        hoa_monthly=50,
        flood_insurance_monthly=30,
    )
    m = res.monthly_payment
    assert m.total == round_to_cents(
        m.principal_and_interest + m.mortgage_insurance + 400 + 120 + 50 + 30
    )


def test_closing_costs_use_total_loan():
    res = _calc(down_payment_percent=3.5, origination_points=1)
    assert res.closing_costs.origination_fee == 3927.55
