from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from .presets import LTV_TIERS


def round_to_cents(x, places=2):
    """Round half away from zero on the decimal text of ``x``.

    ``0.125`` becomes ``0.13`` and ``2.675`` becomes ``2.68``.
    """

    value = Decimal(str(float(x))).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return float(value)


def monthly_pi(principal, annual_rate_pct, term_years):
    """Fully amortizing principal and interest payment.

    ``annual_rate_pct`` is the nominal yearly rate (``7`` for 7%).  A zero rate
    spreads the principal evenly over the term.
    """

    L = float(principal)
    r = float(annual_rate_pct) / 100 / 12
    n = int(float(term_years) * 12)
    if L <= 0 or n <= 0:
        return 0.0
    if r == 0:
        return L / n
    growth = (1 + r) ** n
    return L * r * growth / (growth - 1)


def ltv(loan_amount, property_value):
    """Loan-to-value percentage rounded to two decimals."""

    if property_value <= 0:
        return 0.0
    return round_to_cents(loan_amount / property_value * 100)


def down_payment_from_percent(sales_price, percent):
    return sales_price * percent / 100


def down_payment_percent(sales_price, amount):
    """Down payment as a percent of price, two decimals; 0 when price is 0."""

    if sales_price <= 0:
        return 0.0
    return round_to_cents(amount / sales_price * 100)


def loan_amount(sales_price, down_payment):
    return max(0.0, sales_price - down_payment)


def prepaid_interest(loan, annual_rate_pct, days):
    """Per-diem interest collected from closing to the first payment period."""

    return loan * annual_rate_pct / 100 / 365 * days


def reserve_amount(annual_amount, months):
    return annual_amount / 12 * months


def origination_fee(loan, points):
    return loan * points / 100


def seller_credit_from_percent(sales_price, percent):
    return sales_price * percent / 100


def ltv_tier(loan_to_value) -> Optional[int]:
    """Map an LTV onto the mortgage-insurance pricing tiers.

    Returns ``None`` at or below 80% (no MI).  Otherwise the smallest tier at or
    above the LTV: 81 -> 85, 86 -> 90, 95 -> 95, 96 -> 97.  Anything above 97
    is priced at the 97 tier; the advisory rules flag that case.
    """

    if loan_to_value <= 80:
        return None
    for tier in LTV_TIERS:
        if loan_to_value <= tier:
            return tier
    return LTV_TIERS[-1]


def is_high_balance(loan, conforming_limit):
    return loan > conforming_limit


def total_monthly_payment(principal_and_interest, mortgage_insurance=0.0, property_tax=0.0,
                          home_insurance=0.0, hoa=0.0, flood_insurance=0.0):
    parts = [principal_and_interest, mortgage_insurance, property_tax, home_insurance, hoa, flood_insurance]
    return round_to_cents(sum(p or 0.0 for p in parts))


def calculate_cash_to_close(down_payment, total_closing_costs, total_credits, earnest_deposit=0.0):
    """Funds due from the buyer at closing.

    Credits and the earnest deposit already paid reduce the amount; closing
    costs are taken before credits.
    """

    return round_to_cents(down_payment + total_closing_costs - total_credits - (earnest_deposit or 0.0))


def calculate_refinance_cash_to_close(existing_loan_balance, net_closing_costs, new_loan_amount):
    """Payoff plus net closing costs less the new base loan.

    A financed upfront fee is borrowed and spent in the same transaction, so
    it cancels out.  A negative result is cash back to the borrower.
    """

    return round_to_cents(existing_loan_balance + net_closing_costs - new_loan_amount)


def calculate_apr(loan, lender_fees, monthly_payment, term_years, iterations=20, tolerance=1e-6):
    """Annual percentage rate via Newton's method.

    Solves for the monthly rate whose present value of ``monthly_payment``
    over the term equals the loan amount net of lender fees.  Returns the
    annual rate in percent rounded to three decimals, or 0 when the inputs
    do not describe an amortizing loan.
    """

    amount_financed = loan - lender_fees
    n = int(term_years * 12)
    if amount_financed <= 0 or monthly_payment <= 0 or n <= 0:
        return 0.0
    if monthly_payment * n <= amount_financed:
        return 0.0

    r = 0.005
    for _ in range(iterations):
        discount = (1 + r) ** -n
        pv = monthly_payment * (1 - discount) / r
        dpv = monthly_payment * (n * discount / (1 + r) / r - (1 - discount) / r ** 2)
        step = (pv - amount_financed) / dpv
        r -= step
        if r <= 0:
            r = 1e-6
        if abs(step) < tolerance:
            break
    return round_to_cents(r * 12 * 100, places=3)
