from __future__ import annotations
import logging

from .closing import closing_costs_for_purchase, closing_costs_for_refinance
from .common import (
    calculate_apr,
    calculate_cash_to_close,
    calculate_refinance_cash_to_close,
    loan_amount,
    ltv,
    monthly_pi,
    round_to_cents,
    total_monthly_payment,
)
from .config import LoanConfig
from .lookups import va_funding_fee, va_funding_fee_rate
from .models import (
    LoanCalculationResult,
    LoanProgram,
    MonthlyPaymentBreakdown,
    RefinanceCalculationResult,
    VaPurchaseInput,
    VaRefinanceInput,
)

logger = logging.getLogger(__name__)


def calculate_va_purchase(data: VaPurchaseInput, config: LoanConfig) -> LoanCalculationResult:
    """VA purchase: financed funding fee, never any mortgage insurance."""

    price = data.sales_price
    down, down_pct = data.resolve_down_payment()
    base = loan_amount(price, down)
    loan_ltv = ltv(base, price)
    fee_rate = va_funding_fee_rate(data.va_usage, down_pct, config)
    fee = round_to_cents(va_funding_fee(base, fee_rate, data.is_disabled_veteran))
    total_loan = base + fee

    pi = monthly_pi(total_loan, data.interest_rate, data.term_years)
    parts = dict(
        principal_and_interest=round_to_cents(pi),
        mortgage_insurance=0.0,
        property_tax=round_to_cents(data.property_tax_monthly),
        home_insurance=round_to_cents(data.home_insurance_monthly),
        hoa=round_to_cents(data.hoa_monthly),
        flood_insurance=round_to_cents(data.flood_insurance_monthly),
    )
    monthly = MonthlyPaymentBreakdown(**parts, total=total_monthly_payment(*parts.values()))

    closing = closing_costs_for_purchase(data, total_loan, config)
    logger.debug(
        "VA loan=%s usage=%s rate=%s fee=%s disabled=%s",
        base, data.va_usage, fee_rate, fee, data.is_disabled_veteran,
    )

    return LoanCalculationResult(
        program=LoanProgram.VA,
        sales_price=price,
        base_loan_amount=round_to_cents(base),
        total_loan_amount=round_to_cents(total_loan),
        ltv=loan_ltv,
        down_payment=round_to_cents(down),
        down_payment_percent=down_pct,
        interest_rate=data.interest_rate,
        term_years=data.term_years,
        monthly_payment=monthly,
        closing_costs=closing,
        cash_to_close=calculate_cash_to_close(
            down, closing.total_closing_costs, closing.total_credits, data.earnest_deposit
        ),
        apr=calculate_apr(total_loan, closing.total_lender_fees, pi, data.term_years),
        va_funding_fee_rate=fee_rate,
        va_funding_fee=fee,
    )


def calculate_va_refinance(data: VaRefinanceInput, config: LoanConfig) -> RefinanceCalculationResult:
    """VA IRRRL, cash-out or regular refinance.

    The funding fee is priced as IRRRL first, then cash-out when any cash is
    taken, otherwise as a no-down-payment loan by usage.  It is financed and
    waived for disabled veterans.
    """

    base = data.new_loan_amount
    loan_ltv = ltv(base, data.property_value)
    is_cashout = data.cash_out_amount > 0
    fee_rate = va_funding_fee_rate(data.va_usage, 0, config, is_irrrl=data.is_irrrl, is_cashout=is_cashout)
    fee = round_to_cents(va_funding_fee(base, fee_rate, data.is_disabled_veteran))
    total_loan = base + fee

    pi = monthly_pi(total_loan, data.interest_rate, data.term_years)
    parts = dict(
        principal_and_interest=round_to_cents(pi),
        mortgage_insurance=0.0,
        property_tax=round_to_cents(data.property_tax_monthly),
        home_insurance=round_to_cents(data.home_insurance_monthly),
        hoa=round_to_cents(data.hoa_monthly),
        flood_insurance=round_to_cents(data.flood_insurance_monthly),
    )
    monthly = MonthlyPaymentBreakdown(**parts, total=total_monthly_payment(*parts.values()))

    closing = closing_costs_for_refinance(data, total_loan, config)
    logger.debug(
        "VA refinance loan=%s irrrl=%s cashout=%s rate=%s fee=%s",
        base, data.is_irrrl, is_cashout, fee_rate, fee,
    )

    return RefinanceCalculationResult(
        program=LoanProgram.VA,
        property_value=data.property_value,
        existing_loan_balance=data.existing_loan_balance,
        cash_out_amount=data.cash_out_amount,
        is_irrrl=data.is_irrrl,
        base_loan_amount=round_to_cents(base),
        total_loan_amount=round_to_cents(total_loan),
        ltv=loan_ltv,
        interest_rate=data.interest_rate,
        term_years=data.term_years,
        monthly_payment=monthly,
        closing_costs=closing,
        cash_to_close=calculate_refinance_cash_to_close(
            data.existing_loan_balance, closing.net_closing_costs, base
        ),
        apr=calculate_apr(total_loan, closing.total_lender_fees, pi, data.term_years),
        va_funding_fee_rate=fee_rate,
        va_funding_fee=fee,
    )
