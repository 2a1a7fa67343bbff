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
from .lookups import fha_mip_rate, monthly_mip, ufmip
from .models import (
    FhaPurchaseInput,
    FhaRefinanceInput,
    LoanCalculationResult,
    LoanProgram,
    MonthlyPaymentBreakdown,
    RefinanceCalculationResult,
)

logger = logging.getLogger(__name__)


def calculate_fha_purchase(data: FhaPurchaseInput, config: LoanConfig) -> LoanCalculationResult:
    """FHA purchase with financed UFMIP and annual MIP.

    LTV and monthly MIP use the base loan; the upfront premium is financed, so
    principal and interest amortize base plus UFMIP.  Without an explicit down
    payment the configured FHA minimum is used.
    """

    price = data.sales_price
    down, down_pct = data.resolve_down_payment(default_percent=config.fha.min_down_pct)
    base = loan_amount(price, down)
    loan_ltv = ltv(base, price)
    upfront = round_to_cents(ufmip(base, config))
    total_loan = base + upfront
    mip_rate = fha_mip_rate(loan_ltv, data.term_years, config)
    mip = monthly_mip(base, mip_rate)

    pi = monthly_pi(total_loan, data.interest_rate, data.term_years)
    parts = dict(
        principal_and_interest=round_to_cents(pi),
        mortgage_insurance=round_to_cents(mip),
        property_tax=round_to_cents(data.property_tax_monthly),
        home_insurance=round_to_cents(data.home_insurance_monthly),
        hoa=round_to_cents(data.hoa_monthly),
        flood_insurance=round_to_cents(data.flood_insurance_monthly),
    )
    monthly = MonthlyPaymentBreakdown(**parts, total=total_monthly_payment(*parts.values()))

    closing = closing_costs_for_purchase(data, total_loan, config)
    logger.debug("FHA base=%s ufmip=%s ltv=%s mip_rate=%s", base, upfront, loan_ltv, mip_rate)

    return LoanCalculationResult(
        program=LoanProgram.FHA,
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
        mip_rate=mip_rate,
        ufmip=upfront,
    )


def calculate_fha_refinance(data: FhaRefinanceInput, config: LoanConfig) -> RefinanceCalculationResult:
    """FHA refinance, full or streamline.

    The refinance UFMIP rate (or the streamline rate) is financed on top of
    the new loan; annual MIP uses the same term and LTV table as a purchase.
    """

    base = data.new_loan_amount
    loan_ltv = ltv(base, data.property_value)
    upfront = round_to_cents(ufmip(base, config, is_refinance=True, is_streamline=data.is_streamline))
    total_loan = base + upfront
    mip_rate = fha_mip_rate(loan_ltv, data.term_years, config)

    pi = monthly_pi(total_loan, data.interest_rate, data.term_years)
    parts = dict(
        principal_and_interest=round_to_cents(pi),
        mortgage_insurance=round_to_cents(monthly_mip(base, mip_rate)),
        property_tax=round_to_cents(data.property_tax_monthly),
        home_insurance=round_to_cents(data.home_insurance_monthly),
        hoa=round_to_cents(data.hoa_monthly),
        flood_insurance=round_to_cents(data.flood_insurance_monthly),
    )
    monthly = MonthlyPaymentBreakdown(**parts, total=total_monthly_payment(*parts.values()))

    closing = closing_costs_for_refinance(data, total_loan, config)
    logger.debug(
        "FHA refinance base=%s ufmip=%s ltv=%s mip_rate=%s streamline=%s",
        base, upfront, loan_ltv, mip_rate, data.is_streamline,
    )

    return RefinanceCalculationResult(
        program=LoanProgram.FHA,
        property_value=data.property_value,
        existing_loan_balance=data.existing_loan_balance,
        cash_out_amount=data.cash_out_amount,
        is_streamline=data.is_streamline,
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
        mip_rate=mip_rate,
        ufmip=upfront,
    )
