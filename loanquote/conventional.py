from __future__ import annotations
import logging

from .closing import closing_costs_for_purchase, closing_costs_for_refinance
from .common import (
    calculate_apr,
    calculate_cash_to_close,
    calculate_refinance_cash_to_close,
    is_high_balance,
    loan_amount,
    ltv,
    monthly_pi,
    round_to_cents,
    seller_credit_from_percent,
    total_monthly_payment,
)
from .config import LoanConfig
from .lookups import monthly_pmi, pmi_rate, single_premium_pmi
from .models import (
    ConventionalPurchaseInput,
    ConventionalRefinanceInput,
    LoanCalculationResult,
    LoanProgram,
    MonthlyPaymentBreakdown,
    PmiType,
    RefinanceCalculationResult,
    RefinanceType,
)

logger = logging.getLogger(__name__)


def calculate_conventional_purchase(data: ConventionalPurchaseInput, config: LoanConfig) -> LoanCalculationResult:
    """Conventional purchase with private mortgage insurance above 80% LTV.

    Monthly PMI is added to the payment.  A financed single premium is added
    to the loan balance, a cash single premium becomes a closing cost, and a
    split premium is not modeled.
    """

    price = data.sales_price
    down, down_pct = data.resolve_down_payment()
    base = loan_amount(price, down)
    loan_ltv = ltv(base, price)

    rate = pmi_rate(loan_ltv, data.fico_tier, base, data.pmi_type, config)
    mi_monthly = 0.0
    premium = 0.0
    cash_premium = 0.0
    total_loan = base
    if rate > 0:
        if data.pmi_type == PmiType.MONTHLY:
            mi_monthly = monthly_pmi(base, rate)
        elif data.pmi_type == PmiType.SINGLE_FINANCED:
            premium = single_premium_pmi(base, rate)
            total_loan = base + premium
        elif data.pmi_type == PmiType.SINGLE_CASH:
            premium = single_premium_pmi(base, rate)
            cash_premium = premium

    seller_credit = data.seller_credit
    if data.seller_credit_percent is not None:
        seller_credit = seller_credit_from_percent(price, data.seller_credit_percent)

    pi = monthly_pi(total_loan, data.interest_rate, data.term_years)
    parts = dict(
        principal_and_interest=round_to_cents(pi),
        mortgage_insurance=round_to_cents(mi_monthly),
        property_tax=round_to_cents(data.property_tax_monthly),
        home_insurance=round_to_cents(data.home_insurance_monthly),
        hoa=round_to_cents(data.hoa_monthly),
        flood_insurance=round_to_cents(data.flood_insurance_monthly),
    )
    monthly = MonthlyPaymentBreakdown(**parts, total=total_monthly_payment(*parts.values()))

    closing = closing_costs_for_purchase(
        data, total_loan, config, seller_credit=seller_credit, single_premium_mi=cash_premium
    )
    logger.debug("Conventional loan=%s ltv=%s pmi_rate=%s type=%s", total_loan, loan_ltv, rate, data.pmi_type)

    return LoanCalculationResult(
        program=LoanProgram.CONVENTIONAL,
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
        is_high_balance=is_high_balance(base, config.limits.conforming),
        pmi_type=data.pmi_type,
        pmi_rate=rate,
        single_premium_pmi=round_to_cents(premium) if premium else None,
    )


def calculate_conventional_refinance(
    data: ConventionalRefinanceInput, config: LoanConfig
) -> RefinanceCalculationResult:
    """Conventional rate/term, cash-out or streamline refinance.

    LTV is the new loan over the property value and monthly PMI applies above
    80%.  There is no seller credit, and points default to zero.
    """

    loan = data.new_loan_amount
    loan_ltv = ltv(loan, data.property_value)
    rate = pmi_rate(loan_ltv, data.fico_tier, loan, PmiType.MONTHLY, config)

    pi = monthly_pi(loan, data.interest_rate, data.term_years)
    parts = dict(
        principal_and_interest=round_to_cents(pi),
        mortgage_insurance=round_to_cents(monthly_pmi(loan, rate)),
        property_tax=round_to_cents(data.property_tax_monthly),
        home_insurance=round_to_cents(data.home_insurance_monthly),
        hoa=round_to_cents(data.hoa_monthly),
        flood_insurance=round_to_cents(data.flood_insurance_monthly),
    )
    monthly = MonthlyPaymentBreakdown(**parts, total=total_monthly_payment(*parts.values()))

    closing = closing_costs_for_refinance(data, loan, config)
    logger.debug(
        "Conventional refinance type=%s loan=%s ltv=%s pmi_rate=%s", data.refinance_type, loan, loan_ltv, rate
    )

    return RefinanceCalculationResult(
        program=LoanProgram.CONVENTIONAL,
        property_value=data.property_value,
        existing_loan_balance=data.existing_loan_balance,
        cash_out_amount=data.cash_out_amount,
        refinance_type=data.refinance_type,
        is_streamline=data.refinance_type == RefinanceType.STREAMLINE,
        base_loan_amount=round_to_cents(loan),
        total_loan_amount=round_to_cents(loan),
        ltv=loan_ltv,
        interest_rate=data.interest_rate,
        term_years=data.term_years,
        monthly_payment=monthly,
        closing_costs=closing,
        cash_to_close=calculate_refinance_cash_to_close(
            data.existing_loan_balance, closing.net_closing_costs, loan
        ),
        apr=calculate_apr(loan, closing.total_lender_fees, pi, data.term_years),
        is_high_balance=is_high_balance(loan, config.limits.conforming),
        pmi_rate=rate,
    )
