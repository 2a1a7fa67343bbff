"""Closing cost aggregation."""

from __future__ import annotations
import logging
from typing import Optional

from .common import origination_fee, prepaid_interest, reserve_amount, round_to_cents
from .config import LoanConfig
from .models import ClosingCostsBreakdown, PurchaseInput, RefinanceInput

logger = logging.getLogger(__name__)

LENDER_FEES = (
    "admin_fee",
    "processing_fee",
    "underwriting_fee",
    "appraisal_fee",
    "credit_report_fee",
    "flood_cert_fee",
    "tax_service_fee",
    "doc_prep_fee",
)

THIRD_PARTY_FEES = (
    "owner_title_policy",
    "lender_title_policy",
    "settlement_fee",
    "notary_fee",
    "recording_fee",
    "courier_fee",
    "pest_inspection_fee",
    "property_inspection_fee",
    "pool_inspection_fee",
    "transfer_tax",
    "mortgage_tax",
)

# Charged on a sale only; a refinance reports them as zero.
PURCHASE_ONLY_FEES = (
    "owner_title_policy",
    "pest_inspection_fee",
    "property_inspection_fee",
    "pool_inspection_fee",
    "transfer_tax",
)


def _pick(override, computed):
    return computed if override is None else override


def calculate_closing_costs(
    loan,
    interest_rate,
    config: LoanConfig,
    annual_tax=0.0,
    annual_insurance=0.0,
    seller_credit=0.0,
    lender_credit=0.0,
    points: Optional[float] = None,
    interest_days: Optional[int] = None,
    tax_months: Optional[int] = None,
    insurance_months: Optional[int] = None,
    single_premium_mi=0.0,
    prepaid_interest_override: Optional[float] = None,
    tax_reserves_override: Optional[float] = None,
    insurance_reserves_override: Optional[float] = None,
    total_override: Optional[float] = None,
    is_refinance=False,
) -> ClosingCostsBreakdown:
    """Itemize lender fees, third-party fees, prepaids and credits.

    ``loan`` is the amortizing balance, including any financed upfront fee,
    and drives both origination and per-diem interest.  Counts and points left
    as ``None`` come from the configuration.  Credits are reported separately
    and are not taken out of ``total_closing_costs``.  The configured
    ``misc_fee`` is added to the total outside the subtotals.  A refinance
    reports :data:`PURCHASE_ONLY_FEES` as zero.  A positive ``total_override``
    replaces the computed total and the difference is kept in ``adjustment``.
    """

    fees = config.fees
    prepaids = config.prepaids
    points = fees.origination_points if points is None else points
    interest_days = prepaids.interest_days if interest_days is None else interest_days
    tax_months = prepaids.tax_months if tax_months is None else tax_months
    insurance_months = prepaids.insurance_months if insurance_months is None else insurance_months

    lender = {"origination_fee": round_to_cents(origination_fee(loan, points))}
    lender.update({name: round_to_cents(getattr(fees, name)) for name in LENDER_FEES})
    third_party = {name: round_to_cents(getattr(fees, name)) for name in THIRD_PARTY_FEES}
    if is_refinance:
        third_party.update(dict.fromkeys(PURCHASE_ONLY_FEES, 0.0))
    prepaid = {
        "prepaid_interest": round_to_cents(
            _pick(prepaid_interest_override, prepaid_interest(loan, interest_rate, interest_days))
        ),
        "tax_reserves": round_to_cents(_pick(tax_reserves_override, reserve_amount(annual_tax, tax_months))),
        "insurance_reserves": round_to_cents(
            _pick(insurance_reserves_override, reserve_amount(annual_insurance, insurance_months))
        ),
    }

    total_lender = round_to_cents(sum(lender.values()))
    total_third_party = round_to_cents(sum(third_party.values()))
    total_prepaids = round_to_cents(sum(prepaid.values()))
    single_premium_mi = round_to_cents(single_premium_mi)
    misc_fee = round_to_cents(fees.misc_fee)
    seller_credit = round_to_cents(seller_credit)
    lender_credit = round_to_cents(lender_credit)
    total_credits = round_to_cents(seller_credit + lender_credit)

    total = round_to_cents(total_lender + total_third_party + total_prepaids + single_premium_mi + misc_fee)
    adjustment = 0.0
    if total_override is not None and total_override > 0:
        adjustment = round_to_cents(total_override - total)
        total = round_to_cents(total_override)
        logger.debug("Closing cost total overridden to %s (adjustment %s)", total, adjustment)

    return ClosingCostsBreakdown(
        **lender,
        total_lender_fees=total_lender,
        **third_party,
        total_third_party_fees=total_third_party,
        **prepaid,
        total_prepaids=total_prepaids,
        prepaid_interest_days=interest_days,
        tax_reserve_months=tax_months,
        insurance_reserve_months=insurance_months,
        single_premium_mi=single_premium_mi,
        misc_fee=misc_fee,
        seller_credit=seller_credit,
        lender_credit=lender_credit,
        total_credits=total_credits,
        total_closing_costs=total,
        net_closing_costs=round_to_cents(total - total_credits),
        adjustment=adjustment,
    )


def closing_costs_for_purchase(
    data: PurchaseInput, loan, config: LoanConfig, seller_credit=None, single_premium_mi=0.0
) -> ClosingCostsBreakdown:
    """Run :func:`calculate_closing_costs` with the fields of a purchase input."""

    return calculate_closing_costs(
        loan,
        data.interest_rate,
        config,
        annual_tax=data.property_tax_monthly * 12,
        annual_insurance=data.home_insurance_monthly * 12,
        seller_credit=data.seller_credit if seller_credit is None else seller_credit,
        lender_credit=data.lender_credit,
        points=data.origination_points,
        interest_days=data.prepaid_interest_days,
        tax_months=data.tax_reserve_months,
        insurance_months=data.insurance_reserve_months,
        single_premium_mi=single_premium_mi,
        prepaid_interest_override=data.prepaid_interest_override,
        tax_reserves_override=data.tax_reserves_override,
        insurance_reserves_override=data.insurance_reserves_override,
        total_override=data.closing_costs_override,
    )


def closing_costs_for_refinance(data: RefinanceInput, loan, config: LoanConfig) -> ClosingCostsBreakdown:
    """Run :func:`calculate_closing_costs` with the fields of a refinance input.

    There is no seller on a refinance, so the only credit is the lender's.
    """

    return calculate_closing_costs(
        loan,
        data.interest_rate,
        config,
        annual_tax=data.property_tax_monthly * 12,
        annual_insurance=data.home_insurance_monthly * 12,
        lender_credit=data.lender_credit,
        points=data.origination_points,
        interest_days=data.prepaid_interest_days,
        tax_months=data.tax_reserve_months,
        insurance_months=data.insurance_reserve_months,
        prepaid_interest_override=data.prepaid_interest_override,
        tax_reserves_override=data.tax_reserves_override,
        insurance_reserves_override=data.insurance_reserves_override,
        total_override=data.closing_costs_override,
        is_refinance=True,
    )
