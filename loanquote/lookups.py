"""Mortgage insurance and funding fee rate lookups."""

from __future__ import annotations
import logging

from .common import is_high_balance, ltv_tier
from .config import LoanConfig
from .models import PmiType, VaUsage

logger = logging.getLogger(__name__)

SINGLE_PREMIUM_TYPES = (PmiType.SINGLE_FINANCED, PmiType.SINGLE_CASH)


def pmi_rate(ltv, credit_tier, loan, pmi_type, config: LoanConfig):
    """Conventional MI rate in percent.

    Zero at or below 80% LTV.  Loans above the conforming limit use the
    high-balance table; single-premium payment types read the single
    sub-table and every other type reads the monthly one.
    """

    tier = ltv_tier(ltv)
    if tier is None:
        return 0.0
    high_balance = is_high_balance(loan, config.limits.conforming)
    matrix = config.mi_factors.high_balance if high_balance else config.mi_factors.standard
    table = matrix.single if PmiType(pmi_type) in SINGLE_PREMIUM_TYPES else matrix.monthly
    rate = table[tier][credit_tier]
    logger.debug(
        "PMI ltv=%s tier=%s credit=%s high_balance=%s type=%s rate=%s",
        ltv, tier, credit_tier, high_balance, pmi_type, rate,
    )
    return rate


def monthly_pmi(loan, rate):
    return loan * rate / 100 / 12


def single_premium_pmi(loan, rate):
    return loan * rate / 100


def fha_mip_rate(ltv, term_years, config: LoanConfig):
    """Annual FHA MIP rate by term and base-loan LTV."""

    fha = config.fha
    if term_years > 15:
        rate = fha.mip_30yr_gt95 if ltv > 95 else fha.mip_30yr_le95
    else:
        rate = fha.mip_15yr_gt90 if ltv > 90 else fha.mip_15yr_le90
    logger.debug("FHA MIP ltv=%s term=%s rate=%s", ltv, term_years, rate)
    return rate


def ufmip_rate(config: LoanConfig, is_refinance=False, is_streamline=False):
    fha = config.fha
    if is_streamline:
        return fha.ufmip_streamline
    return fha.ufmip_refi if is_refinance else fha.ufmip_purchase


def ufmip(base_loan, config: LoanConfig, is_refinance=False, is_streamline=False):
    """Upfront MIP, financed into the loan.

    Purchases and full refinances use their own rates; a streamline refinance
    uses the reduced streamline rate.
    """

    return base_loan * ufmip_rate(config, is_refinance, is_streamline) / 100


def monthly_mip(base_loan, rate):
    return base_loan * rate / 100 / 12


def va_funding_fee_rate(va_usage, down_pct, config: LoanConfig, is_irrrl=False, is_cashout=False):
    """VA funding fee percent.

    IRRRL takes priority, then cash-out, then usage crossed with the down
    payment tier: under 5% down, 5% to under 10%, and 10% or more.
    """

    va = config.va
    first = VaUsage(va_usage) == VaUsage.FIRST
    if is_irrrl:
        rate = va.ff_irrrl
    elif is_cashout:
        rate = va.ff_cashout_first if first else va.ff_cashout_subseq
    elif down_pct >= 10:
        rate = va.ff_first_le90 if first else va.ff_subseq_le90
    elif down_pct >= 5:
        rate = va.ff_first_90to95 if first else va.ff_subseq_90to95
    else:
        rate = va.ff_first_gt95 if first else va.ff_subseq_gt95
    logger.debug("VA funding fee usage=%s down_pct=%s rate=%s", va_usage, down_pct, rate)
    return rate


def va_funding_fee(loan, rate, is_disabled_veteran=False):
    if is_disabled_veteran:
        return 0.0
    return loan * rate / 100
