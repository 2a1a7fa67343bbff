"""Seller net proceeds and closing-date prorations."""

from __future__ import annotations
import calendar
import datetime as dt
from typing import Optional

from .common import round_to_cents
from .models import SellerNetInput, SellerNetResult

# Input line items repeated on the result.
SELLER_ITEMS = (
    "first_lien_payoff",
    "second_lien_payoff",
    "title_insurance",
    "escrow_fee",
    "transfer_tax",
    "recording_fees",
    "repair_credits",
    "hoa_payoff",
    "other_debits",
    "property_tax_proration",
    "other_credits",
)


def calculate_commission(sales_price, commission_percent):
    return round_to_cents(sales_price * commission_percent / 100)


def calculate_seller_net(data: SellerNetInput) -> SellerNetResult:
    """Estimate what the seller walks away with.

    A positive tax proration is owed by the seller and counts as a cost; a
    negative one means the seller prepaid and receives a credit.
    """

    total_payoffs = data.first_lien_payoff + data.second_lien_payoff
    commission = calculate_commission(data.sales_price, data.commission_percent)
    total_costs = (
        commission
        + data.title_insurance
        + data.escrow_fee
        + data.transfer_tax
        + data.recording_fees
        + data.repair_credits
        + data.hoa_payoff
        + data.other_debits
        + max(data.property_tax_proration, 0.0)
    )
    total_credits = data.other_credits + max(-data.property_tax_proration, 0.0)
    net = data.sales_price - total_payoffs - total_costs + total_credits
    items = {name: round_to_cents(getattr(data, name)) for name in SELLER_ITEMS}
    return SellerNetResult(
        sales_price=data.sales_price,
        **items,
        total_payoffs=round_to_cents(total_payoffs),
        commission=commission,
        total_costs=round_to_cents(total_costs),
        total_credits=round_to_cents(total_credits),
        estimated_net_proceeds=round_to_cents(net),
    )


def tax_proration(annual_tax, closing_date: dt.date, period_start: Optional[dt.date] = None, is_prepaid=False):
    """Signed property tax proration for the seller.

    Days run from ``period_start`` (January 1 of the closing year by default)
    to ``closing_date``.  Taxes paid in arrears are owed for those days
    (positive).  Prepaid taxes are refunded for the rest of a 365-day year
    (negative).
    """

    if period_start is None:
        period_start = dt.date(closing_date.year, 1, 1)
    days = max((closing_date - period_start).days, 0)
    daily = annual_tax / 365
    if is_prepaid:
        return round_to_cents(-(365 - days) * daily)
    return round_to_cents(days * daily)


def hoa_proration(monthly_dues, closing_date: dt.date):
    """Dues owed through the closing day, inclusive."""

    days_in_month = calendar.monthrange(closing_date.year, closing_date.month)[1]
    return round_to_cents(monthly_dues / days_in_month * closing_date.day)
