from __future__ import annotations
from enum import Enum
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import (
    BaseModel,
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    PositiveInt,
    field_validator,
    model_validator,
)

from .common import down_payment_from_percent, down_payment_percent
from .presets import CREDIT_TIERS
from .utils import credit_tier_for_score


class LoanProgram(str, Enum):
    CONVENTIONAL = "conventional"
    FHA = "fha"
    VA = "va"


class PmiType(str, Enum):
    MONTHLY = "monthly"
    SINGLE_FINANCED = "single_financed"
    SINGLE_CASH = "single_cash"
    SPLIT = "split"


class VaUsage(str, Enum):
    FIRST = "first"
    SUBSEQUENT = "subsequent"


class RefinanceType(str, Enum):
    RATE_TERM = "rate_term"
    CASH_OUT = "cash_out"
    STREAMLINE = "streamline"


class DownPaymentPercent(BaseModel):
    kind: Literal["percent"] = "percent"
    percent: NonNegativeFloat


class DownPaymentAmount(BaseModel):
    kind: Literal["amount"] = "amount"
    amount: NonNegativeFloat


DownPayment = Annotated[Union[DownPaymentPercent, DownPaymentAmount], Field(discriminator="kind")]


def _annual_to_monthly(data):
    for annual, monthly in (
        ("property_tax_annual", "property_tax_monthly"),
        ("home_insurance_annual", "home_insurance_monthly"),
    ):
        value = data.pop(annual, None)
        if value is None:
            continue
        if data.get(monthly) is not None:
            raise ValueError(f"supply {annual} or {monthly}, not both")
        data[monthly] = float(value) / 12
    return data


class CreditTierMixin(BaseModel):
    """Conventional credit tier, also accepted as a raw ``credit_score``."""

    fico_tier: int = 760

    @model_validator(mode="before")
    @classmethod
    def _credit_score(cls, data):
        if isinstance(data, dict) and data.get("credit_score") is not None:
            data = dict(data)
            score = data.pop("credit_score")
            data.setdefault("fico_tier", credit_tier_for_score(score))
        return data

    @field_validator("fico_tier")
    @classmethod
    def _known_tier(cls, v):
        if v not in CREDIT_TIERS:
            raise ValueError(f"fico_tier must be one of {CREDIT_TIERS}")
        return v


class PurchaseInput(BaseModel):
    """Fields shared by every purchase calculator.

    The down payment is either a percent or an amount.  Callers may pass
    ``down_payment_percent=`` or ``down_payment_amount=`` instead of building the
    tagged value, and ``property_tax_annual=`` / ``home_insurance_annual=`` in
    place of the monthly figures.  Optional prepaid counts and origination
    points fall back to the configuration.
    """

    sales_price: NonNegativeFloat
    down_payment: Optional[DownPayment] = None
    interest_rate: NonNegativeFloat
    term_years: PositiveInt = 30
    property_tax_monthly: NonNegativeFloat = 0.0
    home_insurance_monthly: NonNegativeFloat = 0.0
    hoa_monthly: NonNegativeFloat = 0.0
    flood_insurance_monthly: NonNegativeFloat = 0.0
    seller_credit: NonNegativeFloat = 0.0
    lender_credit: NonNegativeFloat = 0.0
    earnest_deposit: NonNegativeFloat = 0.0
    origination_points: Optional[NonNegativeFloat] = None
    prepaid_interest_days: Optional[NonNegativeInt] = None
    tax_reserve_months: Optional[NonNegativeInt] = None
    insurance_reserve_months: Optional[NonNegativeInt] = None
    prepaid_interest_override: Optional[NonNegativeFloat] = None
    tax_reserves_override: Optional[NonNegativeFloat] = None
    insurance_reserves_override: Optional[NonNegativeFloat] = None
    closing_costs_override: Optional[NonNegativeFloat] = None

    @model_validator(mode="before")
    @classmethod
    def _shortcuts(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        pct = data.pop("down_payment_percent", None)
        amt = data.pop("down_payment_amount", None)
        if pct is not None or amt is not None:
            if (pct is not None and amt is not None) or data.get("down_payment") is not None:
                raise ValueError("supply the down payment as a percent or an amount, not both")
            if pct is not None:
                data["down_payment"] = {"kind": "percent", "percent": pct}
            else:
                data["down_payment"] = {"kind": "amount", "amount": amt}
        return _annual_to_monthly(data)

    def resolve_down_payment(self, default_percent: float = 0.0) -> Tuple[float, float]:
        """Return the canonical ``(amount, percent)`` pair for this purchase."""
        choice = self.down_payment or DownPaymentPercent(percent=default_percent)
        if choice.kind == "percent":
            return down_payment_from_percent(self.sales_price, choice.percent), choice.percent
        return choice.amount, down_payment_percent(self.sales_price, choice.amount)


class ConventionalPurchaseInput(CreditTierMixin, PurchaseInput):
    pmi_type: PmiType = PmiType.MONTHLY
    seller_credit_percent: Optional[NonNegativeFloat] = None


class FhaPurchaseInput(PurchaseInput):
    is_203k: bool = False


class VaPurchaseInput(PurchaseInput):
    va_usage: VaUsage = VaUsage.FIRST
    is_disabled_veteran: bool = False
    is_reservist: bool = False


class RefinanceInput(BaseModel):
    """Fields shared by every refinance calculator.

    LTV is the new loan over the appraised value.  Unlike a purchase, points
    and reserve months default to zero; prepaid interest days still fall back
    to the configuration.  ``property_tax_annual=`` / ``home_insurance_annual=``
    are accepted in place of the monthly figures.
    """

    property_value: NonNegativeFloat
    existing_loan_balance: NonNegativeFloat
    new_loan_amount: NonNegativeFloat
    interest_rate: NonNegativeFloat
    term_years: PositiveInt = 30
    cash_out_amount: NonNegativeFloat = 0.0
    property_tax_monthly: NonNegativeFloat = 0.0
    home_insurance_monthly: NonNegativeFloat = 0.0
    hoa_monthly: NonNegativeFloat = 0.0
    flood_insurance_monthly: NonNegativeFloat = 0.0
    lender_credit: NonNegativeFloat = 0.0
    origination_points: NonNegativeFloat = 0.0
    prepaid_interest_days: Optional[NonNegativeInt] = None
    tax_reserve_months: NonNegativeInt = 0
    insurance_reserve_months: NonNegativeInt = 0
    prepaid_interest_override: Optional[NonNegativeFloat] = None
    tax_reserves_override: Optional[NonNegativeFloat] = None
    insurance_reserves_override: Optional[NonNegativeFloat] = None
    closing_costs_override: Optional[NonNegativeFloat] = None

    @model_validator(mode="before")
    @classmethod
    def _shortcuts(cls, data):
        if not isinstance(data, dict):
            return data
        return _annual_to_monthly(dict(data))


class ConventionalRefinanceInput(CreditTierMixin, RefinanceInput):
    refinance_type: RefinanceType = RefinanceType.RATE_TERM


class FhaRefinanceInput(RefinanceInput):
    is_streamline: bool = False


class VaRefinanceInput(RefinanceInput):
    is_irrrl: bool = False
    va_usage: VaUsage = VaUsage.FIRST
    is_disabled_veteran: bool = False


class MonthlyPaymentBreakdown(BaseModel):
    principal_and_interest: float
    mortgage_insurance: float = 0.0
    property_tax: float = 0.0
    home_insurance: float = 0.0
    hoa: float = 0.0
    flood_insurance: float = 0.0
    total: float


class ClosingCostsBreakdown(BaseModel):
    # lender
    origination_fee: float
    admin_fee: float
    processing_fee: float
    underwriting_fee: float
    appraisal_fee: float
    credit_report_fee: float
    flood_cert_fee: float
    tax_service_fee: float
    doc_prep_fee: float
    total_lender_fees: float
    # third party
    owner_title_policy: float
    lender_title_policy: float
    settlement_fee: float
    notary_fee: float
    recording_fee: float
    courier_fee: float
    pest_inspection_fee: float
    property_inspection_fee: float
    pool_inspection_fee: float
    transfer_tax: float = 0.0
    mortgage_tax: float = 0.0
    total_third_party_fees: float
    # prepaids
    prepaid_interest: float
    tax_reserves: float
    insurance_reserves: float
    total_prepaids: float
    prepaid_interest_days: int
    tax_reserve_months: int
    insurance_reserve_months: int
    single_premium_mi: float = 0.0
    misc_fee: float = 0.0
    # credits
    seller_credit: float = 0.0
    lender_credit: float = 0.0
    total_credits: float = 0.0
    total_closing_costs: float
    net_closing_costs: float
    adjustment: float = 0.0


class QuoteResult(BaseModel):
    """Figures common to purchase and refinance results."""

    program: LoanProgram
    base_loan_amount: float
    total_loan_amount: float
    ltv: float
    interest_rate: float
    term_years: int
    monthly_payment: MonthlyPaymentBreakdown
    closing_costs: ClosingCostsBreakdown
    cash_to_close: float
    apr: float = 0.0
    is_high_balance: bool = False
    pmi_rate: Optional[float] = None
    mip_rate: Optional[float] = None
    ufmip: Optional[float] = None
    va_funding_fee_rate: Optional[float] = None
    va_funding_fee: Optional[float] = None


class LoanCalculationResult(QuoteResult):
    sales_price: float
    down_payment: float
    down_payment_percent: float
    pmi_type: Optional[PmiType] = None
    single_premium_pmi: Optional[float] = None


class RefinanceCalculationResult(QuoteResult):
    """A negative ``cash_to_close`` is cash back to the borrower."""

    property_value: float
    existing_loan_balance: float
    cash_out_amount: float = 0.0
    refinance_type: Optional[RefinanceType] = None
    is_streamline: bool = False
    is_irrrl: bool = False


class SellerNetInput(BaseModel):
    sales_price: NonNegativeFloat
    first_lien_payoff: NonNegativeFloat = 0.0
    second_lien_payoff: NonNegativeFloat = 0.0
    commission_percent: NonNegativeFloat = 0.0
    title_insurance: NonNegativeFloat = 0.0
    escrow_fee: NonNegativeFloat = 0.0
    transfer_tax: NonNegativeFloat = 0.0
    recording_fees: NonNegativeFloat = 0.0
    repair_credits: NonNegativeFloat = 0.0
    hoa_payoff: NonNegativeFloat = 0.0
    # positive: seller owes taxes, negative: seller prepaid and is credited
    property_tax_proration: float = 0.0
    other_credits: NonNegativeFloat = 0.0
    other_debits: NonNegativeFloat = 0.0


class SellerNetResult(BaseModel):
    sales_price: float
    first_lien_payoff: float = 0.0
    second_lien_payoff: float = 0.0
    title_insurance: float = 0.0
    escrow_fee: float = 0.0
    transfer_tax: float = 0.0
    recording_fees: float = 0.0
    repair_credits: float = 0.0
    hoa_payoff: float = 0.0
    other_debits: float = 0.0
    property_tax_proration: float = 0.0
    other_credits: float = 0.0
    total_payoffs: float
    commission: float
    total_costs: float
    total_credits: float
    estimated_net_proceeds: float


class ComparisonScenario(BaseModel):
    name: str
    program: LoanProgram
    sales_price: NonNegativeFloat
    down_payment_percent: NonNegativeFloat
    interest_rate: NonNegativeFloat
    term_years: PositiveInt = 30


class ComparisonInput(BaseModel):
    """Two to four scenarios sharing the same monthly property costs."""

    scenarios: List[ComparisonScenario] = Field(min_length=2, max_length=4)
    property_tax_monthly: NonNegativeFloat = 0.0
    home_insurance_monthly: NonNegativeFloat = 0.0
    hoa_monthly: NonNegativeFloat = 0.0

    @field_validator("scenarios")
    @classmethod
    def _unique_names(cls, v):
        names = [s.name for s in v]
        if len(set(names)) != len(names):
            raise ValueError("scenario names must be unique")
        return v


class ScenarioResult(BaseModel):
    name: str
    program: LoanProgram
    loan_amount: float
    total_loan_amount: float
    down_payment: float
    ltv: float
    monthly_payment: float
    principal_and_interest: float
    mortgage_insurance: float
    cash_to_close: float


class ScenarioDifference(BaseModel):
    name: str
    is_baseline: bool
    monthly_payment_diff: float
    cash_to_close_diff: float


class ComparisonResult(BaseModel):
    scenarios: List[ScenarioResult]
    differences: List[ScenarioDifference]
