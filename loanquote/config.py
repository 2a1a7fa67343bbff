"""Typed, read-only loan configuration.

The configuration is built once per session and passed explicitly into every
calculator.  Every model is frozen and the MI rate grids are read-only
mappings, so no caller can change a value after construction.
"""

from __future__ import annotations
import copy
import json
import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Mapping

from pydantic import (
    BaseModel,
    ConfigDict,
    NonNegativeFloat,
    NonNegativeInt,
    field_serializer,
    field_validator,
    model_validator,
)

from .presets import CREDIT_TIERS, DEFAULT_CONFIG, LTV_TIERS

logger = logging.getLogger(__name__)


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class RateDefaults(_Frozen):
    conv30: NonNegativeFloat
    conv15: NonNegativeFloat
    fha30: NonNegativeFloat
    va30: NonNegativeFloat
    jumbo: NonNegativeFloat


class FeeSchedule(_Frozen):
    origination_points: NonNegativeFloat = 0.0
    admin_fee: NonNegativeFloat = 0.0
    processing_fee: NonNegativeFloat = 0.0
    underwriting_fee: NonNegativeFloat = 0.0
    appraisal_fee: NonNegativeFloat = 0.0
    credit_report_fee: NonNegativeFloat = 0.0
    flood_cert_fee: NonNegativeFloat = 0.0
    tax_service_fee: NonNegativeFloat = 0.0
    doc_prep_fee: NonNegativeFloat = 0.0
    settlement_fee: NonNegativeFloat = 0.0
    notary_fee: NonNegativeFloat = 0.0
    recording_fee: NonNegativeFloat = 0.0
    courier_fee: NonNegativeFloat = 0.0
    owner_title_policy: NonNegativeFloat = 0.0
    lender_title_policy: NonNegativeFloat = 0.0
    pest_inspection_fee: NonNegativeFloat = 0.0
    property_inspection_fee: NonNegativeFloat = 0.0
    pool_inspection_fee: NonNegativeFloat = 0.0
    transfer_tax: NonNegativeFloat = 0.0
    mortgage_tax: NonNegativeFloat = 0.0
    misc_fee: NonNegativeFloat = 0.0


class PrepaidDefaults(_Frozen):
    tax_months: NonNegativeInt
    insurance_months: NonNegativeInt
    interest_days: NonNegativeInt
    tax_rate_annual: NonNegativeFloat


class LoanLimits(_Frozen):
    conforming: NonNegativeFloat
    high_balance: NonNegativeFloat
    fha: NonNegativeFloat


class FhaSettings(_Frozen):
    min_down_pct: NonNegativeFloat
    max_ltv_cashout: NonNegativeFloat
    ufmip_purchase: NonNegativeFloat
    ufmip_refi: NonNegativeFloat
    ufmip_streamline: NonNegativeFloat
    mip_30yr_gt95: NonNegativeFloat
    mip_30yr_le95: NonNegativeFloat
    mip_15yr_gt90: NonNegativeFloat
    mip_15yr_le90: NonNegativeFloat


class VaSettings(_Frozen):
    max_guarantee: NonNegativeFloat
    max_ltv_cashout: NonNegativeFloat
    max_ltv_irrrl: NonNegativeFloat
    ff_first_le90: NonNegativeFloat
    ff_first_90to95: NonNegativeFloat
    ff_first_gt95: NonNegativeFloat
    ff_subseq_le90: NonNegativeFloat
    ff_subseq_90to95: NonNegativeFloat
    ff_subseq_gt95: NonNegativeFloat
    ff_irrrl: NonNegativeFloat
    ff_cashout_first: NonNegativeFloat
    ff_cashout_subseq: NonNegativeFloat


RateGrid = Mapping[int, Mapping[int, NonNegativeFloat]]


class MiRateTable(_Frozen):
    """MI rates in percent, ``{ltv_tier: {credit_tier: rate}}``."""

    monthly: RateGrid
    single: RateGrid

    @field_validator("monthly", "single")
    @classmethod
    def _read_only(cls, grid):
        return MappingProxyType({tier: MappingProxyType(dict(row)) for tier, row in grid.items()})

    @field_serializer("monthly", "single")
    def _plain(self, grid):
        return {tier: dict(row) for tier, row in grid.items()}

    @model_validator(mode="after")
    def _full_grid(self):
        for name in ("monthly", "single"):
            grid = getattr(self, name)
            missing = [
                (ltv_tier, credit_tier)
                for ltv_tier in LTV_TIERS
                for credit_tier in CREDIT_TIERS
                if credit_tier not in grid.get(ltv_tier, {})
            ]
            if missing:
                raise ValueError(f"{name} MI table is missing (ltv tier, credit tier) cells: {missing}")
        return self


class MiFactors(_Frozen):
    standard: MiRateTable
    high_balance: MiRateTable


class CompanyInfo(_Frozen):
    name: str = ""
    nmls_id: str = ""
    lo_name: str = ""
    lo_email: str = ""
    lo_phone: str = ""
    address: str = ""


class LoanConfig(_Frozen):
    rates: RateDefaults
    fees: FeeSchedule
    prepaids: PrepaidDefaults
    limits: LoanLimits
    fha: FhaSettings
    va: VaSettings
    mi_factors: MiFactors
    company: CompanyInfo = CompanyInfo()


def _merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, val in override.items():
        if isinstance(key, str) and key.isdigit() and int(key) in out:
            key = int(key)
        if isinstance(val, Mapping) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], val)
        else:
            out[key] = val
    return out


@lru_cache(maxsize=1)
def default_config() -> LoanConfig:
    """Configuration built from :mod:`loanquote.presets`."""
    return LoanConfig.model_validate(DEFAULT_CONFIG)


def config_from_dict(data: Mapping[str, Any]) -> LoanConfig:
    """Overlay a partial nested mapping on the presets and validate it.

    Keys may be nested to any depth, e.g. ``{"fees": {"appraisal_fee": 700}}``.
    MI tier keys may be strings, as they are after a JSON round trip.
    Raises ``pydantic.ValidationError`` for negative values, unknown keys or
    an incomplete MI table.
    """

    return LoanConfig.model_validate(_merge(DEFAULT_CONFIG, data))


def load_config(path) -> LoanConfig:
    """Load overrides from a JSON file, see :func:`config_from_dict`."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    logger.info("Loaded loan configuration overrides from %s", path)
    return config_from_dict(data)
