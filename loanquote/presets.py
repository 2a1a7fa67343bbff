"""Default configuration tables.

Every value here can be replaced per deployment by passing a partial mapping
of the same shape to :func:`loanquote.config.config_from_dict`.
"""

DISCLAIMER = ("Estimates only. Figures are based on the fee schedule, rate tables and limits "
"configured for this tool and are not a loan approval, a commitment to lend, or a Loan Estimate. "
"Actual rates, mortgage insurance premiums and closing costs are determined at application.")

RATE_DEFAULTS = {"conv30": 7.0, "conv15": 6.5, "fha30": 6.5, "va30": 6.5, "jumbo": 7.5}

FEE_DEFAULTS = {
    "origination_points": 0.0,
    "admin_fee": 0.0,
    "processing_fee": 995.0,
    "underwriting_fee": 1495.0,
    "appraisal_fee": 650.0,
    "credit_report_fee": 150.0,
    "flood_cert_fee": 30.0,
    "tax_service_fee": 85.0,
    "doc_prep_fee": 295.0,
    "settlement_fee": 1115.0,
    "notary_fee": 350.0,
    "recording_fee": 275.0,
    "courier_fee": 35.0,
    "owner_title_policy": 1730.0,
    "lender_title_policy": 1515.0,
    "pest_inspection_fee": 150.0,
    "property_inspection_fee": 450.0,
    "pool_inspection_fee": 100.0,
    "transfer_tax": 0.0,
    "mortgage_tax": 0.0,
    "misc_fee": 0.0,
}

PREPAID_DEFAULTS = {"tax_months": 4, "insurance_months": 14, "interest_days": 15, "tax_rate_annual": 1.25}

LIMIT_DEFAULTS = {"conforming": 766550.0, "high_balance": 1149825.0, "fha": 498257.0}

# Annual MIP rates are keyed by term (15yr and under vs longer) and base-loan LTV.
FHA_DEFAULTS = {
    "min_down_pct": 3.5,
    "max_ltv_cashout": 80.0,
    "ufmip_purchase": 1.75,
    "ufmip_refi": 1.75,
    "ufmip_streamline": 0.55,
    "mip_30yr_gt95": 0.55,
    "mip_30yr_le95": 0.50,
    "mip_15yr_gt90": 0.40,
    "mip_15yr_le90": 0.15,
}

# Funding fee percentages. The le90 / 90to95 / gt95 columns correspond to
# 10%+ down, 5% to under 10% down and under 5% down.
VA_DEFAULTS = {
    "max_guarantee": 0.0,
    "max_ltv_cashout": 100.0,
    "max_ltv_irrrl": 100.0,
    "ff_first_le90": 1.25,
    "ff_first_90to95": 1.50,
    "ff_first_gt95": 2.15,
    "ff_subseq_le90": 1.25,
    "ff_subseq_90to95": 1.50,
    "ff_subseq_gt95": 3.30,
    "ff_irrrl": 0.50,
    "ff_cashout_first": 2.15,
    "ff_cashout_subseq": 3.30,
}

LTV_TIERS = (85, 90, 95, 97)
CREDIT_TIERS = (760, 740, 720, 700, 680, 660, 640, 620)


def _tiered(rows):
    """Build ``{ltv_tier: {credit_tier: rate}}`` from rows ordered like the tier tuples."""
    return {
        ltv: dict(zip(CREDIT_TIERS, rates))
        for ltv, rates in zip(sorted(LTV_TIERS, reverse=True), rows)
    }


# Conventional MI factors in percent of the loan amount. Monthly factors are
# annual rates paid monthly, single factors are one-time premiums. Rows run
# 97, 95, 90, 85 LTV; columns run 760 down to 620 FICO.
MI_FACTORS = {
    "standard": {
        "monthly": _tiered([
            [0.58, 0.70, 0.87, 1.07, 1.28, 1.55, 1.80, 2.10],
            [0.38, 0.50, 0.62, 0.78, 0.99, 1.19, 1.45, 1.68],
            [0.19, 0.25, 0.34, 0.46, 0.65, 0.79, 1.05, 1.25],
            [0.15, 0.17, 0.21, 0.28, 0.40, 0.55, 0.70, 0.85],
        ]),
        "single": _tiered([
            [1.85, 2.25, 2.75, 3.40, 4.05, 4.90, 5.70, 6.65],
            [1.20, 1.55, 1.95, 2.45, 3.15, 3.75, 4.60, 5.30],
            [0.60, 0.80, 1.08, 1.45, 2.05, 2.50, 3.30, 3.95],
            [0.47, 0.55, 0.65, 0.90, 1.25, 1.75, 2.20, 2.70],
        ]),
    },
    "high_balance": {
        "monthly": _tiered([
            [0.70, 0.85, 1.05, 1.30, 1.55, 1.88, 2.18, 2.55],
            [0.46, 0.61, 0.75, 0.95, 1.20, 1.44, 1.76, 2.04],
            [0.23, 0.30, 0.41, 0.56, 0.79, 0.96, 1.27, 1.52],
            [0.18, 0.21, 0.25, 0.34, 0.49, 0.67, 0.85, 1.03],
        ]),
        "single": _tiered([
            [2.24, 2.73, 3.33, 4.12, 4.90, 5.93, 6.90, 8.05],
            [1.45, 1.88, 2.36, 2.97, 3.81, 4.54, 5.57, 6.41],
            [0.73, 0.97, 1.31, 1.76, 2.48, 3.03, 3.99, 4.78],
            [0.57, 0.67, 0.79, 1.09, 1.51, 2.12, 2.66, 3.27],
        ]),
    },
}

COMPANY_DEFAULTS = {"name": "", "nmls_id": "", "lo_name": "", "lo_email": "", "lo_phone": "", "address": ""}

DEFAULT_CONFIG = {
    "rates": RATE_DEFAULTS,
    "fees": FEE_DEFAULTS,
    "prepaids": PREPAID_DEFAULTS,
    "limits": LIMIT_DEFAULTS,
    "fha": FHA_DEFAULTS,
    "va": VA_DEFAULTS,
    "mi_factors": MI_FACTORS,
    "company": COMPANY_DEFAULTS,
}
