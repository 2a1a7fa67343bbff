"""Side-by-side comparison of purchase scenarios."""

from __future__ import annotations
import logging
from typing import List, Union

import pandas as pd

from .common import round_to_cents
from .config import LoanConfig
from .models import ComparisonInput, ComparisonResult, LoanProgram, ScenarioDifference, ScenarioResult
from .programs import calculate_purchase

logger = logging.getLogger(__name__)

PROGRAM_LABELS = {LoanProgram.CONVENTIONAL: "Conventional", LoanProgram.FHA: "FHA", LoanProgram.VA: "VA"}

TABLE_ROWS = [
    ("program", "Program"),
    ("loan_amount", "Loan Amount"),
    ("total_loan_amount", "Total Loan Amount"),
    ("down_payment", "Down Payment"),
    ("ltv", "LTV %"),
    ("principal_and_interest", "Principal & Interest"),
    ("mortgage_insurance", "Mortgage Insurance"),
    ("monthly_payment", "Monthly Payment"),
    ("cash_to_close", "Cash to Close"),
]


def compare_scenarios(data: Union[ComparisonInput, dict], config: LoanConfig) -> ComparisonResult:
    """Run each scenario through its program calculator.

    Scenarios share the monthly tax, insurance and HOA figures.  Everything a
    scenario does not carry uses the calculator defaults: 760 FICO tier,
    monthly PMI, first-use VA, no credits and no earnest deposit.  Differences
    are measured against the first scenario.
    """

    if not isinstance(data, ComparisonInput):
        data = ComparisonInput.model_validate(data)

    results: List[ScenarioResult] = []
    for scenario in data.scenarios:
        calc = calculate_purchase(
            scenario.program,
            {
                "sales_price": scenario.sales_price,
                "down_payment_percent": scenario.down_payment_percent,
                "interest_rate": scenario.interest_rate,
                "term_years": scenario.term_years,
                "property_tax_monthly": data.property_tax_monthly,
                "home_insurance_monthly": data.home_insurance_monthly,
                "hoa_monthly": data.hoa_monthly,
            },
            config,
        )
        results.append(
            ScenarioResult(
                name=scenario.name,
                program=scenario.program,
                loan_amount=calc.base_loan_amount,
                total_loan_amount=calc.total_loan_amount,
                down_payment=calc.down_payment,
                ltv=calc.ltv,
                monthly_payment=calc.monthly_payment.total,
                principal_and_interest=calc.monthly_payment.principal_and_interest,
                mortgage_insurance=calc.monthly_payment.mortgage_insurance,
                cash_to_close=calc.cash_to_close,
            )
        )
    logger.debug("Compared %d scenarios", len(results))

    baseline = results[0]
    differences = [
        ScenarioDifference(
            name=r.name,
            is_baseline=i == 0,
            monthly_payment_diff=round_to_cents(r.monthly_payment - baseline.monthly_payment),
            cash_to_close_diff=round_to_cents(r.cash_to_close - baseline.cash_to_close),
        )
        for i, r in enumerate(results)
    ]
    return ComparisonResult(scenarios=results, differences=differences)


def comparison_table(result: ComparisonResult) -> pd.DataFrame:
    """One column per scenario, one row per compared figure."""

    columns = {}
    for s in result.scenarios:
        row = s.model_dump()
        row["program"] = PROGRAM_LABELS[s.program]
        columns[s.name] = [row[key] for key, _ in TABLE_ROWS]
    return pd.DataFrame(columns, index=[label for _, label in TABLE_ROWS])


def format_comparison_summary(result: ComparisonResult) -> str:
    """Plain-text summary, one line per scenario, e.g. ``FHA: $2,910.55/mo (+$120.40/mo)``."""

    lines = []
    for s, d in zip(result.scenarios, result.differences):
        if d.is_baseline:
            note = "Baseline"
        else:
            sign = "-" if d.monthly_payment_diff < 0 else "+"
            note = f"{sign}${abs(d.monthly_payment_diff):,.2f}/mo"
        lines.append(f"{s.name}: ${s.monthly_payment:,.2f}/mo ({note})")
    return "\n".join(lines)
