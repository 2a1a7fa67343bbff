from __future__ import annotations
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from .config import LoanConfig
from .models import (
    LoanCalculationResult,
    LoanProgram,
    PmiType,
    PurchaseInput,
    QuoteResult,
    RefinanceCalculationResult,
    RefinanceInput,
)


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def _conventional_limits(result: QuoteResult, config: LoanConfig) -> List[RuleResult]:
    res: List[RuleResult] = []
    limits = config.limits
    if result.ltv > 97:
        res.append(
            RuleResult(
                code="CONV_LTV_ABOVE_MAX",
                severity="critical",
                message="LTV above 97%; mortgage insurance priced at the 97% tier.",
                context={"ltv": result.ltv},
            )
        )
    if result.base_loan_amount > limits.high_balance:
        res.append(
            RuleResult(
                code="CONV_ABOVE_HIGH_BALANCE",
                severity="critical",
                message="Loan amount exceeds the high-balance limit; jumbo financing required.",
                context={"loan_amount": result.base_loan_amount, "limit": limits.high_balance},
            )
        )
    elif result.is_high_balance:
        res.append(
            RuleResult(
                code="CONV_HIGH_BALANCE",
                severity="info",
                message="Loan amount exceeds the conforming limit; high-balance MI rates applied.",
                context={"loan_amount": result.base_loan_amount, "limit": limits.conforming},
            )
        )
    return res


def _fha_limit(result: QuoteResult, config: LoanConfig) -> List[RuleResult]:
    if result.base_loan_amount <= config.limits.fha:
        return []
    return [
        RuleResult(
            code="FHA_LOAN_LIMIT",
            severity="critical",
            message="Base loan amount exceeds the FHA loan limit.",
            context={"loan_amount": result.base_loan_amount, "limit": config.limits.fha},
        )
    ]


def _va_waiver(result: QuoteResult, data) -> List[RuleResult]:
    if result.program != LoanProgram.VA or not getattr(data, "is_disabled_veteran", False):
        return []
    return [
        RuleResult(
            code="VA_FUNDING_FEE_WAIVED",
            severity="info",
            message="Funding fee waived for a veteran receiving service-connected disability compensation.",
        )
    ]


def _closing_override(result: QuoteResult) -> List[RuleResult]:
    if not result.closing_costs.adjustment:
        return []
    return [
        RuleResult(
            code="CLOSING_COST_OVERRIDE",
            severity="info",
            message="Closing cost total was overridden.",
            context={"adjustment": result.closing_costs.adjustment},
        )
    ]


def evaluate_rules(result: LoanCalculationResult, data: PurchaseInput, config: LoanConfig) -> List[RuleResult]:
    """Advisory notices for a calculated purchase. Figures are never changed."""

    res: List[RuleResult] = []

    if result.program == LoanProgram.CONVENTIONAL:
        res.extend(_conventional_limits(result, config))
        if result.pmi_type == PmiType.SPLIT and result.ltv > 80:
            res.append(
                RuleResult(
                    code="PMI_SPLIT_NOT_MODELED",
                    severity="warn",
                    message="Split-premium MI is not included in the payment or closing costs.",
                )
            )

    if result.program == LoanProgram.FHA:
        if result.down_payment_percent < config.fha.min_down_pct:
            res.append(
                RuleResult(
                    code="FHA_MIN_DOWN",
                    severity="critical",
                    message=f"FHA requires at least {config.fha.min_down_pct}% down.",
                    context={"down_payment_percent": result.down_payment_percent},
                )
            )
        res.extend(_fha_limit(result, config))
        if getattr(data, "is_203k", False):
            res.append(
                RuleResult(
                    code="FHA_203K",
                    severity="info",
                    message="203(k) renovation costs are not included in this estimate.",
                )
            )

    res.extend(_va_waiver(result, data))
    res.extend(_closing_override(result))

    if result.cash_to_close < 0:
        res.append(
            RuleResult(
                code="CASH_TO_CLOSE_NEGATIVE",
                severity="warn",
                message="Credits and deposit exceed funds due; cash back to the buyer is usually limited.",
                context={"cash_to_close": result.cash_to_close},
            )
        )

    return res


def evaluate_refinance_rules(
    result: RefinanceCalculationResult, data: RefinanceInput, config: LoanConfig
) -> List[RuleResult]:
    """Advisory notices for a calculated refinance."""

    res: List[RuleResult] = []
    cash_out = result.cash_out_amount > 0

    if result.program == LoanProgram.CONVENTIONAL:
        res.extend(_conventional_limits(result, config))

    if result.program == LoanProgram.FHA:
        res.extend(_fha_limit(result, config))
        if cash_out and result.ltv > config.fha.max_ltv_cashout:
            res.append(
                RuleResult(
                    code="FHA_CASHOUT_LTV",
                    severity="critical",
                    message=f"FHA cash-out refinances are limited to {config.fha.max_ltv_cashout}% LTV.",
                    context={"ltv": result.ltv, "max_ltv": config.fha.max_ltv_cashout},
                )
            )

    if result.program == LoanProgram.VA:
        if result.is_irrrl:
            max_ltv, code = config.va.max_ltv_irrrl, "VA_IRRRL_LTV"
        elif cash_out:
            max_ltv, code = config.va.max_ltv_cashout, "VA_CASHOUT_LTV"
        else:
            max_ltv, code = None, None
        if max_ltv is not None and result.ltv > max_ltv:
            res.append(
                RuleResult(
                    code=code,
                    severity="critical",
                    message=f"LTV exceeds the VA maximum of {max_ltv}% for this refinance.",
                    context={"ltv": result.ltv, "max_ltv": max_ltv},
                )
            )

    res.extend(_va_waiver(result, data))
    res.extend(_closing_override(result))

    if result.cash_to_close < 0:
        res.append(
            RuleResult(
                code="REFI_CASH_BACK",
                severity="info",
                message="The new loan pays off the existing balance and costs; the borrower receives cash.",
                context={"cash_to_borrower": -result.cash_to_close},
            )
        )

    return res


def has_blocking(results: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in results)
