"""Program dispatch for purchase and refinance calculations."""

from __future__ import annotations
from typing import Callable, Dict, Type, Union

from pydantic import BaseModel

from .config import LoanConfig
from .conventional import calculate_conventional_purchase, calculate_conventional_refinance
from .fha import calculate_fha_purchase, calculate_fha_refinance
from .models import (
    ConventionalPurchaseInput,
    ConventionalRefinanceInput,
    FhaPurchaseInput,
    FhaRefinanceInput,
    LoanCalculationResult,
    LoanProgram,
    PurchaseInput,
    RefinanceCalculationResult,
    RefinanceInput,
    VaPurchaseInput,
    VaRefinanceInput,
)
from .va import calculate_va_purchase, calculate_va_refinance

PROGRAM_INPUTS: Dict[LoanProgram, Type[PurchaseInput]] = {
    LoanProgram.CONVENTIONAL: ConventionalPurchaseInput,
    LoanProgram.FHA: FhaPurchaseInput,
    LoanProgram.VA: VaPurchaseInput,
}

PROGRAM_CALCULATORS: Dict[LoanProgram, Callable[..., LoanCalculationResult]] = {
    LoanProgram.CONVENTIONAL: calculate_conventional_purchase,
    LoanProgram.FHA: calculate_fha_purchase,
    LoanProgram.VA: calculate_va_purchase,
}

REFINANCE_INPUTS: Dict[LoanProgram, Type[RefinanceInput]] = {
    LoanProgram.CONVENTIONAL: ConventionalRefinanceInput,
    LoanProgram.FHA: FhaRefinanceInput,
    LoanProgram.VA: VaRefinanceInput,
}

REFINANCE_CALCULATORS: Dict[LoanProgram, Callable[..., RefinanceCalculationResult]] = {
    LoanProgram.CONVENTIONAL: calculate_conventional_refinance,
    LoanProgram.FHA: calculate_fha_refinance,
    LoanProgram.VA: calculate_va_refinance,
}


def _as_input(model: Type[BaseModel], data):
    if isinstance(data, BaseModel) and not isinstance(data, model):
        data = data.model_dump(exclude_unset=True)
    if not isinstance(data, model):
        data = model.model_validate(data)
    return data


def calculate_purchase(
    program: Union[LoanProgram, str], data: Union[PurchaseInput, dict], config: LoanConfig
) -> LoanCalculationResult:
    """Validate ``data`` as the program's input record and run its calculator.

    ``data`` may be a plain mapping or any purchase input; fields the program
    does not define are ignored, missing program fields take their defaults.
    """

    program = LoanProgram(program)
    return PROGRAM_CALCULATORS[program](_as_input(PROGRAM_INPUTS[program], data), config)


def calculate_refinance(
    program: Union[LoanProgram, str], data: Union[RefinanceInput, dict], config: LoanConfig
) -> RefinanceCalculationResult:
    """Refinance counterpart of :func:`calculate_purchase`."""

    program = LoanProgram(program)
    return REFINANCE_CALCULATORS[program](_as_input(REFINANCE_INPUTS[program], data), config)
