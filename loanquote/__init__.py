"""Purchase and refinance loan, closing cost, seller net and scenario comparison calculators."""

from importlib import metadata

from .comparison import compare_scenarios, comparison_table, format_comparison_summary
from .config import LoanConfig, config_from_dict, default_config, load_config
from .conventional import calculate_conventional_purchase, calculate_conventional_refinance
from .fha import calculate_fha_purchase, calculate_fha_refinance
from .programs import calculate_purchase, calculate_refinance
from .rules import RuleResult, evaluate_refinance_rules, evaluate_rules, has_blocking
from .seller_net import calculate_seller_net, hoa_proration, tax_proration
from .va import calculate_va_purchase, calculate_va_refinance

try:
    __version__ = metadata.version("loanquote")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.1.0"

__all__ = [
    "LoanConfig",
    "RuleResult",
    "calculate_conventional_purchase",
    "calculate_conventional_refinance",
    "calculate_fha_purchase",
    "calculate_fha_refinance",
    "calculate_purchase",
    "calculate_refinance",
    "calculate_seller_net",
    "calculate_va_purchase",
    "calculate_va_refinance",
    "compare_scenarios",
    "comparison_table",
    "config_from_dict",
    "default_config",
    "evaluate_refinance_rules",
    "evaluate_rules",
    "format_comparison_summary",
    "has_blocking",
    "hoa_proration",
    "load_config",
    "tax_proration",
    "__version__",
]
