"""Domain checks for calculator configurations.

The engines assume their input is valid; callers (the CLI and the web API)
run these checks first. Every violated rule is collected so the user sees all
problems at once.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List

from .data_models import LOAN_TYPES, CompoundConfig, LoanConfig

MAX_RATE_PERCENT = Decimal(100)
MAX_TENURE_YEARS = 100
MAX_COMPOUNDING_PERIODS = 365


class ConfigValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_loan_config(config: LoanConfig) -> None:
    errors: List[str] = []
    if config.principal <= 0:
        errors.append("Loan amount must be positive")
    if config.annual_rate_percent < 0:
        errors.append("Interest rate cannot be negative")
    elif config.annual_rate_percent > MAX_RATE_PERCENT:
        errors.append("Interest rate seems too high")
    if not _is_positive_int(config.tenure_years):
        errors.append("Tenure must be a positive whole number of years")
    elif config.tenure_years > MAX_TENURE_YEARS:
        errors.append(f"Tenure cannot exceed {MAX_TENURE_YEARS} years")
    if config.processing_fee < 0:
        errors.append("Processing fee cannot be negative")
    if config.extra_monthly_payment < 0:
        errors.append("Extra monthly payment cannot be negative")
    if config.lump_sum_amount < 0:
        errors.append("Lump sum amount cannot be negative")
    elif config.lump_sum_amount > 0 and config.lump_sum_month is None:
        errors.append("Month is required for lump sum payment")
    if config.lump_sum_month is not None and not _is_positive_int(config.lump_sum_month):
        errors.append("Lump sum month must be a positive whole number")
    if config.loan_type not in LOAN_TYPES:
        errors.append(f"Loan type must be one of {', '.join(LOAN_TYPES)}")
    if errors:
        raise ConfigValidationError(errors)


def validate_compound_config(config: CompoundConfig) -> None:
    errors: List[str] = []
    if config.principal <= 0:
        errors.append("Principal must be positive")
    if config.annual_rate_percent <= 0:
        errors.append("Interest rate must be positive")
    elif config.annual_rate_percent > MAX_RATE_PERCENT:
        errors.append("Interest rate seems too high")
    if not _is_positive_int(config.tenure_years):
        errors.append("Tenure must be a positive whole number of years")
    elif config.tenure_years > MAX_TENURE_YEARS:
        errors.append(f"Tenure cannot exceed {MAX_TENURE_YEARS} years")
    if not _is_positive_int(config.compounding_periods_per_year):
        errors.append("Compounding frequency must be a positive whole number")
    elif config.compounding_periods_per_year > MAX_COMPOUNDING_PERIODS:
        errors.append(f"Compounding frequency cannot exceed {MAX_COMPOUNDING_PERIODS} times a year")
    if config.monthly_contribution < 0:
        errors.append("Monthly contribution cannot be negative")
    if errors:
        raise ConfigValidationError(errors)
