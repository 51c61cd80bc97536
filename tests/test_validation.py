from __future__ import annotations

from decimal import Decimal

import pytest

from loan_planner.data_models import CompoundConfig, LoanConfig
from loan_planner.validation import (
    ConfigValidationError,
    validate_compound_config,
    validate_loan_config,
)


def test_valid_loan_passes():
    validate_loan_config(
        LoanConfig(
            principal=Decimal("500000"),
            annual_rate_percent=Decimal("0"),
            tenure_years=5,
            lump_sum_amount=Decimal("1000"),
            lump_sum_month=6,
        )
    )


def test_lump_sum_requires_month():
    config = LoanConfig(
        principal=Decimal("500000"),
        annual_rate_percent=Decimal("9"),
        tenure_years=5,
        lump_sum_amount=Decimal("1000"),
    )
    with pytest.raises(ConfigValidationError) as excinfo:
        validate_loan_config(config)
    assert excinfo.value.errors == ["Month is required for lump sum payment"]


def test_every_loan_problem_is_reported():
    config = LoanConfig(
        principal=Decimal("-1"),
        annual_rate_percent=Decimal("150"),
        tenure_years=0,
        processing_fee=Decimal("-5"),
        extra_monthly_payment=Decimal("-10"),
        lump_sum_month=0,
        loan_type="boat",
    )
    with pytest.raises(ConfigValidationError) as excinfo:
        validate_loan_config(config)

    errors = excinfo.value.errors
    assert len(errors) == 7
    assert "Loan amount must be positive" in errors
    assert "Interest rate seems too high" in errors
    assert isinstance(excinfo.value, ValueError)


def test_boolean_tenure_is_rejected():
    config = LoanConfig(principal=Decimal("1000"), annual_rate_percent=Decimal("5"), tenure_years=True)
    with pytest.raises(ConfigValidationError):
        validate_loan_config(config)


def test_compound_requires_positive_rate_and_frequency():
    config = CompoundConfig(
        principal=Decimal("1000"),
        annual_rate_percent=Decimal("0"),
        tenure_years=3,
        compounding_periods_per_year=0,
        monthly_contribution=Decimal("-1"),
    )
    with pytest.raises(ConfigValidationError) as excinfo:
        validate_compound_config(config)
    assert excinfo.value.errors == [
        "Interest rate must be positive",
        "Compounding frequency must be a positive whole number",
        "Monthly contribution cannot be negative",
    ]


def test_tenure_is_capped_at_one_hundred_years():
    validate_loan_config(
        LoanConfig(principal=Decimal("100000"), annual_rate_percent=Decimal("12"), tenure_years=100)
    )
    config = LoanConfig(principal=Decimal("100000"), annual_rate_percent=Decimal("100"), tenure_years=3000000)
    with pytest.raises(ConfigValidationError) as excinfo:
        validate_loan_config(config)
    assert excinfo.value.errors == ["Tenure cannot exceed 100 years"]


def test_growth_tenure_and_frequency_are_capped():
    validate_compound_config(
        CompoundConfig(
            principal=Decimal("1000"),
            annual_rate_percent=Decimal("5"),
            tenure_years=100,
            compounding_periods_per_year=365,
        )
    )
    config = CompoundConfig(
        principal=Decimal("1000"),
        annual_rate_percent=Decimal("5"),
        tenure_years=101,
        compounding_periods_per_year=10**9,
    )
    with pytest.raises(ConfigValidationError) as excinfo:
        validate_compound_config(config)
    assert excinfo.value.errors == [
        "Tenure cannot exceed 100 years",
        "Compounding frequency cannot exceed 365 times a year",
    ]
