"""Data models for the loan planner.

This module defines dataclasses for the two calculators: the loan
configuration and the rows/summary of its amortization schedule, and the
investment configuration with its year-by-year growth ledger. Configurations
are frozen so they cannot change once a calculation has started.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

LOAN_TYPES = ("home", "car", "personal")


@dataclass(frozen=True)
class LoanConfig:
    """Configuration of a loan.

    Attributes
    ----------
    principal: Decimal
        The disbursed loan amount.
    annual_rate_percent: Decimal
        Annual nominal interest rate in percent (8.5 means 8.5 %).
    tenure_years: int
        Contractual tenure in whole years.
    processing_fee: Decimal
        Fee added to the financed amount (not to the disbursed amount).
    extra_monthly_payment: Decimal
        Amount paid on top of the installment every month.
    lump_sum_amount: Decimal
        One-time prepayment applied directly to the balance.
    lump_sum_month: int, optional
        The 1-indexed period in which the lump sum is applied. Required when
        ``lump_sum_amount`` is positive.
    loan_type: str
        Display label only (``home``, ``car`` or ``personal``).
    """

    principal: Decimal
    annual_rate_percent: Decimal
    tenure_years: int
    processing_fee: Decimal = Decimal("0")
    extra_monthly_payment: Decimal = Decimal("0")
    lump_sum_amount: Decimal = Decimal("0")
    lump_sum_month: Optional[int] = None
    loan_type: str = "home"

    @property
    def principal_financed(self) -> Decimal:
        return self.principal + self.processing_fee

    @property
    def monthly_rate(self) -> Decimal:
        return self.annual_rate_percent / Decimal(12) / Decimal(100)

    @property
    def tenure_periods(self) -> int:
        return self.tenure_years * 12

    @property
    def has_prepayment(self) -> bool:
        return self.extra_monthly_payment > 0 or self.lump_sum_amount > 0


@dataclass
class AmortizationRow:
    """One period of the amortization schedule.

    ``payment`` always equals ``principal_component + interest_component``.
    A lump sum applied in this period is reported separately in ``lump_sum``
    because it reduces the balance directly rather than through the
    installment.
    """

    period: int
    payment: Decimal
    principal_component: Decimal
    interest_component: Decimal
    ending_balance: Decimal
    lump_sum: Decimal = Decimal("0")


class ScheduleStatus(Enum):
    COMPLETED = "completed"
    DID_NOT_CONVERGE = "did_not_converge"


@dataclass
class AmortizationSummary:
    """Aggregate metrics for a computed schedule.

    ``periodic_payment`` is the theoretical installment (EMI) for the
    contractual tenure and ignores extras. ``interest_saved`` compares the
    simulated interest against the closed-form interest of the same loan
    with no prepayment at all.
    """

    periodic_payment: Decimal
    total_interest_paid: Decimal
    total_amount_paid: Decimal
    original_tenure_periods: int
    actual_tenure_periods: int
    interest_saved: Decimal
    principal_financed: Decimal
    lump_sum_applied: Decimal
    status: ScheduleStatus = ScheduleStatus.COMPLETED

    @property
    def tenure_reduction(self) -> int:
        return self.original_tenure_periods - self.actual_tenure_periods

    @property
    def converged(self) -> bool:
        return self.status is ScheduleStatus.COMPLETED


@dataclass(frozen=True)
class CompoundConfig:
    """Configuration of an investment growing at a fixed compound rate.

    ``monthly_contribution`` is spread evenly over the compounding periods of
    each year.
    """

    principal: Decimal
    annual_rate_percent: Decimal
    tenure_years: int
    compounding_periods_per_year: int = 1
    monthly_contribution: Decimal = Decimal("0")


@dataclass
class GrowthRow:
    """Cumulative position at the end of one year."""

    year_index: int
    cumulative_principal: Decimal
    cumulative_interest: Decimal
    cumulative_contributions: Decimal
    balance: Decimal


@dataclass
class GrowthSummary:
    final_balance: Decimal
    total_interest_earned: Decimal
    total_contributions: Decimal
