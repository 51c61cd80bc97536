"""Core amortization engine for the loan planner.

This module turns a ``LoanConfig`` into a month-by-month amortization
schedule and a summary. It supports a fixed extra payment every month and a
single lump-sum prepayment at a chosen period. Results are returned as a list
of ``AmortizationRow`` objects along with an ``AmortizationSummary``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal, getcontext
from typing import List, Tuple

from .data_models import (
    AmortizationRow,
    AmortizationSummary,
    LoanConfig,
    ScheduleStatus,
)

getcontext().prec = 28  # increase precision for financial calculations

logger = logging.getLogger(__name__)

MAX_PERIODS = 1000
# Residual balances below half a cent are Decimal rounding noise, not debt.
RESIDUAL_TOLERANCE = Decimal("0.005")


def calculate_emi(principal: Decimal, rate_per_month: Decimal, term: int) -> Decimal:
    """Return the level (annuity) monthly payment for a loan.

    The formula is:

        payment = P * i * (1 + i)^n / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is not positive,
    or so small that ``(1 + i)^n`` rounds to 1, the payment simplifies to
    ``P / n``.
    """
    if term <= 0:
        raise ValueError("Term must be positive")
    if rate_per_month <= 0:
        return principal / Decimal(term)
    factor = (1 + rate_per_month) ** term
    if factor == 1:
        return principal / Decimal(term)
    return principal * rate_per_month * factor / (factor - 1)


def baseline_interest(principal: Decimal, rate_per_month: Decimal, term: int) -> Decimal:
    """Total interest of the loan paid exactly as contracted, with no extras."""
    return calculate_emi(principal, rate_per_month, term) * Decimal(term) - principal


def without_prepayment(config: LoanConfig) -> LoanConfig:
    """Return ``config`` with the extra monthly payment and lump sum removed."""
    return replace(
        config,
        extra_monthly_payment=Decimal("0"),
        lump_sum_amount=Decimal("0"),
        lump_sum_month=None,
    )


def compute_amortization(config: LoanConfig) -> Tuple[List[AmortizationRow], AmortizationSummary]:
    """Compute the amortization schedule and summary for a loan.

    Parameters
    ----------
    config: LoanConfig
        A validated loan configuration. The processing fee is financed, so
        the schedule amortizes ``principal + processing_fee``.

    Returns
    -------
    rows: List[AmortizationRow]
        One row per month until the balance reaches zero. When the balance
        cannot be retired within ``MAX_PERIODS`` months the rows stop there
        and the summary status is ``DID_NOT_CONVERGE``.
    summary: AmortizationSummary
        Installment, totals, interest saved against the no-prepayment
        baseline and the original vs. actual tenure.
    """
    principal = config.principal_financed
    rate_per_month = max(config.monthly_rate, Decimal("0"))
    term = config.tenure_periods

    emi = calculate_emi(principal, rate_per_month, term)
    extra = config.extra_monthly_payment
    lump_sum = config.lump_sum_amount if config.lump_sum_month else Decimal("0")

    rows: List[AmortizationRow] = []
    balance = principal
    total_interest = Decimal("0")
    total_payments = Decimal("0")
    lump_sum_applied = Decimal("0")
    period = 0

    while balance > 0 and period < MAX_PERIODS:
        period += 1
        interest = balance * rate_per_month
        payment = emi + extra
        principal_component = payment - interest

        # The lump sum reduces the balance directly, before this period's
        # split between interest and principal.
        applied = Decimal("0")
        if lump_sum > 0 and period == config.lump_sum_month:
            applied = min(lump_sum, balance)
            balance -= applied
            lump_sum_applied += applied

        if balance < principal_component:
            principal_component = balance
            payment = principal_component + interest

        balance -= principal_component

        if Decimal("0") < balance < RESIDUAL_TOLERANCE:
            principal_component += balance
            payment += balance
            balance = Decimal("0")

        total_interest += interest
        total_payments += payment
        rows.append(
            AmortizationRow(
                period=period,
                payment=payment,
                principal_component=principal_component,
                interest_component=interest,
                ending_balance=balance,
                lump_sum=applied,
            )
        )

    status = ScheduleStatus.COMPLETED
    if balance > 0:
        status = ScheduleStatus.DID_NOT_CONVERGE
        logger.warning(
            "Schedule did not converge after %d periods; remaining balance %.2f",
            MAX_PERIODS,
            balance,
        )

    summary = AmortizationSummary(
        periodic_payment=emi,
        total_interest_paid=total_interest,
        total_amount_paid=total_payments + lump_sum_applied,
        original_tenure_periods=term,
        actual_tenure_periods=len(rows),
        interest_saved=baseline_interest(principal, rate_per_month, term) - total_interest,
        principal_financed=principal,
        lump_sum_applied=lump_sum_applied,
        status=status,
    )
    logger.debug(
        "Computed %d periods (EMI %.2f, interest %.2f, status %s)",
        summary.actual_tenure_periods,
        emi,
        total_interest,
        status.value,
    )
    return rows, summary
