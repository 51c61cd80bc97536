"""Compound growth projection.

Builds a year-by-year ledger for an investment that compounds a fixed
number of times per year and optionally receives a recurring monthly
contribution. Each period's contribution earns that period's interest
immediately; this simplification is what the growth charts have always
shown, so it is kept for numeric compatibility.
"""

from __future__ import annotations

import logging
from decimal import Decimal, getcontext
from typing import List, Tuple

from .data_models import CompoundConfig, GrowthRow, GrowthSummary

getcontext().prec = 28

logger = logging.getLogger(__name__)


def compute_growth(config: CompoundConfig) -> Tuple[List[GrowthRow], GrowthSummary]:
    """Compute the year-end ledger and summary for an investment."""
    periods = config.compounding_periods_per_year
    annual_rate = config.annual_rate_percent / Decimal(100)
    growth_factor = 1 + annual_rate / Decimal(periods)
    contribution_per_period = config.monthly_contribution * Decimal(12) / Decimal(periods)

    rows: List[GrowthRow] = []
    balance = config.principal
    total_contributions = Decimal("0")

    for year in range(1, config.tenure_years + 1):
        for _ in range(periods):
            balance *= growth_factor
            if contribution_per_period > 0:
                total_contributions += contribution_per_period
                balance += contribution_per_period * growth_factor

        rows.append(
            GrowthRow(
                year_index=year,
                cumulative_principal=config.principal,
                cumulative_interest=balance - config.principal - total_contributions,
                cumulative_contributions=total_contributions,
                balance=balance,
            )
        )

    last = rows[-1]
    summary = GrowthSummary(
        final_balance=last.balance,
        total_interest_earned=last.cumulative_interest,
        total_contributions=last.cumulative_contributions,
    )
    logger.debug(
        "Projected %d years at %s%% compounded %d times a year: final balance %.2f",
        config.tenure_years,
        config.annual_rate_percent,
        periods,
        summary.final_balance,
    )
    return rows, summary
