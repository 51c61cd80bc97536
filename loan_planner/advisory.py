"""Input record for the external prepayment-advice collaborator.

The advisor is a separate text-generation service. The planner only hands it
the loan figures, including the installment computed by the engine; it never
reads the advisor's answer back into a calculation.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict

from .data_models import AmortizationSummary, LoanConfig


def build_advice_request(
    config: LoanConfig,
    summary: AmortizationSummary,
    financial_goals: str,
    risk_tolerance: str,
) -> Dict[str, object]:
    """Return the advisor input for a computed loan.

    ``interestRate`` is a fraction (0.085 for 8.5 %), unlike the percent used
    everywhere else in the planner.
    """
    return {
        "loanAmount": float(config.principal),
        "interestRate": float(config.annual_rate_percent / Decimal(100)),
        "loanTenureMonths": config.tenure_periods,
        "monthlyPayment": float(summary.periodic_payment),
        "financialGoals": financial_goals.strip(),
        "riskTolerance": risk_tolerance.strip(),
    }
