"""Output helpers for the loan planner.

This module renders amortization schedules, growth ledgers and summaries in
a tabular text format, and converts them into JSON-serialisable dictionaries
for export and for the web API. Currency is only a display label; no
conversion ever happens.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .data_models import AmortizationRow, AmortizationSummary, GrowthRow, GrowthSummary

CURRENCY_OPTIONS = {
    "INR": {"label": "Indian rupee", "prefix": "₹", "suffix": ""},
    "USD": {"label": "US dollar", "prefix": "$", "suffix": ""},
    "EUR": {"label": "Euro", "prefix": "€", "suffix": ""},
    "GBP": {"label": "British pound", "prefix": "£", "suffix": ""},
}
DEFAULT_CURRENCY = "INR"


def normalized_currency(code: Optional[str]) -> str:
    code = (code or DEFAULT_CURRENCY).upper()
    return code if code in CURRENCY_OPTIONS else DEFAULT_CURRENCY


def format_money(value: Decimal, currency: str = DEFAULT_CURRENCY) -> str:
    meta = CURRENCY_OPTIONS[normalized_currency(currency)]
    return f"{meta['prefix']}{value:,.2f}{meta['suffix']}"


def row_to_dict(row: AmortizationRow) -> Dict[str, object]:
    return {
        "period": row.period,
        "payment": float(row.payment),
        "principal": float(row.principal_component),
        "interest": float(row.interest_component),
        "lump_sum": float(row.lump_sum),
        "balance": float(row.ending_balance),
    }


def summary_to_dict(summary: AmortizationSummary) -> Dict[str, object]:
    return {
        "emi": float(summary.periodic_payment),
        "principal_financed": float(summary.principal_financed),
        "total_interest": float(summary.total_interest_paid),
        "total_payment": float(summary.total_amount_paid),
        "lump_sum_applied": float(summary.lump_sum_applied),
        "original_tenure": summary.original_tenure_periods,
        "new_tenure": summary.actual_tenure_periods,
        "tenure_reduction": summary.tenure_reduction,
        "interest_saved": float(summary.interest_saved),
        "status": summary.status.value,
    }


def comparison_to_dict(
    with_prepayment: AmortizationSummary, baseline: AmortizationSummary
) -> Dict[str, object]:
    """Differences between a prepayment run and its no-prepayment baseline."""
    return {
        "baseline_total_interest": float(baseline.total_interest_paid),
        "interest_saved": float(baseline.total_interest_paid - with_prepayment.total_interest_paid),
        "total_cost_saved": float(baseline.total_amount_paid - with_prepayment.total_amount_paid),
        "months_saved": baseline.actual_tenure_periods - with_prepayment.actual_tenure_periods,
    }


def growth_row_to_dict(row: GrowthRow) -> Dict[str, object]:
    return {
        "year": row.year_index,
        "principal": float(row.cumulative_principal),
        "interest": float(row.cumulative_interest),
        "contribution": float(row.cumulative_contributions),
        "balance": float(row.balance),
    }


def growth_summary_to_dict(summary: GrowthSummary) -> Dict[str, object]:
    return {
        "total_amount": float(summary.final_balance),
        "total_interest": float(summary.total_interest_earned),
        "total_contributions": float(summary.total_contributions),
    }


def print_summary(summary: AmortizationSummary, currency: str = DEFAULT_CURRENCY) -> None:
    """Print a summary of loan metrics in a human-readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Principal financed : {format_money(summary.principal_financed, currency)}")
    print(f"Monthly EMI        : {format_money(summary.periodic_payment, currency)}")
    print(f"Total interest     : {format_money(summary.total_interest_paid, currency)}")
    if summary.lump_sum_applied:
        print(f"Lump sum applied   : {format_money(summary.lump_sum_applied, currency)}")
    print(f"Total payment      : {format_money(summary.total_amount_paid, currency)}")
    print(f"Original tenure    : {summary.original_tenure_periods} months")
    print(f"New tenure         : {summary.actual_tenure_periods} months")
    if summary.tenure_reduction > 0:
        print(f"Tenure reduction   : {summary.tenure_reduction} months")
    if summary.interest_saved > Decimal("0.005"):
        print(f"Interest saved     : {format_money(summary.interest_saved, currency)}")
    if not summary.converged:
        print("Status             : did not converge (balance never reached zero)")
    print("-" * 72)


def print_schedule(schedule: Iterable[AmortizationRow]) -> None:
    """Print the amortization schedule as a simple table."""
    headers = ["Month", "Payment", "Principal", "Interest", "LumpSum", "Balance"]
    print("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.period),
            f"{entry.payment:.2f}",
            f"{entry.principal_component:.2f}",
            f"{entry.interest_component:.2f}",
            f"{entry.lump_sum:.2f}",
            f"{entry.ending_balance:.2f}",
        ]
        print("\t".join(row))


def print_growth(
    rows: List[GrowthRow], summary: GrowthSummary, currency: str = DEFAULT_CURRENCY
) -> None:
    """Print the year-by-year growth ledger followed by its totals."""
    print("\t".join(["Year", "Principal", "Interest", "Contributions", "Balance"]))
    for row in rows:
        print(
            "\t".join(
                [
                    str(row.year_index),
                    f"{row.cumulative_principal:.2f}",
                    f"{row.cumulative_interest:.2f}",
                    f"{row.cumulative_contributions:.2f}",
                    f"{row.balance:.2f}",
                ]
            )
        )
    print("-" * 72)
    print(f"Total amount       : {format_money(summary.final_balance, currency)}")
    print(f"Total interest     : {format_money(summary.total_interest_earned, currency)}")
    print(f"Total contributions: {format_money(summary.total_contributions, currency)}")


def print_comparison(
    with_prepayment: AmortizationSummary,
    baseline: AmortizationSummary,
    currency: str = DEFAULT_CURRENCY,
) -> None:
    """Print the prepayment scenario next to its no-prepayment baseline.

    The difference column is ``prepayment - baseline``; a negative value
    means prepaying is cheaper or shorter.
    """
    print(f"Comparison (amounts in {normalized_currency(currency)})")
    print("=" * 72)
    metrics = [
        ("total_payment", baseline.total_amount_paid, with_prepayment.total_amount_paid),
        ("total_interest", baseline.total_interest_paid, with_prepayment.total_interest_paid),
        (
            "tenure_months",
            Decimal(baseline.actual_tenure_periods),
            Decimal(with_prepayment.actual_tenure_periods),
        ),
    ]
    print(f"{'Metric':20s} {'Baseline':>15s} {'Prepayment':>15s} {'Difference':>15s}")
    for name, v1, v2 in metrics:
        diff = v2 - v1
        print(f"{name:20s} {v1:15.2f} {v2:15.2f} {diff:15.2f}")
    print("=" * 72)
