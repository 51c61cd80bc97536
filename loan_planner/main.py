"""Command-line interface for the loan planner.

This module uses ``click`` to implement a multi-command interface. Users can
compute full amortization schedules, view summaries, compare a prepayment
plan with the plain loan, or project compound growth. Results can be printed
to the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from .data_models import AmortizationSummary, CompoundConfig, LOAN_TYPES, LoanConfig
from .engine import MAX_PERIODS, compute_amortization, without_prepayment
from .formatter import (
    CURRENCY_OPTIONS,
    DEFAULT_CURRENCY,
    comparison_to_dict,
    growth_row_to_dict,
    growth_summary_to_dict,
    print_comparison,
    print_growth,
    print_schedule,
    print_summary,
    row_to_dict,
    summary_to_dict,
)
from .growth import compute_growth
from .utils import decimal_from_str, optional_int, parse_amount
from .validation import ConfigValidationError, validate_compound_config, validate_loan_config

MAX_PRINTED_ROWS = 120


def _amount(value: Optional[str], name: str) -> Decimal:
    if value is None or str(value).strip() == "":
        return Decimal("0")
    try:
        return parse_amount(value)
    except ValueError:
        raise click.BadParameter(f"Invalid amount for {name}: {value}")


def _rate(value: object) -> Decimal:
    text = str(value).strip()
    if text.endswith("%"):
        text = text[:-1]
    try:
        return decimal_from_str(text)
    except ValueError:
        raise click.BadParameter(f"Invalid interest rate: {value}")


def _whole(value: object, name: str) -> Optional[int]:
    try:
        return optional_int(value)
    except ValueError:
        raise click.BadParameter(f"{name} must be a whole number; got {value}")


def build_loan_config(
    principal: str,
    rate: object,
    tenure: object,
    processing_fee: Optional[str] = None,
    extra_monthly_payment: Optional[str] = None,
    lump_sum_amount: Optional[str] = None,
    lump_sum_month: Optional[object] = None,
    loan_type: str = "home",
) -> LoanConfig:
    """Parse raw option values into a validated ``LoanConfig``.

    Raises ``click.BadParameter`` for unparseable values and
    ``ConfigValidationError`` for values outside the calculator's domain.
    """
    tenure_years = _whole(tenure, "Tenure")
    config = LoanConfig(
        principal=_amount(principal, "loan amount"),
        annual_rate_percent=_rate(rate),
        tenure_years=tenure_years if tenure_years is not None else 0,
        processing_fee=_amount(processing_fee, "processing fee"),
        extra_monthly_payment=_amount(extra_monthly_payment, "extra monthly payment"),
        lump_sum_amount=_amount(lump_sum_amount, "lump sum"),
        lump_sum_month=_whole(lump_sum_month, "Lump sum month"),
        loan_type=(loan_type or "home").lower(),
    )
    validate_loan_config(config)
    return config


def build_compound_config(
    principal: str,
    rate: object,
    tenure: object,
    frequency: object = 1,
    monthly_contribution: Optional[str] = None,
) -> CompoundConfig:
    """Parse raw option values into a validated ``CompoundConfig``."""
    tenure_years = _whole(tenure, "Tenure")
    periods = _whole(frequency, "Compounding frequency")
    config = CompoundConfig(
        principal=_amount(principal, "principal"),
        annual_rate_percent=_rate(rate),
        tenure_years=tenure_years if tenure_years is not None else 0,
        compounding_periods_per_year=periods if periods is not None else 1,
        monthly_contribution=_amount(monthly_contribution, "monthly contribution"),
    )
    validate_compound_config(config)
    return config


def export_to_json(path: Path, payload: Dict[str, Any]) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def export_to_csv(path: Path, rows: List[Dict[str, object]]) -> None:
    """Export serialized rows to a CSV file, one column per key."""
    if not rows:
        path.write_text("", encoding="utf-8")
        return
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        writer.writeheader()
        writer.writerows(rows)


def _build_or_fail(builder, *args):
    try:
        return builder(*args)
    except ConfigValidationError as exc:
        raise click.BadParameter("; ".join(exc.errors))


def _check_converged(summary: AmortizationSummary) -> None:
    if not summary.converged:
        raise click.ClickException(
            f"Schedule did not converge within {MAX_PERIODS} months; "
            "payments never retire the balance."
        )


def loan_options(func):
    """Attach the loan options shared by ``schedule``, ``summary`` and ``compare``."""
    options = [
        click.option("--principal", "-p", "principal", required=True, help="Loan amount"),
        click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)"),
        click.option("--tenure", "-t", "tenure", required=True, type=int, help="Loan tenure in years"),
        click.option(
            "--type",
            "loan_type",
            type=click.Choice(LOAN_TYPES),
            default="home",
            help="Loan type (label only)",
        ),
        click.option("--processing-fee", "processing_fee", help="Processing fee added to the financed amount"),
        click.option("--extra-monthly", "extra_monthly_payment", help="Extra payment every month"),
        click.option("--lump-sum", "lump_sum_amount", help="One-time prepayment amount"),
        click.option("--lump-sum-month", "lump_sum_month", type=int, help="Month in which the lump sum is paid"),
        click.option(
            "--currency",
            "currency",
            type=click.Choice(sorted(CURRENCY_OPTIONS)),
            default=DEFAULT_CURRENCY,
            help="Currency label for printed amounts",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """A command-line loan and compound growth planner."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(
    principal: str,
    rate: str,
    tenure: int,
    loan_type: str,
    processing_fee: Optional[str],
    extra_monthly_payment: Optional[str],
    lump_sum_amount: Optional[str],
    lump_sum_month: Optional[int],
    currency: str,
    output: Optional[str],
) -> None:
    """Compute and print the full amortization schedule."""
    config = _build_or_fail(
        build_loan_config,
        principal,
        rate,
        tenure,
        processing_fee,
        extra_monthly_payment,
        lump_sum_amount,
        lump_sum_month,
        loan_type,
    )
    rows, summary = compute_amortization(config)
    if output:
        path = Path(output)
        serialized = [row_to_dict(r) for r in rows]
        if path.suffix.lower() == ".json":
            export_to_json(path, {"summary": summary_to_dict(summary), "schedule": serialized})
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, serialized)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
    else:
        print_summary(summary, currency)
        # Limit schedule length printed to avoid flooding the terminal
        if len(rows) > MAX_PRINTED_ROWS:
            click.echo(f"Schedule has {len(rows)} rows; showing first {MAX_PRINTED_ROWS} rows.")
        print_schedule(rows[:MAX_PRINTED_ROWS])
    _check_converged(summary)


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(
    principal: str,
    rate: str,
    tenure: int,
    loan_type: str,
    processing_fee: Optional[str],
    extra_monthly_payment: Optional[str],
    lump_sum_amount: Optional[str],
    lump_sum_month: Optional[int],
    currency: str,
    output: Optional[str],
) -> None:
    """Compute and print only the summary metrics for a loan."""
    config = _build_or_fail(
        build_loan_config,
        principal,
        rate,
        tenure,
        processing_fee,
        extra_monthly_payment,
        lump_sum_amount,
        lump_sum_month,
        loan_type,
    )
    _, summary_data = compute_amortization(config)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        export_to_json(path, {"summary": summary_to_dict(summary_data)})
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(summary_data, currency)
    _check_converged(summary_data)


@cli.command()
@loan_options
def compare(
    principal: str,
    rate: str,
    tenure: int,
    loan_type: str,
    processing_fee: Optional[str],
    extra_monthly_payment: Optional[str],
    lump_sum_amount: Optional[str],
    lump_sum_month: Optional[int],
    currency: str,
) -> None:
    """Compare a prepayment plan with the same loan paid as contracted.

    Example:

        loan-planner compare -p 1m -r 8.5 -t 20 --extra-monthly 5000
    """
    config = _build_or_fail(
        build_loan_config,
        principal,
        rate,
        tenure,
        processing_fee,
        extra_monthly_payment,
        lump_sum_amount,
        lump_sum_month,
        loan_type,
    )
    if not config.has_prepayment:
        click.echo("No extra payment or lump sum given; both scenarios are identical.")
    _, with_prepayment = compute_amortization(config)
    _, baseline = compute_amortization(without_prepayment(config))
    print_comparison(with_prepayment, baseline, currency)
    months_saved = comparison_to_dict(with_prepayment, baseline)["months_saved"]
    if months_saved:
        click.echo(f"Prepaying finishes the loan {months_saved} months early.")
    _check_converged(with_prepayment)
    _check_converged(baseline)


@cli.command()
@click.option("--principal", "-p", "principal", required=True, help="Initial investment")
@click.option("--rate", "-r", "rate", required=True, help="Annual interest rate (percent)")
@click.option("--tenure", "-t", "tenure", required=True, type=int, help="Investment horizon in years")
@click.option(
    "--frequency",
    "frequency",
    type=click.Choice(["1", "2", "4", "12"]),
    default="1",
    help="Compounding periods per year (annually, semi-annually, quarterly, monthly)",
)
@click.option("--monthly-contribution", "monthly_contribution", help="Recurring monthly contribution")
@click.option(
    "--currency",
    "currency",
    type=click.Choice(sorted(CURRENCY_OPTIONS)),
    default=DEFAULT_CURRENCY,
    help="Currency label for printed amounts",
)
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def growth(
    principal: str,
    rate: str,
    tenure: int,
    frequency: str,
    monthly_contribution: Optional[str],
    currency: str,
    output: Optional[str],
) -> None:
    """Project compound growth year by year."""
    config = _build_or_fail(
        build_compound_config, principal, rate, tenure, frequency, monthly_contribution
    )
    rows, summary_data = compute_growth(config)
    if output:
        path = Path(output)
        serialized = [growth_row_to_dict(r) for r in rows]
        if path.suffix.lower() == ".json":
            export_to_json(
                path, {"summary": growth_summary_to_dict(summary_data), "rows": serialized}
            )
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, serialized)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Growth ledger exported to {path}")
    else:
        print_growth(rows, summary_data, currency)


if __name__ == "__main__":
    cli()
