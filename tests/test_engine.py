from __future__ import annotations

from decimal import Decimal

import pytest

from loan_planner.data_models import LoanConfig, ScheduleStatus
from loan_planner.engine import (
    MAX_PERIODS,
    calculate_emi,
    compute_amortization,
    without_prepayment,
)

CENT = Decimal("0.01")


def make_loan(**overrides) -> LoanConfig:
    values = {
        "principal": Decimal("1000000"),
        "annual_rate_percent": Decimal("8.5"),
        "tenure_years": 20,
        "processing_fee": Decimal("10000"),
    }
    values.update(overrides)
    return LoanConfig(**values)


def test_home_loan_installment_and_tenure():
    rows, summary = compute_amortization(make_loan())

    assert float(summary.periodic_payment) == pytest.approx(8765, abs=2)
    assert summary.original_tenure_periods == 240
    assert summary.actual_tenure_periods == 240
    assert len(rows) == 240
    assert summary.status is ScheduleStatus.COMPLETED


def test_principal_components_retire_financed_amount():
    rows, summary = compute_amortization(make_loan())

    total_principal = sum(row.principal_component for row in rows)
    assert abs(total_principal - Decimal("1010000")) < CENT
    assert summary.principal_financed == Decimal("1010000")
    assert rows[-1].ending_balance == 0


def test_no_prepayment_saves_nothing():
    _, summary = compute_amortization(make_loan())

    assert summary.actual_tenure_periods == summary.original_tenure_periods
    assert summary.tenure_reduction == 0
    assert abs(summary.interest_saved) < CENT


def test_balances_never_increase():
    rows, _ = compute_amortization(
        make_loan(extra_monthly_payment=Decimal("2500"), lump_sum_amount=Decimal("150000"), lump_sum_month=24)
    )

    previous = Decimal("1010000")
    for row in rows:
        assert row.ending_balance >= 0
        assert row.principal_component >= 0
        assert row.ending_balance <= previous
        if row.principal_component > 0:
            assert row.ending_balance < previous
        previous = row.ending_balance
    assert [row.period for row in rows] == list(range(1, len(rows) + 1))


def test_payment_splits_into_principal_and_interest():
    rows, _ = compute_amortization(make_loan(extra_monthly_payment=Decimal("5000")))

    for row in rows:
        assert row.payment == row.principal_component + row.interest_component


def test_lump_sum_shortens_the_loan():
    _, plain = compute_amortization(make_loan())
    _, prepaid = compute_amortization(make_loan(lump_sum_amount=Decimal("200000"), lump_sum_month=12))

    assert prepaid.actual_tenure_periods < plain.actual_tenure_periods
    assert prepaid.interest_saved > 0
    assert prepaid.lump_sum_applied == Decimal("200000")
    assert prepaid.original_tenure_periods == 240


def test_lump_sum_is_reported_on_its_row_only():
    rows, _ = compute_amortization(make_loan(lump_sum_amount=Decimal("50000"), lump_sum_month=3))

    assert rows[2].lump_sum == Decimal("50000")
    assert all(row.lump_sum == 0 for i, row in enumerate(rows) if i != 2)


def test_extra_payment_shortens_the_loan_and_saves_interest():
    _, plain = compute_amortization(make_loan())
    _, prepaid = compute_amortization(make_loan(extra_monthly_payment=Decimal("5000")))

    assert prepaid.actual_tenure_periods < plain.actual_tenure_periods
    assert prepaid.total_interest_paid < plain.total_interest_paid
    assert abs(prepaid.interest_saved - (plain.total_interest_paid - prepaid.total_interest_paid)) < CENT
    assert abs(prepaid.total_amount_paid - (prepaid.principal_financed + prepaid.total_interest_paid)) < CENT


def test_overshooting_lump_sum_is_clipped():
    config = LoanConfig(
        principal=Decimal("100000"),
        annual_rate_percent=Decimal("10"),
        tenure_years=5,
        lump_sum_amount=Decimal("1000000000"),
        lump_sum_month=3,
    )
    rows, summary = compute_amortization(config)

    assert len(rows) == 3
    assert rows[-1].ending_balance == 0
    assert rows[-1].principal_component == 0
    assert rows[-1].payment == rows[-1].interest_component
    assert summary.lump_sum_applied < Decimal("100000")
    assert summary.converged


def test_lump_sum_after_payoff_is_ignored():
    config = LoanConfig(
        principal=Decimal("100000"),
        annual_rate_percent=Decimal("10"),
        tenure_years=5,
        extra_monthly_payment=Decimal("1000000"),
        lump_sum_amount=Decimal("5000"),
        lump_sum_month=50,
    )
    rows, summary = compute_amortization(config)

    assert len(rows) == 1
    assert rows[0].ending_balance == 0
    assert rows[0].principal_component == Decimal("100000")
    assert summary.lump_sum_applied == 0


def test_zero_rate_loan_is_straight_line():
    config = LoanConfig(principal=Decimal("120000"), annual_rate_percent=Decimal("0"), tenure_years=1)
    rows, summary = compute_amortization(config)

    assert len(rows) == 12
    assert all(row.principal_component == Decimal("10000") for row in rows)
    assert all(row.interest_component == 0 for row in rows)
    assert rows[-1].ending_balance == 0
    assert summary.periodic_payment == Decimal("10000")
    assert summary.total_interest_paid == 0
    assert summary.interest_saved == 0


def test_rate_too_small_to_register_is_straight_line():
    config = LoanConfig(principal=Decimal("120000"), annual_rate_percent=Decimal("1e-30"), tenure_years=1)
    rows, summary = compute_amortization(config)

    assert len(rows) == 12
    assert summary.converged
    assert summary.periodic_payment == Decimal("10000")
    assert rows[-1].ending_balance == 0
    assert all(row.principal_component == pytest.approx(Decimal("10000")) for row in rows)


def test_emi_falls_back_to_straight_line_when_growth_factor_rounds_to_one():
    assert calculate_emi(Decimal("120000"), Decimal("1e-33"), 12) == Decimal("10000")


def test_zero_rate_extra_payment_and_lump_sum():
    extra = LoanConfig(
        principal=Decimal("120000"),
        annual_rate_percent=Decimal("0"),
        tenure_years=1,
        extra_monthly_payment=Decimal("5000"),
    )
    rows, summary = compute_amortization(extra)
    assert len(rows) == 8
    assert rows[0].payment == Decimal("15000")
    assert summary.tenure_reduction == 4

    lump = LoanConfig(
        principal=Decimal("120000"),
        annual_rate_percent=Decimal("0"),
        tenure_years=1,
        lump_sum_amount=Decimal("60000"),
        lump_sum_month=1,
    )
    rows, summary = compute_amortization(lump)
    assert len(rows) == 6
    assert rows[0].ending_balance == Decimal("50000")
    assert summary.total_amount_paid == Decimal("120000")


def test_schedule_that_cannot_amortize_in_time_stops_at_cap():
    config = LoanConfig(principal=Decimal("100000"), annual_rate_percent=Decimal("12"), tenure_years=100)
    rows, summary = compute_amortization(config)

    assert len(rows) == MAX_PERIODS
    assert summary.status is ScheduleStatus.DID_NOT_CONVERGE
    assert not summary.converged
    assert rows[-1].ending_balance > 0


def test_without_prepayment_strips_extras():
    config = make_loan(extra_monthly_payment=Decimal("100"), lump_sum_amount=Decimal("10"), lump_sum_month=2)
    plain = without_prepayment(config)

    assert not plain.has_prepayment
    assert plain.lump_sum_month is None
    assert plain.principal_financed == config.principal_financed


def test_emi_requires_positive_term():
    with pytest.raises(ValueError):
        calculate_emi(Decimal("1000"), Decimal("0.01"), 0)
