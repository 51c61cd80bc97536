"""JSON API for the loan planner.

Presentation code posts the form fields and receives plain numbers back.
Every request is computed on its own; nothing is stored between requests,
so a superseded submission can never leak into a newer response.
"""

import logging
import os
from http import HTTPStatus

import click
from flask import Flask, jsonify, request

from loan_planner.advisory import build_advice_request
from loan_planner.engine import compute_amortization, without_prepayment
from loan_planner.formatter import (
    CURRENCY_OPTIONS,
    comparison_to_dict,
    growth_row_to_dict,
    growth_summary_to_dict,
    normalized_currency,
    row_to_dict,
    summary_to_dict,
)
from loan_planner.growth import compute_growth
from loan_planner.main import build_compound_config, build_loan_config
from loan_planner.validation import ConfigValidationError

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["PREVIEW_ROWS"] = int(os.environ.get("LOAN_PLANNER_PREVIEW_ROWS", "120"))


class PayloadError(Exception):
    def __init__(self, errors):
        super().__init__("; ".join(errors))
        self.errors = errors


@app.errorhandler(PayloadError)
def _handle_payload_error(exc: PayloadError):
    logger.info("Rejected payload: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


def _payload() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise PayloadError(["Request body must be a JSON object"])
    return data


def _field(data: dict, name: str, default=None):
    value = data.get(name, default)
    return default if value is None else value


def _parse(builder, *args):
    try:
        return builder(*args)
    except ConfigValidationError as exc:
        raise PayloadError(exc.errors)
    except click.BadParameter as exc:
        raise PayloadError([exc.format_message()])


def _loan_config_from(data: dict):
    return _parse(
        build_loan_config,
        str(_field(data, "principal", "")),
        _field(data, "rate", ""),
        _field(data, "tenure", ""),
        _field(data, "processing_fee"),
        _field(data, "extra_monthly_payment"),
        _field(data, "lump_sum_amount"),
        _field(data, "lump_sum_month"),
        str(_field(data, "loan_type", "home")),
    )


def _schedule_for_view(rows: list, show_full_schedule: bool):
    if show_full_schedule:
        return rows, 0
    preview = rows[: app.config["PREVIEW_ROWS"]]
    return preview, len(rows) - len(preview)


@app.get("/api/ping")
def ping():
    return jsonify({"message": "pong"})


@app.post("/api/loan")
def loan():
    data = _payload()
    config = _loan_config_from(data)
    rows, summary = compute_amortization(config)
    schedule_view, truncated = _schedule_for_view(rows, bool(data.get("full_schedule")))

    body = {
        "currency": normalized_currency(data.get("currency")),
        "loan_type": config.loan_type,
        "summary": summary_to_dict(summary),
        "schedule": [row_to_dict(r) for r in schedule_view],
        "truncated": truncated,
    }
    if config.has_prepayment:
        _, baseline = compute_amortization(without_prepayment(config))
        body["comparison"] = comparison_to_dict(summary, baseline)

    if not summary.converged:
        body["detail"] = "Schedule did not converge; payments never retire the balance."
        return jsonify(body), HTTPStatus.UNPROCESSABLE_ENTITY
    return jsonify(body)


@app.post("/api/growth")
def growth():
    data = _payload()
    config = _parse(
        build_compound_config,
        str(_field(data, "principal", "")),
        _field(data, "rate", ""),
        _field(data, "tenure", ""),
        _field(data, "compounding_frequency", 1),
        _field(data, "monthly_contribution"),
    )
    rows, summary = compute_growth(config)
    return jsonify(
        {
            "currency": normalized_currency(data.get("currency")),
            "summary": growth_summary_to_dict(summary),
            "rows": [growth_row_to_dict(r) for r in rows],
        }
    )


@app.post("/api/loan/advice-request")
def advice_request():
    data = _payload()
    config = _loan_config_from(data)
    goals = str(_field(data, "financial_goals", "")).strip()
    risk = str(_field(data, "risk_tolerance", "")).strip()
    missing = [
        message
        for value, message in (
            (goals, "financial_goals is required"),
            (risk, "risk_tolerance is required"),
        )
        if not value
    ]
    if missing:
        raise PayloadError(missing)
    _, summary = compute_amortization(config)
    return jsonify(build_advice_request(config, summary, goals, risk))


@app.get("/api/currencies")
def currencies():
    return jsonify({code: meta["label"] for code, meta in CURRENCY_OPTIONS.items()})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("Starting Loan Planner API...")
    app.run(host="0.0.0.0", port=8710, debug=True)
