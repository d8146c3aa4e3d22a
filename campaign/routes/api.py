# campaign/routes/api.py
from __future__ import annotations

"""
Campaign API Blueprint
────────────────────────────────────────────────────────────
• Mounted at /api via the app factory
• Responses are HTML fragments for htmx swaps, not JSON
• Validation failures are 400 text/plain
• A successful donation sets HX-Trigger so the page re-fetches
  the stats and recent-donor fragments
"""

from typing import Optional

from flask import Blueprint, Response, current_app
from werkzeug.exceptions import BadRequest

from campaign import rendering
from campaign.errors import DonationValidationError
from campaign.forms import DonationForm
from campaign.services.donations import get_store

bp = Blueprint("api", __name__)

HTML_MIMETYPE = "text/html; charset=utf-8"
DONATION_COMPLETE_EVENT = "donationComplete"
INVALID_BODY_MSG = "Invalid form data"


def _fragment(component: rendering.Component, status: int = 200) -> Response:
    resp = Response(component.render(), status=status)
    resp.headers["Content-Type"] = HTML_MIMETYPE
    return resp


def _plain_error(message: str, status: int = 400) -> Response:
    return Response(message, status=status, mimetype="text/plain")


def _recent_limit() -> Optional[int]:
    v = current_app.config.get("RECENT_DONORS_LIMIT")
    try:
        n = int(v) if v is not None else None
    except (TypeError, ValueError):
        return None
    return n if n and n > 0 else None


@bp.get("/stats")
def stats():
    total, count = get_store().stats()
    return _fragment(rendering.donation_stats(total, count))


@bp.get("/recent-donors")
def recent_donors():
    donations = get_store().recent(limit=_recent_limit())
    return _fragment(rendering.recent_donors(donations))


@bp.post("/donations")
def create_donation():
    try:
        form = DonationForm()
    except (BadRequest, TypeError, ValueError):
        current_app.logger.warning("Rejected donation: unreadable body")
        return _plain_error(INVALID_BODY_MSG)

    if not form.validate():
        current_app.logger.warning("Rejected donation: %s", form.errors)
        return _plain_error(INVALID_BODY_MSG)

    try:
        donation = get_store().record(
            form.name.data,
            form.email.data,
            form.amount.data,
            form.message.data,
        )
    except DonationValidationError as e:
        current_app.logger.warning("Rejected donation: %s", e)
        return _plain_error(str(e))

    current_app.logger.info(
        "Recorded donation #%s from %s ($%.2f)",
        donation.id,
        donation.name,
        donation.amount,
    )
    resp = _fragment(rendering.donation_success(donation.name, donation.amount))
    resp.headers["HX-Trigger"] = DONATION_COMPLETE_EVENT
    return resp
