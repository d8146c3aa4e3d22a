# campaign/services/donations.py
"""
Donation store
--------------
Append-only, in-memory donation log owned by the Flask app.

One lock guards both the record list and the id counter; every read and
write takes it for the whole operation, so ids never repeat and stats are
always a consistent snapshot.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, List, NamedTuple, Optional

from flask import current_app

from campaign.errors import DonationValidationError
from campaign.models.donation import Donation

log = logging.getLogger(__name__)

EXTENSION_KEY = "donation_store"
REQUIRED_FIELDS_MSG = "Name, email, and amount are required"

# largest accepted single donation; keeps sums exact in the default 28-digit context
MAX_AMOUNT = Decimal("1e15")


class DonationStats(NamedTuple):
    total: Decimal
    count: int


def _to_amount(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        d = value
    else:
        try:
            d = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    if not d.is_finite():
        return None
    return d


class DonationStore:
    def __init__(self, app=None) -> None:
        self._lock = threading.Lock()
        self._donations: List[Donation] = []
        self._next_id = 1
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        app.extensions[EXTENSION_KEY] = self

    # ── writes ────────────────────────────────────────────────
    def record(self, name: Any, email: Any, amount: Any, message: Any = "") -> Donation:
        name = str(name or "").strip()
        email = str(email or "").strip()
        message = str(message or "").strip()
        value = _to_amount(amount)

        if not name or not email or value is None or value <= 0 or value > MAX_AMOUNT:
            raise DonationValidationError(REQUIRED_FIELDS_MSG)

        with self._lock:
            donation = Donation(
                id=self._next_id,
                name=name,
                email=email,
                amount=value,
                message=message,
                created_at=datetime.now(timezone.utc),
            )
            self._next_id += 1
            self._donations.append(donation)

        log.debug("Stored donation %r", donation)
        return donation

    # ── reads ─────────────────────────────────────────────────
    def stats(self) -> DonationStats:
        with self._lock:
            total = sum((d.amount for d in self._donations), Decimal("0"))
            return DonationStats(total=total, count=len(self._donations))

    def recent(self, limit: Optional[int] = None) -> List[Donation]:
        """
        Stored donations, oldest first.
        With a positive `limit`, only the newest `limit` records are returned
        (still oldest first). No limit returns every donation ever recorded.
        """
        with self._lock:
            if limit is not None and limit > 0:
                return self._donations[-limit:]
            return list(self._donations)

    def __len__(self) -> int:
        with self._lock:
            return len(self._donations)


def get_store() -> DonationStore:
    """Donation store registered on the current app."""
    try:
        return current_app.extensions[EXTENSION_KEY]
    except KeyError:
        raise RuntimeError("DonationStore is not registered on this app; call init_app() first.") from None
