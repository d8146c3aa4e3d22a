# campaign/models/donation.py
"""In-memory donation record. Instances are only created by DonationStore.record()."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Donation:
    id: int
    name: str
    email: str
    amount: Decimal
    created_at: datetime
    message: str = ""

    def __repr__(self) -> str:
        return f"<Donation #{self.id} {self.name} ${self.amount:.2f}>"
