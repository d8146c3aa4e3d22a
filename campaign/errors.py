# campaign/errors.py
from __future__ import annotations


class CampaignError(Exception):
    """Base class for errors raised by the campaign package."""


class GenerationError(CampaignError):
    """Static site build failed (directory creation, copy or write)."""


class DonationValidationError(CampaignError, ValueError):
    """Donation input rejected; the store is left unchanged."""
