from __future__ import annotations

from campaign.models.blog_post import BlogPost
from campaign.models.donation import Donation

__all__ = ["BlogPost", "Donation"]
