# campaign/models/blog_post.py
"""Blog post record used by the static site build."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BlogPost:
    slug: str
    title: str
    content: str
    date: str  # ISO date, e.g. "2025-11-02"

    @property
    def filename(self) -> str:
        return f"{self.slug}.html"

    def __repr__(self) -> str:
        return f"<BlogPost {self.slug} {self.date}>"
