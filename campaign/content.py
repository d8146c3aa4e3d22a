# campaign/content.py
"""
Content store
-------------
Read-only blog posts rendered by the static site generator.
Newest post first.
"""

from __future__ import annotations

import re
from typing import Tuple

from campaign.models.blog_post import BlogPost

_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_POSTS: Tuple[BlogPost, ...] = (
    BlogPost(
        slug="welcome",
        title="Welcome to the Campaign",
        content="We're excited to launch this campaign. Our goal is to make a real difference.",
        date="2025-11-02",
    ),
    BlogPost(
        slug="how-to-contribute",
        title="How to Contribute",
        content="There are many ways to support our cause. You can donate, volunteer, or share our message.",
        date="2025-11-01",
    ),
)


def _check_slugs(posts: Tuple[BlogPost, ...]) -> None:
    seen: set[str] = set()
    for post in posts:
        if not _SLUG_RE.match(post.slug):
            raise ValueError(f"Blog slug is not URL-safe: {post.slug!r}")
        if post.slug in seen:
            raise ValueError(f"Duplicate blog slug: {post.slug!r}")
        seen.add(post.slug)


_check_slugs(_POSTS)


def get_blog_posts() -> Tuple[BlogPost, ...]:
    return _POSTS
