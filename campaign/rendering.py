# campaign/rendering.py
"""
Template rendering
------------------
Every page and fragment is a `Component`: a template name plus its context.
A component renders to UTF-8 bytes, either in memory or straight into a
binary stream, so the static build and the HTTP handlers share one path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import IO, Any, Dict, Iterable, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from campaign.filters import FILTERS
from campaign.models import BlogPost, Donation

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


@lru_cache(maxsize=None)
def get_template_env() -> Environment:
    """
    Jinja environment for pages and fragments, loaded from campaign/templates.
    """
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters.update(FILTERS)
    return env


@dataclass(frozen=True)
class Component:
    template: str
    context: Dict[str, Any] = field(default_factory=dict)

    def render(self, env: Optional[Environment] = None) -> bytes:
        env = env or get_template_env()
        return env.get_template(self.template).render(**self.context).encode("utf-8")

    def render_to(self, stream: IO[bytes], env: Optional[Environment] = None) -> None:
        env = env or get_template_env()
        for chunk in env.get_template(self.template).generate(**self.context):
            stream.write(chunk.encode("utf-8"))


# ─────────────────────────────────────────────────────────────
# Pages
# ─────────────────────────────────────────────────────────────
def home() -> Component:
    return Component("home.html", {"page": "home"})


def about() -> Component:
    return Component("about.html", {"page": "about"})


def blog_list(posts: Iterable[BlogPost]) -> Component:
    return Component("blog_list.html", {"page": "blog", "posts": list(posts)})


def blog_post(post: BlogPost) -> Component:
    return Component("blog/post.html", {"page": "blog", "post": post})


# ─────────────────────────────────────────────────────────────
# API fragments
# ─────────────────────────────────────────────────────────────
def donation_stats(total: Decimal, count: int) -> Component:
    return Component("fragments/donation_stats.html", {"total": total, "count": count})


def recent_donors(donations: Sequence[Donation]) -> Component:
    return Component("fragments/recent_donors.html", {"donations": list(donations)})


def donation_success(name: str, amount: Decimal) -> Component:
    return Component("fragments/donation_success.html", {"name": name, "amount": amount})
