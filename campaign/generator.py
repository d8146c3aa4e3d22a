# campaign/generator.py
"""
Static site generator
---------------------
Renders the content store into OUTPUT_DIR:

    index.html, about.html, blog.html, blog/<slug>.html,
    js/htmx.min.js (copied from VENDOR_DIR), style.css

Runs single-threaded and stops at the first I/O failure. Files already in
OUTPUT_DIR are overwritten; nothing is rolled back.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from jinja2 import Environment

from campaign import rendering
from campaign.content import get_blog_posts
from campaign.errors import GenerationError
from campaign.models import BlogPost

log = logging.getLogger(__name__)

PathLike = Union[str, Path]

VENDOR_SCRIPT = "htmx.min.js"
DEFAULT_STYLESHEET = "/* Your styles here */\n"


class SiteGenerator:
    def __init__(
        self,
        output_dir: PathLike,
        vendor_dir: PathLike,
        posts: Optional[Iterable[BlogPost]] = None,
        env: Optional[Environment] = None,
    ) -> None:
        self.output_dir = Path(output_dir)
        self.vendor_dir = Path(vendor_dir)
        self.posts = tuple(posts) if posts is not None else get_blog_posts()
        self.env = env or rendering.get_template_env()

    @property
    def blog_dir(self) -> Path:
        return self.output_dir / "blog"

    @property
    def js_dir(self) -> Path:
        return self.output_dir / "js"

    def generate(self) -> List[Path]:
        log.info("🔨 Generating static site into %s", self.output_dir)
        written: List[Path] = []

        try:
            for d in (self.output_dir, self.blog_dir, self.js_dir):
                d.mkdir(parents=True, exist_ok=True)

            written.append(self._copy(self.vendor_dir / VENDOR_SCRIPT, self.js_dir / VENDOR_SCRIPT))

            written.append(self._render(self.output_dir / "index.html", rendering.home()))
            written.append(self._render(self.output_dir / "about.html", rendering.about()))
            written.append(self._render(self.output_dir / "blog.html", rendering.blog_list(self.posts)))
            for post in self.posts:
                written.append(self._render(self.blog_dir / post.filename, rendering.blog_post(post)))

            css = self.output_dir / "style.css"
            css.write_text(DEFAULT_STYLESHEET, encoding="utf-8")
            log.info("✅ Created: %s", css)
            written.append(css)
        except OSError as e:
            log.error("❌ Static site generation failed: %s", e)
            raise GenerationError(f"Static site generation failed: {e}") from e

        log.info("✅ Static site generation complete! (%d files)", len(written))
        return written

    def _render(self, target: Path, component: rendering.Component) -> Path:
        with target.open("wb") as fh:
            component.render_to(fh, env=self.env)
        log.info("✅ Generated: %s", target)
        return target

    def _copy(self, src: Path, dst: Path) -> Path:
        shutil.copyfile(src, dst)
        log.info("✅ Copied: %s -> %s", src, dst)
        return dst


def generate_site(config: Mapping[str, Any], posts: Optional[Iterable[BlogPost]] = None) -> List[Path]:
    """Build the site using OUTPUT_DIR / VENDOR_DIR from a Flask config (or any mapping)."""
    gen = SiteGenerator(
        output_dir=config.get("OUTPUT_DIR") or "public",
        vendor_dir=config.get("VENDOR_DIR") or "static-vendor",
        posts=posts,
    )
    return gen.generate()
