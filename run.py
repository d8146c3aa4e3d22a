#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations

"""
Campaign launcher: static build or API server.

- Build the static site:   ./run.py --generate
- Local dev server:        ./run.py --env development
- Production:              ENV=production SECRET_KEY=... ./run.py --env production
- Gunicorn export:         gunicorn "wsgi:app"

Without --generate the server serves OUTPUT_DIR at "/" plus
GET /api/stats, GET /api/recent-donors and POST /api/donations.
"""

import argparse
import logging
import os
import sys
from typing import Optional

try:
    from dotenv import load_dotenv  # type: ignore
except ImportError:  # pragma: no cover
    load_dotenv = None  # type: ignore


# -----------------------------------------------------------------------------
# Env helpers
# -----------------------------------------------------------------------------
def _normalize_env_name(v: Optional[str]) -> str:
    r = (v or "").strip().lower()
    if r in {"dev", "development", "local"}:
        return "development"
    if r in {"test", "testing"}:
        return "testing"
    if r in {"prod", "production"}:
        return "production"
    return r or "development"


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
class ColorFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        c = self.COLORS.get(record.levelname, "")
        return f"{c}{base}{self.COLORS['RESET']}"


def setup_logging(debug: bool, style: str) -> None:
    style = (os.getenv("LOG_STYLE") or style).lower()
    handler = logging.StreamHandler(sys.stdout)
    fmt = "%(asctime)s %(levelname)s %(message)s"

    if style == "plain" or not sys.stdout.isatty():
        handler.setFormatter(logging.Formatter(fmt))
    else:
        handler.setFormatter(ColorFormatter(fmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)


# -----------------------------------------------------------------------------
# CLI
# -----------------------------------------------------------------------------
def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Campaign site: static build or donation API server")
    p.add_argument("--generate", action="store_true", help="Render the static site into OUTPUT_DIR and exit.")
    p.add_argument(
        "--env",
        choices=["development", "testing", "production"],
        default=None,
        help="Runtime environment (default: ENV / APP_ENV or development)",
    )
    p.add_argument("--host", default=None, help="Bind host (default: HOST or 0.0.0.0)")
    p.add_argument("--port", type=int, default=None, help="Bind port (default: PORT or 3000)")
    p.add_argument("--log-style", choices=["color", "plain"], default=os.getenv("LOG_STYLE", "color"))
    return p.parse_args(argv)


def banner(host: str, port: int, output_dir: str) -> None:
    logging.info("🚀 Server running on http://%s:%s", "localhost" if host in {"0.0.0.0", ""} else host, port)
    logging.info("   Static files: %s/", output_dir)
    logging.info("   API: GET /api/stats, GET /api/recent-donors, POST /api/donations")


# -----------------------------------------------------------------------------
# Main entry
# -----------------------------------------------------------------------------
def main(argv: Optional[list[str]] = None) -> None:
    if load_dotenv is not None:
        load_dotenv(override=False)

    args = parse_args(argv)
    env = _normalize_env_name(args.env or os.getenv("ENV") or os.getenv("APP_ENV"))
    os.environ["ENV"] = env
    os.environ["APP_ENV"] = env

    setup_logging(env == "development", args.log_style)

    if args.generate:
        from flask import Config

        from campaign.config import CONFIG_BY_NAME, DevelopmentConfig
        from campaign.errors import GenerationError
        from campaign.generator import generate_site

        # build only: no app, so the production SECRET_KEY guardrail does not apply
        cfg = Config(os.getcwd())
        cfg.from_object(CONFIG_BY_NAME.get(env, DevelopmentConfig))
        try:
            generate_site(cfg)
        except GenerationError as exc:
            logging.error("Error generating static site: %s", exc)
            raise SystemExit(1)
        return

    from campaign import create_app

    flask_app = create_app(env)

    host = args.host or flask_app.config.get("HOST", "0.0.0.0")
    port = args.port or int(flask_app.config.get("PORT", 3000))
    banner(host, port, flask_app.config.get("OUTPUT_DIR", "public"))

    flask_app.run(host=host, port=port, debug=flask_app.debug, use_reloader=False, threaded=True)


if __name__ == "__main__":
    main()
