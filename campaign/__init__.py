# campaign/__init__.py
# Campaign site: Flask app factory
# Goals:
# - serve the generated static site from OUTPUT_DIR at "/"
# - mount the donation fragment API at /api
# - one DonationStore per app, owned by the app (no module globals)
# - plain-text errors for the API, default HTML for pages

from __future__ import annotations

import logging
import os
import time
from importlib import import_module
from pathlib import Path
from typing import Any, Optional, Type, Union
from uuid import uuid4

from dotenv import load_dotenv
from flask import Flask, Response, abort, g, request, send_from_directory
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

# never override real env vars
load_dotenv(override=False)

ConfigLike = Union[str, Type[Any]]

from campaign.config import CONFIG_BY_NAME  # noqa: E402
from campaign.services.donations import DonationStore  # noqa: E402


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _env_bool(name: str) -> Optional[bool]:
    v = os.getenv(name)
    if v is None:
        return None
    s = str(v).strip().lower()
    if s in {"1", "true", "t", "yes", "y", "on"}:
        return True
    if s in {"0", "false", "f", "no", "n", "off"}:
        return False
    return None


def _env_mode(app: Optional[Flask] = None) -> str:
    """
    Determine environment mode deterministically.
    Priority:
      1) app.config["ENV"] (if present and meaningful)
      2) APP_ENV / ENV / FLASK_ENV env vars
      3) default "development"
    """
    if app is not None:
        v = str(app.config.get("ENV") or "").strip().lower()
        if v and v != "base":
            return v

    for key in ("APP_ENV", "ENV", "FLASK_ENV"):
        val = (os.getenv(key) or "").strip().lower()
        if val:
            if val == "prod":
                return "production"
            if val == "dev":
                return "development"
            if val == "test":
                return "testing"
            return val

    return "development"


def _resolve_config(target: Optional[ConfigLike]) -> ConfigLike:
    """
    Choose config class/module path.
    - If explicitly provided, respect it (class, dotted path, or env name).
    - Else if CAMPAIGN_CONFIG is set, use it.
    - Else pick by environment name.
    """
    if target is None:
        target = (os.getenv("CAMPAIGN_CONFIG") or "").strip() or _env_mode(None)

    if isinstance(target, str) and target.lower() in CONFIG_BY_NAME:
        return CONFIG_BY_NAME[target.lower()]
    return target


def _load_config_class(cfg: ConfigLike) -> Type[Any]:
    if not isinstance(cfg, str):
        return cfg
    module_name, _, attr = cfg.rpartition(".")
    if not module_name:
        raise RuntimeError(f"Invalid config '{cfg}': expected a dotted path or one of {sorted(CONFIG_BY_NAME)}")
    try:
        return getattr(import_module(module_name), attr)
    except (ImportError, AttributeError) as exc:
        raise RuntimeError(f"Invalid config '{cfg}': {exc}") from exc


def _is_prod(app: Flask) -> bool:
    return _env_mode(app) == "production"


def _is_api_request() -> bool:
    return (request.path or "").startswith("/api/")


# -----------------------------------------------------------------------------
# Logging with request_id
# -----------------------------------------------------------------------------
class _RequestIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        try:
            record.request_id = getattr(g, "request_id", "-")
        except RuntimeError:
            # outside an app context (CLI, generator)
            record.request_id = "-"
        return True


def _configure_logging(app: Flask) -> None:
    fmt = "%(asctime)s [%(levelname)s] %(name)s [rid=%(request_id)s]: %(message)s"
    root = logging.getLogger()

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt))
        handler.addFilter(_RequestIDFilter())
        root.addHandler(handler)
    else:
        for h in root.handlers:
            if not any(isinstance(f, _RequestIDFilter) for f in h.filters):
                h.addFilter(_RequestIDFilter())

    root.setLevel(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    logging.getLogger("werkzeug").setLevel(str(app.config.get("WERKZEUG_LOG_LEVEL", "WARNING")).upper())
    app.logger.info("Loaded config: ENV=%s DEBUG=%s", app.config.get("ENV", "?"), app.debug)


# -----------------------------------------------------------------------------
# ProxyFix (reverse proxy)
# -----------------------------------------------------------------------------
def _apply_proxyfix(app: Flask) -> None:
    trust = _env_bool("TRUST_PROXY")
    if trust is None:
        trust = bool(app.config.get("TRUST_PROXY", False))

    if not trust:
        return

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1, x_prefix=1)  # type: ignore[method-assign]
    app.logger.info("ProxyFix enabled (trusting X-Forwarded-* headers).")


# -----------------------------------------------------------------------------
# Static site: serve OUTPUT_DIR at "/"
# -----------------------------------------------------------------------------
def _static_max_age(app: Flask, filename: str) -> int:
    """
    Conservative caching:
    - Dev: no cache
    - Prod: long cache for vendored minified files; else small cache
    """
    if not _is_prod(app):
        return 0
    if ".min." in (filename or "").lower():
        return 31536000
    return 300


def _register_static_routes(app: Flask) -> None:
    root = Path(app.config.get("OUTPUT_DIR") or "public")
    app.logger.info("Static root: %s", root.resolve())

    def _serve(filename: str):
        base = root.resolve()
        if ".." in Path(filename).parts:
            abort(404)
        if (base / filename).is_dir():
            filename = f"{filename.rstrip('/')}/index.html"
        return send_from_directory(base, filename, max_age=_static_max_age(app, filename))

    @app.get("/")
    def site_index():
        return _serve("index.html")

    @app.get("/<path:filename>")
    def site_file(filename: str):
        return _serve(filename)


# -----------------------------------------------------------------------------
# Request lifecycle + errors
# -----------------------------------------------------------------------------
def _register_request_lifecycle(app: Flask) -> None:
    @app.before_request
    def _bootstrap_request():
        g.request_id = request.headers.get("X-Request-ID") or uuid4().hex
        g._start_ts = time.perf_counter()

    @app.after_request
    def _attach_request_headers(resp):
        resp.headers["X-Request-ID"] = getattr(g, "request_id", "-")
        start = getattr(g, "_start_ts", None)
        if start:
            resp.headers["X-Response-Time-ms"] = str(int((time.perf_counter() - start) * 1000))
        return resp


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def _http_err(err: HTTPException):
        if _is_api_request():
            return Response(err.description or err.name, status=err.code or 500, mimetype="text/plain")
        return err

    @app.errorhandler(Exception)
    def _uncaught(err: Exception):
        app.logger.exception("Unhandled error")
        if _is_api_request():
            return Response("Internal Server Error", status=500, mimetype="text/plain")
        return Response("<h1>Internal Server Error</h1>", status=500, mimetype="text/html")


# -----------------------------------------------------------------------------
# Health endpoint
# -----------------------------------------------------------------------------
def _register_health_endpoints(app: Flask) -> None:
    @app.get("/healthz")
    def _healthz():
        return {
            "status": "ok",
            "env": app.config.get("ENV", "unknown"),
            "donations": len(app.extensions["donation_store"]),
            "request_id": getattr(g, "request_id", "-"),
        }


# -----------------------------------------------------------------------------
# App Factory
# -----------------------------------------------------------------------------
def create_app(config_class: Optional[ConfigLike] = None, **overrides: Any) -> Flask:
    app = Flask(
        __name__,
        static_folder=None,
        template_folder=None,
    )

    # ---- Config loading
    cfg_cls = _load_config_class(_resolve_config(config_class))
    app.config.from_object(cfg_cls)
    app.config.update(overrides)

    env = _env_mode(app)
    if str(app.config.get("ENV") or "").strip() in {"", "base"}:
        app.config["ENV"] = env

    init_hook = getattr(cfg_cls, "init_app", None)
    if callable(init_hook):
        init_hook(app)

    app.url_map.strict_slashes = False

    # ---- Proxy handling first
    _apply_proxyfix(app)

    # ---- Logging
    _configure_logging(app)

    # ---- Donation store (one per app)
    DonationStore(app)

    # ---- Request lifecycle / errors
    _register_request_lifecycle(app)
    _register_error_handlers(app)

    # ---- Blueprints + health, then the static catch-all
    from campaign.routes.api import bp as api_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    app.logger.info("Registered blueprint: %-18s → %s", api_bp.name, "/api")
    _register_health_endpoints(app)
    _register_static_routes(app)

    # ---- CLI
    from campaign.cli import generate_cmd

    app.cli.add_command(generate_cmd)

    return app
