# campaign/config/config.py
# Campaign site configuration (env-first, safe local defaults)

from __future__ import annotations

import os
from typing import Optional


# ----------------------------
# Env helpers
# ----------------------------
_TRUTHY = {"1", "true", "yes", "on", "y"}
_FALSY = {"0", "false", "no", "off", "n"}


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    if v is None:
        return default
    s = str(v).strip()
    return s if s else default


def _bool(name: str, default: bool = False) -> bool:
    v = _env(name)
    if v is None:
        return default
    s = v.strip().lower()
    if s in _TRUTHY:
        return True
    if s in _FALSY:
        return False
    return default


def _int(name: str, default: int) -> int:
    v = _env(name)
    if v is None:
        return default
    try:
        return int(str(v).strip())
    except ValueError:
        return default


def _optional_int(name: str) -> Optional[int]:
    v = _env(name)
    if v is None:
        return None
    try:
        n = int(v)
    except ValueError:
        return None
    return n if n > 0 else None


# ----------------------------
# Config classes
# ----------------------------
class BaseConfig:
    """
    Env-first config:
    - every setting can be overridden via environment variables
    - safe defaults for local dev
    """

    ENV = (_env("APP_ENV") or _env("ENV") or "base").strip().lower()

    DEBUG = _bool("FLASK_DEBUG", False)
    TESTING = _bool("TESTING", False)

    SECRET_KEY = _env("SECRET_KEY", "dev-change-me")

    # Proxy trust (reverse proxy in front of the server)
    TRUST_PROXY = _bool("TRUST_PROXY", False)

    # Logging
    LOG_LEVEL = _env("LOG_LEVEL", "INFO")
    WERKZEUG_LOG_LEVEL = _env("WERKZEUG_LOG_LEVEL", "WARNING")

    # Static site build
    OUTPUT_DIR = _env("CAMPAIGN_OUTPUT_DIR", "public")
    VENDOR_DIR = _env("CAMPAIGN_VENDOR_DIR", "static-vendor")

    # Donations API; None means every recorded donation is listed
    RECENT_DONORS_LIMIT = _optional_int("RECENT_DONORS_LIMIT")

    # Launcher defaults
    HOST = _env("HOST", "0.0.0.0")
    PORT = _int("PORT", 3000)


class DevelopmentConfig(BaseConfig):
    ENV = "development"
    DEBUG = True


class TestingConfig(BaseConfig):
    ENV = "testing"
    TESTING = True
    DEBUG = False
    LOG_LEVEL = "WARNING"


class ProductionConfig(BaseConfig):
    ENV = "production"
    DEBUG = False
    TRUST_PROXY = _bool("TRUST_PROXY", True)

    @classmethod
    def init_app(cls, app) -> None:
        # ---- Production guardrails (fail fast) ----
        sk = app.config.get("SECRET_KEY")
        if not sk or sk == "dev-change-me":
            raise RuntimeError("SECRET_KEY must be set to a strong random value in production.")

        if _bool("FLASK_DEBUG", False):
            raise RuntimeError("FLASK_DEBUG must be 0 in production.")
