# tests/conftest.py
import pytest

from campaign import create_app
from campaign.services.donations import DonationStore


@pytest.fixture
def vendor_dir(tmp_path):
    d = tmp_path / "static-vendor"
    d.mkdir()
    (d / "htmx.min.js").write_text("/* htmx test build */\n", encoding="utf-8")
    return d


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "public"


@pytest.fixture
def app(output_dir, vendor_dir):
    return create_app("testing", OUTPUT_DIR=str(output_dir), VENDOR_DIR=str(vendor_dir))


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return app.extensions["donation_store"]


@pytest.fixture
def bare_store():
    return DonationStore()
