# tests/test_app.py
import pytest

from campaign import create_app
from campaign.generator import generate_site


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["status"] == "ok"
    assert data["env"] == "testing"
    assert data["donations"] == 0


def test_request_id_is_echoed(client):
    resp = client.get("/healthz", headers={"X-Request-ID": "abc123"})
    assert resp.headers["X-Request-ID"] == "abc123"
    assert "X-Response-Time-ms" in resp.headers


def test_serves_generated_site(app, client):
    generate_site(app.config)

    index = client.get("/")
    assert index.status_code == 200
    assert b"Support Our Campaign" in index.data

    post = client.get("/blog/welcome.html")
    assert post.status_code == 200
    assert b"Welcome to the Campaign" in post.data

    js = client.get("/js/htmx.min.js")
    assert js.status_code == 200


def test_missing_static_file_is_404(client):
    assert client.get("/nope.html").status_code == 404


def test_production_requires_secret_key(monkeypatch, tmp_path):
    monkeypatch.delenv("SECRET_KEY", raising=False)
    with pytest.raises(RuntimeError):
        create_app("production", SECRET_KEY="dev-change-me", OUTPUT_DIR=str(tmp_path))


def test_generate_cli_command(app, output_dir):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["generate"])
    assert result.exit_code == 0, result.output
    assert (output_dir / "index.html").is_file()


def test_generate_cli_command_fails_without_vendor_script(app, tmp_path):
    app.config["VENDOR_DIR"] = str(tmp_path / "missing")
    runner = app.test_cli_runner()
    result = runner.invoke(args=["generate"])
    assert result.exit_code == 1
