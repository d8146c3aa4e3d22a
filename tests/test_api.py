# tests/test_api.py
from decimal import Decimal


def test_stats_empty(client):
    resp = client.get("/api/stats")
    assert resp.status_code == 200
    assert resp.headers["Content-Type"] == "text/html; charset=utf-8"
    body = resp.get_data(as_text=True)
    assert "$0.00" in body
    assert "Total Raised" in body


def test_recent_donors_empty(client):
    resp = client.get("/api/recent-donors")
    assert resp.status_code == 200
    assert resp.headers["Content-Type"] == "text/html; charset=utf-8"
    assert "No donations yet" in resp.get_data(as_text=True)


def test_create_donation_form_encoded(client, store):
    resp = client.post(
        "/api/donations",
        data={"name": "Alice", "email": "a@x.com", "amount": "50", "message": ""},
    )
    assert resp.status_code == 200
    assert resp.headers["HX-Trigger"] == "donationComplete"
    assert resp.headers["Content-Type"] == "text/html; charset=utf-8"
    body = resp.get_data(as_text=True)
    assert "Thank you, Alice!" in body
    assert "$50.00" in body
    assert store.stats() == (Decimal("50"), 1)


def test_create_donation_json(client, store):
    resp = client.post(
        "/api/donations",
        json={"name": "Bob", "email": "b@x.com", "amount": 12.5, "message": "go team"},
    )
    assert resp.status_code == 200
    [donation] = store.recent()
    assert donation.amount == Decimal("12.5")
    assert donation.message == "go team"


def test_create_donation_missing_fields(client, store):
    resp = client.post("/api/donations", data={"name": "", "email": "a@x.com", "amount": "50"})
    assert resp.status_code == 400
    assert resp.mimetype == "text/plain"
    assert resp.get_data(as_text=True) == "Name, email, and amount are required"
    assert "HX-Trigger" not in resp.headers
    assert len(store) == 0


def test_create_donation_non_positive_amount(client, store):
    resp = client.post("/api/donations", data={"name": "A", "email": "a@x.com", "amount": "0"})
    assert resp.status_code == 400
    assert len(store) == 0


def test_create_donation_unparseable_amount(client, store):
    resp = client.post("/api/donations", data={"name": "A", "email": "a@x.com", "amount": "lots"})
    assert resp.status_code == 400
    assert resp.get_data(as_text=True) == "Invalid form data"
    assert len(store) == 0


def test_create_donation_json_null_amount_is_missing(client, store):
    resp = client.post("/api/donations", json={"name": "A", "email": "a@x.com", "amount": None})
    assert resp.status_code == 400
    assert resp.get_data(as_text=True) == "Name, email, and amount are required"
    assert len(store) == 0


def test_create_donation_huge_amount_is_rejected_and_reads_still_work(client, store):
    resp = client.post("/api/donations", data={"name": "Big", "email": "b@x.com", "amount": "1e30"})
    assert resp.status_code == 400
    assert resp.get_data(as_text=True) == "Name, email, and amount are required"
    assert len(store) == 0

    assert client.get("/api/stats").status_code == 200
    assert client.get("/api/recent-donors").status_code == 200


def test_create_donation_at_largest_amount(client, store):
    resp = client.post(
        "/api/donations", data={"name": "Big", "email": "b@x.com", "amount": "1000000000000000"}
    )
    assert resp.status_code == 200
    assert "$1,000,000,000,000,000.00" in resp.get_data(as_text=True)

    stats = client.get("/api/stats")
    assert stats.status_code == 200
    assert "$1,000,000,000,000,000.00" in stats.get_data(as_text=True)
    assert client.get("/api/recent-donors").status_code == 200
    assert len(store) == 1


def test_create_donation_malformed_json(client, store):
    resp = client.post("/api/donations", data="{not json", content_type="application/json")
    assert resp.status_code == 400
    assert resp.mimetype == "text/plain"
    assert len(store) == 0


def test_create_donation_empty_body(client, store):
    resp = client.post("/api/donations")
    assert resp.status_code == 400
    assert len(store) == 0


def test_stats_and_recent_after_donations(client):
    client.post("/api/donations", data={"name": "Alice", "email": "a@x.com", "amount": "50"})
    client.post(
        "/api/donations",
        data={"name": "Bob", "email": "b@x.com", "amount": "1200.5", "message": "go team"},
    )

    stats = client.get("/api/stats").get_data(as_text=True)
    assert "$1,250.50" in stats
    assert ">2<" in stats

    recent = client.get("/api/recent-donors").get_data(as_text=True)
    assert recent.index("Alice") < recent.index("Bob")
    assert "go team" in recent
    assert 'datetime="' in recent


def test_recent_donors_escapes_html(client):
    client.post(
        "/api/donations",
        data={"name": "<script>x</script>", "email": "a@x.com", "amount": "5"},
    )
    body = client.get("/api/recent-donors").get_data(as_text=True)
    assert "<script>x</script>" not in body
    assert "&lt;script&gt;" in body


def test_recent_donors_respects_configured_limit(app, client):
    app.config["RECENT_DONORS_LIMIT"] = 1
    client.post("/api/donations", data={"name": "Alice", "email": "a@x.com", "amount": "5"})
    client.post("/api/donations", data={"name": "Bob", "email": "b@x.com", "amount": "5"})

    body = client.get("/api/recent-donors").get_data(as_text=True)
    assert "Bob" in body
    assert "Alice" not in body


def test_each_app_owns_its_store(client, output_dir, vendor_dir):
    from campaign import create_app

    client.post("/api/donations", data={"name": "Alice", "email": "a@x.com", "amount": "5"})
    other = create_app("testing", OUTPUT_DIR=str(output_dir), VENDOR_DIR=str(vendor_dir))
    assert len(other.extensions["donation_store"]) == 0


def test_api_method_not_allowed_is_plain_text(client):
    resp = client.put("/api/stats")
    assert resp.status_code == 405
    assert resp.mimetype == "text/plain"
