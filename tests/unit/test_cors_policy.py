"""Tests for the origin gate and CORS headers."""

ALLOWED_ORIGIN = "https://www.modvisorconsultants.com"


class TestOriginGate:
    def test_request_without_origin_passes(self, client):
        resp = client.get("/health")

        assert resp.status_code == 200
        assert "access-control-allow-origin" not in resp.headers

    def test_allowed_origin_gets_cors_headers(self, client):
        resp = client.get("/health", headers={"Origin": ALLOWED_ORIGIN})

        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == ALLOWED_ORIGIN
        assert "x-request-id" in resp.headers.get("access-control-expose-headers", "").lower()

    def test_disallowed_origin_is_rejected(self, client):
        resp = client.get("/health", headers={"Origin": "http://malicious.example"})

        assert resp.status_code == 403
        assert resp.json() == {"message": "CORS not allowed for this origin"}
        assert "access-control-allow-origin" not in resp.headers

    def test_origin_match_is_exact(self, client):
        resp = client.get("/health", headers={"Origin": ALLOWED_ORIGIN + "/"})

        assert resp.status_code == 403

    def test_preflight_from_allowed_origin(self, client):
        resp = client.request(
            "OPTIONS",
            "/api/submit-form",
            headers={
                "Origin": ALLOWED_ORIGIN,
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert resp.status_code in (200, 204)
        assert resp.headers["access-control-allow-origin"] == ALLOWED_ORIGIN

    def test_preflight_from_disallowed_origin(self, client):
        resp = client.request(
            "OPTIONS",
            "/api/submit-form",
            headers={
                "Origin": "http://malicious.example",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert resp.status_code == 403


def test_request_id_is_generated_and_echoed(client):
    generated = client.get("/health")
    echoed = client.get("/health", headers={"X-Request-ID": "req-123"})

    assert generated.headers["x-request-id"]
    assert echoed.headers["x-request-id"] == "req-123"


def test_rejected_origin_still_carries_request_id(client):
    resp = client.get("/health", headers={"Origin": "http://malicious.example"})

    assert resp.headers["x-request-id"]
