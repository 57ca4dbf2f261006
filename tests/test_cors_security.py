from storekeeper import create_app
from storekeeper.config import TestingConfig


def make_app(cors_value):
    class Config(TestingConfig):
        CORS_ALLOWED_ORIGINS = cors_value
    return create_app(Config)


def test_cors_preflight_allows_whitelisted_origin():
    client = make_app("http://localhost:3000,https://app.example.com").test_client()
    resp = client.open(
        "/__ok",
        method="OPTIONS",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "GET",
        },
    )
    assert resp.status_code in (200, 204)
    assert resp.headers.get("Access-Control-Allow-Origin") == "http://localhost:3000"


def test_cors_blocks_disallowed_origin():
    client = make_app("https://app.example.com").test_client()
    resp = client.get("/__ok", headers={"Origin": "https://evil.example.com"})
    assert resp.headers.get("Access-Control-Allow-Origin") is None


def test_security_headers_present(client):
    resp = client.get("/health")
    assert resp.headers.get("X-Content-Type-Options") == "nosniff"
    assert resp.headers.get("X-Frame-Options") == "DENY"
    assert resp.headers.get("Referrer-Policy") == "no-referrer"
