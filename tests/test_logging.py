import json
import logging


def test_request_id_header_and_propagation(client):
    resp = client.get("/__ok", headers={"X-Request-ID": "my-fixed-id-123"})
    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == "my-fixed-id-123"


def test_request_id_generated_when_missing(client):
    resp = client.get("/__ok")
    assert len(resp.headers.get("X-Request-ID")) == 32


def test_logs_include_request_id_attribute(app, caplog):
    caplog.set_level("INFO")
    from storekeeper.logging import RequestIdFilter
    caplog.handler.addFilter(RequestIdFilter())
    client = app.test_client()
    resp = client.get("/__log", headers={"X-Request-ID": "rid-abc"})
    assert resp.status_code == 200
    assert any(getattr(r, "request_id", "") == "rid-abc" for r in caplog.records)


def test_supplier_contact_masked_in_info(app, monkeypatch, caplog):
    from storekeeper.logging import MaskingFilter
    monkeypatch.setenv("APP_ENV", "production")
    caplog.set_level("INFO")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test")
    logger.info({"supplier_email": "a@acme.com", "supplier_phone": "555-0100", "name": "Widget"})
    record = next(r for r in caplog.records if r.name == "mask_test")
    assert isinstance(record.msg, dict)
    assert record.msg["supplier_email"] == "[REDACTED]"
    assert record.msg["supplier_phone"] == "[REDACTED]"
    assert record.msg["name"] == "Widget"


def test_supplier_contact_visible_in_debug(app, monkeypatch, caplog):
    from storekeeper.logging import MaskingFilter
    monkeypatch.setenv("APP_ENV", "development")
    caplog.set_level("DEBUG")
    caplog.handler.addFilter(MaskingFilter())
    logger = logging.getLogger("mask_test_debug")
    logger.debug({"supplier_email": "a@acme.com"})
    record = next(r for r in caplog.records if r.name == "mask_test_debug")
    assert record.msg["supplier_email"] == "a@acme.com"


def test_json_formatter_output():
    from storekeeper.logging import JsonFormatter
    record = logging.LogRecord("fmt_test", logging.INFO, __file__, 1, "saved %s", ("Widget",), None)
    record.request_id = "rid-1"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "saved Widget"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "rid-1"


def test_rows_in_log_args_are_masked(monkeypatch):
    from storekeeper.logging import MaskingFilter
    monkeypatch.setenv("APP_ENV", "production")
    rows = [{"name": "Widget", "supplier_email": "a@acme.com", "image": b"\x89PNG"}]
    record = logging.LogRecord("rows_test", logging.INFO, __file__, 1, "rows %s", (rows,), None)
    MaskingFilter().filter(record)
    masked = record.args[0][0]
    assert masked == {"name": "Widget", "supplier_email": "[REDACTED]", "image": "<4 bytes>"}
    assert rows[0]["supplier_email"] == "a@acme.com"


def test_request_id_outside_a_request():
    from storekeeper.logging import current_request_id
    assert current_request_id() == "n/a"
