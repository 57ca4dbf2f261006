from flask import Response, request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from sqlalchemy import event
import time

from storekeeper.data import CONTENT_URI, ItemUri, parse_uri

# Histogram buckets for DB query durations
DB_QUERY_DURATION = Histogram(
    "db_query_duration_seconds",
    "Database query duration in seconds",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5),
)

# Counter for HTTP errors
ERROR_COUNTER = Counter(
    "http_error_total",
    "Count of HTTP responses with status >= 400",
    ["endpoint", "method", "code"],
)

CHANGE_NOTIFICATIONS = Counter(
    "inventory_change_notifications_total",
    "Change notifications published by the inventory provider",
    ["kind"],
)


def instrument_engine(engine):
    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("_query_start_time", []).append(time.time())

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        start = conn.info.get("_query_start_time").pop(-1)
        DB_QUERY_DURATION.observe(time.time() - start)


def count_change(change):
    kind = "item" if isinstance(parse_uri(change.uri), ItemUri) else "collection"
    CHANGE_NOTIFICATIONS.labels(kind).inc()


def init_app(app, provider):
    """Attach metric hooks to the app, the store and the provider."""
    provider.helper.on_open(instrument_engine)
    provider.subscribe(CONTENT_URI, count_change)

    @app.after_request
    def track_errors(resp):
        if resp.status_code >= 400:
            endpoint = request.endpoint or "unknown"
            ERROR_COUNTER.labels(endpoint, request.method, resp.status_code).inc()
        return resp

    @app.route("/metrics")
    def metrics():
        return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
