from flask import Flask, request, g
from dotenv import load_dotenv
from flask_cors import CORS
import uuid

from storekeeper.config import get_config_class
from storekeeper.logging import configure_logging
from storekeeper.errors import errors_bp
from storekeeper.cli import register_cli
from storekeeper.api import register_api_v1
from storekeeper.data import ChangeNotifier, InventoryDbHelper, InventoryProvider
from storekeeper import metrics as metrics_module


def create_app(config_object=None, provider=None):
    """Application factory."""
    load_dotenv()
    app = Flask(__name__)

    if config_object is not None:
        app.config.from_object(config_object)
    else:
        app.config.from_object(get_config_class())

    configure_logging(app)
    register_cli(app)

    # The provider owns the store for the life of the app; the file is opened on first use
    if provider is None:
        helper = InventoryDbHelper(
            app.config.get("STORE_DB_PATH", "store.db"),
            echo=app.config.get("STORE_DB_ECHO", False),
        )
        provider = InventoryProvider(helper, ChangeNotifier())
    app.extensions["storekeeper"] = provider

    if app.config.get("METRICS_ENABLED", True):
        metrics_module.init_app(app, provider)

    # Configure CORS
    allowed = app.config.get("CORS_ALLOWED_ORIGINS", "*")
    if isinstance(allowed, str):
        allowed = allowed.strip()
        origins = "*" if allowed == "*" else [o.strip() for o in allowed.split(",") if o.strip()]
    else:
        origins = allowed or "*"
    CORS(
        app,
        origins=origins,
        expose_headers=["X-Request-ID"],
    )

    app.register_blueprint(errors_bp)
    if app.config.get("TESTING"):
        from storekeeper.test_support import test_support_bp
        app.register_blueprint(test_support_bp)

    register_api_v1(app)

    @app.before_request
    def _set_request_id():
        incoming = request.headers.get("X-Request-ID")
        rid = (incoming or uuid.uuid4().hex)[:100]
        g.request_id = rid
        app.logger.info(f"request start {request.method} {request.path}")

    @app.after_request
    def _add_request_id_header(resp):
        rid = getattr(g, "request_id", None)
        if rid:
            resp.headers["X-Request-ID"] = rid
        return resp

    @app.after_request
    def _set_security_headers(resp):
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        return resp

    @app.route("/health")
    def health():
        return {"status": "ok"}, 200

    return app
