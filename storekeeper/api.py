from storekeeper.routes import inventory_bp


def register_api_v1(app):
    """Register blueprint routes under the API version prefix."""
    app.register_blueprint(inventory_bp)
