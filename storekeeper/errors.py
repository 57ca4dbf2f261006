import logging
from flask import Blueprint
from werkzeug.exceptions import HTTPException
from storekeeper.data import InvalidArgument, InvalidIdentifier, StorageFault, UnsupportedOperation
from storekeeper.utils.responses import error, internal_error_response

errors_bp = Blueprint("errors_bp", __name__)


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    msg = e.description or getattr(e, "name", "HTTP Error")
    return error(msg, status=e.code, code=e.code)


@errors_bp.app_errorhandler(InvalidArgument)
def handle_invalid_argument(e):
    return error(e.message, status=400, field=e.field)


@errors_bp.app_errorhandler(InvalidIdentifier)
def handle_invalid_identifier(e):
    return error(str(e), status=404)


@errors_bp.app_errorhandler(UnsupportedOperation)
def handle_unsupported_operation(e):
    return error(str(e), status=405)


@errors_bp.app_errorhandler(StorageFault)
def handle_storage_fault(e):
    logging.exception("Storage fault")
    return error(
        "The inventory store is unavailable. Please try again later.",
        status=500,
        code=500,
    )


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    logging.exception("Unhandled exception")
    return internal_error_response()
