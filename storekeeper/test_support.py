from flask import Blueprint
import logging

from storekeeper.data import StorageFault
from storekeeper.utils.responses import ok


test_support_bp = Blueprint("test_support_bp", __name__)


@test_support_bp.route("/__ok", methods=["GET"])
def __ok():
    return ok({"ping": "pong"})


@test_support_bp.route("/__boom", methods=["GET"])
def __boom():
    raise RuntimeError("boom")


@test_support_bp.route("/__storage_fault", methods=["GET"])
def __storage_fault():
    raise StorageFault("disk I/O error")


@test_support_bp.route("/__log", methods=["GET"])
def __log():
    logging.getLogger(__name__).info("test log line")
    return ok({"logged": True})
