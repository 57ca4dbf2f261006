import base64
import logging

from flask import Blueprint, current_app, request

from storekeeper.data import CONTENT_URI, InvalidArgument, ItemUri, parse_id
from storekeeper.data.contract import ALL_COLUMNS, COLUMN_ID, COLUMN_IMAGE
from storekeeper.schemas.inventory import ItemPayload
from storekeeper.utils import error, ok, validate_schema
from storekeeper.version import API_PREFIX

logger = logging.getLogger(__name__)

inventory_bp = Blueprint("inventory", __name__, url_prefix=API_PREFIX)

FILTER_COLUMNS = tuple(c for c in ALL_COLUMNS if c != COLUMN_IMAGE)


def get_provider():
    return current_app.extensions["storekeeper"]


def serialize_row(row: dict) -> dict:
    data = dict(row)
    if data.get(COLUMN_IMAGE) is not None:
        data[COLUMN_IMAGE] = base64.b64encode(bytes(data[COLUMN_IMAGE])).decode("ascii")
    return data


def filters_from_args(args):
    """Build an AND-ed equality selection from query-string columns."""
    clauses = []
    values = []
    for column in FILTER_COLUMNS:
        if column in args:
            clauses.append(f"{column} = ?")
            values.append(args.get(column))
    if not clauses:
        return None, None
    return " AND ".join(clauses), values


def order_from_args(args):
    order = args.get("order")
    if not order:
        return None
    column, _, direction = order.partition(":")
    direction = (direction or "asc").lower()
    if column not in ALL_COLUMNS or direction not in ("asc", "desc"):
        raise InvalidArgument("order", f"Invalid order {order!r}")
    return f"{column} {direction.upper()}"


@inventory_bp.route("/inventory", methods=["GET"])
def list_items():
    columns = request.args.get("columns")
    projection = [c.strip() for c in columns.split(",") if c.strip()] if columns else None
    selection, selection_args = filters_from_args(request.args)
    rows = get_provider().query(
        CONTENT_URI,
        projection=projection,
        selection=selection,
        selection_args=selection_args,
        sort_order=order_from_args(request.args),
    )
    return ok([serialize_row(r) for r in rows])


@inventory_bp.route("/inventory/<int:item_id>", methods=["GET"])
def get_item(item_id):
    rows = get_provider().query(ItemUri(item_id).uri)
    if not rows:
        return error("Item not found", status=404)
    return ok(serialize_row(rows[0]))


@inventory_bp.route("/inventory", methods=["POST"])
@validate_schema(ItemPayload)
def create_item():
    payload = request.validated_data
    uri = get_provider().insert(CONTENT_URI, payload.to_values())
    if uri is None:
        return error("Error with saving item", status=500)
    logger.info("item created %s", uri)
    return ok({COLUMN_ID: parse_id(uri), "uri": uri}, message="Item saved", status=201)


@inventory_bp.route("/inventory/<int:item_id>", methods=["PATCH"])
@validate_schema(ItemPayload)
def update_item(item_id):
    values = request.validated_data.to_values()
    updated = get_provider().update(ItemUri(item_id).uri, values)
    if values and not updated:
        return error("Item not found", status=404)
    return ok({"updated": updated}, message="Item updated")


@inventory_bp.route("/inventory/<int:item_id>", methods=["DELETE"])
def delete_item(item_id):
    deleted = get_provider().delete(ItemUri(item_id).uri)
    if not deleted:
        return error("Item not found", status=404)
    return ok({"deleted": deleted}, message="Item deleted")


@inventory_bp.route("/inventory", methods=["DELETE"])
def delete_items():
    selection, selection_args = filters_from_args(request.args)
    deleted = get_provider().delete(CONTENT_URI, selection, selection_args)
    return ok({"deleted": deleted}, message=f"{deleted} items deleted")
