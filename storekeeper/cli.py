import click
from flask import current_app
from flask.cli import with_appcontext

from storekeeper.data import CONTENT_URI


def _provider():
    return current_app.extensions["storekeeper"]


@click.command("init-db")
@with_appcontext
def init_db():
    """Create the inventory database if it does not exist yet."""
    helper = _provider().helper
    helper.open()
    click.echo(f"Inventory database ready at {helper.path} (version {helper.version()}).")


@click.command("db-version")
@with_appcontext
def db_version():
    """Print the schema version stored in the inventory database."""
    click.echo(str(_provider().helper.version()))


@click.command("list-items")
@click.option("--order", default="name ASC", help="SQL ordering clause, default 'name ASC'")
@with_appcontext
def list_items(order):
    """Print every item as one tab-separated line."""
    rows = _provider().query(
        CONTENT_URI,
        projection=["_id", "name", "price", "quantity", "supplier_name"],
        sort_order=order,
    )
    for row in rows:
        click.echo("\t".join(str(row[c]) for c in ("_id", "name", "price", "quantity", "supplier_name")))
    click.echo(f"{len(rows)} items.")


def register_cli(app):
    app.cli.add_command(init_db)
    app.cli.add_command(db_version)
    app.cli.add_command(list_items)
