from storekeeper.data import CONTENT_URI


def test_init_db_creates_store(app, tmp_path):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["init-db"])
    assert result.exit_code == 0
    assert "version 1" in result.output
    assert (tmp_path / "app.db").exists()


def test_db_version(app):
    result = app.test_cli_runner().invoke(args=["db-version"])
    assert result.exit_code == 0
    assert result.output.strip() == "1"


def test_list_items(app, widget, gadget):
    provider = app.extensions["storekeeper"]
    provider.insert(CONTENT_URI, widget)
    provider.insert(CONTENT_URI, gadget)
    result = app.test_cli_runner().invoke(args=["list-items"])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines[0].split("\t")[1] == "Gadget"
    assert lines[1].split("\t")[1] == "Widget"
    assert lines[-1] == "2 items."
