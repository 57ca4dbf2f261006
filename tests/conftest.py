import os
import sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from storekeeper import create_app
from storekeeper.config import TestingConfig
from storekeeper.data import ChangeNotifier, InventoryDbHelper, InventoryProvider

WIDGET = {
    'name': 'Widget',
    'price': '9.99',
    'quantity': 5,
    'supplier_name': 'Acme',
    'supplier_email': 'a@acme.com',
    'supplier_phone': '555-0100',
}

GADGET = {
    'name': 'Gadget',
    'price': '1.00',
    'supplier_name': 'X',
    'supplier_email': 'x@x.com',
    'supplier_phone': '000',
}


@pytest.fixture()
def widget():
    return dict(WIDGET)


@pytest.fixture()
def gadget():
    return dict(GADGET)


@pytest.fixture(scope='function')
def helper(tmp_path):
    h = InventoryDbHelper(str(tmp_path / 'store.db'))
    yield h
    h.close()


@pytest.fixture(scope='function')
def provider(helper):
    return InventoryProvider(helper, ChangeNotifier())


@pytest.fixture(scope='function')
def app(tmp_path, monkeypatch):
    monkeypatch.setenv('APP_ENV', 'testing')

    class Config(TestingConfig):
        STORE_DB_PATH = str(tmp_path / 'app.db')

    app = create_app(Config)
    yield app
    app.extensions['storekeeper'].helper.close()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()
