import pytest

from expense_api.app import create_app
from expense_core.config import Settings
from expense_core.services import CategoryRegistry, ExpenseStore


@pytest.fixture
def store():
    return ExpenseStore()


@pytest.fixture
def registry():
    return CategoryRegistry()


@pytest.fixture
def app():
    app = create_app(Settings())
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
