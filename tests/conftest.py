import pytest

from tischplan.core.registry import TableRegistry
from tischplan.core.selection import SelectionCoordinator
from tischplan.core.drag import DragController
from tischplan.core.floorplan import FloorPlan
from tischplan import app as app_module


@pytest.fixture
def registry():
    return TableRegistry()


@pytest.fixture
def selection(registry):
    return SelectionCoordinator(registry)


@pytest.fixture
def drag(registry, selection):
    return DragController(registry, selection)


@pytest.fixture
def plan():
    """Leerer Tischplan ohne Standardtische"""
    return FloorPlan()


@pytest.fixture
def flask_app():
    app_module.app.config.update(
        TESTING=True,
        USERS={"admin": "admin123", "host": "host123"},
        SEED_TABLES=True,
        PROPAGATE_EXCEPTIONS=None,
    )
    app_module._floor_plans.clear()
    yield app_module.app
    app_module._floor_plans.clear()


@pytest.fixture
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture
def logged_in_client(client):
    client.post('/login', data={"username": "admin", "password": "admin123"})
    return client
