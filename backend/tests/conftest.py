"""
Pytest fixtures for posgo backend tests.

Provides the app (in-memory SQLite for both the cloud and the local bind),
a per-test wipe of every table, fresh terminal state, the test client and
session helpers for demo, store and super-admin identities.
"""

import pytest

from posgo import create_app
from posgo.extensions import db
from posgo.services import auth_service
from posgo.state import get_router, init_state
from posgo.storage import RowStore, RowStoreError, RowStorePermissionError


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'SQLALCHEMY_BINDS': {'local': 'sqlite://'},
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Empty every table on every bind and reset the terminal state."""
    with app.app_context():
        for metadata in db.metadatas.values():
            for table in reversed(metadata.sorted_tables):
                db.session.execute(table.delete())
        db.session.commit()
        init_state(app)

        yield db.session

        db.session.rollback()


@pytest.fixture(scope='function')
def client(app, db_session):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def router(db_session):
    """Persistence router with nobody signed in (demo mode)."""
    return get_router()


@pytest.fixture(scope='function')
def demo_router(router):
    router.save_session(auth_service.demo_profile())
    router.reset_demo_data()
    return router


@pytest.fixture(scope='function')
def make_store(db_session):
    """Factory: register a store and return its admin profile."""
    counter = {"n": 0}

    def _make(name="Bodega Central", email=None, password="secret123"):
        counter["n"] += 1
        email = email or f"owner{counter['n']}@bodega.pe"
        return auth_service.register_store(email, password, "Owner", name)

    return _make


@pytest.fixture(scope='function')
def store_profile(make_store):
    return make_store()


@pytest.fixture(scope='function')
def store_router(router, store_profile):
    """Router signed in as a store admin (store mode)."""
    router.save_session(store_profile)
    return router


@pytest.fixture(scope='function')
def superadmin_profile(db_session):
    return auth_service.create_superadmin("root@posgo.pe", "secret123")


class FailingRowStore(RowStore):
    """Row store whose every call fails (unreachable cloud)."""

    def __init__(self, error=RowStoreError):
        self.error = error

    def select(self, table, filters=None, order_by=None, descending=False):
        raise self.error(f"select {table} failed")

    def insert(self, table, rows):
        raise self.error(f"insert {table} failed")

    def upsert(self, table, rows, on_conflict="id"):
        raise self.error(f"upsert {table} failed")

    def update(self, table, values, filters):
        raise self.error(f"update {table} failed")

    def delete(self, table, filters):
        raise self.error(f"delete {table} failed")


@pytest.fixture
def failing_rows():
    return FailingRowStore()


@pytest.fixture
def denying_rows():
    return FailingRowStore(RowStorePermissionError)
