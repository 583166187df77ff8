"""
Pytest fixtures for Cashbook backend tests.

Provides the app on an in-memory database, a fresh schema per test,
admin/cashier accounts and Authorization header helpers.
"""

import pytest

from cashbook import create_app
from cashbook.extensions import db
from cashbook.models import Role
from cashbook.services import auth_service


TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret-key',
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    'BCRYPT_ROUNDS': 4,
    'ADMIN_TOKEN_TTL_SECONDS': 3600,
    'CASHIER_TOKEN_TTL_SECONDS': 86400,
}

ADMIN_PASSWORD = "AdminPass123!"
CASHIER_PASSWORD = "pw123456"


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app(TEST_CONFIG)

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Empty every table before each test."""
    with app.app_context():
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        db.session.rollback()


@pytest.fixture(scope='function')
def client(app, db_session):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def admin(db_session):
    return auth_service.create_account(Role.ADMIN, "Root", "root@shop.local", ADMIN_PASSWORD)


@pytest.fixture(scope='function')
def cashier(db_session):
    return auth_service.create_account(Role.CASHIER, "Ada", "ada@x.com", CASHIER_PASSWORD)


@pytest.fixture(scope='function')
def other_cashier(db_session):
    return auth_service.create_account(Role.CASHIER, "Grace", "grace@x.com", CASHIER_PASSWORD)


def login(client, role: str, email: str, secret: str):
    return client.post(f'/auth/login/{role}', json={'email': email, 'secret': secret})


def get_auth_token(client, role: str, email: str, secret: str) -> str:
    """Helper to get auth token for an account."""
    response = login(client, role, email, secret)
    if response.status_code == 200:
        return response.get_json().get('token')
    return None


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers."""
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture(scope='function')
def admin_headers(client, admin):
    return auth_headers(get_auth_token(client, 'admin', admin.email, ADMIN_PASSWORD))


@pytest.fixture(scope='function')
def cashier_headers(client, cashier):
    return auth_headers(get_auth_token(client, 'cashier', cashier.email, CASHIER_PASSWORD))


@pytest.fixture(scope='function')
def other_cashier_headers(client, other_cashier):
    return auth_headers(get_auth_token(client, 'cashier', other_cashier.email, CASHIER_PASSWORD))
