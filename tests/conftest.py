import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')

from reporting.auth.dependencies import get_authenticator  # noqa: E402
from reporting.auth.service import Authenticator  # noqa: E402
from reporting.core.config import TokenSettings  # noqa: E402
from reporting.database import Base, get_db  # noqa: E402
from reporting.main import app  # noqa: E402

TEST_SECRET = 'test-signing-secret-with-enough-length'


@pytest.fixture
def db_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def token_settings() -> TokenSettings:
    return TokenSettings(secret_key=TEST_SECRET, algorithm='HS256', expires_minutes=24 * 60)


@pytest.fixture
def authenticator(token_settings) -> Authenticator:
    return Authenticator(token_settings, '@luct.co.ls')


@pytest.fixture
def client(session_factory, authenticator):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_authenticator] = lambda: authenticator
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(db, authenticator):
    user = authenticator.register(
        db,
        name='Palesa Mokoena',
        password='secret-pl',
        role='pl',
        email='palesa@luct.co.ls',
    )
    return {'Authorization': f'Bearer {authenticator.issue_token(user)}'}
