import pytest
from typing import Generator, Any

from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from api.main import create_app
from api.deps.auth import create_user_token
from crud import crud_user
from schemas.user import UserCreate
from trade_journal import models
from trade_journal.config import Settings
from trade_journal.db.session import Database

fake = Faker()

TEST_PASSWORD = "testpassword"


@pytest.fixture(scope="function")
def test_settings(tmp_path) -> Settings:
    # A file-backed SQLite database per test keeps tests isolated from each other
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'api_test.db'}",
        secret_key="test-secret-key",
        access_token_expire_minutes=30,
        log_level="WARNING",
    )


@pytest.fixture(scope="function")
def database(test_settings: Settings) -> Generator[Database, Any, None]:
    db = Database(test_settings.DATABASE_URL)
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture(scope="function")
def client(test_settings: Settings, database: Database) -> Generator[TestClient, Any, None]:
    """
    Yield a TestClient for an app built around the test database.
    """
    app = create_app(settings=test_settings, database=database)
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def db_session(database: Database) -> Generator[Session, Any, None]:
    """
    A session for setting up data or verifying DB state outside of API calls.
    """
    with database.session() as db:
        yield db


def _create_user(db: Session, email: str) -> models.User:
    return crud_user.user.create_user(
        db,
        user_in=UserCreate(email=email, password=TEST_PASSWORD, full_name=fake.name()),
    )


@pytest.fixture(scope="function")
def test_user(db_session: Session) -> models.User:
    return _create_user(db_session, "journal_testuser@example.com")


@pytest.fixture(scope="function")
def other_user(db_session: Session) -> models.User:
    return _create_user(db_session, "otheruser@example.com")


@pytest.fixture(scope="function")
def normal_user_token_headers(
    test_user: models.User, test_settings: Settings
) -> dict[str, str]:
    access_token = create_user_token(test_user, test_settings)
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture(scope="function")
def other_user_token_headers(
    other_user: models.User, test_settings: Settings
) -> dict[str, str]:
    access_token = create_user_token(other_user, test_settings)
    return {"Authorization": f"Bearer {access_token}"}


def entry_payload(profit_loss: float, trades_count: int = 1, **extra) -> dict:
    payload = {
        "profit_loss": profit_loss,
        "trades_count": trades_count,
        "notes": fake.sentence(),
    }
    payload.update(extra)
    return payload


@pytest.fixture
def make_entry():
    """Helper that PUTs one daily entry through the API and checks it succeeded."""

    def _make_entry(client: TestClient, headers: dict, day: str, profit_loss: float, trades_count: int = 1, **extra):
        response = client.put(
            f"/api/daily-entries/{day}",
            headers=headers,
            json=entry_payload(profit_loss, trades_count, **extra),
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _make_entry
