import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ledgerly.database import create_db_engine, get_db, init_db
from ledgerly.main import app


@pytest.fixture
def db_session():
    """Create in-memory SQLite database for testing."""
    # StaticPool: one connection, so the TestClient worker thread sees the same database
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    Session = sessionmaker(bind=engine, autoflush=False)
    session = Session()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def client(db_session):
    """Test client whose requests use the test session."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
