import pytest
from sqlalchemy.orm import sessionmaker

from recordstore.db.database import build_engine
from recordstore.db.models import Base
from tests import models  # noqa: F401 - registers Person/Pet on Base


@pytest.fixture(scope="session")
def _engine():
    eng = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        Base.metadata.drop_all(bind=eng)
        eng.dispose()


@pytest.fixture(scope="session")
def _SessionLocal(_engine):
    return sessionmaker(bind=_engine, autoflush=False, autocommit=False, expire_on_commit=False)


@pytest.fixture
def db(_engine, _SessionLocal):
    session = _SessionLocal()
    try:
        yield session
    finally:
        session.close()
        with _engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                conn.execute(table.delete())


@pytest.fixture
def fresh_session(_SessionLocal):
    """A second session for checking what was actually committed."""
    session = _SessionLocal()
    try:
        yield session
    finally:
        session.close()
