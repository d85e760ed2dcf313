from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.database import Base, get_session
from app.db.models import Avaluo, UserRole
from app.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def seeded(session):
    """Cinco avalúos que cubren todas las combinaciones útiles de estado."""
    rows = [
        Avaluo(id=1, folio_shit="B-200", folio="F1", direccion="Calle Reforma 10",
               cerrado=False, cancelado=False, enviado=None),
        Avaluo(id=2, folio_shit="A-100", folio="F2", direccion="Av. Juárez 5",
               cerrado=True, cancelado=False, enviado=datetime(2024, 5, 1)),
        Avaluo(id=3, folio_shit="C-300", folio="F3", direccion="calle reforma 22",
               cerrado=False, cancelado=True, enviado=datetime(2024, 6, 1)),
        Avaluo(id=4, folio_shit="D-400", folio="F4", direccion="Insurgentes 1",
               cerrado=True, cancelado=True, enviado=None),
        Avaluo(id=5, folio_shit=None, folio="F99", direccion="Calle 100%",
               cerrado=False, cancelado=False, enviado=datetime(2024, 7, 1)),
    ]
    session.add_all(rows)
    session.add_all([
        UserRole(user_id="user-1", perito="P7", role="perito"),
        UserRole(user_id="user-2", perito=None, role="admin"),
    ])
    session.commit()
    return rows


@pytest.fixture
def client(session_factory, seeded):
    def _override():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_session] = _override
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"X-User-Id": "user-1"}
