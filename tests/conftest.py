"""Test configuration and fixtures."""

from typing import Callable, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from contract_manager.api import app
from contract_manager.db import models  # noqa: F401
from contract_manager.db.base import Base, build_engine, get_db
from contract_manager.db.models import BlueprintModel
from contract_manager.enums import FieldType
from contract_manager.schemas.blueprint import BlueprintCreate, BlueprintFieldCreate
from contract_manager.services.blueprints import BlueprintService


@pytest.fixture
def engine():
    """A fresh in-memory database for each test."""
    test_engine = build_engine("sqlite:///:memory:")
    Base.metadata.create_all(test_engine)
    yield test_engine
    Base.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """API client whose requests use the test database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.pop(get_db, None)


def _field(
    label: str,
    required: bool = False,
    type: FieldType = FieldType.TEXT,
) -> BlueprintFieldCreate:
    return BlueprintFieldCreate(type=type, label=label, required=required)


@pytest.fixture
def make_blueprint(db_session) -> Callable[..., BlueprintModel]:
    """Factory creating blueprints through the service."""

    def _make(
        name: str = "NDA",
        fields: Optional[List[BlueprintFieldCreate]] = None,
    ) -> BlueprintModel:
        return BlueprintService(db_session).create(
            BlueprintCreate(
                name=name,
                fields=fields
                or [
                    _field("Company", required=True),
                    _field("Notes"),
                ],
            )
        )

    return _make
