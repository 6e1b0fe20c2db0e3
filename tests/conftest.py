"""Pytest fixtures for testing"""

import os
import pytest
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Generator, List
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker, Session

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

from sepa_gateway.api.main import create_app
from sepa_gateway.api.dependencies import get_identifier_source
from sepa_gateway.infrastructure.database.models import Base
from sepa_gateway.infrastructure.database.session import build_engine, get_db
from sepa_gateway.domain.identifiers import IdentifierGenerator
from sepa_gateway.domain.models import CreditorConfig, DebtRecord


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = build_engine(TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FixedIdentifierSource:
    """Fixed clock and predictable suffixes: aaaaaa, bbbbbb, ..."""

    def __init__(self, timestamp_ms: int = 1_700_000_000_000):
        self._timestamp_ms = timestamp_ms
        self._calls = 0

    def timestamp_ms(self) -> int:
        return self._timestamp_ms

    def random_suffix(self) -> str:
        suffix = chr(ord("a") + self._calls % 26) * 6
        self._calls += 1
        return suffix


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and fixed identifiers"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identifier_source] = lambda: FixedIdentifierSource()
    return TestClient(app)


@pytest.fixture
def identifiers() -> IdentifierGenerator:
    return IdentifierGenerator(FixedIdentifierSource())


@pytest.fixture
def make_identifiers() -> Callable[[int], IdentifierGenerator]:
    """Identifier generators pinned to a given run timestamp"""
    return lambda timestamp_ms: IdentifierGenerator(FixedIdentifierSource(timestamp_ms))


@pytest.fixture
def creditor() -> CreditorConfig:
    return CreditorConfig(
        name="Gure Txokoa",
        iban="ES4500012345678",
        creditor_id="ES45000B12345678",
    )


@pytest.fixture
def created_at() -> datetime:
    return datetime(2024, 6, 3, 10, 15, 30)


@pytest.fixture
def execution_date() -> date:
    return date(2024, 6, 5)


@pytest.fixture
def sample_debts() -> List[DebtRecord]:
    """Monthly debts: three exportable, one deselected, one without IBAN"""
    return [
        DebtRecord(
            id="c1",
            member_id="m1",
            member_name="Ane Zelaia",
            iban="ES7921000418450200051521",
            amount=Decimal("25.00"),
            selected=True,
        ),
        DebtRecord(
            id="c2",
            member_id="m2",
            member_name="Jon Etxeberria",
            iban="ES9100490001500000000001",
            amount=Decimal("12.5"),
            selected=True,
        ),
        DebtRecord(
            id="c3",
            member_id="m3",
            member_name="Miren Agirre",
            iban="ES1299990000000000000000",
            amount=Decimal("7.35"),
            selected=True,
        ),
        DebtRecord(
            id="c4",
            member_id="m4",
            member_name="Iker Goikoetxea",
            iban="ES0201820000000000000000",
            amount=Decimal("40.00"),
            selected=False,
        ),
        DebtRecord(
            id="c5",
            member_id="m5",
            member_name="Nerea Urrutia",
            iban=None,
            amount=Decimal("18.00"),
            selected=True,
        ),
    ]
