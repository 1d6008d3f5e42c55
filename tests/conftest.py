"""Pytest fixtures for testing"""

import uuid
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from credit_service.api.main import create_app
from credit_service.domain.exceptions import StaleBalanceError
from credit_service.domain.models import CreditAccount, CreditCard, CustomerType, SimpleCredit, Transaction
from credit_service.infrastructure.database.models import Base
from credit_service.infrastructure.database.session import get_db
from credit_service.utils.date_utils import utc_date


# Test database: one shared in-memory connection so the TestClient thread sees the same data
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


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
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


class InMemoryCreditRepository:
    """Dict-backed CreditRepository"""

    def __init__(self) -> None:
        self.credits: Dict[str, CreditAccount] = {}
        self.balance_updates: List[tuple] = []

    def find_by_id(self, credit_id: str) -> Optional[CreditAccount]:
        return self.credits.get(credit_id)

    def save(self, credit: CreditAccount) -> CreditAccount:
        stored = replace(credit, credit_id=credit.credit_id or str(uuid.uuid4()))
        self.credits[stored.credit_id] = stored
        return stored

    def find_all(self) -> List[CreditAccount]:
        return list(self.credits.values())

    def find_by_customer_id(self, customer_id: str) -> List[CreditAccount]:
        return [c for c in self.credits.values() if c.customer_id == customer_id]

    def delete_by_id(self, credit_id: str) -> None:
        self.credits.pop(credit_id, None)

    def update_available_credit(self, credit_id: str, value: Decimal, expected: Optional[Decimal] = None) -> None:
        self._update(credit_id, "available_credit", value, expected)

    def update_amount_paid(self, credit_id: str, value: Decimal, expected: Optional[Decimal] = None) -> None:
        self._update(credit_id, "amount_paid", value, expected)

    def _update(self, credit_id: str, field: str, value: Decimal, expected: Optional[Decimal]) -> None:
        credit = self.credits.get(credit_id)
        if credit is None or (expected is not None and getattr(credit, field) != expected):
            raise StaleBalanceError(f"Balance of credit {credit_id} changed")
        self.credits[credit_id] = replace(credit, **{field: value})
        self.balance_updates.append((credit_id, field, value))


class InMemoryTransactionRepository:
    """List-backed TransactionRepository"""

    def __init__(self) -> None:
        self.transactions: List[Transaction] = []

    def save(self, transaction: Transaction) -> Transaction:
        stored = replace(transaction, transaction_id=transaction.transaction_id or str(uuid.uuid4()))
        self.transactions.append(stored)
        return stored

    def find_all(self) -> List[Transaction]:
        return list(self.transactions)

    def find_by_credit_id(self, credit_id: str) -> List[Transaction]:
        return [t for t in self.transactions if t.credit_id == credit_id]

    def find_by_credit_id_and_date_between(self, credit_id: str, start: date, end: date) -> List[Transaction]:
        return [t for t in self.find_by_credit_id(credit_id) if start <= utc_date(t.date) <= end]


@pytest.fixture
def credit_repo() -> InMemoryCreditRepository:
    return InMemoryCreditRepository()


@pytest.fixture
def transaction_repo() -> InMemoryTransactionRepository:
    return InMemoryTransactionRepository()


@pytest.fixture
def credit_card(credit_repo: InMemoryCreditRepository) -> CreditCard:
    """Stored personal card: limit 1000, 500 available"""
    return credit_repo.save(
        CreditCard(
            customer_id="cust-card",
            customer_type=CustomerType.PERSONAL,
            amount=Decimal("1000"),
            card_number="4111111111111111",
            available_credit=Decimal("500"),
        )
    )


@pytest.fixture
def simple_credit(credit_repo: InMemoryCreditRepository) -> SimpleCredit:
    """Stored personal simple credit: 1000 lent, 800 repaid"""
    return credit_repo.save(
        SimpleCredit(
            customer_id="cust-simple",
            customer_type=CustomerType.PERSONAL,
            amount=Decimal("1000"),
            amount_paid=Decimal("800"),
        )
    )
