"""Data access layer for credit accounts and transactions"""

import functools
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from credit_service.domain.exceptions import StaleBalanceError, StorageError
from credit_service.domain.models import (
    CreditAccount,
    CreditCard,
    CreditType,
    SimpleCredit,
    Transaction,
)
from credit_service.infrastructure.database.models import CreditRecord, TransactionRecord
from credit_service.utils.date_utils import day_window


def _storage_errors(method):
    """Re-raise SQLAlchemy failures as StorageError"""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except SQLAlchemyError as e:
            raise StorageError(f"Database error in {method.__name__}: {e}") from e

    return wrapper


def credit_to_domain(record: CreditRecord) -> CreditAccount:
    if record.type == CreditType.CREDIT_CARD:
        return CreditCard(
            credit_id=record.credit_id,
            customer_id=record.customer_id,
            customer_type=record.customer_type,
            amount=record.amount,
            card_number=record.card_number,
            available_credit=record.available_credit,
        )
    if record.type == CreditType.SIMPLE_CREDIT:
        return SimpleCredit(
            credit_id=record.credit_id,
            customer_id=record.customer_id,
            customer_type=record.customer_type,
            amount=record.amount,
            amount_paid=record.amount_paid,
        )
    raise StorageError(f"Unknown credit type stored for {record.credit_id}: {record.type}")


def _fill_record(record: CreditRecord, credit: CreditAccount) -> CreditRecord:
    record.customer_id = credit.customer_id
    record.customer_type = credit.customer_type
    record.type = credit.type
    record.amount = credit.amount

    # Only the variant's own columns are populated
    record.card_number = None
    record.available_credit = None
    record.amount_paid = None
    if credit.type == CreditType.CREDIT_CARD:
        record.card_number = credit.card_number
        record.available_credit = credit.available_credit
    elif credit.type == CreditType.SIMPLE_CREDIT:
        record.amount_paid = credit.amount_paid
    return record


def transaction_to_domain(record: TransactionRecord) -> Transaction:
    return Transaction(
        transaction_id=record.transaction_id,
        credit_id=record.credit_id,
        type=record.type,
        amount=record.amount,
        date=record.date,
    )


class CreditRepository:
    """Repository for credit accounts"""

    def __init__(self, db: Session):
        self.db = db

    @_storage_errors
    def find_by_id(self, credit_id: str) -> Optional[CreditAccount]:
        record = self.db.get(CreditRecord, credit_id)
        return credit_to_domain(record) if record else None

    @_storage_errors
    def save(self, credit: CreditAccount) -> CreditAccount:
        """Insert a new account, or fully replace the stored one with the same credit_id"""
        record = self.db.get(CreditRecord, credit.credit_id) if credit.credit_id else None
        if record is None:
            record = CreditRecord(credit_id=credit.credit_id)
            self.db.add(record)

        _fill_record(record, credit)
        self.db.flush()  # Get ID without committing
        return credit_to_domain(record)

    @_storage_errors
    def find_all(self) -> List[CreditAccount]:
        records = self.db.scalars(select(CreditRecord).order_by(CreditRecord.created_at)).all()
        return [credit_to_domain(r) for r in records]

    @_storage_errors
    def find_by_customer_id(self, customer_id: str) -> List[CreditAccount]:
        records = self.db.scalars(
            select(CreditRecord).filter(CreditRecord.customer_id == customer_id).order_by(CreditRecord.created_at)
        ).all()
        return [credit_to_domain(r) for r in records]

    @_storage_errors
    def delete_by_id(self, credit_id: str) -> None:
        record = self.db.get(CreditRecord, credit_id)
        if record is not None:
            self.db.delete(record)
            self.db.flush()

    @_storage_errors
    def update_available_credit(self, credit_id: str, value: Decimal, expected: Optional[Decimal] = None) -> None:
        self._update_balance(CreditRecord.available_credit, credit_id, value, expected)

    @_storage_errors
    def update_amount_paid(self, credit_id: str, value: Decimal, expected: Optional[Decimal] = None) -> None:
        self._update_balance(CreditRecord.amount_paid, credit_id, value, expected)

    def _update_balance(self, column, credit_id: str, value: Decimal, expected: Optional[Decimal]) -> None:
        """Single conditional UPDATE: the write only lands if the balance is still `expected`"""
        stmt = update(CreditRecord).where(CreditRecord.credit_id == credit_id)
        if expected is not None:
            stmt = stmt.where(column == expected)

        result = self.db.execute(stmt.values({column.key: value}))
        if result.rowcount == 0:
            raise StaleBalanceError(f"Balance of credit {credit_id} changed concurrently or credit was removed")


class TransactionRepository:
    """Repository for credit transactions"""

    def __init__(self, db: Session):
        self.db = db

    @_storage_errors
    def save(self, transaction: Transaction) -> Transaction:
        record = TransactionRecord(
            transaction_id=transaction.transaction_id,
            credit_id=transaction.credit_id,
            type=transaction.type,
            amount=transaction.amount,
            date=transaction.date,
        )
        self.db.add(record)
        self.db.flush()
        return transaction_to_domain(record)

    @_storage_errors
    def find_all(self) -> List[Transaction]:
        records = self.db.scalars(select(TransactionRecord).order_by(TransactionRecord.date)).all()
        return [transaction_to_domain(r) for r in records]

    @_storage_errors
    def find_by_credit_id(self, credit_id: str) -> List[Transaction]:
        records = self.db.scalars(
            select(TransactionRecord)
            .filter(TransactionRecord.credit_id == credit_id)
            .order_by(TransactionRecord.date)
        ).all()
        return [transaction_to_domain(r) for r in records]

    @_storage_errors
    def find_by_credit_id_and_date_between(self, credit_id: str, start: date, end: date) -> List[Transaction]:
        window_start, window_end = day_window(start, end)
        records = self.db.scalars(
            select(TransactionRecord)
            .filter(
                TransactionRecord.credit_id == credit_id,
                TransactionRecord.date >= window_start,
                TransactionRecord.date < window_end,
            )
            .order_by(TransactionRecord.date)
        ).all()
        return [transaction_to_domain(r) for r in records]
