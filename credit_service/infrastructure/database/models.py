"""SQLAlchemy ORM models for credit accounts and their transactions"""

import uuid
from sqlalchemy import Column, DateTime, Enum, Numeric, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

from credit_service.domain.models import CreditType, CustomerType, TransactionType

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class CreditRecord(Base):
    """
    Single table for every credit type.

    `type` selects which variant columns are populated: card_number and
    available_credit for CREDIT_CARD, amount_paid for SIMPLE_CREDIT.
    """

    __tablename__ = "credit"

    credit_id = Column(Text, primary_key=True, default=_new_id)
    customer_id = Column(Text, nullable=False, index=True)
    customer_type = Column(Enum(CustomerType, name="customer_type"), nullable=False)
    type = Column(Enum(CreditType, name="credit_type"), nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    card_number = Column(Text, nullable=True)
    available_credit = Column(Numeric(18, 2), nullable=True)
    amount_paid = Column(Numeric(18, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class TransactionRecord(Base):
    """Append-only ledger entry; credit_id is not a foreign key so deleting a credit keeps its history"""

    __tablename__ = "credit_transaction"

    transaction_id = Column(Text, primary_key=True, default=_new_id)
    credit_id = Column(Text, nullable=False, index=True)
    type = Column(Enum(TransactionType, name="transaction_type"), nullable=False)
    amount = Column(Numeric(18, 2), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
