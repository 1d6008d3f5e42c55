"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import ClassVar, List, Optional


class CustomerType(str, Enum):
    PERSONAL = "PERSONAL"
    BUSINESS = "BUSINESS"


class CreditType(str, Enum):
    CREDIT_CARD = "CREDIT_CARD"
    SIMPLE_CREDIT = "SIMPLE_CREDIT"


class TransactionType(str, Enum):
    SPENT = "SPENT"
    PAYMENT = "PAYMENT"


@dataclass
class CreditAccount:
    """
    Base of the credit account union.

    Concrete accounts are CreditCard or SimpleCredit; `type` is fixed per
    subclass and is the only thing dispatch looks at.
    """

    customer_id: str
    customer_type: Optional[CustomerType]
    amount: Decimal
    credit_id: Optional[str] = None

    type: ClassVar[CreditType]


@dataclass
class CreditCard(CreditAccount):
    """Revolving credit line: spending lowers available_credit, payments restore it"""

    card_number: Optional[str] = None
    available_credit: Optional[Decimal] = None

    type: ClassVar[CreditType] = CreditType.CREDIT_CARD


@dataclass
class SimpleCredit(CreditAccount):
    """Installment credit repaid through payments"""

    amount_paid: Optional[Decimal] = None

    type: ClassVar[CreditType] = CreditType.SIMPLE_CREDIT


@dataclass
class Transaction:
    """Immutable ledger entry posted against a credit account"""

    credit_id: str
    type: TransactionType
    amount: Decimal
    transaction_id: Optional[str] = None
    date: Optional[datetime] = None


@dataclass
class CreditResume:
    """Average balance of one credit account over a period"""

    credit_id: str
    type: CreditType
    average_balance: Decimal


@dataclass
class TransactionReport:
    """Most recent activity of a credit account"""

    credit_id: str
    card_number: Optional[str]
    transactions: List[Transaction] = field(default_factory=list)
    transaction_count: int = 0
    generated_at: Optional[datetime] = None
