"""Repository contracts the domain depends on.

Services and validators only see these Protocols; the SQLAlchemy adapters in
infrastructure/database and the in-memory fakes in tests both satisfy them.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Protocol

from credit_service.domain.models import CreditAccount, Transaction


class CreditRepository(Protocol):
    def find_by_id(self, credit_id: str) -> Optional[CreditAccount]: ...

    def save(self, credit: CreditAccount) -> CreditAccount: ...

    def find_all(self) -> List[CreditAccount]: ...

    def find_by_customer_id(self, customer_id: str) -> List[CreditAccount]: ...

    def delete_by_id(self, credit_id: str) -> None: ...

    def update_available_credit(
        self, credit_id: str, value: Decimal, expected: Optional[Decimal] = None
    ) -> None:
        """Set available_credit; when `expected` is given, only if it still holds that value."""
        ...

    def update_amount_paid(
        self, credit_id: str, value: Decimal, expected: Optional[Decimal] = None
    ) -> None:
        """Set amount_paid; when `expected` is given, only if it still holds that value."""
        ...


class TransactionRepository(Protocol):
    def save(self, transaction: Transaction) -> Transaction: ...

    def find_all(self) -> List[Transaction]: ...

    def find_by_credit_id(self, credit_id: str) -> List[Transaction]: ...

    def find_by_credit_id_and_date_between(
        self, credit_id: str, start: date, end: date
    ) -> List[Transaction]:
        """Transactions dated on any calendar day from start to end, both inclusive."""
        ...
