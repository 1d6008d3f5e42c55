"""Average balance and recent activity reports"""

import logging
from datetime import date
from typing import List, Optional

from credit_service.config import settings
from credit_service.domain.balance import calculate_average_balance
from credit_service.domain.exceptions import (
    CreditNotFound,
    DomainException,
    InvalidReportPeriod,
    ReportGenerationError,
)
from credit_service.domain.models import CreditAccount, CreditResume, CreditType, TransactionReport
from credit_service.domain.ports import CreditRepository, TransactionRepository
from credit_service.utils.date_utils import month_bounds, utc_now

logger = logging.getLogger(__name__)


class ReportingService:
    def __init__(
        self,
        credit_repository: CreditRepository,
        transaction_repository: TransactionRepository,
        recent_limit: Optional[int] = None,
    ):
        self.credit_repository = credit_repository
        self.transaction_repository = transaction_repository
        self.recent_limit = recent_limit or settings.recent_transactions_limit

    def average_balance_for_period(self, credit_id: str, start: date, end: date) -> CreditResume:
        """
        Average daily balance of one account over [start, end].

        Raises:
            ReportGenerationError: wrapping the cause (unknown account, bad period, storage)
        """
        try:
            if start > end:
                raise InvalidReportPeriod(f"Start date {start} is after end date {end}")

            credit = self.credit_repository.find_by_id(credit_id)
            if credit is None:
                raise CreditNotFound(f"No credit found with ID: {credit_id}")

            return self._resume(credit, start, end)

        except DomainException as e:
            logger.error(f"Error generating average balance for credit {credit_id}: {e}")
            raise ReportGenerationError(f"Error obtaining the credit summary: {e}") from e

    def average_balance_for_customer(self, customer_id: str, today: Optional[date] = None) -> List[CreditResume]:
        """Average daily balance of every account of a customer over the current month"""
        start, end = month_bounds(today or utc_now().date())

        try:
            credits = self.credit_repository.find_by_customer_id(customer_id)
            if not credits:
                raise CreditNotFound(f"No credits found for customer ID: {customer_id}")

            return [self._resume(credit, start, end) for credit in credits]

        except DomainException as e:
            logger.error(f"Error generating average balance for customer {customer_id}: {e}")
            raise ReportGenerationError(f"Error obtaining the customer's credits: {e}") from e

    def last_ten_transactions(self, credit_id: str) -> TransactionReport:
        """Most recent transactions of an account, newest first"""
        credit = self.credit_repository.find_by_id(credit_id)
        if credit is None:
            raise CreditNotFound(f"Credit {credit_id} does not exist")

        transactions = sorted(
            self.transaction_repository.find_by_credit_id(credit_id),
            key=lambda t: t.date,
            reverse=True,
        )[: self.recent_limit]

        return TransactionReport(
            credit_id=credit_id,
            card_number=credit.card_number if credit.type == CreditType.CREDIT_CARD else None,
            transactions=transactions,
            transaction_count=len(transactions),
            generated_at=utc_now(),
        )

    def _resume(self, credit: CreditAccount, start: date, end: date) -> CreditResume:
        transactions = self.transaction_repository.find_by_credit_id_and_date_between(credit.credit_id, start, end)
        average = calculate_average_balance(credit.amount, transactions, start, end)
        return CreditResume(credit_id=credit.credit_id, type=credit.type, average_balance=average)
