"""Transaction settlement: validate, apply the balance change, record the transaction"""

import logging
from dataclasses import replace
from typing import List

from credit_service.domain.exceptions import (
    BalanceUpdateError,
    CreditNotFound,
    InvalidTransactionAmount,
    StorageError,
)
from credit_service.domain.models import Transaction
from credit_service.domain.ports import CreditRepository, TransactionRepository
from credit_service.domain.validators import ValidatorRegistry
from credit_service.utils.date_utils import utc_now

logger = logging.getLogger(__name__)


class TransactionOperationsService:
    def __init__(
        self,
        credit_repository: CreditRepository,
        transaction_repository: TransactionRepository,
        validators: ValidatorRegistry,
    ):
        self.credit_repository = credit_repository
        self.transaction_repository = transaction_repository
        self.validators = validators

    def create_transaction(self, transaction: Transaction) -> Transaction:
        """
        Settle a transaction against its credit account.

        Flow:
        1. Stamp the transaction date (client values are ignored)
        2. Load the referenced account
        3. Run the validator registered for the account's stored type,
           which writes the new balance
        4. Persist the transaction
        """
        if transaction.amount is None or transaction.amount <= 0:
            raise InvalidTransactionAmount("Transaction amount must be greater than zero")

        transaction = replace(transaction, transaction_id=None, date=utc_now())

        credit = self.credit_repository.find_by_id(transaction.credit_id)
        if credit is None:
            raise CreditNotFound(f"Credit not found: {transaction.credit_id}")

        validator = self.validators.resolve(credit.type)
        try:
            validated = validator.validate(transaction)
        except StorageError as e:
            # Storage failures on the balance write surface as a rejection
            logger.error(f"Balance update failed for credit {credit.credit_id}: {e}")
            raise BalanceUpdateError(f"Error updating the credit: {e}") from e

        return self.transaction_repository.save(validated)

    def get_transactions(self) -> List[Transaction]:
        return self.transaction_repository.find_all()

    def get_transactions_by_credit_id(self, credit_id: str) -> List[Transaction]:
        return self.transaction_repository.find_by_credit_id(credit_id)
