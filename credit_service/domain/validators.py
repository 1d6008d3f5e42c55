"""
Transaction validators per credit type.

A validator checks a candidate transaction against the stored account and,
when it is acceptable, writes the account's new balance field. The write is a
compare-and-swap against the balance that was read; a concurrent change makes
the repository raise StaleBalanceError.
"""

from decimal import Decimal
from typing import Dict, Mapping, Protocol

from credit_service.domain.exceptions import (
    CreditNotFound,
    InsufficientCredit,
    InvalidTransactionType,
    PaymentExceedsLimit,
    PaymentExceedsTotal,
    UnsupportedAccountType,
)
from credit_service.domain.models import CreditCard, CreditType, SimpleCredit, Transaction, TransactionType
from credit_service.domain.ports import CreditRepository


class TransactionValidator(Protocol):
    def validate(self, transaction: Transaction) -> Transaction: ...


class CreditCardTransactionValidator:
    """SPENT draws on available credit, PAYMENT restores it up to the card limit"""

    def __init__(self, credit_repository: CreditRepository):
        self.credit_repository = credit_repository

    def validate(self, transaction: Transaction) -> Transaction:
        credit = self.credit_repository.find_by_id(transaction.credit_id)
        if credit is None or credit.type != CreditType.CREDIT_CARD:
            raise CreditNotFound(f"Credit card not found: {transaction.credit_id}")

        if transaction.type == TransactionType.SPENT:
            return self._validate_spent(transaction, credit)
        if transaction.type == TransactionType.PAYMENT:
            return self._validate_payment(transaction, credit)

        raise InvalidTransactionType(f"Invalid transaction type: {transaction.type}")

    def _validate_spent(self, transaction: Transaction, card: CreditCard) -> Transaction:
        available = _available_credit(card)
        new_available = available - transaction.amount

        if new_available < 0:
            raise InsufficientCredit(
                f"Insufficient available credit: {available} available, {transaction.amount} requested"
            )

        self.credit_repository.update_available_credit(card.credit_id, new_available, expected=card.available_credit)
        return transaction

    def _validate_payment(self, transaction: Transaction, card: CreditCard) -> Transaction:
        new_available = _available_credit(card) + transaction.amount

        if new_available > card.amount:
            raise PaymentExceedsLimit(f"Payment exceeds the credit limit of {card.amount}")

        self.credit_repository.update_available_credit(card.credit_id, new_available, expected=card.available_credit)
        return transaction


class SimpleCreditTransactionValidator:
    """Only payments are allowed, and never beyond the credit's total amount"""

    def __init__(self, credit_repository: CreditRepository):
        self.credit_repository = credit_repository

    def validate(self, transaction: Transaction) -> Transaction:
        if transaction.type != TransactionType.PAYMENT:
            raise InvalidTransactionType("Only PAYMENT transactions are allowed for a simple credit")

        credit = self.credit_repository.find_by_id(transaction.credit_id)
        if credit is None or credit.type != CreditType.SIMPLE_CREDIT:
            raise CreditNotFound(f"Credit not found or not a simple credit: {transaction.credit_id}")

        return self._apply_payment(transaction, credit)

    def _apply_payment(self, transaction: Transaction, credit: SimpleCredit) -> Transaction:
        amount_paid = credit.amount_paid if credit.amount_paid is not None else Decimal("0")
        new_amount_paid = amount_paid + transaction.amount

        if new_amount_paid > credit.amount:
            raise PaymentExceedsTotal(f"Payment exceeds the total credit amount of {credit.amount}")
        if amount_paid == credit.amount:
            raise PaymentExceedsTotal("Credit is already fully paid")

        self.credit_repository.update_amount_paid(credit.credit_id, new_amount_paid, expected=credit.amount_paid)
        return transaction


def _available_credit(card: CreditCard) -> Decimal:
    # Cards saved before the update strategy backfilled them count as unused
    return card.available_credit if card.available_credit is not None else card.amount


class ValidatorRegistry:
    """Lookup table from the stored account's credit type to its validator"""

    def __init__(self, validators: Mapping[CreditType, TransactionValidator]):
        self._validators: Dict[CreditType, TransactionValidator] = dict(validators)

    def resolve(self, credit_type: CreditType) -> TransactionValidator:
        try:
            return self._validators[credit_type]
        except KeyError:
            raise UnsupportedAccountType(f"Account type not supported: {credit_type}") from None


def build_validator_registry(credit_repository: CreditRepository) -> ValidatorRegistry:
    return ValidatorRegistry(
        {
            CreditType.CREDIT_CARD: CreditCardTransactionValidator(credit_repository),
            CreditType.SIMPLE_CREDIT: SimpleCreditTransactionValidator(credit_repository),
        }
    )
