"""Unit tests for transaction validators"""

from decimal import Decimal

import pytest

from credit_service.domain.exceptions import (
    CreditNotFound,
    InsufficientCredit,
    InvalidTransactionType,
    PaymentExceedsLimit,
    PaymentExceedsTotal,
    StaleBalanceError,
    UnsupportedAccountType,
)
from credit_service.domain.models import CreditType, CustomerType, SimpleCredit, Transaction, TransactionType
from credit_service.domain.validators import (
    CreditCardTransactionValidator,
    SimpleCreditTransactionValidator,
    ValidatorRegistry,
    build_validator_registry,
)


def _txn(credit_id: str, type_: TransactionType, amount: str) -> Transaction:
    return Transaction(credit_id=credit_id, type=type_, amount=Decimal(amount))


class TestCreditCardValidator:
    def test_spent_then_overspend_then_payments(self, credit_repo, credit_card):
        """limit 1000, available 500: SPENT 200 ok, SPENT 400 rejected, PAYMENT 800 rejected, PAYMENT 600 ok"""
        validator = CreditCardTransactionValidator(credit_repo)
        cid = credit_card.credit_id

        validator.validate(_txn(cid, TransactionType.SPENT, "200"))
        assert credit_repo.find_by_id(cid).available_credit == Decimal("300")

        with pytest.raises(InsufficientCredit):
            validator.validate(_txn(cid, TransactionType.SPENT, "400"))
        assert credit_repo.find_by_id(cid).available_credit == Decimal("300")

        with pytest.raises(PaymentExceedsLimit):
            validator.validate(_txn(cid, TransactionType.PAYMENT, "800"))
        assert credit_repo.find_by_id(cid).available_credit == Decimal("300")

        validator.validate(_txn(cid, TransactionType.PAYMENT, "600"))
        assert credit_repo.find_by_id(cid).available_credit == Decimal("900")

    def test_spending_exactly_the_available_credit(self, credit_repo, credit_card):
        validator = CreditCardTransactionValidator(credit_repo)

        for amount in ("100", "150", "250"):
            validator.validate(_txn(credit_card.credit_id, TransactionType.SPENT, amount))

        assert credit_repo.find_by_id(credit_card.credit_id).available_credit == Decimal("0")
        with pytest.raises(InsufficientCredit):
            validator.validate(_txn(credit_card.credit_id, TransactionType.SPENT, "0.01"))

    def test_payment_up_to_limit(self, credit_repo, credit_card):
        validator = CreditCardTransactionValidator(credit_repo)
        validator.validate(_txn(credit_card.credit_id, TransactionType.PAYMENT, "500"))
        assert credit_repo.find_by_id(credit_card.credit_id).available_credit == Decimal("1000")

    def test_returns_transaction(self, credit_repo, credit_card):
        txn = _txn(credit_card.credit_id, TransactionType.SPENT, "1")
        assert CreditCardTransactionValidator(credit_repo).validate(txn) is txn

    def test_unknown_credit(self, credit_repo):
        with pytest.raises(CreditNotFound):
            CreditCardTransactionValidator(credit_repo).validate(_txn("missing", TransactionType.SPENT, "1"))

    def test_write_is_conditional_on_read_balance(self, credit_repo, credit_card):
        """A concurrent settlement that moved the balance makes the stale write fail"""
        validator = CreditCardTransactionValidator(credit_repo)
        original_find = credit_repo.find_by_id

        def find_then_race(credit_id):
            credit = original_find(credit_id)
            credit_repo.update_available_credit(credit_id, Decimal("100"))
            return credit

        credit_repo.find_by_id = find_then_race

        with pytest.raises(StaleBalanceError):
            validator.validate(_txn(credit_card.credit_id, TransactionType.SPENT, "200"))
        assert original_find(credit_card.credit_id).available_credit == Decimal("100")


class TestSimpleCreditValidator:
    def test_payment_exceeding_total(self, credit_repo, simple_credit):
        """amount 1000, paid 800: PAYMENT 300 -> 1100 > 1000"""
        with pytest.raises(PaymentExceedsTotal):
            SimpleCreditTransactionValidator(credit_repo).validate(
                _txn(simple_credit.credit_id, TransactionType.PAYMENT, "300")
            )
        assert credit_repo.find_by_id(simple_credit.credit_id).amount_paid == Decimal("800")

    def test_fully_paid_rejects_every_further_payment(self, credit_repo, simple_credit):
        validator = SimpleCreditTransactionValidator(credit_repo)
        validator.validate(_txn(simple_credit.credit_id, TransactionType.PAYMENT, "200"))
        assert credit_repo.find_by_id(simple_credit.credit_id).amount_paid == Decimal("1000")

        for _ in range(2):
            with pytest.raises(PaymentExceedsTotal):
                validator.validate(_txn(simple_credit.credit_id, TransactionType.PAYMENT, "0.01"))

    def test_unset_amount_paid_counts_as_zero(self, credit_repo):
        credit = credit_repo.save(
            SimpleCredit(customer_id="x", customer_type=CustomerType.BUSINESS, amount=Decimal("100"))
        )
        SimpleCreditTransactionValidator(credit_repo).validate(_txn(credit.credit_id, TransactionType.PAYMENT, "40"))
        assert credit_repo.find_by_id(credit.credit_id).amount_paid == Decimal("40")

    def test_spent_not_allowed(self, credit_repo, simple_credit):
        with pytest.raises(InvalidTransactionType):
            SimpleCreditTransactionValidator(credit_repo).validate(
                _txn(simple_credit.credit_id, TransactionType.SPENT, "10")
            )

    def test_card_is_not_a_simple_credit(self, credit_repo, credit_card):
        with pytest.raises(CreditNotFound):
            SimpleCreditTransactionValidator(credit_repo).validate(
                _txn(credit_card.credit_id, TransactionType.PAYMENT, "10")
            )


def test_registry_dispatch(credit_repo):
    registry = build_validator_registry(credit_repo)
    assert isinstance(registry.resolve(CreditType.CREDIT_CARD), CreditCardTransactionValidator)
    assert isinstance(registry.resolve(CreditType.SIMPLE_CREDIT), SimpleCreditTransactionValidator)


def test_registry_unknown_type(credit_repo):
    registry = ValidatorRegistry({CreditType.CREDIT_CARD: CreditCardTransactionValidator(credit_repo)})
    with pytest.raises(UnsupportedAccountType):
        registry.resolve(CreditType.SIMPLE_CREDIT)
