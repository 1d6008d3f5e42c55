"""Creation and update strategies per customer segment"""

from dataclasses import replace
from decimal import Decimal
from typing import Dict, Generic, Mapping, Protocol, TypeVar

from credit_service.domain.exceptions import (
    DuplicateActiveCredit,
    InvalidBalance,
    InvalidSegment,
    UnsupportedCreditType,
    UnsupportedCustomerType,
)
from credit_service.domain.models import (
    CreditAccount,
    CreditCard,
    CreditType,
    CustomerType,
    SimpleCredit,
)
from credit_service.domain.ports import CreditRepository


class CreditCreationStrategy(Protocol):
    def create_credit(self, credit: CreditAccount) -> CreditAccount: ...


class CreditUpdateStrategy(Protocol):
    def update_credit(self, credit: CreditAccount) -> CreditAccount: ...


def _check_segment(credit: CreditAccount, segment: CustomerType) -> None:
    if credit.customer_type != segment:
        raise InvalidSegment(f"This strategy only applies to {segment.value} customers")


def _default_available_credit(card: CreditCard) -> CreditCard:
    if card.available_credit is None:
        return replace(card, available_credit=card.amount)
    return card


def _default_amount_paid(credit: SimpleCredit) -> SimpleCredit:
    if credit.amount_paid is None:
        return replace(credit, amount_paid=Decimal("0"))
    return credit


def _check_balance(credit: CreditAccount) -> CreditAccount:
    """Card available_credit and simple credit amount_paid must lie in [0, amount]"""
    if credit.type == CreditType.CREDIT_CARD:
        field, value = "available_credit", credit.available_credit
    else:
        field, value = "amount_paid", credit.amount_paid

    if value is not None and not (0 <= value <= credit.amount):
        raise InvalidBalance(f"{field} must be between 0 and {credit.amount}, got {value}")
    return credit


class PersonalCreditCreationStrategy:
    """Personal customers may hold at most one simple credit"""

    def __init__(self, credit_repository: CreditRepository):
        self.credit_repository = credit_repository

    def create_credit(self, credit: CreditAccount) -> CreditAccount:
        _check_segment(credit, CustomerType.PERSONAL)

        if credit.type == CreditType.CREDIT_CARD:
            return _check_balance(_default_available_credit(credit))

        if credit.type == CreditType.SIMPLE_CREDIT:
            existing = [
                c
                for c in self.credit_repository.find_by_customer_id(credit.customer_id)
                if c.type == CreditType.SIMPLE_CREDIT
            ]
            if existing:
                raise DuplicateActiveCredit(
                    f"Personal customer {credit.customer_id} already has an active simple credit"
                )
            return _check_balance(_default_amount_paid(credit))

        raise UnsupportedCreditType(f"Credit type not supported for personal customers: {credit.type}")


class BusinessCreditCreationStrategy:
    """Business customers have no limit on the number of credits"""

    def create_credit(self, credit: CreditAccount) -> CreditAccount:
        _check_segment(credit, CustomerType.BUSINESS)

        if credit.type == CreditType.CREDIT_CARD:
            return _check_balance(_default_available_credit(credit))
        if credit.type == CreditType.SIMPLE_CREDIT:
            return _check_balance(_default_amount_paid(credit))

        raise UnsupportedCreditType(f"Credit type not supported for business customers: {credit.type}")


class _SegmentUpdateStrategy:
    """
    Shared update rules: card balances are backfilled only when unset,
    simple credits pass through untouched (amount_paid only moves through
    settlement).
    """

    segment: CustomerType

    def update_credit(self, credit: CreditAccount) -> CreditAccount:
        _check_segment(credit, self.segment)

        if credit.type == CreditType.CREDIT_CARD:
            return _check_balance(_default_available_credit(credit))
        if credit.type == CreditType.SIMPLE_CREDIT:
            return _check_balance(credit)

        raise UnsupportedCreditType(
            f"Credit type not supported for {self.segment.value.lower()} customers: {credit.type}"
        )


class PersonalCreditUpdateStrategy(_SegmentUpdateStrategy):
    segment = CustomerType.PERSONAL


class BusinessCreditUpdateStrategy(_SegmentUpdateStrategy):
    segment = CustomerType.BUSINESS


S = TypeVar("S")


class StrategyRegistry(Generic[S]):
    """Lookup table from customer segment to strategy"""

    def __init__(self, strategies: Mapping[CustomerType, S]):
        self._strategies: Dict[CustomerType, S] = dict(strategies)

    def resolve(self, customer_type: CustomerType) -> S:
        try:
            return self._strategies[customer_type]
        except KeyError:
            raise UnsupportedCustomerType(f"Customer type not supported: {customer_type}") from None


def build_creation_registry(credit_repository: CreditRepository) -> StrategyRegistry[CreditCreationStrategy]:
    return StrategyRegistry(
        {
            CustomerType.PERSONAL: PersonalCreditCreationStrategy(credit_repository),
            CustomerType.BUSINESS: BusinessCreditCreationStrategy(),
        }
    )


def build_update_registry() -> StrategyRegistry[CreditUpdateStrategy]:
    return StrategyRegistry(
        {
            CustomerType.PERSONAL: PersonalCreditUpdateStrategy(),
            CustomerType.BUSINESS: BusinessCreditUpdateStrategy(),
        }
    )
