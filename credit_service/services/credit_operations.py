"""Credit account lifecycle: create, update, read, delete"""

import logging
from dataclasses import replace
from typing import List

from credit_service.domain.exceptions import CreditNotFound, CreditTypeChange, MissingCustomerType
from credit_service.domain.models import CreditAccount, CreditType
from credit_service.domain.ports import CreditRepository
from credit_service.domain.strategies import (
    CreditCreationStrategy,
    CreditUpdateStrategy,
    StrategyRegistry,
)

logger = logging.getLogger(__name__)


class CreditOperationsService:
    """
    Orchestrates strategy dispatch and persistence for credit accounts.

    Strategy registries are handed in by the caller so the same service runs
    against any segment table.
    """

    def __init__(
        self,
        credit_repository: CreditRepository,
        creation_strategies: StrategyRegistry[CreditCreationStrategy],
        update_strategies: StrategyRegistry[CreditUpdateStrategy],
    ):
        self.credit_repository = credit_repository
        self.creation_strategies = creation_strategies
        self.update_strategies = update_strategies

    def create_credit(self, credit: CreditAccount) -> CreditAccount:
        if credit.customer_type is None:
            raise MissingCustomerType("Customer type cannot be null")

        strategy = self.creation_strategies.resolve(credit.customer_type)
        # credit_id is always server generated
        normalized = strategy.create_credit(replace(credit, credit_id=None))
        saved = self.credit_repository.save(normalized)

        logger.info(
            "Credit created",
            extra={"credit_id": saved.credit_id, "credit_type": saved.type.value, "customer_id": saved.customer_id},
        )
        return saved

    def update_credit(self, credit_id: str, credit: CreditAccount) -> CreditAccount:
        """Replace the stored account with the normalized incoming one"""
        stored = self.credit_repository.find_by_id(credit_id)
        if stored is None:
            raise CreditNotFound(f"No credit exists with ID: {credit_id}")
        if credit.customer_type is None:
            raise MissingCustomerType("Customer type cannot be null")
        if credit.type != stored.type:
            raise CreditTypeChange(
                f"Credit {credit_id} is a {stored.type.value} and cannot become a {credit.type.value}"
            )

        strategy = self.update_strategies.resolve(credit.customer_type)
        normalized = strategy.update_credit(replace(credit, credit_id=credit_id))
        return self.credit_repository.save(normalized)

    def get_by_credit_id(self, credit_id: str) -> CreditAccount:
        credit = self.credit_repository.find_by_id(credit_id)
        if credit is None:
            raise CreditNotFound(f"No credit exists with ID: {credit_id}")
        return credit

    def get_all_credits(self) -> List[CreditAccount]:
        return self.credit_repository.find_all()

    def delete_credit(self, credit_id: str) -> None:
        """Delete the account; its transactions are kept"""
        if self.credit_repository.find_by_id(credit_id) is None:
            raise CreditNotFound(f"Credit with id {credit_id} not found")
        self.credit_repository.delete_by_id(credit_id)

    def has_credit_card(self, customer_id: str) -> bool:
        return any(
            c.type == CreditType.CREDIT_CARD for c in self.credit_repository.find_by_customer_id(customer_id)
        )
