"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from credit_service.domain.strategies import build_creation_registry, build_update_registry
from credit_service.domain.validators import build_validator_registry
from credit_service.infrastructure.database.repositories import CreditRepository, TransactionRepository
from credit_service.infrastructure.database.session import get_db
from credit_service.services.credit_operations import CreditOperationsService
from credit_service.services.reporting import ReportingService
from credit_service.services.transaction_operations import TransactionOperationsService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_credit_operations(db: Session = Depends(get_db)) -> CreditOperationsService:
    """Credit lifecycle service bound to the request's session"""
    credit_repo = CreditRepository(db)
    return CreditOperationsService(
        credit_repository=credit_repo,
        creation_strategies=build_creation_registry(credit_repo),
        update_strategies=build_update_registry(),
    )


def get_transaction_operations(db: Session = Depends(get_db)) -> TransactionOperationsService:
    credit_repo = CreditRepository(db)
    return TransactionOperationsService(
        credit_repository=credit_repo,
        transaction_repository=TransactionRepository(db),
        validators=build_validator_registry(credit_repo),
    )


def get_reporting(db: Session = Depends(get_db)) -> ReportingService:
    return ReportingService(CreditRepository(db), TransactionRepository(db))
