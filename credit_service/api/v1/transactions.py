"""/v1/credits/transactions - transaction settlement endpoints"""

import time
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from credit_service.api.dependencies import get_request_id, get_transaction_operations
from credit_service.api.v1.schemas import TransactionRequest, TransactionSchema, to_decimal
from credit_service.domain.exceptions import StorageError, ValidationError
from credit_service.domain.models import Transaction
from credit_service.infrastructure.database.session import commit_or_rollback, get_db
from credit_service.infrastructure.observability.logging import log_settlement
from credit_service.infrastructure.observability.metrics import record_settlement
from credit_service.services.transaction_operations import TransactionOperationsService

router = APIRouter()


@router.post("/credits/transactions", response_model=TransactionSchema, status_code=status.HTTP_201_CREATED)
def create_transaction(
    body: TransactionRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: TransactionOperationsService = Depends(get_transaction_operations),
):
    """
    Post a SPENT or PAYMENT transaction against a credit account.

    The balance change and the transaction row are committed together; a
    rejected transaction leaves the account untouched.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    amount = to_decimal(body.amount)
    outcome, reason = "error", None

    try:
        with commit_or_rollback(db):
            transaction = service.create_transaction(
                Transaction(credit_id=body.credit_id, type=body.type, amount=amount)
            )
        outcome = "accepted"
    except ValidationError as e:
        outcome, reason = "rejected", type(e).__name__
        raise
    except StorageError as e:
        reason = type(e).__name__
        raise
    finally:
        record_settlement(body.type.value, outcome)
        log_settlement(
            request_id,
            body.credit_id,
            body.type.value,
            str(amount),
            outcome,
            (time.time() - start_time) * 1000,
            reason,
        )

    return TransactionSchema.from_domain(transaction)


@router.get("/credits/transactions", response_model=List[TransactionSchema])
def get_all_transactions(service: TransactionOperationsService = Depends(get_transaction_operations)):
    return [TransactionSchema.from_domain(t) for t in service.get_transactions()]


@router.get("/credits/{credit_id}/transactions", response_model=List[TransactionSchema])
def get_transactions_by_credit_id(
    credit_id: str,
    service: TransactionOperationsService = Depends(get_transaction_operations),
):
    return [TransactionSchema.from_domain(t) for t in service.get_transactions_by_credit_id(credit_id)]
