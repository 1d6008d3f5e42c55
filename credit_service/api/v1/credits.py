"""/v1/credits - credit account lifecycle endpoints"""

from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from credit_service.api.dependencies import get_credit_operations, get_request_id
from credit_service.api.v1.schemas import (
    CreditSchema,
    HasCreditCardResponse,
    credit_from_schema,
    credit_to_schema,
)
from credit_service.infrastructure.database.session import commit_or_rollback, get_db
from credit_service.infrastructure.observability.logging import log_credit_event
from credit_service.infrastructure.observability.metrics import record_credit_created
from credit_service.services.credit_operations import CreditOperationsService

router = APIRouter()


@router.post("/credits", response_model=CreditSchema, status_code=status.HTTP_201_CREATED)
def create_credit(
    body: CreditSchema,
    request: Request,
    db: Session = Depends(get_db),
    service: CreditOperationsService = Depends(get_credit_operations),
):
    """
    Create a credit card or simple credit.

    The customer segment's strategy fills defaults (available_credit = amount,
    amount_paid = 0) and enforces one simple credit per personal customer.
    """
    with commit_or_rollback(db):
        credit = service.create_credit(credit_from_schema(body))

    record_credit_created(credit.type.value, credit.customer_type.value)
    log_credit_event(get_request_id(request), "created", credit.credit_id, credit.customer_id, credit.type.value)
    return credit_to_schema(credit)


@router.get("/credits", response_model=List[CreditSchema])
def get_all_credits(service: CreditOperationsService = Depends(get_credit_operations)):
    return [credit_to_schema(c) for c in service.get_all_credits()]


@router.get("/credits/customers/{customer_id}/has-credit-card", response_model=HasCreditCardResponse)
def has_credit_card(customer_id: str, service: CreditOperationsService = Depends(get_credit_operations)):
    return HasCreditCardResponse(customer_id=customer_id, has_credit_card=service.has_credit_card(customer_id))


@router.get("/credits/{credit_id}", response_model=CreditSchema)
def get_credit(credit_id: str, service: CreditOperationsService = Depends(get_credit_operations)):
    return credit_to_schema(service.get_by_credit_id(credit_id))


@router.put("/credits/{credit_id}", response_model=CreditSchema)
def update_credit(
    credit_id: str,
    body: CreditSchema,
    request: Request,
    db: Session = Depends(get_db),
    service: CreditOperationsService = Depends(get_credit_operations),
):
    """Replace a credit account; the path ID wins over any credit_id in the body"""
    with commit_or_rollback(db):
        credit = service.update_credit(credit_id, credit_from_schema(body))

    log_credit_event(get_request_id(request), "updated", credit.credit_id, credit.customer_id, credit.type.value)
    return credit_to_schema(credit)


@router.delete("/credits/{credit_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_credit(
    credit_id: str,
    request: Request,
    db: Session = Depends(get_db),
    service: CreditOperationsService = Depends(get_credit_operations),
):
    with commit_or_rollback(db):
        service.delete_credit(credit_id)

    log_credit_event(get_request_id(request), "deleted", credit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
