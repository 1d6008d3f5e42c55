"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from credit_service.domain.models import (
    CreditAccount,
    CreditCard,
    CreditResume,
    CreditType,
    CustomerType,
    SimpleCredit,
    Transaction,
    TransactionReport,
    TransactionType,
)


def to_decimal(value: Optional[float]) -> Optional[Decimal]:
    """JSON numbers arrive as floats; go through str so 0.1 stays 0.1"""
    return Decimal(str(value)) if value is not None else None


class CreditCardSchema(BaseModel):
    """Credit card account"""

    type: Literal["CREDIT_CARD"] = "CREDIT_CARD"
    credit_id: Optional[str] = None
    customer_id: str = Field(..., min_length=1)
    customer_type: Optional[CustomerType] = None
    amount: float = Field(..., gt=0, description="Credit limit")
    card_number: Optional[str] = None
    available_credit: Optional[float] = Field(None, ge=0)


class SimpleCreditSchema(BaseModel):
    """Simple installment credit"""

    type: Literal["SIMPLE_CREDIT"] = "SIMPLE_CREDIT"
    credit_id: Optional[str] = None
    customer_id: str = Field(..., min_length=1)
    customer_type: Optional[CustomerType] = None
    amount: float = Field(..., gt=0, description="Total amount lent")
    amount_paid: Optional[float] = Field(None, ge=0)


CreditSchema = Annotated[Union[CreditCardSchema, SimpleCreditSchema], Field(discriminator="type")]


def credit_from_schema(body: Union[CreditCardSchema, SimpleCreditSchema]) -> CreditAccount:
    if body.type == CreditType.CREDIT_CARD.value:
        return CreditCard(
            credit_id=body.credit_id,
            customer_id=body.customer_id,
            customer_type=body.customer_type,
            amount=to_decimal(body.amount),
            card_number=body.card_number,
            available_credit=to_decimal(body.available_credit),
        )
    return SimpleCredit(
        credit_id=body.credit_id,
        customer_id=body.customer_id,
        customer_type=body.customer_type,
        amount=to_decimal(body.amount),
        amount_paid=to_decimal(body.amount_paid),
    )


def credit_to_schema(credit: CreditAccount) -> Union[CreditCardSchema, SimpleCreditSchema]:
    if credit.type == CreditType.CREDIT_CARD:
        return CreditCardSchema(
            credit_id=credit.credit_id,
            customer_id=credit.customer_id,
            customer_type=credit.customer_type,
            amount=credit.amount,
            card_number=credit.card_number,
            available_credit=credit.available_credit,
        )
    return SimpleCreditSchema(
        credit_id=credit.credit_id,
        customer_id=credit.customer_id,
        customer_type=credit.customer_type,
        amount=credit.amount,
        amount_paid=credit.amount_paid,
    )


class HasCreditCardResponse(BaseModel):
    customer_id: str
    has_credit_card: bool


class TransactionRequest(BaseModel):
    """Request body for POST /v1/credits/transactions; the date is stamped by the server"""

    credit_id: str = Field(..., min_length=1)
    type: TransactionType
    amount: float = Field(..., gt=0)


class TransactionSchema(BaseModel):
    transaction_id: str
    credit_id: str
    type: TransactionType
    amount: float
    date: datetime

    @classmethod
    def from_domain(cls, transaction: Transaction) -> "TransactionSchema":
        return cls(
            transaction_id=transaction.transaction_id,
            credit_id=transaction.credit_id,
            type=transaction.type,
            amount=transaction.amount,
            date=transaction.date,
        )


class CreditResumeSchema(BaseModel):
    credit_id: str
    type: CreditType
    average_balance: float

    @classmethod
    def from_domain(cls, resume: CreditResume) -> "CreditResumeSchema":
        return cls(credit_id=resume.credit_id, type=resume.type, average_balance=resume.average_balance)


class CustomerBalanceResponse(BaseModel):
    """Response for GET /v1/reporting/average-balance/{customer_id}"""

    customer_id: str
    credit_resumes: List[CreditResumeSchema]


class PeriodBalanceRequest(BaseModel):
    """Request body for POST /v1/reporting/average-balance-for-period"""

    credit_id: str = Field(..., min_length=1)
    start_date: date
    end_date: date


class PeriodBalanceResponse(BaseModel):
    credit_id: str
    credit_resume: CreditResumeSchema


class TransactionReportResponse(BaseModel):
    """Response for GET /v1/reporting/{credit_id}/transactions"""

    credit_id: str
    card_number: Optional[str] = None
    transactions: List[TransactionSchema]
    transaction_count: int
    generated_at: datetime

    @classmethod
    def from_domain(cls, report: TransactionReport) -> "TransactionReportResponse":
        return cls(
            credit_id=report.credit_id,
            card_number=report.card_number,
            transactions=[TransactionSchema.from_domain(t) for t in report.transactions],
            transaction_count=report.transaction_count,
            generated_at=report.generated_at,
        )
