"""/v1/reporting - average balance and recent activity reports"""

from fastapi import APIRouter, Depends

from credit_service.api.dependencies import get_reporting
from credit_service.api.v1.schemas import (
    CreditResumeSchema,
    CustomerBalanceResponse,
    PeriodBalanceRequest,
    PeriodBalanceResponse,
    TransactionReportResponse,
)
from credit_service.services.reporting import ReportingService

router = APIRouter()


@router.get("/reporting/average-balance/{customer_id}", response_model=CustomerBalanceResponse)
def get_average_balance_for_customer(customer_id: str, service: ReportingService = Depends(get_reporting)):
    """Average daily balance of each of the customer's credits for the current month"""
    resumes = service.average_balance_for_customer(customer_id)
    return CustomerBalanceResponse(
        customer_id=customer_id,
        credit_resumes=[CreditResumeSchema.from_domain(r) for r in resumes],
    )


@router.post("/reporting/average-balance-for-period", response_model=PeriodBalanceResponse)
def get_average_balance_for_period(body: PeriodBalanceRequest, service: ReportingService = Depends(get_reporting)):
    resume = service.average_balance_for_period(body.credit_id, body.start_date, body.end_date)
    return PeriodBalanceResponse(credit_id=body.credit_id, credit_resume=CreditResumeSchema.from_domain(resume))


@router.get("/reporting/{credit_id}/transactions", response_model=TransactionReportResponse)
def get_last_ten_transactions(credit_id: str, service: ReportingService = Depends(get_reporting)):
    """Last ten transactions of a credit, newest first"""
    return TransactionReportResponse.from_domain(service.last_ten_transactions(credit_id))
