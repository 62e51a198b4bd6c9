"""
Salary payment API routes - admin ledger operations and the agent salary log
"""

import logging
from typing import List
from uuid import UUID
from fastapi import APIRouter, HTTPException, Depends

from models.salary import SalaryPaymentCreate, SalaryPaymentResponse, CreditPaymentResponse
from services.auth_service import auth_service
from services.salary_service import SalaryService
from utils.auth import AuthConfig, AuthContext

router = APIRouter()
logger = logging.getLogger(__name__)

def _ensure_known_agent(agent_id: str):
    if not auth_service.is_known_agent(agent_id):
        raise HTTPException(status_code=404, detail=f"Unknown agent: {agent_id}")

@router.get("/salary/payments", response_model=List[SalaryPaymentResponse])
async def my_payments(auth: AuthContext = Depends(AuthConfig.get_agent_dependency())):
    """Salary log for the signed-in agent, newest first"""
    payments = await SalaryService.list_payments(auth.agent_id)
    return [SalaryPaymentResponse(**payment) for payment in payments]

@router.post("/admin/salary", response_model=SalaryPaymentResponse, status_code=201)
async def issue_salary(
    request: SalaryPaymentCreate,
    _: AuthContext = Depends(AuthConfig.get_admin_dependency())
):
    """Issue a payment, or settle the agent's pending balance"""
    payment = await SalaryService.issue_payment(
        agent_id=request.agent_id,
        purpose=request.purpose,
        amount=request.amount,
        settle_account=request.settle_account
    )
    return SalaryPaymentResponse(**payment)

@router.get("/admin/salary/{agent_id}/payments", response_model=List[SalaryPaymentResponse])
async def agent_payments(
    agent_id: str,
    _: AuthContext = Depends(AuthConfig.get_admin_dependency())
):
    """Payment history for an agent, newest first"""
    _ensure_known_agent(agent_id)
    payments = await SalaryService.list_payments(agent_id)
    return [SalaryPaymentResponse(**payment) for payment in payments]

@router.post("/admin/salary/{agent_id}/payments/{payment_id}/credit", response_model=CreditPaymentResponse)
async def credit_payment(
    agent_id: str,
    payment_id: UUID,
    _: AuthContext = Depends(AuthConfig.get_admin_dependency())
):
    """Mark a payment as Credited and deduct it from company funds"""
    _ensure_known_agent(agent_id)
    payment, balance = await SalaryService.credit_payment(agent_id, payment_id)
    return CreditPaymentResponse(
        payment=SalaryPaymentResponse(**payment),
        company_funds=balance
    )

@router.post("/admin/salary/{agent_id}/payments/{payment_id}/cancel", response_model=SalaryPaymentResponse)
async def cancel_payment(
    agent_id: str,
    payment_id: UUID,
    _: AuthContext = Depends(AuthConfig.get_admin_dependency())
):
    """Cancel a payment that has not been credited"""
    _ensure_known_agent(agent_id)
    payment = await SalaryService.cancel_payment(agent_id, payment_id)
    return SalaryPaymentResponse(**payment)
