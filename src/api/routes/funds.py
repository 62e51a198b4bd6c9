"""
Company funds API routes (admin only)
"""

import logging
from fastapi import APIRouter, Depends

from models.funds import FundsDepositRequest, CompanyFundsResponse
from services.funds_service import FundsService
from utils.auth import AuthConfig, AuthContext

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("", response_model=CompanyFundsResponse)
async def get_company_funds(_: AuthContext = Depends(AuthConfig.get_admin_dependency())):
    funds = await FundsService.get_funds()
    return CompanyFundsResponse(**funds)

@router.post("/deposit", response_model=CompanyFundsResponse)
async def deposit_funds(
    request: FundsDepositRequest,
    _: AuthContext = Depends(AuthConfig.get_admin_dependency())
):
    """Top up the company funds balance"""
    funds = await FundsService.deposit(request.amount, request.note)
    return CompanyFundsResponse(**funds)
