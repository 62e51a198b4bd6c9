"""
Earnings API routes
"""

import logging
from fastapi import APIRouter, HTTPException, Depends

from models.salary import EarningsSummary
from services.auth_service import auth_service
from services.salary_service import SalaryService
from utils.auth import AuthConfig, AuthContext

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/earnings", response_model=EarningsSummary)
async def my_earnings(auth: AuthContext = Depends(AuthConfig.get_agent_dependency())):
    """Call earnings, salary paid and pending balance for the signed-in agent"""
    summary = await SalaryService.get_earnings(auth.agent_id)
    return EarningsSummary(**summary)

@router.get("/admin/agents/{agent_id}/earnings", response_model=EarningsSummary)
async def agent_earnings(
    agent_id: str,
    _: AuthContext = Depends(AuthConfig.get_admin_dependency())
):
    """Earnings summary for any agent"""
    if not auth_service.is_known_agent(agent_id):
        raise HTTPException(status_code=404, detail=f"Unknown agent: {agent_id}")

    summary = await SalaryService.get_earnings(agent_id)
    return EarningsSummary(**summary)
