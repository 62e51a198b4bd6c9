"""
Call entry API routes for agents
"""

import logging
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends

from models.call import (
    CallEntryCreate, CallOutcomeUpdate, CallEntryResponse,
    CallOutcomeUpdateResponse, DailyCallGroup
)
from services.calls_service import CallsService
from services.earnings import group_calls_by_day
from utils.auth import AuthConfig, AuthContext

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("", response_model=CallEntryResponse, status_code=201)
async def log_call(
    request: CallEntryCreate,
    auth: AuthContext = Depends(AuthConfig.get_agent_dependency())
):
    """Log a handled call for the signed-in agent"""
    entry = await CallsService.create_call(
        agent_id=auth.agent_id,
        client_name=request.client_name,
        client_phone=request.client_phone,
        notes=request.notes,
        outcome=request.outcome
    )
    return CallEntryResponse(**entry)

@router.get("", response_model=List[CallEntryResponse])
async def list_calls(auth: AuthContext = Depends(AuthConfig.get_agent_dependency())):
    """All calls for the signed-in agent, newest first"""
    entries = await CallsService.list_calls(auth.agent_id)
    return [CallEntryResponse(**entry) for entry in entries]

@router.get("/history", response_model=List[DailyCallGroup])
async def call_history(auth: AuthContext = Depends(AuthConfig.get_agent_dependency())):
    """Calls grouped by day with the daily success ratio"""
    entries = await CallsService.list_calls(auth.agent_id)
    return [DailyCallGroup(**group) for group in group_calls_by_day(entries)]

@router.patch("/{entry_id}", response_model=CallOutcomeUpdateResponse)
async def update_call_outcome(
    entry_id: UUID,
    request: CallOutcomeUpdate,
    auth: AuthContext = Depends(AuthConfig.get_agent_dependency())
):
    """Change the outcome of a call that is not yet Resolved"""
    entry, changed, first_edit = await CallsService.update_outcome(
        auth.agent_id, entry_id, request.outcome
    )
    return CallOutcomeUpdateResponse(
        entry=CallEntryResponse(**entry),
        changed=changed,
        first_edit=first_edit
    )
