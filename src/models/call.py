"""
Call entry Pydantic models
"""

from typing import List
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field
from models.enums import CallOutcome

class CallEntryCreate(BaseModel):
    client_name: str = Field(..., min_length=1, description="Client name is required")
    client_phone: str = Field(..., min_length=1, description="Client phone is required")
    notes: str = Field(..., min_length=1, description="Notes are required")
    outcome: CallOutcome = CallOutcome.RESOLVED

class CallOutcomeUpdate(BaseModel):
    outcome: CallOutcome

class CallEntryResponse(BaseModel):
    entry_id: UUID
    agent_id: str
    call_number: int
    client_name: str
    client_phone: str
    notes: str
    outcome: CallOutcome
    edited: bool
    created_at: datetime

class CallOutcomeUpdateResponse(BaseModel):
    entry: CallEntryResponse
    changed: bool
    first_edit: bool

class DailyCall(CallEntryResponse):
    daily_number: int

class DailyCallGroup(BaseModel):
    """Calls handled on a single calendar day"""
    date: str
    total_calls: int
    success_ratio: float = Field(..., description="(Escalated + Follow-up Required) / total calls, as a percentage")
    calls: List[DailyCall]
