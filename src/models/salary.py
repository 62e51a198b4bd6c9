"""
Salary payment and earnings Pydantic models
"""

from typing import Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID
from pydantic import BaseModel, Field, field_validator, model_validator

from config.settings import AGENT_CODES
from models.enums import PaymentStatus

SETTLEMENT_PURPOSE = "Account Settlement"

class SalaryPaymentCreate(BaseModel):
    agent_id: str
    amount: Optional[Decimal] = Field(
        None, gt=0, max_digits=12, decimal_places=2,
        description="Required unless settling the account"
    )
    purpose: str = Field(..., min_length=3, description="Purpose must be at least 3 characters long")
    settle_account: bool = False

    @field_validator("agent_id")
    @classmethod
    def agent_must_be_known(cls, value: str) -> str:
        if value not in AGENT_CODES:
            raise ValueError(f"Unknown agent code: {value}")
        return value

    @model_validator(mode="after")
    def amount_required_unless_settling(self):
        if not self.settle_account and self.amount is None:
            raise ValueError("Amount is required unless you are settling the account")
        return self

class SalaryPaymentResponse(BaseModel):
    payment_id: UUID
    agent_id: str
    amount: float
    purpose: str
    status: PaymentStatus
    date: datetime
    credited_at: Optional[datetime] = None

class CreditPaymentResponse(BaseModel):
    payment: SalaryPaymentResponse
    company_funds: float

class EarningsSummary(BaseModel):
    agent_id: str
    call_count: int
    call_rate: float
    total_earnings: float
    total_paid: float
    pending_balance: float
