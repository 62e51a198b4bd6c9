"""
Company funds Pydantic models
"""

from typing import Optional
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

class FundsDepositRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=14, decimal_places=2)
    note: Optional[str] = None

class CompanyFundsResponse(BaseModel):
    balance: float
    floor: float
    updated_at: datetime
