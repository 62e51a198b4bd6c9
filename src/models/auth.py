"""
Login request/response models
"""

from typing import Optional
from pydantic import BaseModel, Field
from models.enums import Role

class AgentLoginRequest(BaseModel):
    agent_id: str = Field(..., min_length=1)

class AdminLoginRequest(BaseModel):
    secret_code: str = Field(..., min_length=1)

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    role: Role
    agent_id: Optional[str] = None

class IdentityResponse(BaseModel):
    role: Role
    agent_id: Optional[str] = None
