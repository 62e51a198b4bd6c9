"""
Login endpoints issuing session tokens for agents and the finance admin
"""

import logging
from fastapi import APIRouter, HTTPException, Depends

from models.auth import AgentLoginRequest, AdminLoginRequest, TokenResponse, IdentityResponse
from models.enums import Role
from services.auth_service import auth_service, generate_agent_token, generate_admin_token
from utils.auth import AuthConfig, AuthContext

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("/agent-login", response_model=TokenResponse)
async def agent_login(request: AgentLoginRequest):
    """Sign in as one of the configured agent codes"""
    if not auth_service.is_known_agent(request.agent_id):
        logger.warning(f"Agent login refused for unknown code: {request.agent_id}")
        raise HTTPException(status_code=401, detail="Unknown agent code")

    token = generate_agent_token(request.agent_id)
    logger.info(f"Agent logged in: {request.agent_id}")
    return TokenResponse(
        access_token=token,
        expires_in=auth_service.max_token_age,
        role=Role.AGENT,
        agent_id=request.agent_id
    )

@router.post("/admin-login", response_model=TokenResponse)
async def admin_login(request: AdminLoginRequest):
    """Sign in as the finance admin with the shared secret code"""
    if not auth_service.check_admin_code(request.secret_code):
        logger.warning("Admin login refused: invalid secret code")
        raise HTTPException(status_code=401, detail="Invalid secret code")

    token = generate_admin_token()
    logger.info("Admin logged in")
    return TokenResponse(
        access_token=token,
        expires_in=auth_service.max_token_age,
        role=Role.ADMIN
    )

@router.get("/me", response_model=IdentityResponse)
async def whoami(auth: AuthContext = Depends(AuthConfig.get_auth_dependency())):
    return IdentityResponse(role=auth.role, agent_id=auth.agent_id)
