"""
Authentication utilities for API endpoints
"""

import logging
from typing import Optional
from fastapi import HTTPException, Header, Depends
from dataclasses import dataclass
import jwt

from models.enums import Role
from services.auth_service import validate_access_token

logger = logging.getLogger(__name__)

@dataclass
class AuthContext:
    """Identity resolved from a bearer token"""
    is_authenticated: bool
    role: Role
    agent_id: Optional[str] = None


async def authenticate_api(authorization: Optional[str] = Header(None)) -> AuthContext:
    """
    FastAPI dependency for JWT Bearer token authentication.

    Args:
        authorization: Authorization header with Bearer JWT token

    Returns:
        AuthContext: Authentication context with role information

    Raises:
        HTTPException: 401 if authentication fails
    """
    if not authorization:
        logger.error("AUTH: API request missing Authorization header - returning 401")
        raise HTTPException(
            status_code=401,
            detail="Missing Authorization header"
        )

    if not authorization.startswith("Bearer "):
        logger.error("AUTH: Invalid Authorization header format - returning 401")
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format. Expected 'Bearer <token>'"
        )

    token = authorization[7:]  # Remove "Bearer " prefix

    try:
        payload = validate_access_token(token)
    except jwt.InvalidTokenError as e:
        logger.error(f"AUTH: Invalid JWT token: {str(e)}")
        raise HTTPException(401, "Invalid JWT token")

    role = Role(payload["role"])
    return AuthContext(
        is_authenticated=True,
        role=role,
        agent_id=payload["sub"] if role == Role.AGENT else None
    )


async def require_agent(auth: AuthContext = Depends(authenticate_api)) -> AuthContext:
    """Dependency for endpoints only an agent may call"""
    if auth.role != Role.AGENT:
        logger.warning(f"AUTH: {auth.role.value} attempted agent-only endpoint")
        raise HTTPException(403, "Agent access required")
    return auth


async def require_admin(auth: AuthContext = Depends(authenticate_api)) -> AuthContext:
    """Dependency for endpoints only the finance admin may call"""
    if auth.role != Role.ADMIN:
        logger.warning(f"AUTH: agent {auth.agent_id} attempted admin-only endpoint")
        raise HTTPException(403, "Admin access required")
    return auth


class AuthConfig:
    """
    Centralized authentication configuration for the application.
    """

    @staticmethod
    def get_auth_dependency():
        """Any authenticated identity"""
        return authenticate_api

    @staticmethod
    def get_agent_dependency():
        return require_agent

    @staticmethod
    def get_admin_dependency():
        return require_admin
