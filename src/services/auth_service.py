"""
Environment-isolated JWT service for agent and admin session tokens
Prevents cross-environment token reuse through environment-specific signing and validation
"""

import hmac
import jwt
import time
import logging
from typing import Dict, Any, Optional

from config.settings import JWTEnvironmentConfig, ENV, AGENT_CODES, ADMIN_SECRET_CODE
from models.enums import Role

logger = logging.getLogger(__name__)

ADMIN_SUBJECT = "admin"

class AuthService:
    """Environment-isolated service for issuing and validating session JWTs"""

    def __init__(self):
        self.jwt_config = JWTEnvironmentConfig.get_config()
        self.secret_key = self.jwt_config["secret"]
        self.algorithm = self.jwt_config["allowed_algorithms"][0]  # Use first allowed algorithm
        self.issuer = self.jwt_config["issuer"]
        self.audience = self.jwt_config["audience"]
        self.max_token_age = self.jwt_config["max_token_age"]

    def is_known_agent(self, agent_id: Optional[str]) -> bool:
        return agent_id in AGENT_CODES

    def check_admin_code(self, secret_code: str) -> bool:
        """Constant-time comparison against the configured admin code"""
        return hmac.compare_digest(secret_code.encode("utf-8"), ADMIN_SECRET_CODE.encode("utf-8"))

    def generate_access_token(self, role: Role, subject: str) -> str:
        """
        Generate a session token

        Args:
            role: agent or admin
            subject: agent code for agents, "admin" for the admin

        Returns:
            JWT token string

        Raises:
            ValueError: If the subject is not a configured agent code
        """
        role = Role(role)
        if role == Role.AGENT and not self.is_known_agent(subject):
            raise ValueError(f"Unknown agent code: {subject}")

        current_time = int(time.time())
        payload = {
            "iss": self.issuer,
            "sub": subject,
            "aud": self.audience,
            "role": role.value,
            "environment": ENV,
            "iat": current_time,
            "exp": current_time + self.max_token_age
        }

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

        logger.info(f"Generated {role.value} access token for {subject}")
        return token

    def validate_and_decode_jwt(self, token: str) -> Dict[str, Any]:
        """
        Validate JWT with signature, audience, issuer and environment checks

        Raises:
            jwt.InvalidTokenError: If token is invalid, tampered, or from wrong environment
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=self.jwt_config["allowed_algorithms"],
                audience=self.audience,
                issuer=self.issuer,
                options={"require": ["exp", "iat", "sub", "aud", "iss"]}
            )
        except jwt.ExpiredSignatureError:
            logger.warning("JWT token has expired")
            raise jwt.InvalidTokenError("Token has expired")
        except jwt.InvalidAudienceError:
            logger.warning(f"JWT audience validation failed - expected: {self.audience}")
            raise jwt.InvalidTokenError("Invalid audience")
        except jwt.InvalidIssuerError:
            logger.warning(f"JWT issuer validation failed - expected: {self.issuer}")
            raise jwt.InvalidTokenError("Invalid issuer")

        token_env = payload.get('environment')
        if not token_env:
            raise jwt.InvalidTokenError("Missing environment claim")
        if token_env != ENV:
            raise jwt.InvalidTokenError(f"Environment mismatch: token='{token_env}', server='{ENV}'")

        role = payload.get('role')
        if role not in (Role.AGENT.value, Role.ADMIN.value):
            raise jwt.InvalidTokenError(f"Invalid role: {role}")
        if role == Role.AGENT.value and not self.is_known_agent(payload['sub']):
            raise jwt.InvalidTokenError(f"Unknown agent code: {payload['sub']}")

        logger.debug(f"Validated {role} token for {payload['sub']} in {ENV}")
        return payload


# Global service instance
auth_service = AuthService()


# Convenience functions
def generate_agent_token(agent_id: str) -> str:
    return auth_service.generate_access_token(Role.AGENT, agent_id)

def generate_admin_token() -> str:
    return auth_service.generate_access_token(Role.ADMIN, ADMIN_SUBJECT)

def validate_access_token(token: str) -> Dict[str, Any]:
    """Validate and decode a session token"""
    return auth_service.validate_and_decode_jwt(token)
