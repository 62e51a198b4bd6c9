"""
Configuration settings for the Call Center Agent Tracker backend
"""

import os
import resend
import logging
from decimal import Decimal

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def env_list(name: str, default: str) -> list:
    """Comma separated env var as a list, blank entries dropped"""
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]

# Environment configuration
ENV = os.getenv("ENV", "PROD")  # PROD or QA
DATABASE_URL = os.getenv("DATABASE_URL")
PORT = int(os.getenv("PORT", 8080))

# Agents are identified by fixed codes handed out by the call center
AGENT_CODES = env_list("AGENT_CODES", "ZN001,ZN002")
ADMIN_SECRET_CODE = os.getenv("ADMIN_SECRET_CODE")

# Earnings and funds rules
CALL_RATE = Decimal(os.getenv("CALL_RATE", "15"))  # rupees per logged call
COMPANY_FUNDS_FLOOR = Decimal(os.getenv("COMPANY_FUNDS_FLOOR", "0"))
INITIAL_COMPANY_FUNDS = Decimal(os.getenv("INITIAL_COMPANY_FUNDS", "0"))

# Alert emails via Resend
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
FROM_EMAIL = os.getenv("FROM_EMAIL")
ADMIN_ALERT_EMAILS = env_list("ADMIN_ALERT_EMAILS", "admin@company.com")

# Environment-specific JWT configuration for secure token isolation
class JWTEnvironmentConfig:
    """Environment-isolated JWT configuration to prevent cross-environment token reuse"""

    QA_CONFIG = {
        "secret": os.getenv("QA_JWT_SECRET", "qa-default-secret-for-development"),
        "issuer": "agent-tracker-qa-auth",
        "audience": "agent-tracker-qa-api",
        "allowed_algorithms": ["HS256"],
        "max_token_age": 3600 * 12  # a full shift for testing workflows
    }

    PROD_CONFIG = {
        "secret": os.getenv("PROD_JWT_SECRET", "prod-default-secret-change-in-production"),
        "issuer": "agent-tracker-prod-auth",
        "audience": "agent-tracker-prod-api",
        "allowed_algorithms": ["HS256"],
        "max_token_age": 3600 * 8  # one shift
    }

    @classmethod
    def get_config(cls):
        """Get JWT configuration for current environment"""
        return cls.QA_CONFIG if ENV == "QA" else cls.PROD_CONFIG

logger.info(f"Environment: {ENV}")
jwt_config = JWTEnvironmentConfig.get_config()
logger.info(f"JWT Config - Issuer: {jwt_config['issuer']}, Audience: {jwt_config['audience']}")

# Validate required environment variables
if not DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is required")
if not AGENT_CODES:
    raise ValueError("AGENT_CODES must list at least one agent code")
if not ADMIN_SECRET_CODE:
    if ENV == "QA":
        ADMIN_SECRET_CODE = "qa-admin-code"
        logger.warning("ADMIN_SECRET_CODE not set - using QA development code")
    else:
        raise ValueError("ADMIN_SECRET_CODE environment variable is required")
if not RESEND_API_KEY:
    logger.warning("RESEND_API_KEY not set - low funds alerts will not be emailed")

# Configure Resend
resend.api_key = RESEND_API_KEY

# CORS settings
ALLOWED_ORIGINS = env_list("ALLOWED_ORIGINS", "http://localhost:3000")
