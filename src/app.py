"""
Call Center Agent Tracker API Server
Core functionality: call logging, earnings, salary payments, company funds
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import ALLOWED_ORIGINS
from database.connection import init_database, close_database
from api.routes import health, auth, calls, earnings, salary, funds
from utils.error_handling import setup_error_handling

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    await init_database()
    yield
    await close_database()

# FastAPI app initialization
app = FastAPI(
    title="Call Center Agent Tracker",
    description="Backend API for agent call logging, earnings and salary payments",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)

# Setup centralized error handling
setup_error_handling(app)

# Include API routes
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(calls.router, prefix="/api/calls", tags=["Calls"])
app.include_router(earnings.router, prefix="/api", tags=["Earnings"])
app.include_router(salary.router, prefix="/api", tags=["Salary"])
app.include_router(funds.router, prefix="/api/admin/funds", tags=["Company Funds"])

# Server startup is handled by main.py at the project root
