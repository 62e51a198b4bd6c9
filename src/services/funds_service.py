"""
Company funds service - the single shared balance salary credits draw from
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

import asyncpg

from config.settings import COMPANY_FUNDS_FLOOR
from database.connection import get_db_pool
from utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

class FundsService:
    """Service for reading and adjusting company funds"""

    @staticmethod
    async def get_funds() -> Dict[str, Any]:
        """Get current balance, configured floor and last update time"""
        db_pool = get_db_pool()

        async with db_pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT balance, updated_at FROM company_funds WHERE funds_id = 1"
            )

        if row is None:
            raise NotFoundError("Company funds have not been initialized")

        return {
            "balance": row["balance"],
            "floor": COMPANY_FUNDS_FLOOR,
            "updated_at": row["updated_at"]
        }

    @staticmethod
    async def deposit(amount: Decimal, note: Optional[str] = None) -> Dict[str, Any]:
        """Add money to company funds and return the new state"""
        if Decimal(amount) <= 0:
            raise ValueError("Deposit amount must be positive")

        db_pool = get_db_pool()

        async with db_pool.acquire() as conn:
            row = await conn.fetchrow("""
                UPDATE company_funds
                SET balance = balance + $1, updated_at = NOW()
                WHERE funds_id = 1
                RETURNING balance, updated_at
            """, Decimal(amount))

        if row is None:
            raise NotFoundError("Company funds have not been initialized")

        logger.info(f"Company funds deposit: +{amount} -> {row['balance']}" + (f" ({note})" if note else ""))
        return {
            "balance": row["balance"],
            "floor": COMPANY_FUNDS_FLOOR,
            "updated_at": row["updated_at"]
        }

    @staticmethod
    async def lock_balance(conn: asyncpg.Connection) -> Decimal:
        """
        Read the balance with a row lock

        Must be called inside a transaction on ``conn``.
        """
        balance = await conn.fetchval(
            "SELECT balance FROM company_funds WHERE funds_id = 1 FOR UPDATE"
        )
        if balance is None:
            raise NotFoundError("Company funds have not been initialized")
        return balance

    @staticmethod
    async def debit(conn: asyncpg.Connection, amount: Decimal) -> Decimal:
        """Decrement the balance on ``conn`` and return the new value"""
        return await conn.fetchval("""
            UPDATE company_funds
            SET balance = balance - $1, updated_at = NOW()
            WHERE funds_id = 1
            RETURNING balance
        """, Decimal(amount))
