"""
Salary payment service - issuing, crediting and cancelling agent payments
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

import asyncpg

from config.settings import CALL_RATE, COMPANY_FUNDS_FLOOR
from database.connection import get_db_pool
from models.enums import PaymentStatus
from models.salary import SETTLEMENT_PURPOSE
from services import earnings
from services.email_service import notify_insufficient_funds
from services.funds_service import FundsService
from utils.exceptions import ConflictError, InsufficientFundsError, NoPendingBalanceError, NotFoundError

logger = logging.getLogger(__name__)

PAYMENT_COLUMNS = "payment_id, agent_id, amount, purpose, status, date, credited_at"

class SalaryService:
    """Service for the salary payment ledger"""

    @staticmethod
    async def _load_earnings(conn: asyncpg.Connection, agent_id: str) -> Dict[str, Any]:
        call_count = await conn.fetchval(
            "SELECT COUNT(*) FROM call_entries WHERE agent_id = $1", agent_id
        )
        payments = await conn.fetch(
            "SELECT amount, status FROM salary_payments WHERE agent_id = $1", agent_id
        )

        paid = earnings.total_paid(payments)
        return {
            "agent_id": agent_id,
            "call_count": call_count,
            "call_rate": CALL_RATE,
            "total_earnings": earnings.total_earnings(call_count, CALL_RATE),
            "total_paid": paid,
            "pending_balance": earnings.pending_balance(call_count, paid, CALL_RATE)
        }

    @staticmethod
    async def get_earnings(agent_id: str) -> Dict[str, Any]:
        """Compute call earnings, total paid and pending balance for an agent"""
        db_pool = get_db_pool()

        async with db_pool.acquire() as conn:
            return await SalaryService._load_earnings(conn, agent_id)

    @staticmethod
    async def issue_payment(
        agent_id: str,
        purpose: str,
        amount: Optional[Decimal] = None,
        settle_account: bool = False
    ) -> Dict[str, Any]:
        """
        Record a new Issued payment for an agent

        When settling, the amount is the agent's pending balance and the
        purpose is replaced with the settlement label.

        Raises:
            NoPendingBalanceError: settling an agent with nothing owed
        """
        db_pool = get_db_pool()

        async with db_pool.acquire() as conn:
            async with conn.transaction():
                # Serialize payments per agent so two settlements cannot both see the same balance
                await conn.execute("SELECT pg_advisory_xact_lock(hashtext($1))", f"salary:{agent_id}")

                if settle_account:
                    summary = await SalaryService._load_earnings(conn, agent_id)
                    pending = summary["pending_balance"]
                    if pending <= 0:
                        logger.warning(f"Settlement refused: agent {agent_id} has pending balance {pending}")
                        raise NoPendingBalanceError(f"Agent {agent_id} has no pending amount to settle")
                    amount = pending
                    purpose = SETTLEMENT_PURPOSE
                elif amount is None or Decimal(amount) <= 0:
                    raise ValueError("Amount must be a positive number")

                row = await conn.fetchrow(f"""
                    INSERT INTO salary_payments (agent_id, amount, purpose, status)
                    VALUES ($1, $2, $3, $4)
                    RETURNING {PAYMENT_COLUMNS}
                """, agent_id, Decimal(amount), purpose, PaymentStatus.ISSUED.value)

        logger.info(f"Payment issued: agent {agent_id} - {row['amount']} - {purpose}")
        return dict(row)

    @staticmethod
    async def list_payments(agent_id: str) -> List[Dict[str, Any]]:
        """Get all payments for an agent, newest first"""
        db_pool = get_db_pool()

        async with db_pool.acquire() as conn:
            rows = await conn.fetch(f"""
                SELECT {PAYMENT_COLUMNS}
                FROM salary_payments
                WHERE agent_id = $1
                ORDER BY date DESC
            """, agent_id)

        return [dict(row) for row in rows]

    @staticmethod
    async def _lock_payment(conn: asyncpg.Connection, agent_id: str, payment_id: UUID):
        payment = await conn.fetchrow(f"""
            SELECT {PAYMENT_COLUMNS}
            FROM salary_payments
            WHERE payment_id = $1 AND agent_id = $2
            FOR UPDATE
        """, payment_id, agent_id)

        if payment is None:
            raise NotFoundError(f"Payment not found: {payment_id}")
        return payment

    @staticmethod
    async def credit_payment(agent_id: str, payment_id: UUID) -> Tuple[Dict[str, Any], Decimal]:
        """
        Mark a payment as Credited and take its amount out of company funds

        The status change and the funds decrement commit together or not at all.

        Returns:
            Tuple of (updated payment, new company funds balance)

        Raises:
            NotFoundError: payment does not exist for this agent
            ConflictError: payment is already Credited or was Cancelled
            InsufficientFundsError: crediting would take funds below the floor
        """
        db_pool = get_db_pool()

        try:
            async with db_pool.acquire() as conn:
                async with conn.transaction():
                    payment = await SalaryService._lock_payment(conn, agent_id, payment_id)

                    if payment["status"] == PaymentStatus.CREDITED.value:
                        raise ConflictError(f"Payment {payment_id} has already been credited")
                    if payment["status"] == PaymentStatus.CANCELLED.value:
                        raise ConflictError(f"Payment {payment_id} was cancelled and cannot be credited")

                    balance = await FundsService.lock_balance(conn)
                    earnings.ensure_funds_floor(balance, payment["amount"], COMPANY_FUNDS_FLOOR)

                    updated = await conn.fetchrow(f"""
                        UPDATE salary_payments
                        SET status = $1, credited_at = NOW()
                        WHERE payment_id = $2
                        RETURNING {PAYMENT_COLUMNS}
                    """, PaymentStatus.CREDITED.value, payment_id)
                    new_balance = await FundsService.debit(conn, payment["amount"])

        except InsufficientFundsError as e:
            logger.warning(f"Credit refused: agent {agent_id} - payment {payment_id} - {e.message}")
            await notify_insufficient_funds(agent_id, str(payment_id), e.amount, e.balance, e.floor)
            raise

        logger.info(
            f"Payment credited: agent {agent_id} - payment {payment_id} - "
            f"{updated['amount']} - company funds now {new_balance}"
        )
        return dict(updated), new_balance

    @staticmethod
    async def cancel_payment(agent_id: str, payment_id: UUID) -> Dict[str, Any]:
        """
        Cancel an Issued payment. Company funds are not touched.

        Raises:
            NotFoundError: payment does not exist for this agent
            ConflictError: payment is not in Issued status
        """
        db_pool = get_db_pool()

        async with db_pool.acquire() as conn:
            async with conn.transaction():
                payment = await SalaryService._lock_payment(conn, agent_id, payment_id)

                if payment["status"] != PaymentStatus.ISSUED.value:
                    raise ConflictError(f"Only issued payments can be cancelled (status: {payment['status']})")

                updated = await conn.fetchrow(f"""
                    UPDATE salary_payments
                    SET status = $1
                    WHERE payment_id = $2
                    RETURNING {PAYMENT_COLUMNS}
                """, PaymentStatus.CANCELLED.value, payment_id)

        logger.info(f"Payment cancelled: agent {agent_id} - payment {payment_id}")
        return dict(updated)
