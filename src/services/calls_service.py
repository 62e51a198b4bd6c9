"""
Call entry service - logging calls and editing their outcomes
"""

import logging
from typing import Any, Dict, List, Tuple
from uuid import UUID

from database.connection import get_db_pool
from models.enums import CallOutcome
from utils.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

CALL_COLUMNS = """
    entry_id, agent_id, call_number, client_name, client_phone,
    notes, outcome, edited, created_at
"""

class CallsService:
    """Service for call entry operations, always scoped to a single agent"""

    @staticmethod
    async def create_call(
        agent_id: str,
        client_name: str,
        client_phone: str,
        notes: str,
        outcome: CallOutcome = CallOutcome.RESOLVED
    ) -> Dict[str, Any]:
        """
        Log a handled call for an agent

        The call number is the 1-based position of the call within the
        agent's calls for the current UTC day.

        Returns:
            The stored call entry
        """
        db_pool = get_db_pool()

        async with db_pool.acquire() as conn:
            async with conn.transaction():
                # Serialize numbering per agent
                await conn.execute("SELECT pg_advisory_xact_lock(hashtext($1))", agent_id)

                todays_calls = await conn.fetchval("""
                    SELECT COUNT(*)
                    FROM call_entries
                    WHERE agent_id = $1
                        AND (created_at AT TIME ZONE 'UTC')::date = (NOW() AT TIME ZONE 'UTC')::date
                """, agent_id)

                row = await conn.fetchrow(f"""
                    INSERT INTO call_entries (
                        agent_id, call_number, client_name, client_phone, notes, outcome
                    ) VALUES ($1, $2, $3, $4, $5, $6)
                    RETURNING {CALL_COLUMNS}
                """,
                agent_id, todays_calls + 1, client_name, client_phone, notes, CallOutcome(outcome).value)

        logger.info(f"Call logged: agent {agent_id} - #{row['call_number']} - {row['outcome']}")
        return dict(row)

    @staticmethod
    async def list_calls(agent_id: str) -> List[Dict[str, Any]]:
        """Get all calls for an agent, newest first"""
        db_pool = get_db_pool()

        async with db_pool.acquire() as conn:
            rows = await conn.fetch(f"""
                SELECT {CALL_COLUMNS}
                FROM call_entries
                WHERE agent_id = $1
                ORDER BY created_at DESC
            """, agent_id)

        return [dict(row) for row in rows]

    @staticmethod
    async def update_outcome(
        agent_id: str,
        entry_id: UUID,
        outcome: CallOutcome
    ) -> Tuple[Dict[str, Any], bool, bool]:
        """
        Change the outcome of a call

        Resolved calls are final. Setting the current outcome again is a no-op.
        The first effective edit marks the entry as edited.

        Returns:
            Tuple of (entry, changed, first_edit)

        Raises:
            NotFoundError: entry does not exist for this agent
            ConflictError: entry is already Resolved
        """
        new_outcome = CallOutcome(outcome).value
        db_pool = get_db_pool()

        async with db_pool.acquire() as conn:
            async with conn.transaction():
                current = await conn.fetchrow(f"""
                    SELECT {CALL_COLUMNS}
                    FROM call_entries
                    WHERE entry_id = $1 AND agent_id = $2
                    FOR UPDATE
                """, entry_id, agent_id)

                if current is None:
                    raise NotFoundError(f"Call entry not found: {entry_id}")

                if current["outcome"] == CallOutcome.RESOLVED.value:
                    raise ConflictError("Cannot edit a call that has already been marked as Resolved")

                if current["outcome"] == new_outcome:
                    return dict(current), False, False

                first_edit = not current["edited"]
                row = await conn.fetchrow(f"""
                    UPDATE call_entries
                    SET outcome = $1, edited = TRUE
                    WHERE entry_id = $2
                    RETURNING {CALL_COLUMNS}
                """, new_outcome, entry_id)

        logger.info(
            f"Call outcome updated: agent {agent_id} - entry {entry_id} - "
            f"{current['outcome']} -> {new_outcome} (first edit: {first_edit})"
        )
        return dict(row), True, first_edit
