"""
Table definitions applied at startup. Every statement is idempotent.
"""

SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS call_entries (
        entry_id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        agent_id TEXT NOT NULL,
        call_number INTEGER NOT NULL,
        client_name TEXT NOT NULL,
        client_phone TEXT NOT NULL,
        notes TEXT NOT NULL,
        outcome TEXT NOT NULL CHECK (outcome IN ('Resolved', 'Escalated', 'Follow-up Required')),
        edited BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_call_entries_agent_created
        ON call_entries (agent_id, created_at DESC)
    """,
    """
    CREATE TABLE IF NOT EXISTS salary_payments (
        payment_id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
        agent_id TEXT NOT NULL,
        amount NUMERIC(12, 2) NOT NULL CHECK (amount > 0),
        purpose TEXT NOT NULL,
        status TEXT NOT NULL DEFAULT 'Issued' CHECK (status IN ('Issued', 'Credited', 'Cancelled')),
        date TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        credited_at TIMESTAMPTZ
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_salary_payments_agent_date
        ON salary_payments (agent_id, date DESC)
    """,
    """
    CREATE TABLE IF NOT EXISTS company_funds (
        funds_id SMALLINT PRIMARY KEY DEFAULT 1 CHECK (funds_id = 1),
        balance NUMERIC(14, 2) NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
]

SEED_COMPANY_FUNDS = """
    INSERT INTO company_funds (funds_id, balance)
    VALUES (1, $1)
    ON CONFLICT (funds_id) DO NOTHING
"""
