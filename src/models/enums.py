"""
Enum definitions for the Call Center Agent Tracker
"""

from enum import Enum

class CallOutcome(str, Enum):
    """Classification recorded for each handled call"""
    RESOLVED = "Resolved"
    ESCALATED = "Escalated"
    FOLLOW_UP_REQUIRED = "Follow-up Required"

class PaymentStatus(str, Enum):
    """
    Lifecycle of a salary payment.

    - ISSUED: Recorded by the admin, money not yet sent
    - CREDITED: Paid out; company funds were decremented by the amount
    - CANCELLED: Withdrawn before crediting; ignored by earnings totals
    """
    ISSUED = "Issued"
    CREDITED = "Credited"
    CANCELLED = "Cancelled"

class Role(str, Enum):
    AGENT = "agent"
    ADMIN = "admin"
