"""
API routes with the service layer mocked out
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, patch

from database import connection
from services.calls_service import CallsService
from services.funds_service import FundsService
from services.salary_service import SalaryService
from utils.exceptions import ConflictError, InsufficientFundsError, NoPendingBalanceError

NOW = datetime(2026, 3, 4, 12, tzinfo=timezone.utc)


def _entry(**overrides):
    entry = {
        "entry_id": uuid.uuid4(),
        "agent_id": "ZN001",
        "call_number": 1,
        "client_name": "John Doe",
        "client_phone": "555-123-4567",
        "notes": "Billing question",
        "outcome": "Resolved",
        "edited": False,
        "created_at": NOW,
    }
    entry.update(overrides)
    return entry


def _payment(**overrides):
    payment = {
        "payment_id": uuid.uuid4(),
        "agent_id": "ZN001",
        "amount": Decimal("150.00"),
        "purpose": "Weekly advance",
        "status": "Issued",
        "date": NOW,
        "credited_at": None,
    }
    payment.update(overrides)
    return payment


class TestCallRoutes:

    def test_log_call_attributed_to_signed_in_agent(self, client, agent_headers):
        create = AsyncMock(return_value=_entry())
        with patch.object(CallsService, "create_call", new=create):
            response = client.post(
                "/api/calls",
                json={"client_name": "John Doe", "client_phone": "555-123-4567", "notes": "Billing question"},
                headers=agent_headers,
            )

        assert response.status_code == 201
        assert response.json()["outcome"] == "Resolved"
        assert create.await_args.kwargs["agent_id"] == "ZN001"

    def test_log_call_requires_fields(self, client, agent_headers):
        response = client.post(
            "/api/calls",
            json={"client_name": "", "client_phone": "555", "notes": "x", "outcome": "Escalated"},
            headers=agent_headers,
        )
        assert response.status_code == 422

    def test_unknown_outcome_rejected(self, client, agent_headers):
        response = client.post(
            "/api/calls",
            json={"client_name": "A", "client_phone": "1", "notes": "n", "outcome": "Dropped"},
            headers=agent_headers,
        )
        assert response.status_code == 422

    def test_history_groups_by_day(self, client, agent_headers):
        entries = [_entry(outcome="Escalated"), _entry(created_at=datetime(2026, 3, 3, 9, tzinfo=timezone.utc))]
        with patch.object(CallsService, "list_calls", new=AsyncMock(return_value=entries)):
            response = client.get("/api/calls/history", headers=agent_headers)

        assert response.status_code == 200
        groups = response.json()
        assert [g["date"] for g in groups] == ["2026-03-04", "2026-03-03"]
        assert groups[0]["success_ratio"] == 100.0
        assert groups[0]["calls"][0]["daily_number"] == 1

    def test_editing_resolved_call_conflicts(self, client, agent_headers):
        update = AsyncMock(side_effect=ConflictError("Cannot edit a call that has already been marked as Resolved"))
        with patch.object(CallsService, "update_outcome", new=update):
            response = client.patch(
                f"/api/calls/{uuid.uuid4()}", json={"outcome": "Escalated"}, headers=agent_headers
            )

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "CONFLICT"
        assert "Resolved" in body["message"]

    def test_first_edit_reported(self, client, agent_headers):
        entry = _entry(outcome="Follow-up Required", edited=True)
        with patch.object(CallsService, "update_outcome", new=AsyncMock(return_value=(entry, True, True))):
            response = client.patch(
                f"/api/calls/{entry['entry_id']}", json={"outcome": "Follow-up Required"}, headers=agent_headers
            )

        assert response.status_code == 200
        body = response.json()
        assert body["first_edit"] is True
        assert body["entry"]["edited"] is True


class TestEarningsRoutes:

    SUMMARY = {
        "agent_id": "ZN001",
        "call_count": 10,
        "call_rate": Decimal("15"),
        "total_earnings": Decimal("150"),
        "total_paid": Decimal("100"),
        "pending_balance": Decimal("50"),
    }

    def test_agent_sees_own_earnings(self, client, agent_headers):
        summary = AsyncMock(return_value=self.SUMMARY)
        with patch.object(SalaryService, "get_earnings", new=summary):
            response = client.get("/api/earnings", headers=agent_headers)

        assert response.status_code == 200
        assert response.json()["pending_balance"] == 50.0
        summary.assert_awaited_once_with("ZN001")

    def test_admin_unknown_agent(self, client, admin_headers):
        response = client.get("/api/admin/agents/ZN999/earnings", headers=admin_headers)
        assert response.status_code == 404


class TestSalaryRoutes:

    def test_issue_payment(self, client, admin_headers):
        issue = AsyncMock(return_value=_payment(amount=Decimal("250")))
        with patch.object(SalaryService, "issue_payment", new=issue):
            response = client.post(
                "/api/admin/salary",
                json={"agent_id": "ZN001", "amount": 250, "purpose": "Weekly advance"},
                headers=admin_headers,
            )

        assert response.status_code == 201
        assert response.json()["status"] == "Issued"
        assert issue.await_args.kwargs["settle_account"] is False

    def test_amount_required_unless_settling(self, client, admin_headers):
        response = client.post(
            "/api/admin/salary",
            json={"agent_id": "ZN001", "purpose": "Weekly advance"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_settle_without_amount_allowed(self, client, admin_headers):
        issue = AsyncMock(side_effect=NoPendingBalanceError("Agent ZN002 has no pending amount to settle"))
        with patch.object(SalaryService, "issue_payment", new=issue):
            response = client.post(
                "/api/admin/salary",
                json={"agent_id": "ZN002", "purpose": "Settle", "settle_account": True},
                headers=admin_headers,
            )

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "NO_PENDING_BALANCE"
        assert "no pending amount" in body["message"]

    def test_payment_validation(self, client, admin_headers):
        for body in [
            {"agent_id": "ZN999", "amount": 10, "purpose": "Bonus"},
            {"agent_id": "ZN001", "amount": -5, "purpose": "Bonus"},
            {"agent_id": "ZN001", "amount": 10, "purpose": "ab"},
        ]:
            response = client.post("/api/admin/salary", json=body, headers=admin_headers)
            assert response.status_code == 422, body

    def test_amount_limited_to_cents_and_column_size(self, client, admin_headers):
        issue = AsyncMock(return_value=_payment())
        with patch.object(SalaryService, "issue_payment", new=issue):
            for amount in ["0.001", "10.005", 10 ** 12]:
                response = client.post(
                    "/api/admin/salary",
                    json={"agent_id": "ZN001", "amount": amount, "purpose": "Bonus"},
                    headers=admin_headers,
                )
                assert response.status_code == 422, amount

        issue.assert_not_awaited()

    def test_largest_storable_amount_accepted(self, client, admin_headers):
        issue = AsyncMock(return_value=_payment(amount=Decimal("9999999999.99")))
        with patch.object(SalaryService, "issue_payment", new=issue):
            response = client.post(
                "/api/admin/salary",
                json={"agent_id": "ZN001", "amount": "9999999999.99", "purpose": "Bonus"},
                headers=admin_headers,
            )

        assert response.status_code == 201
        assert issue.await_args.kwargs["amount"] == Decimal("9999999999.99")

    def test_credit_returns_new_balance(self, client, admin_headers):
        payment = _payment(status="Credited", credited_at=NOW)
        credit = AsyncMock(return_value=(payment, Decimal("850")))
        with patch.object(SalaryService, "credit_payment", new=credit):
            response = client.post(
                f"/api/admin/salary/ZN001/payments/{payment['payment_id']}/credit",
                headers=admin_headers,
            )

        assert response.status_code == 200
        body = response.json()
        assert body["payment"]["status"] == "Credited"
        assert body["company_funds"] == 850.0

    def test_credit_refused_when_funds_short(self, client, admin_headers):
        credit = AsyncMock(side_effect=InsufficientFundsError("Insufficient company funds"))
        with patch.object(SalaryService, "credit_payment", new=credit):
            response = client.post(
                f"/api/admin/salary/ZN001/payments/{uuid.uuid4()}/credit",
                headers=admin_headers,
            )

        assert response.status_code == 409
        assert response.json()["error"] == "INSUFFICIENT_FUNDS"

    def test_agent_salary_log(self, client, agent_headers):
        payments = [_payment(), _payment(status="Credited")]
        listing = AsyncMock(return_value=payments)
        with patch.object(SalaryService, "list_payments", new=listing):
            response = client.get("/api/salary/payments", headers=agent_headers)

        assert response.status_code == 200
        assert len(response.json()) == 2
        listing.assert_awaited_once_with("ZN001")

    def test_admin_payment_log(self, client, admin_headers):
        listing = AsyncMock(return_value=[_payment(agent_id="ZN002")])
        with patch.object(SalaryService, "list_payments", new=listing):
            response = client.get("/api/admin/salary/ZN002/payments", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()[0]["agent_id"] == "ZN002"
        listing.assert_awaited_once_with("ZN002")

    def test_admin_payment_log_unknown_agent(self, client, admin_headers):
        listing = AsyncMock()
        with patch.object(SalaryService, "list_payments", new=listing):
            response = client.get("/api/admin/salary/ZN999/payments", headers=admin_headers)

        assert response.status_code == 404
        listing.assert_not_awaited()

    def test_cancel_payment(self, client, admin_headers):
        payment = _payment(status="Cancelled")
        cancel = AsyncMock(return_value=payment)
        with patch.object(SalaryService, "cancel_payment", new=cancel):
            response = client.post(
                f"/api/admin/salary/ZN001/payments/{payment['payment_id']}/cancel",
                headers=admin_headers,
            )

        assert response.status_code == 200
        assert response.json()["status"] == "Cancelled"
        cancel.assert_awaited_once_with("ZN001", payment["payment_id"])

    def test_cancel_credited_payment_conflicts(self, client, admin_headers):
        cancel = AsyncMock(side_effect=ConflictError("Only Issued payments can be cancelled"))
        with patch.object(SalaryService, "cancel_payment", new=cancel):
            response = client.post(
                f"/api/admin/salary/ZN001/payments/{uuid.uuid4()}/cancel",
                headers=admin_headers,
            )

        assert response.status_code == 409
        assert response.json()["error"] == "CONFLICT"

    def test_cancel_requires_admin(self, client, agent_headers):
        response = client.post(
            f"/api/admin/salary/ZN001/payments/{uuid.uuid4()}/cancel",
            headers=agent_headers,
        )
        assert response.status_code == 403


class TestFundsRoutes:

    def test_deposit(self, client, admin_headers):
        funds = {"balance": Decimal("1500"), "floor": Decimal("0"), "updated_at": NOW}
        with patch.object(FundsService, "deposit", new=AsyncMock(return_value=funds)):
            response = client.post("/api/admin/funds/deposit", json={"amount": 500}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["balance"] == 1500.0

    def test_deposit_must_be_positive(self, client, admin_headers):
        response = client.post("/api/admin/funds/deposit", json={"amount": 0}, headers=admin_headers)
        assert response.status_code == 422

    def test_deposit_limited_to_cents_and_column_size(self, client, admin_headers):
        deposit = AsyncMock()
        with patch.object(FundsService, "deposit", new=deposit):
            for amount in ["0.004", 10 ** 14]:
                response = client.post("/api/admin/funds/deposit", json={"amount": amount}, headers=admin_headers)
                assert response.status_code == 422, amount

        deposit.assert_not_awaited()


class TestHealthRoute:

    def test_healthy(self, client, fake_conn):
        fake_conn.fetchval.return_value = 1

        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"
        fake_conn.fetchval.assert_awaited_once_with("SELECT 1")

    def test_database_down(self, client, fake_conn):
        fake_conn.fetchval.side_effect = ConnectionRefusedError("connection refused")

        response = client.get("/")

        assert response.status_code == 503
        assert "connection refused" in response.json()["message"]

    def test_pool_not_initialized(self, client, monkeypatch):
        monkeypatch.setattr(connection, "db_pool", None)

        response = client.get("/")

        assert response.status_code == 503


class TestErrorResponses:

    ERROR_KEYS = {"error", "message", "trace_id", "timestamp"}

    def test_unauthenticated_body_and_trace_header(self, client):
        response = client.get("/api/earnings")

        assert response.status_code == 401
        body = response.json()
        assert self.ERROR_KEYS <= set(body)
        assert response.headers["X-Trace-ID"] == body["trace_id"]

    def test_domain_error_body_and_trace_header(self, client, admin_headers):
        credit = AsyncMock(side_effect=InsufficientFundsError("Insufficient company funds"))
        with patch.object(SalaryService, "credit_payment", new=credit):
            response = client.post(
                f"/api/admin/salary/ZN001/payments/{uuid.uuid4()}/credit",
                headers=admin_headers,
            )

        body = response.json()
        assert set(body) == self.ERROR_KEYS
        assert body["error"] == "INSUFFICIENT_FUNDS"
        assert body["message"] == "Insufficient company funds"
        assert response.headers["X-Trace-ID"] == body["trace_id"]

    def test_validation_error_body(self, client, agent_headers):
        response = client.post("/api/calls", json={}, headers=agent_headers)

        assert response.status_code == 422
        body = response.json()
        assert self.ERROR_KEYS <= set(body)
        assert body["error_count"] == len(body["detail"])
        assert "X-Trace-ID" in response.headers

    def test_successful_responses_carry_trace_header(self, client, agent_headers):
        with patch.object(CallsService, "list_calls", new=AsyncMock(return_value=[])):
            response = client.get("/api/calls", headers=agent_headers)

        assert response.status_code == 200
        assert len(response.headers["X-Trace-ID"]) == 8
