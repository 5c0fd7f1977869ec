"""Tests for the salary history HTTP endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from compledger.api.app import create_app
from compledger.services.compensation import CompensationService

JAN_10 = datetime(2025, 1, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("COMPLEDGER_STORE_BACKEND", "memory")
    return create_app()


@pytest.fixture
def client(app, legacy_employee):
    with TestClient(app) as c:
        app.state.employee_store.put(legacy_employee)
        app.state.service = CompensationService(
            settings=app.state.settings,
            employee_store=app.state.employee_store,
            clock=lambda: JAN_10,
        )
        yield c


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_ready_reports_backend(self, client):
        body = client.get("/ready").json()
        assert body["status"] == "ready"
        assert body["store"] == "memory"


class TestGetHistory:
    def test_legacy_pay_is_shown(self, client):
        resp = client.get("/employees/EMP-1001/salary-history")
        assert resp.status_code == 200
        body = resp.json()
        assert (body["page"], body["totalPages"]) == (1, 1)
        entry = body["currentPageRows"][0]["entry"]
        assert entry["fromDate"] == "2023-03-01"
        assert entry["toDate"] is None
        assert entry["totalSalary"] == 5500.0
        assert entry["isInitial"] is True

    def test_unknown_employee_is_404(self, client):
        resp = client.get("/employees/EMP-404/salary-history")
        assert resp.status_code == 404
        assert "EMP-404" in resp.json()["message"]


class TestSubmit:
    def test_edit_current(self, client):
        resp = client.post(
            "/employees/EMP-1001/salary",
            json={"mode": "edit_current", "basic": "6000", "otherAllowance": "500"},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["kind"] == "correct_open_revision"
        assert body["payload"]["basic"] == 6000.0
        assert body["payload"]["currentRevisionId"] == 2
        assert [r["entry"]["toDate"] for r in body["view"]["rows"]] == [None, "2025-01-10"]

    def test_total_salary_in_body_is_ignored(self, client):
        resp = client.post(
            "/employees/EMP-1001/salary",
            json={"mode": "add_new", "basic": 100, "otherAllowance": 1, "totalSalary": 999999},
        )
        assert resp.json()["view"]["rows"][0]["entry"]["totalSalary"] == 101.0

    def test_field_errors_are_422(self, client, app):
        resp = client.post("/employees/EMP-1001/salary", json={"mode": "add_new", "basic": "abc"})
        assert resp.status_code == 422
        assert resp.json() == {"errors": {"basic": "Please enter a valid number"}}
        assert app.state.employee_store.writes == []

    def test_edit_historical_row(self, client):
        resp = client.post(
            "/employees/EMP-1001/salary",
            json={"mode": "edit_historical", "basic": 5100, "position": 0},
        )
        assert resp.status_code == 200
        assert resp.json()["kind"] == "edit_historical"

    def test_save_failure_is_502(self, client, app):
        app.state.employee_store.fail_next_write()
        resp = client.post("/employees/EMP-1001/salary", json={"mode": "add_new", "basic": 1})
        assert resp.status_code == 502
        assert resp.json() == {"message": "Unable to save salary details. Please try again."}


class TestDelete:
    def test_delete_row(self, client):
        client.post("/employees/EMP-1001/salary", json={"mode": "edit_current", "basic": 6000})
        resp = client.delete("/employees/EMP-1001/salary-history/0")
        assert resp.status_code == 200
        rows = resp.json()["view"]["rows"]
        assert len(rows) == 1
        assert rows[0]["entry"]["toDate"] == "2025-01-10"

    def test_stale_position_is_404(self, client):
        resp = client.delete("/employees/EMP-1001/salary-history/5")
        assert resp.status_code == 404


class TestPackage:
    def test_total(self, client):
        assert client.get("/employees/EMP-1001/package").json() == {"total": 5500.0, "currency": "AED"}

    def test_declared_salary_mismatch_is_422(self, client):
        resp = client.get("/employees/EMP-1001/package", params={"monthlySalary": "5000"})
        assert resp.status_code == 422
        assert resp.json()["errors"]["monthlySalary"].startswith("Monthly salary (AED 5000.00)")

    def test_missing_declared_salary_is_422(self, client):
        resp = client.get("/employees/EMP-1001/package", params={"monthlySalary": ""})
        assert resp.json() == {"errors": {"monthlySalary": "Monthly salary is required"}}
