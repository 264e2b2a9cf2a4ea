"""HTTP tests for the payment endpoints."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from payment_gateway.api import payments as payments_api
from payment_gateway.api.payments import ERROR_STATUS_CODES, REPLAYED_HEADER, get_orchestrator
from payment_gateway.engine.orchestrator import PaymentOrchestrator
from payment_gateway.main import app
from payment_gateway.models.enums import ErrorKind
from payment_gateway.providers.errors import ProviderUnavailableError

PAYMENT_BODY = {
    "card_number": "1234567890123456",
    "expiry_month": 12,
    "expiry_year": 2099,
    "currency": "USD",
    "amount": 100,
    "cvv": "123",
    "provider": "SIMULATOR",
}


@pytest.fixture
def client(registry, memory_store):
    orchestrator = PaymentOrchestrator(registry, memory_store)
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestCreatePayment:
    def test_created(self, client, simulator_bank):
        resp = client.post("/payments", json=PAYMENT_BODY)

        assert resp.status_code == 201
        data = resp.json()
        assert data["status"] == "Authorized"
        assert data["last_four_card_digits"] == "3456"
        assert data["expiry_month"] == 12
        assert data["expiry_year"] == 2099
        assert data["currency"] == "USD"
        assert data["amount"] == 100
        assert "card_number" not in data
        assert "cvv" not in data
        assert REPLAYED_HEADER not in resp.headers
        assert len(simulator_bank.calls) == 1

    def test_declined(self, client, simulator_bank):
        simulator_bank.authorized = False

        resp = client.post("/payments", json=PAYMENT_BODY)

        assert resp.status_code == 201
        assert resp.json()["status"] == "Declined"

    def test_same_key_same_body_replays(self, client, simulator_bank):
        headers = {"Idempotency-Key": "unique-key-123"}

        first = client.post("/payments", json=PAYMENT_BODY, headers=headers)
        second = client.post("/payments", json=PAYMENT_BODY, headers=headers)

        assert first.status_code == 201
        assert second.status_code == 201
        assert second.json() == first.json()
        assert second.headers[REPLAYED_HEADER] == "true"
        assert len(simulator_bank.calls) == 1

    def test_empty_idempotency_key_is_ignored(self, client, simulator_bank):
        headers = {"Idempotency-Key": ""}

        first = client.post("/payments", json=PAYMENT_BODY, headers=headers)
        second = client.post("/payments", json={**PAYMENT_BODY, "amount": 200}, headers=headers)

        assert first.status_code == 201
        assert second.status_code == 201
        assert first.json()["id"] != second.json()["id"]
        assert REPLAYED_HEADER not in second.headers
        assert len(simulator_bank.calls) == 2

    def test_same_key_different_body_conflicts(self, client, simulator_bank):
        headers = {"Idempotency-Key": "conflict-key-123"}

        client.post("/payments", json=PAYMENT_BODY, headers=headers)
        resp = client.post("/payments", json={**PAYMENT_BODY, "amount": 200}, headers=headers)

        assert resp.status_code == 409
        assert resp.json()["detail"]["error"] == "idempotency_conflict"
        assert len(simulator_bank.calls) == 1

    def test_stripe_provider_routes_to_stripe(self, client, simulator_bank, stripe_bank):
        resp = client.post("/payments", json={**PAYMENT_BODY, "provider": "STRIPE"})

        assert resp.status_code == 201
        assert len(stripe_bank.calls) == 1
        assert simulator_bank.calls == []

    def test_unsupported_provider(self, client):
        resp = client.post("/payments", json={**PAYMENT_BODY, "provider": "PAYPAL"})

        assert resp.status_code == 422
        assert resp.json()["detail"]["error"] == "unsupported_provider"

    def test_bank_unavailable(self, client, simulator_bank):
        simulator_bank.error = ProviderUnavailableError("Bank service unavailable", status_code=503)

        resp = client.post("/payments", json=PAYMENT_BODY)

        assert resp.status_code == 502
        assert resp.json()["detail"]["error"] == "provider_unavailable"

    @pytest.mark.parametrize("field,value", [
        ("card_number", "1234"),
        ("card_number", "12345678901234abc"),
        ("expiry_month", 13),
        ("expiry_year", 2000),
        ("currency", "usd"),
        ("amount", 0),
        ("cvv", "12"),
    ])
    def test_structural_validation(self, client, simulator_bank, field, value):
        resp = client.post("/payments", json={**PAYMENT_BODY, field: value})

        assert resp.status_code == 422
        assert simulator_bank.calls == []


class TestGetPayment:
    def test_existing_payment(self, client):
        created = client.post("/payments", json=PAYMENT_BODY).json()

        resp = client.get(f"/payments/{created['id']}")

        assert resp.status_code == 200
        assert resp.json() == created

    def test_unknown_payment(self, client):
        resp = client.get("/payments/00000000-0000-0000-0000-000000000000")

        assert resp.status_code == 404
        assert resp.json()["detail"]["error"] == "not_found"


def test_health_lists_providers(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "providers": ["SIMULATOR", "STRIPE"]}


def test_every_error_kind_has_a_status_code():
    assert set(ERROR_STATUS_CODES) == set(ErrorKind)


class _NewYearUtc(datetime):
    """2031-01-01 00:30 UTC, still 2030 in timezones west of UTC."""

    @classmethod
    def now(cls, tz=None):
        return datetime(2031, 1, 1, 0, 30, tzinfo=timezone.utc).astimezone(tz)


class TestExpiryYearClock:
    def test_year_check_uses_utc(self, client, monkeypatch):
        monkeypatch.setattr(payments_api, "datetime", _NewYearUtc)

        stale = client.post("/payments", json={**PAYMENT_BODY, "expiry_year": 2030})
        current = client.post("/payments", json={**PAYMENT_BODY, "expiry_year": 2031})

        assert stale.status_code == 422
        assert current.status_code == 201
