"""
Tests for the receipt HTTP endpoints.
"""

import json

import pytest
from fastapi.testclient import TestClient

from receipt_engine.config import settings
from receipt_engine.dependencies import get_artifact_store, get_printer
from receipt_engine.facilities.stub import StubPrinter
from receipt_engine.main import app

WITHDRAWAL_TX = {
    "id": "wd-1",
    "type": "Withdrawal",
    "status": "Successful",
    "amount": "-₦10,000",
    "date": "2024-01-01",
    "details": {
        "isNGNZWithdrawal": True,
        "bankName": "Zenith",
        "accountName": "Jane Doe",
        "accountNumber": "0123456789",
        "amountSentToBank": 10000,
        "withdrawalFee": 50,
        "currency": "NGN",
    },
}


@pytest.fixture
def client(artifact_store):
    app.dependency_overrides[get_artifact_store] = lambda: artifact_store
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["printer"] == "reportlab"
        assert body["version"] == settings.APP_VERSION


class TestRows:
    """POST /api/v1/receipts/rows"""

    def test_object_payload(self, client):
        response = client.post("/api/v1/receipts/rows", json={"tx": WITHDRAWAL_TX})
        assert response.status_code == 200
        body = response.json()
        assert body["available"]
        assert body["category"] == "withdrawal"
        assert body["receipt_id"] == "wd-1"
        assert [row["label"] for row in body["rows"]] == [
            "Type", "Date", "Bank Name", "Account Name", "Account Number",
            "Sent to Bank", "Withdrawal Fee", "Currency",
        ]
        assert body["summary"]["status_tone"] == "success"

    def test_string_payload(self, client):
        response = client.post("/api/v1/receipts/rows", json={"tx": json.dumps(WITHDRAWAL_TX)})
        assert response.json()["available"]

    def test_bad_payload_is_not_an_error(self, client):
        response = client.post("/api/v1/receipts/rows", json={"tx": "{broken"})
        assert response.status_code == 200
        body = response.json()
        assert not body["available"]
        assert body["message"] == "No transaction selected"
        assert body["rows"] == []


class TestDocument:
    """POST /api/v1/receipts/document"""

    def test_html(self, client):
        response = client.post("/api/v1/receipts/document", json={"tx": WITHDRAWAL_TX})
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        assert "₦10,000" in response.text
        assert "Thank you for choosing" in response.text

    def test_missing(self, client):
        response = client.post("/api/v1/receipts/document", json={})
        assert response.status_code == 404


class TestExport:
    """POST /api/v1/receipts/export"""

    def test_pdf(self, client, artifact_store):
        response = client.post("/api/v1/receipts/export", json={"tx": WITHDRAWAL_TX})
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.content.startswith(b"%PDF")
        assert "receipt-wd-1.pdf" in response.headers["content-disposition"]
        assert not list(artifact_store.root.rglob("*.pdf"))

    def test_missing(self, client):
        response = client.post("/api/v1/receipts/export", json={"tx": None})
        assert response.status_code == 404

    def test_generation_failure(self, client, tmp_path):
        app.dependency_overrides[get_printer] = lambda: StubPrinter(tmp_path, fail=True)
        response = client.post("/api/v1/receipts/export", json={"tx": WITHDRAWAL_TX})
        assert response.status_code == 502
        assert response.json()["detail"] == {
            "title": "Share failed",
            "message": "Could not generate PDF receipt. Please try again.",
        }


class TestApiKey:
    def test_key_required_when_configured(self, client, monkeypatch):
        monkeypatch.setattr(settings, "API_KEY", "secret")
        assert client.post("/api/v1/receipts/rows", json={}).status_code == 401
        response = client.post("/api/v1/receipts/rows", json={}, headers={"X-API-Key": "secret"})
        assert response.status_code == 200
