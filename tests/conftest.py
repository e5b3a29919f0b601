"""
Shared test fixtures.
"""

from datetime import datetime, timezone

import pytest

from receipt_engine.schemas.envelope import Envelope
from receipt_engine.schemas.receipt import CanonicalRow, ReceiptSummary
from receipt_engine.models.enums import StatusTone
from receipt_engine.storage.artifact_store import ArtifactStore


@pytest.fixture
def withdrawal_envelope():
    """NGNZ withdrawal as the history screen serializes it."""
    return Envelope.model_validate({
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
    })


@pytest.fixture
def token_envelope():
    """Outgoing USDT transfer on Tron."""
    return Envelope.model_validate({
        "type": "Send",
        "status": "Successful",
        "amount": "-25 USDT",
        "date": "Jan 15, 2024, 10:30 AM",
        "details": {
            "category": "token",
            "currency": "USDT",
            "network": "TRON",
            "address": "TXyz1234567890abcdefABCDEF",
            "hash": "abc123def456abc123def456",
            "fee": "1.5",
        },
    })


@pytest.fixture
def swap_envelope():
    """Swap whose legs are only recoverable from the narration."""
    return Envelope.model_validate({
        "type": "Swap",
        "status": "Successful",
        "amount": "-1.5 BTC",
        "date": "2024-02-01",
        "details": {
            "category": "token",
            "currency": "BTC",
            "narration": "Swapped 1.5 BTC to 45000 USDT",
        },
    })


@pytest.fixture
def utility_envelope():
    return Envelope.model_validate({
        "type": "Airtime",
        "status": "Pending",
        "amount": "-₦1,000",
        "date": "2024-03-10",
        "details": {
            "orderId": "ORD-778899",
            "productName": "MTN Airtime",
            "quantity": 1,
            "network": "MTN",
            "customerInfo": "08012345678",
            "paymentCurrency": "NGNZ",
        },
    })


@pytest.fixture
def sample_rows():
    return (
        CanonicalRow(label="Type", value="Withdrawal"),
        CanonicalRow(label="Date", value="2024-01-01"),
        CanonicalRow(
            label="Hash",
            value="abc123…f456",
            copyable="abc123def456abc123def456",
            external_link="https://tronscan.org/#/transaction/abc123def456abc123def456",
        ),
        CanonicalRow(label="Narration", value="Rent <March> & bills"),
    )


@pytest.fixture
def sample_summary():
    return ReceiptSummary(
        title="Withdrawal",
        amount="-25 USDT",
        status="Successful",
        status_tone=StatusTone.SUCCESS,
    )


@pytest.fixture
def generated_at():
    return datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def artifact_store(tmp_path):
    return ArtifactStore(root=str(tmp_path / "artifacts"))
