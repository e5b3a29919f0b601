"""
Tests for screen-level orchestration.
"""

import json
from datetime import datetime, timezone
from urllib.parse import quote

import pytest

from receipt_engine.models.enums import Category, StatusTone
from receipt_engine.pipeline.orchestrator import (
    build_receipt_view,
    document_for,
    load_envelope,
    open_receipt,
    parse_param,
    receipt_id_for,
)
from receipt_engine.schemas.envelope import Envelope

TX = {
    "id": "tx/001",
    "type": "Swap",
    "status": "Successful",
    "amount": "-1.5 BTC",
    "date": "2024-02-01",
    "details": {"category": "token", "currency": "BTC", "narration": "Swapped 1.5 BTC to 45000 USDT"},
}


class TestParseParam:
    """Screen parameters arrive in several shapes."""

    def test_plain_json(self):
        assert parse_param(json.dumps(TX)) == TX

    def test_url_encoded_json(self):
        assert parse_param(quote(json.dumps(TX))) == TX

    def test_percent_sign_in_plain_json(self):
        value = json.dumps({"narration": "100% done"})
        assert parse_param(value) == {"narration": "100% done"}

    def test_list_uses_first(self):
        assert parse_param([json.dumps({"a": 1}), json.dumps({"a": 2})]) == {"a": 1}

    def test_mapping_passthrough(self):
        assert parse_param({"a": 1}) == {"a": 1}

    def test_bytes(self):
        assert parse_param(b'{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("value", [None, "", "   ", "{not json", [], 42])
    def test_unusable(self, value):
        assert parse_param(value) is None


class TestLoadEnvelope:
    """Only JSON objects become envelopes."""

    def test_object(self):
        envelope = load_envelope(json.dumps(TX))
        assert envelope.type == "Swap"
        assert envelope.details["currency"] == "BTC"

    def test_numbers_coerced(self):
        envelope = load_envelope({"amount": 10000, "id": 7})
        assert envelope.amount == "10000"
        assert envelope.id == "7"

    @pytest.mark.parametrize("value", ["[1, 2]", '"text"', "garbage", None])
    def test_rejected(self, value):
        assert load_envelope(value) is None

    def test_null_display_fields_blank(self):
        envelope = load_envelope({"type": None, "status": None, "amount": None, "date": None})
        assert (envelope.type, envelope.status, envelope.amount, envelope.date) == ("", "", "", "")

    def test_invalid_details(self):
        assert load_envelope({"details": "not an object"}) is None


class TestReceiptId:
    """Ids are filesystem-safe and stable."""

    def test_from_envelope_id(self):
        assert receipt_id_for(Envelope.model_validate({"id": "tx/001"})) == "tx-001"

    def test_digest_when_missing(self):
        envelope = Envelope.model_validate({"type": "Send", "amount": "5"})
        first = receipt_id_for(envelope)
        assert first == receipt_id_for(Envelope.model_validate({"type": "Send", "amount": "5"}))
        assert len(first) == 16

    def test_digest_when_id_unusable(self):
        assert len(receipt_id_for(Envelope.model_validate({"id": "///"}))) == 16


class TestOpenReceipt:
    """End-to-end from parameters to screen state."""

    def test_no_transaction(self):
        screen = open_receipt(None)
        assert not screen.available
        assert screen.message == "No transaction selected"
        assert screen.view is None

    def test_malformed(self):
        assert not open_receipt("{oops").available

    def test_swap_receipt(self):
        screen = open_receipt(quote(json.dumps(TX)))
        view = screen.view
        assert screen.available
        assert view.receipt_id == "tx-001"
        assert view.category == Category.TOKEN
        assert view.summary.title == "Swap"
        assert view.summary.status_tone == StatusTone.SUCCESS
        assert [row.label for row in view.rows] == ["Type", "Date", "From", "To", "Currency"]

    def test_raw_payload_used(self):
        tx = {"type": "Withdrawal", "isNGNZWithdrawal": True}
        raw = {"receiptData": {"bankName": "Access", "accountNumber": "0001112223"}}
        view = open_receipt(json.dumps(tx), json.dumps(raw)).view
        assert view.category == Category.WITHDRAWAL
        assert [row.label for row in view.rows] == ["Type", "Date", "Bank Name", "Account Number"]

    def test_non_object_raw_ignored(self):
        view = open_receipt(json.dumps(TX), "[1, 2, 3]").view
        assert view.category == Category.TOKEN

    def test_view_is_rebuildable(self, withdrawal_envelope):
        assert build_receipt_view(withdrawal_envelope) == build_receipt_view(withdrawal_envelope)


class TestDocumentFor:
    """Documents are rendered from the view's own rows."""

    def test_document(self, withdrawal_envelope):
        view = build_receipt_view(withdrawal_envelope)
        moment = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
        document = document_for(view, generated_at=moment)
        assert document.receipt_id == view.receipt_id
        assert document.rows == view.rows
        assert document.summary.title == "Withdrawal"
        assert "₦10,000" in document.html


class TestNullDisplayFields:
    """Null envelope display fields render as placeholders instead of rejecting the receipt."""

    def test_null_date_uses_created_at(self):
        screen = open_receipt({
            "type": "Send",
            "date": None,
            "createdAt": "2024-01-01T10:30:00Z",
            "details": {"hash": "0xabc"},
        })
        assert screen.available
        date_row = screen.view.rows[1]
        assert date_row.label == "Date"
        assert date_row.value == "Jan 01, 2024, 10:30 AM"

    def test_null_type_and_status(self):
        screen = open_receipt({"type": None, "status": None, "amount": None, "details": {"hash": "0xabc"}})
        view = screen.view
        assert screen.available
        assert view.rows[0].value == "—"
        assert view.summary.title == "Transaction"
        assert view.summary.status_tone == StatusTone.PENDING
