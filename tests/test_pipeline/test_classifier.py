"""
Tests for category classification.
"""

import pytest

from receipt_engine.models.enums import Category
from receipt_engine.pipeline.classifier import classify, classify_with_signals
from receipt_engine.schemas.envelope import Envelope


class TestWithdrawalRule:
    """Rule 1: withdrawal flags and fiat withdrawals."""

    @pytest.mark.parametrize("flag", ["isNGNZWithdrawal", "isWithdrawal", "isWithdrawalFlag"])
    def test_flag_on_envelope(self, flag):
        assert classify({"type": "Airtime", flag: True}) == Category.WITHDRAWAL

    @pytest.mark.parametrize("flag", ["isNGNZWithdrawal", "isWithdrawal", "isWithdrawalFlag"])
    def test_flag_on_details(self, flag):
        assert classify({"type": "Send", "details": {flag: True}}) == Category.WITHDRAWAL

    def test_flag_beats_everything(self):
        envelope = {
            "isWithdrawalFlag": True,
            "type": "Electricity",
            "details": {
                "category": "utility",
                "transactionId": "tx-1",
                "hash": "0xabc",
                "orderId": "ORD-1",
            },
        }
        result = classify_with_signals(envelope)
        assert result.category == Category.WITHDRAWAL
        assert result.rule == "withdrawal"
        assert "FLAG:envelope.isWithdrawalFlag" in result.signals

    def test_false_flag_ignored(self):
        assert classify({"type": "Send", "isWithdrawal": False, "details": {"hash": "0x1"}}) == Category.TOKEN

    def test_fiat_currency_withdrawal_type(self):
        envelope = {"type": "NGNZ Withdrawal", "details": {"currency": "ngnz"}}
        assert classify(envelope) == Category.WITHDRAWAL

    def test_fiat_currency_without_withdrawal_type(self):
        # currency key alone is a token hint
        assert classify({"type": "Deposit", "details": {"currency": "NGN"}}) == Category.TOKEN

    def test_crypto_withdrawal_is_token(self):
        assert classify({"type": "Withdrawal", "details": {"currency": "USDT"}}) == Category.TOKEN


class TestTagRule:
    """Rule 2: explicit category tag."""

    def test_utility_tag(self):
        result = classify_with_signals({"type": "Send", "details": {"category": "utility", "hash": "0x1"}})
        assert result.category == Category.UTILITY
        assert result.rule == "tag"

    def test_unknown_tag_ignored(self):
        assert classify({"type": "Data", "details": {"category": "giftcard"}}) == Category.UTILITY


class TestHeuristicRule:
    """Rule 3: detail keys."""

    @pytest.mark.parametrize("key", ["transactionId", "currency", "hash", "address"])
    def test_token_keys(self, key):
        assert classify({"type": "Airtime", "details": {key: "x"}}) == Category.TOKEN

    @pytest.mark.parametrize("key", ["orderId", "productName", "billType", "customerInfo"])
    def test_utility_keys(self, key):
        assert classify({"type": "Send", "details": {key: "x"}}) == Category.UTILITY

    def test_token_keys_checked_first(self):
        assert classify({"details": {"orderId": "1", "hash": "0x1"}}) == Category.TOKEN


class TestTypeLabelRule:
    """Rule 4: type label fallback."""

    @pytest.mark.parametrize("label", ["Airtime", " cable tv ", "ELECTRICITY", "other"])
    def test_utility_labels(self, label):
        result = classify_with_signals({"type": label})
        assert result.category == Category.UTILITY
        assert result.rule == "type_label"

    def test_default_token(self):
        result = classify_with_signals({"type": "Deposit"})
        assert result.category == Category.TOKEN
        assert result.rule == "fallback"

    def test_empty_envelope(self):
        assert classify({}) == Category.TOKEN


class TestInputs:
    """Envelope models and mappings classify the same."""

    def test_model_and_mapping_agree(self, withdrawal_envelope, utility_envelope):
        assert classify(withdrawal_envelope) == Category.WITHDRAWAL
        assert classify(utility_envelope) == Category.UTILITY
        assert classify(utility_envelope.model_dump(by_alias=True)) == Category.UTILITY

    def test_deterministic(self, token_envelope):
        assert classify(token_envelope) == classify(token_envelope) == Category.TOKEN

    def test_envelope_instance(self):
        envelope = Envelope.model_validate({"type": "Swap", "details": {"narration": "Swapped"}})
        assert classify(envelope) == Category.TOKEN


class TestLooseInput:
    """Nulls, text flags and malformed keys never break classification."""

    def test_null_display_fields(self):
        envelope = {"isWithdrawalFlag": True, "type": None, "status": None, "amount": None, "date": None}
        assert classify(envelope) == Category.WITHDRAWAL

    def test_null_type_falls_back_to_token(self):
        assert classify({"type": None}) == Category.TOKEN

    def test_malformed_details_ignored(self):
        assert classify({"isWithdrawal": True, "details": ["not", "a", "mapping"]}) == Category.WITHDRAWAL

    @pytest.mark.parametrize("value", ["false", "False", "", "0", 1, None])
    def test_non_true_flags(self, value):
        assert classify({"type": "Send", "isWithdrawal": value}) == Category.TOKEN

    @pytest.mark.parametrize("value", [True, "true", " TRUE "])
    def test_true_flags(self, value):
        assert classify({"type": "Send", "details": {"isNGNZWithdrawal": value}}) == Category.WITHDRAWAL
