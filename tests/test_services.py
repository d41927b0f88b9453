"""Tests for the simulated backends (OTP, diagnosis, chat) and the price board."""

import random

import pytest

from anthaathi.market import SAMPLE_PRICES, search_prices
from anthaathi.models.audit import AuditEventType
from anthaathi.services.auth import SimulatedOtpService
from anthaathi.services.chat import FARMING_RESPONSES, WELCOME_TEXT, CannedChatService
from anthaathi.services.diagnosis import LEAF_BLIGHT, MockDiagnosisService
from anthaathi.validation import InputValidationError

from conftest import run


class TestSimulatedOtpService:

    def test_send_and_verify(self, audit_logger):
        service = SimulatedOtpService(send_delay=0, verify_delay=0, audit_logger=audit_logger)
        run(service.send_otp("9876543210"))
        assert run(service.verify_otp("9876543210", "4321")) is True

        types = [e.event_type for e in audit_logger.recent_events]
        assert types == [AuditEventType.OTP_VERIFIED, AuditEventType.OTP_REQUESTED]

    def test_invalid_phone_is_rejected_and_audited(self, audit_logger):
        service = SimulatedOtpService(send_delay=0, verify_delay=0, audit_logger=audit_logger)
        with pytest.raises(InputValidationError):
            run(service.send_otp("12345"))
        assert audit_logger.recent_events[0].event_type == AuditEventType.VALIDATION_FAILED

    def test_short_code_is_rejected(self):
        service = SimulatedOtpService(send_delay=0, verify_delay=0)
        with pytest.raises(InputValidationError) as exc_info:
            run(service.verify_otp("9876543210", "123"))
        assert str(exc_info.value) == "Please enter the 4-digit OTP"

    def test_default_delays_come_from_settings(self):
        service = SimulatedOtpService()
        assert service._send_delay == 1.0
        assert service._verify_delay == 0.8


class TestMockDiagnosisService:

    def test_returns_leaf_blight(self, audit_logger):
        service = MockDiagnosisService(delay=0, audit_logger=audit_logger)
        result = run(service.analyze(b"\x89PNG..."))

        assert result.disease == "Leaf Blight (Helminthosporium)"
        assert result.treatment.startswith("Apply Mancozeb 75% WP")
        assert result == LEAF_BLIGHT
        assert audit_logger.recent_events[0].event_type == AuditEventType.DIAGNOSIS_COMPLETED

    def test_result_is_a_copy(self):
        result = run(MockDiagnosisService(delay=0).analyze(b""))
        result.disease = "changed"
        assert LEAF_BLIGHT.disease == "Leaf Blight (Helminthosporium)"


class TestCannedChatService:

    def test_welcome_message(self):
        message = CannedChatService(delay=0).welcome_message()
        assert message.id == "welcome"
        assert message.text == WELCOME_TEXT
        assert not message.is_user

    def test_reply_is_one_of_the_canned_answers(self):
        service = CannedChatService(rng=random.Random(1), delay=0)
        reply = run(service.reply("How much seed for paddy?"))
        assert reply.text in FARMING_RESPONSES
        assert not reply.is_user

    def test_seeded_rng_pins_the_answer(self):
        expected = random.Random(3).choice(FARMING_RESPONSES)
        service = CannedChatService(rng=random.Random(3), delay=0)
        assert run(service.reply("hello")).text == expected

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_blank_input_is_ignored(self, text):
        assert run(CannedChatService(delay=0).reply(text)) is None

    def test_six_canned_answers(self):
        assert len(FARMING_RESPONSES) == 6

    def test_requires_responses(self):
        with pytest.raises(ValueError):
            CannedChatService(responses=())


class TestMarketPrices:

    def test_twelve_sample_rows(self):
        assert len(SAMPLE_PRICES) == 12
        assert SAMPLE_PRICES[0].crop == "Rice (Paddy)"
        assert SAMPLE_PRICES[-1].market == "Guntur"

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query_returns_everything(self, query):
        assert search_prices(query) == list(SAMPLE_PRICES)

    def test_matches_crop_ignoring_case(self):
        assert [p.crop for p in search_prices("TOMATO")] == ["Tomato"]

    def test_matches_market(self):
        assert [p.crop for p in search_prices("koyambedu")] == ["Rice (Paddy)", "Onion"]

    def test_matches_substring(self):
        assert [p.crop for p in search_prices("nut")] == ["Groundnut", "Coconut"]

    def test_no_match(self):
        assert search_prices("saffron") == []

    def test_prices_are_consistent(self):
        for price in SAMPLE_PRICES:
            assert price.min_price <= price.modal_price <= price.max_price
