import pytest

from zaprelay.services.errors import MissingSenderError
from zaprelay.services.payload_normalizer import (
    NormalizedMessage,
    extract_owner,
    normalize_number,
    normalize_payload,
    resolve_path,
)


class TestNormalizeNumber:
    def test_strips_domain_suffix(self):
        assert normalize_number("5511999@s.whatsapp.net") == "5511999"

    def test_strips_device_suffix(self):
        assert normalize_number("5511999:12@s.whatsapp.net") == "5511999"

    def test_strips_formatting(self):
        assert normalize_number("+55 (11) 999-00") == "551199900"

    def test_empty_values(self):
        assert normalize_number(None) == ""
        assert normalize_number("") == ""
        assert normalize_number("status@broadcast") == ""


class TestSenderExtraction:
    @pytest.mark.parametrize(
        "payload",
        [
            {"message": {"chatid": "5511999@s.whatsapp.net"}},
            {"message": {"sender": "5511999@s.whatsapp.net"}},
            {"chat": {"wa_chatid": "5511999@s.whatsapp.net"}},
            {"from": "5511999@s.whatsapp.net"},
            {"message": {"key": {"remoteJid": "5511999@s.whatsapp.net"}}},
            {"message": {"sender_pn": "5511999@s.whatsapp.net"}},
        ],
    )
    def test_each_sender_shape_is_recognised(self, payload):
        result = normalize_payload(payload)
        assert result.raw_sender == "5511999@s.whatsapp.net"
        assert result.sender_number == "5511999"

    def test_earlier_path_wins(self):
        payload = {
            "message": {"chatid": "5511111@s.whatsapp.net", "sender": "5511222@s.whatsapp.net"},
            "from": "5511333",
        }
        assert normalize_payload(payload).sender_number == "5511111"

    def test_empty_value_falls_through(self):
        payload = {"message": {"chatid": "", "sender": "   "}, "from": "5511333"}
        assert normalize_payload(payload).sender_number == "5511333"

    def test_numeric_sender(self):
        assert normalize_payload({"from": 5511999}).sender_number == "5511999"

    def test_missing_sender_raises(self):
        with pytest.raises(MissingSenderError) as exc:
            normalize_payload({"message": {"text": "oi"}})
        assert exc.value.status_code == 400
        assert exc.value.message == "Número não encontrado"

    def test_sender_without_digits_raises(self):
        with pytest.raises(MissingSenderError):
            normalize_payload({"from": "status@broadcast"})

    @pytest.mark.parametrize("payload", [None, [], "texto", 42])
    def test_non_object_payload_raises(self, payload):
        with pytest.raises(MissingSenderError):
            normalize_payload(payload)


class TestTextExtraction:
    @pytest.mark.parametrize(
        "payload",
        [
            {"from": "1", "message": {"text": "oi"}},
            {"from": "1", "message": {"content": "oi"}},
            {"from": "1", "text": "oi"},
            {"from": "1", "body": "oi"},
            {"from": "1", "message": {"message": {"conversation": "oi"}}},
            {"from": "1", "message": {"extendedTextMessage": {"text": "oi"}}},
            {"from": "1", "message": {"imageMessage": {"caption": "oi"}}},
        ],
    )
    def test_each_text_shape_is_recognised(self, payload):
        assert normalize_payload(payload).text == "oi"

    def test_defaults_to_empty_string(self):
        assert normalize_payload({"from": "1"}).text == ""

    def test_structured_content_is_skipped(self):
        payload = {"from": "1", "message": {"content": {"url": "https://x"}, "imageMessage": {"caption": "foto"}}}
        assert normalize_payload(payload).text == "foto"

    def test_text_is_not_trimmed(self):
        assert normalize_payload({"from": "1", "text": "  oi  "}).text == "  oi  "


class TestFromMeAndOwner:
    def test_from_me_true(self):
        assert normalize_payload({"message": {"chatid": "1@s.whatsapp.net", "fromMe": True}}).from_me is True

    def test_from_me_in_message_key(self):
        payload = {"message": {"key": {"remoteJid": "1@s.whatsapp.net", "fromMe": True}}}
        assert normalize_payload(payload).from_me is True

    def test_from_me_requires_literal_true(self):
        assert normalize_payload({"message": {"chatid": "1", "fromMe": "true"}}).from_me is False
        assert normalize_payload({"message": {"chatid": "1"}}).from_me is False

    def test_explicit_owner(self):
        payload = {"message": {"chatid": "5511999@s.whatsapp.net", "owner": "5511888"}}
        assert normalize_payload(payload).owner == "5511888"

    def test_owner_derived_from_chat_id(self):
        assert extract_owner({"message": {"chatid": "5511777@s.whatsapp.net"}}) == "5511777"

    def test_owner_missing(self):
        assert normalize_payload({"from": "5511999"}).owner is None


def test_resolve_path_stops_at_non_objects():
    assert resolve_path({"message": "texto"}, ("message", "text")) is None
    assert resolve_path({"a": {"b": 1}}, ("a", "b")) == 1


def test_documented_scenario():
    payload = {"message": {"chatid": "5511999@s.whatsapp.net", "owner": "5511888", "text": "oi"}}
    assert normalize_payload(payload) == NormalizedMessage(
        raw_sender="5511999@s.whatsapp.net",
        sender_number="5511999",
        text="oi",
        from_me=False,
        owner="5511888",
    )
