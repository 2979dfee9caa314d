from unittest.mock import MagicMock, patch

import pytest
import requests

from Notification_module import telegram_service
from Notification_module.notification_errors import TelegramDeliveryError


def _response(status_code, payload):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload
    return response


def test_sends_message_to_configured_chat(telegram_settings):
    ok = _response(200, {"ok": True, "result": {"message_id": 7}})
    with patch("Notification_module.telegram_service.requests.post", return_value=ok) as post:
        result = telegram_service.send_telegram_message("New email submission: user@example.com")

    assert result["ok"] is True
    post.assert_called_once()
    args, kwargs = post.call_args
    assert args[0] == "https://api.telegram.test/bot123:test-token/sendMessage"
    assert kwargs["json"] == {"chat_id": "6015", "text": "New email submission: user@example.com"}
    assert kwargs["timeout"] == telegram_settings.TELEGRAM_TIMEOUT_SECONDS


def test_error_status_raises_with_details(telegram_settings):
    unauthorized = _response(401, {"ok": False, "error_code": 401, "description": "Unauthorized"})
    with patch("Notification_module.telegram_service.requests.post", return_value=unauthorized):
        with pytest.raises(TelegramDeliveryError) as exc_info:
            telegram_service.send_telegram_message("hello")

    assert exc_info.value.channel == "telegram"
    assert exc_info.value.details["description"] == "Unauthorized"


def test_error_status_with_non_json_body(telegram_settings):
    bad_gateway = _response(502, None)
    bad_gateway.json.side_effect = ValueError("not json")
    bad_gateway.text = "<html>Bad Gateway</html>"
    with patch("Notification_module.telegram_service.requests.post", return_value=bad_gateway):
        with pytest.raises(TelegramDeliveryError) as exc_info:
            telegram_service.send_telegram_message("hello")

    assert exc_info.value.details == "<html>Bad Gateway</html>"


@pytest.mark.parametrize("error", [
    requests.exceptions.ConnectionError("connection refused"),
    requests.exceptions.Timeout("read timed out"),
])
def test_transport_errors_raise(telegram_settings, error):
    with patch("Notification_module.telegram_service.requests.post", side_effect=error):
        with pytest.raises(TelegramDeliveryError):
            telegram_service.send_telegram_message("hello")


def test_missing_configuration_raises_without_request(monkeypatch, telegram_settings):
    monkeypatch.setattr(telegram_settings, "TELEGRAM_BOT_TOKEN", None)
    with patch("Notification_module.telegram_service.requests.post") as post:
        with pytest.raises(TelegramDeliveryError, match="not configured"):
            telegram_service.send_telegram_message("hello")

    post.assert_not_called()
