from unittest.mock import MagicMock

import pytest

from crash_monitor.fetch.errors import InvalidIndicatorError, MalformedResponseError, ProviderConnectionError
from crash_monitor.fetch.service import IndicatorFetchService

from helpers import text_message


def _service(message=None, strict=False):
    client = MagicMock()
    client.create_message.return_value = message
    return IndicatorFetchService(client=client, strict=strict), client


def test_vix_reading_is_returned_verbatim():
    reply = text_message('```json\n{"value": 18.5, "change": "+0.3", "asOf": "2026-02-20"}\n```')
    service, client = _service(reply)

    result = service.fetch("vix")

    assert result == {"value": 18.5, "change": "+0.3", "asOf": "2026-02-20"}
    prompt = client.create_message.call_args[0][0]
    assert "VIX" in prompt


@pytest.mark.parametrize("bad_id", ["bogus", "credit", "", None, 5])
def test_invalid_indicator_never_reaches_provider(bad_id):
    service, client = _service()

    with pytest.raises(InvalidIndicatorError) as exc_info:
        service.fetch(bad_id)

    assert exc_info.value.status_code == 400
    client.create_message.assert_not_called()


def test_reply_without_json_is_malformed():
    service, _ = _service(text_message("Sorry, I could not find it."))

    with pytest.raises(MalformedResponseError):
        service.fetch("hyspread")


def test_lenient_mode_does_not_check_fields():
    service, _ = _service(text_message('{"price": "n/a"}'))

    assert service.fetch("usdkrw") == {"price": "n/a"}


def test_strict_mode_validates_reading():
    service, _ = _service(text_message('{"price": "n/a"}'), strict=True)

    with pytest.raises(MalformedResponseError):
        service.fetch("usdkrw")


def test_fetch_reading_returns_model():
    service, _ = _service(text_message('{"value": 3.12, "change": "-0.05", "asOf": "2026-02-20"}'))

    reading = service.fetch_reading("hyspread")

    assert reading.value == 3.12
    assert reading.as_of == "2026-02-20"


def test_unreachable_provider_is_logged_and_raised(caplog):
    service, client = _service()
    client.create_message.side_effect = ProviderConnectionError("Model API unreachable: connection refused")

    with caplog.at_level("ERROR", logger="crash_monitor.fetch.service"):
        with pytest.raises(ProviderConnectionError):
            service.fetch("usdkrw")

    assert "usdkrw" in caplog.text
    assert "connection refused" in caplog.text
