import pytest

from crash_monitor.config import ConfigurationError, load_settings


def test_defaults_from_empty_environment():
    settings = load_settings({})

    assert settings.api_key == ""
    assert settings.model == "claude-haiku-4-5-20251001"
    assert settings.api_version == "2023-06-01"
    assert settings.max_tokens == 512
    assert settings.max_attempts == 3
    assert settings.backoff_ms == 3000
    assert settings.timeout_seconds is None
    assert settings.fetch_delay_seconds == 2.0
    assert settings.service_url is None
    assert settings.strict is False


def test_overrides():
    settings = load_settings(
        {
            "ANTHROPIC_API_KEY": " sk-test ",
            "FETCH_MAX_ATTEMPTS": "5",
            "FETCH_TIMEOUT_SECONDS": "30",
            "FETCH_STRICT": "true",
            "DASHBOARD_SERVICE_URL": "http://localhost:8000/api/fetch-indicator",
            "LOG_LEVEL": "debug",
        }
    )

    assert settings.api_key == "sk-test"
    assert settings.max_attempts == 5
    assert settings.timeout_seconds == 30.0
    assert settings.strict is True
    assert settings.service_url.endswith("/api/fetch-indicator")
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env",
    [
        {"FETCH_MAX_ATTEMPTS": "three"},
        {"FETCH_MAX_ATTEMPTS": "0"},
        {"FETCH_TIMEOUT_SECONDS": "-1"},
    ],
)
def test_invalid_numbers_rejected(env):
    with pytest.raises(ConfigurationError):
        load_settings(env)
