from __future__ import annotations

import pytest

from cvtailor.config import (
    CacheConfig,
    ConfigurationError,
    MissingConfigurationError,
    RateLimit,
    env_flag,
    env_float,
    get_api_config,
    get_preview_settings,
    require_env_var,
    require_env_vars,
)

_API_KNOBS = (
    "CVTAILOR_API_TIMEOUT",
    "CVTAILOR_API_RETRIES",
    "CVTAILOR_API_RATE_LIMIT",
    "CVTAILOR_HTTP_CACHE",
)


@pytest.fixture
def api_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.setenv("CVTAILOR_API_URL", "https://cv.example.test/api")
    monkeypatch.setenv("CVTAILOR_API_TOKEN", " secret ")
    for name in _API_KNOBS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_require_env_vars_returns_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "value")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_lists_every_missing_name(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_B", raising=False)
    monkeypatch.setenv("MISSING_A", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert str(exc.value) == "Missing configuration for: MISSING_A, MISSING_B"
    assert exc.value.names == ("MISSING_A", "MISSING_B")


def test_require_env_var_handles_blank_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    with pytest.raises(MissingConfigurationError):
        require_env_var("EXAMPLE_VAR")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), (" yes ", True), ("off", False), ("0", False)],
)
def test_env_flag_parses_booleans(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool  # noqa: FBT001
) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", raw)

    assert env_flag("EXAMPLE_FLAG", default=not expected) is expected


def test_env_flag_defaults_when_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", "")

    assert env_flag("EXAMPLE_FLAG", default=True) is True


def test_env_flag_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", "maybe")

    with pytest.raises(ConfigurationError):
        env_flag("EXAMPLE_FLAG", default=False)


def test_env_float_rejects_non_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_NUMBER", "fast")

    with pytest.raises(ConfigurationError):
        env_float("EXAMPLE_NUMBER", default=1.0)


def test_api_config_requires_url_and_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CVTAILOR_API_URL", raising=False)
    monkeypatch.delenv("CVTAILOR_API_TOKEN", raising=False)

    with pytest.raises(MissingConfigurationError, match="CVTAILOR_API_TOKEN, CVTAILOR_API_URL"):
        get_api_config()


def test_api_config_defaults(api_env: pytest.MonkeyPatch) -> None:
    config = get_api_config()

    assert config.base_url == "https://cv.example.test/api/"
    assert config.token == "secret"
    assert config.resilience.base_url == config.base_url
    assert config.resilience.timeout_seconds is None
    assert config.resilience.retry.total == 0
    assert config.resilience.ratelimit is None
    assert config.resilience.cache is None


def test_api_config_reads_optional_knobs(api_env: pytest.MonkeyPatch) -> None:
    api_env.setenv("CVTAILOR_API_TIMEOUT", "12.5")
    api_env.setenv("CVTAILOR_API_RETRIES", "2")
    api_env.setenv("CVTAILOR_API_RATE_LIMIT", "4")
    api_env.setenv("CVTAILOR_HTTP_CACHE", "SQLite")

    resilience = get_api_config().resilience

    assert resilience.timeout_seconds == 12.5
    assert resilience.retry.total == 2
    assert resilience.ratelimit == RateLimit(max_calls=4, per_seconds=1.0)
    assert resilience.cache == CacheConfig(backend="sqlite")


def test_api_config_rejects_unknown_cache_backend(api_env: pytest.MonkeyPatch) -> None:
    api_env.setenv("CVTAILOR_HTTP_CACHE", "redis")

    with pytest.raises(ConfigurationError, match="redis"):
        get_api_config()


def test_preview_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CVTAILOR_PREVIEW_DEBOUNCE_MS", raising=False)
    monkeypatch.delenv("CVTAILOR_MANUAL_OVERRIDES", raising=False)

    settings = get_preview_settings()

    assert settings.debounce_seconds == pytest.approx(0.45)
    assert settings.manual_overrides_enabled is True


def test_preview_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CVTAILOR_PREVIEW_DEBOUNCE_MS", "0")
    monkeypatch.setenv("CVTAILOR_MANUAL_OVERRIDES", "false")

    settings = get_preview_settings()

    assert settings.debounce_seconds == 0
    assert settings.manual_overrides_enabled is False


def test_preview_settings_reject_negative_debounce(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CVTAILOR_PREVIEW_DEBOUNCE_MS", "-1")

    with pytest.raises(ConfigurationError):
        get_preview_settings()
