"""Unit tests for configuration resolution."""

import pytest

from zai_client.config import ZAI_BASE_URL, ZHIPUAI_BASE_URL, Settings, resolve_config
from zai_client.runtime.errors import ErrorKind, ZaiError

ENV_VARS = ["ZAI_API_KEY", "ZAI_BASE_URL", "ZAI_MAX_RETRIES", "ZAI_TIMEOUT", "ZAI_SOURCE_CHANNEL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove ZAI_* variables so the host environment cannot leak in."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def load_settings() -> Settings:
    return Settings(_env_file=None)


class TestSettings:
    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("ZAI_API_KEY", "env-key")
        monkeypatch.setenv("ZAI_MAX_RETRIES", "5")
        monkeypatch.setenv("ZAI_TIMEOUT", "12.5")

        settings = load_settings()

        assert settings.API_KEY == "env-key"
        assert settings.MAX_RETRIES == 5
        assert settings.TIMEOUT == 12.5
        assert settings.LOG_LEVEL == "INFO"

    def test_defaults_are_unset(self):
        settings = load_settings()

        assert settings.API_KEY is None
        assert settings.BASE_URL is None
        assert settings.MAX_RETRIES is None


class TestResolveConfig:
    def test_missing_api_key(self):
        with pytest.raises(ZaiError) as exc_info:
            resolve_config(ZAI_BASE_URL, settings=load_settings())

        assert exc_info.value.kind is ErrorKind.CONFIGURATION
        assert "api_key not provided" in exc_info.value.message

    def test_empty_api_key_is_missing(self):
        with pytest.raises(ZaiError):
            resolve_config(ZAI_BASE_URL, api_key="", settings=load_settings())

    def test_defaults(self):
        config = resolve_config(ZAI_BASE_URL, api_key="k", settings=load_settings())

        assert config.api_key == "k"
        assert config.base_url == ZAI_BASE_URL
        assert config.timeout == 300.0
        assert config.max_retries == 2
        assert config.source_channel == "python-sdk"
        assert config.custom_headers == {}

    def test_variant_default_base_url(self):
        config = resolve_config(ZHIPUAI_BASE_URL, api_key="k", settings=load_settings())

        assert config.base_url == "https://open.bigmodel.cn/api/paas/v4"

    def test_environment_fills_missing_arguments(self, monkeypatch):
        monkeypatch.setenv("ZAI_API_KEY", "env-key")
        monkeypatch.setenv("ZAI_BASE_URL", "https://proxy.example/v4")

        config = resolve_config(ZAI_BASE_URL, settings=load_settings())

        assert config.api_key == "env-key"
        assert config.base_url == "https://proxy.example/v4"

    def test_explicit_arguments_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("ZAI_API_KEY", "env-key")
        monkeypatch.setenv("ZAI_BASE_URL", "https://proxy.example/v4")
        monkeypatch.setenv("ZAI_MAX_RETRIES", "7")

        config = resolve_config(
            ZAI_BASE_URL,
            api_key="arg-key",
            base_url="https://arg.example/v4",
            max_retries=1,
            settings=load_settings(),
        )

        assert config.api_key == "arg-key"
        assert config.base_url == "https://arg.example/v4"
        assert config.max_retries == 1

    def test_zero_retries_is_honoured(self, monkeypatch):
        assert resolve_config(
            ZAI_BASE_URL, api_key="k", max_retries=0, settings=load_settings()
        ).max_retries == 0

        monkeypatch.setenv("ZAI_MAX_RETRIES", "0")
        assert resolve_config(ZAI_BASE_URL, api_key="k", settings=load_settings()).max_retries == 0

    def test_negative_retries_rejected(self):
        with pytest.raises(Exception):
            resolve_config(ZAI_BASE_URL, api_key="k", max_retries=-1, settings=load_settings())

    def test_config_is_frozen(self):
        config = resolve_config(ZAI_BASE_URL, api_key="k", settings=load_settings())

        with pytest.raises(Exception):
            config.api_key = "other"

    def test_custom_headers_are_copied(self):
        headers = {"X-Trace": "1"}

        config = resolve_config(
            ZAI_BASE_URL, api_key="k", custom_headers=headers, settings=load_settings()
        )
        headers["X-Trace"] = "2"

        assert config.custom_headers == {"X-Trace": "1"}
