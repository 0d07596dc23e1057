"""Tests for the typed AppConfig dataclass and log level helpers."""

import pytest

import chatmemo.config as config_module
from chatmemo.config import (
    AppConfig,
    DiscordConfig,
    GrafanaConfig,
    ParserConfig,
    WebhookConfig,
    log_enabled,
    set_log_level,
)

ENV_KEYS = (
    "LOG_LEVEL",
    "PORT",
    "MEMO_TRIGGER",
    "MEMO_DEFAULT_OFFSET_SECONDS",
    "DISCORD_ENABLED",
    "DISCORD_BOT_TOKEN",
    "WEBHOOK_ENABLED",
    "WEBHOOK_TOKEN",
    "GRAFANA_API_KEY",
    "GRAFANA_API_URL",
    "GRAFANA_TLS_KEY",
    "GRAFANA_TLS_CERT",
)


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so monkeypatch restores values written by load_dotenv
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


class TestParserConfig:
    def test_defaults(self):
        c = ParserConfig()
        assert c.trigger == "memo "
        assert c.alternate_prefixes == ("memo:", "mrbot:", "memobot:")
        assert c.reserved_tag_keys == ("author:", "chan:")
        assert c.default_offset_seconds == 25


class TestAppConfig:
    def test_defaults(self):
        c = AppConfig()
        assert c.port == 3000
        assert c.log_level == "info"
        assert isinstance(c.parser, ParserConfig)
        assert isinstance(c.grafana, GrafanaConfig)
        assert isinstance(c.discord, DiscordConfig)
        assert isinstance(c.webhook, WebhookConfig)
        assert c.discord.enabled is False
        assert c.webhook.enabled is False

    def test_from_env(self, clean_env):
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("LOG_LEVEL", "DEBUG")
        clean_env.setenv("GRAFANA_API_KEY", "key123")
        clean_env.setenv("GRAFANA_API_URL", "http://grafana/api")
        clean_env.setenv("DISCORD_ENABLED", "true")
        clean_env.setenv("DISCORD_BOT_TOKEN", "tok")
        clean_env.setenv("MEMO_DEFAULT_OFFSET_SECONDS", "60")
        c = AppConfig.from_env()
        assert c.port == 8080
        assert c.log_level == "debug"
        assert c.grafana.api_key == "key123"
        assert c.grafana.api_url == "http://grafana/api"
        assert c.discord.enabled is True
        assert c.discord.bot_token == "tok"
        assert c.webhook.enabled is False
        assert c.parser.default_offset_seconds == 60

    def test_from_env_defaults(self, clean_env):
        c = AppConfig.from_env()
        assert c.port == 3000
        assert c.parser.trigger == "memo "
        assert c.grafana.api_key == ""

    def test_invalid_int_falls_back(self, clean_env):
        clean_env.setenv("PORT", "eighty")
        assert AppConfig.from_env().port == 3000

    def test_blank_trigger_falls_back(self, clean_env):
        clean_env.setenv("MEMO_TRIGGER", "   ")
        assert AppConfig.from_env().parser.trigger == "memo "

    def test_env_file(self, clean_env, tmp_path):
        clean_env.setenv("GRAFANA_API_KEY", "from-env")
        env_file = tmp_path / "memo.env"
        env_file.write_text(
            "GRAFANA_API_KEY=from-file\n"
            "GRAFANA_API_URL=http://file/api\n"
            "WEBHOOK_ENABLED=1\n"
            "WEBHOOK_TOKEN=s3cret\n"
        )
        c = AppConfig.from_env(str(env_file))
        assert c.grafana.api_key == "from-file"
        assert c.grafana.api_url == "http://file/api"
        assert c.webhook.enabled is True
        assert c.webhook.token == "s3cret"


class TestLogLevel:
    @pytest.fixture(autouse=True)
    def restore_level(self):
        saved = config_module.LOG_LEVEL
        yield
        config_module.LOG_LEVEL = saved

    def test_set_and_check(self):
        assert set_log_level("warn") == "warn"
        assert log_enabled("error") is True
        assert log_enabled("warn") is True
        assert log_enabled("info") is False

    def test_trace_enables_everything(self):
        set_log_level("TRACE")
        assert all(log_enabled(level) for level in config_module.LOG_LEVELS)

    def test_unknown_level_falls_back(self):
        assert set_log_level("verbose") == "info"
        assert log_enabled("debug") is False
