"""Configuration and shared state."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

LOG_LEVELS = ("trace", "debug", "info", "warn", "error")
LOG_LEVEL = os.getenv("LOG_LEVEL", "info").strip().lower()
if LOG_LEVEL not in LOG_LEVELS:
    _stderr_print(f"Unsupported LOG_LEVEL={LOG_LEVEL!r}, falling back to 'info'")
    LOG_LEVEL = "info"


def set_log_level(level: str) -> str:
    """Change the process log level. Unknown levels fall back to 'info'."""
    global LOG_LEVEL
    level = level.strip().lower()
    if level not in LOG_LEVELS:
        _stderr_print(f"Unsupported log level {level!r}, falling back to 'info'")
        level = "info"
    LOG_LEVEL = level
    return LOG_LEVEL


def log_enabled(level: str) -> bool:
    return LOG_LEVELS.index(level) >= LOG_LEVELS.index(LOG_LEVEL)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        _stderr_print(f"Invalid {name}={raw!r}, falling back to {default}")
        return default


# ── Typed config ─────────────────────────────────────────────


@dataclass
class ParserConfig:
    trigger: str = "memo "
    alternate_prefixes: Tuple[str, ...] = ("memo:", "mrbot:", "memobot:")
    reserved_tag_keys: Tuple[str, ...] = ("author:", "chan:")
    default_offset_seconds: int = 25


@dataclass
class GrafanaConfig:
    # api_url is the Grafana instance URL with /api appended, e.g. http://localhost:3000/api
    api_key: str = ""
    api_url: str = ""
    # client certificate, for instances behind mutual TLS
    tls_key: str = ""
    tls_cert: str = ""


@dataclass
class DiscordConfig:
    enabled: bool = False
    bot_token: str = ""


@dataclass
class WebhookConfig:
    enabled: bool = False
    # shared secret sent by the chat platform; empty disables the check
    token: str = ""


@dataclass
class AppConfig:
    """Typed configuration for the daemon, the web app and the CLI."""

    log_level: str = "info"
    port: int = 3000
    parser: ParserConfig = field(default_factory=ParserConfig)
    grafana: GrafanaConfig = field(default_factory=GrafanaConfig)
    discord: DiscordConfig = field(default_factory=DiscordConfig)
    webhook: WebhookConfig = field(default_factory=WebhookConfig)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AppConfig":
        """Create AppConfig from environment variables.

        If env_file is given it is loaded first, overriding variables
        already present in the environment.
        """
        if env_file:
            load_dotenv(env_file, override=True)

        trigger = os.getenv("MEMO_TRIGGER", "memo ")
        if not trigger.strip():
            _stderr_print("Empty MEMO_TRIGGER, falling back to 'memo '")
            trigger = "memo "

        return cls(
            log_level=os.getenv("LOG_LEVEL", "info").strip().lower(),
            port=_env_int("PORT", 3000),
            parser=ParserConfig(
                trigger=trigger,
                default_offset_seconds=_env_int("MEMO_DEFAULT_OFFSET_SECONDS", 25),
            ),
            grafana=GrafanaConfig(
                api_key=os.getenv("GRAFANA_API_KEY", ""),
                api_url=os.getenv("GRAFANA_API_URL", ""),
                tls_key=os.getenv("GRAFANA_TLS_KEY", ""),
                tls_cert=os.getenv("GRAFANA_TLS_CERT", ""),
            ),
            discord=DiscordConfig(
                enabled=_env_bool("DISCORD_ENABLED"),
                bot_token=os.getenv("DISCORD_BOT_TOKEN", ""),
            ),
            webhook=WebhookConfig(
                enabled=_env_bool("WEBHOOK_ENABLED"),
                token=os.getenv("WEBHOOK_TOKEN", ""),
            ),
        )
