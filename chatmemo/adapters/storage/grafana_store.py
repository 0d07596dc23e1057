"""Grafana annotations store using aiohttp — implements MemoStorePort."""

import asyncio
import json
import ssl
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp

from chatmemo.config import GrafanaConfig, log_enabled
from chatmemo.domain.models import Memo
from chatmemo.ports.outbound import SaveResult

ANNOTATION_ADDED = "Annotation added"
REQUEST_TIMEOUT_SECONDS = 10


def _log(msg: str, level: str = "info"):
    if log_enabled(level):
        print(msg, file=sys.stderr)


@dataclass
class GrafanaHealth:
    version: str = ""
    database: str = ""
    commit: str = ""


class GrafanaStore:
    """Stores memos as Grafana annotations via the HTTP API."""

    def __init__(self, api_key: str, api_url: str, tls_key: str = "", tls_cert: str = ""):
        self._api_key = api_key
        self._api_url = api_url
        self._tls_key = tls_key
        self._tls_cert = tls_cert

        base = api_url.rstrip("/")
        self.annotations_url = f"{base}/annotations"
        self.health_url = f"{base}/health"
        self._bearer_header = f"Bearer {api_key}"
        self._timeout = aiohttp.ClientTimeout(total=REQUEST_TIMEOUT_SECONDS)

    @classmethod
    def from_config(cls, config: GrafanaConfig) -> "GrafanaStore":
        return cls(
            api_key=config.api_key,
            api_url=config.api_url,
            tls_key=config.tls_key,
            tls_cert=config.tls_cert,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._api_url)

    def _ssl_context(self) -> Optional[ssl.SSLContext]:
        """Client-certificate context for self-signed setups, None otherwise."""
        if not (self._tls_key or self._tls_cert):
            return None
        ctx = ssl.create_default_context()
        ctx.load_cert_chain(certfile=self._tls_cert, keyfile=self._tls_key or None)
        return ctx

    def _request_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"headers": {"Authorization": self._bearer_header}}
        ctx = self._ssl_context()
        if ctx is not None:
            kwargs["ssl"] = ctx
        return kwargs

    @staticmethod
    def annotation_payload(memo: Memo) -> Dict[str, Any]:
        return {
            "time": memo.epoch_millis(),
            "isRegion": False,
            "tags": list(memo.tags),
            "text": memo.description,
        }

    async def check(self) -> GrafanaHealth:
        """Ensure the API is reachable and healthy. Raises RuntimeError otherwise."""
        try:
            kwargs = self._request_kwargs()
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.get(self.health_url, **kwargs) as resp:
                    status = resp.status
                    body = await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, ssl.SSLError, OSError) as e:
            raise RuntimeError(f"grafana health check fail: {e}") from e

        if status != 200:
            raise RuntimeError(f"Grafana replied with http {status} and body {body}")
        try:
            data = json.loads(body)
        except ValueError as e:
            raise RuntimeError(
                f"grafana failed to unmarshal grafana response: {e}. The body was: {body}"
            ) from e

        if not isinstance(data, dict):
            raise RuntimeError(f"grafana health response is not an object: {body}")
        health = GrafanaHealth(
            version=str(data.get("version", "")),
            database=str(data.get("database", "")),
            commit=str(data.get("commit", "")),
        )
        _log(f"Can talk to Grafana version {health.version} - its database is {health.database}")
        return health

    async def save(self, memo: Memo) -> SaveResult:
        """POST the memo as an annotation. Never raises."""
        payload = self.annotation_payload(memo)
        try:
            kwargs = self._request_kwargs()
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(self.annotations_url, json=payload, **kwargs) as resp:
                    status = resp.status
                    body = await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, ssl.SSLError, OSError) as e:
            return SaveResult(success=False, error=f"grafana post fail: {e}")

        if status != 200:
            return SaveResult(success=False, error=f"Grafana replied with http {status} and body {body}")
        try:
            data = json.loads(body)
        except ValueError as e:
            return SaveResult(
                success=False,
                error=f"grafana failed to unmarshal grafana response: {e}. The body was: {body}",
            )

        message = data.get("message") if isinstance(data, dict) else None
        if message != ANNOTATION_ADDED:
            return SaveResult(
                success=False,
                error=f"Grafana replied with http {status} and unexpected message {message!r}",
            )
        return SaveResult(success=True, annotation_id=data.get("id"))
