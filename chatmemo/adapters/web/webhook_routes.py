"""Outgoing-webhook routes for chat platforms (Mattermost, Slack, ...).

Slack outgoing webhooks and Mattermost's default format post
``application/x-www-form-urlencoded`` fields; JSON bodies are accepted too.
"""

import hmac
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from chatmemo.adapters.storage.grafana_store import GrafanaStore
from chatmemo.config import AppConfig
from chatmemo.launcher import build_handler
from chatmemo.ports.inbound import IncomingMessage

webhook_router = APIRouter(prefix="/webhook", tags=["Webhook"])

_config = AppConfig.from_env()
store = GrafanaStore.from_config(_config.grafana)
memo_handler = build_handler(_config, "webhook", store)
webhook_token = _config.webhook.token


class WebhookMessage(BaseModel):
    # platforms send extra fields (team_id, trigger_word, ...); they are ignored
    text: str
    user_name: str
    channel_name: Optional[str] = None
    token: Optional[str] = None


class WebhookReply(BaseModel):
    text: Optional[str] = None


def _token_ok(token: Optional[str]) -> bool:
    if not webhook_token:
        return True
    return hmac.compare_digest((token or "").encode(), webhook_token.encode())


async def _read_body(request: Request) -> Dict[str, Any]:
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            body = await request.json()
        else:
            body = dict(await request.form())
    except ValueError:
        raise HTTPException(status_code=400, detail="invalid request body")
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="request body must be an object")
    return body


@webhook_router.post("/memo", response_model=WebhookReply, response_model_exclude_none=True)
async def webhook_memo(request: Request):
    try:
        req = WebhookMessage.model_validate(await _read_body(request))
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    if not _token_ok(req.token):
        raise HTTPException(status_code=401, detail="invalid webhook token")
    if not store.is_configured:
        raise HTTPException(status_code=503, detail="Grafana store not configured")

    incoming = IncomingMessage(
        content=req.text,
        author_name=req.user_name,
        channel_name=req.channel_name,
    )
    reply = await memo_handler.handle(incoming)
    return WebhookReply(text=reply)
