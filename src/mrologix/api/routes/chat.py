from __future__ import annotations

import json
from typing import Any, Literal

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from mrologix.api.security import get_current_user
from mrologix.assistant import loop
from mrologix.assistant.errors import ModelServiceError
from mrologix.assistant.prompting import seed_conversation
from mrologix.assistant.service import provider_configured
from mrologix.db.connect import get_session_dep
from mrologix.db.models import AuthUser
from mrologix.logging import get_logger


logger = get_logger(__file__)

router = APIRouter(tags=["Assistant"])


class ChatMessageIn(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


_MESSAGES = TypeAdapter(list[ChatMessageIn])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


_INVALID_BODY = object()


async def _json_body(request: Request) -> Any:
    """Decoded request body; ``None`` when empty, a sentinel when undecodable."""

    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (ValueError, RecursionError):
        return _INVALID_BODY


@router.post("/ai-chat")
def ai_chat(
    payload: Any = Depends(_json_body),
    db: Session = Depends(get_session_dep),
    user: AuthUser | None = Depends(get_current_user),
):
    if user is None:
        return _error(status.HTTP_401_UNAUTHORIZED, "Not authenticated")

    if payload is _INVALID_BODY or (payload is not None and not isinstance(payload, dict)):
        return _error(status.HTTP_400_BAD_REQUEST, "Request body must be a JSON object")

    raw_messages = (payload or {}).get("messages")
    if not raw_messages:
        return _error(status.HTTP_400_BAD_REQUEST, "Messages are required")
    try:
        messages = _MESSAGES.validate_python(raw_messages)
    except ValidationError:
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "Messages must be a list of {role, content} objects",
        )

    if not provider_configured():
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "OpenAI API key is not configured")

    seeded = seed_conversation(user, [m.model_dump() for m in messages])
    try:
        outcome = loop.run_conversation(seeded, db=db)
    except ModelServiceError as exc:
        logger.error("Model request failed for user %s: %s", user.id, exc)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "Model request failed")
    except Exception as exc:
        logger.exception("Chat request failed for user %s", user.id)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or "An unexpected error occurred")

    logger.info(
        "Chat reply for user %s: state=%s rounds=%d calls=%d fallback=%s",
        user.id,
        outcome.state.value,
        outcome.follow_up_rounds,
        len(outcome.invocations),
        outcome.used_fallback,
    )
    return {"success": True, "data": {"role": "assistant", "content": outcome.content}}
