from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import requests

from mrologix.logging import get_logger

if TYPE_CHECKING:
    from mrologix.assistant.dispatch import FunctionResult


logger = get_logger(__name__)


@dataclass(frozen=True)
class ToolInvocation:
    """One function the model asked for, whatever wire shape it arrived in."""

    id: str
    function_name: str
    raw_arguments: str
    legacy: bool = False


@dataclass(frozen=True)
class LegacyFunctionCall:
    name: str
    arguments: str


@dataclass(frozen=True)
class ToolCallBatch:
    calls: tuple[dict[str, Any], ...]


ToolRequest = LegacyFunctionCall | ToolCallBatch


@dataclass(frozen=True)
class AssistantReply:
    content: str
    provider: str
    model: str | None = None
    meta: dict[str, Any] | None = None
    invocations: tuple[ToolInvocation, ...] = ()
    ok: bool = True
    error: str | None = None

    @property
    def requests_tools(self) -> bool:
        return bool(self.invocations)


LEGACY_INVOCATION_ID = "function_call"


def _normalize_openai_base_url(value: str) -> str:
    """Strip a trailing ``/v1`` or endpoint path from an OpenAI-style base URL."""

    raw = (value or "").strip().rstrip("/")
    if not raw:
        return ""
    for suffix in ("/v1/chat/completions", "/v1"):
        if raw.endswith(suffix):
            raw = raw[: -len(suffix)].rstrip("/")
            break
    return raw


def _truncate_text(value: str, *, limit: int = 2000) -> str:
    text = (value or "").strip()
    return text if len(text) <= limit else text[:limit]


def _provider() -> str:
    return (os.getenv("MROLOGIX_ASSISTANT_PROVIDER") or "openai").strip().lower()


def _openai_url() -> str:
    raw = os.getenv("MROLOGIX_OPENAI_BASE_URL") or "https://api.openai.com"
    normalized = _normalize_openai_base_url(raw)
    return (normalized or raw).rstrip("/")


def _openai_api_key() -> str | None:
    raw = (os.getenv("MROLOGIX_OPENAI_API_KEY") or os.getenv("OPENAI_API_KEY") or "").strip()
    return raw or None


def _openai_model() -> str:
    raw = (os.getenv("MROLOGIX_OPENAI_MODEL") or "").strip()
    return raw or "gpt-4o-mini"


def _openai_timeout_seconds() -> float:
    raw = (os.getenv("MROLOGIX_OPENAI_TIMEOUT_SECONDS") or "").strip()
    if not raw:
        return 60.0
    try:
        return max(1.0, float(raw))
    except ValueError:
        return 60.0


def _assistant_temperature() -> float:
    raw = (os.getenv("MROLOGIX_ASSISTANT_TEMPERATURE") or "").strip()
    if not raw:
        return 1.0
    try:
        value = float(raw)
    except ValueError:
        return 1.0
    return min(2.0, max(0.0, value))


def _assistant_max_tokens() -> int:
    raw = (os.getenv("MROLOGIX_ASSISTANT_MAX_TOKENS") or "").strip()
    if not raw:
        return 2048
    try:
        return max(1, int(raw))
    except ValueError:
        return 2048


def provider_configured() -> bool:
    """True when the selected provider can be called at all."""

    if _provider() == "stub":
        return True
    return _openai_api_key() is not None


# --- wire shapes -----------------------------------------------------------


def parse_tool_request(message_obj: dict[str, Any]) -> ToolRequest | None:
    """Recognise either function-request shape in a response message.

    Newer responses carry a ``tool_calls`` array; older ones a single
    ``function_call`` object with no id. The array wins when both appear.
    """

    tool_calls = message_obj.get("tool_calls")
    if isinstance(tool_calls, list):
        calls = tuple(tc for tc in tool_calls if isinstance(tc, dict))
        if calls:
            return ToolCallBatch(calls=calls)
    function_call = message_obj.get("function_call")
    if isinstance(function_call, dict):
        name = function_call.get("name")
        if isinstance(name, str) and name.strip():
            return LegacyFunctionCall(name=name.strip(), arguments=_arguments_text(function_call.get("arguments")))
    return None


def _arguments_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return ""


def normalize_tool_invocations(request: ToolRequest | None) -> tuple[ToolInvocation, ...]:
    if request is None:
        return ()
    if isinstance(request, LegacyFunctionCall):
        return (
            ToolInvocation(
                id=LEGACY_INVOCATION_ID,
                function_name=request.name,
                raw_arguments=request.arguments,
                legacy=True,
            ),
        )

    invocations: list[ToolInvocation] = []
    for index, call in enumerate(request.calls):
        function = call.get("function")
        if not isinstance(function, dict):
            continue
        name = function.get("name")
        if not isinstance(name, str) or not name.strip():
            continue
        call_id = call.get("id")
        if not isinstance(call_id, str) or not call_id.strip():
            call_id = f"call_{index}"
        invocations.append(
            ToolInvocation(
                id=call_id,
                function_name=name.strip(),
                raw_arguments=_arguments_text(function.get("arguments")),
            )
        )
    return tuple(invocations)


def assistant_message_for(reply: AssistantReply) -> dict[str, Any]:
    """The assistant turn to append before the function results."""

    content = reply.content or None
    if not reply.invocations:
        return {"role": "assistant", "content": reply.content or ""}
    first = reply.invocations[0]
    if first.legacy:
        return {
            "role": "assistant",
            "content": content,
            "function_call": {"name": first.function_name, "arguments": first.raw_arguments},
        }
    return {
        "role": "assistant",
        "content": content,
        "tool_calls": [
            {
                "id": inv.id,
                "type": "function",
                "function": {"name": inv.function_name, "arguments": inv.raw_arguments},
            }
            for inv in reply.invocations
        ],
    }


def result_message_for(invocation: ToolInvocation, result: FunctionResult) -> dict[str, Any]:
    if invocation.legacy:
        return {"role": "function", "name": invocation.function_name, "content": result.content}
    return {"role": "tool", "tool_call_id": invocation.id, "content": result.content}


# --- providers --------------------------------------------------------------


def generate_reply(
    *,
    messages: list[dict[str, Any]],
    tools: list[dict[str, Any]] | None = None,
    tool_choice: str | dict[str, Any] | None = None,
) -> AssistantReply:
    """Ask the configured provider for the next assistant turn.

    Transport and HTTP failures do not raise; they come back with
    ``ok=False`` and a short ``error`` string.
    """

    provider = _provider()
    if provider == "stub":
        return AssistantReply(
            content=(
                "The assistant is running in stub mode. "
                "Set `MROLOGIX_ASSISTANT_PROVIDER=openai` and an API key to enable the model."
            ),
            provider="stub",
        )
    return _generate_openai_reply(messages=messages, tools=tools, tool_choice=tool_choice)


def _failed(error: str, *, model: str, meta: dict[str, Any]) -> AssistantReply:
    return AssistantReply(
        content=f"Assistant error: {error}",
        provider="openai",
        model=model,
        meta=meta,
        ok=False,
        error=error,
    )


def _generate_openai_reply(
    *,
    messages: list[dict[str, Any]],
    tools: list[dict[str, Any]] | None,
    tool_choice: str | dict[str, Any] | None = None,
) -> AssistantReply:
    url = f"{_openai_url()}/v1/chat/completions"
    model = _openai_model()
    api_key = _openai_api_key()
    if api_key is None:
        return _failed("OpenAI API key is not configured", model=model, meta={"url": url})

    payload: dict[str, Any] = {
        "model": model,
        "messages": messages,
        "temperature": _assistant_temperature(),
        "max_tokens": _assistant_max_tokens(),
        "stream": False,
    }
    if tools is not None:
        payload["tools"] = tools
        payload["tool_choice"] = tool_choice if tool_choice is not None else "auto"

    headers = {"Authorization": f"Bearer {api_key}"}
    started = time.monotonic()
    try:
        response = requests.post(url, json=payload, headers=headers, timeout=_openai_timeout_seconds())
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.HTTPError as exc:
        response_obj = getattr(exc, "response", None)
        status_code = getattr(response_obj, "status_code", None)
        response_text = _truncate_text(str(getattr(response_obj, "text", "") or ""))
        error = f"{type(exc).__name__}: {exc}"
        meta: dict[str, Any] = {"url": url, "error": repr(exc)}
        if status_code is not None:
            meta["status_code"] = status_code
        if response_text:
            meta["response_text"] = response_text
        logger.warning(
            "Model request failed (%s, status=%s): %s",
            url,
            meta.get("status_code"),
            meta.get("response_text") or error,
        )
        return _failed(error, model=model, meta=meta)
    except (requests.exceptions.RequestException, ValueError) as exc:
        error = f"{type(exc).__name__}: {exc}"
        logger.warning("Model request failed (%s): %s", url, error)
        return _failed(error, model=model, meta={"url": url, "error": repr(exc)})
    elapsed_ms = int((time.monotonic() - started) * 1000)

    content = ""
    usage: dict[str, Any] | None = None
    request: ToolRequest | None = None
    if isinstance(data, dict):
        usage_obj = data.get("usage")
        if isinstance(usage_obj, dict):
            usage = usage_obj
        choices = data.get("choices")
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            message_obj = choices[0].get("message")
            if isinstance(message_obj, dict):
                content = str(message_obj.get("content") or "")
                request = parse_tool_request(message_obj)

    meta = {"url": url, "elapsed_ms": elapsed_ms}
    if usage is not None:
        meta["usage"] = usage
    return AssistantReply(
        content=content,
        provider="openai",
        model=str(data.get("model") or model) if isinstance(data, dict) else model,
        meta=meta,
        invocations=normalize_tool_invocations(request),
    )
