"""The bounded model/function-calling loop behind one chat request.

One request moves through these states::

    AWAITING_MODEL -> PLAIN_ANSWER -> DONE
    AWAITING_MODEL -> TOOL_REQUESTED -> DISPATCHING -> AWAITING_MODEL ...
    TOOL_REQUESTED (budget spent) -> BUDGET_EXHAUSTED

Every path ends in ``DONE`` or ``BUDGET_EXHAUSTED`` with a non-empty answer.
A failure of the *initial* model call raises :class:`ModelServiceError`; a
failure in a follow-up round ends the loop with :data:`FALLBACK_ANSWER`.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from sqlalchemy.orm import Session

from mrologix.assistant import service
from mrologix.assistant.dispatch import dispatch
from mrologix.assistant.errors import ModelServiceError
from mrologix.assistant.registry import openai_tools
from mrologix.assistant.service import AssistantReply, assistant_message_for, result_message_for
from mrologix.logging import bind, get_logger


logger = get_logger(__name__)


FALLBACK_ANSWER = (
    "Sorry, I found your information but encountered an error formatting the response. "
    "Please try again or view the records directly in the dashboard."
)

GenerateFn = Callable[..., AssistantReply]


class LoopState(str, enum.Enum):
    AWAITING_MODEL = "awaiting_model"
    PLAIN_ANSWER = "plain_answer"
    TOOL_REQUESTED = "tool_requested"
    DISPATCHING = "dispatching"
    BUDGET_EXHAUSTED = "budget_exhausted"
    DONE = "done"


@dataclass(frozen=True)
class InvocationLogEntry:
    name: str
    id: str
    ok: bool


@dataclass(frozen=True)
class LoopOutcome:
    content: str
    state: LoopState
    follow_up_rounds: int
    dispatch_rounds: int
    invocations: tuple[InvocationLogEntry, ...] = ()
    used_fallback: bool = False
    provider: str | None = None
    model: str | None = None


@dataclass
class Conversation:
    """Message list owned by a single loop run; callers' lists are never touched."""

    messages: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def seeded(cls, messages: Sequence[dict[str, Any]]) -> "Conversation":
        return cls(messages=[dict(m) for m in messages])

    def snapshot(self) -> list[dict[str, Any]]:
        return list(self.messages)

    def append(self, message: dict[str, Any]) -> None:
        self.messages.append(message)


def _max_follow_up_rounds() -> int:
    raw = (os.getenv("MROLOGIX_ASSISTANT_MAX_FOLLOW_UP_ROUNDS") or "").strip()
    if not raw:
        return 3
    try:
        return max(0, int(raw))
    except ValueError:
        return 3


def _enter(state: LoopState, round_no: int) -> LoopState:
    bind(logger, round=round_no).debug("-> %s", state.value)
    return state


def _ask_model(
    generate: GenerateFn,
    conversation: Conversation,
    tools: list[dict[str, Any]],
    *,
    round_no: int = 0,
) -> AssistantReply:
    try:
        return generate(messages=conversation.snapshot(), tools=tools, tool_choice="auto")
    except ModelServiceError as exc:
        return AssistantReply(content="", provider="unknown", ok=False, error=str(exc))
    except Exception as exc:
        bind(logger, round=round_no).warning("Model call raised %s: %s", type(exc).__name__, exc)
        return AssistantReply(content="", provider="unknown", ok=False, error=f"{type(exc).__name__}: {exc}")


def run_conversation(
    messages: Sequence[dict[str, Any]],
    *,
    db: Session,
    max_follow_up_rounds: int | None = None,
    generate: GenerateFn | None = None,
    tools: list[dict[str, Any]] | None = None,
) -> LoopOutcome:
    if generate is None:
        generate = service.generate_reply
    if max_follow_up_rounds is None:
        max_follow_up_rounds = _max_follow_up_rounds()
    max_follow_up_rounds = max(0, int(max_follow_up_rounds))
    if tools is None:
        tools = openai_tools()

    conversation = Conversation.seeded(messages)
    follow_up_rounds = 0
    dispatch_rounds = 0
    log: list[InvocationLogEntry] = []
    state = _enter(LoopState.AWAITING_MODEL, 0)
    content = ""
    reply: AssistantReply | None = None

    while True:
        reply = _ask_model(generate, conversation, tools, round_no=follow_up_rounds)
        if not reply.ok:
            if follow_up_rounds == 0:
                raise ModelServiceError(reply.error or "Model request failed")
            bind(logger, round=follow_up_rounds).warning("Follow-up model call failed: %s", reply.error)
            state = _enter(LoopState.DONE, follow_up_rounds)
            content = ""
            break

        if not reply.invocations:
            _enter(LoopState.PLAIN_ANSWER, follow_up_rounds)
            content = reply.content
            state = _enter(LoopState.DONE, follow_up_rounds)
            break

        _enter(LoopState.TOOL_REQUESTED, follow_up_rounds)
        if follow_up_rounds >= max_follow_up_rounds:
            bind(logger, round=follow_up_rounds).warning(
                "Follow-up budget of %d spent; dropping %d requested call(s)",
                max_follow_up_rounds,
                len(reply.invocations),
            )
            state = _enter(LoopState.BUDGET_EXHAUSTED, follow_up_rounds)
            content = ""
            break

        _enter(LoopState.DISPATCHING, follow_up_rounds)
        conversation.append(assistant_message_for(reply))
        for invocation in reply.invocations:
            result = dispatch(
                invocation.function_name,
                invocation.raw_arguments,
                db=db,
                invocation_id=invocation.id,
            )
            log.append(InvocationLogEntry(name=result.name, id=invocation.id, ok=not result.is_error))
            conversation.append(result_message_for(invocation, result))
        dispatch_rounds += 1
        follow_up_rounds += 1
        _enter(LoopState.AWAITING_MODEL, follow_up_rounds)

    used_fallback = not (content or "").strip()
    return LoopOutcome(
        content=FALLBACK_ANSWER if used_fallback else content,
        state=state,
        follow_up_rounds=follow_up_rounds,
        dispatch_rounds=dispatch_rounds,
        invocations=tuple(log),
        used_fallback=used_fallback,
        provider=reply.provider if reply is not None else None,
        model=reply.model if reply is not None else None,
    )
