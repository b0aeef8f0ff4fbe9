"""System messages that open every assistant conversation."""

from __future__ import annotations

import os
from importlib import resources
from pathlib import Path
from typing import Any, Sequence

from mrologix.assistant.registry import function_purposes
from mrologix.db.models import AuthUser
from mrologix.logging import get_logger


logger = get_logger(__name__)

_APP_STRUCTURE_MAX_CHARS = 80_000

GREETING_TEMPLATE = "Welcome, {firstName} {lastName}!"


def _assistant_name() -> str:
    return (os.getenv("MROLOGIX_ASSISTANT_NAME") or "MRO Logix").strip() or "MRO Logix"


def load_app_structure() -> str:
    """Return the application-structure text exactly as stored."""

    raw = (os.getenv("MROLOGIX_APP_STRUCTURE_PATH") or "").strip()
    if raw:
        try:
            content = Path(raw).expanduser().read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not read app structure from %s: %s", raw, exc)
        else:
            return content[:_APP_STRUCTURE_MAX_CHARS]
    return resources.files("mrologix.assistant").joinpath("app_structure.json").read_text(encoding="utf-8")


def _greeting_rule(user: AuthUser, *, first_message: bool) -> str:
    greeting = GREETING_TEMPLATE
    if first_message:
        greeting = greeting.replace("{firstName}", user.first_name or user.username).replace(
            "{lastName}", user.last_name or ""
        )
        greeting = " ".join(greeting.split()).replace(" !", "!")
    return (
        f"For the first message in a chat session, start with: '{greeting}' "
        "followed by a brief, friendly greeting."
    )


def build_system_instruction(user: AuthUser, *, first_message: bool) -> str:
    name = _assistant_name()
    return (
        f"You are the {name} in-app assistant.\n"
        f"{_greeting_rule(user, first_message=first_message)}\n"
        "Then, for the rest of the session, answer questions about the web app strictly from the "
        "application structure below and about records strictly from function results.\n"
        "\n"
        "Behavior:\n"
        "- Never invent record values, IDs, or counts; call a function instead.\n"
        "- If a function returns an error, explain it briefly and suggest what to try next.\n"
        "- If you cannot find the answer, say you don't know.\n"
        "\n"
        "Links:\n"
        "- When referring to a page, return the page name as a markdown link using its 'path'.\n"
        "- When referring to a flight record, link it as "
        "[Flight <flightNumber>](/dashboard/flight-records?id=<id>).\n"
        "- Only share attachment URLs returned by list_attachments_for_record.\n"
        "\n"
        "Functions:\n"
        f"{function_purposes()}\n"
        "\n"
        "APPLICATION STRUCTURE:\n"
        f"{load_app_structure()}"
    )


def build_user_context(user: AuthUser) -> str:
    full_name = " ".join(part for part in (user.first_name, user.last_name) if part)
    created = user.created_at.isoformat() if user.created_at is not None else "unknown"
    return (
        "Current user information:\n"
        f"- ID: {user.id}\n"
        f"- Full name: {full_name}\n"
        f"- Username: {user.username}\n"
        f"- Email: {user.email or ''}\n"
        f"- Account created: {created}\n"
        "Use these details when relevant to personalise your responses."
    )


def seed_conversation(user: AuthUser, messages: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    """System instruction, user context, then the caller's messages in order."""

    first_message = len(messages) == 1
    return [
        {"role": "system", "content": build_system_instruction(user, first_message=first_message)},
        {"role": "system", "content": build_user_context(user)},
        *[dict(m) for m in messages],
    ]
