from datetime import datetime

from mrologix.assistant.prompting import (
    build_system_instruction,
    build_user_context,
    load_app_structure,
    seed_conversation,
)
from mrologix.db.models import AuthUser


def _user(**overrides) -> AuthUser:
    values = dict(
        id=7,
        username="jdoe",
        first_name="Jane",
        last_name="Doe",
        email="jane@example.org",
        created_at=datetime(2024, 1, 2, 3, 4, 5),
    )
    values.update(overrides)
    return AuthUser(**values)


def test_first_message_gets_a_personal_greeting():
    text = build_system_instruction(_user(), first_message=True)
    assert "Welcome, Jane Doe!" in text
    assert "{firstName}" not in text


def test_later_messages_keep_the_greeting_rule_generic():
    text = build_system_instruction(_user(), first_message=False)
    assert "Welcome, {firstName} {lastName}!" in text


def test_greeting_falls_back_to_username():
    text = build_system_instruction(_user(first_name=None, last_name=None), first_message=True)
    assert "Welcome, jdoe!" in text


def test_instruction_lists_functions_and_app_structure(monkeypatch):
    monkeypatch.delenv("MROLOGIX_APP_STRUCTURE_PATH", raising=False)
    text = build_system_instruction(_user(), first_message=True)
    assert "search_flight_records_by_tail(tail, limit?)" in text
    assert '"path": "/dashboard/flight-records"' in text
    assert "You are the MRO Logix in-app assistant." in text


def test_assistant_name_from_env(monkeypatch):
    monkeypatch.setenv("MROLOGIX_ASSISTANT_NAME", "Hangar Helper")
    assert "You are the Hangar Helper in-app assistant." in build_system_instruction(_user(), first_message=False)


def test_app_structure_is_injected_verbatim(tmp_path, monkeypatch):
    path = tmp_path / "structure.json"
    path.write_text('{"pages": []}\n', encoding="utf-8")
    monkeypatch.setenv("MROLOGIX_APP_STRUCTURE_PATH", str(path))
    assert load_app_structure() == '{"pages": []}\n'


def test_unreadable_app_structure_falls_back_to_packaged(tmp_path, monkeypatch):
    monkeypatch.setenv("MROLOGIX_APP_STRUCTURE_PATH", str(tmp_path / "missing.json"))
    assert '"application": "MRO Logix"' in load_app_structure()


def test_user_context():
    text = build_user_context(_user())
    assert "- ID: 7" in text
    assert "- Full name: Jane Doe" in text
    assert "- Username: jdoe" in text
    assert "- Email: jane@example.org" in text
    assert "- Account created: 2024-01-02T03:04:05" in text


def test_seed_conversation_order():
    messages = [{"role": "user", "content": "hi"}]
    seeded = seed_conversation(_user(), messages)
    assert [m["role"] for m in seeded] == ["system", "system", "user"]
    assert seeded[2] == messages[0]
    assert seeded[2] is not messages[0]
