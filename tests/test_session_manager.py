"""Tests for persisted chat sessions"""
import json

import anyio
import pytest

from interview_mentor.services.session_manager import GREETING, SessionManager


@pytest.fixture
def manager(tmp_path):
    return SessionManager(tmp_path / "sessions")


def test_new_session_starts_with_greeting(manager):
    state = anyio.run(manager.create_session)

    assert state.messages[0]["role"] == "assistant"
    assert state.messages[0]["content"] == GREETING


def test_append_keeps_order_and_builds_transcript(manager):
    state = anyio.run(manager.create_session)
    anyio.run(manager.append_message, state.session_id, "user", "first question")
    anyio.run(manager.append_message, state.session_id, "assistant", "first answer")

    transcript = state.transcript()
    assert [m.role for m in transcript] == ["assistant", "user", "assistant"]
    assert transcript[-1].content == "first answer"


def test_unknown_session_raises_key_error(manager):
    with pytest.raises(KeyError):
        anyio.run(manager.append_message, "missing", "user", "hi")


def test_sessions_survive_restart(tmp_path):
    first = SessionManager(tmp_path / "sessions")
    state = anyio.run(first.create_session)
    anyio.run(first.append_message, state.session_id, "user", "remember me")

    reloaded = SessionManager(tmp_path / "sessions")
    restored = anyio.run(reloaded.get_required, state.session_id)

    assert restored.messages[-1]["content"] == "remember me"


def test_corrupt_file_is_skipped(tmp_path):
    data_dir = tmp_path / "sessions"
    data_dir.mkdir()
    (data_dir / "broken.json").write_text("{not json", encoding="utf-8")
    (data_dir / "ok.json").write_text(json.dumps({"session_id": "ok", "messages": []}), encoding="utf-8")

    manager = SessionManager(data_dir)

    assert anyio.run(manager.get, "ok") is not None
    assert anyio.run(manager.get, "broken") is None


def test_list_sessions_newest_first(manager):
    older = anyio.run(manager.create_session)
    newer = anyio.run(manager.create_session)
    anyio.run(manager.append_message, newer.session_id, "user", "bump")

    items = anyio.run(manager.list_sessions)

    assert items[0]["session_id"] == newer.session_id
    assert items[0]["message_count"] == 2
    assert {i["session_id"] for i in items} == {older.session_id, newer.session_id}


def test_delete_removes_file(manager, tmp_path):
    state = anyio.run(manager.create_session)
    path = tmp_path / "sessions" / f"{state.session_id}.json"
    assert path.exists()

    assert anyio.run(manager.delete_session, state.session_id) is True
    assert not path.exists()
    assert anyio.run(manager.delete_session, state.session_id) is False


def test_clear_history_resets_to_greeting(manager):
    state = anyio.run(manager.create_session)
    anyio.run(manager.append_message, state.session_id, "user", "hello")

    anyio.run(manager.clear_history, state.session_id)

    assert [m["content"] for m in state.messages] == [GREETING]


def test_turn_lock_is_per_session(manager):
    first = anyio.run(manager.create_session)
    second = anyio.run(manager.create_session)

    assert manager.turn(first.session_id) is manager.turn(first.session_id)
    assert manager.turn(first.session_id) is not manager.turn(second.session_id)


def test_turn_for_unknown_session_raises_key_error(manager):
    with pytest.raises(KeyError):
        manager.turn("missing")


def test_delete_forgets_turn_lock(manager):
    state = anyio.run(manager.create_session)
    manager.turn(state.session_id)

    anyio.run(manager.delete_session, state.session_id)

    with pytest.raises(KeyError):
        manager.turn(state.session_id)
