import pytest

from conftest import TEAM_ID

from flowcaser.conversation import ConversationLog, new_turn


def test_record_and_load_history_oldest_first(store):
    log = ConversationLog(store)
    log.record(TEAM_ID, "user", "hej", user_id="u1")
    log.record(TEAM_ID, "assistant", "Hej! Hvad kan jeg hjælpe med?")
    log.record("team-2", "user", "andet team", user_id="u2")

    history = log.load_history(TEAM_ID)
    assert [t.content for t in history] == ["hej", "Hej! Hvad kan jeg hjælpe med?"]
    assert history[0].user_id == "u1"
    assert history[1].user_id is None
    assert history[0].id != history[1].id
    assert history[0].created_at


def test_history_is_bounded_and_a_fresh_snapshot(store):
    log = ConversationLog(store)
    for i in range(6):
        log.record(TEAM_ID, "user", f"m{i}")
    first = log.load_history(TEAM_ID, limit=4)
    assert [t.content for t in first] == ["m2", "m3", "m4", "m5"]
    log.record(TEAM_ID, "user", "m6")
    assert [t.content for t in log.load_history(TEAM_ID, limit=4)] == ["m3", "m4", "m5", "m6"]
    assert [t.content for t in first] == ["m2", "m3", "m4", "m5"]
    assert log.load_history(TEAM_ID, limit=0) == []


def test_append_failure_is_swallowed(store):
    store.fail.add("append")
    log = ConversationLog(store)
    assert log.append_turn(new_turn(TEAM_ID, "user", "hej")) is False
    turn = log.record(TEAM_ID, "user", "hej")
    assert turn.content == "hej"


def test_history_failure_returns_empty(store):
    store.fail.add("history")
    assert ConversationLog(store).load_history(TEAM_ID) == []


def test_unknown_role_rejected():
    with pytest.raises(ValueError):
        new_turn(TEAM_ID, "robot", "hej")


def test_turns_are_immutable():
    turn = new_turn(TEAM_ID, "user", "hej")
    with pytest.raises(AttributeError):
        turn.content = "ændret"
