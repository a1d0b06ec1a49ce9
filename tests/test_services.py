import pytest

from chatrelay.services import clock
from chatrelay.services.errors import (
    Conflict,
    NotFound,
    UnknownSender,
    ValidationError,
)
from chatrelay.services.message_log import MessageLog, parse_limit
from chatrelay.services.participant_registry import ParticipantRegistry


@pytest.fixture
def registry(db):
    return ParticipantRegistry(db)


@pytest.fixture
def log(db, registry):
    return MessageLog(db, registry)


def test_parse_limit():
    assert parse_limit(None) is None
    assert parse_limit("3") == 3
    assert parse_limit(" 2 ") == 2
    assert parse_limit(7) == 7
    assert parse_limit("abc") is None
    assert parse_limit("") is None
    assert parse_limit("1_000") is None
    assert parse_limit("\u0663") is None
    assert parse_limit("+4") == 4
    assert parse_limit("99999999999999999999") is None
    assert parse_limit(2**63 - 1) == 2**63 - 1
    for bad in (0, -1, "0", "-5"):
        with pytest.raises(ValidationError):
            parse_limit(bad)


def test_register_validates_name(registry):
    for bad in ("", None, 42):
        with pytest.raises(ValidationError):
            registry.register(bad)
    assert registry.list() == []


def test_unique_index_catches_duplicate_past_the_precheck(registry, log, monkeypatch):
    registry.register("Alice")
    # simulate a concurrent registration that passed the existence check
    monkeypatch.setattr(registry, "exists", lambda name: False)
    with pytest.raises(Conflict):
        registry.register("Alice")
    monkeypatch.undo()

    assert [p.name for p in registry.list()] == ["Alice"]
    assert [m.sender for m in log.retrieve("Alice")] == ["Alice"]


def test_refresh_unknown(registry):
    with pytest.raises(NotFound):
        registry.refresh_liveness("Ghost")
    with pytest.raises(NotFound):
        registry.refresh_liveness(None)


def test_exists(registry):
    registry.register("Alice")
    assert registry.exists("Alice")
    assert not registry.exists("ALICE")


def test_post_requires_registered_sender(log):
    with pytest.raises(UnknownSender):
        log.post("Ghost", "Todos", "boo", "broadcast")


def test_post_validates_fields(registry, log):
    registry.register("Alice")
    with pytest.raises(ValidationError):
        log.post(None, "Todos", "hi", "broadcast")
    with pytest.raises(ValidationError):
        log.post("Alice", "Todos", "", "broadcast")
    with pytest.raises(ValidationError):
        log.post("Alice", "Todos", "hi", "status")


def test_post_stamps_clock_time(registry, log, monkeypatch):
    registry.register("Alice")
    monkeypatch.setattr(clock, "clock_time", lambda: "12:34:56")
    msg = log.post("Alice", "Bob", "hi", "private")
    assert msg.time == "12:34:56"


def test_retrieve_visibility_and_limit(registry, log):
    for name in ("Alice", "Bob", "Carol"):
        registry.register(name)
    log.post("Alice", "Bob", "a->b", "private")
    log.post("Carol", "Alice", "c->a", "private")
    log.post("Bob", "Todos", "hello", "broadcast")

    bob = [m.text for m in log.retrieve("Bob")]
    assert bob[:2] == ["hello", "a->b"]
    assert "c->a" not in bob

    alice = [m.text for m in log.retrieve("Alice", limit=3)]
    assert alice == ["hello", "c->a", "a->b"]

    anonymous = [m.type for m in log.retrieve(None)]
    assert set(anonymous) == {"broadcast", "status"}


def test_messages_table_columns():
    from chatrelay.models.orm import Message

    assert set(Message.__table__.c.keys()) == {"id", "sender", "to", "text", "type", "time"}


def test_main_has_no_module_level_app():
    from chatrelay import main

    assert not hasattr(main, "app")
    app = main.create_app("sqlite://")
    assert app.state.engine.url.database in (None, "")
