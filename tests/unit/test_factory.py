"""Test create_event() wiring from Settings."""

from custom_event.core.config import Settings
from custom_event.core.enums import IdAllocatorKind, Signature
from custom_event.core.ids import CounterIdAllocator
from custom_event.event.custom_event import DEFAULT_CONTEXT
from custom_event.event.factory import create_event


class TestCreateEvent:
    def test_defaults(self):
        event = create_event("opened", settings=Settings())
        assert event.type == "opened"
        assert event.context is DEFAULT_CONTEXT
        assert event.signature == Signature.FLAT
        assert event.fire_once is False

    def test_settings_applied(self, sink):
        settings = Settings(
            default_signature=Signature.LIST,
            silent=True,
            fire_once=True,
            id_allocator=IdAllocatorKind.COUNTER,
        )
        event = create_event("opened", settings=settings, log_sink=sink)
        assert event.signature == Signature.LIST
        assert event.silent is True
        assert event.fire_once is True
        assert event.subscribe(lambda *a: None).subscription.id == "sub_0"
        assert sink.records == []

    def test_explicit_signature_wins(self):
        settings = Settings(default_signature=Signature.LIST)
        event = create_event("opened", settings=settings, signature=Signature.FLAT)
        assert event.signature == Signature.FLAT

    def test_explicit_allocator_wins(self):
        alloc = CounterIdAllocator(prefix="mine")
        event = create_event("opened", settings=Settings(), id_allocator=alloc)
        assert event.subscribe(lambda *a: None).subscription.id == "mine_0"

    def test_context_passed_through(self):
        owner = object()
        event = create_event("opened", owner, settings=Settings())
        assert event.context is owner

    def test_env_settings_used_when_none_given(self, monkeypatch):
        monkeypatch.setenv("CUSTOM_EVENT_FIRE_ONCE", "true")
        event = create_event("opened")
        assert event.fire_once is True
