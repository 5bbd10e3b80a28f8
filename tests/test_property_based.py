"""Property-based tests using hypothesis."""

from hypothesis import given, strategies as st

from eventdispatch import EventDispatcher, compose
from tests.mocks import Recorder, Widget

event_names = st.text(min_size=1, max_size=20)
payloads = st.one_of(st.none(), st.integers(), st.text(), st.dictionaries(st.text(), st.integers()))


class TestPropertyBased:
    """Property-based tests for dispatcher invariants."""

    @given(event_names, payloads, st.integers(min_value=1, max_value=20))
    def test_register_then_emit_delivers_exact_payload(self, name, payload, emits):
        """Property: each emit calls a registered handler once with the payload."""
        # Arrange
        dispatcher = EventDispatcher()
        received = []
        dispatcher.register(name, received.append)

        # Act
        for _ in range(emits):
            dispatcher.emit(name, payload)

        # Assert
        assert len(received) == emits
        assert all(r is payload for r in received)

    @given(event_names, st.integers(min_value=0, max_value=10))
    def test_once_fires_at_most_once(self, name, emits):
        """Property: a once handler never fires more than once."""
        dispatcher = compose(Widget())
        received = []
        dispatcher.register_once(name, received.append)

        for i in range(emits):
            dispatcher.emit(name, i)

        assert received == ([0] if emits else [])

    @given(st.lists(st.text(min_size=1, max_size=5), min_size=1, max_size=50, unique=True))
    def test_listeners_fire_in_registration_order(self, labels):
        """Property: execution order equals registration order."""
        dispatcher = EventDispatcher()
        recorder = Recorder()
        for label in labels:
            dispatcher.register("event", recorder.handler(label))

        dispatcher.emit("event")
        dispatcher.emit("event")

        assert recorder.names() == labels + labels

    @given(
        st.lists(st.booleans(), min_size=1, max_size=30),
    )
    def test_failures_never_stop_emission(self, failing):
        """Property: every listener runs regardless of which ones raise."""
        dispatcher = EventDispatcher(log_listener_errors=False)
        recorder = Recorder()
        for i, fails in enumerate(failing):
            dispatcher.register(
                "event", recorder.handler(str(i), raises=RuntimeError(str(i)) if fails else None)
            )

        invoked = dispatcher.emit("event")

        assert invoked == len(failing)
        assert recorder.names() == [str(i) for i in range(len(failing))]

    @given(st.lists(st.tuples(event_names, st.booleans()), max_size=30), event_names)
    def test_unregister_all_scoped_to_event(self, registrations, target):
        """Property: clearing one event leaves every other event's listeners alone."""
        dispatcher = EventDispatcher()
        for name, once in registrations:
            if once:
                dispatcher.register_once(name, lambda p: None)
            else:
                dispatcher.register(name, lambda p: None)
        before = {name: dispatcher.listener_count(name) for name in dispatcher.event_names()}

        dispatcher.unregister_all(target)

        assert dispatcher.has_listeners(target) is False
        for name, count in before.items():
            if name != target:
                assert dispatcher.listener_count(name) == count

    @given(st.lists(event_names, max_size=20))
    def test_no_empty_entries_after_unregister(self, names):
        """Property: fully unregistered events report no listeners."""
        dispatcher = EventDispatcher()
        handler = lambda p: None  # noqa: E731
        for name in names:
            dispatcher.register(name, handler)
        for name in names:
            dispatcher.unregister(name, handler)

        assert dispatcher.event_names() == []
        assert not any(dispatcher.has_listeners(name) for name in names)
