"""
State Store Tests
=================

Tests for the observable navigation state container.
"""

from navigation.guidance.models import NavigationState, TrackerStatus
from navigation.guidance.state_store import NavigationStateStore, StoreTopic


class TestNavigationStateStore:

    def test_defaults(self):
        store = NavigationStateStore()
        assert store.state == NavigationState()
        assert store.route is None
        assert store.error_message is None
        assert not store.is_loading

    def test_publishes_changes_only(self):
        store = NavigationStateStore()
        events = []
        store.subscribe(events.append)

        store.set_loading(True)
        store.set_loading(True)
        store.set_error("No route found")
        store.set_error("No route found")
        store.set_state(NavigationState())
        store.set_state(NavigationState(status=TrackerStatus.NAVIGATING, is_navigating=True))

        assert [e.topic for e in events] == [StoreTopic.LOADING, StoreTopic.ERROR, StoreTopic.STATE]
        assert events[-1].value.is_navigating

    def test_route_always_published(self, three_step_route):
        store = NavigationStateStore()
        events = []
        store.subscribe(events.append)
        store.set_route(three_step_route)
        store.set_route(three_step_route)
        assert len(events) == 2
        assert store.route is three_step_route

    def test_unsubscribe(self):
        store = NavigationStateStore()
        events = []
        unsubscribe = store.subscribe(events.append)
        unsubscribe()
        unsubscribe()
        store.set_loading(True)
        assert events == []

    def test_subscriber_error_isolated(self):
        store = NavigationStateStore()
        events = []

        def broken(event):
            raise ValueError("boom")

        store.subscribe(broken)
        store.subscribe(events.append)
        store.set_error("Unable to get directions: offline")
        assert len(events) == 1
        assert store.error_message == "Unable to get directions: offline"
