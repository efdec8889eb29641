"""Tests for shared application state."""
import pytest
from app_state import AppState


def test_initial_state():
    state = AppState()
    assert state.favorites == []
    assert state.weather is None
    assert state.loading is False
    assert state.error is None


def test_listeners_notified():
    state = AppState()
    seen = []
    state.subscribe(lambda s: seen.append((s.loading, s.error)))

    state.update(loading=True)
    state.update(loading=False, error="boom")

    assert seen == [(True, None), (False, "boom")]


def test_unsubscribe():
    state = AppState()
    seen = []
    unsubscribe = state.subscribe(lambda s: seen.append(s.loading))

    unsubscribe()
    unsubscribe()
    state.update(loading=True)

    assert seen == []


def test_unknown_field_rejected():
    with pytest.raises(AttributeError):
        AppState().update(colour="blue")
