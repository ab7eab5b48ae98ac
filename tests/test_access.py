"""Tests for the access gate."""

from feeding_tracker.services.access import AccessGate


def test_access_gate_from_config() -> None:
    gate = AccessGate.from_config("10,20,bogus")

    assert gate.is_authorized(10)
    assert gate.is_authorized(20)
    assert not gate.is_authorized(30)
    assert gate.allowed_user_ids == frozenset({10, 20})


def test_empty_access_gate_rejects_everyone() -> None:
    gate = AccessGate.from_config("")

    assert not gate.is_authorized(10)
