"""
conftest.py - Shared pytest fixtures for kindness ledger tests

Provides common fixtures used across unit and conformance tests:
- A controllable clock
- Empty, two-participant and chain-shaped ledgers
- An event recorder for broadcast assertions
"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import List

from kindness import Ledger, Event


# =============================================================================
# HELPER CLASSES
# =============================================================================

class FakeClock:
    """Manually advanced clock; call it to read the current time."""

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2026, 1, 1, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class EventRecorder:
    """Subscriber that records every event it receives."""

    def __init__(self):
        self.events: List[Event] = []

    def __call__(self, event: Event) -> None:
        self.events.append(event)

    def kinds(self) -> List[str]:
        return [e.kind for e in self.events]

    def of_kind(self, kind: str) -> List[Event]:
        return [e for e in self.events if e.kind == kind]


def make_ledger(clock: FakeClock = None, participants=()) -> Ledger:
    """Create a quiet ledger and register (key, name) pairs."""
    ledger = Ledger("test", clock=clock or FakeClock(), verbose=False)
    for key, name in participants:
        ledger.register(key, name)
    return ledger


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ledger(clock):
    """Empty ledger on a fake clock."""
    return make_ledger(clock)


@pytest.fixture
def pair_ledger(clock):
    """Ledger with alice and bob registered at the starting balance."""
    return make_ledger(clock, [("alice", "Alice"), ("bob", "Bob")])


@pytest.fixture
def chain_ledger(clock):
    """
    Ledger where A-B-C-D form a chain of single transfers and E is isolated.
    """
    ledger = make_ledger(clock, [
        ("A", "Ada"), ("B", "Ben"), ("C", "Cy"), ("D", "Dee"), ("E", "Eve"),
    ])
    for sender, recipient in [("A", "B"), ("B", "C"), ("C", "D")]:
        clock.advance(minutes=1)
        ledger.transfer(sender, recipient, 1, "thanks!").unwrap()
    return ledger


@pytest.fixture
def recorder():
    return EventRecorder()
