"""
Ordering Conformance Tests

INVARIANT: Every ordered view follows the transfer log.

    feed(limit) = reversed(log[-limit:])
    subscriber events (transfer_completed) arrive once per transfer, in log order

A subscriber that fails is dropped and never invoked again.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from kindness import Ledger, EVENT_TRANSFER_COMPLETED


def _busy_ledger(num_transfers: int) -> Ledger:
    ledger = Ledger("test", verbose=False)
    keys = ["a", "b", "c"]
    for key in keys:
        ledger.register(key, key.upper())
    for i in range(num_transfers):
        sender = keys[i % 3]
        recipient = keys[(i + 1) % 3]
        ledger.transfer(sender, recipient, 1, f"transfer #{i}").unwrap()
    return ledger


class TestFeedOrdering:

    @given(st.integers(min_value=0, max_value=30), st.integers(min_value=1, max_value=40))
    @settings(max_examples=100)
    def test_feed_is_reversed_tail(self, num_transfers, limit):
        """
        PROPERTY: feed(limit) returns min(limit, N) entries matching the log tail reversed.
        """
        ledger = _busy_ledger(num_transfers)
        log = ledger.transfers()
        feed = ledger.feed(limit)

        assert len(feed) == min(limit, num_transfers)
        assert [e.transfer_id for e in feed] == [t.transfer_id for t in reversed(log[-limit:])]

    def test_feed_bound_after_many(self):
        ledger = _busy_ledger(12)
        feed = ledger.feed(5)
        assert [e.note for e in feed] == [f"transfer #{i}" for i in range(11, 6, -1)]


class TestBroadcastOrdering:

    @given(st.integers(min_value=1, max_value=25))
    @settings(max_examples=30)
    def test_one_event_per_transfer_in_order(self, num_transfers):
        """
        PROPERTY: A subscriber registered up front sees every transfer once, in order.
        """
        ledger = Ledger("test", verbose=False)
        ledger.register("a", "A")
        ledger.register("b", "B")
        seen = []
        ledger.subscribe(lambda e: seen.append(e) if e.kind == EVENT_TRANSFER_COMPLETED else None)

        for i in range(num_transfers):
            sender, recipient = ("a", "b") if i % 2 == 0 else ("b", "a")
            ledger.transfer(sender, recipient, 1, f"gift {i}").unwrap()
            # Rejected requests must not emit anything
            ledger.transfer(sender, sender, 1, "self gift")

        assert [e.payload.transfer_id for e in seen] == [t.transfer_id for t in ledger.transfers()]
        assert [e.sequence for e in seen] == sorted(e.sequence for e in seen)

    def test_failing_subscriber_not_invoked_again(self):
        ledger = Ledger("test", verbose=False)
        ledger.register("a", "A")
        ledger.register("b", "B")
        calls = []
        healthy = []

        def flaky(event):
            calls.append(event)
            raise ConnectionError("client went away")

        ledger.subscribe(flaky)
        ledger.subscribe(healthy.append)

        ledger.transfer("a", "b", 1, "first!").unwrap()
        ledger.transfer("b", "a", 1, "second!").unwrap()

        assert len(calls) == 1
        assert [e.payload.note for e in healthy] == ["first!", "second!"]

    def test_late_subscriber_sees_only_later_transfers(self):
        ledger = Ledger("test", verbose=False)
        ledger.register("a", "A")
        ledger.register("b", "B")
        ledger.transfer("a", "b", 1, "before").unwrap()
        seen = []
        ledger.subscribe(seen.append)
        ledger.transfer("a", "b", 1, "after").unwrap()
        assert [e.payload.note for e in seen] == ["after"]
