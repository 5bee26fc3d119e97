"""
Conservation Law Conformance Tests

INVARIANT: For every sequence of transfer requests:
    Σ_{p ∈ participants} balance(p) = STARTING_BALANCE × |participants|
    balance(p) >= 0 for every participant p

Transfers redistribute tokens but never create or destroy them.

These tests use property-based testing to verify conservation holds for
arbitrary request sequences, including ones that are rejected.
"""

import pytest
from hypothesis import given, settings, note
from hypothesis import strategies as st

from kindness import Ledger, ValidationErrorKind, STARTING_BALANCE


PARTICIPANTS = ["alice", "bob", "charlie", "dave", "eve"]


# =============================================================================
# STRATEGIES FOR PROPERTY-BASED TESTING
# =============================================================================

@st.composite
def transfer_request(draw, keys=PARTICIPANTS + ["stranger"]):
    """
    Generate a transfer request that may or may not be valid.

    Amounts and notes deliberately stray outside the accepted ranges.
    """
    sender = draw(st.sampled_from(keys))
    recipient = draw(st.sampled_from(keys))
    amount = draw(st.integers(min_value=-1, max_value=7))
    note_text = draw(st.sampled_from(["", "  ", "hi", "hi!", "thank you", "for the coffee"]))
    return sender, recipient, amount, note_text


def _ledger() -> Ledger:
    ledger = Ledger("test", verbose=False)
    for key in PARTICIPANTS:
        ledger.register(key, key.title())
    return ledger


# =============================================================================
# CONSERVATION PROPERTY TESTS
# =============================================================================

class TestConservationProperties:
    """Property-based tests for conservation invariant."""

    @given(st.lists(transfer_request(), min_size=1, max_size=40))
    @settings(max_examples=100)
    def test_supply_constant_for_arbitrary_requests(self, requests):
        """
        PROPERTY: Total supply is unchanged by any request sequence.
        """
        ledger = _ledger()
        initial_supply = ledger.total_supply()

        applied = 0
        for sender, recipient, amount, note_text in requests:
            if ledger.transfer(sender, recipient, amount, note_text).is_ok():
                applied += 1
            assert ledger.total_supply() == initial_supply

        note(f"Applied {applied} of {len(requests)} requests")
        assert ledger.verify_conservation()['valid']

    @given(st.lists(transfer_request(), min_size=1, max_size=40))
    @settings(max_examples=100)
    def test_balances_never_negative(self, requests):
        """
        PROPERTY: No sequence of requests drives a balance below zero.
        """
        ledger = _ledger()
        for sender, recipient, amount, note_text in requests:
            ledger.transfer(sender, recipient, amount, note_text)
            assert all(ledger.get_balance(k) >= 0 for k in PARTICIPANTS)

    @given(st.lists(transfer_request(), min_size=1, max_size=40))
    @settings(max_examples=50)
    def test_balances_match_log(self, requests):
        """
        PROPERTY: Each balance equals the starting balance plus received minus given.
        """
        ledger = _ledger()
        for sender, recipient, amount, note_text in requests:
            ledger.transfer(sender, recipient, amount, note_text)

        for key in PARTICIPANTS:
            given_total = sum(t.amount for t in ledger.transfers() if t.sender == key)
            received_total = sum(t.amount for t in ledger.transfers() if t.recipient == key)
            assert ledger.get_balance(key) == STARTING_BALANCE - given_total + received_total

    @given(st.lists(transfer_request(), min_size=1, max_size=40))
    @settings(max_examples=50)
    def test_graph_totals_balance(self, requests):
        """
        PROPERTY: In the graph projection, total given equals total received
        equals the sum of edge amounts.
        """
        ledger = _ledger()
        for sender, recipient, amount, note_text in requests:
            ledger.transfer(sender, recipient, amount, note_text)

        graph = ledger.graph()
        total_given = sum(n.total_given for n in graph.nodes)
        total_received = sum(n.total_received for n in graph.nodes)
        total_edges = sum(e.amount for e in graph.edges)
        assert total_given == total_received == total_edges


class TestConservationExamples:
    """Explicit conservation examples."""

    def test_overdraft_rejected_and_balances_unchanged(self):
        ledger = _ledger()
        ledger.transfer("alice", "bob", 4, "most of it").unwrap()
        before = {k: ledger.get_balance(k) for k in PARTICIPANTS}

        result = ledger.transfer("alice", "bob", 2, "one more")

        assert result.kind == ValidationErrorKind.INSUFFICIENT_BALANCE
        assert {k: ledger.get_balance(k) for k in PARTICIPANTS} == before

    def test_round_trip_restores_balances(self):
        ledger = _ledger()
        ledger.transfer("alice", "bob", 5, "all of it").unwrap()
        ledger.transfer("bob", "alice", 5, "back again").unwrap()
        assert ledger.get_balance("alice") == STARTING_BALANCE
        assert ledger.get_balance("bob") == STARTING_BALANCE

    @pytest.mark.parametrize("newcomers", [1, 3, 10])
    def test_registration_issues_exact_supply(self, newcomers):
        ledger = _ledger()
        for i in range(newcomers):
            ledger.register(f"new_{i}", "New")
        assert ledger.total_supply() == STARTING_BALANCE * (len(PARTICIPANTS) + newcomers)
