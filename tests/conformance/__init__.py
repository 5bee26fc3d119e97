"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the kindness ledger.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. test_conservation.py - Tokens move but are never created or destroyed by transfers
2. test_atomicity.py - Rejected transfers change nothing; concurrent transfers never interleave
3. test_idempotency.py - Registration happens at most once per key
4. test_ordering.py - Feed and broadcast order follow the transfer log

These tests use hypothesis for property-based testing.
"""
