"""
ledger.py - Stateful Kindness Ledger

The Ledger class is the central state manager for the kindness ledger.
It is the only module that mutates state, ensuring controlled and auditable changes.

Key responsibilities:
    - Implements LedgerView protocol for safe read-only access by pure functions
    - Issues the starting balance exactly once per participant
    - Executes transfers atomically (debit, credit and log append together or not at all)
    - Maintains the append-only transfer log that every projection is derived from
    - Publishes participant_joined and transfer_completed events
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional
import threading

from .core import (
    # Types
    Participant, Transfer, FeedEntry, Graph, ParticipantStats, ParticipantSummary,
    Ok, Err, TransferResult,
    # Constants
    STARTING_BALANCE, DEFAULT_FEED_LIMIT, RECENT_ACTIVITY_WINDOW,
    EVENT_PARTICIPANT_JOINED, EVENT_TRANSFER_COMPLETED,
)
from .registry import ParticipantRegistry
from .validation import validate_transfer, normalize_note
from .projections import project_feed, project_graph, to_feed_entry
from .connectivity import eccentricity
from .broadcaster import EventBroadcaster, EventHandler


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Ledger:
    """
    Token ledger with participant registry, transfer log and event fan-out.

    Implements the LedgerView protocol, allowing the ledger to be passed to pure
    functions that access only read-only methods.

    Design Principles:
        - Always validates: every transfer runs the full ordered rule set.
        - Always logs: every successful transfer is appended to the log, and
          every projection (feed, graph, stats) is recomputed from it.
        - Rejections are values: transfer() returns Ok(transfer) or Err(kind),
          and a rejection leaves balances, log and registry untouched.

    Thread Safety:
        A single reentrant lock guards registry, balances and log. transfer()
        holds it for validation, debit, credit, append and event delivery, so
        no reader ever observes a half-applied transfer and subscribers see
        events in completion order.

    Example:
        ledger = Ledger("main")
        ledger.register("alice", "Alice")
        ledger.register("bob", "Bob")

        result = ledger.transfer("alice", "bob", 2, "Thanks for the help!")
        if result.is_ok():
            print(result.value.transfer_id)
    """

    def __init__(
        self,
        name: str = "main",
        starting_balance: int = STARTING_BALANCE,
        clock: Optional[Callable[[], datetime]] = None,
        verbose: bool = False,
        broadcaster: Optional[EventBroadcaster] = None,
    ):
        """
        Create a ledger.

        Args:
            name: Ledger identifier, used in transfer ids
            starting_balance: Tokens issued to each participant on registration
            clock: Zero-argument callable returning the current time (default: UTC now)
            verbose: Print a line for each registration, transfer and rejection
            broadcaster: Event channel to publish on (default: a new EventBroadcaster)
        """
        if starting_balance < 0:
            raise ValueError(f"starting_balance must be non-negative, got {starting_balance}")
        self.name = name
        self.starting_balance = starting_balance
        self.verbose = verbose
        self._clock = clock or utc_now
        self._lock = threading.RLock()
        self.registry = ParticipantRegistry()
        self.balances: Dict[str, int] = {}
        self.transfer_log: List[Transfer] = []
        self.broadcaster = broadcaster or EventBroadcaster(verbose=verbose)
        # Monotonic sequence counter for transfer ordering
        self._next_sequence: int = 0

    # ========================================================================
    # LedgerView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    @property
    def current_time(self) -> datetime:
        """Current time according to the ledger's clock."""
        return self._clock()

    def get_balance(self, key: str) -> int:
        """
        Get a participant's token balance.

        Returns:
            Current balance (0 if the participant is not registered)
        """
        with self._lock:
            return self.balances.get(key, 0)

    def is_registered(self, key: str) -> bool:
        with self._lock:
            return key in self.registry

    def get(self, key: str) -> Optional[Participant]:
        """Return the participant record for key, or None."""
        with self._lock:
            return self.registry.get(key)

    def list_all(self) -> List[Participant]:
        """All participants, in registration order."""
        with self._lock:
            return self.registry.list_all()

    # ========================================================================
    # REGISTRATION (Mutating)
    # ========================================================================

    def register(self, key: str, display_name: str) -> Participant:
        """
        Register a verified participant.

        Idempotent: a known key returns its existing record unchanged, with no
        second balance issuance and no event.

        Args:
            key: Identity key from the verification provider
            display_name: Name to show (blank names get a fallback)

        Returns:
            The participant record
        """
        with self._lock:
            participant, created = self.registry.register(key, display_name, self.current_time)
            if not created:
                return participant
            self.balances[key] = self.starting_balance
            if self.verbose:
                print(f"📝 Registered: {key} ({participant.display_name}) balance={self.starting_balance}")
            self.broadcaster.publish(EVENT_PARTICIPANT_JOINED, participant, participant.created_at)
            return participant

    # ========================================================================
    # TRANSFER EXECUTION (Mutating)
    # ========================================================================

    def _generate_transfer_id(self, sequence: int, created_at: datetime) -> str:
        """
        Generate a unique transfer ID.

        Format: tx:{ledger_name}:{sequence:08d}:{timestamp_micros}
        Unique and monotonically increasing within a ledger.
        """
        micros = int(created_at.timestamp() * 1_000_000)
        return f"tx:{self.name}:{sequence:08d}:{micros}"

    def transfer(
        self,
        sender: str,
        recipient: str,
        amount: int,
        note: str,
        settlement_ref: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> TransferResult:
        """
        Move tokens from sender to recipient atomically.

        Validation order (first failure wins): sender registered, recipient
        registered, sender != recipient, amount in range, sufficient balance,
        note long enough, note not too long.

        Args:
            sender: Key of the participant giving tokens
            recipient: Key of the participant receiving tokens
            amount: Whole number of tokens (1-5)
            note: Why the tokens are given; stored trimmed
            settlement_ref: Opaque external settlement reference, not validated
            created_at: Explicit timestamp for historical/seed transfers

        Returns:
            Ok(Transfer) if applied, Err(ValidationErrorKind) if rejected
        """
        with self._lock:
            kind = validate_transfer(self, sender, recipient, amount, note)
            if kind is not None:
                if self.verbose:
                    print(f"✗ REJECTED: {kind.value} ({sender}→{recipient}, amount={amount!r})")
                return Err(kind)

            sequence = self._next_sequence
            timestamp = created_at or self.current_time
            tx = Transfer(
                transfer_id=self._generate_transfer_id(sequence, timestamp),
                sender=sender,
                recipient=recipient,
                amount=amount,
                note=normalize_note(note),
                created_at=timestamp,
                sequence_number=sequence,
                settlement_ref=settlement_ref,
            )

            # Apply: debit, credit, append
            self.balances[sender] -= amount
            self.balances[recipient] += amount
            self.transfer_log.append(tx)
            self._next_sequence += 1

            if self.verbose:
                print(f"✓ APPLIED: {tx.transfer_id} {amount}: {sender}→{recipient}")
            self.broadcaster.publish(EVENT_TRANSFER_COMPLETED, to_feed_entry(tx, self.registry), tx.created_at)
            return Ok(tx)

    # ========================================================================
    # PROJECTIONS (read-only)
    # ========================================================================

    def feed(self, limit: int = DEFAULT_FEED_LIMIT) -> List[FeedEntry]:
        """Most recent transfers first, at most `limit` entries."""
        with self._lock:
            return project_feed(self.transfer_log, self.registry, limit)

    def graph(self) -> Graph:
        """Aggregated node/edge view of the whole transfer log."""
        with self._lock:
            return project_graph(self.transfer_log, self.registry)

    def eccentricity(self, key: str) -> int:
        with self._lock:
            return eccentricity(self.transfer_log, key)

    def stats(self, key: str) -> ParticipantStats:
        """
        Balance, transfer counts and connectivity reach for one participant.

        An unknown key yields all zeros.
        """
        with self._lock:
            given = sum(1 for t in self.transfer_log if t.sender == key)
            received = sum(1 for t in self.transfer_log if t.recipient == key)
            return ParticipantStats(
                balance=self.balances.get(key, 0),
                transfers_given=given,
                transfers_received=received,
                eccentricity=eccentricity(self.transfer_log, key),
            )

    def participant_summaries(self) -> List[ParticipantSummary]:
        """Given/received transfer counts for every participant, in registration order."""
        with self._lock:
            given: Dict[str, int] = {}
            received: Dict[str, int] = {}
            for t in self.transfer_log:
                given[t.sender] = given.get(t.sender, 0) + 1
                received[t.recipient] = received.get(t.recipient, 0) + 1
            return [
                ParticipantSummary(
                    key=p.key,
                    display_name=p.display_name,
                    transfers_given=given.get(p.key, 0),
                    transfers_received=received.get(p.key, 0),
                )
                for p in self.registry.list_all()
            ]

    def recent_transfer_count(self, window: timedelta = RECENT_ACTIVITY_WINDOW) -> int:
        """Number of transfers created strictly within `window` of now."""
        with self._lock:
            cutoff = self.current_time - window
            return sum(1 for t in self.transfer_log if t.created_at > cutoff)

    def transfers(self) -> List[Transfer]:
        """Copy of the transfer log in append order."""
        with self._lock:
            return list(self.transfer_log)

    # ========================================================================
    # SUBSCRIPTIONS
    # ========================================================================

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        """Register an event handler; returns its unsubscribe function."""
        return self.broadcaster.subscribe(handler)

    # ========================================================================
    # AUDIT
    # ========================================================================

    def total_supply(self) -> int:
        """Sum of all participant balances."""
        with self._lock:
            return sum(self.balances[k] for k in self.registry)

    def verify_conservation(self) -> Dict[str, Any]:
        """
        Verify that transfers have neither created nor destroyed tokens.

        Tokens enter the system only at registration, so total supply must
        equal starting_balance times the number of participants, and no
        balance may be negative.

        Returns:
            Dict with keys:
            - 'valid': bool - True if conservation holds and no balance is negative
            - 'supply': int - Current total supply
            - 'expected': int - Supply implied by registrations
            - 'discrepancy': int - supply - expected
            - 'negative': List[str] - Keys with a negative balance

        Example:
            result = ledger.verify_conservation()
            assert result['valid'], f"Conservation violated: {result}"
        """
        with self._lock:
            supply = self.total_supply()
            expected = self.starting_balance * len(self.registry)
            negative = sorted(k for k, b in self.balances.items() if b < 0)
            return {
                'valid': supply == expected and not negative,
                'supply': supply,
                'expected': expected,
                'discrepancy': supply - expected,
                'negative': negative,
            }
