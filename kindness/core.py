"""
Core types and constants for the kindness ledger.

This module provides the foundational data structures shared by every other module:
1. Constants: starting balance, transfer bounds, note limits, event kinds
2. Immutable records: Participant, Transfer, Event
3. Derived views: FeedEntry, GraphNode, GraphEdge, Graph, ParticipantStats
4. Result variant: Ok / Err carrying a ValidationErrorKind
5. Exceptions: KindnessError and its subclasses
6. Protocols: LedgerView for read-only ledger access

Nothing in this module mutates ledger state.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import (
    Any, List, Optional, Protocol, Tuple, Union,
    runtime_checkable,
)


# ============================================================================
# CONSTANTS
# ============================================================================

# Every participant is issued this many tokens exactly once, at registration.
STARTING_BALANCE = 5

# Inclusive bounds for a single transfer.
MIN_TRANSFER_AMOUNT = 1
MAX_TRANSFER_AMOUNT = 5

# Note limits apply to the trimmed note.
NOTE_MIN_LENGTH = 3
NOTE_MAX_LENGTH = 280

# Display name used when a participant record cannot be resolved.
ANONYMOUS_NAME = "Anonymous"

# Display name stored when registration supplies an empty one.
FALLBACK_DISPLAY_NAME = "Anonymous"

DEFAULT_FEED_LIMIT = 20

RECENT_ACTIVITY_WINDOW = timedelta(minutes=5)

# Event kinds published by the ledger.
EVENT_PARTICIPANT_JOINED = "participant_joined"
EVENT_TRANSFER_COMPLETED = "transfer_completed"


# ============================================================================
# ENUMS
# ============================================================================

class ValidationErrorKind(Enum):
    """
    Reason a transfer request was rejected.

    Checks run in declaration order; the first failing check wins.
    NOTE_TOO_LONG is normally caught at the boundary and is re-checked last.
    """
    SENDER_UNVERIFIED = "sender_unverified"
    RECIPIENT_UNVERIFIED = "recipient_unverified"
    SELF_TRANSFER_NOT_ALLOWED = "self_transfer_not_allowed"
    AMOUNT_OUT_OF_RANGE = "amount_out_of_range"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    NOTE_REQUIRED = "note_required"
    NOTE_TOO_LONG = "note_too_long"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class KindnessError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class TransferRejected(KindnessError):
    """Raised when unwrapping an Err result."""

    def __init__(self, kind: ValidationErrorKind):
        super().__init__(f"Transfer rejected: {kind.value}")
        self.kind = kind


# ============================================================================
# RECORDS
# ============================================================================

@dataclass(frozen=True, slots=True)
class Participant:
    """
    A verified identity holding a token balance.

    Attributes:
        key: Globally unique identity key, stable for the process lifetime.
        display_name: Human-readable name.
        verified: Always True; unverified participants are never registered.
        created_at: When the participant first registered.
    """
    key: str
    display_name: str
    created_at: datetime
    verified: bool = True


@dataclass(frozen=True, slots=True)
class Transfer:
    """
    An executed, immutable movement of tokens - represents FACT.

    Attributes:
        transfer_id: Unique identifier (ledger name + sequence).
        sender: Key of the debited participant.
        recipient: Key of the credited participant.
        amount: Whole number of tokens moved.
        note: Trimmed explanatory note.
        created_at: When the transfer happened.
        sequence_number: Position in the transfer log (0-based, monotonic).
        settlement_ref: Opaque external reference (e.g. payment rail tx hash).
    """
    transfer_id: str
    sender: str
    recipient: str
    amount: int
    note: str
    created_at: datetime
    sequence_number: int
    settlement_ref: Optional[str] = None

    def __repr__(self) -> str:
        return f"Transfer({self.amount}: {self.sender}→{self.recipient}, {self.note!r})"


@dataclass(frozen=True, slots=True)
class Event:
    """
    A published domain event.

    Attributes:
        kind: EVENT_PARTICIPANT_JOINED or EVENT_TRANSFER_COMPLETED.
        payload: Participant for joins, FeedEntry for transfers.
        published_at: Ledger time of the triggering mutation.
        sequence: Monotonic publish counter within one broadcaster.
    """
    kind: str
    payload: Any
    published_at: datetime
    sequence: int


# ============================================================================
# DERIVED VIEWS
# ============================================================================

@dataclass(frozen=True, slots=True)
class FeedEntry:
    """A transfer with display names resolved at query time."""
    transfer_id: str
    sender_name: str
    recipient_name: str
    amount: int
    note: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class GraphNode:
    key: str
    display_name: str
    total_given: int
    total_received: int
    transfer_count: int
    verified: bool = True


@dataclass(frozen=True, slots=True)
class GraphEdge:
    """
    Aggregate of all transfers for one ordered sender→recipient pair.

    note and created_at come from the most recent transfer in the pair.
    """
    source: str
    target: str
    amount: int
    note: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class Graph:
    nodes: Tuple[GraphNode, ...]
    edges: Tuple[GraphEdge, ...]

    def edge(self, source: str, target: str) -> Optional[GraphEdge]:
        """Return the edge for an ordered pair, or None."""
        for e in self.edges:
            if e.source == source and e.target == target:
                return e
        return None

    def node(self, key: str) -> Optional[GraphNode]:
        for n in self.nodes:
            if n.key == key:
                return n
        return None


@dataclass(frozen=True, slots=True)
class ParticipantStats:
    balance: int
    transfers_given: int
    transfers_received: int
    eccentricity: int


@dataclass(frozen=True, slots=True)
class ParticipantSummary:
    key: str
    display_name: str
    transfers_given: int
    transfers_received: int


# ============================================================================
# RESULT VARIANT
# ============================================================================

@dataclass(frozen=True, slots=True)
class Ok:
    """Successful outcome carrying a value."""
    value: Any

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """Rejected outcome carrying the reason."""
    kind: ValidationErrorKind

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise TransferRejected(self.kind)


TransferResult = Union[Ok, Err]


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class LedgerView(Protocol):
    """
    Read-only interface to ledger state.

    Validation functions accept a LedgerView to declare that they only read.
    The Ledger class implements this protocol but also provides mutation methods.
    """

    @property
    def current_time(self) -> datetime:
        """Return the current time according to the ledger's clock."""
        ...

    def get_balance(self, key: str) -> int:
        """Return a participant's balance, or 0 if not registered."""
        ...

    def is_registered(self, key: str) -> bool:
        ...

    def get(self, key: str) -> Optional[Participant]:
        ...

    def list_all(self) -> List[Participant]:
        ...
