"""
kindness - Social Token Ledger

Verified participants hold a small token balance and give tokens to each
other with a note explaining why. The transfer log is queried as an
aggregated graph and as a chronological feed, and observers are notified of
every change.

Usage:
    from kindness import Ledger, EVENT_TRANSFER_COMPLETED

    ledger = Ledger("main")
    ledger.register("alice", "Alice")
    ledger.register("bob", "Bob")

    unsubscribe = ledger.subscribe(lambda event: print(event.kind, event.payload))

    result = ledger.transfer("alice", "bob", 2, "Thanks for the late-night debugging")
    if result.is_err():
        print(result.kind)

    ledger.feed(limit=10)
    ledger.graph()
    ledger.stats("alice")
"""

# Core types
from .core import (
    Participant,
    Transfer,
    Event,
    FeedEntry,
    GraphNode,
    GraphEdge,
    Graph,
    ParticipantStats,
    ParticipantSummary,
    LedgerView,
    ValidationErrorKind,
    Ok,
    Err,
    TransferResult,
    KindnessError,
    TransferRejected,
    STARTING_BALANCE,
    MIN_TRANSFER_AMOUNT,
    MAX_TRANSFER_AMOUNT,
    NOTE_MIN_LENGTH,
    NOTE_MAX_LENGTH,
    ANONYMOUS_NAME,
    FALLBACK_DISPLAY_NAME,
    DEFAULT_FEED_LIMIT,
    RECENT_ACTIVITY_WINDOW,
    EVENT_PARTICIPANT_JOINED,
    EVENT_TRANSFER_COMPLETED,
)

# Ledger
from .ledger import Ledger

# Components
from .registry import ParticipantRegistry
from .broadcaster import EventBroadcaster, EventHandler
from .validation import validate_transfer, collect_failures
from .projections import project_feed, project_graph, to_feed_entry
from .connectivity import build_adjacency, distances_from, eccentricity

# Seed data
from .seed import DEMO_PARTICIPANTS, DEMO_TRANSFERS, seed_demo_data

# Insights
from .insights import Insight, CommunityPulse, generate_insights

__all__ = [
    # Core
    'Participant', 'Transfer', 'Event', 'FeedEntry', 'GraphNode', 'GraphEdge', 'Graph',
    'ParticipantStats', 'ParticipantSummary', 'LedgerView',
    'ValidationErrorKind', 'Ok', 'Err', 'TransferResult',
    'KindnessError', 'TransferRejected',
    'STARTING_BALANCE', 'MIN_TRANSFER_AMOUNT', 'MAX_TRANSFER_AMOUNT',
    'NOTE_MIN_LENGTH', 'NOTE_MAX_LENGTH', 'ANONYMOUS_NAME', 'FALLBACK_DISPLAY_NAME',
    'DEFAULT_FEED_LIMIT', 'RECENT_ACTIVITY_WINDOW',
    'EVENT_PARTICIPANT_JOINED', 'EVENT_TRANSFER_COMPLETED',
    # Ledger
    'Ledger',
    # Components
    'ParticipantRegistry', 'EventBroadcaster', 'EventHandler',
    'validate_transfer', 'collect_failures',
    'project_feed', 'project_graph', 'to_feed_entry',
    'build_adjacency', 'distances_from', 'eccentricity',
    # Seed
    'DEMO_PARTICIPANTS', 'DEMO_TRANSFERS', 'seed_demo_data',
    # Insights
    'Insight', 'CommunityPulse', 'generate_insights',
]

__version__ = '1.0.0'
