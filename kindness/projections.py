"""
projections.py - Feed and Graph Projections

Pure functions over the transfer log and the participant registry.
Both projections are recomputed from scratch on every call; the log is the
only source of truth and nothing here is cached.
"""

from __future__ import annotations
from typing import Dict, List, Sequence, Tuple

from .core import (
    Transfer, FeedEntry, Graph, GraphNode, GraphEdge, ANONYMOUS_NAME,
)
from .registry import ParticipantRegistry


def to_feed_entry(transfer: Transfer, registry: ParticipantRegistry) -> FeedEntry:
    """Resolve display names for a transfer, falling back to ANONYMOUS_NAME."""
    return FeedEntry(
        transfer_id=transfer.transfer_id,
        sender_name=registry.display_name(transfer.sender, ANONYMOUS_NAME),
        recipient_name=registry.display_name(transfer.recipient, ANONYMOUS_NAME),
        amount=transfer.amount,
        note=transfer.note,
        created_at=transfer.created_at,
    )


def project_feed(
    log: Sequence[Transfer],
    registry: ParticipantRegistry,
    limit: int,
) -> List[FeedEntry]:
    """
    Return the last `limit` transfers, most recent first.

    A non-positive limit yields an empty feed.
    """
    if limit <= 0:
        return []
    tail = log[-limit:]
    return [to_feed_entry(t, registry) for t in reversed(tail)]


def project_graph(log: Sequence[Transfer], registry: ParticipantRegistry) -> Graph:
    """
    Aggregate the transfer log into nodes and edges.

    Nodes: one per registered participant, in registration order, with given
    and received totals over the full log.

    Edges: one per ordered (sender, recipient) pair seen in the log, in order
    of first appearance. amount is the running sum for the pair; note and
    created_at are overwritten by each later transfer in the pair.
    """
    given: Dict[str, int] = {}
    received: Dict[str, int] = {}
    counts: Dict[str, int] = {}
    edges: Dict[Tuple[str, str], GraphEdge] = {}

    for t in log:
        given[t.sender] = given.get(t.sender, 0) + t.amount
        received[t.recipient] = received.get(t.recipient, 0) + t.amount
        counts[t.sender] = counts.get(t.sender, 0) + 1
        counts[t.recipient] = counts.get(t.recipient, 0) + 1

        pair = (t.sender, t.recipient)
        previous = edges.get(pair)
        running = previous.amount if previous else 0
        edges[pair] = GraphEdge(
            source=t.sender,
            target=t.recipient,
            amount=running + t.amount,
            note=t.note,
            created_at=t.created_at,
        )

    nodes = tuple(
        GraphNode(
            key=p.key,
            display_name=p.display_name,
            total_given=given.get(p.key, 0),
            total_received=received.get(p.key, 0),
            transfer_count=counts.get(p.key, 0),
            verified=p.verified,
        )
        for p in registry.list_all()
    )
    return Graph(nodes=nodes, edges=tuple(edges.values()))
