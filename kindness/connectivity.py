"""
connectivity.py - Transfer Graph Connectivity

Treats the transfer log as an undirected graph (direction and multiplicity
ignored) and measures how far a participant's connections reach.
"""

from __future__ import annotations
from collections import defaultdict, deque
from typing import Dict, Iterable, Set

from .core import Transfer


def build_adjacency(log: Iterable[Transfer]) -> Dict[str, Set[str]]:
    """Undirected adjacency sets keyed by participant key."""
    adjacency: Dict[str, Set[str]] = defaultdict(set)
    for t in log:
        adjacency[t.sender].add(t.recipient)
        adjacency[t.recipient].add(t.sender)
    return adjacency


def distances_from(log: Iterable[Transfer], key: str) -> Dict[str, int]:
    """
    Breadth-first shortest-path distances from key to every reachable participant.

    Each participant is expanded at most once; the visited set is checked
    before enqueueing, so parallel transfers between the same pair never
    cause a revisit.
    """
    adjacency = build_adjacency(log)
    depth = {key: 0}
    queue = deque([key])
    while queue:
        current = queue.popleft()
        for neighbour in adjacency.get(current, ()):
            if neighbour in depth:
                continue
            depth[neighbour] = depth[current] + 1
            queue.append(neighbour)
    return depth


def eccentricity(log: Iterable[Transfer], key: str) -> int:
    """
    Longest shortest-path distance from key within the undirected transfer graph.

    Returns 0 for a participant with no transfers or an unknown key.
    """
    return max(distances_from(log, key).values())
