"""
registry.py - Participant Registry

Owns identity records. Registration is idempotent: a key that is already
known returns its existing record untouched. Balance issuance and event
publication happen in the Ledger, which is the registry's only writer.
"""

from __future__ import annotations
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Tuple

from .core import Participant, FALLBACK_DISPLAY_NAME


class ParticipantRegistry:
    """
    Map of identity key -> Participant, in registration order.

    Not thread-safe on its own; the Ledger serializes access.
    """

    def __init__(self):
        self._participants: Dict[str, Participant] = {}

    def register(self, key: str, display_name: str, created_at: datetime) -> Tuple[Participant, bool]:
        """
        Register a participant if the key is new.

        Args:
            key: Identity key from the verification provider
            display_name: Name to show; empty or blank names get a fallback
            created_at: Registration time for new records

        Returns:
            (participant, created) where created is False for a re-registration
        """
        existing = self._participants.get(key)
        if existing is not None:
            return existing, False
        if not isinstance(display_name, str) or not display_name.strip():
            display_name = FALLBACK_DISPLAY_NAME
        participant = Participant(
            key=key,
            display_name=display_name,
            created_at=created_at,
        )
        self._participants[key] = participant
        return participant, True

    def get(self, key: str) -> Optional[Participant]:
        return self._participants.get(key)

    def list_all(self) -> List[Participant]:
        """All participants in registration order."""
        return list(self._participants.values())

    def display_name(self, key: str, default: str) -> str:
        participant = self._participants.get(key)
        return participant.display_name if participant else default

    def __contains__(self, key: object) -> bool:
        return key in self._participants

    def __len__(self) -> int:
        return len(self._participants)

    def __iter__(self) -> Iterator[str]:
        return iter(self._participants)
