"""
seed.py - Demo Seed Data

A fixed set of participants and historical transfers for demos and manual
testing. Seeding goes through Ledger.register and Ledger.transfer, so
seeded and live data obey the same invariants.
"""

from __future__ import annotations
from datetime import timedelta
from typing import List, Tuple

from .core import Transfer, KindnessError


# (key, display_name)
DEMO_PARTICIPANTS: Tuple[Tuple[str, str], ...] = (
    ("alien_001", "Luna"),
    ("alien_002", "Kai"),
    ("alien_003", "Sage"),
    ("alien_004", "Nova"),
    ("alien_005", "River"),
    ("alien_006", "Ember"),
    ("alien_007", "Atlas"),
    ("alien_008", "Wren"),
)

# (sender, recipient, amount, note)
DEMO_TRANSFERS: Tuple[Tuple[str, str, int, str], ...] = (
    ("alien_001", "alien_002", 2, "You helped me debug my code at 2am. That's real friendship."),
    ("alien_002", "alien_003", 1, "Your talk on ZK proofs inspired me to learn more."),
    ("alien_003", "alien_005", 2, "Thank you for sharing your lunch when I forgot mine!"),
    ("alien_004", "alien_001", 1, "Your smile made my day brighter. Simple but powerful."),
    ("alien_005", "alien_006", 1, "For teaching me that kindness compounds."),
    ("alien_006", "alien_007", 2, "You believed in my idea when nobody else did."),
    ("alien_007", "alien_004", 1, "For the coffee. For the conversation. For being human."),
    ("alien_008", "alien_003", 2, "You held the door open and asked how I was doing. Nobody does that."),
    ("alien_001", "alien_008", 1, "Your energy is contagious. Never stop being you."),
)

# Gap between consecutive seeded transfers; the last one lands one gap before now.
SEED_SPACING = timedelta(minutes=5)


def seed_demo_data(ledger) -> List[Transfer]:
    """
    Populate an empty ledger with the demo participants and transfers.

    Does nothing if the ledger already has participants.

    Args:
        ledger: The Ledger to populate

    Returns:
        The seeded transfers in log order (empty if seeding was skipped)

    Raises:
        KindnessError: If a seeded transfer is rejected (e.g. the ledger was
                       built with a starting balance too small for the data set)
    """
    if ledger.list_all():
        return []

    for key, name in DEMO_PARTICIPANTS:
        ledger.register(key, name)

    now = ledger.current_time
    count = len(DEMO_TRANSFERS)
    seeded = []
    for i, (sender, recipient, amount, note) in enumerate(DEMO_TRANSFERS):
        result = ledger.transfer(
            sender, recipient, amount, note,
            settlement_ref=f"0xdemo{i}",
            created_at=now - (count - i) * SEED_SPACING,
        )
        if result.is_err():
            raise KindnessError(
                f"Seed transfer {i} ({sender}→{recipient}) rejected: {result.kind.value}"
            )
        seeded.append(result.value)
    return seeded
