#!/usr/bin/env python3
"""
demo.py - Interactive Tutorial: Learn the Kindness Ledger Step by Step

Each step builds on the previous one. Press Enter to advance.

WHAT YOU'LL LEARN:
  1-3: Foundation  - Seeded ledger, registration, idempotency
  4-6: Transfers   - Giving tokens, rejections, live events
  7-9: Views       - Feed, graph, connectivity and community pulse

Run:
    python demo.py           # Interactive mode (press Enter for each step)
    python demo.py --quick   # Run all steps without pausing
"""

from dataclasses import dataclass
import sys

from kindness import (
    Ledger, Event,
    EVENT_TRANSFER_COMPLETED, STARTING_BALANCE,
    seed_demo_data, generate_insights,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Configuration for the tutorial. Modify these to experiment."""
    newcomer_key: str = "alien_042"
    newcomer_name: str = "Orbit"
    gift_amount: int = 2
    gift_note: str = "Welcome! Thanks for asking such good questions."
    feed_limit: int = 5


CONFIG = DemoConfig()

QUICK_MODE = "--quick" in sys.argv


def wait_for_enter():
    """Pause for user input unless in quick mode."""
    if not QUICK_MODE:
        input("\n[Press Enter to continue...]")


def step_header(number: int, title: str, objective: str):
    """Print a step header with learning objective."""
    print(f"\n{'='*70}")
    print(f"STEP {number}: {title}")
    print(f"{'='*70}")
    print(f"\nObjective: {objective}\n")


def section_header(text: str):
    print(f"\n--- {text} ---\n")


# ============================================================================
# PHASE 1: FOUNDATION
# ============================================================================

def step_01_seeded_ledger() -> Ledger:
    step_header(1, "A Seeded Ledger",
        "Start from the demo community: eight participants, nine transfers.")

    print(">>> ledger = Ledger('tutorial', verbose=True)")
    ledger = Ledger("tutorial", verbose=True)
    print(">>> seed_demo_data(ledger)")
    seed_demo_data(ledger)

    section_header("Balances")
    for p in ledger.list_all():
        print(f"{p.display_name:<8} {ledger.get_balance(p.key)}")

    audit = ledger.verify_conservation()
    print(f"\nSupply: {audit['supply']} (expected {audit['expected']}) valid={audit['valid']}")
    return ledger


def step_02_register(ledger: Ledger) -> Ledger:
    step_header(2, "Registering a Newcomer",
        f"Every verified participant starts with {STARTING_BALANCE} tokens.")

    print(f">>> ledger.register({CONFIG.newcomer_key!r}, {CONFIG.newcomer_name!r})")
    p = ledger.register(CONFIG.newcomer_key, CONFIG.newcomer_name)
    print(f"Registered {p.display_name}, balance={ledger.get_balance(p.key)}")
    return ledger


def step_03_idempotency(ledger: Ledger) -> Ledger:
    step_header(3, "Registering Again",
        "Re-registration returns the original record and issues nothing.")

    again = ledger.register(CONFIG.newcomer_key, "Someone Else")
    print(f"Name is still {again.display_name!r}, balance={ledger.get_balance(again.key)}")
    return ledger


# ============================================================================
# PHASE 2: TRANSFERS
# ============================================================================

def step_04_subscribe(ledger: Ledger) -> Ledger:
    step_header(4, "Listening for Events",
        "Subscribers are called synchronously for every state change.")

    def announce(event: Event):
        if event.kind == EVENT_TRANSFER_COMPLETED:
            entry = event.payload
            print(f"  [live] {entry.sender_name} → {entry.recipient_name}: {entry.amount} \"{entry.note}\"")

    ledger.subscribe(announce)
    print("Subscribed a handler that prints each completed transfer.")
    return ledger


def step_05_give(ledger: Ledger) -> Ledger:
    step_header(5, "Giving Tokens",
        "A transfer needs a reason: the note is mandatory.")

    result = ledger.transfer("alien_001", CONFIG.newcomer_key, CONFIG.gift_amount, CONFIG.gift_note)
    print(f"Result: {result}")
    return ledger


def step_06_rejections(ledger: Ledger) -> Ledger:
    step_header(6, "Rejections Are Values",
        "Invalid requests return Err(kind) and change nothing.")

    attempts = [
        ("alien_001", "alien_001", 1, "to me"),
        ("alien_001", "alien_002", 9, "too generous"),
        ("alien_001", "alien_002", 1, "hi"),
        ("nobody", "alien_002", 1, "who am I?"),
    ]
    for sender, recipient, amount, note in attempts:
        result = ledger.transfer(sender, recipient, amount, note)
        kind = result.kind if result.is_err() else None
        print(f"{sender}→{recipient} amount={amount} note={note!r}: {kind}")
    assert ledger.verify_conservation()['valid']
    return ledger


# ============================================================================
# PHASE 3: VIEWS
# ============================================================================

def step_07_feed(ledger: Ledger) -> Ledger:
    step_header(7, "The Feed", "Most recent transfers first, bounded.")
    for entry in ledger.feed(CONFIG.feed_limit):
        print(f"{entry.created_at:%H:%M} {entry.sender_name} → {entry.recipient_name} ({entry.amount}): {entry.note}")
    return ledger


def step_08_graph(ledger: Ledger) -> Ledger:
    step_header(8, "The Graph", "Totals per participant and per ordered pair.")
    graph = ledger.graph()
    for node in graph.nodes:
        stats = ledger.stats(node.key)
        print(f"{node.display_name:<8} given={node.total_given} received={node.total_received} "
              f"reach={stats.eccentricity}")
    print(f"\n{len(graph.edges)} edges")
    return ledger


def step_09_pulse(ledger: Ledger) -> Ledger:
    step_header(9, "Community Pulse", "Nudges derived from recent activity.")
    pulse = generate_insights(ledger)
    for insight in pulse.insights:
        print(f"[{insight.insight_type}] {insight.message}")
    print(f"\nScore: {pulse.community_score}  Trend: {pulse.trend}")
    return ledger


def main():
    """Run the complete tutorial."""
    print("=" * 70)
    print("       KINDNESS LEDGER - INTERACTIVE TUTORIAL")
    print("=" * 70)
    if QUICK_MODE:
        print("Running in QUICK mode (no pauses)")
    wait_for_enter()

    ledger = step_01_seeded_ledger()
    for step in (step_02_register, step_03_idempotency, step_04_subscribe,
                 step_05_give, step_06_rejections, step_07_feed,
                 step_08_graph, step_09_pulse):
        wait_for_enter()
        ledger = step(ledger)

    print("\n" + "=" * 70)
    print("       TUTORIAL COMPLETE!")
    print("=" * 70)
    print("""
    Next steps:
      - Run tests: pytest tests/
    """)


if __name__ == "__main__":
    main()
