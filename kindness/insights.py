"""
insights.py - Community Insights

Summarises recent ledger activity into a small set of nudges for the
presentation layer: who could use some kindness, a general prompt, and
whether activity is rising or falling. Reads the ledger only.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple
import random

from .core import ParticipantSummary, RECENT_ACTIVITY_WINDOW


KINDNESS_PROMPTS: Tuple[str, ...] = (
    "Someone new just joined. A warm welcome can change their whole day",
    "It's been quiet in the chain lately. Start a ripple!",
    "A few people haven't received kindness yet today. Be their first!",
    "Try sending kindness to someone you haven't connected with before",
    "A small note of appreciation goes further than you think",
    "Someone just sent you kindness. Pay it forward?",
)

MATCH_REASONS: Tuple[str, ...] = (
    "hasn't received a gift in a while",
    "just joined the community",
    "has been very generous lately, show them appreciation",
)

TREND_RISING = "rising"
TREND_STABLE = "stable"
TREND_FALLING = "falling"

INSIGHT_MATCH = "match"
INSIGHT_PROMPT = "prompt"
INSIGHT_TREND = "trend"

PROMPT_CONFIDENCE = 0.85
TREND_CONFIDENCE = 0.9


@dataclass(frozen=True, slots=True)
class Insight:
    """
    One generated nudge.

    is_ai is always True; it marks machine-generated content for the UI.
    """
    insight_id: str
    insight_type: str
    message: str
    confidence: float
    created_at: datetime
    suggested_recipient: Optional[str] = None
    is_ai: bool = True


@dataclass(frozen=True, slots=True)
class CommunityPulse:
    insights: Tuple[Insight, ...]
    generated_at: datetime
    community_score: int
    trend: str


def trend_direction(recent_count: int) -> str:
    if recent_count > 5:
        return TREND_RISING
    if recent_count > 2:
        return TREND_STABLE
    return TREND_FALLING


def community_score(recent_count: int, participant_count: int) -> int:
    """Activity score clamped to 0-100."""
    return min(100, recent_count * 8 + participant_count * 3)


def least_received(summaries) -> Optional[ParticipantSummary]:
    """Participant with the fewest received transfers; ties go to the earliest registered."""
    best = None
    for s in summaries:
        if best is None or s.transfers_received < best.transfers_received:
            best = s
    return best


def _trend_message(trend: str, recent_count: int) -> str:
    if trend == TREND_RISING:
        return f"Kindness is spreading! {recent_count} gifts in the last round."
    if trend == TREND_STABLE:
        return f"Steady kindness flow: {recent_count} gifts recently. Every one matters."
    return f"The chain could use a spark. Only {recent_count} gifts recently."


def generate_insights(ledger, rng: Optional[random.Random] = None, window=RECENT_ACTIVITY_WINDOW) -> CommunityPulse:
    """
    Build the current community pulse from ledger state.

    Args:
        ledger: Read access to participants and the transfer log
        rng: Source of randomness for message choice (default: Random(0))
        window: How far back counts as recent activity

    Returns:
        CommunityPulse with a match insight (if anyone is registered), a prompt
        insight and a trend insight, in that order
    """
    rng = rng or random.Random(0)
    now = ledger.current_time
    stamp = int(now.timestamp() * 1000)
    summaries = ledger.participant_summaries()
    recent = ledger.recent_transfer_count(window)
    insights = []

    suggested = least_received(summaries)
    if suggested is not None:
        insights.append(Insight(
            insight_id=f"ai_match_{stamp}",
            insight_type=INSIGHT_MATCH,
            message=f"{suggested.display_name} {rng.choice(MATCH_REASONS)}",
            confidence=round(0.7 + rng.random() * 0.25, 4),
            created_at=now,
            suggested_recipient=suggested.key,
        ))

    insights.append(Insight(
        insight_id=f"ai_prompt_{stamp}",
        insight_type=INSIGHT_PROMPT,
        message=rng.choice(KINDNESS_PROMPTS),
        confidence=PROMPT_CONFIDENCE,
        created_at=now,
    ))

    trend = trend_direction(recent)
    insights.append(Insight(
        insight_id=f"ai_trend_{stamp}",
        insight_type=INSIGHT_TREND,
        message=_trend_message(trend, recent),
        confidence=TREND_CONFIDENCE,
        created_at=now,
    ))

    return CommunityPulse(
        insights=tuple(insights),
        generated_at=now,
        community_score=community_score(recent, len(summaries)),
        trend=trend,
    )
