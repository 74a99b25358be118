"""
Scoring - scores are derived from the current winners, never stored
"""

import math
from datetime import datetime, timezone
from typing import Iterable, List, Mapping, Optional

from oscar_party.schemas.category import Category
from oscar_party.schemas.guest import Guest, LeaderboardEntry


def score_guest(guest: Guest, winners: Mapping[str, str]) -> int:
    """Number of categories where the guest's pick matches the announced winner"""
    return sum(
        1 for category, pick in guest.predictions.items()
        if winners.get(category) and winners[category] == pick
    )


def build_leaderboard(guests: Iterable[Guest], winners: Mapping[str, str]) -> List[LeaderboardEntry]:
    """
    Rank every guest who submitted a ballot

    Ordered by descending score, ties broken by name exactly as typed.
    """
    entries = [
        LeaderboardEntry(**guest.model_dump(), score=score_guest(guest, winners))
        for guest in guests
        if guest.ballot_submitted
    ]
    entries.sort(key=lambda entry: (-entry.score, entry.name))
    return entries


def scored_categories(categories: Iterable[Category]) -> List[Category]:
    """Categories that can actually be won (at least one nominee)"""
    return [category for category in categories if category.nominees]


def announced_count(categories: Iterable[Category], winners: Mapping[str, str]) -> int:
    return sum(1 for category in scored_categories(categories) if winners.get(category.name))


def is_show_complete(categories: Iterable[Category], winners: Mapping[str, str]) -> bool:
    """True once every category with nominees has an announced winner"""
    scored = scored_categories(categories)
    return bool(scored) and all(winners.get(category.name) for category in scored)


def overall_winner(
    categories: Iterable[Category],
    winners: Mapping[str, str],
    leaderboard: List[LeaderboardEntry],
) -> Optional[LeaderboardEntry]:
    if not leaderboard or not is_show_complete(categories, winners):
        return None
    return leaderboard[0]


def parse_show_date(value: str) -> Optional[datetime]:
    """Parse an ISO date or datetime; naive values are taken as UTC"""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def days_until(show_date: str, now: Optional[datetime] = None) -> Optional[int]:
    """Whole days until the show, rounded up; None when no usable date is set"""
    if not show_date:
        return None
    target = parse_show_date(show_date)
    if target is None:
        return None
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return math.ceil((target - now).total_seconds() / 86400)
