"""
Tests for scoring, leaderboard ordering and the show countdown
"""

from datetime import datetime, timezone

from oscar_party.schemas.category import Category
from oscar_party.schemas.guest import RSVP, Guest
from oscar_party.services import scoring

CATEGORIES = [
    Category(name="Best Picture", nominees=["A", "B"]),
    Category(name="Best Director", nominees=["C", "D"]),
    Category(name="Honorary Award", nominees=[]),
]

NOW = datetime(2025, 3, 2, 23, 0, tzinfo=timezone.utc)

def guest(name, **predictions):
    return Guest(name=name, rsvp=RSVP.YES, predictions=predictions)

def test_single_guest_scenario():
    alice = guest("Alice", **{"Best Picture": "A"})
    winners = {"Best Picture": "A"}

    assert scoring.score_guest(alice, winners) == 1
    leaderboard = scoring.build_leaderboard([alice], winners)
    assert [(e.name, e.score) for e in leaderboard] == [("Alice", 1)]

def test_unannounced_categories_score_nothing():
    alice = guest("Alice", **{"Best Picture": "A", "Best Director": "C"})
    assert scoring.score_guest(alice, {}) == 0

def test_higher_score_first():
    bob = guest("Bob", **{"Best Picture": "A"})
    ann = guest("Ann", **{"Best Picture": "B"})

    leaderboard = scoring.build_leaderboard([ann, bob], {"Best Picture": "A"})

    assert [(e.name, e.score) for e in leaderboard] == [("Bob", 1), ("Ann", 0)]

def test_ties_break_on_case_sensitive_name():
    guests = [guest("bea", **{"Best Picture": "A"}), guest("Zed", **{"Best Picture": "A"})]

    leaderboard = scoring.build_leaderboard(guests, {})

    assert [e.name for e in leaderboard] == ["Zed", "bea"]

def test_guests_without_ballot_are_left_out():
    leaderboard = scoring.build_leaderboard([guest("Nobody")], {"Best Picture": "A"})
    assert leaderboard == []

def test_complete_once_every_nominated_category_is_won():
    winners = {"Best Picture": "A"}
    assert scoring.announced_count(CATEGORIES, winners) == 1
    assert scoring.is_show_complete(CATEGORIES, winners) is False

    winners["Best Director"] = "D"
    assert scoring.is_show_complete(CATEGORIES, winners) is True

def test_no_nominated_categories_is_never_complete():
    assert scoring.is_show_complete([Category(name="Empty")], {}) is False

def test_overall_winner_is_top_of_leaderboard():
    winners = {"Best Picture": "A", "Best Director": "D"}
    leaderboard = scoring.build_leaderboard([
        guest("Ann", **{"Best Picture": "A", "Best Director": "D"}),
        guest("Bob", **{"Best Picture": "A"}),
    ], winners)

    assert scoring.overall_winner(CATEGORIES, winners, leaderboard).name == "Ann"
    assert scoring.overall_winner(CATEGORIES, {"Best Picture": "A"}, leaderboard) is None

def test_show_date_now_is_zero():
    assert scoring.days_until("2025-03-02T23:00:00Z", now=NOW) == 0

def test_partial_days_round_up():
    assert scoring.days_until("2025-03-04", now=NOW) == 2

def test_unset_or_unparseable_is_none():
    assert scoring.days_until("", now=NOW) is None
    assert scoring.days_until("next sunday", now=NOW) is None
