"""
Party service: guests, parties, categories, winners and the show date.

Every write goes to the local cache first, is announced on the event
channel, and is then handed to the sync client for a best-effort remote
push. Reads come from the local cache only.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from oscar_party.core.config import settings
from oscar_party.core.defaults import DEFAULT_CATEGORIES
from oscar_party.core.exceptions import PartyValidationError
from oscar_party.core.keys import Collection, EventType
from oscar_party.schemas.category import Category
from oscar_party.schemas.guest import (
    RSVP,
    Guest,
    LeaderboardEntry,
    PartyLookup,
    PartySubmission,
    PartySubmissionResult,
)
from oscar_party.schemas.show import GuestStats, ReminderList, ShowProgress
from oscar_party.services import scoring
from oscar_party.services.event_channel import EventChannel, SyncCallback
from oscar_party.services.export_service import ExportService
from oscar_party.services.local_cache import LocalCache
from oscar_party.services.sync_client import SyncClient

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def new_id() -> str:
    return secrets.token_urlsafe(8)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def normalize_name(name: str) -> str:
    return name.strip().lower()


def placeholder_name(slot: int) -> str:
    """Default label of the party form's guest slot (slots count from 1, the host)"""
    return f"Guest {slot}"


class PartyService:
    """Service for guest submissions, ballots and live scoring"""

    def __init__(
        self,
        cache: LocalCache,
        channel: EventChannel,
        sync: SyncClient,
        reminder_urgent_days: int = settings.REMINDER_URGENT_DAYS,
    ):
        self.cache = cache
        self.channel = channel
        self.sync = sync
        self.reminder_urgent_days = reminder_urgent_days

    # ---- subscriptions ----

    def on_sync(self, callback: SyncCallback) -> Callable[[], None]:
        return self.channel.on_sync(callback)

    def subscribe(self, collection: Collection | str, handler: SyncCallback) -> Callable[[], None]:
        return self.channel.subscribe(collection, handler)

    # ---- cache helpers ----

    def _read_models(self, collection: Collection, model: Type[ModelT]) -> List[ModelT]:
        raw = self.cache.read(collection)
        if not isinstance(raw, list):
            return []
        items = []
        for position, item in enumerate(raw):
            try:
                items.append(model.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable {collection.value} entry {position}: {e}")
        return items

    def _write_guests(self, guests: Iterable[Guest]) -> None:
        self.cache.write(Collection.GUESTS, [g.to_record() for g in guests])

    # ---- categories ----

    def get_categories(self) -> List[Category]:
        return self._read_models(Collection.CATEGORIES, Category)

    def save_categories(self, categories: Iterable[Category | dict]) -> List[Category]:
        """Clean and store the category list.

        Names and nominees are trimmed, empty nominees and unnamed categories
        dropped. Duplicate names are rejected.
        """
        cleaned: List[Category] = []
        seen = set()
        for item in categories:
            category = item if isinstance(item, Category) else Category.model_validate(item)
            name = category.name.strip()
            if not name:
                continue
            if name in seen:
                raise PartyValidationError(f'Category "{name}" is listed more than once.', field="categories")
            seen.add(name)
            nominees = [n.strip() for n in category.nominees if n and n.strip()]
            cleaned.append(Category(name=name, nominees=nominees))

        records = [c.model_dump() for c in cleaned]
        with self.cache.lock:
            self.cache.write(Collection.CATEGORIES, records)
        self.channel.publish(EventType.CATEGORIES_UPDATED, {})
        self.sync.push_categories(records)
        logger.info(f"Saved {len(cleaned)} categories")
        return cleaned

    def get_default_categories(self) -> List[Category]:
        return [Category(name=c["name"], nominees=list(c["nominees"])) for c in DEFAULT_CATEGORIES]

    def categories_configured(self) -> bool:
        return any(c.nominees for c in self.get_categories())

    # ---- guests ----

    def get_guests(self) -> List[Guest]:
        return self._read_models(Collection.GUESTS, Guest)

    def save_guest(self, guest: Guest, now: Optional[datetime] = None) -> Guest:
        """Insert or replace one guest by id; assigns an id when missing.

        Raises PartyValidationError when another guest already uses the name.
        """
        guest.name = guest.name.strip()
        if not guest.name:
            raise PartyValidationError("Please enter your name.", field="name")
        with self.cache.lock:
            guests = self.get_guests()
            wanted = normalize_name(guest.name)
            taken = next((g for g in guests if normalize_name(g.name) == wanted), None)
            if taken is not None and taken.id != guest.id:
                raise PartyValidationError(
                    f'"{guest.name}" is already registered by someone else.',
                    field="name",
                )
            guest.submitted_at = utc_timestamp(now)
            index = next((i for i, g in enumerate(guests) if guest.id and g.id == guest.id), None)
            if index is not None:
                guests[index] = guest
            else:
                guest.id = guest.id or new_id()
                guests.append(guest)
            self._write_guests(guests)
        self.channel.publish(EventType.GUEST_UPDATED, {"id": guest.id})
        self.sync.push_guest(guest.id, guest.to_remote())
        return guest

    def find_guest_by_name(self, name: str) -> Optional[Guest]:
        wanted = normalize_name(name)
        return next((g for g in self.get_guests() if normalize_name(g.name) == wanted), None)

    def delete_guest(self, guest_id: str) -> None:
        with self.cache.lock:
            remaining = [g for g in self.get_guests() if g.id != guest_id]
            self._write_guests(remaining)
        self.channel.publish(EventType.GUEST_UPDATED, {"id": guest_id})
        self.sync.push_guest_deletion(guest_id)

    def get_guests_by_party_id(self, party_id: str) -> List[Guest]:
        return [g for g in self.get_guests() if g.party_id == party_id]

    def delete_guests_by_party_id(self, party_id: str) -> List[Guest]:
        """Remove a whole party; a lone guest's own id also counts as its party id"""
        with self.cache.lock:
            guests = self.get_guests()
            doomed = [g for g in guests if g.party_id == party_id or g.id == party_id]
            self._write_guests(g for g in guests if g not in doomed)
        self.channel.publish(EventType.GUEST_UPDATED, {"partyId": party_id})
        for guest in doomed:
            self.sync.push_guest_deletion(guest.id)
        return doomed

    # ---- party submissions ----

    def lookup_party(self, name: str) -> Optional[PartyLookup]:
        """Find a previous submission by any member's name, host first"""
        guest = self.find_guest_by_name(name)
        if guest is None:
            return None
        if guest.party_id:
            members = self.get_guests_by_party_id(guest.party_id)
            editing_party_id = guest.party_id
        else:
            members = [guest]
            editing_party_id = guest.id
        members.sort(key=lambda g: not g.is_party_host)
        return PartyLookup(editing_party_id=editing_party_id, members=members)

    def person_names(self, submission: PartySubmission) -> List[str]:
        """Host name plus one name per extra slot, placeholders for blanks"""
        names = [submission.name.strip()]
        for i in range(submission.party_size - 1):
            typed = submission.member_names[i].strip() if i < len(submission.member_names) else ""
            names.append(typed or placeholder_name(i + 2))
        return names

    def _check_outside_collisions(self, names: List[str], editing_party_id: Optional[str]) -> None:
        for person in names:
            existing = self.find_guest_by_name(person)
            if existing is None:
                continue
            if editing_party_id and (existing.party_id == editing_party_id or existing.id == editing_party_id):
                continue
            raise PartyValidationError(
                f'"{person}" is already registered by someone else. Use a different name or look them up.',
                field="name",
            )

    def validate_submission(self, submission: PartySubmission) -> List[str]:
        """Return the party's person names, or raise PartyValidationError"""
        name = submission.name.strip()
        if not name:
            raise PartyValidationError("Please enter your name.", field="name")
        if submission.rsvp not in (RSVP.YES, RSVP.NO):
            raise PartyValidationError("Please select RSVP status.", field="rsvp")

        editing = submission.editing_party_id
        if not editing and self.find_guest_by_name(name):
            raise PartyValidationError(
                "A submission with that name already exists. Use the lookup above to edit it.",
                field="name",
            )

        if submission.rsvp == RSVP.NO:
            names = [name]
        else:
            names = self.person_names(submission)
            for slot, person in enumerate(names[1:], start=2):
                if person == placeholder_name(slot):
                    raise PartyValidationError(f"Please enter a name for Guest {slot}.", field="member_names")
            lowered = [normalize_name(n) for n in names]
            if len(set(lowered)) != len(lowered):
                raise PartyValidationError("Each party member must have a unique name.", field="member_names")

        self._check_outside_collisions(names, editing)
        return names

    def submit_party(self, submission: PartySubmission, now: Optional[datetime] = None) -> PartySubmissionResult:
        """Create or replace a household's submission.

        Validation happens before anything is written. An edit deletes every
        member of the old party and recreates the party from scratch.
        """
        names = self.validate_submission(submission)
        now = now or datetime.now(timezone.utc)
        name = names[0]
        dietary = submission.dietary.strip()

        with self.cache.lock:
            if submission.editing_party_id:
                self.delete_guests_by_party_id(submission.editing_party_id)

            if submission.rsvp == RSVP.NO:
                guest = self.save_guest(
                    Guest(name=name, rsvp=RSVP.NO, dietary=dietary, party_size=1, predictions={}),
                    now=now,
                )
                return PartySubmissionResult(
                    guests=[guest],
                    message=f"Got it, {name}. Sorry you can't make it!",
                )

            party_id = submission.editing_party_id or new_id()
            party_size = len(names)
            created: List[Guest] = []
            for index, person in enumerate(names):
                picks = submission.predictions[index] if index < len(submission.predictions) else {}
                predictions = {category: nominee for category, nominee in picks.items() if nominee}
                created.append(self.save_guest(
                    Guest(
                        name=person,
                        rsvp=RSVP.YES,
                        dietary=dietary if index == 0 else "",
                        party_id=party_id,
                        party_size=party_size,
                        is_party_host=index == 0,
                        predictions=predictions,
                    ),
                    now=now,
                ))

        ballots = sum(1 for g in created if g.ballot_submitted)
        logger.info(f"Saved party {party_id} with {party_size} guests and {ballots} ballots")
        return PartySubmissionResult(
            party_id=party_id,
            guests=created,
            ballots_submitted=ballots,
            message=self._confirmation(name, party_size, ballots),
        )

    @staticmethod
    def _confirmation(name: str, party_size: int, ballots: int) -> str:
        if party_size > 1:
            plural = "" if ballots == 1 else "s"
            return (f"Thanks, {name}! Your party of {party_size} has been registered "
                    f"with {ballots} ballot{plural} submitted.")
        return f"Thanks, {name}! Your RSVP and predictions have been saved."

    # ---- winners ----

    def get_winners(self) -> Dict[str, str]:
        raw = self.cache.read(Collection.WINNERS)
        return dict(raw) if isinstance(raw, dict) else {}

    def _write_winners(self, winners: Dict[str, str], category: str, nominee: Optional[str]) -> None:
        self.cache.write(Collection.WINNERS, winners)
        self.channel.publish(EventType.WINNERS_UPDATED, {"category": category, "nominee": nominee})
        self.sync.push_winners(winners)

    def set_winner(self, category: str, nominee: str) -> None:
        with self.cache.lock:
            winners = self.get_winners()
            winners[category] = nominee
            self._write_winners(winners, category, nominee)

    def clear_winner(self, category: str) -> None:
        with self.cache.lock:
            winners = self.get_winners()
            winners.pop(category, None)
            self._write_winners(winners, category, None)

    def toggle_winner(self, category: str, nominee: str) -> Optional[str]:
        """Announce a nominee, or take the announcement back if it is already the winner"""
        with self.cache.lock:
            if self.get_winners().get(category) == nominee:
                self.clear_winner(category)
                return None
            self.set_winner(category, nominee)
            return nominee

    # ---- show date ----

    def get_show_date(self) -> str:
        raw = self.cache.read(Collection.SHOW_DATE)
        return raw if isinstance(raw, str) else ""

    def set_show_date(self, show_date: str) -> None:
        with self.cache.lock:
            self.cache.write(Collection.SHOW_DATE, show_date)
        self.channel.publish(EventType.SHOW_DATE_UPDATED, {})
        self.sync.push_show_date(show_date)

    def days_until_show(self, now: Optional[datetime] = None) -> Optional[int]:
        return scoring.days_until(self.get_show_date(), now)

    # ---- scoring ----

    def score_guest(self, guest: Guest) -> int:
        return scoring.score_guest(guest, self.get_winners())

    def get_leaderboard(self) -> List[LeaderboardEntry]:
        return scoring.build_leaderboard(self.get_guests(), self.get_winners())

    def get_progress(self) -> ShowProgress:
        categories = self.get_categories()
        winners = self.get_winners()
        total = len(scoring.scored_categories(categories))
        announced = scoring.announced_count(categories, winners)
        return ShowProgress(
            announced=announced,
            total=total,
            percent=round(announced / total * 100) if total else 0,
            complete=scoring.is_show_complete(categories, winners),
            overall_winner=scoring.overall_winner(categories, winners, self.get_leaderboard()),
        )

    # ---- admin views ----

    def get_stats(self, now: Optional[datetime] = None) -> GuestStats:
        guests = self.get_guests()
        return GuestStats(
            total=len(guests),
            yes=sum(1 for g in guests if g.rsvp == RSVP.YES),
            no=sum(1 for g in guests if g.rsvp == RSVP.NO),
            ballots=sum(1 for g in guests if g.ballot_submitted),
            days_until_show=self.days_until_show(now),
        )

    def get_reminders(self, now: Optional[datetime] = None) -> ReminderList:
        names = [g.name for g in self.get_guests() if g.rsvp == RSVP.YES and not g.ballot_submitted]
        days = self.days_until_show(now)
        urgent = bool(names) and days is not None and 0 <= days <= self.reminder_urgent_days
        message = None
        if urgent:
            count = len(names)
            message = (f"Only {days} day{'' if days == 1 else 's'} until the show! "
                       f"{count} guest{'' if count == 1 else 's'} still need{'s' if count == 1 else ''} "
                       f"to submit predictions.")
        return ReminderList(names=names, urgent=urgent, days_until_show=days, message=message)

    def reminder_text(self, now: Optional[datetime] = None) -> str:
        names = self.get_reminders(now).names
        return "Ballot reminder needed:\n" + "\n".join(f"- {name}" for name in names)

    # ---- export ----

    def export_csv(self) -> str:
        return ExportService.export_csv(self.get_guests(), self.get_categories(), self.get_winners())

    def export_xlsx(self) -> bytes:
        return ExportService.export_xlsx(self.get_guests(), self.get_categories(), self.get_winners())
