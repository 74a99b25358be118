"""
Admin API routes - guests, setup, winners and exports
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from oscar_party.api.deps import get_party_service
from oscar_party.schemas.category import CategoriesUpdate
from oscar_party.schemas.show import ShowDateUpdate, WinnerUpdate
from oscar_party.services.party_service import PartyService
from oscar_party.services.scoring import parse_show_date
from oscar_party.utils.responses import success_response, error_response, not_found_error

logger = logging.getLogger(__name__)

router = APIRouter()

# ---- guests ----

@router.get("/guests")
async def search_guests(
    search: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=100),
    service: PartyService = Depends(get_party_service)
):
    """Search and list guests with their current scores"""
    guests = service.get_guests()

    if search:
        needle = search.strip().lower()
        guests = [g for g in guests if needle in g.name.lower()]

    total = len(guests)
    offset = (page - 1) * per_page
    guest_data = [
        {
            "id": guest.id,
            "name": guest.name,
            "rsvp": guest.rsvp.value,
            "dietary": guest.dietary,
            "party_id": guest.party_id,
            "is_party_host": guest.is_party_host,
            "party_size": guest.party_size,
            "ballot_submitted": guest.ballot_submitted,
            "submitted_at": guest.submitted_at,
            "score": service.score_guest(guest)
        }
        for guest in guests[offset:offset + per_page]
    ]

    return success_response(
        message="Guests retrieved successfully",
        data={
            "guests": guest_data,
            "pagination": {
                "page": page,
                "per_page": per_page,
                "total": total,
                "pages": (total + per_page - 1) // per_page
            }
        }
    )

@router.delete("/guests/{guest_id}")
async def delete_guest(
    guest_id: str,
    service: PartyService = Depends(get_party_service)
):
    if not any(g.id == guest_id for g in service.get_guests()):
        raise not_found_error("Guest")

    service.delete_guest(guest_id)
    logger.info(f"Admin deleted guest {guest_id}")

    return success_response(message="Guest deleted successfully")

@router.delete("/parties/{party_id}")
async def delete_party(
    party_id: str,
    service: PartyService = Depends(get_party_service)
):
    """Delete every member of a party (or a lone guest by id)"""
    removed = service.delete_guests_by_party_id(party_id)
    if not removed:
        raise not_found_error("Party")

    logger.info(f"Admin deleted party {party_id} ({len(removed)} guests)")

    return success_response(
        message="Party deleted successfully",
        data={"deleted": len(removed)}
    )

@router.get("/stats")
async def get_stats(service: PartyService = Depends(get_party_service)):
    return success_response(
        message="Statistics retrieved successfully",
        data=service.get_stats()
    )

@router.get("/reminders")
async def get_reminders(service: PartyService = Depends(get_party_service)):
    """Guests who said yes but have no ballot yet"""
    reminders = service.get_reminders()
    return success_response(
        message="Reminders retrieved successfully",
        data={
            **reminders.model_dump(),
            "text": service.reminder_text() if reminders.names else ""
        }
    )

# ---- setup ----

@router.put("/categories")
async def save_categories(
    update: CategoriesUpdate,
    service: PartyService = Depends(get_party_service)
):
    categories = service.save_categories(update.categories)
    return success_response(
        message=f"Saved {len(categories)} categories",
        data={"categories": categories}
    )

@router.get("/categories/defaults")
async def default_categories(service: PartyService = Depends(get_party_service)):
    return success_response(
        message="Default categories retrieved successfully",
        data={"categories": service.get_default_categories()}
    )

@router.put("/show-date")
async def set_show_date(
    update: ShowDateUpdate,
    service: PartyService = Depends(get_party_service)
):
    show_date = update.show_date.strip()
    if show_date and parse_show_date(show_date) is None:
        return error_response(
            message="Show date must be an ISO date or datetime",
            error_code="validation_error",
            status_code=422
        )

    service.set_show_date(show_date)

    return success_response(
        message="Show date saved" if show_date else "Show date cleared",
        data={
            "show_date": show_date,
            "days_until_show": service.days_until_show()
        }
    )

# ---- winners ----

def _require_nominee(service: PartyService, category: str, nominee: str):
    match = next((c for c in service.get_categories() if c.name == category), None)
    if match is None:
        raise not_found_error("Category")
    if nominee not in match.nominees:
        return error_response(
            message=f'"{nominee}" is not nominated in {category}',
            error_code="validation_error",
            status_code=422
        )
    return None

@router.put("/winners/{category}")
async def set_winner(
    category: str,
    update: WinnerUpdate,
    service: PartyService = Depends(get_party_service)
):
    rejected = _require_nominee(service, category, update.nominee)
    if rejected:
        return rejected

    service.set_winner(category, update.nominee)
    logger.info(f"Winner announced for {category}: {update.nominee}")

    return success_response(
        message="Winner saved",
        data={"category": category, "nominee": update.nominee}
    )

@router.delete("/winners/{category}")
async def clear_winner(
    category: str,
    service: PartyService = Depends(get_party_service)
):
    service.clear_winner(category)
    return success_response(
        message="Winner cleared",
        data={"category": category, "nominee": None}
    )

@router.post("/winners/{category}/toggle")
async def toggle_winner(
    category: str,
    update: WinnerUpdate,
    service: PartyService = Depends(get_party_service)
):
    """Select a winner, or unselect it when it is already the winner"""
    rejected = _require_nominee(service, category, update.nominee)
    if rejected:
        return rejected

    nominee = service.toggle_winner(category, update.nominee)

    return success_response(
        message="Winner saved" if nominee else "Winner cleared",
        data={"category": category, "nominee": nominee}
    )

# ---- export and diagnostics ----

@router.get("/export.csv")
async def export_csv(service: PartyService = Depends(get_party_service)):
    return Response(
        content=service.export_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=oscar_party_guests.csv"}
    )

@router.get("/export.xlsx")
async def export_xlsx(service: PartyService = Depends(get_party_service)):
    return Response(
        content=service.export_xlsx(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": "attachment; filename=oscar_party_guests.xlsx"}
    )

@router.get("/sync/errors")
async def sync_errors(service: PartyService = Depends(get_party_service)):
    """Recent remote sync failures, oldest first"""
    failures = service.sync.error_log.recent()
    return success_response(
        message="Sync errors retrieved successfully",
        data={
            "enabled": service.sync.enabled,
            "errors": failures
        }
    )
