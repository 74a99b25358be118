"""
Public API routes - read-only views of the party
"""

from fastapi import APIRouter, Depends

from oscar_party.api.deps import get_party_service
from oscar_party.services.party_service import PartyService
from oscar_party.utils.responses import success_response

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/categories")
async def list_categories(service: PartyService = Depends(get_party_service)):
    categories = service.get_categories()
    return success_response(
        message="Categories retrieved successfully",
        data={
            "categories": categories,
            "configured": service.categories_configured()
        }
    )

@router.get("/winners")
async def list_winners(service: PartyService = Depends(get_party_service)):
    return success_response(
        message="Winners retrieved successfully",
        data={"winners": service.get_winners()}
    )

@router.get("/leaderboard")
async def get_leaderboard(service: PartyService = Depends(get_party_service)):
    """Guests with a ballot, best score first"""
    leaderboard = service.get_leaderboard()
    return success_response(
        message="Leaderboard retrieved successfully",
        data={
            "leaderboard": [
                {
                    "rank": rank,
                    "name": entry.name,
                    "score": entry.score,
                    "party_id": entry.party_id
                }
                for rank, entry in enumerate(leaderboard, start=1)
            ]
        }
    )

@router.get("/progress")
async def get_progress(service: PartyService = Depends(get_party_service)):
    return success_response(
        message="Show progress retrieved successfully",
        data=service.get_progress()
    )

@router.get("/show-date")
async def get_show_date(service: PartyService = Depends(get_party_service)):
    return success_response(
        message="Show date retrieved successfully",
        data={
            "show_date": service.get_show_date(),
            "days_until_show": service.days_until_show()
        }
    )
