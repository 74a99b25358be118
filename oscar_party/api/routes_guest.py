"""
Guest-facing API routes
"""

from fastapi import APIRouter, Depends

from oscar_party.api.deps import get_party_service
from oscar_party.schemas.guest import LookupRequest, PartySubmission
from oscar_party.services.party_service import PartyService
from oscar_party.utils.responses import success_response, error_response

router = APIRouter()

@router.post("/lookup")
async def lookup_party(
    lookup_data: LookupRequest,
    service: PartyService = Depends(get_party_service)
):
    """Find a previous submission so it can be edited"""
    if not lookup_data.name.strip():
        return error_response(message="Please enter your name.", status_code=422)

    party = service.lookup_party(lookup_data.name)
    if not party:
        return error_response(
            message="No submission found with that name.",
            status_code=404
        )

    return success_response(
        message="Submission found",
        data=party
    )

@router.post("/submit")
async def submit_party(
    submission: PartySubmission,
    service: PartyService = Depends(get_party_service)
):
    """Create or replace a household's RSVP and ballots"""
    # PartyValidationError is turned into a 422 by the app-level handler
    result = service.submit_party(submission)

    return success_response(
        message=result.message,
        data=result,
        status_code=201 if not submission.editing_party_id else 200
    )
