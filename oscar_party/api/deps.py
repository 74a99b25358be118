"""
Request dependencies
"""

from fastapi import Request

from oscar_party.services.party_service import PartyService


def get_party_service(request: Request) -> PartyService:
    """The device's party service, created in the application lifespan"""
    return request.app.state.party_service
