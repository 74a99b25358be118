"""
Pydantic schemas package
"""

from .common import *
from .category import *
from .guest import *
from .show import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "Category",
    "PartyConfig",
    "CategoriesUpdate",
    "RSVP",
    "Guest",
    "LeaderboardEntry",
    "PartySubmission",
    "PartyLookup",
    "PartySubmissionResult",
    "LookupRequest",
    "ShowProgress",
    "GuestStats",
    "ReminderList",
    "WinnerUpdate",
    "ShowDateUpdate",
]
