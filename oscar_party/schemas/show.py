"""
Show progress, admin statistics and winner schemas
"""

from typing import List, Optional
from pydantic import BaseModel

from .guest import LeaderboardEntry

class ShowProgress(BaseModel):
    """How far the live show has progressed"""
    announced: int
    total: int
    percent: int
    complete: bool
    overall_winner: Optional[LeaderboardEntry] = None

class GuestStats(BaseModel):
    total: int
    yes: int
    no: int
    ballots: int
    days_until_show: Optional[int] = None

class ReminderList(BaseModel):
    """Guests who said yes but have not filled in a ballot"""
    names: List[str]
    urgent: bool = False
    days_until_show: Optional[int] = None
    message: Optional[str] = None

class WinnerUpdate(BaseModel):
    nominee: str

class ShowDateUpdate(BaseModel):
    show_date: str = ""
