"""
Guest-related Pydantic schemas
"""

from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

class RSVP(str, Enum):
    YES = "yes"
    NO = "no"
    UNSET = ""

class Guest(BaseModel):
    """One person. Persisted with the camelCase keys of the shared data format."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str
    rsvp: RSVP = RSVP.UNSET
    dietary: str = ""
    party_id: Optional[str] = Field(None, alias="partyId")
    is_party_host: bool = Field(False, alias="isPartyHost")
    party_size: int = Field(1, alias="partySize")
    predictions: Dict[str, str] = Field(default_factory=dict)
    ballot_submitted: bool = Field(False, alias="ballotSubmitted")
    submitted_at: Optional[str] = Field(None, alias="submittedAt")

    @field_validator("rsvp", "dietary", mode="before")
    @classmethod
    def _none_as_blank(cls, value):
        return "" if value is None else value

    @field_validator("predictions", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return {} if value is None else value

    @model_validator(mode="after")
    def _ballot_follows_predictions(self):
        self.ballot_submitted = bool(self.predictions)
        return self

    def to_record(self) -> dict:
        """Serialized form stored in the local cache"""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")

    def to_remote(self) -> dict:
        """Serialized form stored in the remote guest document (id is the document key)"""
        record = self.to_record()
        record.pop("id", None)
        return record

class LeaderboardEntry(Guest):
    """A guest with a derived score"""
    score: int = 0

class PartySubmission(BaseModel):
    """One household's RSVP form.

    ``member_names`` holds the names typed for guests 2..N; ``predictions``
    holds one ballot per person, host first.
    """
    name: str = ""
    rsvp: Optional[RSVP] = None
    dietary: str = ""
    party_size: int = Field(1, ge=1)
    member_names: List[str] = Field(default_factory=list)
    predictions: List[Dict[str, str]] = Field(default_factory=list)
    editing_party_id: Optional[str] = None

class PartyLookup(BaseModel):
    """An existing submission found by name, ready to be edited"""
    editing_party_id: str
    members: List[Guest]

class PartySubmissionResult(BaseModel):
    party_id: Optional[str] = None
    guests: List[Guest]
    ballots_submitted: int = 0
    message: str

class LookupRequest(BaseModel):
    """Guest lookup request"""
    name: str
