"""
Category and shared configuration schemas
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

class Category(BaseModel):
    """An award category; nominee order is display order only"""
    name: str
    nominees: List[str] = Field(default_factory=list)

class PartyConfig(BaseModel):
    """The shared configuration record mirrored to the remote store.

    Every field is optional so a single field can be pushed or applied on
    its own without clobbering the others.
    """
    model_config = ConfigDict(populate_by_name=True)

    categories: Optional[List[Category]] = None
    winners: Optional[Dict[str, str]] = None
    show_date: Optional[str] = Field(None, alias="showDate")

    def to_remote(self) -> dict:
        """Only the fields that were explicitly set, in persisted form"""
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")

class CategoriesUpdate(BaseModel):
    """Request body for replacing the category list"""
    categories: List[Category]
