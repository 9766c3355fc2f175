from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .verdicts import VerdictType

# (claim, verdict, score) as read for trending aggregation.
TrendingRow = Tuple[str, str, int]


class Source(BaseModel):
    title: Optional[str] = None
    uri: str


class AnalysisRecord(BaseModel):
    """A persisted claim check, serialized with camelCase keys."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    owner_id: Optional[str] = Field(default=None, alias="ownerId")
    claim: str
    full_claim: str = Field(alias="fullClaim")
    verdict: VerdictType
    score: int = Field(ge=0, le=100)
    explanation: str
    sources: List[Source] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")


class TrendingClaim(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    claim: str = Field(alias="_id")
    count: int
    verdict: VerdictType
    score: int


class DeleteResponse(BaseModel):
    message: str
    id: str


class ErrorResponse(BaseModel):
    message: str
