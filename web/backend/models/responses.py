#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict


class BreakdownDetail(BaseModel):
    """Which compatibility contributions fired for a pair."""
    teaching_matches: List[str] = Field(default_factory=list)
    learning_matches: List[str] = Field(default_factory=list)
    shared_interests: List[str] = Field(default_factory=list)
    shared_courses: List[str] = Field(default_factory=list)
    contributions: Dict[str, int] = Field(default_factory=dict)
    reasons: List[str] = Field(default_factory=list)
    raw_total: int = 0


class CandidateProfile(BaseModel):
    """Public view of the counterpart's profile."""
    user_id: str
    courses: List[str] = Field(default_factory=list)
    interests: List[str] = Field(default_factory=list)
    major: Optional[str] = None
    year: Optional[str] = None
    learning_style: Optional[str] = None
    study_preference: Optional[str] = None
    completeness: int = Field(ge=0, le=100)


class SuggestionSummary(BaseModel):
    """A stored suggestion as seen by one side of the pair."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "suggestion_id": "550e8400-e29b-41d4-a716-446655440000",
                "user_id": "u_bob",
                "compatibility_score": 50,
                "status": "suggestion",
                "created_at": "2026-02-01T12:00:00",
                "updated_at": "2026-02-01T12:00:00"
            }
        }
    )

    suggestion_id: str
    user_id: str
    compatibility_score: int = Field(ge=0, le=100)
    status: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class RankedSuggestionDetail(SuggestionSummary):
    """A stored suggestion joined with the counterpart and a fresh breakdown."""
    candidate: CandidateProfile
    breakdown: BreakdownDetail


class SuggestionsResponse(BaseModel):
    """Response for the ranked suggestions endpoint."""
    success: bool
    user_id: str
    count: int
    suggestions: List[RankedSuggestionDetail]


class PreviewResponse(BaseModel):
    """Response for the pairwise preview endpoint."""
    success: bool
    user_id: str
    other_id: str
    qualifies: bool
    score: int = Field(ge=0, le=100)
    candidate: CandidateProfile
    breakdown: BreakdownDetail
    suggestion: Optional[SuggestionSummary] = None


class RegenerationResponse(BaseModel):
    """Response for regenerating one user's suggestions."""
    success: bool
    user_id: str
    profile_found: bool
    candidates_checked: int
    qualifying: int
    created: int
    updated: int
    unchanged: int
    deleted: int
    preserved: int
    failed_pairs: List[str] = Field(default_factory=list)


class BatchRegenerationResponse(BaseModel):
    """Response for the full rebuild."""
    success: bool
    users_total: int
    users_processed: int
    users_without_profile: int
    created: int
    updated: int
    deleted: int
    failed_pairs: int
    failures: Dict[str, str] = Field(default_factory=dict)
    cancelled: bool = False
    execution_time: float
