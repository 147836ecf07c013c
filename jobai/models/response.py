# models/response.py
from typing import List, Optional

from pydantic import Field

from jobai.models.models import CamelModel


class MatchResult(CamelModel):
    match_score: int = Field(ge=0, le=100)
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    relevance_reasons: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    job_id: Optional[str] = None


class ImprovementSuggestions(CamelModel):
    improvements: List[str] = Field(default_factory=list)
    skill_gaps: List[str] = Field(default_factory=list)
    format_suggestions: List[str] = Field(default_factory=list)
    content_suggestions: List[str] = Field(default_factory=list)


class ResumeStatus(CamelModel):
    resume_id: str
    status: str
    error: Optional[str] = None
    progress: int = 0
