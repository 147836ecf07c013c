from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts both camelCase (AI/wire) and snake_case keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class DocumentType(str, Enum):
    PDF = "pdf"
    DOC = "doc"
    DOCX = "docx"


class SkillCategory(str, Enum):
    TECHNICAL = "technical"
    SOFT = "soft"
    LANGUAGE = "language"
    CERTIFICATION = "certification"
    OTHER = "other"


class ExtractedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    source_type: DocumentType


class ContactInfo(CamelModel):
    emails: List[str] = Field(default_factory=list)
    phones: List[str] = Field(default_factory=list)
    urls: List[str] = Field(default_factory=list)


class SkillEntry(CamelModel):
    name: str
    category: SkillCategory = SkillCategory.OTHER
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v):
        if v is None:
            return SkillCategory.OTHER
        if isinstance(v, SkillCategory):
            return v
        value = str(v).strip().lower()
        if value in SkillCategory._value2member_map_:
            return value
        return SkillCategory.OTHER


class ExperienceEntry(CamelModel):
    title: Optional[str] = None
    company: Optional[str] = None
    duration: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    current: bool = False
    description: Optional[str] = None

    @model_validator(mode="after")
    def current_has_no_end(self):
        if self.current and self.end_date is not None:
            raise ValueError("current position cannot have an end date")
        return self


class EducationEntry(CamelModel):
    degree: Optional[str] = None
    institution: Optional[str] = None
    graduation_date: Optional[str] = None


class HeuristicExtraction(CamelModel):
    contacts: ContactInfo = Field(default_factory=ContactInfo)
    skills: List[SkillEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)


class AIScores(CamelModel):
    formatting: int = Field(ge=0, le=100)
    content: int = Field(ge=0, le=100)
    skills: int = Field(ge=0, le=100)
    experience: int = Field(ge=0, le=100)
    education: int = Field(ge=0, le=100)
    keywords: int = Field(ge=0, le=100)

    def as_list(self) -> List[int]:
        return [self.formatting, self.content, self.skills,
                self.experience, self.education, self.keywords]


class ATSCompatibility(CamelModel):
    score: int = Field(ge=0, le=100)
    issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class AnalysisResult(CamelModel):
    """Output of the AI analysis client, from the provider or the fallback."""
    summary: str = ""
    skills: List[SkillEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    strengths: List[str]
    weaknesses: List[str]
    improvements: List[str]
    feedback: List[str]
    scores: AIScores
    ats_compatibility: ATSCompatibility
    overall_score: Optional[int] = Field(default=None, ge=0, le=100)
    file_name: Optional[str] = None
    source: Literal["ai", "fallback"] = "ai"
    model: Optional[str] = None

    @field_validator("summary", mode="before")
    @classmethod
    def summary_not_null(cls, v):
        return v or ""


class AIAnalysis(CamelModel):
    overall_score: int = Field(ge=0, le=100)
    scores: AIScores
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    feedback: List[str] = Field(default_factory=list)
    ats_compatibility: ATSCompatibility
    readability_score: int = 75


class ResumeAnalysis(CamelModel):
    summary: str = ""
    contacts: ContactInfo = Field(default_factory=ContactInfo)
    skills: List[SkillEntry] = Field(default_factory=list)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    ai_analysis: AIAnalysis
