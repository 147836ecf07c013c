import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from jobai.models.models import CamelModel, ResumeAnalysis


class ProcessingStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class JobLevel(str, Enum):
    ENTRY = "entry"
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    EXECUTIVE = "executive"


# -------- Jobs --------
class JobSkill(CamelModel):
    name: str
    required: bool = False


class JobProfile(CamelModel):
    job_id: Optional[str] = None
    title: str = ""
    company: str = ""
    description: str = ""
    requirements: List[str] = []
    skills: List[JobSkill] = []
    level: JobLevel = JobLevel.MID


# -------- Resumes --------
class ResumeMetadata(BaseModel):
    processing_time_ms: Optional[float] = None
    ai_model: Optional[str] = None
    analysis_source: Optional[str] = None


class ResumeRecord(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    resume_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    owner_id: Optional[str] = None
    file_name: str
    mime_type: str
    file_size: int = 0
    extracted_text: str
    analysis: Optional[ResumeAnalysis] = None
    processing_status: ProcessingStatus = ProcessingStatus.PENDING
    processing_error: Optional[str] = None
    metadata: ResumeMetadata = Field(default_factory=ResumeMetadata)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
