"""
AI analysis client

Sends resume text to an OpenAI-compatible chat-completion endpoint and parses
the JSON object embedded in the reply. Every provider failure (missing key,
network error, timeout, HTTP error, malformed or incomplete JSON) is raised
internally as AnalysisProviderError and answered with a deterministic local
fallback, so the public methods never raise to their callers.
"""
import json
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError as PydanticValidationError

from jobai.helpers.keywords import DEFAULT_KEYWORDS, KeywordTables
from jobai.helpers.prompts import (
    GENERAL_CONTEXT,
    IMPROVEMENT_PROMPT,
    JOB_MATCH_PROMPT,
    RESUME_ANALYSIS_PROMPT,
    TARGET_JOB_CONTEXT,
)
from jobai.models.ai_settings import LLMSettings, load_settings
from jobai.models.models import (
    AIScores,
    AnalysisResult,
    ATSCompatibility,
    EducationEntry,
    ExperienceEntry,
    ResumeAnalysis,
    SkillCategory,
    SkillEntry,
)
from jobai.models.response import ImprovementSuggestions, MatchResult
from jobai.models.schemas import JobProfile
from jobai.services.matching import match_analysis
from jobai.utils.exceptions import AnalysisProviderError
from jobai.utils.logging_config import PerformanceMonitor, get_logger
from jobai.utils.utils import extract_json_object, rounded_mean

logger = get_logger(__name__)

PROVIDER_NAME = "openai"

FALLBACK_SCORES = {
    "formatting": 75,
    "content": 80,
    "skills": 85,
    "experience": 75,
    "education": 70,
    "keywords": 65,
}

# Keys the provider must not override on the parsed result
_LOCAL_FIELDS = ("source", "model", "fileName", "file_name")


def fallback_resume_analysis(
    resume_text: str = "",
    file_name: str = "",
    tables: KeywordTables = DEFAULT_KEYWORDS,
) -> AnalysisResult:
    """Deterministic analysis used whenever the provider is unavailable.

    A keyword is found when a word contains it as written or with its dots
    removed, so ``node.js`` matches both ``node.js`` and ``nodejs``.
    """
    words = (resume_text or "").lower().split()
    found_skills = [
        skill for skill in tables.fallback_skills
        if any(skill in word or skill.replace(".", "") in word for word in words)
    ]
    scores = AIScores(**FALLBACK_SCORES)

    return AnalysisResult(
        summary="Professional with diverse experience and technical skills.",
        skills=[
            SkillEntry(name=skill, category=SkillCategory.TECHNICAL, confidence=0.7)
            for skill in found_skills
        ],
        experience=[ExperienceEntry(
            title="Software Developer",
            company="Technology Company",
            duration="2+ years",
            description="Software development experience",
        )],
        education=[EducationEntry(
            degree="Bachelor's Degree",
            institution="University",
            graduation_date=None,
        )],
        strengths=["Technical skills", "Problem solving"],
        weaknesses=["Could improve presentation"],
        improvements=["Add more specific achievements", "Include quantifiable results"],
        feedback=["Good technical foundation", "Consider adding more details"],
        scores=scores,
        ats_compatibility=ATSCompatibility(
            score=75,
            issues=["Could improve keyword density"],
            recommendations=["Use more industry-specific terms"],
        ),
        overall_score=rounded_mean(scores.as_list()),
        file_name=file_name,
        source="fallback",
        model=None,
    )


def fallback_improvements() -> ImprovementSuggestions:
    return ImprovementSuggestions(
        improvements=[
            "Add more specific achievements with quantifiable results",
            "Include relevant keywords from target job descriptions",
            "Improve formatting and visual presentation",
        ],
        skill_gaps=["Consider learning trending technologies"],
        format_suggestions=["Use consistent formatting throughout"],
        content_suggestions=["Add more detailed project descriptions"],
    )


class AIAnalysisClient:
    """Chat-completion backed resume analysis with local fallbacks."""

    def __init__(self, settings: Optional[LLMSettings] = None, tables: KeywordTables = DEFAULT_KEYWORDS):
        self.settings = settings or load_settings().llm_settings
        self.tables = tables

    @property
    def model_name(self) -> str:
        return self.settings.model_name

    # -------- Transport --------
    def chat_completion(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        """Single POST to ``/chat/completions``; returns the raw message content."""
        s = self.settings
        if not s.api_key:
            raise AnalysisProviderError("OpenAI API key not configured", provider=PROVIDER_NAME)

        url = f"{s.base_url}/chat/completions"
        body = {
            "model": s.model_name,
            "messages": [
                {"role": "system", "content": s.system_prompt},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens or s.max_tokens,
            "temperature": s.temperature,
        }
        headers = {
            "Authorization": f"Bearer {s.api_key}",
            "Content-Type": "application/json",
        }

        try:
            with PerformanceMonitor("AI chat completion", logger, threshold_ms=s.timeout * 1000 / 2):
                resp = requests.post(url, json=body, headers=headers, timeout=s.timeout)
        except requests.Timeout as e:
            raise AnalysisProviderError(
                f"AI request timed out after {s.timeout}s", provider=PROVIDER_NAME, cause=e
            ) from e
        except requests.RequestException as e:
            raise AnalysisProviderError(
                f"AI request failed: {e}", provider=PROVIDER_NAME, cause=e
            ) from e

        if resp.status_code != 200:
            raise AnalysisProviderError(
                f"AI provider returned HTTP {resp.status_code}",
                provider=PROVIDER_NAME,
                status_code=resp.status_code,
            )

        try:
            return resp.json()["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise AnalysisProviderError(
                "Malformed completion response", provider=PROVIDER_NAME, cause=e
            ) from e

    # -------- Parsing --------
    @staticmethod
    def parse_json_payload(response: str, what: str) -> Dict[str, Any]:
        candidate = extract_json_object(response or "")
        if candidate is None:
            raise AnalysisProviderError(f"No JSON found in {what} response", provider=PROVIDER_NAME)
        try:
            data = json.loads(candidate)
        except ValueError as e:
            raise AnalysisProviderError(
                f"Invalid JSON in {what} response", provider=PROVIDER_NAME, cause=e
            ) from e
        if not isinstance(data, dict):
            raise AnalysisProviderError(f"Expected a JSON object in {what} response", provider=PROVIDER_NAME)
        return data

    def parse_resume_analysis(self, response: str, file_name: str = "") -> AnalysisResult:
        data = self.parse_json_payload(response, "resume analysis")
        for key in _LOCAL_FIELDS:
            data.pop(key, None)
        try:
            result = AnalysisResult.model_validate(data)
        except PydanticValidationError as e:
            raise AnalysisProviderError(
                f"AI analysis failed validation with {e.error_count()} errors",
                provider=PROVIDER_NAME,
                cause=e,
            ) from e

        overall = result.overall_score
        if overall is None:
            overall = rounded_mean(result.scores.as_list())
        return result.model_copy(update={
            "overall_score": overall,
            "file_name": file_name,
            "source": "ai",
            "model": self.model_name,
        })

    # -------- Operations --------
    def analyze_resume(self, resume_text: str, file_name: str = "") -> AnalysisResult:
        try:
            response = self.chat_completion(RESUME_ANALYSIS_PROMPT.format(resume_text=resume_text))
            result = self.parse_resume_analysis(response, file_name)
            logger.info(f"AI analysis completed for {file_name or 'resume'} (overall {result.overall_score})")
            return result
        except AnalysisProviderError as e:
            logger.warning(
                f"Resume analysis provider failed for {file_name or 'resume'}, using fallback: {e.message}",
                extra={"error": e.to_dict()},
            )
            return fallback_resume_analysis(resume_text, file_name, self.tables)

    def match_resume_with_job(self, analysis: ResumeAnalysis, job: JobProfile) -> MatchResult:
        prompt = JOB_MATCH_PROMPT.format(
            resume_summary=analysis.summary,
            resume_skills=", ".join(s.name for s in analysis.skills),
            resume_experience=", ".join(f"{e.title} at {e.company}" for e in analysis.experience),
            job_title=job.title,
            job_description=job.description,
            job_requirements=", ".join(job.requirements),
            job_skills=", ".join(s.name for s in job.skills),
        )
        try:
            data = self.parse_json_payload(self.chat_completion(prompt), "job match")
            try:
                result = MatchResult.model_validate(data)
            except PydanticValidationError as e:
                raise AnalysisProviderError(
                    "Job match failed validation", provider=PROVIDER_NAME, cause=e
                ) from e
            return result.model_copy(update={"job_id": job.job_id})
        except AnalysisProviderError as e:
            logger.warning(f"Job matching provider failed, using scorer: {e.message}")
            return match_analysis(analysis, job)

    def generate_improvements(
        self, analysis: ResumeAnalysis, target_job: Optional[JobProfile] = None
    ) -> ImprovementSuggestions:
        if target_job is not None:
            job_context = TARGET_JOB_CONTEXT.format(
                job_title=target_job.title,
                job_company=target_job.company,
                job_requirements=", ".join(target_job.requirements),
            )
        else:
            job_context = GENERAL_CONTEXT
        prompt = IMPROVEMENT_PROMPT.format(
            resume_summary=analysis.summary,
            overall_score=analysis.ai_analysis.overall_score,
            job_context=job_context,
        )
        try:
            data = self.parse_json_payload(self.chat_completion(prompt), "improvements")
            try:
                return ImprovementSuggestions.model_validate(data)
            except PydanticValidationError as e:
                raise AnalysisProviderError(
                    "Improvement suggestions failed validation", provider=PROVIDER_NAME, cause=e
                ) from e
        except AnalysisProviderError as e:
            logger.warning(f"Improvement generation provider failed, using defaults: {e.message}")
            return fallback_improvements()
