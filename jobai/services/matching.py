from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from jobai.models.models import ResumeAnalysis, SkillEntry
from jobai.models.response import MatchResult
from jobai.models.schemas import JobProfile
from jobai.utils.utils import clamp, round_half_up

# job level -> (minimum experience entries for the bonus, bonus, penalty)
LEVEL_ADJUSTMENTS: Dict[str, Tuple[int, int, int]] = {
    "entry": (0, 10, -10),
    "junior": (1, 10, -5),
    "mid": (3, 10, -5),
    "senior": (5, 10, -10),
    "lead": (7, 10, -15),
    "executive": (10, 10, -20),
}

CORE_TECH_SKILLS = ("javascript", "python", "react", "node.js", "java", "sql")

GENERIC_REASON = "General experience and skills are relevant to this position"

SkillLike = Union[SkillEntry, str]


def _skill_name(skill) -> str:
    if isinstance(skill, str):
        return skill
    if isinstance(skill, dict):
        return skill.get("name") or ""
    return getattr(skill, "name", None) or ""


def _level_value(level) -> str:
    return str(getattr(level, "value", level) or "").lower()


def skills_overlap(a: str, b: str) -> bool:
    # Intentionally permissive: "react" matches "react.js" and vice versa
    return a in b or b in a


def level_adjustment(level, experience_count: int) -> int:
    rule = LEVEL_ADJUSTMENTS.get(_level_value(level))
    if rule is None:
        return 0
    minimum, bonus, penalty = rule
    return bonus if experience_count >= minimum else penalty


def relevance_reasons(
    matched_skills: Sequence[str],
    experience_count: int,
    level,
    overall_score: Optional[int] = None,
) -> List[str]:
    reasons = []

    if len(matched_skills) > 3:
        reasons.append(f"Strong skill alignment with {len(matched_skills)} matching technical skills")

    if experience_count >= 2:
        reasons.append("Relevant experience level matches job requirements")

    if _level_value(level) == "senior" and overall_score is not None and overall_score > 85:
        reasons.append("Senior-level qualifications align with position requirements")

    if any(tech in skill.lower() for skill in matched_skills for tech in CORE_TECH_SKILLS):
        reasons.append("Core technology stack matches job requirements")

    return reasons or [GENERIC_REASON]


def score_match(
    resume_skills: Iterable[SkillLike],
    resume_experience_count: int,
    job: JobProfile,
    overall_score: Optional[int] = None,
) -> MatchResult:
    """Deterministic resume-to-job match.

    Base score is the share of job skills covered by matched resume skills,
    shifted by the experience/level table, clamped to [0, 100] and rounded
    half-up. Arithmetic is exact (Fraction) so results are reproducible.
    """
    resume_names = [n.lower() for n in (_skill_name(s).strip() for s in resume_skills) if n]
    job_names = [n.lower() for n in (_skill_name(s).strip() for s in job.skills) if n]

    matched = [r for r in resume_names if any(skills_overlap(j, r) for j in job_names)]
    missing = [j for j in job_names if not any(skills_overlap(j, r) for r in resume_names)]

    score = Fraction(0)
    if job_names:
        score = Fraction(len(matched) * 100, len(job_names))

    score += level_adjustment(job.level, resume_experience_count)
    score = clamp(score, 0, 100)

    return MatchResult(
        match_score=round_half_up(score),
        matched_skills=matched,
        missing_skills=missing,
        relevance_reasons=relevance_reasons(matched, resume_experience_count, job.level, overall_score),
        job_id=job.job_id,
    )


def match_analysis(analysis: ResumeAnalysis, job: JobProfile) -> MatchResult:
    return score_match(
        analysis.skills,
        len(analysis.experience),
        job,
        overall_score=analysis.ai_analysis.overall_score,
    )


def rank_jobs(analysis: ResumeAnalysis, jobs: Iterable[JobProfile]) -> List[MatchResult]:
    """Score every job for one resume, best match first; ties keep input order."""
    results = [match_analysis(analysis, job) for job in jobs]
    return sorted(results, key=lambda r: r.match_score, reverse=True)
