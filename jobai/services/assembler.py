from jobai.models.models import AIAnalysis, AnalysisResult, HeuristicExtraction, ResumeAnalysis
from jobai.utils.utils import rounded_mean

DEFAULT_READABILITY_SCORE = 75


def merge(heuristic: HeuristicExtraction, ai: AnalysisResult) -> ResumeAnalysis:
    """Combine heuristic extraction with the AI (or fallback) analysis.

    Heuristic skills, experience and education win whenever they are
    non-empty; the AI result supplies the summary and all scoring.
    """
    overall = ai.overall_score
    if overall is None:
        overall = rounded_mean(ai.scores.as_list())

    return ResumeAnalysis(
        summary=ai.summary,
        contacts=heuristic.contacts.model_copy(deep=True),
        skills=[s.model_copy() for s in (heuristic.skills or ai.skills)],
        experience=[e.model_copy() for e in (heuristic.experience or ai.experience)],
        education=[e.model_copy() for e in (heuristic.education or ai.education)],
        ai_analysis=AIAnalysis(
            overall_score=overall,
            scores=ai.scores.model_copy(),
            strengths=list(ai.strengths),
            weaknesses=list(ai.weaknesses),
            improvements=list(ai.improvements),
            feedback=list(ai.feedback),
            ats_compatibility=ai.ats_compatibility.model_copy(deep=True),
            readability_score=DEFAULT_READABILITY_SCORE,
        ),
    )
