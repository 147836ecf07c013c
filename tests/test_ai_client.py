import json

import pytest
import requests
from unittest.mock import patch

from conftest import completion_response
from jobai.models.models import AIAnalysis, AIScores, ATSCompatibility, ResumeAnalysis, SkillEntry
from jobai.models.schemas import JobLevel, JobProfile, JobSkill
from jobai.services.ai_client import (
    AIAnalysisClient,
    fallback_improvements,
    fallback_resume_analysis,
)
from jobai.services.matching import score_match
from jobai.utils.exceptions import AnalysisProviderError
from jobai.utils.utils import extract_json_object


@pytest.fixture
def client(llm_settings):
    return AIAnalysisClient(llm_settings)


@pytest.fixture
def resume_analysis():
    return ResumeAnalysis(
        summary="Engineer",
        skills=[SkillEntry(name="python"), SkillEntry(name="aws")],
        ai_analysis=AIAnalysis(
            overall_score=80,
            scores=AIScores(formatting=80, content=80, skills=80, experience=80, education=80, keywords=80),
            ats_compatibility=ATSCompatibility(score=80),
        ),
    )


@pytest.fixture
def target_job():
    return JobProfile(
        job_id="job-1",
        title="Backend Engineer",
        company="Acme",
        requirements=["APIs"],
        skills=[JobSkill(name="python", required=True), JobSkill(name="go")],
        level=JobLevel.MID,
    )


class TestFallbackAnalysis:
    """Test cases for the no-provider analysis"""

    def test_fixed_scores(self):
        result = fallback_resume_analysis("", "cv.pdf")
        assert result.overall_score == 75
        assert result.scores.as_list() == [75, 80, 85, 75, 70, 65]
        assert result.ats_compatibility.score == 75
        assert result.source == "fallback"
        assert result.file_name == "cv.pdf"

    def test_word_scan(self):
        result = fallback_resume_analysis("I know JavaScript, Python and Docker. See my GitHub")
        assert [s.name for s in result.skills] == ["javascript", "python", "docker", "git"]
        assert all(s.confidence == 0.7 and s.category == "technical" for s in result.skills)

    def test_dotted_skill_matches_undotted_word(self):
        result = fallback_resume_analysis("nodejs backend")
        assert [s.name for s in result.skills] == ["node.js"]

    def test_placeholders(self):
        result = fallback_resume_analysis("")
        assert result.skills == []
        assert result.experience[0].title == "Software Developer"
        assert result.education[0].degree == "Bachelor's Degree"


class TestChatCompletion:
    """Test cases for the provider transport"""

    @patch("jobai.services.ai_client.requests.post")
    def test_request_shape(self, mock_post, client):
        mock_post.return_value = completion_response("hello")

        assert client.chat_completion("Analyze this") == "hello"

        args, kwargs = mock_post.call_args
        assert args[0] == "https://api.openai.com/v1/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer test-key"
        assert kwargs["timeout"] == 30
        body = kwargs["json"]
        assert body["model"] == "gpt-3.5-turbo"
        assert body["max_tokens"] == 1500
        assert body["temperature"] == 0.7
        assert body["messages"][0]["role"] == "system"
        assert "expert HR professional and resume analyst" in body["messages"][0]["content"]
        assert body["messages"][1] == {"role": "user", "content": "Analyze this"}

    @patch("jobai.services.ai_client.requests.post")
    def test_missing_key(self, mock_post, offline_settings):
        with pytest.raises(AnalysisProviderError):
            AIAnalysisClient(offline_settings).chat_completion("x")
        mock_post.assert_not_called()

    @patch("jobai.services.ai_client.requests.post")
    def test_http_error(self, mock_post, client):
        mock_post.return_value = completion_response("", status_code=429)
        with pytest.raises(AnalysisProviderError) as exc_info:
            client.chat_completion("x")
        assert exc_info.value.details["status_code"] == 429

    @patch("jobai.services.ai_client.requests.post")
    def test_timeout(self, mock_post, client):
        mock_post.side_effect = requests.Timeout("read timed out")
        with pytest.raises(AnalysisProviderError) as exc_info:
            client.chat_completion("x")
        assert "timed out" in exc_info.value.message

    @patch("jobai.services.ai_client.requests.post")
    def test_malformed_envelope(self, mock_post, client):
        mock_post.return_value = completion_response("x")
        mock_post.return_value.json.return_value = {"choices": []}
        with pytest.raises(AnalysisProviderError):
            client.chat_completion("x")


class TestAnalyzeResume:
    """Test cases for resume analysis with provider and fallback paths"""

    @patch("jobai.services.ai_client.requests.post")
    def test_success_computes_overall(self, mock_post, client, ai_payload):
        mock_post.return_value = completion_response(
            "Here is the analysis:\n```json\n" + json.dumps(ai_payload) + "\n```"
        )
        result = client.analyze_resume("resume text", "cv.docx")

        assert result.source == "ai"
        assert result.model == "gpt-3.5-turbo"
        assert result.file_name == "cv.docx"
        # mean of 80, 90, 70, 85, 75, 60 = 76.67
        assert result.overall_score == 77
        assert result.education[0].graduation_date == "2015"

    @patch("jobai.services.ai_client.requests.post")
    def test_provider_overall_trusted(self, mock_post, client, ai_payload):
        ai_payload["overallScore"] = 88
        mock_post.return_value = completion_response(json.dumps(ai_payload))
        assert client.analyze_resume("resume text").overall_score == 88

    @patch("jobai.services.ai_client.requests.post")
    def test_provider_cannot_claim_fallback(self, mock_post, client, ai_payload):
        ai_payload["source"] = "fallback"
        mock_post.return_value = completion_response(json.dumps(ai_payload))
        assert client.analyze_resume("resume text").source == "ai"

    @patch("jobai.services.ai_client.requests.post")
    def test_no_json_falls_back(self, mock_post, client):
        mock_post.return_value = completion_response("I cannot help with that.")
        result = client.analyze_resume("python developer", "cv.pdf")
        assert result.source == "fallback"
        assert result.overall_score == 75

    @patch("jobai.services.ai_client.requests.post")
    def test_missing_required_field_falls_back(self, mock_post, client, ai_payload):
        del ai_payload["scores"]
        mock_post.return_value = completion_response(json.dumps(ai_payload))
        assert client.analyze_resume("resume text").source == "fallback"

    @patch("jobai.services.ai_client.requests.post")
    def test_out_of_range_score_falls_back(self, mock_post, client, ai_payload):
        ai_payload["scores"]["content"] = 140
        mock_post.return_value = completion_response(json.dumps(ai_payload))
        assert client.analyze_resume("resume text").source == "fallback"

    @patch("jobai.services.ai_client.requests.post")
    def test_timeout_falls_back(self, mock_post, client):
        mock_post.side_effect = requests.Timeout()
        result = client.analyze_resume("I write python", "cv.pdf")
        assert result.source == "fallback"
        assert [s.name for s in result.skills] == ["python"]

    @patch("jobai.services.ai_client.requests.post")
    def test_no_key_falls_back_without_request(self, mock_post, offline_settings):
        result = AIAnalysisClient(offline_settings).analyze_resume("text")
        assert result.source == "fallback"
        mock_post.assert_not_called()

    @patch("jobai.services.ai_client.requests.post")
    def test_resume_braces_do_not_break_prompt(self, mock_post, client, ai_payload):
        mock_post.return_value = completion_response(json.dumps(ai_payload))
        client.analyze_resume("uses {curly} braces and {0}")
        prompt = mock_post.call_args.kwargs["json"]["messages"][1]["content"]
        assert "uses {curly} braces and {0}" in prompt


class TestMatchAndImprovements:
    """Test cases for job matching and improvement suggestions"""

    @patch("jobai.services.ai_client.requests.post")
    def test_match_success(self, mock_post, client, resume_analysis, target_job):
        mock_post.return_value = completion_response(json.dumps({
            "matchScore": 72,
            "matchedSkills": ["python"],
            "missingSkills": ["go"],
            "relevanceReasons": ["Python backend"],
            "recommendations": ["Learn go"],
        }))
        result = client.match_resume_with_job(resume_analysis, target_job)
        assert result.match_score == 72
        assert result.recommendations == ["Learn go"]
        assert result.job_id == "job-1"

    @patch("jobai.services.ai_client.requests.post")
    def test_match_falls_back_to_scorer(self, mock_post, client, resume_analysis, target_job):
        mock_post.side_effect = requests.ConnectionError("refused")
        result = client.match_resume_with_job(resume_analysis, target_job)
        expected = score_match(resume_analysis.skills, 0, target_job, overall_score=80)
        assert result == expected
        assert result.match_score == 45

    @patch("jobai.services.ai_client.requests.post")
    def test_improvements_success(self, mock_post, client, resume_analysis, target_job):
        mock_post.return_value = completion_response(json.dumps({
            "improvements": ["Add metrics"],
            "skillGaps": ["go"],
            "formatSuggestions": [],
            "contentSuggestions": ["Describe APIs"],
        }))
        result = client.generate_improvements(resume_analysis, target_job)
        assert result.skill_gaps == ["go"]
        prompt = mock_post.call_args.kwargs["json"]["messages"][1]["content"]
        assert "Target Job: Backend Engineer at Acme" in prompt

    @patch("jobai.services.ai_client.requests.post")
    def test_improvements_fallback(self, mock_post, client, resume_analysis):
        mock_post.return_value = completion_response("no json here")
        assert client.generate_improvements(resume_analysis) == fallback_improvements()


class TestExtractJsonObject:
    """Test cases for locating JSON in free-form replies"""

    def test_first_balanced_object(self):
        assert extract_json_object('pre {"a": {"b": 1}} post {"c": 2}') == '{"a": {"b": 1}}'

    def test_braces_inside_strings(self):
        text = 'x {"note": "use } carefully \\" {", "n": 1} y'
        assert json.loads(extract_json_object(text)) == {"note": 'use } carefully " {', "n": 1}

    def test_none_when_absent_or_unbalanced(self):
        assert extract_json_object("no braces") is None
        assert extract_json_object('{"a": 1') is None
        assert extract_json_object("") is None
