import io
import json

import pytest
from docx import Document

from jobai.models.ai_settings import LLMSettings

SAMPLE_RESUME = """Jane Doe
jane.doe@example.com | (555) 123-4567 | https://github.com/janedoe

Senior Software Engineer
Acme Corp
2019 - Present
Built data pipelines in python and docker.
Led a team of four.

Bachelor of Science in Computer Science
State University, May 2015"""


AI_ANALYSIS_PAYLOAD = {
    "summary": "Backend engineer focused on data pipelines.",
    "skills": [{"name": "python", "category": "technical", "confidence": 0.9}],
    "experience": [{"title": "Engineer", "company": "Acme", "duration": "5 years", "description": "Pipelines"}],
    "education": [{"degree": "BSc", "institution": "State University", "graduationDate": "2015"}],
    "strengths": ["Strong python"],
    "weaknesses": ["Few metrics"],
    "improvements": ["Quantify impact"],
    "feedback": ["Solid resume"],
    "scores": {
        "formatting": 80,
        "content": 90,
        "skills": 70,
        "experience": 85,
        "education": 75,
        "keywords": 60,
    },
    "atsCompatibility": {"score": 82, "issues": [], "recommendations": ["Add keywords"]},
}


def make_docx(*paragraphs: str) -> bytes:
    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def make_pdf(text: str) -> bytes:
    """Single-page PDF with one Helvetica text line; xref offsets are computed."""
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R "
        b"/Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


def completion_response(content: str, status_code: int = 200):
    from unittest.mock import MagicMock
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = {"choices": [{"message": {"role": "assistant", "content": content}}]}
    return resp


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME


@pytest.fixture
def ai_payload():
    return json.loads(json.dumps(AI_ANALYSIS_PAYLOAD))


@pytest.fixture
def llm_settings():
    return LLMSettings(api_key="test-key")


@pytest.fixture
def offline_settings():
    return LLMSettings(api_key=None)
