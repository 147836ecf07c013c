import io
import re
from typing import Dict

from docx import Document
from pdfminer.high_level import extract_text as pdf_extract

from jobai.models.models import DocumentType, ExtractedDocument
from jobai.utils.exceptions import ExtractionError, InsufficientTextError, UnsupportedFormatError
from jobai.utils.logging_config import get_logger, log_function_call

logger = get_logger(__name__)

PDF_MIME = "application/pdf"
DOC_MIME = "application/msword"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

MIME_TYPES: Dict[str, DocumentType] = {
    PDF_MIME: DocumentType.PDF,
    DOC_MIME: DocumentType.DOC,
    DOCX_MIME: DocumentType.DOCX,
}

_CRLF = re.compile(r"\r\n?")
_BLANK_RUNS = re.compile(r"\n{3,}")
_HORIZONTAL_RUNS = re.compile(r"[^\S\n]{2,}")


def clean_text(x: str) -> str:
    x = _CRLF.sub("\n", x)
    x = x.replace("\f", "\n")
    x = _BLANK_RUNS.sub("\n\n", x)
    x = _HORIZONTAL_RUNS.sub(" ", x)
    return x.strip()


def read_pdf(data: bytes) -> str:
    try:
        return pdf_extract(io.BytesIO(data))
    except Exception as e:
        # pdfminer raises PDFSyntaxError, PDFPasswordIncorrect, PDFEncryptionError...
        raise ExtractionError(
            "Failed to extract text from PDF", document_type=DocumentType.PDF.value, cause=e
        ) from e


def read_docx(data: bytes) -> str:
    try:
        doc = Document(io.BytesIO(data))
    except Exception as e:
        raise ExtractionError(
            "Failed to extract text from Word document", document_type=DocumentType.DOCX.value, cause=e
        ) from e
    parts = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            parts.append(" ".join(cell.text for cell in row.cells))
    return "\n".join(parts)


def read_doc(data: bytes) -> str:
    # Legacy .doc uploads are frequently OOXML with the wrong MIME type
    try:
        return read_docx(data)
    except ExtractionError:
        logger.debug("Not an OOXML document, trying legacy Word partitioning")

    try:
        from unstructured.partition.auto import partition
        elems = partition(file=io.BytesIO(data), content_type=DOC_MIME)
    except Exception as e:
        raise ExtractionError(
            "Failed to extract text from Word document", document_type=DocumentType.DOC.value, cause=e
        ) from e
    return "\n".join([e.text for e in elems if getattr(e, "text", None)])


_READERS = {
    DocumentType.PDF: read_pdf,
    DocumentType.DOC: read_doc,
    DocumentType.DOCX: read_docx,
}


def document_type_for(mime_type: str) -> DocumentType:
    key = (mime_type or "").split(";")[0].strip().lower()
    if key not in MIME_TYPES:
        raise UnsupportedFormatError(
            f"Unsupported file type: {mime_type}. Only PDF, DOC, and DOCX files are allowed.",
            mime_type=mime_type,
        )
    return MIME_TYPES[key]


@log_function_call
def extract_text(file_bytes: bytes, mime_type: str) -> ExtractedDocument:
    """Decode an uploaded resume into normalized plain text.

    Raises:
        UnsupportedFormatError: MIME type is not PDF, DOC or DOCX
        ExtractionError: the document has no decodable text
    """
    doc_type = document_type_for(mime_type)
    raw = _READERS[doc_type](file_bytes)
    text = clean_text(raw or "")
    if not text:
        raise ExtractionError(
            f"No extractable text found in {doc_type.value.upper()} document",
            document_type=doc_type.value,
        )
    logger.debug(f"Extracted {len(text)} characters from {doc_type.value} document")
    return ExtractedDocument(text=text, source_type=doc_type)


def ensure_sufficient_text(text: str, min_length: int = 100) -> str:
    length = len(text or "")
    if length < min_length:
        raise InsufficientTextError(
            "Could not extract sufficient text from resume. Please ensure the file is not corrupted.",
            length=length,
            minimum=min_length,
        )
    return text
