"""
Resume processing service: upload ingestion, background analysis and status tracking
"""
import asyncio
import time
from datetime import datetime
from typing import Dict, List, Optional

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from jobai.helpers.text_extraction import ensure_sufficient_text, extract_text
from jobai.models.ai_settings import AppSettings, load_settings
from jobai.models.response import ImprovementSuggestions, MatchResult, ResumeStatus
from jobai.models.schemas import JobProfile, ProcessingStatus, ResumeMetadata, ResumeRecord
from jobai.services.ai_client import AIAnalysisClient
from jobai.services.matching import match_analysis, rank_jobs
from jobai.services.pipeline import ResumeAnalysisPipeline
from jobai.utils.exceptions import (
    AnalysisInProgressError,
    BusinessLogicError,
    ExceptionContext,
    JobAIBaseException,
    ResumeNotFoundError,
    ValidationError,
)
from jobai.utils.logging_config import get_logger

logger = get_logger(__name__)

STATUS_PROGRESS = {
    ProcessingStatus.COMPLETED.value: 100,
    ProcessingStatus.PROCESSING.value: 50,
}


class ResumeProcessingService:
    """Turns uploaded resumes into stored analyses.

    Extraction and the quality gate are awaited inside ``ingest_upload`` (on a
    worker thread) so callers see format and text errors immediately. Analysis runs as a
    background task per resume; at most one task per resume id is in flight.
    """

    def __init__(
        self,
        collection=None,
        pipeline: Optional[ResumeAnalysisPipeline] = None,
        settings: Optional[AppSettings] = None,
    ):
        if collection is None:
            from jobai.services.db import resumes_coll
            collection = resumes_coll
        self.collection = collection
        self.settings = settings or load_settings()
        if pipeline is None:
            pipeline = ResumeAnalysisPipeline(ai_client=AIAnalysisClient(self.settings.llm_settings))
        self.pipeline = pipeline
        self._semaphore = asyncio.Semaphore(self.settings.processing_settings.max_concurrent)
        self._tasks: Dict[str, asyncio.Task] = {}

    # -------- Ingestion --------
    async def ingest_upload(
        self,
        file_bytes: bytes,
        mime_type: str,
        file_name: str,
        owner_id: Optional[str] = None,
    ) -> ResumeRecord:
        limits = self.settings.extraction_settings
        if len(file_bytes) > limits.max_file_size:
            raise ValidationError(
                f"File exceeds maximum size of {limits.max_file_size} bytes",
                field="file_size",
                value=len(file_bytes),
            )

        # Decoding is CPU bound; keep it off the event loop
        document = await asyncio.to_thread(self._extract, file_bytes, mime_type, limits.min_text_length)

        record = ResumeRecord(
            owner_id=owner_id,
            file_name=file_name,
            mime_type=mime_type,
            file_size=len(file_bytes),
            extracted_text=document.text,
            processing_status=ProcessingStatus.PROCESSING,
        )
        with ExceptionContext("store resume", logger, resume_id=record.resume_id):
            await self.collection.insert_one(record.model_dump())
        logger.info(f"Stored resume {record.resume_id} ({file_name}, {len(file_bytes)} bytes)")

        self._dispatch(record.resume_id, record.extracted_text, file_name)
        return record

    @staticmethod
    def _extract(file_bytes: bytes, mime_type: str, min_text_length: int):
        document = extract_text(file_bytes, mime_type)
        ensure_sufficient_text(document.text, min_text_length)
        return document

    def _dispatch(self, resume_id: str, text: str, file_name: str) -> asyncio.Task:
        if resume_id in self._tasks:
            raise AnalysisInProgressError(resume_id)
        task = asyncio.create_task(self.process(resume_id, text, file_name))
        self._tasks[resume_id] = task

        def _forget(t: asyncio.Task):
            if self._tasks.get(resume_id) is t:
                del self._tasks[resume_id]

        task.add_done_callback(_forget)
        return task

    # -------- Analysis --------
    async def process(self, resume_id: str, text: str, file_name: str) -> None:
        """Run the analysis pipeline and persist the terminal status."""
        async with self._semaphore:
            try:
                with ExceptionContext("resume analysis", logger, resume_id=resume_id):
                    started = time.time()
                    analysis, ai_result = await asyncio.to_thread(self.pipeline.run, text, file_name)
                    elapsed_ms = (time.time() - started) * 1000
                    metadata = ResumeMetadata(
                        processing_time_ms=round(elapsed_ms, 2),
                        ai_model=ai_result.model,
                        analysis_source=ai_result.source,
                    )
                    await self.collection.update_one(
                        {"resume_id": resume_id},
                        {"$set": {
                            "analysis": analysis.model_dump(),
                            "processing_status": ProcessingStatus.COMPLETED.value,
                            "processing_error": None,
                            "metadata": metadata.model_dump(),
                            "updated_at": datetime.utcnow(),
                        }},
                    )
                logger.info(
                    f"Resume {resume_id} analyzed in {elapsed_ms:.0f}ms "
                    f"(source={ai_result.source}, overall={analysis.ai_analysis.overall_score})"
                )
            except JobAIBaseException as e:
                await self._mark_failed(resume_id, e.message)

    async def _mark_failed(self, resume_id: str, message: str) -> None:
        try:
            await self.collection.update_one(
                {"resume_id": resume_id},
                {"$set": {
                    "processing_status": ProcessingStatus.FAILED.value,
                    "processing_error": message,
                    "updated_at": datetime.utcnow(),
                }},
            )
            logger.warning(f"Resume {resume_id} marked failed: {message}")
        except PyMongoError as e:
            logger.error(f"Could not record failure for resume {resume_id}: {e}", exc_info=True)

    async def reprocess(self, resume_id: str) -> ResumeRecord:
        if resume_id in self._tasks:
            raise AnalysisInProgressError(resume_id)

        # Claim the record atomically so two callers cannot both start an analysis
        doc = await self.collection.find_one_and_update(
            {"resume_id": resume_id, "processing_status": {"$ne": ProcessingStatus.PROCESSING.value}},
            {"$set": {
                "processing_status": ProcessingStatus.PROCESSING.value,
                "processing_error": None,
                "updated_at": datetime.utcnow(),
            }},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            if await self.collection.find_one({"resume_id": resume_id}) is None:
                raise ResumeNotFoundError(resume_id)
            raise AnalysisInProgressError(resume_id)

        record = ResumeRecord.model_validate(doc)
        logger.info(f"Reprocessing resume {resume_id}")
        self._dispatch(resume_id, record.extracted_text, record.file_name)
        return record

    # -------- Queries --------
    async def get_resume(self, resume_id: str) -> ResumeRecord:
        doc = await self.collection.find_one({"resume_id": resume_id})
        if doc is None:
            raise ResumeNotFoundError(resume_id)
        return ResumeRecord.model_validate(doc)

    async def get_status(self, resume_id: str) -> ResumeStatus:
        record = await self.get_resume(resume_id)
        return ResumeStatus(
            resume_id=record.resume_id,
            status=record.processing_status,
            error=record.processing_error,
            progress=STATUS_PROGRESS.get(record.processing_status, 0),
        )

    async def _completed_analysis(self, resume_id: str):
        record = await self.get_resume(resume_id)
        if record.processing_status != ProcessingStatus.COMPLETED.value or record.analysis is None:
            raise BusinessLogicError(
                f"Resume {resume_id} has no completed analysis (status: {record.processing_status})",
                rule="analysis_required",
            )
        return record.analysis

    async def match_job(self, resume_id: str, job: JobProfile) -> MatchResult:
        analysis = await self._completed_analysis(resume_id)
        return match_analysis(analysis, job)

    async def rank_jobs(self, resume_id: str, jobs: List[JobProfile]) -> List[MatchResult]:
        analysis = await self._completed_analysis(resume_id)
        return rank_jobs(analysis, jobs)

    async def suggest_improvements(
        self, resume_id: str, target_job: Optional[JobProfile] = None
    ) -> ImprovementSuggestions:
        analysis = await self._completed_analysis(resume_id)
        return await asyncio.to_thread(self.pipeline.ai_client.generate_improvements, analysis, target_job)

    # -------- Lifecycle --------
    async def wait_for(self, resume_id: str) -> None:
        task = self._tasks.get(resume_id)
        if task is not None:
            await task

    async def shutdown(self) -> None:
        pending = list(self._tasks.values())
        if pending:
            logger.info(f"Waiting for {len(pending)} in-flight analyses")
            await asyncio.gather(*pending, return_exceptions=True)
