from contextlib import asynccontextmanager

from pymongo.errors import PyMongoError

from jobai.services.resume_processor import ResumeProcessingService
from jobai.utils.logging_config import configure_for_environment, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(collection=None, pipeline=None, settings=None):
    """Application lifespan context manager yielding the processing service"""
    configure_for_environment()
    logger.info("JobAI matching core starting up...")

    service = ResumeProcessingService(collection=collection, pipeline=pipeline, settings=settings)

    logger.info("Initializing database indexes...")
    try:
        from jobai.services.db import init_indexes
        await init_indexes(service.collection)
        logger.info("Database indexes initialized successfully")
    except PyMongoError as e:
        logger.warning(f"Database index initialization had issues: {e}")
        logger.info("Service will continue - some operations may be slower without indexes")

    logger.info("JobAI matching core startup completed")
    try:
        yield service
    finally:
        logger.info("JobAI matching core shutting down...")
        await service.shutdown()
        logger.info("JobAI matching core shutdown completed")
