import os

import motor.motor_asyncio
from dotenv import load_dotenv
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from jobai.utils.logging_config import get_logger

logger = get_logger(__name__)

load_dotenv()

MONGO_DETAILS = os.getenv("MONGO_DETAILS", "mongodb://localhost:27017")
DB_NAME = os.getenv("DB_NAME", "jobai_db")

# Motor connects lazily, so building the client does no I/O
client = motor.motor_asyncio.AsyncIOMotorClient(MONGO_DETAILS)
db = client[DB_NAME]

resumes_coll = db["resumes"]


async def init_indexes(collection=None):
    """Index initialization for the resumes collection."""
    coll = collection if collection is not None else resumes_coll
    logger.info(f"Starting database index initialization on {DB_NAME}")

    try:
        await coll.create_index([("resume_id", ASCENDING)], unique=True)
        logger.debug("Created unique index on resumes.resume_id")
    except PyMongoError as e:
        if "already exists" in str(e).lower():
            logger.debug("Index on resumes.resume_id already exists")
        else:
            logger.warning(f"Could not create unique index on resumes.resume_id: {e}")

    try:
        await coll.create_index([("processing_status", ASCENDING)])
        await coll.create_index([("owner_id", ASCENDING)])
        await coll.create_index([("created_at", DESCENDING)])
        logger.debug("Created additional indexes on resumes collection")
    except PyMongoError as e:
        logger.warning(f"Could not create some resumes indexes: {e}")

    logger.info("Database index initialization completed")
