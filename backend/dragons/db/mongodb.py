import logging

from fastapi import FastAPI, Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from dragons.core.config import Settings

logger = logging.getLogger(__name__)


def get_app_database(app: FastAPI) -> AsyncIOMotorDatabase:
    settings: Settings = app.state.settings
    return app.state.mongo_client[settings.DATABASE_NAME]


def get_database(request: Request) -> AsyncIOMotorDatabase:
    return get_app_database(request.app)


async def connect_to_mongo(app: FastAPI) -> None:
    settings: Settings = app.state.settings
    app.state.mongo_client = AsyncIOMotorClient(settings.MONGODB_URL)
    logger.info("Connected to MongoDB")


async def close_mongo_connection(app: FastAPI) -> None:
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()
        app.state.mongo_client = None
        logger.info("Closed MongoDB connection")
