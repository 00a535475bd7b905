"""
Database configuration and connection management for MongoDB
"""
import asyncio
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from svpg.config.settings import settings

logger = logging.getLogger(__name__)


class DatabaseConfig:
    """MongoDB database configuration"""

    def __init__(self):
        self.MONGO_URL = settings.MONGO_URL
        self.DATABASE_NAME = settings.DATABASE_NAME
        self.client: Optional[AsyncIOMotorClient] = None
        self.database = None

    async def connect_db(self):
        """Connect to MongoDB, retrying on a fixed delay until it answers"""
        if not self.MONGO_URL:
            raise RuntimeError("MONGO_URL is not set; refusing to start")

        while True:
            try:
                self.client = AsyncIOMotorClient(
                    self.MONGO_URL,
                    serverSelectionTimeoutMS=settings.DB_SERVER_SELECTION_TIMEOUT_MS,
                )
                await self.client.admin.command("ping")
                self.database = self.client[self.DATABASE_NAME]
                logger.info("📦 MongoDB connected: %s", self.DATABASE_NAME)
                return
            except PyMongoError as exc:
                logger.error("❌ MongoDB error: %s", exc)
                logger.info("Retrying in %s seconds...", settings.DB_RETRY_DELAY_SECONDS)
                if self.client:
                    self.client.close()
                self.client = None
                await asyncio.sleep(settings.DB_RETRY_DELAY_SECONDS)

    async def ensure_indexes(self):
        """Create the indexes the allocation engine relies on"""
        bookings = self.get_collection(Collections.BOOKINGS)
        # At most one booking per physical bed
        await bookings.create_index(
            [("floor", ASCENDING), ("room", ASCENDING), ("bed", ASCENDING)],
            unique=True,
            name="unique_bed",
        )
        payments = self.get_collection(Collections.PAYMENTS)
        await payments.create_index([("user_id", ASCENDING)], name="payment_user")
        await payments.create_index([("created_at", DESCENDING)], name="payment_created")

    async def close_db(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            logger.info("MongoDB connection closed")

    def get_collection(self, collection_name: str):
        """Get a specific collection"""
        if self.database is None:
            raise RuntimeError("Database not connected")
        return self.database[collection_name]

# Global database instance
db_config = DatabaseConfig()

# Collection names
class Collections:
    BOOKINGS = "bookings"
    PAYMENTS = "payments"
    USERS = "users"
