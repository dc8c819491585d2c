from typing import Optional
from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from contesthub.core import config
from contesthub.utils.errors import Unavailable


class Database:
    """Owns the MongoDB client for the lifetime of the application"""
    
    def __init__(self, mongodb_url: str = None, database_name: str = None):
        self.mongodb_url = mongodb_url or config.MONGODB_URL
        self.database_name = database_name or config.DATABASE_NAME
        self.client: Optional[AsyncIOMotorClient] = None
    
    async def connect_db(self):
        """Connect to MongoDB and wait until the server answers"""
        client = AsyncIOMotorClient(
            self.mongodb_url,
            serverSelectionTimeoutMS=config.MONGODB_TIMEOUT_MS
        )
        try:
            await client.admin.command("ping")
            print("[OK] Connected to MongoDB")
            await self.create_indexes(client[self.database_name])
        except PyMongoError:
            client.close()
            raise
        # Requests only see a client once the unique email index exists
        self.client = client
    
    async def create_indexes(self, db: AsyncIOMotorDatabase):
        """Create database indexes"""
        # Users are keyed by lower-cased email
        await db.users.create_index([("email", ASCENDING)], unique=True)
        print("[OK] Created unique index on users.email")
        
        try:
            await db.contests.create_index([("creatorEmail", ASCENDING)])
            await db.contests.create_index([("status", ASCENDING)])
            print("[OK] Created indexes on contests")
        except PyMongoError as e:
            print(f"[WARN] Indexes on contests may already exist: {e}")
    
    async def close_db(self):
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            self.client = None
            print("[OK] Disconnected from MongoDB")
    
    def get_db(self) -> AsyncIOMotorDatabase:
        """Get database instance"""
        if self.client is None:
            raise Unavailable("Database unavailable")
        return self.client[self.database_name]


async def get_database(request: Request) -> AsyncIOMotorDatabase:
    """Dependency to get database, reconnecting if startup could not"""
    database = request.app.state.database
    if database.client is None:
        try:
            await database.connect_db()
        except PyMongoError as e:
            print(f"[ERROR] MongoDB still not reachable: {e}")
            raise Unavailable("Database unavailable")
    return database.get_db()
