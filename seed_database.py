import asyncio
import os
from datetime import datetime, timedelta
from motor.motor_asyncio import AsyncIOMotorClient
from dotenv import load_dotenv

from contesthub.models.auth.user import Role
from contesthub.models.contest.contest import ContestStatus
from contesthub.services.auth.security import security_service

# Load environment variables
load_dotenv()

# MongoDB connection
MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
DATABASE_NAME = os.getenv("DATABASE_NAME", "contestHub")

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@contesthub.local").lower()
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD")


USERS_DATA = [
    {"name": "Demo Creator", "email": "creator@contesthub.local", "role": Role.CREATOR.value},
    {"name": "Demo Participant", "email": "user@contesthub.local", "role": Role.USER.value},
]

CONTESTS_DATA = [
    {
        "title": "Coffee Shop Logo",
        "description": "Design a minimal logo for a neighbourhood coffee shop",
        "category": "Design",
        "price": 5,
        "prizeMoney": 150,
        "taskInstruction": "Upload a PNG or SVG link",
    },
    {
        "title": "Flash Fiction: The Last Train",
        "description": "Write a 500 word story that ends at the last station",
        "category": "Writing",
        "price": 2,
        "prizeMoney": 50,
        "taskInstruction": "Paste a link to your document",
    },
]


async def seed_users(db, password: str):
    """Create the admin and demo accounts if missing"""
    accounts = [{"name": "Admin", "email": ADMIN_EMAIL, "role": Role.ADMIN.value}] + USERS_DATA
    
    for account in accounts:
        if await db.users.find_one({"email": account["email"]}):
            print(f"[SKIP] User {account['email']} already exists")
            continue
        
        await db.users.insert_one({
            **account,
            "password": security_service.get_password_hash(password),
            "photoURL": None,
            "bio": "",
            "contestLimit": 2,
            "package": None,
            "createdAt": datetime.utcnow(),
        })
        print(f"[OK] Created {account['role']} {account['email']}")


async def seed_contests(db):
    """Create demo contests for the demo creator"""
    creator_email = USERS_DATA[0]["email"]
    
    for contest in CONTESTS_DATA:
        if await db.contests.find_one({"title": contest["title"]}):
            print(f"[SKIP] Contest '{contest['title']}' already exists")
            continue
        
        now = datetime.utcnow()
        await db.contests.insert_one({
            **contest,
            "image": None,
            "creatorEmail": creator_email,
            "status": ContestStatus.CONFIRMED.value,
            "endDate": now + timedelta(days=7),
            "createdAt": now,
            "participants": [],
            "submissions": [],
        })
        print(f"[OK] Created contest '{contest['title']}'")


async def main():
    if not ADMIN_PASSWORD:
        print("[ERROR] ADMIN_PASSWORD missing in environment")
        return
    
    print("=" * 60)
    print("Seeding ContestHub database")
    print("=" * 60)
    
    client = AsyncIOMotorClient(MONGODB_URL)
    db = client[DATABASE_NAME]
    
    try:
        await seed_users(db, ADMIN_PASSWORD)
        await seed_contests(db)
        
        print()
        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
    finally:
        client.close()


if __name__ == "__main__":
    asyncio.run(main())
