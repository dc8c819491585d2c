from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Optional, List, Dict
from datetime import datetime
from pymongo import ReturnDocument
import re

from contesthub.models.auth.token import TokenData
from contesthub.models.auth.user import DEFAULT_CONTEST_LIMIT
from contesthub.models.contest.contest import (
    ContestCreate,
    ContestEdit,
    ContestFieldsUpdate,
    ContestInDB,
    ContestStatus,
    ALL_CATEGORIES,
    DEFAULT_CONTEST_DURATION,
    UPDATABLE_FIELDS
)
from contesthub.services.contest.policy import ContestAction, authorize
from contesthub.utils.documents import parse_object_id
from contesthub.utils.errors import Conflict, Forbidden, InvalidInput, NotFound, QuotaExceeded


class ContestService:
    """Service for the contest lifecycle"""
    
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.contests = db.contests
        self.users = db.users
    
    async def get_contest(self, contest_id: str) -> Dict:
        """Get contest by ID"""
        oid = parse_object_id(contest_id, "contest ID")
        contest = await self.contests.find_one({"_id": oid})
        if not contest:
            raise NotFound("Contest not found")
        return contest
    
    async def list_contests(
        self,
        creator_email: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        status: Optional[str] = None
    ) -> List[Dict]:
        """
        List contests, newest first.
        
        - creator_email: only contests posted by this creator
        - category: exact category, "All" disables the filter
        - search: case-insensitive match on title, category or description
        - status: pending / confirmed / rejected
        """
        query = {}
        
        if creator_email:
            query["creatorEmail"] = creator_email.strip().lower()
        
        if category and category != ALL_CATEGORIES:
            query["category"] = category
        
        if status:
            try:
                query["status"] = ContestStatus(status).value
            except ValueError:
                raise InvalidInput("Invalid status")
        
        if search and search.strip():
            pattern = re.escape(search.strip())
            query["$or"] = [
                {"title": {"$regex": pattern, "$options": "i"}},
                {"category": {"$regex": pattern, "$options": "i"}},
                {"description": {"$regex": pattern, "$options": "i"}}
            ]
        
        cursor = self.contests.find(query).sort("createdAt", -1)
        return await cursor.to_list(length=None)
    
    async def list_participated(self, email: str) -> List[Dict]:
        """Contests the user has registered for"""
        cursor = self.contests.find({"participants": email}).sort("createdAt", -1)
        return await cursor.to_list(length=None)
    
    async def create_contest(self, caller: TokenData, contest_data: ContestCreate) -> Dict:
        """Create a pending contest, enforcing the creator's posting quota"""
        authorize(ContestAction.CREATE, caller, message="Creator only")
        
        creator = await self.users.find_one({"email": caller.email})
        if not creator:
            raise NotFound("User not found")
        
        limit = creator.get("contestLimit", DEFAULT_CONTEST_LIMIT)
        owned = await self.contests.count_documents({"creatorEmail": caller.email})
        if owned >= limit:
            raise QuotaExceeded(
                f"Contest limit reached. Your package allows {limit} contests."
            )
        
        now = datetime.utcnow()
        contest = ContestInDB(
            title=contest_data.title,
            description=contest_data.description,
            category=contest_data.category,
            image=contest_data.image,
            price=contest_data.price,
            prize_money=contest_data.prize_money,
            task_instruction=contest_data.task_instruction,
            creator_email=caller.email,
            status=ContestStatus.PENDING,
            end_date=contest_data.end_date or now + DEFAULT_CONTEST_DURATION,
            created_at=now,
            participants=[],
            submissions=[]
        )
        
        document = contest.model_dump(by_alias=True)
        result = await self.contests.insert_one(document)
        document["_id"] = result.inserted_id
        return document
    
    async def edit_contest(self, caller: TokenData, contest_id: str, contest_data: ContestEdit) -> Dict:
        """Edit a contest; only its owner, and only while pending"""
        contest = await self.get_contest(contest_id)
        authorize(ContestAction.EDIT, caller, contest)
        
        update_fields = contest_data.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        if not update_fields:
            raise InvalidInput("No fields to update")
        
        # Status is re-checked in the write so an approval in between wins
        updated = await self.contests.find_one_and_update(
            {
                "_id": contest["_id"],
                "creatorEmail": caller.email,
                "status": ContestStatus.PENDING.value
            },
            {"$set": update_fields},
            return_document=ReturnDocument.AFTER
        )
        if not updated:
            raise Forbidden("Not allowed")
        return updated
    
    async def update_contest_fields(
        self,
        caller: TokenData,
        contest_id: str,
        contest_data: ContestFieldsUpdate
    ) -> Dict:
        """Update allow-listed fields of an owned contest at any status"""
        contest = await self.get_contest(contest_id)
        authorize(ContestAction.UPDATE_FIELDS, caller, contest, message="Not authorized")
        
        supplied = contest_data.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        update_fields = {k: v for k, v in supplied.items() if k in UPDATABLE_FIELDS}
        if not update_fields:
            raise InvalidInput("No fields to update")
        
        updated = await self.contests.find_one_and_update(
            {"_id": contest["_id"]},
            {"$set": update_fields},
            return_document=ReturnDocument.AFTER
        )
        if not updated:
            raise NotFound("Contest not found")
        return updated
    
    async def delete_contest(self, caller: TokenData, contest_id: str) -> None:
        """Admins delete any contest; creators only their own pending ones"""
        contest = await self.get_contest(contest_id)
        authorize(ContestAction.DELETE, caller, contest)
        await self.contests.delete_one({"_id": contest["_id"]})
    
    async def set_status(self, caller: TokenData, contest_id: str, status: Optional[str]) -> Dict:
        """Admin confirms or rejects a contest"""
        authorize(ContestAction.SET_STATUS, caller, message="Admin only")
        
        if status not in (ContestStatus.CONFIRMED.value, ContestStatus.REJECTED.value):
            raise InvalidInput("Invalid status")
        
        oid = parse_object_id(contest_id, "contest ID")
        # Confirmed and rejected are terminal
        updated = await self.contests.find_one_and_update(
            {"_id": oid, "status": ContestStatus.PENDING.value},
            {"$set": {"status": status}},
            return_document=ReturnDocument.AFTER
        )
        if updated:
            return updated
        
        if await self.contests.count_documents({"_id": oid}, limit=1):
            raise Conflict("Contest already reviewed")
        raise NotFound("Contest not found")
