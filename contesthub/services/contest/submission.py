from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Any, List, Dict

from contesthub.models.auth.token import TokenData
from contesthub.models.contest.submission import (
    ANONYMOUS_PARTICIPANT,
    SubmissionInDB,
    SubmissionStatus
)
from contesthub.services.contest.contest import ContestService
from contesthub.services.contest.policy import ContestAction, authorize
from contesthub.utils.errors import Conflict, Forbidden, InvalidInput, NotFound


def is_empty_submission(payload: Any) -> bool:
    if isinstance(payload, str):
        return not payload.strip()
    return not payload


class SubmissionService:
    """Service for participants, submissions and winners of a contest"""
    
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.contests = db.contests
        self.users = db.users
        self.contest_service = ContestService(db)
    
    async def register_participant(self, email: str, contest_id: str) -> Dict:
        """Join a contest as a participant"""
        contest = await self.contest_service.get_contest(contest_id)
        
        if email in (contest.get("participants") or []):
            raise Conflict("Already registered")
        
        # $addToSet keeps the participant set unique under concurrent joins
        result = await self.contests.update_one(
            {"_id": contest["_id"]},
            {"$addToSet": {"participants": email}}
        )
        if result.matched_count == 0:
            raise NotFound("Contest not found")
        if result.modified_count == 0:
            raise Conflict("Already registered")
        
        return {"contestId": str(contest["_id"]), "email": email}
    
    async def submit_task(self, email: str, contest_id: str, payload: Any) -> Dict:
        """Append a submission from a registered participant"""
        if is_empty_submission(payload):
            raise InvalidInput("Submission cannot be empty")
        
        contest = await self.contest_service.get_contest(contest_id)
        
        if email not in (contest.get("participants") or []):
            raise Forbidden("You are not registered for this contest")
        
        user = await self.users.find_one({"email": email})
        participant_name = (user or {}).get("name") or ANONYMOUS_PARTICIPANT
        
        submission = SubmissionInDB(
            user_email=email,
            participant_name=participant_name,
            submission=payload
        ).model_dump(by_alias=True, exclude_none=True)
        
        result = await self.contests.update_one(
            {"_id": contest["_id"]},
            {"$push": {"submissions": submission}}
        )
        if result.matched_count == 0:
            raise NotFound("Contest not found")
        
        return submission
    
    async def declare_winner(self, caller: TokenData, contest_id: str, user_email: str) -> Dict:
        """
        Flag every submission of `user_email` as the winner.
        
        A contest has at most one winner. The write only matches while no
        submission is flagged and the submission list is unchanged since it
        was read, so two concurrent declarations cannot both succeed.
        """
        contest = await self.contest_service.get_contest(contest_id)
        authorize(ContestAction.DECLARE_WINNER, caller, contest, message="Not authorized")
        
        target = (user_email or "").strip().lower()
        if not target:
            raise InvalidInput("userEmail is required")
        
        submissions = contest.get("submissions") or []
        winner = SubmissionStatus.WINNER.value
        
        if any(s.get("status") == winner for s in submissions):
            raise Conflict("Winner already declared")
        
        if not any(s.get("userEmail") == target for s in submissions):
            raise InvalidInput("This participant has no submissions")
        
        updated_submissions = [
            {**s, "status": winner} if s.get("userEmail") == target else s
            for s in submissions
        ]
        
        result = await self.contests.update_one(
            {
                "_id": contest["_id"],
                "submissions.status": {"$ne": winner},
                "submissions": {"$size": len(submissions)}
            },
            {"$set": {"submissions": updated_submissions}}
        )
        if result.matched_count == 0:
            raise Conflict("Winner already declared or submissions changed, please retry")
        
        return {"contestId": str(contest["_id"]), "winner": target}
    
    async def list_submissions(self, caller: TokenData, contest_id: str) -> List[Dict]:
        """Submissions of an owned contest, with participant info"""
        contest = await self.contest_service.get_contest(contest_id)
        authorize(ContestAction.LIST_SUBMISSIONS, caller, contest, message="Not authorized")
        
        return [
            {
                "participantName": s.get("participantName") or ANONYMOUS_PARTICIPANT,
                "participantEmail": s.get("userEmail"),
                "taskInfo": s.get("submission"),
                "submittedAt": s.get("submittedAt"),
                "isWinner": s.get("status") == SubmissionStatus.WINNER.value
            }
            for s in contest.get("submissions") or []
        ]
