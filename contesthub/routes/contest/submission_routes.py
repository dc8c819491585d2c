from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from contesthub.database import get_database
from contesthub.models.auth.token import TokenData
from contesthub.models.contest.submission import SubmissionCreate, WinnerDeclaration
from contesthub.services.contest.submission import SubmissionService
from contesthub.routes.auth.dependencies import get_current_user, require_creator
from contesthub.utils.documents import serialize_value
from contesthub.utils.response import success_response

router = APIRouter(prefix="/contests", tags=["Contest Submissions"])


@router.post("/{contest_id}/register")
async def register_for_contest(
    contest_id: str,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Join a contest as a participant"""
    result = await SubmissionService(db).register_participant(current_user.email, contest_id)
    
    return success_response(message="Registered successfully", data=result)


@router.post("/{contest_id}/submit-task")
async def submit_task(
    contest_id: str,
    submission_data: SubmissionCreate,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Submit an entry.
    
    - Must be registered for the contest
    - Multiple entries are accepted
    """
    submission = await SubmissionService(db).submit_task(
        current_user.email,
        contest_id,
        submission_data.submission
    )
    
    return success_response(
        message="Submission successful",
        data={"submission": serialize_value(submission)},
        status_code=201
    )


@router.put("/{contest_id}/declare-winner")
async def declare_winner(
    contest_id: str,
    winner_data: WinnerDeclaration,
    current_user: TokenData = Depends(require_creator),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Declare the winner of own contest (only once)"""
    result = await SubmissionService(db).declare_winner(
        current_user,
        contest_id,
        winner_data.user_email
    )
    
    return success_response(message="Winner declared successfully", data=result)


@router.get("/{contest_id}/submissions")
async def get_contest_submissions(
    contest_id: str,
    current_user: TokenData = Depends(require_creator),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Submissions of own contest with participant info"""
    submissions = await SubmissionService(db).list_submissions(current_user, contest_id)
    
    return success_response(
        message="Submissions retrieved successfully",
        data={"submissions": serialize_value(submissions)}
    )
