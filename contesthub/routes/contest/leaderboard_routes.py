from fastapi import APIRouter, Depends, Query
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from contesthub.database import get_database
from contesthub.services.contest.leaderboard import LeaderboardService
from contesthub.utils.response import success_response

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@router.get("")
async def get_leaderboard(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Number of top users to return"),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Winners leaderboard (public).
    
    One point per winning submission, highest first. Calculated from the
    contests on every request.
    """
    leaderboard = await LeaderboardService(db).get_leaderboard(limit=limit)
    
    return success_response(
        message="Leaderboard retrieved successfully",
        data={
            "leaderboard": leaderboard,
            "total_users": len(leaderboard)
        }
    )
