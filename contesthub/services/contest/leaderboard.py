from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import List, Dict, Optional

from contesthub.models.contest.submission import SubmissionStatus


class LeaderboardService:
    """Service for the winners leaderboard - computed from contests on every call"""
    
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.contests = db.contests
    
    def _get_pipeline(self, limit: Optional[int] = None) -> List[Dict]:
        """One point per winning submission, grouped by submitter"""
        pipeline = [
            {"$unwind": "$submissions"},
            {"$match": {"submissions.status": SubmissionStatus.WINNER.value}},
            {
                "$group": {
                    "_id": "$submissions.userEmail",
                    "points": {"$sum": 1}
                }
            },
            # Ties keep a stable order by email
            {"$sort": {"points": -1, "_id": 1}}
        ]
        
        if limit:
            pipeline.append({"$limit": limit})
        
        pipeline.append({
            "$lookup": {
                "from": "users",
                "localField": "_id",
                "foreignField": "email",
                "as": "user_info"
            }
        })
        return pipeline
    
    async def get_leaderboard(self, limit: Optional[int] = None) -> List[Dict]:
        cursor = self.contests.aggregate(self._get_pipeline(limit))
        rows = await cursor.to_list(length=None)
        
        leaderboard = []
        for rank, row in enumerate(rows, start=1):
            user = row["user_info"][0] if row.get("user_info") else {}
            leaderboard.append({
                "rank": rank,
                "email": row["_id"],
                "name": user.get("name"),
                "photoURL": user.get("photoURL"),
                "role": user.get("role"),
                "points": row["points"]
            })
        
        return leaderboard
