from fastapi import APIRouter, Depends, Query
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from contesthub.database import get_database
from contesthub.models.auth.token import TokenData
from contesthub.models.contest.contest import (
    ContestCreate,
    ContestEdit,
    ContestFieldsUpdate,
    ContestStatusUpdate
)
from contesthub.services.contest.contest import ContestService
from contesthub.routes.auth.dependencies import get_current_user, require_admin, require_creator
from contesthub.utils.documents import convert_document_to_json
from contesthub.utils.response import success_response

router = APIRouter(prefix="/contests", tags=["Contests"])


@router.get("")
async def list_contests(
    creator_email: Optional[str] = Query(None, alias="creatorEmail"),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    List contests (public).
    
    - creatorEmail: contests of one creator
    - category: exact category ("All" for every category)
    - search: matches title, category or description (case-insensitive)
    - status: pending / confirmed / rejected
    """
    contests = await ContestService(db).list_contests(
        creator_email=creator_email,
        category=category,
        search=search,
        status=status
    )
    
    return success_response(
        message="Contests retrieved successfully",
        data={
            "contests": [convert_document_to_json(c) for c in contests],
            "total": len(contests)
        }
    )


@router.get("/participated")
async def list_participated_contests(
    current_user: TokenData = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Contests the current user registered for"""
    contests = await ContestService(db).list_participated(current_user.email)
    
    return success_response(
        message="Contests retrieved successfully",
        data={
            "contests": [convert_document_to_json(c) for c in contests],
            "total": len(contests)
        }
    )


@router.get("/{contest_id}")
async def get_contest(
    contest_id: str,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Get a contest by ID"""
    contest = await ContestService(db).get_contest(contest_id)
    
    return success_response(
        message="Contest retrieved successfully",
        data={"contest": convert_document_to_json(contest)}
    )


@router.post("")
async def create_contest(
    contest_data: ContestCreate,
    current_user: TokenData = Depends(require_creator),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Create a contest (creators only).
    
    - Starts in PENDING status until an admin confirms it
    - Limited by the creator's package (2 contests by default)
    - endDate defaults to 3 days from now
    """
    contest = await ContestService(db).create_contest(current_user, contest_data)
    
    return success_response(
        message="Contest created successfully",
        data={
            "insertedId": str(contest["_id"]),
            "contest": convert_document_to_json(contest)
        },
        status_code=201
    )


@router.put("/edit/{contest_id}")
async def edit_contest(
    contest_id: str,
    contest_data: ContestEdit,
    current_user: TokenData = Depends(require_creator),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Edit own contest while it is still pending"""
    contest = await ContestService(db).edit_contest(current_user, contest_id, contest_data)
    
    return success_response(
        message="Contest updated successfully",
        data={"contest": convert_document_to_json(contest)}
    )


@router.put("/status/{contest_id}")
async def update_contest_status(
    contest_id: str,
    status_data: ContestStatusUpdate,
    current_user: TokenData = Depends(require_admin),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Confirm or reject a contest (admin only)"""
    contest = await ContestService(db).set_status(current_user, contest_id, status_data.status)
    
    return success_response(
        message=f"Contest {contest['status']}",
        data={"contest": convert_document_to_json(contest)}
    )


@router.put("/{contest_id}")
async def update_contest(
    contest_id: str,
    contest_data: ContestFieldsUpdate,
    current_user: TokenData = Depends(require_creator),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """Update selected fields of own contest (any status)"""
    contest = await ContestService(db).update_contest_fields(current_user, contest_id, contest_data)
    
    return success_response(
        message="Contest updated successfully",
        data={"contest": convert_document_to_json(contest)}
    )


@router.delete("/{contest_id}")
async def delete_contest(
    contest_id: str,
    current_user: TokenData = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database)
):
    """
    Delete a contest.
    
    - Admin: any contest
    - Creator: own contest while pending
    """
    await ContestService(db).delete_contest(current_user, contest_id)
    
    return success_response(message="Contest deleted successfully")
