from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.schemas.financial import (
    GoalCreateRequest,
    GoalData,
    GoalSuggestRequest,
    GoalUpdateRequest,
)
from app.schemas.response import ApiResponse
from app.services.goal_service import GoalService
from app.services.llm import LLMService, get_llm_service

router = APIRouter()


async def get_goal_service(
    db: AsyncSession = Depends(get_db),
    llm_service: LLMService = Depends(get_llm_service)
) -> GoalService:
    return GoalService(db, llm_service)


@router.get("", response_model=ApiResponse)
async def list_goals(
    current_user: dict = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service)
):
    goals = await service.list_goals(current_user["id"])
    return ApiResponse(
        success=True,
        message="Goals retrieved successfully",
        data=[GoalData(**goal) for goal in goals]
    )


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def create_goal(
    request: GoalCreateRequest,
    current_user: dict = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service)
):
    goal = await service.create_goal(current_user["id"], request.model_dump())
    return ApiResponse(
        success=True,
        message="Goal created successfully",
        data=GoalData(**goal)
    )


@router.post("/suggest", response_model=ApiResponse)
async def suggest_goals(
    request: Optional[GoalSuggestRequest] = None,
    current_user: dict = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service)
):
    """
    Suggest goals from the last three months of transactions.

    With save_goals the suggestions are stored and returned with their ids.
    """
    request = request or GoalSuggestRequest()
    goals = await service.suggest_goals(current_user, save_goals=request.save_goals)
    return ApiResponse(
        success=True,
        message="Goals saved successfully" if request.save_goals else "Goal suggestions generated",
        data=[GoalData(**goal) for goal in goals] if request.save_goals else goals
    )


@router.patch("/{goal_id}", response_model=ApiResponse)
async def update_goal(
    goal_id: int,
    request: GoalUpdateRequest,
    current_user: dict = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service)
):
    goal = await service.update_goal(current_user, goal_id, request.changes())
    return ApiResponse(
        success=True,
        message="Goal updated successfully",
        data=GoalData(**goal)
    )


@router.delete("/{goal_id}", response_model=ApiResponse)
async def delete_goal(
    goal_id: int,
    current_user: dict = Depends(get_current_user),
    service: GoalService = Depends(get_goal_service)
):
    await service.delete_goal(goal_id, current_user["id"])
    return ApiResponse(success=True, message="Goal deleted successfully", data={})
