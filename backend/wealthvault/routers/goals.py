# backend/wealthvault/routers/goals.py
"""
Savings goal endpoints.

Progress against the current portfolio is served by /analytics/goals.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from wealthvault.database import get_db
from wealthvault.dependencies import get_ledger_service
from wealthvault.schemas.goals import GoalCreate, GoalResponse, GoalUpdate
from wealthvault.services.ledger import LedgerService
from wealthvault.services.store import RecordStore

router = APIRouter(
    prefix="/goals",
    tags=["Goals"],
)


@router.post(
    "/",
    response_model=GoalResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a goal",
)
def create_goal(
        goal: GoalCreate,
        db: Session = Depends(get_db),
        ledger: LedgerService = Depends(get_ledger_service),
) -> GoalResponse:
    """
    Create a savings goal.

    Leave linked_asset_ids empty to track total net wealth. Every linked
    asset must exist.
    """
    return GoalResponse.model_validate(ledger.create_goal(db, goal.model_dump()))


@router.get("/", response_model=list[GoalResponse], summary="List goals")
def list_goals(db: Session = Depends(get_db)) -> list[GoalResponse]:
    return [GoalResponse.model_validate(g) for g in RecordStore(db).get_all("goals")]


@router.get("/{goal_id}", response_model=GoalResponse, summary="Get goal by ID")
def get_goal(goal_id: int, db: Session = Depends(get_db)) -> GoalResponse:
    return GoalResponse.model_validate(RecordStore(db).get("goals", goal_id))


@router.patch("/{goal_id}", response_model=GoalResponse, summary="Update a goal")
def update_goal(
        goal_id: int,
        goal_update: GoalUpdate,
        db: Session = Depends(get_db),
        ledger: LedgerService = Depends(get_ledger_service),
) -> GoalResponse:
    values = goal_update.model_dump(exclude_unset=True, exclude_none=True)
    return GoalResponse.model_validate(ledger.update_goal(db, goal_id, values))


@router.delete(
    "/{goal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a goal",
)
def delete_goal(
        goal_id: int,
        db: Session = Depends(get_db),
        ledger: LedgerService = Depends(get_ledger_service),
) -> Response:
    ledger.delete_goal(db, goal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
