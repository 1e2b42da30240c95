# backend/wealthvault/schemas/goals.py
"""
Pydantic schemas for savings goals.

A goal with no linked assets tracks total net wealth; otherwise it
tracks the summed current value of the linked assets.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wealthvault.schemas.validators import normalize_name


def _unique_ids(ids: list[int]) -> list[int]:
    # Keep first occurrence order; a duplicate link would double count
    return list(dict.fromkeys(ids))


class GoalBase(BaseModel):
    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        examples=["House deposit", "Emergency fund"],
        description="Goal name"
    )

    target_amount: Decimal = Field(
        ...,
        gt=0,
        max_digits=18,
        decimal_places=2,
        allow_inf_nan=False,
        description="Amount to reach (must be positive)",
        examples=["50000"]
    )

    linked_asset_ids: list[int] = Field(
        default_factory=list,
        description="Assets counted towards the goal (empty = total net wealth)",
        examples=[[1, 3]]
    )

    @field_validator('name')
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return normalize_name(v)

    @field_validator('linked_asset_ids')
    @classmethod
    def dedupe_links(cls, v: list[int]) -> list[int]:
        return _unique_ids(v)


class GoalCreate(GoalBase):
    """
    Schema for creating a goal.

    Example:
        {"name": "House deposit", "target_amount": "50000", "linked_asset_ids": [1]}
    """
    pass


class GoalUpdate(BaseModel):
    """All fields optional - only provided fields are updated."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    target_amount: Decimal | None = Field(
        default=None, gt=0, max_digits=18, decimal_places=2, allow_inf_nan=False
    )
    linked_asset_ids: list[int] | None = None

    @field_validator('name')
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return normalize_name(v)

    @field_validator('linked_asset_ids')
    @classmethod
    def dedupe_links(cls, v: list[int] | None) -> list[int] | None:
        if v is None:
            return None
        return _unique_ids(v)


class GoalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    target_amount: Decimal
    linked_asset_ids: list[int]


class GoalProgressResponse(BaseModel):
    """
    Goal with its progress against the current portfolio.

    progress_pct is capped at 100; remaining_amount goes negative once
    the target is exceeded.
    """

    model_config = ConfigDict(from_attributes=True)

    goal_id: int
    name: str
    target_amount: Decimal
    current_amount: Decimal
    progress_pct: Decimal
    remaining_amount: Decimal
    linked_asset_ids: list[int]
    is_complete: bool
