"""Request bodies accepted by the HTTP API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from core.models import PurchaseContext, SavingsGoal

__all__ = ["SavingsGoalPayload", "PurchaseRequest"]


class SavingsGoalPayload(BaseModel):
    name: str = Field(min_length=1)
    current: float
    target: float


class PurchaseRequest(BaseModel):
    """A purchase the user is considering, as sent by the front-end."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: str = Field(min_length=1)
    reason: str = Field(min_length=1)
    need_score: float = Field(alias="needScore", ge=1, le=10)
    hourly_wage: Optional[float] = Field(default=None, alias="hourlyWage")
    savings_goal: Optional[SavingsGoalPayload] = Field(default=None, alias="savingsGoal")

    def to_context(self) -> PurchaseContext:
        goal = None
        if self.savings_goal is not None:
            goal = SavingsGoal(
                name=self.savings_goal.name,
                current=self.savings_goal.current,
                target=self.savings_goal.target,
            )
        return PurchaseContext(
            name=self.name,
            price=self.price,
            category=self.category,
            reason=self.reason,
            need_score=self.need_score,
            hourly_wage=self.hourly_wage,
            savings_goal=goal,
        )
