"""Pydantic response models for the read-only HTTP API.

WHY: The plan endpoints return the persisted records. Typed models give
response validation and OpenAPI docs at /docs for free.

RULES:
- Field names mirror the keys in data.json exactly
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class PlanRecord(BaseModel):
    """One user's plan for one week."""

    locations: Dict[str, str] = Field(
        default_factory=dict,
        description="Day slot (day_0 = Monday .. day_4 = Friday) to location code.",
    )
    timestamp: int = Field(description="Submission time (Unix epoch milliseconds).")


class TimeOffRecord(BaseModel):
    """One time-off request for one date."""

    leave_type: str = Field(description="Leave type code (holiday, sick, other).")
    duration: str = Field(description="Duration code (full, am, pm).")
    timestamp: int = Field(description="Submission time (Unix epoch milliseconds).")


class UserPlansResponse(BaseModel):
    """All stored plans and time-off requests for a user."""

    user_id: str = Field(description="Slack user ID.")
    avatar: Optional[str] = Field(
        default=None,
        description="Last known 72px profile image URL.",
    )
    plans: Dict[str, PlanRecord] = Field(description="Plans keyed by week selector.")
    timeoff: Dict[str, TimeOffRecord] = Field(
        default_factory=dict,
        description="Time-off requests keyed by ISO date.",
    )


class TeamPlansResponse(BaseModel):
    """Plans of every user reporting to a manager."""

    manager_id: str = Field(description="Slack user ID of the manager.")
    members: List[UserPlansResponse] = Field(description="One entry per report.")


class HealthResponse(BaseModel):
    status: str = Field(default="ok", description="Always 'ok' when the server is up.")
    users: int = Field(description="Number of users with a cached profile.")
    plans: int = Field(description="Number of users with at least one plan.")


class ErrorResponse(BaseModel):
    detail: str = Field(description="Human-readable error message.")
