"""User data model."""

from typing import Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    """The signed-in journal owner."""

    id: str = Field(..., min_length=1, description="Opaque user identifier")
    email: Optional[str] = Field(default=None, description="Email address")

    model_config = {"frozen": True}
