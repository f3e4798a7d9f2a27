"""
grok_list/schemas/user.py

Purpose: User request/response schemas

- Validates the create-user body
- Renders stored users with their id as a hex string
"""

from pydantic import BaseModel, Field
from typing import Any, Optional

from grok_list.models.user import User


class UserCreate(BaseModel):
    """
    Body of POST /users. An "id" sent by the client is ignored.
    """
    id: Optional[Any] = Field(default=None, exclude=True)
    name: str = Field(..., min_length=1, description="Display name")
    email: str = Field(..., description="Email address")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "foo",
                "email": "foo@bar.com"
            }
        }

    def to_model(self) -> User:
        return User.new(self.name, self.email)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str

    @classmethod
    def from_model(cls, user: User) -> "UserResponse":
        return cls(id=str(user.id), name=user.name, email=user.email)
