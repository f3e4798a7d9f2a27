"""
grok_list/models/user.py

Purpose: User document model

- Name and email, both required
- Stored in the users collection
"""

from pydantic import Field

from grok_list.models.base import MongoModel


class User(MongoModel):
    """
    A user account. Immutable once built; the only update path is a
    whole-document replace.
    """

    name: str = Field(..., min_length=1)
    email: str

    @classmethod
    def new(cls, name: str, email: str) -> "User":
        return cls(name=name, email=email)
