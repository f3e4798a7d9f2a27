"""
grok_list/schemas/response.py

Purpose: Error body returned by the exception handlers

- Message, machine-readable code and optional details
- Not used for repository failures, which answer with an empty 500
"""

from typing import Any, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """
    Standard error response structure.
    """
    error: str
    code: str
    details: Optional[Any] = None
