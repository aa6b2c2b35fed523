"""
Common Pydantic schemas
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict

class StandardResponse(BaseModel):
    """Standard API response; payload fields sit next to the message"""
    model_config = ConfigDict(extra="allow")

    message: str

class ErrorResponse(BaseModel):
    """Error response schema"""
    model_config = ConfigDict(extra="allow")

    message: str
    details: Optional[Any] = None
    error: Optional[str] = None
