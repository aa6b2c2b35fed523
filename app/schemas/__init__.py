"""
Pydantic schemas package
"""

from .common import *
from .seat import *
from .thread import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "SeatDescriptor",
    "SeatStatus",
    "SeatCell",
    "Post",
    "Thread",
    "ThreadCreate",
    "PostCreate",
    "ThreadDelete",
    "PostDelete"
]
