"""
Seat grid Pydantic schemas
"""

from typing import Literal, Optional
from pydantic import BaseModel

SeatState = Literal["available", "reserved", "occupied"]

class SeatDescriptor(BaseModel):
    """Generated seat identifier and its display label"""
    id: str
    label: str

class SeatStatus(BaseModel):
    """Entry of the static seat status file"""
    seat: str
    status: SeatState

class SeatCell(SeatDescriptor):
    """Seat as rendered on the grid"""
    status: Optional[SeatState] = None
    css_class: str
    clickable: bool
    href: Optional[str] = None
