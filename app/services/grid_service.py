"""
Seat grid generation and seat status styling
"""

import json
import logging
from typing import Dict, Iterable, List, Optional
from urllib.parse import urlencode

from pydantic import ValidationError

from app.schemas.seat import SeatCell, SeatDescriptor, SeatStatus

logger = logging.getLogger(__name__)

SEAT_CLASSES = {
    "reserved": "seat seat-reserved",
    "occupied": "seat seat-occupied",
    "available": "seat seat-available",
}
NO_DATA_CLASS = "seat seat-unknown"


class GridService:
    """Service for building the seat selection grid"""

    @staticmethod
    def generate_seats(rows: int, cols: int, prefix: str) -> List[List[SeatDescriptor]]:
        """Generate `rows` rows of `cols` seats with ids like "{prefix}{row}-{col}" (1-based)"""
        if rows <= 0 or cols <= 0:
            return []
        return [
            [
                SeatDescriptor(id=f"{prefix}{row}-{col}", label=f"{row}-{col}")
                for col in range(1, cols + 1)
            ]
            for row in range(1, rows + 1)
        ]

    @staticmethod
    def is_seat_id(seat_id: str, rows: int, cols: int, prefix: str) -> bool:
        """True when `seat_id` names a seat of the generated grid"""
        if not seat_id.startswith(prefix):
            return False
        row, sep, col = seat_id[len(prefix):].partition("-")
        if not sep or not row.isdigit() or not col.isdigit():
            return False
        return 1 <= int(row) <= rows and 1 <= int(col) <= cols

    @staticmethod
    def load_seat_statuses(path: str) -> List[SeatStatus]:
        """Read the static seat status file; a missing or broken file means no statuses"""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Seat status file not found: {path}")
            return []
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse seat status file {path}: {e}")
            return []

        if not isinstance(data, dict) or not isinstance(data.get("seats"), list):
            logger.error(f"Seat status file {path} has no 'seats' list")
            return []

        statuses = []
        for entry in data["seats"]:
            try:
                statuses.append(SeatStatus.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping invalid seat status entry {entry!r}: {e}")
        return statuses

    @staticmethod
    def seat_css_class(status: Optional[str]) -> str:
        """Map a seat status (None when the seat has no record) to its style class"""
        if status is None:
            return NO_DATA_CLASS
        return SEAT_CLASSES.get(status, SEAT_CLASSES["available"])

    @staticmethod
    def board_link(seat_id: str, visited: bool = False) -> str:
        """Board view URL for a seat; revisits ask the board to focus the post field"""
        params = {"seat": seat_id}
        if visited:
            params["focus"] = "newPost"
        return f"/forum?{urlencode(params)}"

    @staticmethod
    def build_seat_grid(
        rows: int,
        cols: int,
        prefix: str,
        statuses: Iterable[SeatStatus] = (),
        visited: Iterable[str] = ()
    ) -> List[List[SeatCell]]:
        """Generate the grid and attach status, styling and click target to every seat"""
        status_map: Dict[str, str] = {s.seat: s.status for s in statuses}
        visited_seats = set(visited)

        grid = []
        for row in GridService.generate_seats(rows, cols, prefix):
            cells = []
            for seat in row:
                status = status_map.get(seat.id)
                clickable = status != "occupied"
                cells.append(SeatCell(
                    id=seat.id,
                    label=seat.label,
                    status=status,
                    css_class=GridService.seat_css_class(status),
                    clickable=clickable,
                    href=GridService.board_link(seat.id, seat.id in visited_seats) if clickable else None,
                ))
            grid.append(cells)
        return grid
