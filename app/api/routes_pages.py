"""
Server-rendered pages: the seat grid and the per-seat board
"""

import logging
from typing import AsyncIterator, List

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.core.config import settings
from app.services.board_service import BoardSession, ForumApiClient
from app.services.grid_service import GridService

logger = logging.getLogger(__name__)

router = APIRouter()

templates = Jinja2Templates(directory="templates")

VISITED_COOKIE = "visited_seats"


async def get_forum_client() -> AsyncIterator[ForumApiClient]:
    """API client the board pages use to reach the thread endpoints"""
    client = ForumApiClient(base_url=settings.BASE_URL)
    try:
        yield client
    finally:
        await client.close()


def is_grid_seat(seat: str) -> bool:
    return GridService.is_seat_id(seat, settings.SEAT_ROWS, settings.SEAT_COLS, settings.SEAT_PREFIX)


def visited_seats(request: Request) -> List[str]:
    raw = request.cookies.get(VISITED_COOKIE, "")
    return [seat for seat in raw.split(",") if is_grid_seat(seat)]


def render_board(request: Request, session: BoardSession, seat: str, focus: bool = False) -> HTMLResponse:
    response = templates.TemplateResponse(request, "forum.html", {
        "title": f"Seat {seat} board" if seat else "Board",
        "seat": seat,
        "focus": focus,
        "threads": session.threads,
        "new_thread": session.new_thread,
        "post_forms": session.post_forms,
        "notices": session.reporter.notices,
        "default_name": settings.DEFAULT_POST_NAME,
    })
    if is_grid_seat(seat):
        seats = visited_seats(request)
        if seat not in seats:
            seats.append(seat)
        response.set_cookie(VISITED_COOKIE, ",".join(seats), samesite="lax")
    return response


def confirmation(confirmed: str):
    return lambda prompt: confirmed == "yes"


@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}


@router.get("/")
async def root():
    return RedirectResponse(url="/seating")


@router.get("/seating", response_class=HTMLResponse)
async def seating_page(request: Request):
    """Seat grid; occupied seats are not clickable"""
    statuses = GridService.load_seat_statuses(settings.SEAT_STATUS_FILE)
    grid = GridService.build_seat_grid(
        rows=settings.SEAT_ROWS,
        cols=settings.SEAT_COLS,
        prefix=settings.SEAT_PREFIX,
        statuses=statuses,
        visited=visited_seats(request),
    )
    return templates.TemplateResponse(request, "seating.html", {
        "title": "Seating",
        "grid": grid,
    })


@router.get("/forum", response_class=HTMLResponse)
async def forum_page(
    request: Request,
    seat: str = "",
    focus: str = "",
    client: ForumApiClient = Depends(get_forum_client)
):
    """Board for a seat; `focus=newPost` focuses the first post field"""
    session = BoardSession(client=client, new_thread=seat)
    await session.list_threads()
    return render_board(request, session, seat, focus == "newPost")


@router.post("/forum/threads", response_class=HTMLResponse)
async def create_thread_form(
    request: Request,
    title: str = Form(""),
    seat: str = Form(""),
    client: ForumApiClient = Depends(get_forum_client)
):
    session = BoardSession(client=client)
    await session.list_threads()
    await session.create_thread(title)
    return render_board(request, session, seat)


@router.post("/forum/threads/{thread_id}/posts", response_class=HTMLResponse)
async def create_post_form(
    request: Request,
    thread_id: str,
    name: str = Form(""),
    content: str = Form(""),
    seat: str = Form(""),
    client: ForumApiClient = Depends(get_forum_client)
):
    session = BoardSession(client=client)
    await session.list_threads()
    await session.create_post(thread_id, name=name, content=content)
    return render_board(request, session, seat)


@router.post("/forum/threads/{thread_id}/delete", response_class=HTMLResponse)
async def delete_thread_form(
    request: Request,
    thread_id: str,
    confirmed: str = Form(""),
    seat: str = Form(""),
    client: ForumApiClient = Depends(get_forum_client)
):
    session = BoardSession(client=client)
    await session.list_threads()
    await session.delete_thread(thread_id, confirmation(confirmed))
    return render_board(request, session, seat)


@router.post("/forum/threads/{thread_id}/posts/{post_id}/delete", response_class=HTMLResponse)
async def delete_post_form(
    request: Request,
    thread_id: str,
    post_id: str,
    confirmed: str = Form(""),
    seat: str = Form(""),
    client: ForumApiClient = Depends(get_forum_client)
):
    session = BoardSession(client=client)
    await session.list_threads()
    await session.delete_post(thread_id, post_id, confirmation(confirmed))
    return render_board(request, session, seat)
