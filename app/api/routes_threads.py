"""
Thread API routes - validate the request, then run one read/write cycle against the thread store
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from app.schemas.thread import ThreadCreate, PostCreate, ThreadDelete, PostDelete
from app.services.repositories import ThreadStore, get_thread_store
from app.services.thread_service import ThreadService, ThreadNotFound, PostNotFound
from app.utils.responses import success_response, invalid_request, not_found, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def missing(*fields: tuple) -> list:
    """Names of required fields that are absent or blank"""
    return [name for name, value in fields if value is None or (isinstance(value, str) and not value.strip())]


@router.get("/getThreads")
async def get_threads(store: ThreadStore = Depends(get_thread_store)):
    """List every thread with its posts"""
    try:
        threads = ThreadService.get_threads(store)
    except Exception as e:
        logger.error(f"getThreads failed: {e}")
        return server_error(e)

    return success_response(message="Threads Retrieved", threads=threads)


@router.post("/saveThread")
async def save_thread(
    payload: Optional[ThreadCreate] = None,
    store: ThreadStore = Depends(get_thread_store)
):
    """Create a thread document with an empty post list"""
    payload = payload or ThreadCreate()
    logger.debug(f"saveThread body: {payload.model_dump()}")

    if missing(("id", payload.id), ("title", payload.title), ("timestamp", payload.timestamp)):
        logger.error(f"Invalid saveThread body: {payload.model_dump()}")
        return invalid_request(["id", "title", "timestamp"])

    try:
        ThreadService.save_thread(store, payload.id, payload.title, payload.timestamp)
    except Exception as e:
        logger.error(f"saveThread failed: {e}")
        return server_error(e)

    return success_response(
        message="Thread created successfully",
        status_code=201,
        threadId=payload.id
    )


@router.post("/savePost")
async def save_post(
    payload: Optional[PostCreate] = None,
    store: ThreadStore = Depends(get_thread_store)
):
    """Append a post to a thread"""
    payload = payload or PostCreate()
    logger.debug(f"savePost body: {payload.model_dump(by_alias=True)}")

    if missing(
        ("id", payload.id),
        ("threadId", payload.thread_id),
        ("content", payload.content),
        ("timestamp", payload.timestamp),
    ):
        logger.error(f"Invalid savePost body: {payload.model_dump(by_alias=True)}")
        return invalid_request(["id", "threadId", "content", "timestamp"])

    try:
        post = ThreadService.save_post(
            store,
            thread_id=payload.thread_id,
            post_id=payload.id,
            content=payload.content,
            timestamp=payload.timestamp,
            name=payload.name
        )
    except ThreadNotFound:
        logger.error(f"savePost: thread not found: {payload.thread_id}")
        return not_found("Thread", threadId=payload.thread_id)
    except Exception as e:
        logger.error(f"savePost failed: {e}")
        return server_error(e)

    return success_response(message="Post Created", status_code=201, post=post)


@router.delete("/deleteThread")
async def delete_thread(
    payload: Optional[ThreadDelete] = None,
    store: ThreadStore = Depends(get_thread_store)
):
    """Delete a thread document together with its posts"""
    payload = payload or ThreadDelete()
    logger.debug(f"deleteThread body: {payload.model_dump(by_alias=True)}")

    if missing(("threadId", payload.thread_id)):
        logger.error(f"Invalid deleteThread body: {payload.model_dump(by_alias=True)}")
        return invalid_request(["threadId"])

    try:
        thread = ThreadService.delete_thread(store, payload.thread_id)
    except ThreadNotFound:
        logger.error(f"deleteThread: thread not found: {payload.thread_id}")
        return not_found("Thread", threadId=payload.thread_id)
    except Exception as e:
        logger.error(f"deleteThread failed: {e}")
        return server_error(e)

    logger.debug(f"Thread deleted: {payload.thread_id} {thread}")
    return success_response(message="Thread Deleted", deletedThread=thread)


@router.delete("/deletePost")
async def delete_post(
    payload: Optional[PostDelete] = None,
    store: ThreadStore = Depends(get_thread_store)
):
    """Remove a single post from its thread"""
    payload = payload or PostDelete()
    logger.debug(f"deletePost body: {payload.model_dump(by_alias=True)}")

    if missing(("threadId", payload.thread_id), ("postId", payload.post_id)):
        logger.error(f"Invalid deletePost body: {payload.model_dump(by_alias=True)}")
        return invalid_request(["threadId", "postId"])

    try:
        post = ThreadService.delete_post(store, payload.thread_id, payload.post_id)
    except ThreadNotFound:
        logger.error(f"deletePost: thread not found: {payload.thread_id}")
        return not_found("Thread", threadId=payload.thread_id)
    except PostNotFound:
        logger.error(f"deletePost: post {payload.post_id} not found in {payload.thread_id}")
        return not_found("Post", threadId=payload.thread_id, postId=payload.post_id)
    except Exception as e:
        logger.error(f"deletePost failed: {e}")
        return server_error(e)

    return success_response(message="Post Deleted", deletedPost=post)
