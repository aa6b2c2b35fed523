"""
Thread and post operations against the thread store
"""

import logging
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.schemas.thread import Post, Thread
from app.services.repositories import ThreadStore

logger = logging.getLogger(__name__)


class ThreadNotFound(LookupError):
    def __init__(self, thread_id: str):
        super().__init__(f"Thread {thread_id} not found")
        self.thread_id = thread_id


class PostNotFound(LookupError):
    def __init__(self, thread_id: str, post_id: str):
        super().__init__(f"Post {post_id} not found in thread {thread_id}")
        self.thread_id = thread_id
        self.post_id = post_id


def default_name(name: Optional[str]) -> str:
    """Blank author names are stored as the configured placeholder"""
    if name is None or not name.strip():
        return settings.DEFAULT_POST_NAME
    return name


class ThreadService:
    """Service for thread document read-modify-write cycles.

    None of these cycles is transactional: two writers that read the same
    document before either writes will overwrite each other (last write wins).
    """

    @staticmethod
    def get_threads(store: ThreadStore) -> List[Dict[str, Any]]:
        """Return every thread document, oldest first"""
        threads = store.list_threads()
        return sorted(threads, key=lambda t: (str(t.get("timestamp") or ""), str(t.get("id") or "")))

    @staticmethod
    def save_thread(store: ThreadStore, thread_id: str, title: str, timestamp: str) -> Dict[str, Any]:
        """Write a new thread document with an empty post list"""
        document = Thread(id=thread_id, title=title, timestamp=timestamp).model_dump()
        store.put_thread(document)
        logger.info(f"Thread saved: {thread_id}")
        return document

    @staticmethod
    def save_post(
        store: ThreadStore,
        thread_id: str,
        post_id: str,
        content: str,
        timestamp: str,
        name: Optional[str] = None
    ) -> Dict[str, Any]:
        """Append a post to its thread and rewrite the whole document"""
        thread = store.get_thread(thread_id)
        if thread is None:
            raise ThreadNotFound(thread_id)

        post = Post(id=post_id, name=default_name(name), content=content, timestamp=timestamp).model_dump()
        thread.setdefault("posts", []).append(post)
        store.put_thread(thread)
        logger.info(f"Post {post_id} saved to thread {thread_id}")
        return post

    @staticmethod
    def delete_post(store: ThreadStore, thread_id: str, post_id: str) -> Dict[str, Any]:
        """Remove one post from its thread and rewrite the whole document"""
        thread = store.get_thread(thread_id)
        if thread is None:
            raise ThreadNotFound(thread_id)

        posts = thread.get("posts", [])
        index = next((i for i, p in enumerate(posts) if p.get("id") == post_id), None)
        if index is None:
            raise PostNotFound(thread_id, post_id)

        removed = posts.pop(index)
        store.put_thread(thread)
        logger.info(f"Post {post_id} deleted from thread {thread_id}")
        return removed

    @staticmethod
    def delete_thread(store: ThreadStore, thread_id: str) -> Dict[str, Any]:
        """Delete a thread document and, with it, all of its posts"""
        thread = store.get_thread(thread_id)
        if thread is None:
            raise ThreadNotFound(thread_id)

        store.delete_thread(thread_id)
        logger.info(f"Thread deleted: {thread_id} ({len(thread.get('posts', []))} posts)")
        return thread
