"""
Board view state and the HTTP client it uses to reach the thread API.

`BoardSession` keeps a local copy of the thread list in step with the API.
Cache changes only happen through the reconcile_* functions, which take the
server's answer and the current cache and return the new cache.
"""

import copy
import logging
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import httpx

from app.core.config import settings
from app.services.thread_service import default_name

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


class ApiError(Exception):
    """Non-2xx answer from the thread API"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ForumApiClient:
    """Async HTTP client for the thread API endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.base_url = base_url or settings.BASE_URL
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        response = await self._client.request(method, url, **kwargs)
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        if response.is_error:
            message = payload.get("error") or payload.get("details") or payload.get("message") or response.reason_phrase
            raise ApiError(response.status_code, str(message))
        return payload

    async def get_threads(self) -> List[Dict[str, Any]]:
        payload = await self._request("GET", "/api/getThreads")
        return payload.get("threads", [])

    async def save_thread(self, thread_id: str, title: str, timestamp: str) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/api/saveThread",
            json={"id": thread_id, "title": title, "timestamp": timestamp},
        )

    async def save_post(
        self,
        thread_id: str,
        post_id: str,
        name: str,
        content: str,
        timestamp: str
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/api/savePost",
            json={
                "id": post_id,
                "threadId": thread_id,
                "name": name,
                "content": content,
                "timestamp": timestamp,
            },
        )

    async def delete_thread(self, thread_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", "/api/deleteThread", json={"threadId": thread_id})

    async def delete_post(self, thread_id: str, post_id: str) -> Dict[str, Any]:
        return await self._request(
            "DELETE",
            "/api/deletePost",
            json={"threadId": thread_id, "postId": post_id},
        )


# -------- Cache reconciliation --------

def reconcile_threads(response: Dict[str, Any], cache: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """A full listing replaces the cache"""
    return copy.deepcopy(response.get("threads", []))


def reconcile_created_thread(thread: Dict[str, Any], cache: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [*cache, {**thread, "posts": list(thread.get("posts", []))}]


def reconcile_created_post(
    response: Dict[str, Any],
    thread_id: str,
    cache: List[Dict[str, Any]]
) -> List[Dict[str, Any]]:
    post = response["post"]
    return [
        {**t, "posts": [*t.get("posts", []), post]} if t["id"] == thread_id else t
        for t in cache
    ]


def reconcile_deleted_thread(thread_id: str, cache: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [t for t in cache if t["id"] != thread_id]


def reconcile_deleted_post(thread_id: str, post_id: str, cache: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {**t, "posts": [p for p in t.get("posts", []) if p["id"] != post_id]} if t["id"] == thread_id else t
        for t in cache
    ]


# -------- Result reporting --------

@dataclass
class Notice:
    level: str
    message: str


class ResultReporter:
    """Single place where every board operation reports its outcome"""

    def __init__(self):
        self.notices: List[Notice] = []

    def success(self, message: str):
        logger.info(message)
        self.notices.append(Notice("success", message))

    def warning(self, message: str):
        logger.warning(message)
        self.notices.append(Notice("warning", message))

    def failure(self, action: str, error: Exception):
        message = f"Failed to {action}: {error.message if isinstance(error, ApiError) else error}"
        logger.error(message)
        self.notices.append(Notice("error", message))


# -------- Board state --------

@dataclass
class PostForm:
    name: str = ""
    content: str = ""


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class BoardSession:
    """State of one board view: cached threads, drafts and the in-flight flag."""

    client: ForumApiClient
    reporter: ResultReporter = field(default_factory=ResultReporter)
    id_factory: Callable[[], str] = new_id
    clock: Callable[[], str] = utc_timestamp
    threads: List[Dict[str, Any]] = field(default_factory=list)
    new_thread: str = ""
    post_forms: Dict[str, PostForm] = field(default_factory=dict)
    loading: bool = False

    def post_form(self, thread_id: str) -> PostForm:
        return self.post_forms.setdefault(thread_id, PostForm())

    def find_thread(self, thread_id: Optional[str]) -> Optional[Dict[str, Any]]:
        return next((t for t in self.threads if t["id"] == thread_id), None)

    @asynccontextmanager
    async def _in_flight(self):
        self.loading = True
        try:
            yield
        finally:
            self.loading = False

    def _busy(self) -> bool:
        if self.loading:
            self.reporter.warning("Another request is still in progress")
            return True
        return False

    async def list_threads(self) -> bool:
        """Load the thread list; on failure the cache is left as it was"""
        if self._busy():
            return False
        async with self._in_flight():
            try:
                threads = await self.client.get_threads()
            except (ApiError, httpx.HTTPError) as e:
                self.reporter.failure("load threads", e)
                return False
        self.threads = reconcile_threads({"threads": threads}, self.threads)
        return True

    async def create_thread(self, title: Optional[str] = None) -> bool:
        if title is not None:
            self.new_thread = title
        if not self.new_thread.strip():
            return False
        if self._busy():
            return False

        thread = {
            "id": self.id_factory(),
            "title": self.new_thread,
            "timestamp": self.clock(),
            "posts": [],
        }
        async with self._in_flight():
            try:
                await self.client.save_thread(thread["id"], thread["title"], thread["timestamp"])
            except (ApiError, httpx.HTTPError) as e:
                self.reporter.failure("create thread", e)
                return False

        self.threads = reconcile_created_thread(thread, self.threads)
        self.new_thread = ""
        self.reporter.success(f"Thread \"{thread['title']}\" created")
        return True

    async def create_post(
        self,
        thread_id: Optional[str],
        name: Optional[str] = None,
        content: Optional[str] = None
    ) -> bool:
        if not thread_id or self.find_thread(thread_id) is None:
            return False

        form = self.post_form(thread_id)
        if name is not None:
            form.name = name
        if content is not None:
            form.content = content
        if not form.content.strip():
            return False
        if self._busy():
            return False

        author = default_name(form.name)
        async with self._in_flight():
            try:
                response = await self.client.save_post(
                    thread_id,
                    self.id_factory(),
                    author,
                    form.content,
                    self.clock(),
                )
            except (ApiError, httpx.HTTPError) as e:
                self.reporter.failure("create post", e)
                return False

        self.threads = reconcile_created_post(response, thread_id, self.threads)
        self.post_forms[thread_id] = PostForm()
        self.reporter.success("Post created")
        return True

    async def delete_thread(self, thread_id: str, confirm: Confirm) -> bool:
        thread = self.find_thread(thread_id)
        title = thread["title"] if thread else thread_id
        if not confirm(f"Delete thread \"{title}\"?"):
            return False
        if self._busy():
            return False

        async with self._in_flight():
            try:
                await self.client.delete_thread(thread_id)
            except (ApiError, httpx.HTTPError) as e:
                self.reporter.failure("delete thread", e)
                return False

        self.threads = reconcile_deleted_thread(thread_id, self.threads)
        self.post_forms.pop(thread_id, None)
        self.reporter.success("Thread deleted")
        return True

    async def delete_post(self, thread_id: str, post_id: str, confirm: Confirm) -> bool:
        if not confirm("Delete this post?"):
            return False
        if self._busy():
            return False

        async with self._in_flight():
            try:
                await self.client.delete_post(thread_id, post_id)
            except (ApiError, httpx.HTTPError) as e:
                self.reporter.failure("delete post", e)
                return False

        self.threads = reconcile_deleted_post(thread_id, post_id, self.threads)
        self.reporter.success("Post deleted")
        return True
