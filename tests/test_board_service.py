"""
Tests for the board view state and its cache reconciliation
"""

import httpx
import pytest
import pytest_asyncio

from app.core.config import settings
from app.services.board_service import (
    ApiError,
    BoardSession,
    ForumApiClient,
    reconcile_created_post,
    reconcile_created_thread,
    reconcile_deleted_post,
    reconcile_deleted_thread,
    reconcile_threads,
)
from app.services.repositories import InMemoryThreadStore, get_thread_store
from main import app

class RecordingClient:
    """Stand-in API client that records calls and can be told to fail"""

    def __init__(self, threads=None, error=None):
        self.threads = threads or []
        self.error = error
        self.calls = []

    async def _call(self, name, *args):
        self.calls.append((name, args))
        if self.error:
            raise self.error

    async def get_threads(self):
        await self._call("get_threads")
        return self.threads

    async def save_thread(self, thread_id, title, timestamp):
        await self._call("save_thread", thread_id, title, timestamp)
        return {"message": "Thread created successfully", "threadId": thread_id}

    async def save_post(self, thread_id, post_id, name, content, timestamp):
        await self._call("save_post", thread_id, post_id, name, content, timestamp)
        return {"message": "Post Created", "post": {
            "id": post_id, "name": name, "content": content, "timestamp": timestamp,
        }}

    async def delete_thread(self, thread_id):
        await self._call("delete_thread", thread_id)
        return {"message": "Thread Deleted"}

    async def delete_post(self, thread_id, post_id):
        await self._call("delete_post", thread_id, post_id)
        return {"message": "Post Deleted"}

def counter_ids():
    ids = iter(f"id-{n}" for n in range(1, 100))
    return lambda: next(ids)

def yes(prompt):
    return True

def no(prompt):
    return False

@pytest.fixture
def store():
    return InMemoryThreadStore()

@pytest_asyncio.fixture
async def api_client(store):
    """ForumApiClient wired to the app through an in-process transport"""
    app.dependency_overrides[get_thread_store] = lambda: store
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http:
        yield ForumApiClient(client=http)
    app.dependency_overrides.clear()

@pytest.fixture
def session(api_client):
    return BoardSession(client=api_client, id_factory=counter_ids(), clock=lambda: "2024-01-01T00:00:00Z")

# -------- against the API --------

@pytest.mark.asyncio
async def test_create_thread_then_list(session, store):
    """Test a created thread is cached and persisted"""
    assert await session.create_thread("Seat A1-1")

    assert [t["title"] for t in session.threads] == ["Seat A1-1"]
    assert session.new_thread == ""
    assert store.get_thread("id-1")["posts"] == []

    fresh = BoardSession(client=session.client)
    assert await fresh.list_threads()
    assert fresh.threads == session.threads

@pytest.mark.asyncio
async def test_create_post_blank_name_uses_placeholder(session, store):
    await session.create_thread("Test")
    thread_id = session.threads[0]["id"]

    assert await session.create_post(thread_id, name="  ", content="hello")

    post = session.threads[0]["posts"][0]
    assert post["name"] == settings.DEFAULT_POST_NAME
    assert post["content"] == "hello"
    assert store.get_thread(thread_id)["posts"][0]["name"] == settings.DEFAULT_POST_NAME
    assert session.post_form(thread_id).content == ""

@pytest.mark.asyncio
async def test_delete_post_twice_reports_failure(session, store):
    """Test the second delete is reported, not raised, and leaves the cache alone"""
    await session.create_thread("Test")
    thread_id = session.threads[0]["id"]
    await session.create_post(thread_id, content="hello")
    post_id = session.threads[0]["posts"][0]["id"]

    assert await session.delete_post(thread_id, post_id, yes)
    assert session.threads[0]["posts"] == []

    assert not await session.delete_post(thread_id, post_id, yes)
    assert session.reporter.notices[-1].level == "error"
    assert "Post Not Found" in session.reporter.notices[-1].message

@pytest.mark.asyncio
async def test_delete_thread_removes_it(session, store):
    await session.create_thread("Test")
    thread_id = session.threads[0]["id"]

    assert await session.delete_thread(thread_id, yes)

    assert session.threads == []
    assert store.documents == {}

# -------- validation and failure paths --------

@pytest.mark.asyncio
async def test_blank_thread_title_is_noop():
    """Test whitespace-only titles issue no request and leave the cache"""
    client = RecordingClient()
    session = BoardSession(client=client)

    assert not await session.create_thread("   ")

    assert client.calls == []
    assert session.threads == []

@pytest.mark.asyncio
async def test_empty_post_content_is_noop():
    client = RecordingClient(threads=[{"id": "t1", "title": "Test", "timestamp": "x", "posts": []}])
    session = BoardSession(client=client)
    await session.list_threads()

    assert not await session.create_post("t1", content="")
    assert not await session.create_post("t1", content="  \n")
    assert not await session.create_post(None, content="hello")
    assert not await session.create_post("unknown", content="hello")

    assert [name for name, _ in client.calls] == ["get_threads"]

@pytest.mark.asyncio
async def test_list_failure_leaves_cache_empty():
    client = RecordingClient(error=httpx.ConnectError("connection refused"))
    session = BoardSession(client=client)

    assert not await session.list_threads()

    assert session.threads == []
    assert session.reporter.notices[0].level == "error"
    assert not session.loading

@pytest.mark.asyncio
async def test_create_thread_failure_keeps_draft():
    """Test a failed write does not add the thread and keeps the draft"""
    client = RecordingClient(error=ApiError(500, "store unreachable"))
    session = BoardSession(client=client)

    assert not await session.create_thread("Test")

    assert session.threads == []
    assert session.new_thread == "Test"
    assert session.reporter.notices[-1].message == "Failed to create thread: store unreachable"

@pytest.mark.asyncio
async def test_create_post_failure_is_reported_like_other_failures():
    """Test post failures go through the reporter instead of raising"""
    client = RecordingClient(threads=[{"id": "t1", "title": "Test", "timestamp": "x", "posts": []}])
    session = BoardSession(client=client)
    await session.list_threads()
    client.error = ApiError(404, "Thread Not Found")

    assert not await session.create_post("t1", name="Alice", content="hello")

    assert session.threads[0]["posts"] == []
    assert session.post_form("t1").content == "hello"
    assert session.reporter.notices[-1].level == "error"

@pytest.mark.asyncio
async def test_delete_needs_confirmation():
    client = RecordingClient(threads=[{
        "id": "t1", "title": "Test", "timestamp": "x",
        "posts": [{"id": "p1", "name": "a", "content": "b", "timestamp": "x"}],
    }])
    session = BoardSession(client=client)
    await session.list_threads()

    assert not await session.delete_post("t1", "p1", no)
    assert not await session.delete_thread("t1", no)

    assert [name for name, _ in client.calls] == ["get_threads"]
    assert len(session.threads[0]["posts"]) == 1

@pytest.mark.asyncio
async def test_operation_refused_while_loading():
    """Test a second operation on a busy session sends nothing"""
    client = RecordingClient()
    session = BoardSession(client=client)
    session.loading = True

    assert not await session.create_thread("Test")

    assert client.calls == []
    assert session.new_thread == "Test"
    assert session.reporter.notices[-1].level == "warning"

# -------- reconciliation --------

def test_reconcile_functions_do_not_mutate_cache():
    cache = [
        {"id": "t1", "title": "One", "timestamp": "1", "posts": [{"id": "p1"}, {"id": "p2"}]},
        {"id": "t2", "title": "Two", "timestamp": "2", "posts": []},
    ]
    before = [dict(t, posts=list(t["posts"])) for t in cache]

    assert reconcile_deleted_post("t1", "p1", cache)[0]["posts"] == [{"id": "p2"}]
    assert reconcile_created_post({"post": {"id": "p3"}}, "t2", cache)[1]["posts"] == [{"id": "p3"}]
    assert [t["id"] for t in reconcile_deleted_thread("t1", cache)] == ["t2"]
    assert reconcile_created_thread({"id": "t3", "title": "Three", "timestamp": "3"}, cache)[-1]["posts"] == []
    assert reconcile_threads({"threads": []}, cache) == []

    assert cache == before
