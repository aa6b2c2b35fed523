"""
Thread and post Pydantic schemas
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class Post(BaseModel):
    """A single message embedded in a thread document"""
    id: str
    name: str
    content: str
    timestamp: str

class Thread(BaseModel):
    """Thread document as persisted in the thread store"""
    id: str
    title: str
    timestamp: str
    posts: List[Post] = Field(default_factory=list)

# Request bodies only carry presence checks, so every field is optional here
# and the route reports what is missing.

class ThreadCreate(BaseModel):
    """Body of /api/saveThread"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    title: Optional[str] = None
    timestamp: Optional[str] = None

class PostCreate(BaseModel):
    """Body of /api/savePost"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    thread_id: Optional[str] = Field(default=None, alias="threadId")
    name: Optional[str] = None
    content: Optional[str] = None
    timestamp: Optional[str] = None

class ThreadDelete(BaseModel):
    """Body of /api/deleteThread"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    thread_id: Optional[str] = Field(default=None, alias="threadId")

class PostDelete(BaseModel):
    """Body of /api/deletePost"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    thread_id: Optional[str] = Field(default=None, alias="threadId")
    post_id: Optional[str] = Field(default=None, alias="postId")
