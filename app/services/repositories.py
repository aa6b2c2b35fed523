"""
Repository layer abstracting thread document storage (SQLAlchemy vs Firebase Firestore).

Every backend stores one whole document per thread, keyed by the thread id,
with the thread's posts embedded. Writes overwrite the whole document.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.models import ThreadDocument
from app.services.firebase_client import get_firestore_client

logger = logging.getLogger(__name__)


def use_firestore() -> bool:
    return settings.USE_FIREBASE is True


class ThreadStore:
    """Whole-document access to thread documents"""

    def list_threads(self) -> List[Dict[str, Any]]:
        raise NotImplementedError

    def get_thread(self, thread_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    def put_thread(self, document: Dict[str, Any]) -> None:
        raise NotImplementedError

    def delete_thread(self, thread_id: str) -> bool:
        raise NotImplementedError


# -------- SQL thread store --------

class SqlThreadStore(ThreadStore):
    def __init__(self, db: Session):
        self.db = db

    def list_threads(self) -> List[Dict[str, Any]]:
        rows = self.db.query(ThreadDocument).all()
        return [copy.deepcopy(row.body) for row in rows]

    def get_thread(self, thread_id: str) -> Optional[Dict[str, Any]]:
        row = self.db.get(ThreadDocument, thread_id)
        return copy.deepcopy(row.body) if row else None

    def put_thread(self, document: Dict[str, Any]) -> None:
        self.db.merge(ThreadDocument(id=document["id"], body=copy.deepcopy(document)))
        self.db.commit()

    def delete_thread(self, thread_id: str) -> bool:
        row = self.db.get(ThreadDocument, thread_id)
        if not row:
            return False
        self.db.delete(row)
        self.db.commit()
        return True


# -------- Firestore thread store --------

class FirestoreThreadStore(ThreadStore):
    """Firestore shape: collection "{THREADS_COLLECTION}/{thread_id}" document with the whole thread"""

    def __init__(self, collection: Optional[str] = None):
        self.collection = collection or settings.THREADS_COLLECTION

    def _threads(self):
        fs = get_firestore_client()
        if not fs:
            raise RuntimeError("Firestore is not enabled. Set USE_FIREBASE to use the Firestore thread store")
        return fs.collection(self.collection)

    def list_threads(self) -> List[Dict[str, Any]]:
        return [doc.to_dict() for doc in self._threads().get()]

    def get_thread(self, thread_id: str) -> Optional[Dict[str, Any]]:
        doc = self._threads().document(thread_id).get()
        return doc.to_dict() if doc.exists else None

    def put_thread(self, document: Dict[str, Any]) -> None:
        self._threads().document(document["id"]).set(document)

    def delete_thread(self, thread_id: str) -> bool:
        ref = self._threads().document(thread_id)
        if not ref.get().exists:
            return False
        ref.delete()
        return True


# -------- In-memory thread store --------

class InMemoryThreadStore(ThreadStore):
    """Process-local store; nothing survives a restart, so it only backs tests and demos"""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}

    def list_threads(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(doc) for doc in self.documents.values()]

    def get_thread(self, thread_id: str) -> Optional[Dict[str, Any]]:
        doc = self.documents.get(thread_id)
        return copy.deepcopy(doc) if doc is not None else None

    def put_thread(self, document: Dict[str, Any]) -> None:
        self.documents[document["id"]] = copy.deepcopy(document)

    def delete_thread(self, thread_id: str) -> bool:
        return self.documents.pop(thread_id, None) is not None


def get_thread_store(db: Session = Depends(get_db)) -> ThreadStore:
    """Pick the configured thread store for a request"""
    if use_firestore():
        return FirestoreThreadStore()
    return SqlThreadStore(db)
