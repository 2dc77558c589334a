"""Collaborator interfaces for identity and project persistence.

The real deployment delegates both to a managed auth/document service; the
implementations here are an in-memory store for tests and a JSON file store
for local use.
"""

import json
import threading
import uuid
from abc import ABC, abstractmethod
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Optional

from contracts import UserIdentity
from errors import CollaboratorError, ProjectNotFoundError

COLLECTIONS = ("saved", "active")

# Field each collection is listed by, newest first
ORDER_FIELDS = {"saved": "saved_at", "active": "started_at"}


class IdentityProvider(ABC):
    """Reports the signed-in user, if any."""

    @abstractmethod
    def current_user(self) -> Optional[UserIdentity]:
        pass


class StaticIdentityProvider(IdentityProvider):
    """Fixed identity; `None` means signed out."""

    def __init__(self, user: Optional[UserIdentity] = None):
        self.user = user

    def current_user(self) -> Optional[UserIdentity]:
        return self.user

    def sign_in(self, user: UserIdentity) -> None:
        self.user = user

    def sign_out(self) -> None:
        self.user = None


def _check_collection(collection: str) -> None:
    if collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {collection}. Available: {list(COLLECTIONS)}")


def _set_path(document: Dict[str, Any], path: str, value: Any) -> None:
    """Set a dotted field path (e.g. 'progress.current_step')."""
    *parents, leaf = path.split(".")
    target = document
    for key in parents:
        target = target.setdefault(key, {})
    target[leaf] = value


class ProjectStore(ABC):
    """Per-user document collections `saved` and `active`.

    Documents are plain dicts keyed by snake_case field names. Each method is
    a single-document operation.
    """

    @abstractmethod
    def create(self, user_id: str, collection: str, document: Dict[str, Any]) -> str:
        """Insert a document and return its generated id."""
        pass

    @abstractmethod
    def list(self, user_id: str, collection: str) -> List[Dict[str, Any]]:
        """All documents, newest first by the collection's timestamp field."""
        pass

    @abstractmethod
    def get(self, user_id: str, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def update(self, user_id: str, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        """Apply field updates; keys may be dotted nested paths."""
        pass

    @abstractmethod
    def delete(self, user_id: str, collection: str, doc_id: str) -> None:
        pass


class InMemoryProjectStore(ProjectStore):
    """Dict-backed store. Returns copies so callers cannot mutate state."""

    def __init__(self, data: Optional[Dict[str, Dict[str, Dict[str, Dict[str, Any]]]]] = None):
        self._data = data if data is not None else {}
        self._lock = threading.Lock()

    def _collection(self, user_id: str, collection: str) -> Dict[str, Dict[str, Any]]:
        _check_collection(collection)
        return self._data.setdefault(user_id, {}).setdefault(collection, {})

    def _persist(self) -> None:
        """Hook for subclasses; called after every write while holding the lock."""

    def _write(self, docs: Dict[str, Dict[str, Any]], doc_id: str, document: Optional[Dict[str, Any]]) -> None:
        """Replace (or, with None, remove) one document, undone if persisting fails."""
        previous = docs.get(doc_id)
        if document is None:
            docs.pop(doc_id, None)
        else:
            docs[doc_id] = document
        try:
            self._persist()
        except Exception:
            if previous is None:
                docs.pop(doc_id, None)
            else:
                docs[doc_id] = previous
            raise

    def create(self, user_id: str, collection: str, document: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        with self._lock:
            self._write(self._collection(user_id, collection), doc_id, deepcopy(document))
        return doc_id

    def list(self, user_id: str, collection: str) -> List[Dict[str, Any]]:
        with self._lock:
            docs = [
                {**deepcopy(doc), "id": doc_id}
                for doc_id, doc in self._collection(user_id, collection).items()
            ]
        order_field = ORDER_FIELDS[collection]
        return sorted(docs, key=lambda d: d.get(order_field) or "", reverse=True)

    def get(self, user_id: str, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            doc = self._collection(user_id, collection).get(doc_id)
            return {**deepcopy(doc), "id": doc_id} if doc is not None else None

    def update(self, user_id: str, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        with self._lock:
            docs = self._collection(user_id, collection)
            if doc_id not in docs:
                raise ProjectNotFoundError(collection, doc_id)
            updated = deepcopy(docs[doc_id])
            for path, value in fields.items():
                _set_path(updated, path, deepcopy(value))
            self._write(docs, doc_id, updated)

    def delete(self, user_id: str, collection: str, doc_id: str) -> None:
        with self._lock:
            docs = self._collection(user_id, collection)
            if doc_id not in docs:
                raise ProjectNotFoundError(collection, doc_id)
            self._write(docs, doc_id, None)


class JsonFileProjectStore(InMemoryProjectStore):
    """In-memory store mirrored to a JSON file after every write."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(self._load())

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise CollaboratorError(f"Invalid JSON in {self.path}: {e}") from e
        except OSError as e:
            raise CollaboratorError(f"Error reading {self.path}: {e}") from e

    def _persist(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        except OSError as e:
            raise CollaboratorError(f"Error writing {self.path}: {e}") from e
