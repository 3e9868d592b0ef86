"""
In-memory document store with the same contract as FirebaseService.

Test fake for the store collaborator. Nothing in the app constructs it;
tests inject it through FastAPI dependency overrides.
"""
from __future__ import annotations

import copy
import threading
from typing import Any, Dict, Iterable, List, Optional


class InMemoryDocumentStore:
    """Dict-of-dicts store: collection -> document id -> document."""

    def __init__(self, data: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None):
        self._lock = threading.Lock()
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = copy.deepcopy(data or {})

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            doc = self._collections.get(collection, {}).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def list(self, collection: str) -> List[Dict[str, Any]]:
        with self._lock:
            docs = self._collections.get(collection, {})
            return [{"id": doc_id, **copy.deepcopy(doc)} for doc_id, doc in docs.items()]

    def merge(
        self,
        collection: str,
        doc_id: str,
        data: Dict[str, Any],
        union_fields: Iterable[str] = (),
    ) -> None:
        """
        Merge fields into a document, creating it if needed.

        Fields named in union_fields are appended without duplicates
        instead of being overwritten.
        """
        union_fields = set(union_fields)
        with self._lock:
            doc = self._collections.setdefault(collection, {}).setdefault(doc_id, {})
            for key, value in data.items():
                if key in union_fields:
                    current = list(doc.get(key) or [])
                    for item in value:
                        if item not in current:
                            current.append(item)
                    doc[key] = current
                else:
                    doc[key] = copy.deepcopy(value)
