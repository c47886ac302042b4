# roadmap_render/storage.py
# In-memory roadmap store.
# Ids are monotonically increasing ints starting at 1, assigned in-process
# (nothing survives a restart).

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from .io_json import document_to_dict
from .types import RoadmapDocument


@dataclass(frozen=True)
class RoadmapRecord:
    id: int
    name: str
    data: RoadmapDocument
    created_at: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "data": document_to_dict(self.data),
            "createdAt": self.created_at,
        }


class MemStorage:
    def __init__(self) -> None:
        self._records: Dict[int, RoadmapRecord] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, name: str, document: RoadmapDocument) -> RoadmapRecord:
        with self._lock:
            record = RoadmapRecord(
                id=self._next_id,
                name=name,
                data=document,
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            self._records[record.id] = record
            self._next_id += 1
        return record

    def get(self, roadmap_id: int) -> Optional[RoadmapRecord]:
        with self._lock:
            return self._records.get(roadmap_id)

    def list(self) -> List[RoadmapRecord]:
        with self._lock:
            return [self._records[k] for k in sorted(self._records)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
