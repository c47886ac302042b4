# roadmap_render/io_json.py
# Load a roadmap JSON file (or text) into a validated RoadmapDocument.
#
# Expected JSON shape:
# {
#   "segments": [
#     {"name": "Phase 1: Discovery & Design", "weeks": 1,
#      "boxes": [{"title": "Design thinking & Workshop", "goal": "Goal: Conduct a workshop..."}]}
#   ]
# }

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .types import RoadmapDocument
from .validate import parse_document


class RoadmapParseError(ValueError):
    """Input could not be decoded as JSON; never reaches validation or layout."""


def parse_roadmap_text(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise RoadmapParseError(f"Invalid JSON file. Please check the format ({e.msg} at line {e.lineno}).") from e


def load_roadmap_text(text: str) -> RoadmapDocument:
    return parse_document(parse_roadmap_text(text))


def load_roadmap_json(path: str | Path) -> RoadmapDocument:
    """
    Read + decode + validate.
    Raises RoadmapParseError (bad JSON) or RoadmapValidationError (schema issues).
    """
    path = Path(path)
    if path.suffix.lower() != ".json":
        raise RoadmapParseError(f"Please upload a JSON file (got '{path.name}').")
    try:
        # utf-8-sig: editors on Windows often save JSON with a BOM
        text = path.read_bytes().decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise RoadmapParseError(f"Invalid JSON file. The file is not UTF-8 encoded (byte {e.start}).") from e
    return load_roadmap_text(text)


def document_to_dict(doc: RoadmapDocument) -> dict:
    return {
        "segments": [
            {
                "name": seg.name,
                "weeks": seg.weeks,
                "boxes": [{"title": b.title, "goal": b.goal} for b in seg.boxes],
            }
            for seg in doc.segments
        ]
    }


def save_roadmap_json(doc: RoadmapDocument, path: str | Path, *, indent: int = 2) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(document_to_dict(doc), f, ensure_ascii=False, indent=indent)
