# roadmap_render/validate.py
# Schema validation for raw roadmap data (already JSON-decoded):
# - segments: list, at least 1
# - segment: name (non-empty str), weeks (number >= 1), boxes (list, at least 1)
# - box: title, goal (non-empty str)
#
# Issues carry a dot-joined path (e.g. "segments.0.boxes") and a message.
# Nothing is coerced: "2" is not a number and True is not a number either.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .types import RoadmapBox, RoadmapDocument, RoadmapSegment


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"path": self.path, "message": self.message}


class RoadmapValidationError(ValueError):
    def __init__(self, issues: List[ValidationIssue]):
        self.issues = list(issues)
        super().__init__(format_issues(self.issues))


def format_issues(issues: List[ValidationIssue]) -> str:
    return "\n".join(f"{i.path or '<root>'}: {i.message}" for i in issues)


def _join(*parts: Any) -> str:
    return ".".join(str(p) for p in parts if p != "")


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def _check_string(obj: Dict[str, Any], key: str, path: str, issues: List[ValidationIssue]) -> None:
    if key not in obj:
        issues.append(ValidationIssue(_join(path, key), "Required"))
    elif not isinstance(obj[key], str):
        issues.append(ValidationIssue(_join(path, key), f"Expected string, received {type(obj[key]).__name__}"))
    elif len(obj[key]) < 1:
        issues.append(ValidationIssue(_join(path, key), "String must contain at least 1 character(s)"))


def _check_list(obj: Dict[str, Any], key: str, path: str, issues: List[ValidationIssue]) -> Optional[list]:
    if key not in obj:
        issues.append(ValidationIssue(_join(path, key), "Required"))
        return None
    value = obj[key]
    if not isinstance(value, list):
        issues.append(ValidationIssue(_join(path, key), f"Expected array, received {type(value).__name__}"))
        return None
    if len(value) < 1:
        issues.append(ValidationIssue(_join(path, key), "Array must contain at least 1 element(s)"))
    return value


def _validate_box(raw: Any, path: str, issues: List[ValidationIssue]) -> None:
    if not isinstance(raw, dict):
        issues.append(ValidationIssue(path, f"Expected object, received {type(raw).__name__}"))
        return
    _check_string(raw, "title", path, issues)
    _check_string(raw, "goal", path, issues)


def _validate_segment(raw: Any, path: str, issues: List[ValidationIssue]) -> None:
    if not isinstance(raw, dict):
        issues.append(ValidationIssue(path, f"Expected object, received {type(raw).__name__}"))
        return

    _check_string(raw, "name", path, issues)

    if "weeks" not in raw:
        issues.append(ValidationIssue(_join(path, "weeks"), "Required"))
    elif not _is_number(raw["weeks"]):
        issues.append(ValidationIssue(_join(path, "weeks"), f"Expected number, received {type(raw['weeks']).__name__}"))
    elif raw["weeks"] != raw["weeks"] or raw["weeks"] in (float("inf"), float("-inf")):
        issues.append(ValidationIssue(_join(path, "weeks"), "Number must be finite"))
    elif raw["weeks"] < 1:
        issues.append(ValidationIssue(_join(path, "weeks"), "Number must be greater than or equal to 1"))

    boxes = _check_list(raw, "boxes", path, issues)
    for j, box in enumerate(boxes or []):
        _validate_box(box, _join(path, "boxes", j), issues)


def validate_document(raw: Any) -> List[ValidationIssue]:
    """Return all schema issues (empty list if the data is a valid roadmap)."""
    issues: List[ValidationIssue] = []
    if not isinstance(raw, dict):
        issues.append(ValidationIssue("", f"Expected object, received {type(raw).__name__}"))
        return issues

    segments = _check_list(raw, "segments", "", issues)
    for i, seg in enumerate(segments or []):
        _validate_segment(seg, _join("segments", i), issues)
    return issues


def raise_on_errors(issues: List[ValidationIssue]) -> None:
    if issues:
        raise RoadmapValidationError(issues)


def parse_document(raw: Any) -> RoadmapDocument:
    """
    Validate raw data and build an immutable RoadmapDocument.
    Unknown keys are dropped. Raises RoadmapValidationError.
    """
    raise_on_errors(validate_document(raw))
    return RoadmapDocument(
        segments=tuple(
            RoadmapSegment(
                name=seg["name"],
                weeks=seg["weeks"],
                boxes=tuple(RoadmapBox(title=b["title"], goal=b["goal"]) for b in seg["boxes"]),
            )
            for seg in raw["segments"]
        )
    )
