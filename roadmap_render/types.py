# roadmap_render/types.py
# Core data structures for roadmap rendering.
# Keep this file dependency-light so it can be imported everywhere.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union


# ----------------------------
# Inputs (validated document)
# ----------------------------

@dataclass(frozen=True)
class RoadmapBox:
    """A single task / milestone: a title plus a goal description."""
    title: str
    goal: str


@dataclass(frozen=True)
class RoadmapSegment:
    """A labeled phase spanning `weeks` and holding one or more boxes."""
    name: str
    weeks: float
    boxes: Tuple[RoadmapBox, ...]


@dataclass(frozen=True)
class RoadmapDocument:
    """Validated roadmap. Replaced wholesale on re-upload, never mutated."""
    segments: Tuple[RoadmapSegment, ...]

    def all_boxes(self) -> List[RoadmapBox]:
        """Flattened box list in document order (the unit of layout)."""
        out: List[RoadmapBox] = []
        for seg in self.segments:
            out.extend(seg.boxes)
        return out

    def box_count(self) -> int:
        return sum(len(seg.boxes) for seg in self.segments)

    def total_weeks(self) -> float:
        return sum(seg.weeks for seg in self.segments)


# ----------------------------
# Layout output
# ----------------------------

@dataclass(frozen=True)
class Position:
    """Top-left canvas coordinate of a box."""
    x: float
    y: float


# ----------------------------
# Draw primitives
# ----------------------------
# Canvas coordinates follow the SVG convention: origin top-left, y grows downward.

Point = Tuple[float, float]


@dataclass(frozen=True)
class TextRun:
    """A styled span of a text line; dx is the offset from the line's x."""
    text: str
    weight: str = "normal"   # "normal" | "semibold" | "bold"
    dx: float = 0.0

    @property
    def bold(self) -> bool:
        return self.weight == "bold"


@dataclass(frozen=True)
class RectPrimitive:
    x: float
    y: float
    w: float
    h: float
    fill: str
    radius: float = 0.0
    opacity: float = 1.0
    role: str = "box"
    index: Optional[int] = None

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px <= self.x + self.w and self.y <= py <= self.y + self.h


@dataclass(frozen=True)
class TextPrimitive:
    """
    One rendered line of text.
      anchor:   "start" (left-aligned at x) or "middle" (centered on x)
      baseline: "middle" (y is the vertical center) or "alphabetic" (y is the baseline)
    """
    x: float
    y: float
    runs: Tuple[TextRun, ...]
    font_size: float
    color: str
    anchor: str = "start"
    baseline: str = "alphabetic"
    role: str = "text"
    index: Optional[int] = None

    @property
    def text(self) -> str:
        return "".join(r.text for r in self.runs)


@dataclass(frozen=True)
class PathPrimitive:
    """Open polyline; dash is (on, off) or None for solid."""
    points: Tuple[Point, ...]
    stroke: str
    line_width: float
    dash: Optional[Tuple[float, float]] = None
    role: str = "path"
    index: Optional[int] = None


@dataclass(frozen=True)
class PolygonPrimitive:
    points: Tuple[Point, ...]
    fill: str
    role: str = "polygon"
    index: Optional[int] = None


Primitive = Union[RectPrimitive, TextPrimitive, PathPrimitive, PolygonPrimitive]


@dataclass
class Scene:
    """Ordered draw primitives for one document. Later entries are drawn on top."""
    width: float
    height: float
    primitives: List[Primitive] = field(default_factory=list)
    timeline_y: Optional[float] = None

    def __iter__(self) -> Iterator[Primitive]:
        return iter(self.primitives)

    def __len__(self) -> int:
        return len(self.primitives)

    def by_role(self, role: str) -> List[Primitive]:
        return [p for p in self.primitives if p.role == role]

    def clear(self) -> None:
        self.primitives.clear()
        self.timeline_y = None
