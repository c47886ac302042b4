# roadmap_render/layout.py
# Staircase layout: canvas extent + per-box coordinates.
#
# Box i (flattened document order) sits at
#   x = padding + i * step_x
#   y = padding + (n - 1 - i) * step_y
# so the first box is bottom-left and the last box is top-right (progress rises to the right).
#
# Pure function of the document and the geometry constants.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import DEFAULTS, Geometry
from .types import Position, RoadmapDocument


@dataclass(frozen=True)
class Layout:
    canvas_width: float
    canvas_height: float
    box_count: int
    positions: Tuple[Position, ...]
    box_width: float
    box_height: float

    def box_rect(self, index: int) -> Tuple[float, float, float, float]:
        p = self.positions[index]
        return p.x, p.y, self.box_width, self.box_height

    def box_center(self, index: int) -> Tuple[float, float]:
        p = self.positions[index]
        return p.x + self.box_width / 2, p.y + self.box_height / 2

    def box_at(self, x: float, y: float) -> Optional[int]:
        """Hit test in canvas coordinates. Returns the box index or None."""
        for i, p in enumerate(self.positions):
            if p.x <= x <= p.x + self.box_width and p.y <= y <= p.y + self.box_height:
                return i
        return None


def compute_layout(doc: RoadmapDocument, geometry: Optional[Geometry] = None) -> Layout:
    g = geometry or DEFAULTS.geometry

    n = doc.box_count()
    if n <= 0:
        # Guaranteed impossible by validation (>= 1 segment, >= 1 box per segment).
        raise ValueError("Cannot lay out a roadmap with no boxes")

    width = g.padding * 2 + (n - 1) * g.step_x + g.box_width
    height = g.padding * 2 + (n - 1) * g.step_y + g.box_height + g.vertical_reserve

    positions = tuple(
        Position(x=g.padding + i * g.step_x, y=g.padding + (n - 1 - i) * g.step_y)
        for i in range(n)
    )

    return Layout(
        canvas_width=width,
        canvas_height=height,
        box_count=n,
        positions=positions,
        box_width=g.box_width,
        box_height=g.box_height,
    )


def segment_spans(doc: RoadmapDocument) -> List[Tuple[int, int]]:
    """(first_index, last_index) of each segment in the flattened box list."""
    spans: List[Tuple[int, int]] = []
    start = 0
    for seg in doc.segments:
        end = start + len(seg.boxes) - 1
        spans.append((start, end))
        start = end + 1
    return spans
