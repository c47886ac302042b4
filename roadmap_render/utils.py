# roadmap_render/utils.py
# Small utilities used across the project:
# - timing context manager (optionally reports through the logger)
# - JSON export of layout + scene, one record per primitive in draw order

from __future__ import annotations

import json
import time
from collections import Counter
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from .layout import Layout
from .logger import Logger
from .types import PathPrimitive, PolygonPrimitive, Primitive, RectPrimitive, Scene, TextPrimitive


@contextmanager
def timer(label: str = "timer", log: Optional[Logger] = None) -> Iterator[Dict[str, float]]:
    """
    with timer("layout", log=get_logger()) as t:
        ...
    t["ms"] is filled in on exit (also when the block raises).
    """
    t0 = time.perf_counter()
    payload: Dict[str, float] = {}
    try:
        yield payload
    finally:
        payload["ms"] = (time.perf_counter() - t0) * 1000.0
        if log is not None:
            log.debug(f"{label}: {payload['ms']:.1f} ms")


def _points(points) -> list:
    return [[x, y] for x, y in points]


def primitive_to_dict(p: Primitive) -> Dict[str, Any]:
    out: Dict[str, Any] = {"role": p.role, "index": p.index}
    if isinstance(p, RectPrimitive):
        out.update(kind="rect", x=p.x, y=p.y, w=p.w, h=p.h, fill=p.fill, radius=p.radius, opacity=p.opacity)
    elif isinstance(p, TextPrimitive):
        out.update(
            kind="text",
            x=p.x,
            y=p.y,
            font_size=p.font_size,
            color=p.color,
            anchor=p.anchor,
            baseline=p.baseline,
            runs=[{"text": r.text, "weight": r.weight, "dx": r.dx} for r in p.runs],
        )
    elif isinstance(p, PathPrimitive):
        out.update(kind="path", points=_points(p.points), stroke=p.stroke, line_width=p.line_width,
                   dash=list(p.dash) if p.dash else None)
    elif isinstance(p, PolygonPrimitive):
        out.update(kind="polygon", points=_points(p.points), fill=p.fill)
    else:
        raise TypeError(f"Unknown primitive type: {type(p).__name__}")
    return out


def layout_to_dict(layout: Layout) -> Dict[str, Any]:
    return {
        "canvas_width": layout.canvas_width,
        "canvas_height": layout.canvas_height,
        "box_count": layout.box_count,
        "positions": [{"x": p.x, "y": p.y} for p in layout.positions],
    }


def scene_to_dict(scene: Scene) -> Dict[str, Any]:
    return {
        "width": scene.width,
        "height": scene.height,
        "timeline_y": scene.timeline_y,
        "roles": dict(Counter(p.role for p in scene.primitives)),
        "primitives": [primitive_to_dict(p) for p in scene.primitives],
    }


def save_scene_json(layout: Layout, scene: Scene, path: str | Path, *, indent: int = 2) -> None:
    """Save layout + scene into JSON for debugging/integration."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {"layout": layout_to_dict(layout), "scene": scene_to_dict(scene)}
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=indent)
