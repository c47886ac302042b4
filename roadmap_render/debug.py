# roadmap_render/debug.py
# Debug / inspection helpers:
# - pretty-print box positions and scene primitives
# - quick summary of a document
# - helpful when tuning geometry constants

from __future__ import annotations

from collections import Counter

from .config import format_weeks
from .layout import Layout
from .types import PathPrimitive, RectPrimitive, RoadmapDocument, Scene, TextPrimitive


def print_summary(doc: RoadmapDocument, layout: Layout) -> None:
    print(f"Segments: {len(doc.segments)}  Boxes: {layout.box_count}")
    print(f"Total duration: {format_weeks(doc.total_weeks())} weeks")
    print(f"Canvas: {layout.canvas_width:g} x {layout.canvas_height:g}")


def print_layout(doc: RoadmapDocument, layout: Layout) -> None:
    for i, (box, pos) in enumerate(zip(doc.all_boxes(), layout.positions)):
        print(f"[{i:3d}] x={pos.x:7.1f} y={pos.y:7.1f}  {box.title}")


def print_scene(scene: Scene) -> None:
    counts = Counter(p.role for p in scene.primitives)
    print(f"=== Scene {scene.width:g} x {scene.height:g} ({len(scene)} primitives) ===")
    print("  " + ", ".join(f"{role}={n}" for role, n in counts.items()))
    for p in scene.primitives:
        if isinstance(p, RectPrimitive):
            print(f"  rect    {p.role:14s} ({p.x:g},{p.y:g}) {p.w:g}x{p.h:g} {p.fill}")
        elif isinstance(p, TextPrimitive):
            print(f"  text    {p.role:14s} ({p.x:g},{p.y:g}) {p.text!r}")
        elif isinstance(p, PathPrimitive):
            pts = " ".join(f"{x:g},{y:g}" for x, y in p.points)
            print(f"  path    {p.role:14s} {pts}{' dashed' if p.dash else ''}")
        else:
            pts = " ".join(f"{x:g},{y:g}" for x, y in p.points)
            print(f"  polygon {p.role:14s} {pts}")
