# roadmap_render/scene.py
# Scene builder: turns (document, layout) into an ordered list of draw primitives.
#
# Emission order is part of the contract (later primitives draw on top):
#   1) every box: rounded rect, title lines, goal lines  (document order)
#   2) every connector: elbow path, arrowhead            (document order)
#   3) timeline: dashed axis, segment labels, separator ticks

from __future__ import annotations

from typing import List, Optional

from .config import DEFAULTS, Defaults, format_weeks
from .layout import Layout, segment_spans
from .text import estimate_goal_height, split_styled_runs, wrap_text, wrap_title
from .types import (
    PathPrimitive,
    PolygonPrimitive,
    Primitive,
    RectPrimitive,
    RoadmapBox,
    RoadmapDocument,
    Scene,
    TextPrimitive,
    TextRun,
)


def _title_primitives(box: RoadmapBox, index: int, x: float, y: float, cfg: Defaults) -> List[Primitive]:
    g, t, c = cfg.geometry, cfg.text, cfg.palette
    lines = wrap_title(box.title, t)
    cx = x + g.box_width / 2
    mid = y + g.box_height / 2

    if len(lines) == 1:
        ys = [mid]
    else:
        ys = [mid - t.title_line_offset, mid + t.title_line_offset]

    return [
        TextPrimitive(
            x=cx,
            y=ly,
            runs=(TextRun(text=line, weight="semibold"),),
            font_size=t.title_font_size,
            color=c.text_white,
            anchor="middle",
            baseline="middle",
            role="title",
            index=index,
        )
        for line, ly in zip(lines, ys)
    ]


def goal_first_baseline(box_y: float, cfg: Defaults = DEFAULTS) -> float:
    g, t = cfg.geometry, cfg.text
    return box_y + g.box_height + g.goal_box_y_offset + t.goal_first_baseline


def _goal_primitives(box: RoadmapBox, index: int, x: float, y: float, cfg: Defaults) -> List[Primitive]:
    t, c = cfg.text, cfg.palette
    y0 = goal_first_baseline(y, cfg)
    out: List[Primitive] = []
    for i, line in enumerate(wrap_text(box.goal, t.goal_max_chars)):
        out.append(
            TextPrimitive(
                x=x,
                y=y0 + i * t.goal_line_height,
                runs=split_styled_runs(
                    line,
                    keywords=t.bold_keywords,
                    bold_char_width=t.bold_char_width,
                    normal_char_width=t.normal_char_width,
                ),
                font_size=t.goal_font_size,
                color=c.text_gray,
                anchor="start",
                baseline="alphabetic",
                role="goal",
                index=index,
            )
        )
    return out


def goal_block_bottom(box: RoadmapBox, box_y: float, cfg: Defaults = DEFAULTS) -> float:
    return goal_first_baseline(box_y, cfg) + estimate_goal_height(box.goal, cfg.text)


def _connector_primitives(layout: Layout, i: int, cfg: Defaults) -> List[Primitive]:
    g, c = cfg.geometry, cfg.palette
    p1 = layout.positions[i]
    p2 = layout.positions[i + 1]

    start_x = p1.x + g.box_width
    start_y = p1.y + g.box_height / 2
    end_y = p2.y + g.box_height / 2
    mid_x = start_x + (g.step_x - g.box_width) / 2

    path = PathPrimitive(
        points=((start_x, start_y), (mid_x, start_y), (mid_x, end_y), (p2.x, end_y)),
        stroke=c.line_color,
        line_width=g.line_width,
        role="connector",
        index=i,
    )

    a = g.arrow_size
    length = a * g.arrow_length_ratio
    arrow = PolygonPrimitive(
        points=((p2.x, end_y), (p2.x - length, end_y - a), (p2.x - length, end_y + a)),
        fill=c.line_color,
        role="arrowhead",
        index=i,
    )
    return [path, arrow]


def _timeline_primitives(
    doc: RoadmapDocument, layout: Layout, timeline_y: float, cfg: Defaults
) -> List[Primitive]:
    g, t, c = cfg.geometry, cfg.text, cfg.palette
    start_x = layout.positions[0].x
    end_x = layout.positions[-1].x + g.box_width

    out: List[Primitive] = [
        PathPrimitive(
            points=((start_x, timeline_y), (end_x, timeline_y)),
            stroke=c.duration_line,
            line_width=g.line_width,
            dash=g.timeline_dash,
            role="timeline",
        )
    ]

    separator_xs = [start_x]
    for seg_idx, (seg, (first, last)) in enumerate(zip(doc.segments, segment_spans(doc))):
        seg_start = layout.positions[first].x
        seg_end = layout.positions[last].x + g.box_width
        separator_xs.append(seg_end)
        out.append(
            TextPrimitive(
                x=seg_start + (seg_end - seg_start) / 2,
                y=timeline_y + g.segment_label_offset,
                runs=(TextRun(text=f"{seg.name} {format_weeks(seg.weeks)} Weeks"),),
                font_size=t.segment_label_font_size,
                color=c.text_gray,
                anchor="middle",
                baseline="alphabetic",
                role="segment_label",
                index=seg_idx,
            )
        )

    for k, x in enumerate(separator_xs):
        out.append(
            PathPrimitive(
                points=((x, timeline_y), (x, timeline_y - separator_height(k, cfg))),
                stroke=c.duration_line,
                line_width=g.line_width,
                dash=g.timeline_dash,
                role="separator",
                index=k,
            )
        )
    return out


def separator_height(k: int, cfg: Defaults = DEFAULTS) -> float:
    """First tick is short; later ticks grow so nested phase boundaries stand apart."""
    g = cfg.geometry
    if k == 0:
        return g.first_separator_height
    return g.separator_base_height + (k - 1) * g.separator_height_step


def build_scene(doc: RoadmapDocument, layout: Layout, cfg: Optional[Defaults] = None) -> Scene:
    """
    Build the full static scene.
    Always returns a fresh Scene; nothing from a previous document is carried over.
    """
    cfg = cfg or DEFAULTS
    g, c = cfg.geometry, cfg.palette
    scene = Scene(width=layout.canvas_width, height=layout.canvas_height)

    boxes = doc.all_boxes()
    if len(boxes) != layout.box_count:
        raise ValueError(f"Layout has {layout.box_count} boxes but document has {len(boxes)}")

    max_goal_bottom = 0.0
    for i, box in enumerate(boxes):
        pos = layout.positions[i]
        scene.primitives.append(
            RectPrimitive(
                x=pos.x,
                y=pos.y,
                w=g.box_width,
                h=g.box_height,
                fill=c.box_fill,
                radius=g.corner_radius,
                role="box",
                index=i,
            )
        )
        scene.primitives.extend(_title_primitives(box, i, pos.x, pos.y, cfg))
        scene.primitives.extend(_goal_primitives(box, i, pos.x, pos.y, cfg))
        max_goal_bottom = max(max_goal_bottom, goal_block_bottom(box, pos.y, cfg))

    for i in range(layout.box_count - 1):
        scene.primitives.extend(_connector_primitives(layout, i, cfg))

    scene.timeline_y = max_goal_bottom + g.timeline_clearance
    scene.primitives.extend(_timeline_primitives(doc, layout, scene.timeline_y, cfg))

    return scene
