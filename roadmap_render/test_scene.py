# roadmap_render/test_scene.py
# Scene builder tests (primitive order, connectors, timeline). Run with pytest or:
#   python -m roadmap_render.test_scene

from __future__ import annotations

from dataclasses import replace

from roadmap_render.config import DEFAULTS
from roadmap_render.layout import compute_layout, segment_spans
from roadmap_render.sample_data import example_roadmap, two_phase_roadmap
from roadmap_render.scene import build_scene, separator_height
from roadmap_render.types import PathPrimitive, PolygonPrimitive, RectPrimitive, TextPrimitive
from roadmap_render.validate import parse_document

BOX_ROLES = ("box", "title", "goal")
CONNECTOR_ROLES = ("connector", "arrowhead")
TIMELINE_ROLES = ("timeline", "segment_label", "separator")


def _build(doc):
    layout = compute_layout(doc)
    return layout, build_scene(doc, layout)


def test_two_phase_end_to_end() -> None:
    layout, scene = _build(two_phase_roadmap())

    boxes = scene.by_role("box")
    assert [b.index for b in boxes] == [0, 1]
    assert (boxes[0].x, boxes[0].y) == (120, 180)
    assert (boxes[1].x, boxes[1].y) == (400, 120)
    assert all(isinstance(b, RectPrimitive) and b.radius == 15 for b in boxes)

    titles = scene.by_role("title")
    assert [t.text for t in titles] == ["Design", "Build"]

    connectors = scene.by_role("connector")
    assert len(connectors) == 1
    assert connectors[0].points == ((340, 215), (370, 215), (370, 155), (400, 155))

    arrows = scene.by_role("arrowhead")
    assert len(arrows) == 1
    assert isinstance(arrows[0], PolygonPrimitive)
    assert arrows[0].points == ((400, 155), (388, 147), (388, 163))

    labels = scene.by_role("segment_label")
    assert [label.text for label in labels] == ["Phase 1 2 Weeks", "Phase 2 3 Weeks"]

    separators = scene.by_role("separator")
    assert len(separators) == 3


def test_primitive_order_boxes_then_connectors_then_timeline() -> None:
    _, scene = _build(example_roadmap())
    groups = []
    for p in scene.primitives:
        if p.role in BOX_ROLES:
            groups.append(0)
        elif p.role in CONNECTOR_ROLES:
            groups.append(1)
        else:
            assert p.role in TIMELINE_ROLES
            groups.append(2)
    assert groups == sorted(groups)

    box_indexes = [p.index for p in scene.primitives if p.role in BOX_ROLES]
    assert box_indexes == sorted(box_indexes)


def test_goal_text_styling_and_placement() -> None:
    layout, scene = _build(two_phase_roadmap())
    goals = [g for g in scene.by_role("goal") if g.index == 0]
    assert len(goals) == 1
    line = goals[0]
    assert isinstance(line, TextPrimitive)
    assert line.x == layout.positions[0].x
    assert line.y == 180 + 70 + 15 + 15
    assert line.anchor == "start"
    assert [(r.text, r.weight, r.dx) for r in line.runs] == [("Goal:", "bold", 0.0), (" plan it", "normal", 40.0)]


def test_two_line_title_offsets() -> None:
    doc = parse_document(
        {
            "segments": [
                {
                    "name": "P",
                    "weeks": 1,
                    "boxes": [{"title": "Architecture & Data Assessment Extended Edition Volume Two", "goal": "g"}],
                }
            ]
        }
    )
    layout, scene = _build(doc)
    titles = scene.by_role("title")
    assert len(titles) == 2
    mid = layout.positions[0].y + 35
    assert [t.y for t in titles] == [mid - 8, mid + 8]
    assert all(t.anchor == "middle" and t.x == layout.positions[0].x + 110 for t in titles)


def test_timeline_below_lowest_goal_block() -> None:
    _, scene = _build(two_phase_roadmap())
    # box 0 goal: baseline 280, one line of 17 -> 297, plus 40 clearance
    assert scene.timeline_y == 337
    axis = scene.by_role("timeline")[0]
    assert isinstance(axis, PathPrimitive) and axis.dash == (10, 5)
    assert axis.points == ((120, 337), (620, 337))


def test_segment_labels_centered_in_own_span() -> None:
    doc = example_roadmap()
    layout, scene = _build(doc)
    labels = scene.by_role("segment_label")
    assert len(labels) == len(doc.segments)
    for label, (first, last) in zip(labels, segment_spans(doc)):
        left = layout.positions[first].x
        right = layout.positions[last].x + layout.box_width
        assert left <= label.x <= right
        assert label.anchor == "middle"
        assert label.y == scene.timeline_y + 25


def test_separator_count_and_growing_heights() -> None:
    doc = example_roadmap()
    _, scene = _build(doc)
    seps = scene.by_role("separator")
    assert len(seps) == len(doc.segments) + 1
    heights = [s.points[0][1] - s.points[1][1] for s in seps]
    assert heights == [25, 120, 180, 240]
    assert heights == [separator_height(k) for k in range(len(seps))]
    assert seps[0].points[0][0] == 120


def test_connector_count_matches_adjacent_pairs() -> None:
    layout, scene = _build(example_roadmap())
    assert len(scene.by_role("connector")) == layout.box_count - 1
    assert len(scene.by_role("arrowhead")) == layout.box_count - 1


def test_rebuild_starts_from_empty_scene() -> None:
    doc = example_roadmap()
    layout = compute_layout(doc)
    first = build_scene(doc, layout)
    second = build_scene(doc, layout)
    assert first.primitives == second.primitives
    assert first is not second

    small = two_phase_roadmap()
    replaced = build_scene(small, compute_layout(small))
    assert len(replaced.by_role("box")) == 2


def test_fractional_weeks_label() -> None:
    doc = parse_document({"segments": [{"name": "Pilot", "weeks": 1.5, "boxes": [{"title": "t", "goal": "g"}]}]})
    _, scene = _build(doc)
    assert scene.by_role("segment_label")[0].text == "Pilot 1.5 Weeks"


def test_custom_text_metrics_reach_titles_and_timeline() -> None:
    doc = parse_document(
        {
            "segments": [
                {
                    "name": "P",
                    "weeks": 1,
                    "boxes": [{"title": "Architecture & Data Assessment Extended Edition", "goal": "Goal: plan it"}],
                }
            ]
        }
    )
    layout = compute_layout(doc)
    cfg = replace(DEFAULTS, text=replace(DEFAULTS.text, title_max_lines=1, goal_line_height=30))
    scene = build_scene(doc, layout, cfg)
    assert len(scene.by_role("title")) == 1
    # first baseline + one 30-unit goal line + 40 clearance
    assert scene.timeline_y == layout.positions[0].y + 70 + 15 + 15 + 30 + 40


def main() -> None:
    print("Running scene tests...")
    test_two_phase_end_to_end()
    test_primitive_order_boxes_then_connectors_then_timeline()
    test_goal_text_styling_and_placement()
    test_two_line_title_offsets()
    test_timeline_below_lowest_goal_block()
    test_segment_labels_centered_in_own_span()
    test_separator_count_and_growing_heights()
    test_connector_count_matches_adjacent_pairs()
    test_rebuild_starts_from_empty_scene()
    test_fractional_weeks_label()
    test_custom_text_metrics_reach_titles_and_timeline()
    print("OK")


if __name__ == "__main__":
    main()
