# roadmap_render/test_interaction.py
# Interaction state machine + transient visuals. Run with pytest or:
#   python -m roadmap_render.test_interaction

from __future__ import annotations

from roadmap_render.interaction import (
    Fade,
    InputEvent,
    InteractionController,
    InteractionState,
    build_modal,
    hover_emphasis,
    transient_primitives,
)
from roadmap_render.layout import compute_layout
from roadmap_render.sample_data import example_roadmap, two_phase_roadmap
from roadmap_render.validate import parse_document


def _one_box(goal: str = "Goal: plan it"):
    return parse_document({"segments": [{"name": "Solo", "weeks": 1, "boxes": [{"title": "Only step", "goal": goal}]}]})


def test_hover_enter_and_leave() -> None:
    c = InteractionController(3)
    assert c.hover_enter(1)
    assert c.snapshot() == (InteractionState.HOVER, 1)
    assert c.hovered_index == 1 and c.zoomed_index is None

    assert not c.hover_leave(0)   # not the highlighted box
    assert c.hover_leave(1)
    assert c.snapshot() == (InteractionState.IDLE, None)


def test_hover_moves_between_boxes() -> None:
    c = InteractionController(3)
    c.hover_enter(0)
    c.hover_enter(2)
    assert c.hovered_index == 2


def test_click_zooms_from_idle_and_hover() -> None:
    c = InteractionController(3)
    assert c.click_box(0)
    assert c.snapshot() == (InteractionState.MODAL, 0)

    c = InteractionController(3)
    c.hover_enter(2)
    assert c.click_box(2)
    assert c.zoomed_index == 2 and c.hovered_index is None


def test_modal_exclusivity() -> None:
    c = InteractionController(4)
    c.click_box(1)
    assert not c.click_box(3)
    assert c.snapshot() == (InteractionState.MODAL, 1)
    assert not c.hover_enter(2)
    assert not c.hover_leave(1)
    assert c.snapshot() == (InteractionState.MODAL, 1)


def test_modal_exits_only_via_overlay_or_cancel_key() -> None:
    c = InteractionController(2)
    c.click_box(0)
    assert not c.key_press("enter")
    assert c.is_zoomed
    assert c.key_press("escape")
    assert c.state is InteractionState.IDLE

    c.click_box(1)
    assert c.click_overlay()
    assert c.state is InteractionState.IDLE

    # overlay click / cancel key outside the modal are no-ops
    assert not c.click_overlay()
    assert not c.key_press("escape")


def test_dispatch_and_listeners() -> None:
    c = InteractionController(2)
    seen = []
    c.subscribe(lambda ctl: seen.append(ctl.snapshot()))

    assert c.dispatch(InputEvent("hover_enter", index=0))
    assert c.dispatch(InputEvent("click_box", index=0))
    assert not c.dispatch(InputEvent("click_box", index=1))
    assert c.dispatch(InputEvent("key", key="Escape"))

    assert seen == [
        (InteractionState.HOVER, 0),
        (InteractionState.MODAL, 0),
        (InteractionState.IDLE, None),
    ]


def test_dispatch_rejects_bad_events() -> None:
    c = InteractionController(2)
    for ev in (InputEvent("wiggle"), InputEvent("click_box"), InputEvent("hover_enter", index=5)):
        try:
            c.dispatch(ev)
        except ValueError:
            continue
        raise AssertionError(f"expected ValueError for {ev}")


def test_hover_emphasis_grows_about_position() -> None:
    layout = compute_layout(two_phase_roadmap())
    rect = hover_emphasis(layout, 0)
    x, y, w, h = layout.box_rect(0)
    assert (rect.x, rect.y) == (x, y)
    assert abs(rect.w - w * 1.05) < 1e-9
    assert abs(rect.h - h * 1.05) < 1e-9
    assert rect.fill != "#4186CD"


def test_modal_view_layout() -> None:
    doc = example_roadmap()
    layout = compute_layout(doc)
    modal = build_modal(doc, layout, 2)

    roles = [p.role for p in modal.primitives]
    assert roles[0] == "overlay" and roles[1] == "modal_box"
    assert "modal_hint" in roles
    assert "modal_title" in roles and "modal_goal" in roles

    overlay = modal.primitives[0]
    assert overlay.opacity == 0.5
    assert (overlay.w, overlay.h) == (layout.canvas_width, layout.canvas_height)

    box = modal.box
    assert abs(box.w - 220 * 4.2) < 1e-9
    assert abs((box.x + box.w / 2) - layout.canvas_width / 2) < 1e-9
    assert abs((box.y + box.h / 2) - layout.canvas_height / 2) < 1e-9
    assert modal.hits_box(box.x + 1, box.y + 1)
    assert not modal.hits_box(box.x - 1, box.y - 1)

    goal_lines = [p for p in modal.primitives if p.role == "modal_goal"]
    assert goal_lines[0].runs[0].text == "Goal:" and goal_lines[0].runs[0].bold


def test_transient_primitives_follow_state() -> None:
    doc = two_phase_roadmap()
    layout = compute_layout(doc)
    c = InteractionController(layout.box_count)
    assert transient_primitives(c, doc, layout) == []
    c.hover_enter(1)
    assert [p.role for p in transient_primitives(c, doc, layout)] == ["hover"]
    c.click_box(0)
    assert transient_primitives(c, doc, layout)[0].role == "overlay"


def test_fade_is_linear_and_clamped() -> None:
    fade = Fade(0.0, 1.0, 300)
    assert fade.opacity_at(-5) == 0.0
    assert abs(fade.opacity_at(150) - 0.5) < 1e-9
    assert fade.opacity_at(300) == 1.0
    assert fade.done(300) and not fade.done(299)


def test_modal_fits_small_canvases() -> None:
    for doc in (_one_box(), two_phase_roadmap()):
        layout = compute_layout(doc)
        modal = build_modal(doc, layout, 0)
        box = modal.box
        assert 0 <= box.x and box.x + box.w <= layout.canvas_width
        assert 0 <= box.y and box.y + box.h <= layout.canvas_height
        assert box.w < 220 * 4.2  # shrunk to the canvas

        first = next(p for p in modal.primitives if p.role == "modal_goal")
        assert first.runs[0].text == "Goal:" and first.runs[0].bold
        assert box.x < first.x
        ts = first.font_size / 13
        last = first.runs[-1]
        assert first.x + last.dx + len(last.text) * 8.0 * ts <= box.x + box.w


def test_long_goal_is_bounded_by_clone() -> None:
    doc = _one_box("Goal: " + "deliver the next increment " * 40)
    layout = compute_layout(doc)
    modal = build_modal(doc, layout, 0)
    box = modal.box
    goals = [p for p in modal.primitives if p.role == "modal_goal"]
    assert all(box.y < p.y <= box.y + box.h for p in goals)
    assert goals[-1].text.endswith("…")
    # clicks on the last goal line land on the clone, not the overlay
    assert modal.hits_box(goals[-1].x + 1, goals[-1].y - 1)
    # top and bottom padding stay free for the dismissal hint
    assert box.y >= 120 and box.y + box.h <= layout.canvas_height - 120


def test_reset_takes_new_box_count() -> None:
    c = InteractionController(2)
    c.click_box(1)
    c.reset(5)
    assert c.snapshot() == (InteractionState.IDLE, None)
    assert c.hover_enter(4)
    try:
        c.reset(0)
    except ValueError:
        pass
    else:
        raise AssertionError("expected ValueError")


def main() -> None:
    print("Running interaction tests...")
    test_hover_enter_and_leave()
    test_hover_moves_between_boxes()
    test_click_zooms_from_idle_and_hover()
    test_modal_exclusivity()
    test_modal_exits_only_via_overlay_or_cancel_key()
    test_dispatch_and_listeners()
    test_dispatch_rejects_bad_events()
    test_hover_emphasis_grows_about_position()
    test_modal_view_layout()
    test_transient_primitives_follow_state()
    test_fade_is_linear_and_clamped()
    test_modal_fits_small_canvases()
    test_long_goal_is_bounded_by_clone()
    test_reset_takes_new_box_count()
    print("OK")


if __name__ == "__main__":
    main()
