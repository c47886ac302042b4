# roadmap_render/test_viewport.py
# Pan / zoom of the overall view. Run with pytest or:
#   python -m roadmap_render.test_viewport

from __future__ import annotations

from roadmap_render.viewport import Viewport


def test_zoom_clamps() -> None:
    v = Viewport()
    for _ in range(20):
        v.zoom_in()
    assert v.zoom == 3.0
    assert v.zoom_percent == 300
    for _ in range(50):
        v.zoom_out()
    assert v.zoom == 0.1


def test_drag_pans_in_canvas_units() -> None:
    v = Viewport()
    v.zoom_in()  # 1.2
    assert not v.drag_to(10, 10)  # no drag in progress
    v.begin_drag(100, 100)
    assert v.drag_to(112, 76)
    assert abs(v.pan_x - 12 / 1.2) < 1e-9
    assert abs(v.pan_y - (-24 / 1.2)) < 1e-9
    v.end_drag()
    assert not v.dragging


def test_visible_bounds_and_reset() -> None:
    v = Viewport(zoom=2.0, pan_x=-50, pan_y=0)
    x0, y0, x1, y1 = v.visible_bounds(800, 600)
    assert (x0, y0) == (50, 0)
    assert (x1, y1) == (450, 300)
    sx, sy = v.to_screen(*v.to_canvas(123, 45))
    assert abs(sx - 123) < 1e-9 and abs(sy - 45) < 1e-9

    v.reset()
    assert (v.zoom, v.pan_x, v.pan_y) == (1.0, 0.0, 0.0)
    assert v.visible_bounds(800, 600) == (0, 0, 800, 600)


def main() -> None:
    print("Running viewport tests...")
    test_zoom_clamps()
    test_drag_pans_in_canvas_units()
    test_visible_bounds_and_reset()
    print("OK")


if __name__ == "__main__":
    main()
