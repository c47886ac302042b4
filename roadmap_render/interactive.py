# roadmap_render/interactive.py
# Interactive matplotlib host:
# - draws the static scene once per document (load() clears everything before redrawing)
# - routes pointer / key events to the InteractionController (hover + modal zoom)
#   and to the Viewport (drag to pan, scroll or +/-/0 keys to zoom)
# - renders the transient state: in-place hover emphasis, modal overlay with opacity fade
#
# Run:
#   python -m roadmap_render --roadmap roadmap.json

from __future__ import annotations

import time
from typing import Any, Callable, List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.artist import Artist

from .config import DEFAULTS, Defaults
from .interaction import (
    Fade,
    InteractionController,
    InteractionState,
    ModalView,
    build_modal,
    transient_primitives,
)
from .layout import Layout, compute_layout
from .logger import get_logger
from .plotting import PlotStyle, SceneArtists, draw_primitives, draw_scene, new_figure, setup_axes
from .scene import build_scene
from .types import RectPrimitive, RoadmapDocument, Scene
from .viewport import Viewport

ZOOM_IN_KEYS = ("+", "=")
ZOOM_OUT_KEYS = ("-", "_")
RESET_KEYS = ("0",)


class InteractiveRoadmap:
    """
    One figure bound to one document at a time.
    Set animate=False to apply fades instantly (non-GUI backends never fire timers).
    """

    def __init__(
        self,
        doc: RoadmapDocument,
        style: Optional[PlotStyle] = None,
        cfg: Optional[Defaults] = None,
        animate: bool = True,
    ) -> None:
        self.cfg = cfg or DEFAULTS
        self.style = style or PlotStyle(dpi=self.cfg.dpi)
        self.animate = animate
        self.viewport = Viewport(settings=self.cfg.interaction)

        layout = compute_layout(doc, self.cfg.geometry)
        self.fig, self.ax = new_figure(layout.canvas_width, layout.canvas_height, self.style)

        self.doc: RoadmapDocument = doc
        self.layout: Layout = layout
        self.scene: Scene = Scene(width=layout.canvas_width, height=layout.canvas_height)
        self.controller = InteractionController(layout.box_count, self.cfg)
        self.controller.subscribe(self._on_state_change)
        self.artists = SceneArtists()

        self._hover_index: Optional[int] = None
        self._modal: Optional[ModalView] = None
        self._modal_artists: List[Tuple[Artist, float]] = []
        self._timer: Any = None
        self._timer_done: Optional[Callable[[], None]] = None

        canvas = self.fig.canvas
        self._cids = [
            canvas.mpl_connect("motion_notify_event", self.on_motion),
            canvas.mpl_connect("button_press_event", self.on_press),
            canvas.mpl_connect("button_release_event", self.on_release),
            canvas.mpl_connect("key_press_event", self.on_key),
            canvas.mpl_connect("scroll_event", self.on_scroll),
        ]

        self.load(doc)

    # -- document lifecycle -----------------------------------------------

    def load(self, doc: RoadmapDocument) -> None:
        """Replace the diagram atomically: all prior artists and state are dropped."""
        self._stop_animation(run_done=False)
        layout = compute_layout(doc, self.cfg.geometry)
        scene = build_scene(doc, layout, self.cfg)

        self.doc, self.layout, self.scene = doc, layout, scene
        self.controller.reset(layout.box_count)
        self.viewport.reset()
        self._hover_index = None
        self._modal = None
        self._modal_artists = []

        self.fig.set_size_inches(layout.canvas_width / self.style.dpi, layout.canvas_height / self.style.dpi)
        self.ax.cla()
        setup_axes(self.ax, layout.canvas_width, layout.canvas_height, self.style)
        self.artists = draw_scene(self.ax, scene, self.style)
        get_logger("view").info(f"Loaded roadmap: {layout.box_count} boxes, canvas {layout.canvas_width:g}x{layout.canvas_height:g}")
        self._redraw()

    def close(self) -> None:
        self._stop_animation(run_done=False)
        for cid in self._cids:
            self.fig.canvas.mpl_disconnect(cid)
        plt.close(self.fig)

    # -- view --------------------------------------------------------------

    def _apply_view(self) -> None:
        bounds = self.viewport.visible_bounds(self.layout.canvas_width, self.layout.canvas_height)
        x0, y0, x1, y1 = bounds
        self.ax.set_xlim(x0, x1)
        self.ax.set_ylim(y1, y0)

    def _redraw(self) -> None:
        self._apply_view()
        self.fig.canvas.draw_idle()

    # -- event handlers (matplotlib callbacks) ---------------------------

    def on_motion(self, event: Any) -> None:
        if self.viewport.dragging:
            if self.viewport.drag_to(event.x, -event.y):
                self._redraw()
            return

        if event.inaxes is not self.ax or event.xdata is None:
            idx = None
        else:
            idx = self.layout.box_at(event.xdata, event.ydata)

        current = self.controller.hovered_index
        if idx == current:
            return
        if current is not None:
            self.controller.hover_leave(current)
        if idx is not None:
            self.controller.hover_enter(idx)

    def on_press(self, event: Any) -> None:
        if event.inaxes is not self.ax or event.xdata is None:
            return

        if self.controller.is_zoomed:
            # The overlay covers the whole canvas; only the enlarged box itself is not "overlay".
            if self._modal is not None and not self._modal.hits_box(event.xdata, event.ydata):
                self.controller.click_overlay()
            return

        idx = self.layout.box_at(event.xdata, event.ydata)
        if idx is not None:
            self.controller.click_box(idx)
        else:
            self.viewport.begin_drag(event.x, -event.y)

    def on_release(self, event: Any) -> None:
        self.viewport.end_drag()

    def on_key(self, event: Any) -> None:
        if self.controller.key_press(event.key):
            return
        if self.controller.is_zoomed:
            return
        if event.key in ZOOM_IN_KEYS:
            self.viewport.zoom_in()
        elif event.key in ZOOM_OUT_KEYS:
            self.viewport.zoom_out()
        elif event.key in RESET_KEYS:
            self.viewport.reset()
        else:
            return
        self._redraw()

    def on_scroll(self, event: Any) -> None:
        if self.controller.is_zoomed:
            return
        if event.button == "up":
            self.viewport.zoom_in()
        elif event.button == "down":
            self.viewport.zoom_out()
        else:
            return
        self._redraw()

    # -- transient state rendering ---------------------------------------

    def _on_state_change(self, controller: InteractionController) -> None:
        state, index = controller.state, controller.hovered_index
        if state is InteractionState.MODAL:
            index = controller.zoomed_index
        get_logger("view").debug(f"state -> {state.name} (box {index})")

        if self._hover_index is not None and controller.hovered_index != self._hover_index:
            self._restore_box(self._hover_index)
            self._hover_index = None

        if controller.state is InteractionState.HOVER:
            (rect,) = transient_primitives(controller, self.doc, self.layout, self.cfg)
            self._emphasize_box(controller.hovered_index, rect)
        elif controller.state is InteractionState.MODAL:
            self._open_modal(controller.zoomed_index)
        elif self._modal is not None:
            self._close_modal()

        self.fig.canvas.draw_idle()

    def _emphasize_box(self, index: int, rect: RectPrimitive) -> None:
        patch = self.artists.box_patches[index]
        patch.set_bounds(rect.x, rect.y, rect.w, rect.h)
        patch.set_boxstyle("round", pad=0, rounding_size=rect.radius)
        patch.set_facecolor(rect.fill)
        self._hover_index = index

    def _restore_box(self, index: int) -> None:
        patch = self.artists.box_patches[index]
        x, y, w, h = self.layout.box_rect(index)
        patch.set_bounds(x, y, w, h)
        patch.set_boxstyle("round", pad=0, rounding_size=self.cfg.geometry.corner_radius)
        patch.set_facecolor(self.cfg.palette.box_fill)

    def _open_modal(self, index: int) -> None:
        # A fade-out still running from the previous modal is finished first.
        self._stop_animation(run_done=True)
        modal = build_modal(self.doc, self.layout, index, self.cfg)
        drawn = draw_primitives(self.ax, modal.primitives, self.style, zorder_start=len(self.scene) + 1)
        self._modal = modal
        self._modal_artists = [(a, a.get_alpha() if a.get_alpha() is not None else 1.0) for a in drawn.all()]
        self._run_fade(modal.fade_in, done=None)

    def _close_modal(self) -> None:
        modal = self._modal
        self._modal = None
        if modal is None:
            return
        self._stop_animation(run_done=True)
        artists = self._modal_artists

        def _remove() -> None:
            for a, _ in artists:
                a.remove()
            if self._modal_artists is artists:
                self._modal_artists = []
            self.fig.canvas.draw_idle()

        self._run_fade(modal.fade_out, done=_remove)

    def _set_modal_opacity(self, opacity: float) -> None:
        for a, base in self._modal_artists:
            a.set_alpha(base * opacity)

    def _run_fade(self, fade: Fade, done: Optional[Callable[[], None]]) -> None:
        if not self.animate:
            self._set_modal_opacity(fade.end)
            if done is not None:
                done()
            return

        self._set_modal_opacity(fade.start)
        start = time.perf_counter()
        timer = self.fig.canvas.new_timer(interval=self.cfg.interaction.fade_frame_ms)

        def _tick() -> None:
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            self._set_modal_opacity(fade.opacity_at(elapsed_ms))
            self.fig.canvas.draw_idle()
            if fade.done(elapsed_ms):
                self._stop_animation(run_done=True)

        timer.add_callback(_tick)
        self._timer = timer
        self._timer_done = done
        timer.start()

    def _stop_animation(self, run_done: bool) -> None:
        timer, done = self._timer, self._timer_done
        self._timer = None
        self._timer_done = None
        if timer is not None:
            timer.stop()
        if run_done and done is not None:
            done()


def show_interactive(
    doc: RoadmapDocument, style: Optional[PlotStyle] = None, animate: bool = True
) -> InteractiveRoadmap:
    """Open the interactive window (blocks until closed)."""
    view = InteractiveRoadmap(doc, style=style, animate=animate)
    plt.show()
    return view
