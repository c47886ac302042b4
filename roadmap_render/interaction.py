# roadmap_render/interaction.py
# Interaction state machine for the diagram + the transient visuals it implies.
#
# States:
#   IDLE
#   HOVER(i)  - box i grows 5% about its top-left corner and takes the hover fill
#   MODAL(i)  - enlarged clone of box i centered on the canvas, over a dimming overlay
#
# Transitions:
#   IDLE/HOVER --hover_enter i--> HOVER(i)
#   HOVER(i)   --hover_leave i--> IDLE
#   IDLE/HOVER --click_box i----> MODAL(i)
#   MODAL(i)   --click_overlay / cancel key--> IDLE
# Everything else is a no-op; in particular a click on another box while MODAL(i) is ignored,
# so at most one box is zoomed at a time.
#
# The controller is the only owner/mutator of the zoomed-box reference.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .config import DEFAULTS, Defaults
from .layout import Layout
from .text import split_styled_runs, wrap_text, wrap_title
from .types import Primitive, RectPrimitive, RoadmapDocument, TextPrimitive, TextRun


class InteractionState(str, Enum):
    IDLE = "idle"
    HOVER = "hover"
    MODAL = "modal"


@dataclass(frozen=True)
class InputEvent:
    kind: str                   # "hover_enter" | "hover_leave" | "click_box" | "click_overlay" | "key"
    index: Optional[int] = None
    key: Optional[str] = None


EVENT_KINDS = ("hover_enter", "hover_leave", "click_box", "click_overlay", "key")

Listener = Callable[["InteractionController"], None]


class InteractionController:
    def __init__(self, box_count: int, cfg: Optional[Defaults] = None) -> None:
        if box_count <= 0:
            raise ValueError("box_count must be >= 1")
        self.box_count = box_count
        self.cfg = cfg or DEFAULTS
        self._state = InteractionState.IDLE
        self._index: Optional[int] = None
        self._listeners: List[Listener] = []

    # -- read side ---------------------------------------------------------

    @property
    def state(self) -> InteractionState:
        return self._state

    @property
    def hovered_index(self) -> Optional[int]:
        return self._index if self._state is InteractionState.HOVER else None

    @property
    def zoomed_index(self) -> Optional[int]:
        return self._index if self._state is InteractionState.MODAL else None

    @property
    def is_zoomed(self) -> bool:
        return self._state is InteractionState.MODAL

    def snapshot(self) -> Tuple[InteractionState, Optional[int]]:
        return self._state, self._index

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    # -- transitions -------------------------------------------------------

    def _check_index(self, index: int) -> None:
        if not (0 <= index < self.box_count):
            raise ValueError(f"Box index {index} out of range [0,{self.box_count - 1}]")

    def _set(self, state: InteractionState, index: Optional[int]) -> bool:
        if (state, index) == (self._state, self._index):
            return False
        self._state = state
        self._index = index
        for cb in list(self._listeners):
            cb(self)
        return True

    def hover_enter(self, index: int) -> bool:
        self._check_index(index)
        if self.is_zoomed:
            return False
        return self._set(InteractionState.HOVER, index)

    def hover_leave(self, index: int) -> bool:
        self._check_index(index)
        if self.hovered_index != index:
            return False
        return self._set(InteractionState.IDLE, None)

    def click_box(self, index: int) -> bool:
        self._check_index(index)
        if self.is_zoomed:
            return False
        return self._set(InteractionState.MODAL, index)

    def click_overlay(self) -> bool:
        if not self.is_zoomed:
            return False
        return self._set(InteractionState.IDLE, None)

    def key_press(self, key: Optional[str]) -> bool:
        if not self.is_zoomed or key not in self.cfg.interaction.cancel_keys:
            return False
        return self._set(InteractionState.IDLE, None)

    def dispatch(self, event: InputEvent) -> bool:
        """Route one input event. Returns True if the state changed."""
        if event.kind not in EVENT_KINDS:
            raise ValueError(f"Unknown event kind: {event.kind}")
        if event.kind == "key":
            return self.key_press(event.key)
        if event.kind == "click_overlay":
            return self.click_overlay()
        if event.index is None:
            raise ValueError(f"Event {event.kind} requires a box index")
        if event.kind == "hover_enter":
            return self.hover_enter(event.index)
        if event.kind == "hover_leave":
            return self.hover_leave(event.index)
        return self.click_box(event.index)

    def reset(self, box_count: Optional[int] = None) -> None:
        """Back to IDLE without notifying; used when the document is replaced."""
        if box_count is not None:
            if box_count <= 0:
                raise ValueError("box_count must be >= 1")
            self.box_count = box_count
        self._state = InteractionState.IDLE
        self._index = None


# ----------------------------
# Opacity fade
# ----------------------------

@dataclass(frozen=True)
class Fade:
    start: float
    end: float
    duration_ms: float = DEFAULTS.interaction.fade_ms

    def opacity_at(self, elapsed_ms: float) -> float:
        if self.duration_ms <= 0 or elapsed_ms >= self.duration_ms:
            return self.end
        if elapsed_ms <= 0:
            return self.start
        return self.start + (self.end - self.start) * (elapsed_ms / self.duration_ms)

    def done(self, elapsed_ms: float) -> bool:
        return elapsed_ms >= self.duration_ms


# ----------------------------
# Transient visuals
# ----------------------------

def hover_emphasis(layout: Layout, index: int, cfg: Optional[Defaults] = None) -> RectPrimitive:
    """The box rect grown about its own position, with the hover fill."""
    cfg = cfg or DEFAULTS
    x, y, w, h = layout.box_rect(index)
    s = cfg.interaction.hover_scale
    return RectPrimitive(
        x=x,
        y=y,
        w=w * s,
        h=h * s,
        fill=cfg.palette.box_hover_fill,
        radius=cfg.geometry.corner_radius * s,
        role="hover",
        index=index,
    )


@dataclass
class ModalView:
    index: int
    box: RectPrimitive
    primitives: List[Primitive] = field(default_factory=list)
    fade_in: Fade = field(default_factory=lambda: Fade(0.0, 1.0))
    fade_out: Fade = field(default_factory=lambda: Fade(1.0, 0.0))

    def hits_box(self, x: float, y: float) -> bool:
        return self.box.contains(x, y)


def build_modal(
    doc: RoadmapDocument, layout: Layout, index: int, cfg: Optional[Defaults] = None
) -> ModalView:
    """
    Enlarged clone of box `index`, centred on the canvas over a dimming overlay.

    The clone is modal_scale x the box unless that would not fit: it is then
    shrunk to the canvas width (minus modal_margin per side) and height (minus
    padding top and bottom, which keeps the dismissal hint clear). Text scale
    follows the clone width so the widest goal line stays inside it. The clone
    is made taller (and re-centred) to hold the wrapped goal; goal lines that
    cannot fit the available height are dropped and the last kept line ends
    with modal_ellipsis.
    """
    cfg = cfg or DEFAULTS
    g, t, c, ia = cfg.geometry, cfg.text, cfg.palette, cfg.interaction
    box = doc.all_boxes()[index]

    max_w = layout.canvas_width - 2 * ia.modal_margin
    max_h = layout.canvas_height - 2 * g.padding
    scale = min(ia.modal_scale, max_w / g.box_width, max_h / g.box_height)
    w = g.box_width * scale
    base_h = g.box_height * scale

    # widest goal line: goal_max_chars + " …" all-bold, plus the inset on both sides
    widest = (t.goal_max_chars + 2) * t.bold_char_width + 2 * g.goal_box_y_offset
    ts = min(ia.modal_text_scale, w / widest)
    inset = g.goal_box_y_offset * ts
    line_h = t.goal_line_height * ts
    goal_top = base_h * 0.45  # first goal baseline, from the clone's top

    goal_lines = wrap_text(box.goal, t.goal_max_chars)
    fit = max(1, int((max_h - goal_top - inset) // line_h) + 1)
    if len(goal_lines) > fit:
        goal_lines = goal_lines[:fit]
        goal_lines[-1] += " " + ia.modal_ellipsis

    h = min(max(base_h, goal_top + (len(goal_lines) - 1) * line_h + inset), max_h)
    x = (layout.canvas_width - w) / 2
    y = (layout.canvas_height - h) / 2

    overlay = RectPrimitive(
        x=0,
        y=0,
        w=layout.canvas_width,
        h=layout.canvas_height,
        fill=c.overlay,
        opacity=ia.overlay_opacity,
        role="overlay",
    )
    clone = RectPrimitive(
        x=x,
        y=y,
        w=w,
        h=h,
        fill=c.box_fill,
        radius=g.corner_radius * scale,
        role="modal_box",
        index=index,
    )

    prims: List[Primitive] = [overlay, clone]

    title_lines = wrap_title(box.title, t)
    title_mid = y + base_h * 0.22
    offsets = [0.0] if len(title_lines) == 1 else [-t.title_line_offset * ts, t.title_line_offset * ts]
    for line, dy in zip(title_lines, offsets):
        prims.append(
            TextPrimitive(
                x=x + w / 2,
                y=title_mid + dy,
                runs=(TextRun(text=line, weight="semibold"),),
                font_size=t.title_font_size * ts,
                color=c.text_white,
                anchor="middle",
                baseline="middle",
                role="modal_title",
                index=index,
            )
        )

    goal_x = x + inset
    for i, line in enumerate(goal_lines):
        prims.append(
            TextPrimitive(
                x=goal_x,
                y=y + goal_top + i * line_h,
                runs=split_styled_runs(
                    line,
                    keywords=t.bold_keywords,
                    bold_char_width=t.bold_char_width * ts,
                    normal_char_width=t.normal_char_width * ts,
                ),
                font_size=t.goal_font_size * ts,
                color=c.text_white,
                anchor="start",
                baseline="alphabetic",
                role="modal_goal",
                index=index,
            )
        )

    prims.append(
        TextPrimitive(
            x=layout.canvas_width / 2,
            y=g.padding / 2,
            runs=(TextRun(text=ia.dismiss_hint),),
            font_size=ia.dismiss_hint_font_size,
            color=c.text_white,
            anchor="middle",
            baseline="middle",
            role="modal_hint",
        )
    )

    return ModalView(
        index=index,
        box=clone,
        primitives=prims,
        fade_in=Fade(0.0, 1.0, ia.fade_ms),
        fade_out=Fade(1.0, 0.0, ia.fade_ms),
    )


def transient_primitives(
    controller: InteractionController,
    doc: RoadmapDocument,
    layout: Layout,
    cfg: Optional[Defaults] = None,
) -> List[Primitive]:
    """Primitives layered on top of the static scene for the current state."""
    if controller.state is InteractionState.HOVER:
        return [hover_emphasis(layout, controller.hovered_index, cfg)]
    if controller.state is InteractionState.MODAL:
        return list(build_modal(doc, layout, controller.zoomed_index, cfg).primitives)
    return []
