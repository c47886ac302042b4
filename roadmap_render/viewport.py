# roadmap_render/viewport.py
# Pan / zoom state of the overall view (independent of per-box modal zoom).
#
# The view transform is  screen = zoom * (canvas + pan),  origin at the top-left corner.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .config import DEFAULTS, InteractionSettings


@dataclass
class Viewport:
    zoom: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0
    settings: InteractionSettings = field(default_factory=lambda: DEFAULTS.interaction)

    _drag_from: Optional[Tuple[float, float]] = field(default=None, repr=False)

    @property
    def zoom_percent(self) -> int:
        return int(round(self.zoom * 100))

    @property
    def dragging(self) -> bool:
        return self._drag_from is not None

    def zoom_in(self) -> float:
        self.zoom = min(self.zoom * self.settings.zoom_in_factor, self.settings.zoom_max)
        return self.zoom

    def zoom_out(self) -> float:
        self.zoom = max(self.zoom * self.settings.zoom_out_factor, self.settings.zoom_min)
        return self.zoom

    def reset(self) -> None:
        self.zoom = 1.0
        self.pan_x = 0.0
        self.pan_y = 0.0
        self._drag_from = None

    def begin_drag(self, x: float, y: float) -> None:
        self._drag_from = (x, y)

    def drag_to(self, x: float, y: float) -> bool:
        """Pan by the pointer delta (screen units), scaled back into canvas units."""
        if self._drag_from is None:
            return False
        x0, y0 = self._drag_from
        self.pan_x += (x - x0) / self.zoom
        self.pan_y += (y - y0) / self.zoom
        self._drag_from = (x, y)
        return True

    def end_drag(self) -> None:
        self._drag_from = None

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        return self.zoom * (x + self.pan_x), self.zoom * (y + self.pan_y)

    def to_canvas(self, sx: float, sy: float) -> Tuple[float, float]:
        return sx / self.zoom - self.pan_x, sy / self.zoom - self.pan_y

    def visible_bounds(self, width: float, height: float) -> Tuple[float, float, float, float]:
        """(x0, y0, x1, y1) of the canvas region visible in a width x height window."""
        x0, y0 = self.to_canvas(0, 0)
        x1, y1 = self.to_canvas(width, height)
        return x0, y0, x1, y1
