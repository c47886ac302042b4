# roadmap_render/config.py
# Centralized geometry, palette and interaction constants.
# Keeps "magic numbers" (padding, steps, font sizes, zoom factors) in one place.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Palette:
    box_fill: str = "#4186CD"
    box_hover_fill: str = "#2F6DB0"
    line_color: str = "#828282"
    duration_line: str = "#A0A0A0"
    text_white: str = "#FFFFFF"
    text_gray: str = "#505050"
    overlay: str = "#000000"
    background: str = "#FFFFFF"


@dataclass(frozen=True)
class Geometry:
    padding: float = 120
    box_width: float = 220
    box_height: float = 70
    goal_box_y_offset: float = 15
    step_x: float = 280  # box_width + 60
    step_y: float = 60
    corner_radius: float = 15
    line_width: float = 2

    # Space below the staircase for goal text and the timeline
    vertical_reserve: float = 400

    # Connector arrowhead: half-width, length is arrow_length_ratio * half-width
    arrow_size: float = 8
    arrow_length_ratio: float = 1.5

    # Timeline
    timeline_clearance: float = 40
    timeline_dash: Tuple[float, float] = (10, 5)
    segment_label_offset: float = 25
    first_separator_height: float = 25
    separator_base_height: float = 120
    separator_height_step: float = 60


@dataclass(frozen=True)
class TextMetrics:
    title_max_chars: int = 25
    title_max_lines: int = 2
    title_font_size: float = 14
    title_line_offset: float = 8   # two-line titles sit at mid-height -/+ this

    goal_max_chars: int = 35
    goal_font_size: float = 13
    goal_line_height: float = 17
    goal_first_baseline: float = 15  # below goal_box_y_offset

    segment_label_font_size: float = 11

    # Approximate monospace widths used to place styled runs
    bold_char_width: float = 8.0
    normal_char_width: float = 6.5

    bold_keywords: Tuple[str, ...] = ("Goal:", "Outcomes:")


@dataclass(frozen=True)
class InteractionSettings:
    hover_scale: float = 1.05
    modal_scale: float = 4.2
    modal_text_scale: float = 2.0
    modal_margin: float = 20  # min gap between the clone and the canvas sides
    modal_ellipsis: str = "…"  # marks goal text cut off to fit the canvas
    overlay_opacity: float = 0.5
    fade_ms: float = 300.0
    fade_frame_ms: int = 30
    dismiss_hint: str = "Click outside the box or press Esc to close"
    dismiss_hint_font_size: float = 16
    cancel_keys: Tuple[str, ...] = ("escape", "Escape", "esc")

    # Canvas host (overall view)
    zoom_in_factor: float = 1.2
    zoom_out_factor: float = 0.8
    zoom_max: float = 3.0
    zoom_min: float = 0.1


@dataclass(frozen=True)
class Defaults:
    geometry: Geometry = field(default_factory=Geometry)
    palette: Palette = field(default_factory=Palette)
    text: TextMetrics = field(default_factory=TextMetrics)
    interaction: InteractionSettings = field(default_factory=InteractionSettings)

    # Rendering surface: 1 canvas unit == 1 pixel at this dpi
    dpi: int = 100


DEFAULTS = Defaults()


def format_weeks(weeks: float) -> str:
    """2.0 -> '2', 1.5 -> '1.5'"""
    w = float(weeks)
    if w.is_integer():
        return str(int(w))
    return f"{w:g}"
