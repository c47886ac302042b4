# roadmap_render/__init__.py
"""
Roadmap renderer (diagonal staircase diagram).

Current state:
- Staircase layout: first box bottom-left, last box top-right
- Scene builder: rounded boxes, two-line titles, goal text with bold "Goal:" / "Outcomes:",
  elbow connectors with arrowheads, dashed timeline with segment labels and separator ticks
- Interaction: hover emphasis + single modal zoom, driven by an explicit state machine
- matplotlib surface: static figure, SVG export, interactive window with pan/zoom
- Thin collaborators: schema validator, in-memory store, FastAPI routes

Not implemented:
- PNG export (placeholder raises NotImplementedError)
"""

__version__ = "0.1.0"

from .types import (
    RoadmapBox,
    RoadmapSegment,
    RoadmapDocument,
    Position,
    TextRun,
    RectPrimitive,
    TextPrimitive,
    PathPrimitive,
    PolygonPrimitive,
    Scene,
)

from .config import DEFAULTS, Defaults, Geometry, Palette, TextMetrics, InteractionSettings

from .text import wrap_text, wrap_title, split_styled_runs, estimate_goal_height

from .layout import Layout, compute_layout, segment_spans

from .scene import build_scene

from .interaction import (
    InteractionState,
    InputEvent,
    InteractionController,
    Fade,
    ModalView,
    hover_emphasis,
    build_modal,
    transient_primitives,
)

from .viewport import Viewport

from .validate import (
    ValidationIssue,
    RoadmapValidationError,
    validate_document,
    parse_document,
)

from .io_json import RoadmapParseError, load_roadmap_json, load_roadmap_text

from .plotting import (
    PlotStyle,
    plot_roadmap,
    export_svg,
    save_roadmap_svg,
    export_png,
)

__all__ = [
    # types
    "RoadmapBox",
    "RoadmapSegment",
    "RoadmapDocument",
    "Position",
    "TextRun",
    "RectPrimitive",
    "TextPrimitive",
    "PathPrimitive",
    "PolygonPrimitive",
    "Scene",
    # config
    "DEFAULTS",
    "Defaults",
    "Geometry",
    "Palette",
    "TextMetrics",
    "InteractionSettings",
    # text
    "wrap_text",
    "wrap_title",
    "split_styled_runs",
    "estimate_goal_height",
    # layout / scene
    "Layout",
    "compute_layout",
    "segment_spans",
    "build_scene",
    # interaction
    "InteractionState",
    "InputEvent",
    "InteractionController",
    "Fade",
    "ModalView",
    "hover_emphasis",
    "build_modal",
    "transient_primitives",
    "Viewport",
    # validation / input
    "ValidationIssue",
    "RoadmapValidationError",
    "validate_document",
    "parse_document",
    "RoadmapParseError",
    "load_roadmap_json",
    "load_roadmap_text",
    # plotting
    "PlotStyle",
    "plot_roadmap",
    "export_svg",
    "save_roadmap_svg",
    "export_png",
]
