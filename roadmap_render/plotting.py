# roadmap_render/plotting.py
# matplotlib rendering surface for scenes:
# - one figure sized so 1 canvas unit == 1 pixel (SVG-style axes: origin top-left, y down)
# - primitives drawn in scene order with increasing zorder
# - SVG export (text kept as text); PNG export is not implemented yet

from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib.artist import Artist
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import FancyBboxPatch, Polygon

from .config import DEFAULTS
from .types import PathPrimitive, PolygonPrimitive, Primitive, RectPrimitive, Scene, TextPrimitive


@dataclass(frozen=True)
class PlotStyle:
    dpi: int = DEFAULTS.dpi
    background: str = DEFAULTS.palette.background
    show_axes: bool = False
    font_family: str = "sans-serif"


@dataclass
class SceneArtists:
    """matplotlib artists created for a scene, kept so the host can restyle them in place."""
    per_primitive: List[List[Artist]] = field(default_factory=list)
    box_patches: Dict[int, FancyBboxPatch] = field(default_factory=dict)

    def all(self) -> List[Artist]:
        return [a for group in self.per_primitive for a in group]


def px_to_pt(size_px: float, dpi: int) -> float:
    return size_px * 72.0 / dpi


def _boxstyle(radius: float) -> str:
    if radius > 0:
        return f"round,pad=0,rounding_size={radius}"
    return "square,pad=0"


def setup_axes(
    ax: Axes,
    width: float,
    height: float,
    style: PlotStyle,
    bounds: Optional[Tuple[float, float, float, float]] = None,
) -> None:
    """Canvas coordinates: x to the right, y downward."""
    x0, y0, x1, y1 = bounds if bounds is not None else (0, 0, width, height)
    ax.set_xlim(x0, x1)
    ax.set_ylim(y1, y0)
    ax.set_facecolor(style.background)
    if not style.show_axes:
        ax.axis("off")


def new_figure(width: float, height: float, style: Optional[PlotStyle] = None) -> Tuple[Figure, Axes]:
    style = style or PlotStyle()
    fig = plt.figure(figsize=(width / style.dpi, height / style.dpi), dpi=style.dpi)
    fig.patch.set_facecolor(style.background)
    ax = fig.add_axes([0, 0, 1, 1])
    setup_axes(ax, width, height, style)
    return fig, ax


def draw_primitive(
    ax: Axes,
    prim: Primitive,
    zorder: float,
    style: PlotStyle,
    alpha: float = 1.0,
) -> List[Artist]:
    if isinstance(prim, RectPrimitive):
        patch = FancyBboxPatch(
            (prim.x, prim.y),
            prim.w,
            prim.h,
            boxstyle=_boxstyle(prim.radius),
            facecolor=prim.fill,
            edgecolor="none",
            alpha=prim.opacity * alpha,
            zorder=zorder,
        )
        ax.add_patch(patch)
        return [patch]

    if isinstance(prim, TextPrimitive):
        ha = "center" if prim.anchor == "middle" else "left"
        va = "center" if prim.baseline == "middle" else "baseline"
        out: List[Artist] = []
        for run in prim.runs:
            out.append(
                ax.text(
                    prim.x + run.dx,
                    prim.y,
                    run.text,
                    ha=ha,
                    va=va,
                    fontsize=px_to_pt(prim.font_size, style.dpi),
                    fontweight=run.weight,
                    family=style.font_family,
                    color=prim.color,
                    alpha=alpha,
                    zorder=zorder,
                )
            )
        return out

    if isinstance(prim, PathPrimitive):
        xs = [p[0] for p in prim.points]
        ys = [p[1] for p in prim.points]
        linestyle = (0, prim.dash) if prim.dash else "-"
        lines = ax.plot(
            xs,
            ys,
            color=prim.stroke,
            linewidth=px_to_pt(prim.line_width, style.dpi),
            linestyle=linestyle,
            solid_capstyle="butt",
            alpha=alpha,
            zorder=zorder,
        )
        return list(lines)

    if isinstance(prim, PolygonPrimitive):
        poly = Polygon(
            list(prim.points),
            closed=True,
            facecolor=prim.fill,
            edgecolor="none",
            alpha=alpha,
            zorder=zorder,
        )
        ax.add_patch(poly)
        return [poly]

    raise TypeError(f"Unsupported primitive: {type(prim).__name__}")


def draw_primitives(
    ax: Axes,
    prims: Sequence[Primitive],
    style: PlotStyle,
    zorder_start: float = 1.0,
    alpha: float = 1.0,
) -> SceneArtists:
    """Draw in order; each primitive gets a higher zorder than the one before."""
    artists = SceneArtists()
    for i, prim in enumerate(prims):
        group = draw_primitive(ax, prim, zorder_start + i, style, alpha=alpha)
        artists.per_primitive.append(group)
        if isinstance(prim, RectPrimitive) and prim.role == "box" and prim.index is not None:
            artists.box_patches[prim.index] = group[0]
    return artists


def draw_scene(ax: Axes, scene: Scene, style: Optional[PlotStyle] = None) -> SceneArtists:
    return draw_primitives(ax, scene.primitives, style or PlotStyle())


def plot_roadmap(scene: Scene, style: Optional[PlotStyle] = None) -> Figure:
    """Draw the static scene into a new figure."""
    style = style or PlotStyle()
    fig, ax = new_figure(scene.width, scene.height, style)
    draw_scene(ax, scene, style)
    return fig


def export_svg(scene: Scene, style: Optional[PlotStyle] = None) -> str:
    """Serialize the finished diagram as an SVG document."""
    fig = plot_roadmap(scene, style=style)
    buf = io.StringIO()
    try:
        with plt.rc_context({"svg.fonttype": "none"}):
            fig.savefig(buf, format="svg", facecolor=fig.get_facecolor())
    finally:
        plt.close(fig)
    return buf.getvalue()


def save_roadmap_svg(scene: Scene, path: str | Path, style: Optional[PlotStyle] = None) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_svg(scene, style=style), encoding="utf-8")


def export_png(scene: Scene, path: str | Path, style: Optional[PlotStyle] = None) -> None:
    raise NotImplementedError("PNG export is not implemented yet; use SVG export instead")
