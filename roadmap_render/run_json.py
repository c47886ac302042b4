# roadmap_render/run_json.py
# Runner for roadmap JSON input: validate, lay out, build the scene, export and/or show.
#
# Usage:
#   python -m roadmap_render --roadmap roadmap.json
#   python -m roadmap_render --example --svg out/roadmap.svg --no_plot
#   python -m roadmap_render --roadmap roadmap.json --scene_json out/scene.json --dump --no_plot
#
# HTTP API:
#   python -m roadmap_render --serve --host 0.0.0.0 --port 5000

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from .debug import print_layout, print_scene, print_summary
from .io_json import RoadmapParseError, load_roadmap_json
from .layout import compute_layout
from .logger import get_logger, set_enabled, set_verbose
from .plotting import PlotStyle, export_png, save_roadmap_svg
from .sample_data import example_roadmap
from .scene import build_scene
from .utils import save_scene_json, timer
from .validate import RoadmapValidationError


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Render a roadmap JSON as an interactive staircase diagram.")
    p.add_argument("--roadmap", type=str, default="", help="Path to roadmap JSON (segments/boxes)")
    p.add_argument("--example", action="store_true", help="Use the built-in example roadmap")

    # Output
    p.add_argument("--svg", type=str, default="", help="Save the diagram as SVG (optional, e.g. roadmap.svg)")
    p.add_argument("--png", type=str, default="", help="Save the diagram as PNG (not implemented yet)")
    p.add_argument("--scene_json", type=str, default="", help="Dump layout + primitives as JSON (optional)")
    p.add_argument("--dpi", type=int, default=100, help="Pixels per inch for the figure (1 unit = 1 px)")

    # Diagnostics
    p.add_argument("--dump", action="store_true", help="Print box positions and primitives")
    p.add_argument("--quiet", action="store_true", help="Silence [ROADMAP] info/warning messages")
    p.add_argument("--verbose", action="store_true", help="Also print debug messages (timings, interaction state)")

    # Interactive window
    p.add_argument("--no_plot", action="store_true", help="Do not open the interactive matplotlib window")
    p.add_argument("--no_animation", action="store_true", help="Show/hide the detail view without fading")

    # API server
    p.add_argument("--serve", action="store_true", help="Run the HTTP API instead of rendering")
    p.add_argument("--host", type=str, default="127.0.0.1", help="API host")
    p.add_argument("--port", type=int, default=5000, help="API port")

    return p


def main(argv: Optional[list[str]] = None) -> None:
    args = build_argparser().parse_args(argv)
    set_enabled(not args.quiet)
    set_verbose(args.verbose)
    log = get_logger()

    if args.serve:
        from .api import serve
        serve(host=args.host, port=int(args.port))
        return

    if args.example:
        doc = example_roadmap()
    else:
        if not args.roadmap.strip():
            raise SystemExit("Provide --roadmap roadmap.json or use --example")
        path = Path(args.roadmap)
        if not path.exists():
            raise SystemExit(f"Roadmap JSON not found: {path}")
        try:
            doc = load_roadmap_json(path)
        except RoadmapParseError as e:
            log.error(str(e))
            raise SystemExit(2)
        except RoadmapValidationError as e:
            log.error("Roadmap failed validation:")
            for issue in e.issues:
                log.error(f"  {issue.path or '<root>'}: {issue.message}")
            raise SystemExit(2)

    with timer("layout + scene", log=log) as t:
        layout = compute_layout(doc)
        scene = build_scene(doc, layout)
    log.info(f"Built {len(scene)} primitives in {t['ms']:.1f} ms")

    print_summary(doc, layout)
    if args.dump:
        print_layout(doc, layout)
        print_scene(scene)

    style = PlotStyle(dpi=int(args.dpi))

    # Exports
    if args.scene_json.strip():
        save_scene_json(layout, scene, args.scene_json.strip())
        print(f"Scene JSON saved to: {args.scene_json.strip()}")

    if args.svg.strip():
        save_roadmap_svg(scene, args.svg.strip(), style=style)
        print(f"SVG saved to: {args.svg.strip()}")

    if args.png.strip():
        try:
            export_png(scene, args.png.strip(), style=style)
        except NotImplementedError as e:
            log.warn(str(e))

    # Interactive window
    if not args.no_plot:
        from .interactive import show_interactive

        show_interactive(doc, style=style, animate=not args.no_animation)


if __name__ == "__main__":
    main()
