# roadmap_render/__main__.py
# `python -m roadmap_render` -> run_json.main (render, export, or --serve the API).
#
#   python -m roadmap_render --example
#   python -m roadmap_render --roadmap plan.json --svg plan.svg --no_plot

from __future__ import annotations

from .run_json import main

if __name__ == "__main__":
    main()
