# roadmap_render/sample_data.py
# Built-in sample roadmaps for quick previews and tests.

from __future__ import annotations

from typing import Any, Dict

from .types import RoadmapDocument
from .validate import parse_document


def example_roadmap_dict() -> Dict[str, Any]:
    return {
        "segments": [
            {
                "name": "Phase 1: Discovery & Design",
                "weeks": 1,
                "boxes": [
                    {
                        "title": "Design thinking & Workshop",
                        "goal": "Goal: Conduct a design thinking workshop with key stakeholders. "
                        "Outcomes: Shared problem statement and prioritized use cases.",
                    },
                    {
                        "title": "Architecture & Data Assessment",
                        "goal": "Goal: Review existing systems and data sources. "
                        "Outcomes: Target architecture draft.",
                    },
                ],
            },
            {
                "name": "Phase 2: Build",
                "weeks": 4,
                "boxes": [
                    {"title": "MVP Development", "goal": "Goal: Build the core features end to end."},
                    {"title": "Integration", "goal": "Goal: Connect the MVP to production data. Outcomes: Working pipeline."},
                ],
            },
            {
                "name": "Phase 3: Launch",
                "weeks": 2,
                "boxes": [
                    {"title": "Pilot & Handover", "goal": "Goal: Run a pilot with real users. Outcomes: Go-live decision."},
                ],
            },
        ]
    }


def two_phase_roadmap_dict() -> Dict[str, Any]:
    return {
        "segments": [
            {"name": "Phase 1", "weeks": 2, "boxes": [{"title": "Design", "goal": "Goal: plan it"}]},
            {"name": "Phase 2", "weeks": 3, "boxes": [{"title": "Build", "goal": "Goal: ship it"}]},
        ]
    }


def example_roadmap() -> RoadmapDocument:
    return parse_document(example_roadmap_dict())


def two_phase_roadmap() -> RoadmapDocument:
    return parse_document(two_phase_roadmap_dict())
