# roadmap_render/text.py
# Text helpers for the diagram:
# - greedy word wrap bounded by a character count
# - two-line title wrap
# - splitting a line into bold / normal runs with approximate offsets
#
# Widths are a deliberate low-fidelity heuristic (bold ~8 units, normal ~6.5 units per char),
# not font metrics.

from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from .config import DEFAULTS, TextMetrics
from .types import TextRun


def wrap_text(text: str, max_length: int) -> List[str]:
    """
    Greedy wrap: words are appended while the joined line stays <= max_length.
    A word longer than max_length is emitted on its own line, never split.
    """
    lines: List[str] = []
    current: List[str] = []

    for word in text.split():
        candidate = " ".join(current + [word])
        if len(candidate) <= max_length:
            current.append(word)
        elif current:
            lines.append(" ".join(current))
            current = [word]
        else:
            lines.append(word)

    if current:
        lines.append(" ".join(current))

    return lines


def wrap_title(title: str, metrics: TextMetrics = DEFAULTS.text) -> List[str]:
    # Titles beyond two lines are truncated, not an error.
    return wrap_text(title, metrics.title_max_chars)[: metrics.title_max_lines]


def _keyword_pattern(keywords: Sequence[str]) -> re.Pattern:
    return re.compile("(" + "|".join(re.escape(k) for k in keywords) + ")")


def split_styled_runs(
    line: str,
    *,
    keywords: Sequence[str] = DEFAULTS.text.bold_keywords,
    bold_char_width: float = DEFAULTS.text.bold_char_width,
    normal_char_width: float = DEFAULTS.text.normal_char_width,
) -> Tuple[TextRun, ...]:
    """
    Segment one already-wrapped line into styled runs.
    Keywords are bold; whitespace-only fragments are dropped and do not advance the offset.
    """
    if not any(k in line for k in keywords):
        return (TextRun(text=line),)

    runs: List[TextRun] = []
    dx = 0.0
    for part in _keyword_pattern(keywords).split(line):
        if part in keywords:
            runs.append(TextRun(text=part, weight="bold", dx=dx))
            dx += len(part) * bold_char_width
        elif part.strip():
            runs.append(TextRun(text=part, weight="normal", dx=dx))
            dx += len(part) * normal_char_width
    return tuple(runs)


def estimate_goal_height(goal: str, metrics: TextMetrics = DEFAULTS.text) -> float:
    return len(wrap_text(goal, metrics.goal_max_chars)) * metrics.goal_line_height
