# roadmap_render/test_text.py
# Word wrap + styled run tests. Run with pytest or:
#   python -m roadmap_render.test_text

from __future__ import annotations

from dataclasses import replace

from roadmap_render.config import DEFAULTS
from roadmap_render.text import estimate_goal_height, split_styled_runs, wrap_text, wrap_title


def test_wrap_respects_limit_or_single_long_word() -> None:
    text = "Conduct a design thinking workshop with supercalifragilisticexpialidocious stakeholders"
    for n in (5, 10, 25, 35):
        lines = wrap_text(text, n)
        for line in lines:
            assert len(line) <= n or " " not in line
        assert " ".join(lines) == " ".join(text.split())


def test_wrap_greedy_fills_lines() -> None:
    assert wrap_text("the quick brown fox", 9) == ["the quick", "brown fox"]
    assert wrap_text("the quick brown fox", 100) == ["the quick brown fox"]


def test_wrap_never_splits_long_word() -> None:
    assert wrap_text("a supercalifragilistic b", 5) == ["a", "supercalifragilistic", "b"]
    assert wrap_text("supercalifragilistic", 5) == ["supercalifragilistic"]


def test_wrap_normalizes_whitespace_and_handles_empty() -> None:
    assert wrap_text("  spaced    out\twords ", 40) == ["spaced out words"]
    assert wrap_text("", 10) == []


def test_title_is_truncated_to_two_lines() -> None:
    title = "A rather long title that certainly needs more than two lines of wrapping"
    assert len(wrap_text(title, 25)) > 2
    lines = wrap_title(title)
    assert lines == wrap_text(title, 25)[:2]


def test_styled_runs_bold_keywords_with_offsets() -> None:
    runs = split_styled_runs("Goal: plan it")
    assert [(r.text, r.weight) for r in runs] == [("Goal:", "bold"), (" plan it", "normal")]
    assert runs[0].dx == 0
    assert runs[1].dx == 5 * 8.0

    runs = split_styled_runs("done. Outcomes: a pipeline")
    assert [(r.text, r.bold) for r in runs] == [("done. ", False), ("Outcomes:", True), (" a pipeline", False)]
    assert runs[1].dx == 6 * 6.5
    assert runs[2].dx == 6 * 6.5 + 9 * 8.0


def test_styled_runs_plain_line_is_single_run() -> None:
    runs = split_styled_runs("no keywords here")
    assert len(runs) == 1
    assert runs[0].text == "no keywords here"
    assert runs[0].weight == "normal" and runs[0].dx == 0


def test_goal_height_estimate() -> None:
    assert estimate_goal_height("Goal: plan it") == 17
    assert estimate_goal_height("word " * 20) == len(wrap_text("word " * 20, 35)) * 17


def test_wrap_helpers_take_custom_metrics() -> None:
    metrics = replace(DEFAULTS.text, title_max_chars=10, title_max_lines=3, goal_line_height=20)
    assert wrap_title("one two three four five six", metrics) == ["one two", "three four", "five six"]
    assert estimate_goal_height("Goal: plan it", metrics) == 20


def main() -> None:
    print("Running text tests...")
    test_wrap_respects_limit_or_single_long_word()
    test_wrap_greedy_fills_lines()
    test_wrap_never_splits_long_word()
    test_wrap_normalizes_whitespace_and_handles_empty()
    test_title_is_truncated_to_two_lines()
    test_styled_runs_bold_keywords_with_offsets()
    test_styled_runs_plain_line_is_single_run()
    test_goal_height_estimate()
    test_wrap_helpers_take_custom_metrics()
    print("OK")


if __name__ == "__main__":
    main()
