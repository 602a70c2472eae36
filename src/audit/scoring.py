"""Weighted scoring, grading and recommendation aggregation."""
from __future__ import annotations

import math
from collections.abc import Mapping

from src.audit.base import Section
from src.config.settings import ScoringSettings


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _mean_points(checks: Section, points: Mapping[str, int]) -> float:
    return sum(points[check.status.value] for check in checks.values()) / len(checks)


def compute_score(sections: Mapping[str, Section], scoring: ScoringSettings | None = None) -> int:
    """
    Calculate the weighted audit score (0-100).

    Each non-empty section contributes the mean of its check points times
    its weight. An empty or missing section contributes nothing and its
    weight is not handed to the others, so the reachable maximum drops.
    """
    scoring = scoring or ScoringSettings()
    total = 0.0
    for name, weight in scoring.section_weights.items():
        checks = sections.get(name) or {}
        if not checks:
            continue
        total += _mean_points(checks, scoring.status_points) * weight
    return max(0, min(100, _round_half_up(total)))


def score_to_grade(score: int, scoring: ScoringSettings | None = None) -> str:
    """Determine letter grade from total score."""
    scoring = scoring or ScoringSettings()
    if score >= scoring.grade_a_threshold:
        return "A"
    elif score >= scoring.grade_b_threshold:
        return "B"
    elif score >= scoring.grade_c_threshold:
        return "C"
    elif score >= scoring.grade_d_threshold:
        return "D"
    else:
        return "F"


def build_recommendations(sections: Mapping[str, Section], limit: int = 10) -> list[str]:
    """Collect ``"<label>: <fix>"`` for every check that did not pass.

    Sections and checks are visited in declaration order; duplicates keep
    their first position and the list is cut at ``limit`` entries.
    """
    recommendations: dict[str, None] = {}
    for checks in sections.values():
        for check in checks.values():
            if check.passed or not check.fix:
                continue
            recommendations.setdefault(f"{check.label}: {check.fix}", None)
    return list(recommendations)[:limit]

