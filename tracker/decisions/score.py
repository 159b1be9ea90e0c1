"""Strategy adherence score.

The overall score is a linear recency-weighted average over scoreable
(non-neutral) decisions: sorted oldest-first, the entry at rank i of n gets
weight (i+1)/n, so the newest decision weighs most and every decision
counts. Weighting is by rank, not by elapsed time.

With no scoreable decisions the score is 100 (no evidence of
misalignment).
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Callable, Sequence

from tracker.config import STRATEGY
from tracker.types import DecisionEntry, FearGreedZoneScores, ScoreBreakdown

logger = logging.getLogger(__name__)

EMPTY_SCORE = 100


def _pct(numerator: int, denominator: int) -> int:
    """round(100 * numerator / denominator), halves rounded up, exact."""
    return (200 * numerator + denominator) // (2 * denominator)


def _recency_weighted(scoreable: Sequence[DecisionEntry]) -> int:
    if not scoreable:
        return EMPTY_SCORE

    # Stable sort: same-timestamp entries keep input order
    ordered = sorted(scoreable, key=lambda e: e.timestamp)

    # The common 1/n factor of each (i+1)/n weight cancels out of the
    # ratio, so integer ranks give the same score without float drift.
    weighted = 0
    total = 0
    for i, entry in enumerate(ordered):
        weight = i + 1
        total += weight
        if entry.alignment == "aligned":
            weighted += weight

    return _pct(weighted, total)


def _aligned_pct(entries: Sequence[DecisionEntry]) -> int:
    if not entries:
        return EMPTY_SCORE
    aligned = sum(1 for e in entries if e.alignment == "aligned")
    return _pct(aligned, len(entries))


def _zone_score(scoreable: Sequence[DecisionEntry], in_zone: Callable[[int], bool]) -> int:
    return _aligned_pct([e for e in scoreable if in_zone(e.snapshot.fear_greed)])


def calculate_score(entries: Sequence[DecisionEntry]) -> ScoreBreakdown:
    """Calculate the adherence score breakdown from the full decision history.

    Args:
        entries: Decision entries in any order

    Returns:
        ScoreBreakdown with overall, per-stage and per-sentiment-zone scores
    """
    aligned_count = sum(1 for e in entries if e.alignment == "aligned")
    misaligned_count = sum(1 for e in entries if e.alignment == "misaligned")
    scoreable = [e for e in entries if e.alignment != "neutral"]

    overall = _recency_weighted(scoreable)

    by_stage_entries: dict[str, list[DecisionEntry]] = {}
    for entry in scoreable:
        by_stage_entries.setdefault(entry.snapshot.position_stage, []).append(entry)
    by_stage = {stage: _aligned_pct(group) for stage, group in by_stage_entries.items()}

    fear, greed = STRATEGY.extreme_fear, STRATEGY.extreme_greed
    by_zone = FearGreedZoneScores(
        fear=_zone_score(scoreable, lambda fg: fg < fear),
        greed=_zone_score(scoreable, lambda fg: fg > greed),
        neutral=_zone_score(scoreable, lambda fg: fear <= fg <= greed),
    )

    # most_common keeps first-encountered order among equal counts
    reasons = Counter(e.alignment_reason for e in entries if e.alignment == "misaligned")
    top_reason = reasons.most_common(1)[0][0] if reasons else None

    logger.debug(
        "Adherence score recomputed: overall=%s over %s scoreable of %s decisions",
        overall,
        len(scoreable),
        len(entries),
    )

    return ScoreBreakdown(
        overall=overall,
        by_stage=by_stage,
        by_fear_greed_zone=by_zone,
        total_decisions=len(entries),
        aligned_count=aligned_count,
        misaligned_count=misaligned_count,
        top_misalignment_reason=top_reason,
    )
