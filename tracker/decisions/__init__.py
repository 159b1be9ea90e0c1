"""Decision alignment and adherence scoring."""

from .alignment import ALIGNMENT_RULES, AlignmentRule, score_alignment
from .recorder import record_decision, to_usd
from .score import calculate_score
from .snapshot import build_market_snapshot, derive_position_stage

__all__ = [
    # Alignment
    "ALIGNMENT_RULES",
    "AlignmentRule",
    "score_alignment",
    # Score
    "calculate_score",
    # Snapshot
    "build_market_snapshot",
    "derive_position_stage",
    # Recording
    "record_decision",
    "to_usd",
]
