"""Rule-based prompt parsing."""

from glowline.core.parsing.assembler import (
    detect_conflicts,
    parse_clause,
    parse_intent,
    score_confidence,
)
from glowline.core.parsing.normalizer import (
    CLAUSE_SEPARATORS,
    normalize_prompt,
    split_into_clauses,
)

__all__ = [
    "CLAUSE_SEPARATORS",
    "detect_conflicts",
    "normalize_prompt",
    "parse_clause",
    "parse_intent",
    "score_confidence",
    "split_into_clauses",
]
