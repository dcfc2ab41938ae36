# smart_attendance/app/services/data_validation/similarity.py
"""
String similarity used to suggest reference values (departments, sections)
when an exact case-insensitive match fails. Suggestions only; similarity
never decides whether a record is valid.
"""

from typing import Iterable, List, Tuple

from rapidfuzz.distance import Levenshtein


def calculate_similarity(first: str, second: str) -> float:
    """Normalized Levenshtein similarity in [0, 1], case-insensitive.

    ``(max_len - distance) / max_len``, and 1.0 when both strings are empty.
    """
    return Levenshtein.normalized_similarity(
        first or "", second or "", processor=str.lower
    )


def rank_candidates(value: str, candidates: Iterable[str]) -> List[Tuple[str, float]]:
    """Score every candidate against value, best first. Ties keep input order."""
    scored = [(candidate, calculate_similarity(value, candidate)) for candidate in candidates]
    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


def find_fuzzy_matches(
    value: str,
    candidates: Iterable[str],
    threshold: float = 0.6,
    limit: int = 3,
) -> List[str]:
    """Candidates strictly more similar than threshold, best first, at most limit."""
    if limit <= 0:
        return []
    return [
        candidate
        for candidate, score in rank_candidates(value, candidates)
        if score > threshold
    ][:limit]
