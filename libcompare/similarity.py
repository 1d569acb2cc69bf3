"""
Similarity scoring between tracks.

Scores come from rapidfuzz's Jaro-Winkler implementation, which favours
strings sharing a prefix and tolerates transpositions. Two tracks are similar
only when the title score AND the artist score both reach the threshold.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Tuple

from rapidfuzz.distance import JaroWinkler

from .models import TrackRecord
from .normalize import comparison_key

# Shared by every classification; not configurable per call.
SIMILARITY_THRESHOLD = 0.90

_PREFIX_WEIGHT = 0.1
_NUMBER = re.compile(r"\d+")


def _numbers(s: str) -> Counter:
    return Counter(int(n) for n in _NUMBER.findall(s))


def _numbers_conflict(a: str, b: str) -> bool:
    """True when neither string's numbers are all found in the other's."""
    na, nb = _numbers(a), _numbers(b)
    return bool(na - nb) and bool(nb - na)


def similarity(a: str, b: str) -> float:
    """Jaro-Winkler similarity of two strings in [0.0, 1.0].

    Strings whose numbers conflict ("song 1" / "song 2", "track 01" /
    "track 3") score 0.0: Jaro-Winkler alone rates such pairs above the
    threshold, yet they name different tracks. When one side only adds
    numbers ("1979 (remastered 2012)" / "1979 (remastered)") the plain
    Jaro-Winkler score applies.
    """
    a = a or ""
    b = b or ""
    if _numbers_conflict(a, b):
        return 0.0
    return JaroWinkler.normalized_similarity(a, b, prefix_weight=_PREFIX_WEIGHT)


def key_scores(a: Tuple[str, str], b: Tuple[str, str]) -> Tuple[float, float]:
    """(title score, artist score) for two precomputed comparison keys."""
    return similarity(a[0], b[0]), similarity(a[1], b[1])


def keys_similar(a: Tuple[str, str], b: Tuple[str, str]) -> bool:
    title_score, artist_score = key_scores(a, b)
    return title_score >= SIMILARITY_THRESHOLD and artist_score >= SIMILARITY_THRESHOLD


def field_scores(a: TrackRecord, b: TrackRecord) -> Tuple[float, float]:
    """(title score, artist score) on the normalized fields of two records."""
    return key_scores(comparison_key(a), comparison_key(b))


def is_similar(a: TrackRecord, b: TrackRecord) -> bool:
    """True when both normalized title and artist reach SIMILARITY_THRESHOLD."""
    return keys_similar(comparison_key(a), comparison_key(b))
