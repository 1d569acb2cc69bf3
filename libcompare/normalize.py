"""
Normalization of track titles and artists for comparison.

Both normalizers are total: None yields "". They only lowercase, expand "&",
and strip feature credits, a leading "the " and a little punctuation. Digits
and non-ASCII letters are kept, so "Song 2" and "Song 3" or "Sigur Rós" and
"Sigur Ros" stay distinct.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from .models import TrackRecord

# "feat", "feat.", "ft", "ft.", "featuring" or "f."
_FEAT = r"(?:(?:featuring|feat|ft)\b\.?|f\.)"

# Credit bodies may hold one level of nested brackets: "(feat. A (B))".
_FEATURE_PATTERNS = (
    re.compile(r"\(\s*" + _FEAT + r"(?:[^()]|\([^()]*\))*\)"),
    re.compile(r"\[\s*" + _FEAT + r"(?:[^\[\]]|\[[^\[\]]*\])*\]"),
    re.compile(r"\s-\s*" + _FEAT + r".*$"),
    re.compile(r"\s(?:featuring|feat|ft)\b\.?\s.*$"),
)

_WHITESPACE = re.compile(r"\s+")
_ARTIST_PUNCTUATION = re.compile(r"[.'()]")
_ARTICLE = "the "


def _collapse(s: str) -> str:
    return _WHITESPACE.sub(" ", s).strip()


def _strip_features(s: str) -> str:
    for pattern in _FEATURE_PATTERNS:
        s = pattern.sub(" ", s)
    return _collapse(s)


def normalize_title(raw: Optional[str]) -> str:
    """Canonical form of a track title.

    >>> normalize_title("Shape of You (feat. Ed Sheeran)")
    'shape of you'
    """
    if not raw:
        return ""
    s = raw.lower().replace("&", "and")
    s = _strip_features(s)
    # Removing one credit can expose another; repeat until stable.
    while True:
        stripped = _strip_features(s)
        if stripped == s:
            return s
        s = stripped


def normalize_artist(raw: Optional[str]) -> str:
    """Canonical form of an artist name.

    >>> normalize_artist("The Beatles")
    'beatles'
    """
    if not raw:
        return ""
    s = raw.lower()
    if s.startswith(_ARTICLE):
        s = s[len(_ARTICLE):]
    s = _ARTIST_PUNCTUATION.sub("", s)
    return _collapse(s)


def comparison_key(track: TrackRecord) -> Tuple[str, str]:
    """(normalized title, normalized artist) for a record."""
    return normalize_title(track.title), normalize_artist(track.artist)
