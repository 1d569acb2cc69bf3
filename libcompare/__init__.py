"""
libcompare: reconcile a reference music catalog against a local collection.

This package provides:
- Normalization of track titles and artists for comparison.
- Jaro-Winkler similarity scoring with a fixed acceptance threshold.
- Classification of tracks into common, reference-only and local-only sets.
- CSV and XML report export of the resulting sets.
"""

from .models import ComparisonBundle, ScoredTrack, TrackRecord

__all__ = ["ComparisonBundle", "ScoredTrack", "TrackRecord"]
