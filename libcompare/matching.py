"""
Classification of two catalogs into common, reference-only and local-only tracks.

Each classification is an independent scan over the two input sequences; none
of them share state, so their results are not guaranteed to partition the
reference catalog exactly. Input order matters: results preserve the order of
the catalog being classified, and `common_songs` matches greedily in order.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .models import ComparisonBundle, ScoredTrack, TrackRecord
from .normalize import comparison_key
from .similarity import SIMILARITY_THRESHOLD, key_scores, keys_similar

logger = logging.getLogger(__name__)

_Key = Tuple[str, str]


def _keyed(tracks: Sequence[TrackRecord]) -> List[Tuple[TrackRecord, _Key]]:
    return [(track, comparison_key(track)) for track in tracks]


def _has_similar(key: _Key, others: List[Tuple[TrackRecord, _Key]]) -> bool:
    return any(keys_similar(key, other_key) for _, other_key in others)


def common_songs(
    reference: Sequence[TrackRecord], local: Sequence[TrackRecord]
) -> List[TrackRecord]:
    """Reference tracks matched to a distinct local track.

    Greedy: each reference track, in order, takes the first similar local track
    not already taken by an earlier reference track. Local tracks are marked as
    taken by their literal "title - artist" identity, so duplicate local
    entries count as one.
    """
    keyed_local = _keyed(local)
    consumed: set[str] = set()
    common: List[TrackRecord] = []

    for ref_track in reference:
        ref_key = comparison_key(ref_track)
        for local_track, local_key in keyed_local:
            identity = local_track.identity
            if identity in consumed:
                continue
            if keys_similar(ref_key, local_key):
                common.append(ref_track)
                consumed.add(identity)
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Common: '%s' ~ '%s'", ref_track.identity, identity)
                break
    return common


def reference_only_songs(
    reference: Sequence[TrackRecord], local: Sequence[TrackRecord]
) -> List[TrackRecord]:
    """Reference tracks with no similar local track at all."""
    keyed_local = _keyed(local)
    return [
        track for track in reference
        if not _has_similar(comparison_key(track), keyed_local)
    ]


def local_only_songs(
    reference: Sequence[TrackRecord], local: Sequence[TrackRecord]
) -> List[TrackRecord]:
    """Local tracks with no similar reference track at all."""
    keyed_reference = _keyed(reference)
    return [
        track for track in local
        if not _has_similar(comparison_key(track), keyed_reference)
    ]


def best_effort_missing(
    reference: Sequence[TrackRecord], local: Sequence[TrackRecord]
) -> List[ScoredTrack]:
    """Reference tracks whose best averaged score stays below the threshold.

    Unlike `reference_only_songs`, title and artist scores are averaged rather
    than thresholded separately. The scan for a reference track stops at the
    first local track whose average reaches the threshold, and that track
    counts as a perfect match (score 1.0). Input records are not modified.
    """
    keyed_local = _keyed(local)
    missing: List[ScoredTrack] = []

    for ref_track in reference:
        ref_key = comparison_key(ref_track)
        best = 0.0
        for _, local_key in keyed_local:
            title_score, artist_score = key_scores(ref_key, local_key)
            average = (title_score + artist_score) / 2
            if average >= SIMILARITY_THRESHOLD:
                best = 1.0
                break
            best = max(best, average)
        if best < SIMILARITY_THRESHOLD:
            missing.append(ScoredTrack(track=ref_track, match_score=best))

    logger.info("%d of %d reference tracks missing locally (best effort)", len(missing), len(reference))
    return missing


def compare_libraries(
    reference: Sequence[TrackRecord], local: Sequence[TrackRecord]
) -> ComparisonBundle:
    """Run all three classifications over the same two catalogs."""
    logger.info("Comparing %d reference tracks against %d local tracks", len(reference), len(local))
    bundle = ComparisonBundle(
        common=common_songs(reference, local),
        reference_only=reference_only_songs(reference, local),
        local_only=local_only_songs(reference, local),
    )
    counts = bundle.counts()
    logger.info(
        "Comparison complete. Common: %d, Reference only: %d, Local only: %d",
        counts["common"], counts["reference_only"], counts["local_only"],
    )
    return bundle
