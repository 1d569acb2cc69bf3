from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True, slots=True)
class TrackRecord:
    """A single track as read from a catalog.

    title and artist are never None once constructed; missing values become "".
    The strings are kept exactly as read and are only normalized for comparison.
    """

    title: str = ""
    artist: str = ""
    album: Optional[str] = None

    def __post_init__(self) -> None:
        if self.title is None:
            object.__setattr__(self, "title", "")
        if self.artist is None:
            object.__setattr__(self, "artist", "")

    @property
    def identity(self) -> str:
        """Literal "title - artist" string, used to mark local tracks as consumed."""
        return f"{self.title} - {self.artist}"


@dataclass(frozen=True, slots=True)
class ScoredTrack:
    """A track paired with the best similarity found against the other catalog."""

    track: TrackRecord
    match_score: float

    @property
    def title(self) -> str:
        return self.track.title

    @property
    def artist(self) -> str:
        return self.track.artist

    @property
    def album(self) -> Optional[str]:
        return self.track.album


@dataclass(slots=True)
class ComparisonBundle:
    """The three result sets of one reconciliation run.

    The sets are computed independently and do not form an exact partition:
    a reference track can be absent from both `common` and `reference_only`
    when its only local match was consumed by an earlier reference track.
    """

    common: list[TrackRecord] = field(default_factory=list)
    reference_only: list[TrackRecord] = field(default_factory=list)
    local_only: list[TrackRecord] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "common": len(self.common),
            "reference_only": len(self.reference_only),
            "local_only": len(self.local_only),
        }
