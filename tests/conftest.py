import pytest

from libcompare.models import TrackRecord


@pytest.fixture
def reference_tracks():
    """A small reference catalog, as exported from a streaming service."""
    return [
        TrackRecord("Song 1", "Artist 1"),
        TrackRecord("Song 2", "Artist 2"),
    ]


@pytest.fixture
def local_tracks():
    """A small local catalog sharing one track with the reference catalog."""
    return [
        TrackRecord("Song 1", "Artist 1"),
        TrackRecord("Song 3", "Artist 3"),
    ]


@pytest.fixture
def catalog_files(tmp_path):
    """Write a reference XML export and a local CSV export to a temp folder."""
    reference = tmp_path / "spotify.xml"
    reference.write_text(
        """<?xml version="1.0" encoding="UTF-8"?>
<tracks>
    <track>
        <name>Shape of You (feat. Ed Sheeran)</name>
        <artist>Ed Sheeran</artist>
    </track>
    <track>
        <name>Hey Jude</name>
        <artist>The Beatles</artist>
    </track>
    <track>
        <name>Hoppípolla</name>
        <artist>Sigur Rós</artist>
    </track>
</tracks>
""",
        encoding="utf-8",
    )
    local = tmp_path / "local.csv"
    local.write_text(
        "Title,Artist,Album\n"
        "Shape of You,Ed Sheeran,Divide\n"
        "Hey Jude,Beatles,1\n"
        "Paranoid Android,Radiohead,OK Computer\n",
        encoding="utf-8",
    )
    return reference, local
